"""
Sample schema helpers

Validation and array conversion of clinical samples, shared by the data
loaders, training and prediction.
"""

import math
import numbers
from collections.abc import Mapping
from typing import List, Sequence

import numpy as np

from ..config import FEATURE_NAMES, TARGET_NAME
from ..errors import InvalidSampleError, TrainingDataError


def _is_missing(value) -> bool:
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def _is_number(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def as_records(dataset) -> List[Mapping]:
    """
    Convert a dataset into a list of sample mappings

    Accepts any sequence of mappings or a pandas DataFrame.
    """
    if hasattr(dataset, "to_dict") and hasattr(dataset, "columns"):
        return dataset.to_dict("records")
    if dataset is None:
        return []
    return list(dataset)


def validate_sample(sample: Mapping, index: int = None) -> np.ndarray:
    """
    Check that a sample carries every clinical feature as a number

    Parameters:
    -----------
    sample : mapping
        Feature name -> value
    index : int, optional
        Position of the sample in its dataset, used in error messages

    Returns:
    --------
    row : array-like, shape=(n_features,)
        Feature values in FEATURE_NAMES order

    Raises:
    -------
    InvalidSampleError
        If a feature is absent, None, NaN or not a real number
    """
    where = f"sample {index}" if index is not None else "sample"
    if not isinstance(sample, Mapping):
        raise InvalidSampleError(f"{where} must be a mapping of feature values, got {type(sample).__name__}")

    row = np.empty(len(FEATURE_NAMES))
    for i, feature in enumerate(FEATURE_NAMES):
        if feature not in sample:
            raise InvalidSampleError(f"{where} is missing required feature '{feature}'")
        value = sample[feature]
        if _is_missing(value):
            raise InvalidSampleError(f"{where} has no value for feature '{feature}'")
        if not _is_number(value):
            raise InvalidSampleError(
                f"{where} has non-numeric value {value!r} for feature '{feature}'"
            )
        row[i] = float(value)
    return row


def samples_to_matrix(samples: Sequence[Mapping]) -> np.ndarray:
    """
    Stack validated samples into a feature matrix

    Returns:
    --------
    X : array-like, shape=(n_samples, n_features)
    """
    X = np.empty((len(samples), len(FEATURE_NAMES)))
    for idx, sample in enumerate(samples):
        X[idx] = validate_sample(sample, idx)
    return X


def extract_targets(samples: Sequence[Mapping]) -> np.ndarray:
    """
    Read the binary training label from every sample

    Raises:
    -------
    TrainingDataError
        If a sample has no target or the target is not 0 or 1
    """
    y = np.empty(len(samples))
    for idx, sample in enumerate(samples):
        if TARGET_NAME not in sample or _is_missing(sample[TARGET_NAME]):
            raise TrainingDataError(f"sample {idx} has no '{TARGET_NAME}' label")
        label = sample[TARGET_NAME]
        if not _is_number(label) or label not in (0, 1):
            raise TrainingDataError(
                f"sample {idx} has label {label!r}; '{TARGET_NAME}' must be 0 or 1"
            )
        y[idx] = float(label)
    return y
