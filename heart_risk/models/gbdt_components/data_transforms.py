"""
Data Transform Utilities

This module contains the feature normalizer: per-feature mean and
population standard deviation fitted on a training set, and the z-score
mapping used when trees are evaluated.
"""

import warnings
from typing import Dict, Iterable, Mapping, Tuple

import numpy as np

from ...config import FEATURE_NAMES, LOGIT_CLIP
from ...data.schema import _is_missing, _is_number, as_records
from ...errors import EmptyDatasetError, TrainingDataError


FeatureStatistics = Dict[str, Tuple[float, float]]


def _sigmoid(x):
    """
    Logistic function, clipped to avoid overflow

    Parameters:
    -----------
    x : float or array-like
        Logit(s)

    Returns:
    --------
    probability : float or array-like
        1 / (1 + exp(-x))
    """
    return 1.0 / (1.0 + np.exp(-np.clip(x, -LOGIT_CLIP, LOGIT_CLIP)))


def compute_feature_statistics(dataset: Iterable[Mapping], verbose: bool = False) -> FeatureStatistics:
    """
    Compute mean and population standard deviation for every feature

    Values that are absent (missing key, None or NaN) are excluded from
    both the numerator and the denominator. A standard deviation of zero
    is stored as 1; it is only reported when verbose is set.

    Parameters:
    -----------
    dataset : sequence of mappings or DataFrame
        Samples to fit on
    verbose : bool, default=False
        Warn about zero-variance features

    Returns:
    --------
    stats : dict
        Feature name -> (mean, std)

    Raises:
    -------
    EmptyDatasetError
        If the dataset has no samples
    """
    samples = as_records(dataset)
    if len(samples) == 0:
        raise EmptyDatasetError("cannot compute feature statistics on an empty dataset")

    stats = {}
    for feature in FEATURE_NAMES:
        values = []
        for idx, sample in enumerate(samples):
            if feature not in sample or _is_missing(sample[feature]):
                continue
            value = sample[feature]
            if not _is_number(value):
                raise TrainingDataError(
                    f"sample {idx} has non-numeric value {value!r} for feature '{feature}'"
                )
            values.append(float(value))

        if not values:
            warnings.warn(f"Feature '{feature}' has no observed values; using mean=0, std=1")
            stats[feature] = (0.0, 1.0)
            continue

        values = np.asarray(values)
        mean = float(np.mean(values))
        std = float(np.std(values))
        if std == 0.0:
            if verbose:
                warnings.warn(f"Feature '{feature}' has zero variance; using std=1")
            std = 1.0
        stats[feature] = (mean, std)

    return stats


def normalize_value(feature: str, value: float, stats: FeatureStatistics) -> float:
    """
    Map a raw feature value to its z-score

    Parameters:
    -----------
    feature : str
        Feature name
    value : float
        Raw value
    stats : dict
        Feature statistics from compute_feature_statistics

    Returns:
    --------
    z : float
        (value - mean) / std, with a stored std of 0 treated as 1
    """
    mean, std = stats[feature]
    return (value - mean) / (std or 1.0)


def denormalize_value(feature: str, z: float, stats: FeatureStatistics) -> float:
    """Inverse of normalize_value."""
    mean, std = stats[feature]
    return z * (std or 1.0) + mean


def statistics_to_arrays(stats: FeatureStatistics) -> Tuple[np.ndarray, np.ndarray]:
    """
    Lay out feature statistics as arrays in FEATURE_NAMES order

    Returns:
    --------
    means : array-like, shape=(n_features,)
    stds : array-like, shape=(n_features,)
        Zero entries replaced by 1
    """
    means = np.array([stats[f][0] for f in FEATURE_NAMES], dtype=float)
    stds = np.array([stats[f][1] for f in FEATURE_NAMES], dtype=float)
    stds[stds == 0.0] = 1.0
    return means, stds
