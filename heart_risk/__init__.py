"""
Heart-disease risk classifier.

Gradient boosted regression trees trained from scratch on the 13-feature
clinical schema, with rule-based factor annotation.

Usage::

    model = train(dataset, n_rounds=50)
    result = predict(model, sample)
    result.risk_score, result.risk_tier, result.factors
"""

from typing import List, Mapping

from . import config
from .errors import (
    HeartRiskError,
    TrainingDataError,
    EmptyDatasetError,
    ModelNotTrainedError,
    InvalidSampleError
)
from .models.gbdt_components import HeartRiskGBDT, PredictionResult
from .models.gbdt_components import annotate_factors as _annotate_factors
from .models.gbdt_components import predict as _predict


# Option names accepted by train() -> HeartRiskGBDT constructor arguments
_TRAIN_OPTIONS = {
    'n_rounds': 'n_estimators',
    'learning_rate': 'learning_rate',
    'max_depth': 'max_depth',
    'min_partition_size': 'min_samples_split',
    'initial_prediction': 'initial_prediction',
    'verbose': 'verbose',
}


def train(dataset, **options) -> HeartRiskGBDT:
    """
    Train a new ensemble

    Parameters:
    -----------
    dataset : sequence of mappings or DataFrame
        Samples with the 13 clinical features and a 0/1 ``target``
    **options :
        n_rounds (default 50), learning_rate (0.1), max_depth (4),
        min_partition_size (5), initial_prediction (0.5), verbose (False)

    Returns:
    --------
    model : HeartRiskGBDT
        Trained ensemble

    Raises:
    -------
    ValueError
        For unknown or out-of-range options
    EmptyDatasetError, TrainingDataError
        For an empty dataset or samples without target / features
    """
    unknown = set(options) - set(_TRAIN_OPTIONS)
    if unknown:
        raise ValueError(f"Unknown training option(s): {', '.join(sorted(unknown))}")

    params = {_TRAIN_OPTIONS[name]: value for name, value in options.items()}
    return HeartRiskGBDT(**params).fit(dataset)


def predict(model: HeartRiskGBDT, sample: Mapping) -> PredictionResult:
    """Score one sample with a trained ensemble."""
    return _predict(model, sample)


def annotate_factors(sample: Mapping) -> List[str]:
    """One descriptive string per clinical feature; needs no model."""
    return _annotate_factors(sample)


__all__ = [
    'config',
    'train',
    'predict',
    'annotate_factors',
    'HeartRiskGBDT',
    'PredictionResult',
    'HeartRiskError',
    'TrainingDataError',
    'EmptyDatasetError',
    'ModelNotTrainedError',
    'InvalidSampleError',
]
