"""
Exceptions raised by the risk classifier.

All of them derive from ValueError so callers that only catch ValueError
keep working.
"""


class HeartRiskError(ValueError):
    """Base class for input-contract violations."""


class TrainingDataError(HeartRiskError):
    """Training samples lack a target label or a required feature."""


class EmptyDatasetError(TrainingDataError):
    """A dataset with zero samples was given to fitting or training."""


class ModelNotTrainedError(HeartRiskError):
    """Prediction was requested from an ensemble that has no trees."""


class InvalidSampleError(HeartRiskError):
    """A sample is missing a feature or carries a non-numeric value."""
