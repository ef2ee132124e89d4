"""
Risk Predictor

This module turns the ensemble output for one sample into a
PredictionResult: integer risk score, risk tier, confidence, the
annotated factors and the raw probability.
"""

import math
from typing import Any, Dict, Mapping, NamedTuple, Tuple

import numpy as np

from ... import config
from ...data.schema import validate_sample
from .data_transforms import _sigmoid
from .factor_annotator import describe_row
from .gbdt_core import HeartRiskGBDT


class PredictionResult(NamedTuple):
    """
    Immutable outcome of one prediction

    Attributes:
    -----------
    risk_score : int
        round(probability * 100), 0-100
    risk_tier : str
        "low", "medium" or "high"
    confidence : int
        min(95, 70 + number of trees)
    factors : tuple of str
        One rationale string per clinical feature
    probability : float
        Raw sigmoid output in [0, 1]
    """
    risk_score: int
    risk_tier: str
    confidence: int
    factors: Tuple[str, ...]
    probability: float

    @property
    def probability_text(self) -> str:
        return f"{self.probability:.3f}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "risk_score": self.risk_score,
            "risk_tier": self.risk_tier,
            "confidence": self.confidence,
            "factors": list(self.factors),
            "probability": self.probability_text,
        }


def probability_to_score(probability: float) -> int:
    """Percentage rounded half up."""
    return int(math.floor(probability * 100 + 0.5))


def risk_tier_for_score(risk_score: int) -> str:
    """
    score < 35 -> low, 35 <= score < 65 -> medium, score >= 65 -> high
    """
    if risk_score < config.LOW_RISK_MAX:
        return "low"
    if risk_score < config.HIGH_RISK_MIN:
        return "medium"
    return "high"


def confidence_for_tree_count(n_trees: int) -> int:
    return min(config.CONFIDENCE_CAP, config.CONFIDENCE_BASE + n_trees)


def predict(ensemble: HeartRiskGBDT, sample: Mapping) -> PredictionResult:
    """
    Score a single sample

    Parameters:
    -----------
    ensemble : HeartRiskGBDT
        Trained ensemble
    sample : mapping
        Feature name -> numeric value for all 13 features

    Returns:
    --------
    result : PredictionResult

    Raises:
    -------
    ModelNotTrainedError
        If the ensemble has not been trained
    InvalidSampleError
        If a feature is missing or non-numeric
    """
    ensemble._check_trained()
    row = validate_sample(sample)

    logit = float(ensemble._decision_matrix(row[np.newaxis, :])[0])
    probability = float(_sigmoid(logit))
    risk_score = probability_to_score(probability)

    return PredictionResult(
        risk_score=risk_score,
        risk_tier=risk_tier_for_score(risk_score),
        confidence=confidence_for_tree_count(len(ensemble.trees)),
        factors=tuple(describe_row(row)),
        probability=probability,
    )
