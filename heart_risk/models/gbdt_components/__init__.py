"""
GBDT Components Package

This package contains the modular components of the heart-disease risk
classifier: feature normalizer, split evaluator, tree builder, boosting
core, predictor and factor annotator.
"""

from .tree_node import DecisionTreeNode
from .data_transforms import (
    compute_feature_statistics,
    normalize_value,
    denormalize_value,
    statistics_to_arrays
)
from .split_evaluator import SplitEvaluator
from .gradient_computer import GradientComputer
from .tree_builder import TreeBuilder
from .gbdt_core import HeartRiskGBDT
from .factor_annotator import annotate_factors
from .risk_predictor import (
    PredictionResult,
    predict,
    probability_to_score,
    risk_tier_for_score,
    confidence_for_tree_count
)

__all__ = [
    'DecisionTreeNode',
    'compute_feature_statistics',
    'normalize_value',
    'denormalize_value',
    'statistics_to_arrays',
    'SplitEvaluator',
    'GradientComputer',
    'TreeBuilder',
    'HeartRiskGBDT',
    'annotate_factors',
    'PredictionResult',
    'predict',
    'probability_to_score',
    'risk_tier_for_score',
    'confidence_for_tree_count'
]
