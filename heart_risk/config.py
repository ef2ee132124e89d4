"""
Configuration for the heart-disease risk classifier.

This file holds the fixed clinical feature schema, the default training
parameters of the boosting model and the constants used to turn a
probability into a risk tier and confidence score.
"""

# -- Feature Schema --

# Order matters: it is the split-search enumeration order and the order
# of the annotated factor list
FEATURE_NAMES = (
    "age",
    "sex",
    "cp",
    "trestbps",
    "chol",
    "fbs",
    "restecg",
    "thalach",
    "exang",
    "oldpeak",
    "slope",
    "ca",
    "thal",
)

TARGET_NAME = "target"

N_FEATURES = len(FEATURE_NAMES)


# -- Training Defaults --

N_ROUNDS = 50
LEARNING_RATE = 0.1
MAX_DEPTH = 4
MIN_PARTITION_SIZE = 5

# Running prediction seed used by the boosting loop. It is added to the
# logit during training only, never at prediction time.
INITIAL_PREDICTION = 0.5


# -- Prediction --

# Integer risk score thresholds: score < LOW_RISK_MAX is low,
# score >= HIGH_RISK_MIN is high, anything between is medium
LOW_RISK_MAX = 35
HIGH_RISK_MIN = 65

RISK_TIERS = ("low", "medium", "high")

CONFIDENCE_BASE = 70
CONFIDENCE_CAP = 95

# Logits are clipped before the sigmoid to avoid overflow in np.exp
LOGIT_CLIP = 500.0
