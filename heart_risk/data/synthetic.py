"""
Synthetic clinical data generation module

This module generates datasets with the 13-feature heart-disease schema
for tests and experiments. Feature ranges follow the Heart.csv columns.
"""

from typing import Dict, List, Optional

import numpy as np

from ..config import FEATURE_NAMES, TARGET_NAME


# Neutral values used when only a few features should vary
BASELINE_SAMPLE = {
    "age": 50,
    "sex": 0,
    "cp": 0,
    "trestbps": 120,
    "chol": 200,
    "fbs": 0,
    "restecg": 0,
    "thalach": 150,
    "exang": 0,
    "oldpeak": 0.0,
    "slope": 1,
    "ca": 0,
    "thal": 1,
}


def make_sample(**overrides) -> Dict[str, float]:
    """
    Baseline sample with some features replaced

    Parameters:
    -----------
    **overrides : dict
        Feature (or ``target``) values to set

    Returns:
    --------
    sample : dict
    """
    unknown = set(overrides) - set(FEATURE_NAMES) - {TARGET_NAME}
    if unknown:
        raise ValueError(f"Unknown feature(s): {sorted(unknown)}")
    sample = dict(BASELINE_SAMPLE)
    sample.update(overrides)
    return sample


def generate_synthetic_heart_data(n_samples: int = 300,
                                  random_state: Optional[int] = None) -> List[Dict[str, float]]:
    """
    Generate plausible clinical samples with logistic labels

    The label is drawn from a logistic model of age, sex, chest pain,
    ST depression, vessel count, max heart rate and exercise angina.

    Parameters:
    -----------
    n_samples : int, default=300
        Number of samples
    random_state : int, optional
        Random seed

    Returns:
    --------
    samples : list of dict
        Samples with all 13 features and ``target``
    """
    if n_samples <= 0:
        raise ValueError(f"n_samples must be positive, got {n_samples}")

    rng = np.random.default_rng(random_state)

    age = rng.integers(29, 78, size=n_samples)
    sex = rng.integers(0, 2, size=n_samples)
    cp = rng.integers(0, 4, size=n_samples)
    trestbps = np.clip(rng.normal(131, 17, size=n_samples), 94, 200).round()
    chol = np.clip(rng.normal(246, 50, size=n_samples), 126, 564).round()
    fbs = (rng.random(n_samples) < 0.15).astype(int)
    restecg = rng.integers(0, 3, size=n_samples)
    thalach = np.clip(rng.normal(150, 23, size=n_samples), 71, 202).round()
    exang = (rng.random(n_samples) < 0.33).astype(int)
    oldpeak = np.clip(rng.exponential(1.0, size=n_samples), 0, 6.2).round(1)
    slope = rng.integers(1, 4, size=n_samples)
    ca = rng.integers(0, 4, size=n_samples)
    thal = rng.integers(1, 4, size=n_samples)

    logit = (
        0.06 * (age - 54)
        + 0.8 * sex
        + 0.5 * cp
        + 0.7 * oldpeak
        + 0.8 * ca
        - 0.03 * (thalach - 150)
        + 0.9 * exang
        - 2.0
    )
    target = (rng.random(n_samples) < 1 / (1 + np.exp(-logit))).astype(int)

    columns = {
        "age": age, "sex": sex, "cp": cp, "trestbps": trestbps, "chol": chol,
        "fbs": fbs, "restecg": restecg, "thalach": thalach, "exang": exang,
        "oldpeak": oldpeak, "slope": slope, "ca": ca, "thal": thal,
    }

    samples = []
    for i in range(n_samples):
        sample = {name: columns[name][i].item() for name in FEATURE_NAMES}
        sample[TARGET_NAME] = int(target[i])
        samples.append(sample)
    return samples


def generate_age_threshold_data(ages, cutoff: float = 55) -> List[Dict[str, float]]:
    """
    Samples where age is the only discriminative feature

    Every other feature is held at BASELINE_SAMPLE; the label is 1 when
    age >= cutoff.
    """
    return [make_sample(age=age, target=int(age >= cutoff)) for age in ages]
