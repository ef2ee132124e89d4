"""
Feature normalizer tests
"""

import math
import warnings

import numpy as np
import pytest

from heart_risk.config import FEATURE_NAMES
from heart_risk.data.synthetic import make_sample, generate_synthetic_heart_data
from heart_risk.errors import EmptyDatasetError, TrainingDataError
from heart_risk.models.gbdt_components.data_transforms import (
    compute_feature_statistics,
    normalize_value,
    denormalize_value,
    statistics_to_arrays,
)


def test_mean_and_population_std():
    dataset = [make_sample(age=40), make_sample(age=50), make_sample(age=60), make_sample(age=70)]
    stats = compute_feature_statistics(dataset)

    mean, std = stats["age"]
    assert mean == pytest.approx(55.0)
    # population std: sqrt(mean of squared deviations)
    assert std == pytest.approx(math.sqrt((225 + 25 + 25 + 225) / 4))
    assert set(stats) == set(FEATURE_NAMES)


def test_zero_variance_stored_as_one():
    dataset = [make_sample(age=40), make_sample(age=60)]
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        stats = compute_feature_statistics(dataset)

    assert stats["chol"] == (200.0, 1.0)
    assert normalize_value("chol", 210, stats) == pytest.approx(10.0)


def test_zero_variance_reported_when_verbose():
    dataset = [make_sample(age=40), make_sample(age=60)]
    with pytest.warns(UserWarning, match="zero variance") as record:
        stats = compute_feature_statistics(dataset, verbose=True)

    # every baseline column except age is constant
    assert len(record) == 12
    assert stats["chol"] == (200.0, 1.0)


def test_absent_values_are_excluded():
    dataset = [make_sample(chol=200), make_sample(chol=300), make_sample(chol=None)]
    del dataset[1]["trestbps"]
    stats = compute_feature_statistics(dataset)

    assert stats["chol"][0] == pytest.approx(250.0)
    assert stats["chol"][1] == pytest.approx(50.0)


def test_empty_dataset_rejected():
    with pytest.raises(EmptyDatasetError):
        compute_feature_statistics([])

    # an empty dataset is also a training data error
    with pytest.raises(TrainingDataError):
        compute_feature_statistics([])


def test_normalize_round_trip_and_idempotence():
    dataset = generate_synthetic_heart_data(50, random_state=0)
    stats = compute_feature_statistics(dataset)

    for feature in FEATURE_NAMES:
        for value in (0, 1.5, 120, 287.25):
            z = normalize_value(feature, value, stats)
            assert z == normalize_value(feature, value, stats)
            assert denormalize_value(feature, z, stats) == pytest.approx(value, rel=1e-12, abs=1e-9)


def test_statistics_to_arrays_order():
    dataset = generate_synthetic_heart_data(30, random_state=1)
    stats = compute_feature_statistics(dataset)
    means, stds = statistics_to_arrays(stats)

    assert means.shape == (len(FEATURE_NAMES),)
    assert means[0] == pytest.approx(stats["age"][0])
    assert stds[-1] == pytest.approx(stats["thal"][1])
    assert np.all(stds > 0)
