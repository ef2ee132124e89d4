"""
Boosting trainer and ensemble tests
"""

import math

import numpy as np
import pandas as pd
import pytest

import heart_risk
from heart_risk import train, predict
from heart_risk.data.synthetic import (
    make_sample,
    generate_synthetic_heart_data,
    generate_age_threshold_data,
)
from heart_risk.errors import EmptyDatasetError, ModelNotTrainedError, TrainingDataError
from heart_risk.models.gbdt_components.gbdt_core import HeartRiskGBDT


AGES = list(range(30, 70, 2))


def _sigmoid(x):
    return 1.0 / (1.0 + math.exp(-x))


def test_age_only_scenario():
    dataset = generate_age_threshold_data(AGES, cutoff=55)
    assert len(dataset) == 20

    model = train(dataset, n_rounds=20)

    assert predict(model, make_sample(age=70)).risk_score > 50
    assert predict(model, make_sample(age=30)).risk_score < 50


def test_training_is_deterministic():
    dataset = generate_synthetic_heart_data(60, random_state=7)

    first = train(dataset, n_rounds=5)
    second = train(dataset, n_rounds=5)

    assert first.get_tree_dicts() == second.get_tree_dicts()
    np.testing.assert_array_equal(first.decision_function(dataset), second.decision_function(dataset))


def test_trees_respect_max_depth():
    dataset = generate_synthetic_heart_data(80, random_state=11)
    model = train(dataset, n_rounds=5, max_depth=2, min_partition_size=2)

    assert len(model.trees) == 5
    assert all(tree.get_depth() <= 2 for tree in model.trees)


def test_first_round_uses_seed_as_logit():
    dataset = generate_age_threshold_data(AGES, cutoff=55)
    model = train(dataset, n_rounds=1)

    root = model.trees[0]
    assert root.feature == "age"
    assert root.threshold == 54.0

    # residual of a positive sample in round one is 1 - sigmoid(0.5)
    expected = 0.1 * (1.0 - _sigmoid(0.5))
    assert model.predict_logit(make_sample(age=70)) == pytest.approx(expected, abs=1e-9)


def test_training_loss_decreases():
    dataset = generate_synthetic_heart_data(80, random_state=5)
    model = train(dataset, n_rounds=10)

    history = model.training_loss_history
    assert len(history) == 10
    assert history[-1] < history[0]


def test_untrained_model_rejected():
    model = HeartRiskGBDT()

    with pytest.raises(ModelNotTrainedError):
        predict(model, make_sample())
    with pytest.raises(ModelNotTrainedError):
        model.decision_function([make_sample()])
    with pytest.raises(ModelNotTrainedError):
        model.get_feature_importance()


def test_training_data_errors():
    with pytest.raises(EmptyDatasetError):
        train([])

    unlabelled = [make_sample(age=40), make_sample(age=60)]
    with pytest.raises(TrainingDataError, match="target"):
        train(unlabelled)

    bad_label = [make_sample(age=40, target=0), make_sample(age=60, target=2)]
    with pytest.raises(TrainingDataError):
        train(bad_label)

    missing_feature = generate_age_threshold_data([40, 60])
    del missing_feature[1]["chol"]
    with pytest.raises(TrainingDataError, match="chol"):
        train(missing_feature)


def test_invalid_options_rejected():
    dataset = generate_age_threshold_data(AGES)

    with pytest.raises(ValueError):
        train(dataset, n_rounds=0)
    with pytest.raises(ValueError):
        train(dataset, learning_rate=0)
    with pytest.raises(ValueError):
        train(dataset, max_depth=0)
    with pytest.raises(ValueError):
        train(dataset, min_partition_size=0)
    with pytest.raises(ValueError, match="Unknown training option"):
        train(dataset, subsample=0.5)


def test_params_round_trip():
    model = HeartRiskGBDT(n_estimators=7, max_depth=3)
    params = model.get_params()

    assert params["n_estimators"] == 7
    assert params["min_samples_split"] == 5
    assert params["initial_prediction"] == 0.5

    model.set_params(learning_rate=0.2)
    assert model.learning_rate == 0.2
    with pytest.raises(ValueError):
        model.set_params(max_depth=0)
    with pytest.raises(ValueError):
        model.set_params(colsample_bytree=0.5)


def test_changing_params_requires_retraining():
    dataset = generate_age_threshold_data(AGES, cutoff=55)
    model = train(dataset, n_rounds=20)
    before = predict(model, make_sample(age=70))

    model.set_params(verbose=True)
    assert model.is_trained
    assert predict(model, make_sample(age=70)) == before

    model.set_params(learning_rate=1.0)
    assert not model.is_trained
    assert model.trees == []
    with pytest.raises(ModelNotTrainedError):
        predict(model, make_sample(age=70))

    model.set_params(verbose=False)
    model.fit(dataset)
    assert model.is_trained
    assert len(model.trees) == 20


def test_rejected_params_leave_model_untouched():
    model = train(generate_age_threshold_data(AGES), n_rounds=3)

    with pytest.raises(ValueError):
        model.set_params(learning_rate=0.5, max_depth=0)
    assert model.learning_rate == 0.1
    assert model.max_depth == 4
    assert model.is_trained


@pytest.mark.parametrize("name", ["n_estimators", "max_depth", "min_samples_split"])
def test_integer_params_accept_numpy_and_reject_bool(name):
    model = HeartRiskGBDT(**{name: np.int64(3)})
    assert model.get_params()[name] == 3

    with pytest.raises(ValueError):
        HeartRiskGBDT(**{name: True})
    with pytest.raises(ValueError):
        HeartRiskGBDT(**{name: 2.5})


def test_feature_importance_on_single_signal():
    model = train(generate_age_threshold_data(AGES), n_rounds=5)
    importance = model.get_feature_importance()

    assert list(importance) == list(heart_risk.config.FEATURE_NAMES)
    assert importance["age"] == pytest.approx(1.0)
    assert sum(importance.values()) == pytest.approx(1.0)


def test_evaluate_and_dataframe_input():
    dataset = generate_synthetic_heart_data(80, random_state=2)
    model = train(pd.DataFrame(dataset), n_rounds=10)

    results = model.evaluate(dataset)
    assert set(results) == {"accuracy", "logloss", "brier"}
    assert 0.0 <= results["accuracy"] <= 1.0
    assert 0.0 <= results["brier"] <= 1.0

    probabilities = model.predict_proba(pd.DataFrame(dataset))
    assert probabilities.shape == (80,)
    assert np.all((probabilities >= 0) & (probabilities <= 1))

    with pytest.raises(ValueError):
        model.evaluate(dataset, metrics=["f1"])


def test_verbose_training_output(capsys):
    train(generate_age_threshold_data(AGES), n_rounds=3, verbose=True)
    out = capsys.readouterr().out

    assert "[round   1/3]" in out
    assert "Model trained on 20 samples with 3 trees." in out


def test_training_summary(capsys):
    model = train(generate_age_threshold_data(AGES), n_rounds=2)
    model.print_training_summary()
    out = capsys.readouterr().out

    assert "Trees: 2" in out
    assert "Samples: 20" in out


def test_component_exports_are_public():
    from heart_risk.models import gbdt_components

    assert all(not name.startswith("_") for name in gbdt_components.__all__)
    assert "HeartRiskGBDT" in gbdt_components.__all__
