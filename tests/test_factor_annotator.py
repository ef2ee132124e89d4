"""
Factor annotator tests
"""

import pytest

from heart_risk import annotate_factors
from heart_risk.data.synthetic import make_sample
from heart_risk.errors import InvalidSampleError


PREFIXES = [
    "age:", "sex:", "chest pain:", "resting blood pressure:", "cholesterol:",
    "fasting blood sugar:", "ECG:", "max heart rate:", "exercise angina:",
    "ST depression:", "ST slope:", "vessel blockage:", "thalassemia:",
]


def test_one_factor_per_feature_in_order():
    factors = annotate_factors(make_sample())

    assert len(factors) == 13
    for factor, prefix in zip(factors, PREFIXES):
        assert factor.startswith(prefix)


def test_baseline_sample_text():
    factors = annotate_factors(make_sample())

    assert factors == [
        "age: 50 (middle age - needs attention)",
        "sex: female (lower risk)",
        "chest pain: no type (low risk)",
        "resting blood pressure: 120 mmHg (borderline)",
        "cholesterol: 200 mg/dL (borderline high)",
        "fasting blood sugar: normal (favorable)",
        "ECG: normal (favorable)",
        "max heart rate: 150 (good condition - favorable)",
        "exercise angina: absent (favorable)",
        "ST depression: 0 (normal)",
        "ST slope: upsloping (favorable)",
        "vessel blockage: none (favorable)",
        "thalassemia: normal",
    ]


@pytest.mark.parametrize("overrides, index, expected", [
    ({"age": 60}, 0, "age: 60 (advanced age - risk factor)"),
    ({"age": 59}, 0, "age: 59 (middle age - needs attention)"),
    ({"age": 45}, 0, "age: 45 (middle age - needs attention)"),
    ({"age": 44}, 0, "age: 44 (young - favorable)"),
    ({"sex": 1}, 1, "sex: male (higher risk)"),
    ({"cp": 3}, 2, "chest pain: type 3 (angina) (high risk)"),
    ({"cp": 2}, 2, "chest pain: type 2 (abnormal) (moderate risk)"),
    ({"cp": 1}, 2, "chest pain: type 1 (no angina) (low risk)"),
    ({"trestbps": 140}, 3, "resting blood pressure: 140 mmHg (high - hypertension)"),
    ({"trestbps": 119}, 3, "resting blood pressure: 119 mmHg (normal - favorable)"),
    ({"chol": 240}, 4, "cholesterol: 240 mg/dL (high - risk factor)"),
    ({"chol": 199}, 4, "cholesterol: 199 mg/dL (normal - favorable)"),
    ({"fbs": 1}, 5, "fasting blood sugar: >120 mg/dL (diabetes risk)"),
    ({"restecg": 2}, 6, "ECG: abnormal (signs of hypertrophy)"),
    ({"restecg": 1}, 6, "ECG: borderline ST-T wave abnormality"),
    ({"thalach": 119}, 7, "max heart rate: 119 (low - risk factor)"),
    ({"thalach": 120}, 7, "max heart rate: 120 (moderate)"),
    ({"exang": 1}, 8, "exercise angina: present (risk factor)"),
    ({"oldpeak": 2.0}, 9, "ST depression: 2 (high risk)"),
    ({"oldpeak": 1.5}, 9, "ST depression: 1.5 (moderate risk)"),
    ({"oldpeak": 0.9}, 9, "ST depression: 0.9 (normal)"),
    ({"slope": 2}, 10, "ST slope: flat (neutral)"),
    ({"slope": 3}, 10, "ST slope: downsloping (risk)"),
    ({"ca": 1}, 11, "vessel blockage: 1 vessel (attention)"),
    ({"ca": 3}, 11, "vessel blockage: 3 vessels (high risk)"),
    ({"thal": 2}, 12, "thalassemia: fixed defect (risk factor)"),
    ({"thal": 3}, 12, "thalassemia: reversible defect"),
])
def test_cut_points(overrides, index, expected):
    assert annotate_factors(make_sample(**overrides))[index] == expected


@pytest.mark.parametrize("overrides", [
    {"cp": 7, "slope": 0, "thal": 9},
    {"age": 0, "trestbps": 0, "chol": 0, "thalach": 0, "oldpeak": -3.5},
    {"age": 120, "trestbps": 250, "chol": 600, "thalach": 250, "oldpeak": 10, "ca": 4},
    {"sex": 1, "fbs": 1, "restecg": 2, "exang": 1},
])
def test_always_thirteen_factors(overrides):
    assert len(annotate_factors(make_sample(**overrides))) == 13


def test_unknown_codes_print_raw_value():
    factors = annotate_factors(make_sample(cp=7, slope=0))

    assert factors[2] == "chest pain: 7 (high risk)"
    assert factors[10] == "ST slope: 0"


def test_same_sample_same_factors():
    sample = make_sample(age=63, chol=233, oldpeak=2.3)
    assert annotate_factors(sample) == annotate_factors(dict(sample))


def test_invalid_sample_rejected():
    sample = make_sample()
    del sample["age"]
    with pytest.raises(InvalidSampleError):
        annotate_factors(sample)

    with pytest.raises(InvalidSampleError):
        annotate_factors(make_sample(sex="male"))
