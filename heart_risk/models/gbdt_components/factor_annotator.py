"""
Factor Annotator

Rule-based, human-readable rationale for each of the 13 clinical inputs.
The rules use fixed clinical cut-points and never consult a trained
ensemble.
"""

from typing import List, Mapping, Sequence

from ...data.schema import validate_sample


CHEST_PAIN_TYPES = {
    0: "no type",
    1: "type 1 (no angina)",
    2: "type 2 (abnormal)",
    3: "type 3 (angina)",
}

ST_SLOPE_TYPES = {
    1: "upsloping (favorable)",
    2: "flat (neutral)",
    3: "downsloping (risk)",
}

THALASSEMIA_TYPES = {
    1: "normal",
    2: "fixed defect",
    3: "reversible defect",
}


def _fmt(value) -> str:
    """Print whole numbers without a trailing .0"""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return f"{value:g}"


def _label(table: Mapping, value) -> str:
    value = float(value)
    if value.is_integer() and int(value) in table:
        return table[int(value)]
    return _fmt(value)


def _age(age):
    if age >= 60:
        return f"age: {_fmt(age)} (advanced age - risk factor)"
    if age >= 45:
        return f"age: {_fmt(age)} (middle age - needs attention)"
    return f"age: {_fmt(age)} (young - favorable)"


def _sex(sex):
    if sex == 1:
        return "sex: male (higher risk)"
    return "sex: female (lower risk)"


def _chest_pain(cp):
    if cp >= 3:
        return f"chest pain: {_label(CHEST_PAIN_TYPES, cp)} (high risk)"
    if cp == 2:
        return f"chest pain: {_label(CHEST_PAIN_TYPES, cp)} (moderate risk)"
    return f"chest pain: {_label(CHEST_PAIN_TYPES, cp)} (low risk)"


def _blood_pressure(trestbps):
    if trestbps >= 140:
        return f"resting blood pressure: {_fmt(trestbps)} mmHg (high - hypertension)"
    if trestbps >= 120:
        return f"resting blood pressure: {_fmt(trestbps)} mmHg (borderline)"
    return f"resting blood pressure: {_fmt(trestbps)} mmHg (normal - favorable)"


def _cholesterol(chol):
    if chol >= 240:
        return f"cholesterol: {_fmt(chol)} mg/dL (high - risk factor)"
    if chol >= 200:
        return f"cholesterol: {_fmt(chol)} mg/dL (borderline high)"
    return f"cholesterol: {_fmt(chol)} mg/dL (normal - favorable)"


def _fasting_sugar(fbs):
    if fbs == 1:
        return "fasting blood sugar: >120 mg/dL (diabetes risk)"
    return "fasting blood sugar: normal (favorable)"


def _ecg(restecg):
    if restecg == 2:
        return "ECG: abnormal (signs of hypertrophy)"
    if restecg == 1:
        return "ECG: borderline ST-T wave abnormality"
    return "ECG: normal (favorable)"


def _max_heart_rate(thalach):
    if thalach < 120:
        return f"max heart rate: {_fmt(thalach)} (low - risk factor)"
    if thalach < 150:
        return f"max heart rate: {_fmt(thalach)} (moderate)"
    return f"max heart rate: {_fmt(thalach)} (good condition - favorable)"


def _exercise_angina(exang):
    if exang == 1:
        return "exercise angina: present (risk factor)"
    return "exercise angina: absent (favorable)"


def _st_depression(oldpeak):
    if oldpeak >= 2:
        return f"ST depression: {_fmt(oldpeak)} (high risk)"
    if oldpeak >= 1:
        return f"ST depression: {_fmt(oldpeak)} (moderate risk)"
    return f"ST depression: {_fmt(oldpeak)} (normal)"


def _st_slope(slope):
    return f"ST slope: {_label(ST_SLOPE_TYPES, slope)}"


def _vessels(ca):
    if ca >= 2:
        return f"vessel blockage: {_fmt(ca)} vessels (high risk)"
    if ca == 1:
        return "vessel blockage: 1 vessel (attention)"
    return "vessel blockage: none (favorable)"


def _thalassemia(thal):
    if thal == 2:
        return f"thalassemia: {_label(THALASSEMIA_TYPES, thal)} (risk factor)"
    return f"thalassemia: {_label(THALASSEMIA_TYPES, thal)}"


# One rule per feature, in FEATURE_NAMES order
_RULES = (
    ("age", _age),
    ("sex", _sex),
    ("cp", _chest_pain),
    ("trestbps", _blood_pressure),
    ("chol", _cholesterol),
    ("fbs", _fasting_sugar),
    ("restecg", _ecg),
    ("thalach", _max_heart_rate),
    ("exang", _exercise_angina),
    ("oldpeak", _st_depression),
    ("slope", _st_slope),
    ("ca", _vessels),
    ("thal", _thalassemia),
)


def annotate_factors(sample: Mapping) -> List[str]:
    """
    Describe every clinical input of a sample

    Parameters:
    -----------
    sample : mapping
        Feature name -> numeric value for all 13 features

    Returns:
    --------
    factors : list of str
        Exactly 13 strings in fixed feature order (age, sex, chest pain,
        blood pressure, cholesterol, fasting sugar, ECG, max heart rate,
        exercise angina, ST depression, ST slope, vessel count, thalassemia)

    Raises:
    -------
    InvalidSampleError
        If a feature is missing or non-numeric
    """
    return describe_row(validate_sample(sample))


def describe_row(row: Sequence[float]) -> List[str]:
    """Factor strings for a validated row in FEATURE_NAMES order."""
    return [rule(value) for (_, rule), value in zip(_RULES, row)]
