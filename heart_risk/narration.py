"""
Narration of prediction results.

Builds the short prompt sent to a remote text generator and the local
template explanation used when the generator is unavailable or fails.
The remote call itself is injected by the caller.
"""

import warnings
from typing import Callable, Optional

from .models.gbdt_components.risk_predictor import PredictionResult


PROMPT_FACTOR_LIMIT = 5
EXPLANATION_FACTOR_LIMIT = 3

RISK_KEYWORDS = ("risk", "present", "high", "abnormal")
FAVORABLE_KEYWORDS = ("normal", "good", "favorable")
NOT_RISKY_KEYWORDS = ("absent", "low risk", "lower risk", "favorable")

_OPENINGS = {
    "low": "Based on the information you entered, your heart disease risk level is **low** ({score}%). "
           "This is generally good news. ",
    "medium": "Based on the information you entered, your heart disease risk level is **medium** ({score}%). "
              "It is worth being careful. ",
    "high": "Based on the information you entered, your heart disease risk level is **high** ({score}%). "
            "It is important to take this seriously. ",
}

_RECOMMENDATIONS = {
    "low": "Your heart health looks good. Keep up regular exercise, a healthy diet and routine check-ups.",
    "medium": "Your risk factors are at a moderate level. Consider seeing a cardiologist; "
              "lifestyle changes may help.",
    "high": "Your risk factors are high. Seeing a cardiologist as soon as possible is strongly recommended.",
}

DISCLAIMER = (
    "*Note: This assessment is for information only and does not replace a medical "
    "diagnosis or treatment. In an emergency, call your local emergency number or go "
    "to the nearest health facility.*"
)


def build_prompt(result: PredictionResult) -> str:
    """Short prompt with tier, score and the first few factors."""
    if result.factors:
        factors = ", ".join(result.factors[:PROMPT_FACTOR_LIMIT])
    else:
        factors = "none"
    return (
        f"Heart disease risk analysis: {result.risk_tier.upper()} level, {result.risk_score}% risk.\n"
        f"Factors: {factors}.\n"
        f"Write a short explanation:"
    )


def _is_risky(factor: str) -> bool:
    return (any(k in factor for k in RISK_KEYWORDS)
            and not any(k in factor for k in NOT_RISKY_KEYWORDS))


def _is_favorable(factor: str) -> bool:
    # "abnormal" contains "normal"
    return any(k in factor for k in FAVORABLE_KEYWORDS) and not _is_risky(factor)


def local_explanation(result: PredictionResult) -> str:
    """
    Template explanation of a prediction result

    Parameters:
    -----------
    result : PredictionResult
        Output of predict()

    Returns:
    --------
    text : str
        Markdown text: opening sentence, notable and favorable factors,
        recommendation and disclaimer
    """
    text = _OPENINGS[result.risk_tier].format(score=result.risk_score)

    risky = [f for f in result.factors if _is_risky(f)]
    favorable = [f for f in result.factors if _is_favorable(f)]

    if risky:
        text += "\n\n**Notable Factors:**\n"
        for factor in risky[:EXPLANATION_FACTOR_LIMIT]:
            text += f"- {factor}\n"

    if favorable:
        text += "\n**Favorable Factors:**\n"
        for factor in favorable[:EXPLANATION_FACTOR_LIMIT]:
            text += f"- {factor}\n"

    text += "\n\n**Recommendation:** " + _RECOMMENDATIONS[result.risk_tier]
    text += "\n\n" + DISCLAIMER
    return text


def explain(result: PredictionResult,
            generator: Optional[Callable[[str], str]] = None) -> str:
    """
    Explanation from a remote generator, falling back to the local template

    Parameters:
    -----------
    result : PredictionResult
        Output of predict()
    generator : callable, optional
        Takes the prompt and returns generated text. Any exception or an
        empty answer switches to local_explanation.

    Returns:
    --------
    text : str
    """
    if generator is None:
        return local_explanation(result)

    try:
        text = generator(build_prompt(result))
    except Exception as exc:
        warnings.warn(f"Text generation failed, using local explanation: {exc}")
        return local_explanation(result)

    if not text or not text.strip():
        warnings.warn("Text generation returned no text, using local explanation")
        return local_explanation(result)
    return text
