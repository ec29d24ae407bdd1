"""
Sanitizer for model-produced simulation results.

PURPOSE: Repair, clamp and default every field of an untrusted SimulationResult so
         the output always satisfies the data-model invariants, whatever the model
         returned (wrong types, missing keys, out-of-range numbers, or nothing at all).
CONTEXT: Pure functions, no I/O and no failure mode. Runs after the model reply has
         been parsed and before anything is handed to a client.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional, Tuple

from careersim.model_interface.types import (
    Recommendation,
    Scenario,
    SimulationResult,
    SocialComparison,
)
from careersim.utils.numbers import clamp, safe_number

INCOME_MIN = 0
INCOME_MAX = 1_000_000
SCORE_MIN = 0
SCORE_MAX = 100
DEFAULT_SCORE = 50

DEFAULT_SCENARIO: Scenario = {
    "income5Year": 0,
    "income10Year": 0,
    "probability": 1 / 3,
    "description": "",
}

BETTER_VALUES = ("A", "B", "tie")


def _as_dict(raw: Any) -> Dict[str, Any]:
    return raw if isinstance(raw, dict) else {}


def safe_string(value: Any, fallback: str) -> str:
    return value if isinstance(value, str) else fallback


def sanitize_scenario(raw: Any, defaults: Scenario = DEFAULT_SCENARIO) -> Scenario:
    """
    Coerce one scenario branch.

    behaviour:
    - Incomes: numeric or default, clamped to [0, 1,000,000].
    - Probability: numeric or default, floored at 0 (no upper clamp; see normalize_probabilities).
    - Description: string or default.
    """
    obj = _as_dict(raw)
    return {
        "income5Year": clamp(safe_number(obj.get("income5Year"), defaults["income5Year"]), INCOME_MIN, INCOME_MAX),
        "income10Year": clamp(safe_number(obj.get("income10Year"), defaults["income10Year"]), INCOME_MIN, INCOME_MAX),
        "probability": max(0, safe_number(obj.get("probability"), defaults["probability"])),
        "description": safe_string(obj.get("description"), defaults["description"]),
    }


def normalize_probabilities(best: Scenario, average: Scenario, worst: Scenario) -> Tuple[Scenario, Scenario, Scenario]:
    """
    Rescale the three probabilities so they sum to 1.0.

    returns:
    - tuple of new Scenario dicts; a non-positive total yields exactly 1/3 each.

    notes:
    - Finite inputs near float max can sum to inf; they are divided by the largest
      one first so the ratios survive.
    """
    probs = [best["probability"], average["probability"], worst["probability"]]
    total = sum(probs)
    if not math.isfinite(total):
        top = max(probs)
        probs = [p / top for p in probs]
        best, average, worst = (
            {**best, "probability": probs[0]},
            {**average, "probability": probs[1]},
            {**worst, "probability": probs[2]},
        )
        total = sum(probs)
    if total <= 0:
        return (
            {**best, "probability": 1 / 3},
            {**average, "probability": 1 / 3},
            {**worst, "probability": 1 / 3},
        )
    return (
        {**best, "probability": best["probability"] / total},
        {**average, "probability": average["probability"] / total},
        {**worst, "probability": worst["probability"] / total},
    )


def sanitize_simulation(raw: Any) -> SimulationResult:
    """
    Sanitize one option's raw simulation result.

    parameters:
    - raw: Any – the model's candidate for optionA/optionB; may be None or any JSON value.

    returns:
    - SimulationResult – every field present and in range. optionName falls back to
      the option tag here; the pipeline overwrites it with the user's label.
    """
    obj = _as_dict(raw)
    option = safe_string(obj.get("option"), "Option")
    option_name = safe_string(obj.get("optionName"), option)

    best, average, worst = normalize_probabilities(
        sanitize_scenario(obj.get("bestCase")),
        sanitize_scenario(obj.get("averageCase")),
        sanitize_scenario(obj.get("worstCase")),
    )

    raw_reasoning = obj.get("reasoning")
    if not isinstance(raw_reasoning, list):
        raw_reasoning = []
    reasoning = [item for item in raw_reasoning if isinstance(item, str) and item]

    return {
        "option": option,
        "optionName": option_name,
        "bestCase": best,
        "averageCase": average,
        "worstCase": worst,
        "riskScore": clamp(safe_number(obj.get("riskScore"), DEFAULT_SCORE), SCORE_MIN, SCORE_MAX),
        "stressLevel": clamp(safe_number(obj.get("stressLevel"), DEFAULT_SCORE), SCORE_MIN, SCORE_MAX),
        "careerTrajectory": safe_string(obj.get("careerTrajectory"), ""),
        "reasoning": reasoning,
    }


def sanitize_recommendation(raw: Any) -> Recommendation:
    """Restrict `better` to A/B/tie (default tie) and coerce `reason` to a string."""
    obj = _as_dict(raw)
    better = obj.get("better")
    return {
        "better": better if better in BETTER_VALUES else "tie",
        "reason": safe_string(obj.get("reason"), ""),
    }


def sanitize_social_comparison(raw: Any) -> Optional[SocialComparison]:
    """
    Coerce the advisory "what similar profiles chose" block.

    returns:
    - None – when the model did not return an object.
    - SocialComparison – choices without a usable option label are dropped; percentages
      default to 0 but are not clamped or rebalanced.
    """
    if not isinstance(raw, dict):
        return None
    choices = []
    raw_choices = raw.get("choices")
    for choice in raw_choices if isinstance(raw_choices, list) else []:
        if not isinstance(choice, dict):
            continue
        option = choice.get("option")
        if not isinstance(option, str) or not option.strip():
            continue
        choices.append({"option": option, "percentage": safe_number(choice.get("percentage"), 0)})
    return {"demographics": safe_string(raw.get("demographics"), ""), "choices": choices}
