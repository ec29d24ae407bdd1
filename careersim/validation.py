"""
Request validation for the simulate flow.

PURPOSE: Turn an untyped request body into a well-formed DecisionInput, or a single
         human-readable reason why it cannot be.
CONTEXT: Malformed input is an expected outcome, not an exceptional one, so this
         module returns errors instead of raising. Rules run in a fixed order and the
         first failure wins.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from careersim.model_interface.types import GOALS, DecisionInput, UserProfile
from careersim.utils.numbers import to_number

AGE_MIN, AGE_MAX = 0, 120
RISK_MIN, RISK_MAX = 1, 10


def _is_number(value: Any) -> bool:
    """True for a finite int/float (bool excluded)."""
    return not isinstance(value, (bool, str)) and to_number(value) is not None


def _non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def validate_decision_input(body: Any) -> Tuple[Optional[DecisionInput], Optional[str]]:
    """
    Validate and normalise a raw request body.

    parameters:
    - body: Any – the parsed JSON request body.

    returns:
    - (DecisionInput, None) – on success; strings trimmed, optional fields omitted when absent.
    - (None, str) – on failure; the message names the offending field and its constraint.

    notes:
    - Unknown goals are dropped silently; duplicates of known goals are kept.
    - A non-string school or a non-numeric gpa is treated as absent, not as an error.
    """
    if not isinstance(body, dict):
        return None, "Request body must be a JSON object"

    option_a = body.get("optionA")
    option_b = body.get("optionB")
    if not _non_empty_string(option_a):
        return None, "optionA is required and must be a non-empty string"
    if not _non_empty_string(option_b):
        return None, "optionB is required and must be a non-empty string"

    p = body.get("profile")
    if not isinstance(p, dict):
        return None, "profile is required and must be an object"

    age = p.get("age")
    if not _is_number(age) or not AGE_MIN <= age <= AGE_MAX:
        return None, f"profile.age must be a number between {AGE_MIN} and {AGE_MAX}"

    major = p.get("major")
    if not _non_empty_string(major):
        return None, "profile.major is required and must be a non-empty string"

    risk_tolerance = to_number(p.get("riskTolerance"))
    if risk_tolerance is None or not RISK_MIN <= risk_tolerance <= RISK_MAX:
        return None, f"profile.riskTolerance must be a number between {RISK_MIN} and {RISK_MAX}"

    raw_goals = p.get("goals")
    if not isinstance(raw_goals, list):
        return None, "profile.goals must be an array"
    goals = [g for g in raw_goals if isinstance(g, str) and g in GOALS]
    if not goals:
        return None, f"profile.goals must contain at least one of: {', '.join(GOALS)}"

    profile: Dict[str, Any] = {"age": age, "major": major.strip()}

    school = p.get("school")
    if isinstance(school, str) and school.strip():
        profile["school"] = school.strip()

    gpa = p.get("gpa")
    if _is_number(gpa):
        profile["gpa"] = gpa

    profile["riskTolerance"] = _as_int_if_whole(risk_tolerance)
    profile["goals"] = goals

    data: DecisionInput = {
        "profile": UserProfile(**profile),
        "optionA": option_a.strip(),
        "optionB": option_b.strip(),
    }
    return data, None


def _as_int_if_whole(n: float):
    # "7" and 7 should serialise the same way in the prompt.
    return int(n) if n.is_integer() else n
