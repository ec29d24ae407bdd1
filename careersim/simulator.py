# PURPOSE: Prompt construction, the single model invocation, and reply parsing.
# CONTEXT: Sits between request validation and output sanitization. The model is an
#          untrusted black box: its reply may be fenced, malformed, or missing fields.
#          Only the cross-field percentage repair happens here; every other field is
#          left to sanitize.py.

from __future__ import annotations

import json
import os
import re
from typing import Any, Dict, Optional

from careersim.errors import ConfigurationError, ModelResponseError, SimulationError
from careersim.logging_setup import get_logger
from careersim.model_interface.loader import load_model
from careersim.model_interface.simulation_model import SimulationModel
from careersim.model_interface.types import DecisionInput
from careersim.observability import xray_segment
from careersim.utils.numbers import split_percentages

log = get_logger()

# Load the system prompt once at import-time.
PROMPT_PATH = os.path.join(os.path.dirname(__file__), "prompts", "system_prompt.md")
with open(PROMPT_PATH, "r", encoding="utf-8") as f:
    SYSTEM_PROMPT = f.read().strip()

# The fence, when present, must wrap the whole (trimmed) reply.
_FENCE_RE = re.compile(r"^```(?:json)?\s*\n?(.*?)\n?```\s*$", re.IGNORECASE | re.DOTALL)

_SCHEMA_TEXT = """Return a single JSON object with:
- optionA: SimulationResult for option A (use option: "A")
- optionB: SimulationResult for option B (use option: "B")
- percentageOptionA: number 0-100, share of people with a similar profile who would choose option A
- percentageOptionB: number 0-100, share who would choose option B; percentageOptionA + percentageOptionB must equal 100
- recommendation: { better: "A" | "B" | "tie", reason: string }
- socialComparison: { demographics: string, choices: array of 3-5 { option: string, percentage: number } whose percentages sum to 100 }

Each SimulationResult must have: option, optionName, bestCase, averageCase, worstCase (each with income5Year, income10Year, probability, description), riskScore (0-100), stressLevel (0-100), careerTrajectory (string), reasoning (string array).
Incomes are annual USD between 0 and 1000000. Probabilities for bestCase/averageCase/worstCase per option must sum to 1.0."""


def build_prompt(data: DecisionInput) -> str:
    """
    Serialise a validated DecisionInput into the user prompt.

    returns:
    - str – identical for identical inputs (compact JSON, stable key order).
    """
    profile = json.dumps(data["profile"], separators=(",", ":"), ensure_ascii=False)
    return (
        "Simulate career outcomes for this decision.\n\n"
        f"Profile: {profile}\n"
        f"Option A: {data['optionA']}\n"
        f"Option B: {data['optionB']}\n\n"
        f"{_SCHEMA_TEXT}"
    )


def strip_json_markdown(raw: str) -> str:
    """Remove an enclosing ```json ... ``` (or bare ```) fence, if the whole reply is one."""
    text = raw.strip()
    m = _FENCE_RE.match(text)
    if m:
        text = m.group(1).strip()
    return text


def parse_model_reply(raw: str) -> Dict[str, Any]:
    """
    Parse the model's raw text into a candidate output object.

    raises:
    - ModelResponseError – the unfenced text is not JSON, or not a JSON object.
    """
    try:
        parsed = json.loads(strip_json_markdown(raw))
    except ValueError as e:
        # JSONDecodeError, or the int digit limit tripped by a huge literal.
        raise ModelResponseError(f"Simulation response was not valid JSON: {e}") from e
    if not isinstance(parsed, dict):
        raise ModelResponseError(
            f"Simulation response was not valid JSON: expected an object, got {type(parsed).__name__}"
        )
    return parsed


def repair_percentages(candidate: Dict[str, Any]) -> Dict[str, Any]:
    """
    Make percentageOptionA/B integers in [0, 100] that sum to exactly 100.

    notes:
    - Mutates and returns `candidate`. See utils.numbers.split_percentages for the rule.
    """
    a, b = split_percentages(candidate.get("percentageOptionA"), candidate.get("percentageOptionB"))
    candidate["percentageOptionA"] = a
    candidate["percentageOptionB"] = b
    return candidate


def run_simulation(data: DecisionInput, model: Optional[SimulationModel] = None) -> Dict[str, Any]:
    """
    Invoke the model once for a validated decision and return the parsed candidate.

    parameters:
    - data: DecisionInput – output of validation.validate_decision_input.
    - model: SimulationModel|None – injected back-end; defaults to load_model().

    returns:
    - dict – best-effort candidate output; percentages repaired, everything else untrusted.

    raises:
    - ConfigurationError – credential missing (raised before any network call).
    - ModelResponseError – reply was not a JSON object.
    - SimulationError – any other model/transport failure.
    """
    if model is None:
        model = load_model()

    prompt = build_prompt(data)
    try:
        with xray_segment("model.complete", model=type(model).__name__):
            raw = model.complete(SYSTEM_PROMPT, prompt)
    except ConfigurationError:
        raise
    except Exception as e:
        log.error("simulation.model_failed", error=f"{type(e).__name__}: {e}")
        raise SimulationError(f"Simulation failed: {e}") from e

    if not isinstance(raw, str):
        raise SimulationError(f"Simulation failed: model returned {type(raw).__name__}, expected text")
    log.info("simulation.model_reply", chars=len(raw), fenced=bool(_FENCE_RE.match(raw.strip())))

    candidate = parse_model_reply(raw)
    return repair_percentages(candidate)
