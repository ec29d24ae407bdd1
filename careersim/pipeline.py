# PURPOSE: The simulate flow end to end: validate the request, invoke the model once,
#          sanitize its reply, and assemble the trusted ComparisonOutput.
# CONTEXT: Called by the Lambda handler and the local CLI. Nothing upstream of the
#          sanitize step is trusted; nothing downstream needs to re-check it.

from __future__ import annotations
import json, time, uuid
from datetime import datetime, timezone
from typing import Any, Optional

from careersim.errors import InputValidationError
from careersim.logging_setup import get_logger
from careersim.model_interface.simulation_model import SimulationModel
from careersim.model_interface.types import ComparisonOutput
from careersim.sanitize import (
    sanitize_recommendation,
    sanitize_simulation,
    sanitize_social_comparison,
)
from careersim.sim_io import validate_comparison_output, validate_decision_input_shape
from careersim.simulator import run_simulation
from careersim.validation import validate_decision_input

log = get_logger()


def _run_id() -> str:
    """
    Readable run ID: short random prefix plus a UTC timestamp suffix.
    Example: 'a1b2c3d4-20261019130000'
    """
    return uuid.uuid4().hex[:8] + "-" + datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")


def run_pipeline(body: Any, model: Optional[SimulationModel] = None) -> ComparisonOutput:
    """
    End-to-end simulate flow.

    steps:
    1) Validate the raw body (first failing rule is reported), then schema-check the result.
    2) Build the prompt and call the model exactly once; percentages repaired.
    3) Sanitize each option; the user's labels replace whatever optionName the model echoed.
    4) Sanitize recommendation and social comparison.
    5) Validate the assembled output against the ComparisonOutput schema.

    returns:
    - ComparisonOutput – satisfies every range and sum invariant.

    raises:
    - InputValidationError – step 1 failed; no model call is made.
    - ConfigurationError / SimulationError / ModelResponseError – from step 2.
    """
    t0 = time.time()
    run_id = _run_id()

    # 1) Validate input
    data, error = validate_decision_input(body)
    if error:
        raise InputValidationError(error)
    validate_decision_input_shape(data)

    # 2) Single model call
    candidate = run_simulation(data, model=model)

    # 3) Per-option sanitization
    option_a = sanitize_simulation(candidate.get("optionA"))
    option_a["optionName"] = data["optionA"]
    option_b = sanitize_simulation(candidate.get("optionB"))
    option_b["optionName"] = data["optionB"]

    # 4) Assemble
    out: ComparisonOutput = {
        "optionA": option_a,
        "optionB": option_b,
        "percentageOptionA": candidate["percentageOptionA"],
        "percentageOptionB": candidate["percentageOptionB"],
        "recommendation": sanitize_recommendation(candidate.get("recommendation")),
    }
    social = sanitize_social_comparison(candidate.get("socialComparison"))
    if social is not None:
        out["socialComparison"] = social

    # 5) Validate output
    validate_comparison_output(out)

    log.info(
        "pipeline.complete",
        run_id=run_id,
        better=out["recommendation"]["better"],
        latency_ms=int((time.time() - t0) * 1000),
    )
    return out


if __name__ == "__main__":
    # Quick offline run to see a formatted result in the console.
    from careersim.model_impl.stub_model import StubModel
    demo = {"profile": {"age": 22, "major": "CS", "riskTolerance": 5, "goals": ["money"]},
            "optionA": "SWE", "optionB": "Startup"}
    print(json.dumps(run_pipeline(demo, model=StubModel()), indent=2))
