import json
import pytest

from careersim.errors import ConfigurationError, InputValidationError, ModelResponseError
from careersim.model_impl.stub_model import StubModel
from careersim.pipeline import run_pipeline
from careersim.sim_io import validate_comparison_output

BODY = {"profile": {"age": 22, "major": "CS", "riskTolerance": 5, "goals": ["money"]},
        "optionA": "SWE", "optionB": "Startup"}

def _fenced(obj):
    return "```json\n" + json.dumps(obj) + "\n```"

def test_pipeline_stub_happy_path():
    out = run_pipeline(BODY, model=StubModel())
    assert out["optionA"]["optionName"] == "SWE"
    assert out["optionB"]["optionName"] == "Startup"
    assert out["percentageOptionA"] + out["percentageOptionB"] == 100
    assert out["recommendation"]["better"] == "A"
    assert len(out["socialComparison"]["choices"]) == 3
    validate_comparison_output(out)  # should not raise

def test_sparse_reply_is_repaired():
    reply = _fenced({"optionA": {}, "optionB": {}, "recommendation": {"better": "tie"},
                     "percentageOptionA": 70, "percentageOptionB": 40})
    out = run_pipeline(BODY, model=StubModel(reply=reply))
    assert out["percentageOptionA"] == 64
    assert out["percentageOptionB"] == 36
    assert out["recommendation"] == {"better": "tie", "reason": ""}
    assert out["optionA"]["optionName"] == "SWE"
    assert out["optionB"]["optionName"] == "Startup"
    assert out["optionA"]["riskScore"] == 50
    assert "socialComparison" not in out

def test_user_labels_override_model_echo():
    reply = _fenced({"optionA": {"option": "A", "optionName": "Software Eng."},
                     "optionB": {"option": "B", "optionName": 42}})
    out = run_pipeline({**BODY, "optionA": "  SWE  "}, model=StubModel(reply=reply))
    assert out["optionA"]["optionName"] == "SWE"
    assert out["optionB"]["optionName"] == "Startup"
    assert out["optionA"]["option"] == "A"

def test_missing_options_in_reply_get_defaults():
    out = run_pipeline(BODY, model=StubModel(reply='{"recommendation": "A"}'))
    assert out["optionA"]["option"] == "Option"
    assert out["optionA"]["bestCase"]["probability"] == 1 / 3
    assert out["recommendation"]["better"] == "tie"
    assert (out["percentageOptionA"], out["percentageOptionB"]) == (50, 50)

def test_validation_error_names_first_bad_field():
    model = StubModel()
    with pytest.raises(InputValidationError) as e:
        run_pipeline({"optionA": "X"}, model=model)
    assert "optionB" in str(e.value)
    assert model.calls == []

def test_unparseable_reply_produces_no_output():
    with pytest.raises(ModelResponseError):
        run_pipeline(BODY, model=StubModel(reply="Sorry, I can't do that."))

def test_missing_credential(monkeypatch):
    monkeypatch.delenv("MODEL_MODULE", raising=False)
    monkeypatch.delenv("AWS_BEARER_TOKEN_BEDROCK", raising=False)
    with pytest.raises(ConfigurationError) as e:
        run_pipeline(BODY)
    assert "is not set" in str(e.value)

def test_normalized_input_is_schema_checked_before_model_call(monkeypatch):
    from jsonschema import ValidationError
    bad = {"profile": {"age": 22, "major": "CS", "riskTolerance": 5, "goals": ["fame"]},
           "optionA": "SWE", "optionB": "Startup"}
    monkeypatch.setattr("careersim.pipeline.validate_decision_input", lambda body: (bad, None))
    model = StubModel()
    with pytest.raises(ValidationError):
        run_pipeline(BODY, model=model)
    assert model.calls == []

def test_huge_score_literals_in_reply_are_defaulted():
    reply = '{"optionA": {"riskScore": ' + "7" * 400 + '}, "optionB": {}}'
    out = run_pipeline(BODY, model=StubModel(reply=reply))
    assert out["optionA"]["riskScore"] == 50
