import pytest

from careersim.sanitize import (
    sanitize_simulation,
    sanitize_scenario,
    normalize_probabilities,
    sanitize_recommendation,
    sanitize_social_comparison,
)

def _scenario(p, **kw):
    s = {"income5Year": 50000, "income10Year": 90000, "probability": p, "description": "d"}
    s.update(kw)
    return s

def _raw(pb, pa, pw, **kw):
    raw = {
        "option": "A",
        "optionName": "Software engineer",
        "bestCase": _scenario(pb),
        "averageCase": _scenario(pa),
        "worstCase": _scenario(pw),
        "riskScore": 40,
        "stressLevel": 55,
        "careerTrajectory": "IC to staff",
        "reasoning": ["High demand"],
    }
    raw.update(kw)
    return raw

def _probs(result):
    return [result[k]["probability"] for k in ("bestCase", "averageCase", "worstCase")]

@pytest.mark.parametrize("triple", [(0, 0, 0), (-1, -1, -1)])
def test_degenerate_probabilities_become_thirds(triple):
    out = sanitize_simulation(_raw(*triple))
    assert _probs(out) == [1 / 3, 1 / 3, 1 / 3]

def test_probabilities_are_normalized():
    out = sanitize_simulation(_raw(2, 2, 4))
    assert _probs(out) == [0.25, 0.25, 0.5]

def test_negative_probability_floored_before_normalizing():
    out = sanitize_simulation(_raw(-3, 1, 1))
    assert _probs(out) == [0.0, 0.5, 0.5]

def test_missing_probabilities_default_to_thirds():
    raw = _raw(0.2, 0.5, 0.3)
    for key in ("bestCase", "averageCase", "worstCase"):
        del raw[key]["probability"]
    assert _probs(sanitize_simulation(raw)) == pytest.approx([1 / 3] * 3)

def test_incomes_clamped():
    s = sanitize_scenario(_scenario(0.3, income5Year=2_000_000, income10Year=-500))
    assert s["income5Year"] == 1_000_000
    assert s["income10Year"] == 0

def test_unparseable_numbers_use_defaults():
    raw = _raw("N/A", 0.5, 0.5, riskScore="N/A", stressLevel={"x": 1})
    raw["bestCase"]["income5Year"] = "N/A"
    out = sanitize_simulation(raw)
    assert out["riskScore"] == 50
    assert out["stressLevel"] == 50
    assert out["bestCase"]["income5Year"] == 0
    # "N/A" probability -> 1/3 default, then normalized with 0.5 + 0.5
    assert out["bestCase"]["probability"] == pytest.approx((1 / 3) / (1 / 3 + 1))

def test_numeric_strings_are_parsed():
    raw = _raw(1, 1, 2, riskScore="75")
    raw["averageCase"]["income10Year"] = "120000"
    out = sanitize_simulation(raw)
    assert out["riskScore"] == 75
    assert out["averageCase"]["income10Year"] == 120000

def test_scores_clamped():
    out = sanitize_simulation(_raw(1, 1, 1, riskScore=140, stressLevel=-20))
    assert out["riskScore"] == 100
    assert out["stressLevel"] == 0

@pytest.mark.parametrize("raw", [None, "oops", 12, [], {}])
def test_unusable_input_yields_full_defaults(raw):
    out = sanitize_simulation(raw)
    assert out["option"] == "Option"
    assert out["optionName"] == "Option"
    assert out["riskScore"] == 50 and out["stressLevel"] == 50
    assert out["careerTrajectory"] == ""
    assert out["reasoning"] == []
    for key in ("bestCase", "averageCase", "worstCase"):
        assert out[key] == {"income5Year": 0, "income10Year": 0, "probability": 1 / 3, "description": ""}

def test_option_name_falls_back_to_tag():
    raw = _raw(1, 1, 1)
    del raw["optionName"]
    assert sanitize_simulation(raw)["optionName"] == "A"

def test_reasoning_filtered_in_order():
    out = sanitize_simulation(_raw(1, 1, 1, reasoning=["first", "", 3, None, "second", ["x"]]))
    assert out["reasoning"] == ["first", "second"]

def test_reasoning_not_a_list():
    assert sanitize_simulation(_raw(1, 1, 1, reasoning="one long string"))["reasoning"] == []

def test_non_string_description_defaults():
    s = sanitize_scenario(_scenario(0.4, description=12))
    assert s["description"] == ""

def test_normalize_does_not_mutate_inputs():
    best, avg, worst = _scenario(2), _scenario(2), _scenario(4)
    normalize_probabilities(best, avg, worst)
    assert best["probability"] == 2

@pytest.mark.parametrize("raw,expected", [
    ({"better": "B", "reason": "Safer"}, {"better": "B", "reason": "Safer"}),
    ({"better": "C", "reason": 3}, {"better": "tie", "reason": ""}),
    ({"better": "tie"}, {"better": "tie", "reason": ""}),
    (None, {"better": "tie", "reason": ""}),
])
def test_sanitize_recommendation(raw, expected):
    assert sanitize_recommendation(raw) == expected

def test_social_comparison_absent():
    assert sanitize_social_comparison(None) is None
    assert sanitize_social_comparison(["x"]) is None

def test_social_comparison_choices_cleaned():
    raw = {
        "demographics": "CS grads, 22-25",
        "choices": [
            {"option": "SWE", "percentage": 55},
            {"option": "Startup", "percentage": "30"},
            {"option": "", "percentage": 10},
            {"percentage": 5},
            "Grad school",
            {"option": "Grad school", "percentage": "lots"},
        ],
    }
    out = sanitize_social_comparison(raw)
    assert out["demographics"] == "CS grads, 22-25"
    assert out["choices"] == [
        {"option": "SWE", "percentage": 55},
        {"option": "Startup", "percentage": 30},
        {"option": "Grad school", "percentage": 0},
    ]

def test_huge_integer_score_defaults():
    out = sanitize_simulation(_raw(1, 1, 1, riskScore=10**400, stressLevel=-(10**400)))
    assert out["riskScore"] == 50
    assert out["stressLevel"] == 50

def test_probabilities_summing_past_float_max_still_partition():
    out = sanitize_simulation(_raw(1e308, 1e308, 1e308))
    assert _probs(out) == [1 / 3, 1 / 3, 1 / 3]

def test_probabilities_near_float_max_keep_ratios():
    out = sanitize_simulation(_raw(1.5e308, 1.5e308, 0))
    assert _probs(out) == [0.5, 0.5, 0.0]
    assert sum(_probs(out)) == 1.0
