import json, re
from careersim.model_interface.simulation_model import SimulationModel

_OPTION_RE = re.compile(r"^Option ([AB]): (.*)$", re.MULTILINE)

def _result(tag, name, base, risk, stress):
    return {
        "option": tag,
        "optionName": name,
        "bestCase": {"income5Year": round(base*1.6), "income10Year": round(base*2.4), "probability": 0.2,
                     "description": f"{name} pays off early and compounds."},
        "averageCase": {"income5Year": round(base*1.2), "income10Year": round(base*1.6), "probability": 0.55,
                        "description": f"Steady progression in {name}."},
        "worstCase": {"income5Year": round(base*0.6), "income10Year": round(base*0.9), "probability": 0.25,
                      "description": f"{name} stalls and a pivot is needed."},
        "riskScore": risk,
        "stressLevel": stress,
        "careerTrajectory": f"Entry level in {name}, senior role within ten years.",
        "reasoning": [f"{name} matches the stated goals.", "Outcome spread reflects risk tolerance."],
    }

class StubModel(SimulationModel):
    """Deterministic offline model. Pass `reply` to return canned text instead."""

    def __init__(self, reply=None):
        self.reply = reply
        self.calls = []

    def complete(self, system, prompt):
        self.calls.append({"system": system, "prompt": prompt})
        if self.reply is not None:
            return self.reply
        names = dict(_OPTION_RE.findall(prompt))
        a, b = names.get("A", "Option A"), names.get("B", "Option B")
        body = {
            "optionA": _result("A", a, 80000, 35, 45),
            "optionB": _result("B", b, 70000, 70, 65),
            "percentageOptionA": 62,
            "percentageOptionB": 38,
            "recommendation": {"better": "A", "reason": f"{a} offers the better risk-adjusted income."},
            "socialComparison": {
                "demographics": "Graduates with a similar profile",
                "choices": [{"option": a, "percentage": 55}, {"option": b, "percentage": 30},
                            {"option": "Graduate school", "percentage": 15}],
            },
        }
        return "```json\n" + json.dumps(body, indent=2) + "\n```"
