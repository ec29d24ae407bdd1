from typing import TypedDict, Literal, List

Goal = Literal["money", "stability", "freedom", "impact"]
Better = Literal["A", "B", "tie"]

GOALS = ("money", "stability", "freedom", "impact")

class _ProfileRequired(TypedDict):
    age: float
    major: str
    riskTolerance: float
    goals: List[Goal]

class UserProfile(_ProfileRequired, total=False):
    school: str
    gpa: float

class DecisionInput(TypedDict):
    profile: UserProfile
    optionA: str
    optionB: str

class Scenario(TypedDict):
    income5Year: float
    income10Year: float
    probability: float
    description: str

class SimulationResult(TypedDict):
    option: str
    optionName: str
    bestCase: Scenario
    averageCase: Scenario
    worstCase: Scenario
    riskScore: float
    stressLevel: float
    careerTrajectory: str
    reasoning: List[str]

class Recommendation(TypedDict):
    better: Better
    reason: str

class SocialComparisonChoice(TypedDict):
    option: str
    percentage: float

class SocialComparison(TypedDict):
    demographics: str
    choices: List[SocialComparisonChoice]

class _ComparisonRequired(TypedDict):
    optionA: SimulationResult
    optionB: SimulationResult
    percentageOptionA: int
    percentageOptionB: int
    recommendation: Recommendation

class ComparisonOutput(_ComparisonRequired, total=False):
    socialComparison: SocialComparison
