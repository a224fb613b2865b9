"""CollabHub decision-support & trust engine."""

from collabhub.engine import DecisionEngine
from collabhub.insights.founder import generate_founder_insights
from collabhub.insights.talent import generate_talent_insights
from collabhub.scoring.compatibility import score_compatibility
from collabhub.scoring.skill_gap import analyze_skill_gap
from collabhub.scoring.trust import calculate_trust_score
from collabhub.security.rate_limit import RATE_LIMITS, RateLimitGuard

__all__ = [
    "DecisionEngine",
    "RATE_LIMITS",
    "RateLimitGuard",
    "analyze_skill_gap",
    "calculate_trust_score",
    "generate_founder_insights",
    "generate_talent_insights",
    "score_compatibility",
]
