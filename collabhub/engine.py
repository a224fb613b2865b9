"""Single entry point bundling the pure scorers with an injected rate-limit guard."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from collabhub.config import Config
from collabhub.insights.founder import generate_founder_insights
from collabhub.insights.talent import generate_talent_insights
from collabhub.models import (
    AbuseAlert,
    CompatibilityAnalysis,
    FounderInsights,
    Profile,
    RateLimitResult,
    SkillGapReport,
    Startup,
    TalentInsights,
    TrustScore,
    utc_now,
)
from collabhub.notifications.alerts import forward_alert
from collabhub.scoring.compatibility import score_compatibility
from collabhub.scoring.skill_gap import analyze_skill_gap
from collabhub.scoring.trust import calculate_trust_score
from collabhub.security.errors import RateLimitError
from collabhub.security.rate_limit import RateLimitGuard
from collabhub.security.store import Clock


class DecisionEngine:
    """
    Facade over the decision-support functions. Only the rate-limit guard
    holds state; pass your own to share it or to back it with another store.
    When SECURITY_WEBHOOK_URL is set, abuse alerts are also posted there.
    """

    def __init__(self, guard: Optional[RateLimitGuard] = None, clock: Clock = utc_now) -> None:
        self.clock = clock
        self.guard = guard or RateLimitGuard(clock=clock)
        if Config.SECURITY_WEBHOOK_URL and forward_alert not in self.guard.tracker.alert_handlers:
            self.guard.tracker.add_alert_handler(forward_alert)

    # --- Pure scoring ---

    def analyze_skill_gap(self, startup: Startup, candidate_skills: Iterable[str] = ()) -> SkillGapReport:
        return analyze_skill_gap(startup, candidate_skills)

    def calculate_trust_score(self, profile: Profile) -> TrustScore:
        return calculate_trust_score(profile, now=self.clock())

    def score_compatibility(
        self,
        candidate: Profile,
        startup: Startup,
        team_skills: Iterable[str] = (),
        base_score: Optional[float] = None,
    ) -> CompatibilityAnalysis:
        return score_compatibility(candidate, startup, team_skills, base_score)

    def generate_founder_insights(
        self,
        startup: Startup,
        interested_skills: Iterable[str] = (),
        interest_count: int = 0,
    ) -> FounderInsights:
        return generate_founder_insights(startup, interested_skills, interest_count)

    def generate_talent_insights(
        self,
        candidate: Profile,
        startup: Startup,
        match_score: Optional[float] = None,
    ) -> TalentInsights:
        return generate_talent_insights(candidate, startup, match_score)

    # --- Rate limiting ---

    def rate_limit_check(self, user_id: Optional[str], action: str) -> RateLimitResult:
        return self.guard.check(user_id, action)

    def enforce(self, user_id: Optional[str], action: str) -> RateLimitResult:
        """Like ``rate_limit_check`` but raises ``RateLimitError`` when denied."""
        result = self.guard.check(user_id, action)
        if not result.allowed:
            raise RateLimitError(result.reset_at, now=self.clock())
        return result

    def record_violation(self, user_id: Optional[str], violation_type: str) -> Optional[AbuseAlert]:
        return self.guard.log_violation(user_id, violation_type)

    def is_flagged(self, user_id: Optional[str]) -> bool:
        return self.guard.is_flagged(user_id)
