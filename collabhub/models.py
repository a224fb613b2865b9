"""Pydantic data models for the decision-support & trust engine."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class UserRole(str, Enum):
    FOUNDER = "founder"
    TALENT = "talent"
    INVESTOR = "investor"


class StartupStage(str, Enum):
    IDEA = "idea"
    MVP = "mvp"
    EARLY_STAGE = "early_stage"
    GROWTH = "growth"
    SCALING = "scaling"


STAGE_LABELS: dict[str, str] = {
    StartupStage.IDEA.value: "Idea Stage",
    StartupStage.MVP.value: "MVP",
    StartupStage.EARLY_STAGE.value: "Early Stage",
    StartupStage.GROWTH.value: "Growth",
    StartupStage.SCALING.value: "Scaling",
}


class ConfidenceLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"        # score >= 40
    HIGH = "high"            # score >= 70


class InsightCategory(str, Enum):
    HEALTH = "health"
    ACTION = "action"
    PRIORITY = "priority"
    FIT = "fit"
    IMPACT = "impact"


class InsightIcon(str, Enum):
    BRAIN = "brain"
    SPARKLES = "sparkles"
    LIGHTBULB = "lightbulb"
    TARGET = "target"
    TRENDING = "trending"
    USERS = "users"


class SecurityEventType(str, Enum):
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    AUTH_FAILURE = "auth_failure"
    VALIDATION_ERROR = "validation_error"
    ACCESS_DENIED = "access_denied"


# ---------------------------------------------------------------------------
# Repository records (read-only inputs)
# ---------------------------------------------------------------------------

class Profile(BaseModel):
    """A member profile as supplied by the repository."""
    id: str
    full_name: str = ""
    role: UserRole = UserRole.TALENT
    skills: list[str] = Field(default_factory=list)
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    profile_completeness: Optional[int] = Field(default=None, ge=0, le=100)
    last_active_at: Optional[datetime] = None
    endorsement_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utc_now)


class Startup(BaseModel):
    """A startup listing. ``stage`` is free text; unknown stages have no requirements."""
    id: str
    name: str = ""
    stage: str = StartupStage.IDEA.value
    industry: str = ""
    description: str = ""
    founder: Optional[Profile] = None

    @field_validator("stage", mode="before")
    @classmethod
    def _stage_value(cls, value):
        if isinstance(value, Enum):
            return value.value
        return value

    @property
    def stage_label(self) -> str:
        return STAGE_LABELS.get(self.stage, self.stage.replace("_", " ").title())


# ---------------------------------------------------------------------------
# Derived results
# ---------------------------------------------------------------------------

class SkillGapReport(BaseModel):
    """Which stage-implied skills a team has and lacks."""
    model_config = ConfigDict(frozen=True)

    required_skills: list[str] = Field(default_factory=list)
    team_skills: list[str] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)
    completion_percentage: int = Field(ge=0, le=100, default=100)
    suggested_roles: list[str] = Field(default_factory=list)
    stage_based_recommendations: list[str] = Field(default_factory=list)

    @property
    def total_required(self) -> int:
        return len(self.required_skills)

    @property
    def covered_count(self) -> int:
        return self.total_required - len(self.missing_skills)


class RecommendedRole(BaseModel):
    title: str
    responsibility: str


class MatchQuality(BaseModel):
    label: str
    emoji: str


class CompatibilityAnalysis(BaseModel):
    """Fit between one candidate and one startup."""
    compatibility_score: int = Field(ge=0, le=100)
    fit_summary: str = ""
    strengths: list[str] = Field(default_factory=list)
    risks: list[str] = Field(default_factory=list)
    recommended_role: RecommendedRole
    skill_gaps_covered: list[str] = Field(default_factory=list)
    skill_gaps_remaining: list[str] = Field(default_factory=list)
    team_impact_prediction: str = ""
    optional_insight: str = ""
    quality: MatchQuality


class QuickFit(BaseModel):
    label: str
    fills: bool = False
    skills: list[str] = Field(default_factory=list)


class TrustBreakdownItem(BaseModel):
    label: str
    points: int = Field(ge=0)
    max: int = Field(ge=0)

    @model_validator(mode="after")
    def _points_within_max(self) -> "TrustBreakdownItem":
        if self.points > self.max:
            raise ValueError(f"{self.label}: {self.points} points exceeds max {self.max}")
        return self


class TrustScore(BaseModel):
    """Composite 0-100 trust signal with an itemized breakdown."""
    total: int = Field(ge=0, le=100)
    label: str
    breakdown: list[TrustBreakdownItem] = Field(default_factory=list)

    @model_validator(mode="after")
    def _total_matches_breakdown(self) -> "TrustScore":
        points = sum(item.points for item in self.breakdown)
        if points != self.total:
            raise ValueError(f"total {self.total} does not match breakdown sum {points}")
        return self

    def points_for(self, label: str) -> int:
        for item in self.breakdown:
            if item.label == label:
                return item.points
        raise KeyError(label)


class TrustBadge(BaseModel):
    id: str
    label: str
    tooltip: str


class AIInsight(BaseModel):
    """A user-facing, explainable insight."""
    id: str
    title: str
    summary: str
    reasoning: list[str] = Field(default_factory=list)
    confidence: ConfidenceLevel
    category: InsightCategory
    icon: Optional[InsightIcon] = None


class FounderInsights(BaseModel):
    health_summary: AIInsight
    next_actions: list[AIInsight] = Field(default_factory=list, max_length=3)
    hiring_priority: Optional[AIInsight] = None


class TalentInsights(BaseModel):
    fit_summary: AIInsight
    why_good_fit: list[str] = Field(default_factory=list, max_length=4)
    impact_prediction: AIInsight


# ---------------------------------------------------------------------------
# Rate limiting & abuse tracking
# ---------------------------------------------------------------------------

class RateLimitResult(BaseModel):
    allowed: bool
    remaining: int = Field(ge=0)
    reset_at: datetime


class RateLimitRecord(BaseModel):
    """Counter for one ``user:action`` window."""
    model_config = ConfigDict(frozen=True)

    count: int = Field(ge=1)
    window_reset_at: datetime


class ViolationRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    count: int = Field(ge=1)
    first_violation_at: datetime


class AbuseAlert(BaseModel):
    """Raised once per burst of repeated violations."""
    level: str = "ALERT"
    message: str = "Repeated security violations detected"
    user_id_prefix: str
    violation_type: str
    violation_count: int
    timestamp: datetime = Field(default_factory=utc_now)
