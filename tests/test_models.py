"""Tests for Pydantic data models."""

import pytest
from pydantic import ValidationError

from collabhub.models import (
    AIInsight,
    ConfidenceLevel,
    FounderInsights,
    InsightCategory,
    Profile,
    RateLimitRecord,
    SkillGapReport,
    Startup,
    StartupStage,
    TrustBreakdownItem,
    TrustScore,
    UserRole,
)

from tests.helpers import NOW


class TestTrustBreakdown:
    def test_points_within_max(self):
        item = TrustBreakdownItem(label="Activity", points=15, max=15)
        assert item.points == 15

    def test_points_over_max_rejected(self):
        with pytest.raises(ValidationError):
            TrustBreakdownItem(label="Activity", points=16, max=15)

    def test_total_must_match_breakdown(self):
        with pytest.raises(ValidationError):
            TrustScore(
                total=50,
                label="Building Trust",
                breakdown=[TrustBreakdownItem(label="Profile", points=30, max=30)],
            )

    def test_points_for(self):
        score = TrustScore(
            total=30,
            label="New Member",
            breakdown=[TrustBreakdownItem(label="Profile", points=30, max=30)],
        )
        assert score.points_for("Profile") == 30
        with pytest.raises(KeyError):
            score.points_for("Nope")


class TestStartupModel:
    def test_stage_enum_coerced_to_value(self):
        s = Startup(id="s1", stage=StartupStage.EARLY_STAGE)
        assert s.stage == "early_stage"
        assert s.stage_label == "Early Stage"

    def test_unknown_stage_accepted(self):
        s = Startup(id="s1", stage="pre_seed")
        assert s.stage_label == "Pre Seed"

    def test_founder_optional(self):
        assert Startup(id="s1").founder is None


class TestProfileModel:
    def test_defaults(self):
        p = Profile(id="u1")
        assert p.role == UserRole.TALENT
        assert p.skills == []
        assert p.endorsement_count == 0
        assert p.profile_completeness is None
        assert p.github_url is None

    def test_negative_endorsements_rejected(self):
        with pytest.raises(ValidationError):
            Profile(id="u1", endorsement_count=-1)

    def test_completeness_bounds(self):
        with pytest.raises(ValidationError):
            Profile(id="u1", profile_completeness=101)

    def test_serialization_roundtrip(self):
        p = Profile(id="u1", full_name="Alice", skills=["React"], created_at=NOW)
        restored = Profile.model_validate_json(p.model_dump_json())
        assert restored.skills == ["React"]
        assert restored.created_at == NOW


class TestDerivedModels:
    def test_skill_gap_report_is_frozen(self):
        report = SkillGapReport(required_skills=["React"], missing_skills=["React"], completion_percentage=0)
        with pytest.raises(ValidationError):
            report.completion_percentage = 100

    def test_report_counts(self):
        report = SkillGapReport(
            required_skills=["A", "B", "C", "D"],
            missing_skills=["D"],
            completion_percentage=75,
        )
        assert report.total_required == 4
        assert report.covered_count == 3

    def test_founder_insights_caps_actions(self):
        insight = AIInsight(
            id="x",
            title="t",
            summary="s",
            confidence=ConfidenceLevel.LOW,
            category=InsightCategory.ACTION,
        )
        with pytest.raises(ValidationError):
            FounderInsights(health_summary=insight, next_actions=[insight] * 4)

    def test_rate_limit_records_compare_by_value(self):
        a = RateLimitRecord(count=1, window_reset_at=NOW)
        b = RateLimitRecord(count=1, window_reset_at=NOW)
        assert a == b
        assert a != a.model_copy(update={"count": 2})
