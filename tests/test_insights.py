"""Tests for founder and talent insight generation."""

import pytest

from collabhub.insights.confidence import confidence_label, confidence_level
from collabhub.insights.founder import founder_quick_summary, generate_founder_insights
from collabhub.insights.talent import generate_talent_insights
from collabhub.models import ConfidenceLevel, InsightCategory

from tests.helpers import make_profile, make_startup


class TestConfidence:
    @pytest.mark.parametrize(
        "score, level",
        [
            (100, ConfidenceLevel.HIGH),
            (70, ConfidenceLevel.HIGH),
            (69, ConfidenceLevel.MEDIUM),
            (40, ConfidenceLevel.MEDIUM),
            (39, ConfidenceLevel.LOW),
            (0, ConfidenceLevel.LOW),
        ],
    )
    def test_levels(self, score, level):
        assert confidence_level(score) == level

    def test_labels(self):
        assert confidence_label(ConfidenceLevel.HIGH) == "High confidence"
        assert confidence_label(ConfidenceLevel.MEDIUM) == "Moderate confidence"
        assert confidence_label("low") == "Based on limited data"


class TestFounderInsights:
    def test_low_coverage_no_interest(self):
        insights = generate_founder_insights(make_startup("mvp", ["React"]))
        health = insights.health_summary

        assert "early team-building at 25%" in health.summary
        assert "TypeScript" in health.summary
        assert health.confidence == ConfidenceLevel.LOW
        assert health.category == InsightCategory.HEALTH
        assert health.reasoning[1] == "No talent interest yet - consider updating your startup description"
        assert health.reasoning[2] == (
            "At MVP, the focus is typically on shipping quickly and gathering early feedback"
        )

        assert [a.id for a in insights.next_actions] == ["action-hire", "action-visibility"]
        assert "UI/UX Designer" in insights.next_actions[0].summary

    def test_all_three_actions_in_fixed_order(self):
        insights = generate_founder_insights(make_startup("early_stage", []), interest_count=2)
        assert [a.id for a in insights.next_actions] == ["action-hire", "action-engage", "action-stage"]
        assert "Marketing Lead" in insights.next_actions[0].summary
        assert "Review the 2 interested talents" in insights.next_actions[1].summary
        assert "marketing capabilities" in insights.next_actions[2].summary
        assert insights.health_summary.reasoning[1] == "2 talents have expressed interest in your startup"

    def test_hiring_priority_uses_stage_skill(self):
        insights = generate_founder_insights(make_startup("early_stage", []))
        priority = insights.hiring_priority
        assert priority is not None
        assert priority.category == InsightCategory.PRIORITY
        assert "Marketing Lead" in priority.summary
        assert priority.reasoning[0] == "Marketing is a key skill for Early Stage startups"
        assert priority.confidence == ConfidenceLevel.MEDIUM

    def test_fully_covered_team(self):
        startup = make_startup("idea", ["Product Management", "UI/UX Design"])
        insights = generate_founder_insights(startup, interest_count=1)

        assert "strong skill coverage at 100%" in insights.health_summary.summary
        assert insights.health_summary.confidence == ConfidenceLevel.HIGH
        assert insights.health_summary.reasoning[1] == "1 talent has expressed interest in your startup"
        assert insights.hiring_priority is None
        assert [a.id for a in insights.next_actions] == ["action-engage"]
        assert insights.next_actions[0].summary.startswith("1 talent is interested")

    def test_middle_tier(self):
        startup = make_startup("growth", ["Marketing", "Sales", "Data Science"])
        health = generate_founder_insights(startup).health_summary
        assert "60% team-complete" in health.summary
        assert "Operations" in health.summary
        assert health.reasoning[0] == "2 skill gap(s) identified for your current stage"
        assert health.confidence == ConfidenceLevel.MEDIUM

    def test_interested_skills_count_toward_coverage(self):
        startup = make_startup("mvp", ["React"])
        insights = generate_founder_insights(startup, ["TypeScript", "UI/UX Design"], 2)
        assert "75%" in insights.health_summary.summary

    def test_unknown_stage(self):
        insights = generate_founder_insights(make_startup("pre_seed", []))
        assert insights.hiring_priority is None
        assert insights.health_summary.reasoning[-1].startswith("At Pre Seed, the focus is typically on")
        assert insights.health_summary.reasoning[0] == "No stage-specific skill requirements are defined for Pre Seed"
        assert [a.id for a in insights.next_actions] == ["action-visibility"]

    def test_reasoning_is_plain_sentences(self):
        insights = generate_founder_insights(make_startup("scaling", ["Finance"]), interest_count=3)
        for insight in [insights.health_summary, *insights.next_actions, insights.hiring_priority]:
            assert insight.reasoning
            assert all(isinstance(r, str) and r for r in insight.reasoning)

    def test_quick_summary(self):
        assert founder_quick_summary(make_startup("mvp", ["React"])) == "25% complete - TypeScript needed"
        full = make_startup("idea", ["Product Management", "UI/UX Design"])
        assert founder_quick_summary(full) == "Strong team coverage (100%)"


class TestTalentInsights:
    def test_gap_filling_candidate(self):
        candidate = make_profile(["TypeScript", "UI/UX Design"])
        insights = generate_talent_insights(candidate, make_startup("mvp", ["React"]))

        fit = insights.fit_summary
        assert fit.summary.startswith("This startup is looking for TypeScript and UI/UX Design")
        assert fit.confidence == ConfidenceLevel.HIGH
        assert fit.reasoning[-1] == "Operating in the Fintech industry"

        assert insights.why_good_fit == [
            "Your TypeScript, UI/UX Design skills match their team needs",
            "You could help fill 2 skill gap(s) on their team",
            "Hands-on building phase with direct product impact",
            "Joining could significantly improve their team readiness",
        ]

        impact = insights.impact_prediction
        assert impact.summary == "Joining could improve team completeness from 25% to 75%."
        assert impact.confidence == ConfidenceLevel.HIGH

    def test_no_match(self):
        startup = make_startup("idea", ["Product Management", "UI/UX Design"], industry="")
        insights = generate_talent_insights(make_profile(["Cooking"]), startup)

        assert "learning opportunities" in insights.fit_summary.summary
        assert insights.fit_summary.confidence == ConfidenceLevel.MEDIUM
        assert insights.why_good_fit == ["Early-stage opportunity to shape the product vision from scratch"]
        assert "fresh perspectives" in insights.impact_prediction.summary
        assert insights.impact_prediction.confidence == ConfidenceLevel.MEDIUM

    def test_high_match_score_without_gap_fill(self):
        startup = make_startup("idea", ["Product Management", "UI/UX Design"])
        insights = generate_talent_insights(make_profile(["Cooking"]), startup, match_score=90)
        assert "good alignment" in insights.fit_summary.summary
        assert insights.fit_summary.confidence == ConfidenceLevel.HIGH

    def test_fallback_reasons(self):
        startup = make_startup("pre_seed", [], industry="")
        insights = generate_talent_insights(make_profile([]), startup)
        assert insights.why_good_fit == [
            "This could be an opportunity to expand your skill set",
            "Pre Seed startups offer unique learning experiences",
        ]

    def test_industry_reason(self):
        startup = make_startup("idea", ["Product Management", "UI/UX Design"], industry="Healthcare")
        insights = generate_talent_insights(make_profile(["healthcare"]), startup)
        assert "Your background aligns with their Healthcare focus" in insights.why_good_fit
