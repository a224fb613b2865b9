"""Founder-facing insights — explainable, rule-based guidance for a startup."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from collabhub.insights.confidence import confidence_level
from collabhub.models import (
    AIInsight,
    FounderInsights,
    InsightCategory,
    InsightIcon,
    SkillGapReport,
    Startup,
    StartupStage,
)
from collabhub.scoring.skill_gap import analyze_skill_gap, priority_skills

MAX_NEXT_ACTIONS = 3

# What each stage is about and which capabilities it leans on
STAGE_GUIDANCE: dict[str, dict] = {
    StartupStage.IDEA.value: {
        "focus": "validating your concept and building initial traction",
        "priorities": ["Product thinking", "User research", "Technical feasibility"],
    },
    StartupStage.MVP.value: {
        "focus": "shipping quickly and gathering early feedback",
        "priorities": ["Frontend development", "Backend development", "User testing"],
    },
    StartupStage.EARLY_STAGE.value: {
        "focus": "finding product-market fit and initial growth",
        "priorities": ["Marketing", "Sales", "Customer success"],
    },
    StartupStage.GROWTH.value: {
        "focus": "scaling operations and expanding your market",
        "priorities": ["Operations", "Data analysis", "Team management"],
    },
    StartupStage.SCALING.value: {
        "focus": "optimizing processes and building sustainable growth",
        "priorities": ["Finance", "Legal", "Strategic partnerships"],
    },
}

_DEFAULT_FOCUS = "building a focused, well-rounded founding team"


def _stage_focus(stage: str) -> str:
    guidance = STAGE_GUIDANCE.get(stage)
    return guidance["focus"] if guidance else _DEFAULT_FOCUS


def _talent_phrase(count: int) -> str:
    return f"{count} talent has" if count == 1 else f"{count} talents have"


# ---------------------------------------------------------------------------
# Individual insights
# ---------------------------------------------------------------------------

def _health_summary(startup: Startup, report: SkillGapReport, interest_count: int) -> AIInsight:
    completion = report.completion_percentage
    label = startup.stage_label
    top_missing = report.missing_skills[0] if report.missing_skills else None

    if completion >= 80:
        summary = (
            f"Your {label} startup has strong skill coverage at {completion}% team "
            f"completeness. You're well-positioned to execute on your vision."
        )
        if report.total_required:
            covered = f"Team covers {report.covered_count} of the {report.total_required} key skills for this stage"
        else:
            covered = f"No stage-specific skill requirements are defined for {label}"
        reasoning = [covered]
    elif completion >= 50:
        summary = (
            f"Your {label} startup is {completion}% team-complete. Consider strengthening "
            f"{top_missing or 'key areas'} to accelerate progress."
        )
        reasoning = [f"{len(report.missing_skills)} skill gap(s) identified for your current stage"]
    else:
        summary = (
            f"Your {label} startup is in early team-building at {completion}% completeness. "
            f"Focus on attracting talent with {top_missing or 'core'} skills."
        )
        reasoning = [f"Multiple skill gaps may slow progress at the {label} stage"]

    if interest_count > 0:
        reasoning.append(f"{_talent_phrase(interest_count)} expressed interest in your startup")
    else:
        reasoning.append("No talent interest yet - consider updating your startup description")
    reasoning.append(f"At {label}, the focus is typically on {_stage_focus(startup.stage)}")

    return AIInsight(
        id="health-summary",
        title="Startup Health Summary",
        summary=summary,
        reasoning=reasoning,
        confidence=confidence_level(completion),
        category=InsightCategory.HEALTH,
        icon=InsightIcon.BRAIN,
    )


def _hire_action(startup: Startup, report: SkillGapReport) -> Optional[AIInsight]:
    if not (report.missing_skills and report.suggested_roles):
        return None
    skill = report.missing_skills[0]
    return AIInsight(
        id="action-hire",
        title="Consider Growing Your Team",
        summary=(
            f"You may want to look for a {report.suggested_roles[0]} to fill a key "
            f"skill gap in {skill}."
        ),
        reasoning=[
            f"{skill} is commonly needed at the {startup.stage_label} stage",
            "Filling this gap could improve team effectiveness",
        ],
        confidence=confidence_level(70),
        category=InsightCategory.ACTION,
        icon=InsightIcon.USERS,
    )


def _engagement_action(report: SkillGapReport, interest_count: int) -> AIInsight:
    if interest_count <= 0:
        return AIInsight(
            id="action-visibility",
            title="Improve Startup Visibility",
            summary="Consider enhancing your startup profile to attract more talent interest.",
            reasoning=[
                "A detailed description helps talent understand your vision",
                "Listing required skills helps attract relevant candidates",
            ],
            confidence=confidence_level(50),
            category=InsightCategory.ACTION,
            icon=InsightIcon.LIGHTBULB,
        )

    has_gaps = bool(report.missing_skills)
    if has_gaps:
        plural = "s" if interest_count > 1 else ""
        summary = f"Review the {interest_count} interested talent{plural} - some may fill your skill gaps."
    else:
        verb = "talents are" if interest_count > 1 else "talent is"
        summary = f"{interest_count} {verb} interested - consider reaching out to discuss opportunities."
    return AIInsight(
        id="action-engage",
        title="Engage With Interested Talent",
        summary=summary,
        reasoning=[
            "Timely responses improve your startup's reputation",
            "Prioritize candidates who match missing skills"
            if has_gaps
            else "Early conversations help assess culture fit",
        ],
        confidence=confidence_level(80),
        category=InsightCategory.ACTION,
        icon=InsightIcon.SPARKLES,
    )


def _stage_action(startup: Startup, report: SkillGapReport) -> Optional[AIInsight]:
    guidance = STAGE_GUIDANCE.get(startup.stage)
    if not guidance or not report.missing_skills:
        return None

    missing = [s.lower() for s in report.missing_skills]
    priority = next(
        (
            p for p in guidance["priorities"]
            if any(p.lower() in s or s in p.lower() for s in missing)
        ),
        None,
    )
    if priority is None:
        return None

    return AIInsight(
        id="action-stage",
        title="Stage-Aligned Focus",
        summary=(
            f"For {startup.stage_label} startups, {priority.lower()} capabilities "
            f"are often critical."
        ),
        reasoning=[
            f"This aligns with the typical focus at your stage: {guidance['focus']}",
            "Addressing this could accelerate your progress",
        ],
        confidence=confidence_level(60),
        category=InsightCategory.ACTION,
        icon=InsightIcon.TARGET,
    )


def _next_actions(startup: Startup, report: SkillGapReport, interest_count: int) -> list[AIInsight]:
    # Order is hiring, engagement, stage
    candidates = [
        _hire_action(startup, report),
        _engagement_action(report, interest_count),
        _stage_action(startup, report),
    ]
    return [a for a in candidates if a is not None][:MAX_NEXT_ACTIONS]


def _hiring_priority(startup: Startup, report: SkillGapReport) -> Optional[AIInsight]:
    if not report.missing_skills:
        return None

    stage_skills = {s.lower() for s in priority_skills(startup.stage)}
    critical = next(
        (s for s in report.missing_skills if s.lower() in stage_skills),
        report.missing_skills[0],
    )
    role = report.suggested_roles[0] if report.suggested_roles else "specialist"

    return AIInsight(
        id="hiring-priority",
        title="Hiring Priority Suggestion",
        summary=(
            f"Based on your stage and skill gaps, a {role} could be your "
            f"highest-priority addition."
        ),
        reasoning=[
            f"{critical} is a key skill for {startup.stage_label} startups",
            "This role addresses your most significant gap",
            "Prioritizing this hire may have the highest impact on team effectiveness",
        ],
        confidence=confidence_level(65),
        category=InsightCategory.PRIORITY,
        icon=InsightIcon.TRENDING,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def generate_founder_insights(
    startup: Startup,
    interested_skills: Iterable[str] = (),
    interest_count: int = 0,
) -> FounderInsights:
    """Health summary, up to three next actions and a hiring priority for a founder."""
    report = analyze_skill_gap(startup, interested_skills)
    return FounderInsights(
        health_summary=_health_summary(startup, report, interest_count),
        next_actions=_next_actions(startup, report, interest_count),
        hiring_priority=_hiring_priority(startup, report),
    )


def founder_quick_summary(startup: Startup) -> str:
    """One-liner for dashboard cards."""
    report = analyze_skill_gap(startup)
    completion = report.completion_percentage
    if completion >= 80:
        return f"Strong team coverage ({completion}%)"
    if report.missing_skills:
        return f"{completion}% complete - {report.missing_skills[0]} needed"
    return f"{completion}% team completeness"
