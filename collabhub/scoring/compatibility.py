"""Candidate ↔ startup compatibility — score, strengths, risks and role fit."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from collabhub.models import (
    CompatibilityAnalysis,
    MatchQuality,
    Profile,
    QuickFit,
    RecommendedRole,
    SkillGapReport,
    Startup,
    StartupStage,
)
from collabhub.scoring.skill_gap import (
    analyze_skill_gap,
    matched_skills,
    percentage,
    talent_fills_skill_gap,
)


DEFAULT_BASE_SCORE = 50
GAP_FILL_POINTS = 10      # per missing skill the candidate covers
RELEVANCE_POINTS = 5      # per required skill the candidate has (stacks with the above)

STAGE_APPEAL: dict[str, str] = {
    StartupStage.IDEA.value: "Early-stage opportunity to shape the product vision from scratch",
    StartupStage.MVP.value: "Hands-on building phase with direct product impact",
    StartupStage.EARLY_STAGE.value: "Growth-focused environment with expanding responsibilities",
    StartupStage.GROWTH.value: "Scaling challenges with structured processes",
    StartupStage.SCALING.value: "Enterprise-level operations with established systems",
}


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def match_quality(score: float) -> MatchQuality:
    """Four-tier quality label used everywhere a compatibility score is shown."""
    if score >= 80:
        return MatchQuality(label="Excellent Match", emoji="🌟")
    if score >= 60:
        return MatchQuality(label="Good Match", emoji="✅")
    if score >= 40:
        return MatchQuality(label="Moderate Match", emoji="⚠️")
    return MatchQuality(label="Weak Match", emoji="❌")


def clamp_score(value: float) -> int:
    value = max(0.0, min(100.0, float(value)))
    return int(value + 0.5)


def compute_fit_score(
    candidate_skills: Iterable[str],
    report: SkillGapReport,
    base_match_score: Optional[float] = None,
) -> int:
    """
    Base score plus a bonus per filled gap and a bonus per generally
    relevant skill. A skill that is both missing and required earns both.
    """
    skills = list(candidate_skills)
    base = DEFAULT_BASE_SCORE if base_match_score is None else base_match_score
    filled = matched_skills(skills, report.missing_skills)
    relevant = matched_skills(skills, report.required_skills)
    return clamp_score(base + GAP_FILL_POINTS * len(filled) + RELEVANCE_POINTS * len(relevant))


def industry_overlap(skills: Iterable[str], industry: str) -> bool:
    industry = industry.strip().lower()
    if not industry:
        return False
    for skill in skills:
        skill = skill.strip().lower()
        if skill and (skill in industry or industry in skill):
            return True
    return False


# ---------------------------------------------------------------------------
# Narrative pieces
# ---------------------------------------------------------------------------

def _fit_summary(
    score: int,
    name: str,
    startup: Startup,
    covered: list[str],
    remaining: list[str],
) -> str:
    startup_name = startup.name or "this startup"
    if score >= 80:
        return (
            f"Excellent match. {name} brings {len(covered)} of the skills the team is missing "
            f"and shows strong alignment with the {startup.stage_label} stage requirements."
        )
    if score >= 60:
        caveat = (
            f"the team still needs {' and '.join(remaining[:2])}" if remaining else "some gaps remain"
        )
        plural = "" if len(covered) == 1 else "s"
        return (
            f"Good match with some considerations. {name} covers {len(covered)} needed "
            f"skill{plural} and could contribute meaningfully to {startup_name}. However, {caveat}."
        )
    if score >= 40:
        advice = (
            f"prioritize candidates with {remaining[0]}" if remaining else "evaluate other candidates"
        )
        return (
            f"Moderate match. While {name} has relevant skills, the fit with {startup_name}'s "
            f"current needs is limited. The team should {advice}."
        )
    gaps = " and ".join(remaining[:2]) or "its core areas"
    return (
        f"Weak match. {name}'s skill set does not align well with {startup_name}'s current "
        f"requirements. Consider other candidates who can fill the gaps in {gaps}."
    )


def _team_impact(name: str, report: SkillGapReport, covered: list[str]) -> str:
    if not covered:
        return (
            f"While not a direct skill match, {name} could bring fresh perspectives "
            f"and broaden what the team can take on."
        )
    current = report.completion_percentage
    projected = percentage(report.covered_count + len(covered), report.total_required)
    return (
        f"Adding {name} would lift team skill coverage from {current}% to {projected}%, "
        f"closing {len(covered)} of {len(report.missing_skills)} open gap(s)."
    )


def _optional_insight(score: int, remaining: list[str]) -> str:
    if remaining and score >= 50:
        return (
            f"Consider pairing this hire with a {remaining[0]} specialist within 3 months "
            f"to complete the core team composition."
        )
    if score >= 80:
        return (
            "Move quickly - strong candidates get multiple offers. Consider offering equity "
            "acceleration or a co-founder title to secure commitment."
        )
    if score < 40:
        return (
            "Before hiring, clearly define the top 2-3 skill gaps and create specific job "
            "descriptions targeting those competencies."
        )
    return (
        "Consider a trial project or consulting engagement before full commitment to "
        "validate working style compatibility."
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def score_compatibility(
    candidate: Profile,
    startup: Startup,
    existing_team_skills: Iterable[str] = (),
    base_match_score: Optional[float] = None,
) -> CompatibilityAnalysis:
    """Score how well ``candidate`` fits ``startup`` given the current team."""
    report = analyze_skill_gap(startup, existing_team_skills)
    name = candidate.full_name or "This candidate"

    covered = matched_skills(candidate.skills, report.missing_skills)
    remaining = [skill for skill in report.missing_skills if skill not in covered]
    score = compute_fit_score(candidate.skills, report, base_match_score)

    strengths = []
    if covered:
        plural = "s" if len(covered) > 1 else ""
        strengths.append(f"Fills critical skill gap{plural}: {', '.join(covered)}")
    appeal = STAGE_APPEAL.get(startup.stage)
    if appeal:
        strengths.append(appeal)
    if industry_overlap(candidate.skills, startup.industry):
        strengths.append(f"Skills align with the {startup.industry} industry")

    risks = [f"{skill} is still missing from the team" for skill in remaining]

    title = report.suggested_roles[0] if report.suggested_roles else "Team Member"
    role = RecommendedRole(
        title=title,
        responsibility=(
            f"Own the {title} function and help the team execute at the "
            f"{startup.stage_label} stage"
        ),
    )

    return CompatibilityAnalysis(
        compatibility_score=score,
        fit_summary=_fit_summary(score, name, startup, covered, remaining),
        strengths=strengths,
        risks=risks,
        recommended_role=role,
        skill_gaps_covered=covered,
        skill_gaps_remaining=remaining,
        team_impact_prediction=_team_impact(name, report, covered),
        optional_insight=_optional_insight(score, remaining),
        quality=match_quality(score),
    )


def talent_quick_fit(
    candidate: Profile,
    startup: Startup,
    match_score: Optional[float] = None,
) -> QuickFit:
    """Short label for startup cards."""
    fills, matched = talent_fills_skill_gap(candidate.skills, startup)
    if fills:
        plural = "s" if len(matched) > 1 else ""
        return QuickFit(label=f"Matches {len(matched)} skill need{plural}", fills=True, skills=matched)
    if match_score is not None and match_score >= 70:
        return QuickFit(label="Strong match")
    return QuickFit(label="Explore opportunity")
