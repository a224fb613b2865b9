"""Talent-facing insights — why a startup may (or may not) be a good fit."""

from __future__ import annotations

from typing import Optional

from collabhub.insights.confidence import confidence_level
from collabhub.models import (
    AIInsight,
    InsightCategory,
    InsightIcon,
    Profile,
    SkillGapReport,
    Startup,
    TalentInsights,
)
from collabhub.scoring.compatibility import STAGE_APPEAL, compute_fit_score, industry_overlap
from collabhub.scoring.skill_gap import analyze_skill_gap, matched_skills, percentage

MAX_REASONS = 4


def _fit_summary(
    startup: Startup,
    report: SkillGapReport,
    matched: list[str],
    fit_score: int,
) -> AIInsight:
    label = startup.stage_label

    if matched:
        skills = " and ".join(matched[:2])
        summary = (
            f"This startup is looking for {skills} - skills that match your profile. "
            f"You could fill a critical team gap."
        )
        reasoning = [
            f"Your {skills} skills align with their current needs",
            f"The team is missing {len(report.missing_skills)} key skill area(s)",
        ]
    elif fit_score >= 60:
        summary = (
            f"Your profile shows good alignment with this {label} startup. "
            f"Consider exploring this opportunity."
        )
        reasoning = ["General skill relevance detected for their stage"]
    else:
        summary = (
            f"This {label} startup may offer learning opportunities, though your current "
            f"skills don't directly match their gaps."
        )
        reasoning = ["This could be a growth opportunity to develop new skills"]

    appeal = STAGE_APPEAL.get(startup.stage)
    if appeal:
        reasoning.append(appeal)
    if startup.industry:
        reasoning.append(f"Operating in the {startup.industry} industry")

    return AIInsight(
        id="fit-summary",
        title="Opportunity Fit",
        summary=summary,
        reasoning=reasoning,
        confidence=confidence_level(fit_score),
        category=InsightCategory.FIT,
        icon=InsightIcon.SPARKLES,
    )


def _why_good_fit(
    candidate: Profile,
    startup: Startup,
    report: SkillGapReport,
    matched: list[str],
) -> list[str]:
    reasons = []
    if matched:
        reasons.append(f"Your {', '.join(matched)} skills match their team needs")
        reasons.append(f"You could help fill {len(matched)} skill gap(s) on their team")

    appeal = STAGE_APPEAL.get(startup.stage)
    if appeal:
        reasons.append(appeal)

    if report.completion_percentage < 80:
        reasons.append("Joining could significantly improve their team readiness")

    if industry_overlap(candidate.skills, startup.industry):
        reasons.append(f"Your background aligns with their {startup.industry} focus")

    if not reasons:
        reasons.append("This could be an opportunity to expand your skill set")
        reasons.append(f"{startup.stage_label} startups offer unique learning experiences")

    return reasons[:MAX_REASONS]


def _impact_prediction(startup: Startup, report: SkillGapReport, matched: list[str]) -> AIInsight:
    current = report.completion_percentage
    projected = percentage(report.covered_count + len(matched), report.total_required)

    if matched and projected > current:
        summary = f"Joining could improve team completeness from {current}% to {projected}%."
        reasoning = [
            f"Your skills would cover {len(matched)} of their {len(report.missing_skills)} gap(s)",
            "This suggests meaningful contribution potential",
        ]
    elif matched:
        summary = "Your skills align with their needs, suggesting strong contribution potential."
        reasoning = [
            "You match skills they're actively seeking",
            "Early team members often have outsized impact",
        ]
    else:
        summary = "While not a direct skill match, you could bring fresh perspectives to the team."
        reasoning = [
            "Diverse skills can strengthen team dynamics",
            "This role might involve learning new technologies",
        ]
    reasoning.append(
        f"At the {startup.stage_label} stage, individual contributions are highly visible"
    )

    return AIInsight(
        id="impact-prediction",
        title="Potential Impact",
        summary=summary,
        reasoning=reasoning,
        confidence=confidence_level(70 if matched else 40),
        category=InsightCategory.IMPACT,
        icon=InsightIcon.TRENDING,
    )


def generate_talent_insights(
    candidate: Profile,
    startup: Startup,
    match_score: Optional[float] = None,
) -> TalentInsights:
    """Fit summary, up to four reasons and an impact prediction for a candidate."""
    report = analyze_skill_gap(startup)
    matched = matched_skills(candidate.skills, report.missing_skills)
    fit_score = compute_fit_score(candidate.skills, report, match_score)

    return TalentInsights(
        fit_summary=_fit_summary(startup, report, matched, fit_score),
        why_good_fit=_why_good_fit(candidate, startup, report, matched),
        impact_prediction=_impact_prediction(startup, report, matched),
    )
