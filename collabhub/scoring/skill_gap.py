"""Stage-driven skill gap analysis — which needed skills a team has and lacks."""

from __future__ import annotations

from collections.abc import Iterable

from collabhub.models import SkillGapReport, Startup, StartupStage


# ---------------------------------------------------------------------------
# Lookup tables
# ---------------------------------------------------------------------------

# Skills typically needed at each stage, in priority order
STAGE_SKILL_REQUIREMENTS: dict[str, list[str]] = {
    StartupStage.IDEA.value: ["Product Management", "UI/UX Design"],
    StartupStage.MVP.value: ["React", "TypeScript", "UI/UX Design", "Product Management"],
    StartupStage.EARLY_STAGE.value: ["Marketing", "Sales", "DevOps", "Product Management"],
    StartupStage.GROWTH.value: ["Marketing", "Sales", "Data Science", "Operations", "Finance"],
    StartupStage.SCALING.value: ["Operations", "Finance", "Legal", "DevOps", "Business Development"],
}

# First entry is the primary role suggested for a missing skill
SKILL_ROLE_MAP: dict[str, list[str]] = {
    "UI/UX Design": ["UI/UX Designer", "Product Designer"],
    "Product Management": ["Product Manager", "Head of Product"],
    "Marketing": ["Marketing Lead", "Growth Marketer"],
    "Sales": ["Sales Lead", "Business Development"],
    "Finance": ["CFO", "Finance Lead"],
    "Legal": ["Legal Counsel", "Compliance Officer"],
    "DevOps": ["DevOps Engineer", "SRE"],
    "Machine Learning": ["ML Engineer", "AI Specialist"],
    "Data Science": ["Data Scientist", "Analytics Lead"],
    "Mobile Development": ["Mobile Developer", "iOS/Android Engineer"],
    "Cloud Computing": ["Cloud Architect", "Infrastructure Engineer"],
    "Blockchain": ["Blockchain Developer", "Web3 Engineer"],
    "Healthcare": ["Healthcare Specialist", "Clinical Advisor"],
    "Operations": ["Operations Manager", "COO"],
    "Business Development": ["BD Lead", "Partnership Manager"],
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _dedupe(values: Iterable[str]) -> list[str]:
    """Drop case-insensitive duplicates, keeping the first spelling seen."""
    seen: set[str] = set()
    unique = []
    for value in values:
        key = value.strip().lower()
        if not key or key in seen:
            continue
        seen.add(key)
        unique.append(value)
    return unique


def _uncovered(required: list[str], have: Iterable[str]) -> list[str]:
    have_keys = {s.strip().lower() for s in have}
    return [skill for skill in required if skill.lower() not in have_keys]


def percentage(covered: int, total: int) -> int:
    """Rounded coverage percentage; no requirements counts as fully covered."""
    if total <= 0:
        return 100
    covered = max(0, min(covered, total))
    # Half-up rounding, not banker's rounding
    return int(100 * covered / total + 0.5)


def priority_skills(stage: str) -> list[str]:
    """The stage's required skills in priority order (empty for unknown stages)."""
    return list(STAGE_SKILL_REQUIREMENTS.get(stage, []))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def analyze_skill_gap(
    startup: Startup,
    candidate_skills: Iterable[str] = (),
) -> SkillGapReport:
    """
    Compare the skills a startup's stage calls for against the skills the
    founder and any supplied candidates bring.
    """
    required = _dedupe(STAGE_SKILL_REQUIREMENTS.get(startup.stage, []))

    founder_skills = startup.founder.skills if startup.founder else []
    team = _dedupe([*founder_skills, *candidate_skills])

    missing = _uncovered(required, team)
    completion = percentage(len(required) - len(missing), len(required))

    roles = []
    for skill in missing:
        mapped = SKILL_ROLE_MAP.get(skill)
        if mapped:
            roles.append(mapped[0])

    return SkillGapReport(
        required_skills=required,
        team_skills=team,
        missing_skills=missing,
        completion_percentage=completion,
        suggested_roles=_dedupe(roles),
        stage_based_recommendations=_uncovered(priority_skills(startup.stage), team),
    )


def talent_fills_skill_gap(
    talent_skills: Iterable[str],
    startup: Startup,
) -> tuple[bool, list[str]]:
    """Return whether the talent covers any of the founder-only gaps, and which."""
    missing = analyze_skill_gap(startup).missing_skills
    matched = matched_skills(talent_skills, missing)
    return bool(matched), matched


def matched_skills(talent_skills: Iterable[str], targets: list[str]) -> list[str]:
    """Entries of ``targets`` the talent has, in ``targets`` order."""
    talent_keys = {s.strip().lower() for s in talent_skills}
    return [skill for skill in targets if skill.lower() in talent_keys]


def completion_message(completion_percentage: int, suggested_roles: list[str]) -> str:
    if completion_percentage >= 100:
        return "Your team has strong skill coverage. You're well-positioned!"
    if completion_percentage >= 80:
        return "Your team looks well-rounded. You might consider specialized skills as you grow."
    if completion_percentage >= 60:
        next_role = suggested_roles[0] if suggested_roles else "a specialist"
        return f"Good progress! Our insights suggest {next_role} could help accelerate your goals."
    if completion_percentage >= 40:
        return "Your core team is forming. Consider which gaps matter most to you."
    return "Early stage! Focus on what feels most critical for your vision."
