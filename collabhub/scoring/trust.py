"""Composite trust score — five capped, independently computed components."""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from typing import Optional

from collabhub.models import Profile, TrustBadge, TrustBreakdownItem, TrustScore, utc_now


# ---------------------------------------------------------------------------
# Component caps (sum to 100)
# ---------------------------------------------------------------------------

PROFILE_MAX = 30
LINKS_MAX = 20
AGE_MAX = 20
ACTIVITY_MAX = 15
ENDORSEMENTS_MAX = 15

COMPLETE_PROFILE_THRESHOLD = 80
ACTIVE_WINDOW = timedelta(days=7)
POINTS_PER_ENDORSEMENT = 3


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps from the repository are UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def derive_profile_completeness(profile: Profile) -> int:
    """Percentage of the four basic profile signals that are filled in."""
    signals = [
        len(profile.full_name or "") > 2,
        len(profile.bio or "") > 10,
        bool(profile.skills),
        bool(profile.avatar_url),
    ]
    return round(100 * sum(signals) / len(signals))


def _completeness(profile: Profile) -> int:
    if profile.profile_completeness is not None:
        return profile.profile_completeness
    return derive_profile_completeness(profile)


def account_age_days(profile: Profile, now: datetime) -> float:
    return (_as_utc(now) - _as_utc(profile.created_at)).total_seconds() / 86400


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------

def _profile_points(profile: Profile) -> int:
    completeness = _completeness(profile)
    if completeness >= COMPLETE_PROFILE_THRESHOLD:
        return PROFILE_MAX
    return math.floor(completeness * 0.3)


def _link_points(profile: Profile) -> int:
    points = 0
    if profile.github_url:
        points += 10
    if profile.linkedin_url:
        points += 10
    return points


def _age_points(profile: Profile, now: datetime) -> int:
    days = account_age_days(profile, now)
    points = 0
    if days >= 30:
        points += 10
    if days >= 90:
        points += 10
    return points


def _activity_points(profile: Profile, now: datetime) -> int:
    if profile.last_active_at is None:
        return 0
    # Future timestamps are clock skew, not activity
    if timedelta(0) <= _as_utc(now) - _as_utc(profile.last_active_at) <= ACTIVE_WINDOW:
        return ACTIVITY_MAX
    return 0


def _endorsement_points(profile: Profile) -> int:
    return min(ENDORSEMENTS_MAX, profile.endorsement_count * POINTS_PER_ENDORSEMENT)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def trust_label(total: int) -> str:
    if total >= 80:
        return "Highly Trusted"
    if total >= 60:
        return "Trusted"
    if total >= 40:
        return "Building Trust"
    return "New Member"


def calculate_trust_score(profile: Profile, now: Optional[datetime] = None) -> TrustScore:
    """Score a profile 0-100 with an itemized breakdown. Does not mutate the profile."""
    now = now or utc_now()
    breakdown = [
        TrustBreakdownItem(label="Profile", points=_profile_points(profile), max=PROFILE_MAX),
        TrustBreakdownItem(label="Linked Accounts", points=_link_points(profile), max=LINKS_MAX),
        TrustBreakdownItem(label="Account Age", points=_age_points(profile, now), max=AGE_MAX),
        TrustBreakdownItem(label="Activity", points=_activity_points(profile, now), max=ACTIVITY_MAX),
        TrustBreakdownItem(label="Endorsements", points=_endorsement_points(profile), max=ENDORSEMENTS_MAX),
    ]
    total = sum(item.points for item in breakdown)
    return TrustScore(total=total, label=trust_label(total), breakdown=breakdown)


def earned_badges(profile: Profile, now: Optional[datetime] = None) -> list[TrustBadge]:
    """Profile badges in display order."""
    now = now or utc_now()
    badges = []
    if _completeness(profile) >= 75:
        badges.append(TrustBadge(
            id="verified",
            label="Verified",
            tooltip="Profile is mostly complete with verified information",
        ))
    if account_age_days(profile, now) >= 7:
        badges.append(TrustBadge(id="active", label="Member", tooltip="Member for at least 7 days"))
    if len(profile.skills) >= 3:
        badges.append(TrustBadge(id="skilled", label="Skilled", tooltip="Has listed 3 or more skills"))
    if calculate_trust_score(profile, now).total >= 70:
        badges.append(TrustBadge(
            id="trusted",
            label="Trusted",
            tooltip="High trust score based on profile signals",
        ))
    return badges
