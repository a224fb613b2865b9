"""Shared test data: a fixed instant, a controllable clock and profile/startup builders."""

from datetime import datetime, timedelta, timezone

from collabhub.models import Profile, Startup, UserRole

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, start: datetime = NOW) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def make_profile(skills=None, **overrides) -> Profile:
    data = {
        "id": "talent-0001-aaaa",
        "full_name": "Alice Smith",
        "role": UserRole.TALENT,
        "skills": skills or [],
        "created_at": NOW - timedelta(days=1),
    }
    data.update(overrides)
    return Profile(**data)


def make_startup(stage="mvp", founder_skills=None, **overrides) -> Startup:
    data = {
        "id": "startup-1",
        "name": "LedgerLoop",
        "stage": stage,
        "industry": "Fintech",
        "description": "Bookkeeping autopilot for small shops",
        "founder": Profile(
            id="founder-0001-bbbb",
            full_name="Bob Jones",
            role=UserRole.FOUNDER,
            skills=founder_skills or [],
            created_at=NOW - timedelta(days=200),
        ),
    }
    data.update(overrides)
    return Startup(**data)
