"""Per-user, per-action hourly quotas with abuse escalation."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from datetime import timedelta
from typing import Optional

from collabhub.config import Config
from collabhub.models import (
    AbuseAlert,
    RateLimitRecord,
    RateLimitResult,
    SecurityEventType,
    ViolationRecord,
    utc_now,
)
from collabhub.security.store import Clock, InMemoryRateLimitStore, RateLimitStore

logger = logging.getLogger(__name__)

# Requests per window, per user
RATE_LIMITS: dict[str, int] = {
    "connection_request": 20,
    "message_send": 100,
    "endorsement": 10,
    "startup_interest": 30,
    "report": 5,
    "pitch_report": 10,
}

AlertHandler = Callable[[AbuseAlert], None]


def _user_prefix(user_id: str) -> str:
    # Never log full user ids
    return user_id[:8]


def log_alert(alert: AbuseAlert) -> None:
    logger.error("[SECURITY ALERT] %s", alert.model_dump_json())


# ---------------------------------------------------------------------------
# Violation tracking
# ---------------------------------------------------------------------------

class ViolationTracker:
    """
    Counts violations per ``user:type`` inside a short window and raises a
    single alert when the threshold is reached. The counter then restarts,
    so a continuing burst needs another full threshold to alert again.
    """

    def __init__(
        self,
        store: RateLimitStore,
        clock: Clock = utc_now,
        threshold: Optional[int] = None,
        window: Optional[timedelta] = None,
        flag_ttl: Optional[timedelta] = None,
        alert_handlers: Optional[list[AlertHandler]] = None,
    ) -> None:
        self.store = store
        self.clock = clock
        self.threshold = threshold if threshold is not None else Config.ABUSE_THRESHOLD
        self.window = window or timedelta(seconds=Config.ABUSE_WINDOW_SECONDS)
        self.flag_ttl = flag_ttl or timedelta(seconds=Config.ABUSE_FLAG_TTL_SECONDS)
        self.alert_handlers: list[AlertHandler] = (
            list(alert_handlers) if alert_handlers is not None else [log_alert]
        )

    def add_alert_handler(self, handler: AlertHandler) -> None:
        self.alert_handlers.append(handler)

    def record(self, user_id: str, violation_type: str) -> Optional[AbuseAlert]:
        """Count one violation. Returns the alert if this one crossed the threshold."""
        if not user_id:
            return None
        key = f"violation:{user_id}:{violation_type}"

        while True:
            now = self.clock()
            current = self.store.get(key)

            # A record at the threshold has already alerted and counts as reset
            fresh = (
                current is None
                or current.count >= self.threshold
                or now - current.first_violation_at > self.window
            )
            if fresh:
                new = ViolationRecord(count=1, first_violation_at=now)
            else:
                new = current.model_copy(update={"count": current.count + 1})

            if not self.store.compare_and_swap(key, current, new, self.window):
                continue

            if new.count >= self.threshold:
                return self._alert(user_id, violation_type, new.count)
            return None

    def is_flagged(self, user_id: str) -> bool:
        if not user_id:
            return False
        flag = self.store.get(f"flagged:{user_id}")
        return flag is not None and self.clock() - flag.timestamp <= self.flag_ttl

    def _alert(self, user_id: str, violation_type: str, count: int) -> AbuseAlert:
        alert = AbuseAlert(
            user_id_prefix=_user_prefix(user_id),
            violation_type=violation_type,
            violation_count=count,
            timestamp=self.clock(),
        )
        self.store.set(f"flagged:{user_id}", alert, self.flag_ttl)
        for handler in self.alert_handlers:
            try:
                handler(alert)
            except Exception:
                logger.exception("Abuse alert handler %r failed", handler)
        return alert


# ---------------------------------------------------------------------------
# Rate limiting
# ---------------------------------------------------------------------------

class RateLimitGuard:
    """
    Windowed counter keyed by ``user:action``. Every mutation goes through
    the store's compare-and-swap, so concurrent checks on one key can never
    both slip under the limit.
    """

    def __init__(
        self,
        store: Optional[RateLimitStore] = None,
        clock: Clock = utc_now,
        limits: Optional[Mapping[str, int]] = None,
        window: Optional[timedelta] = None,
        tracker: Optional[ViolationTracker] = None,
    ) -> None:
        self.clock = clock
        self.store = store or InMemoryRateLimitStore(clock)
        self.limits = dict(limits if limits is not None else RATE_LIMITS)
        self.window = window or timedelta(seconds=Config.RATE_LIMIT_WINDOW_SECONDS)
        self.tracker = tracker or ViolationTracker(self.store, clock)

    def limit_for(self, action: str) -> Optional[int]:
        return self.limits.get(action)

    def check(self, user_id: Optional[str], action: str) -> RateLimitResult:
        """Count one ``action`` for ``user_id`` and say whether it may proceed."""
        limit = self.limit_for(action)

        # Anonymous callers are not limited
        if not user_id:
            return RateLimitResult(
                allowed=True,
                remaining=limit or 0,
                reset_at=self.clock() + self.window,
            )

        if limit is None or limit < 1:
            logger.warning("No quota configured for action %r; denying", action)
            return RateLimitResult(allowed=False, remaining=0, reset_at=self.clock())

        key = f"ratelimit:{user_id}:{action}"
        while True:
            now = self.clock()
            current = self.store.get(key)

            if current is None or now >= current.window_reset_at:
                new = RateLimitRecord(count=1, window_reset_at=now + self.window)
            elif current.count >= limit:
                self.log_violation(
                    user_id, SecurityEventType.RATE_LIMIT_EXCEEDED.value, action=action
                )
                return RateLimitResult(
                    allowed=False, remaining=0, reset_at=current.window_reset_at
                )
            else:
                new = current.model_copy(update={"count": current.count + 1})

            ttl = new.window_reset_at - now
            if self.store.compare_and_swap(key, current, new, ttl):
                return RateLimitResult(
                    allowed=True,
                    remaining=limit - new.count,
                    reset_at=new.window_reset_at,
                )

    def log_violation(
        self,
        user_id: Optional[str],
        violation_type: str,
        action: Optional[str] = None,
        resource: Optional[str] = None,
    ) -> Optional[AbuseAlert]:
        """Log a sanitized security event and feed it to abuse detection."""
        details = {
            "type": violation_type,
            "action": action,
            "userIdPrefix": _user_prefix(user_id) if user_id else None,
            "resource": resource[:50] if resource else None,
            "timestamp": self.clock().isoformat(),
        }
        logger.warning("[SECURITY] %s", json.dumps(details))

        if not user_id:
            return None
        return self.tracker.record(user_id, violation_type)

    def is_flagged(self, user_id: Optional[str]) -> bool:
        return self.tracker.is_flagged(user_id or "")
