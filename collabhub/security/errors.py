"""Rate-limit error and client-safe error messages."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Optional

from collabhub.models import utc_now

GENERIC_ERROR = "An error occurred. Please try again."
DUPLICATE_ERROR = "This action has already been performed."
SESSION_ERROR = "Your session has expired. Please sign in again."

# Messages that are safe to show verbatim
SAFE_MESSAGES = [
    "Email already registered",
    "Invalid credentials",
    "Session expired",
    "Network error",
    "Request timeout",
    "Too many requests",
    "Unauthorized",
    "Forbidden",
    "Not found",
    "Already exists",
    "Connection already exists",
]


class RateLimitError(Exception):
    """Raised when a caller enforces a denied rate-limit check."""

    def __init__(self, reset_at: datetime, now: Optional[datetime] = None) -> None:
        super().__init__("Too many requests. Please try again later.")
        self.reset_at = reset_at
        now = now or utc_now()
        self.retry_after = max(0, math.ceil((reset_at - now).total_seconds()))


def normalize_error(error: object) -> str:
    """Map any error to a message that leaks no internal details."""
    if not isinstance(error, Exception):
        return GENERIC_ERROR

    message = str(error)
    if "duplicate key" in message or "23505" in message:
        return DUPLICATE_ERROR
    if "JWT" in message or "token" in message:
        return SESSION_ERROR

    lowered = message.lower()
    for safe in SAFE_MESSAGES:
        if safe.lower() in lowered:
            return safe
    return GENERIC_ERROR
