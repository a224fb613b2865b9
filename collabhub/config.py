"""Environment-based configuration for the decision-support engine."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Config:
    """Central configuration — reads from environment variables."""

    # --- Rate limiting ---
    RATE_LIMIT_WINDOW_SECONDS: int = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "3600"))

    # --- Abuse detection ---
    ABUSE_THRESHOLD: int = int(os.getenv("ABUSE_THRESHOLD", "5"))
    ABUSE_WINDOW_SECONDS: int = int(os.getenv("ABUSE_WINDOW_SECONDS", "300"))
    ABUSE_FLAG_TTL_SECONDS: int = int(os.getenv("ABUSE_FLAG_TTL_SECONDS", "3600"))

    # --- Optional ---
    SECURITY_WEBHOOK_URL: str = os.getenv("SECURITY_WEBHOOK_URL", "")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @classmethod
    def validate(cls) -> list[str]:
        """Return a list of config problems (empty when usable)."""
        problems = []
        for key in (
            "RATE_LIMIT_WINDOW_SECONDS",
            "ABUSE_THRESHOLD",
            "ABUSE_WINDOW_SECONDS",
            "ABUSE_FLAG_TTL_SECONDS",
        ):
            if getattr(cls, key) <= 0:
                problems.append(f"{key} must be positive")
        if cls.LOG_LEVEL not in _LOG_LEVELS:
            problems.append(f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}")
        return problems
