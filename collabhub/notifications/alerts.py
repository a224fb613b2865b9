"""Forward abuse alerts to an external webhook."""

from __future__ import annotations

import json
import logging
from typing import Optional

import httpx

from collabhub.config import Config
from collabhub.models import AbuseAlert

logger = logging.getLogger(__name__)


def format_alert_text(alert: AbuseAlert) -> str:
    return (
        f"🚨 {alert.message}: user {alert.user_id_prefix}… hit "
        f"{alert.violation_count}× {alert.violation_type} "
        f"({alert.timestamp.isoformat()})"
    )


def build_alert_payload(alert: AbuseAlert) -> dict:
    return {
        "text": format_alert_text(alert),
        "alert": json.loads(alert.model_dump_json()),
    }


async def post_alert_to_webhook(
    alert: AbuseAlert,
    url: Optional[str] = None,
    dry_run: bool = False,
) -> str:
    """POST one alert to the security webhook. Delivery failures are logged, not raised."""
    payload = build_alert_payload(alert)
    if dry_run:
        return json.dumps(payload, indent=2)

    url = url or Config.SECURITY_WEBHOOK_URL
    if not url:
        logger.debug("No SECURITY_WEBHOOK_URL configured; alert only logged")
        return "Skipped"

    async with httpx.AsyncClient(timeout=10) as client:
        try:
            resp = await client.post(url, json=payload)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Failed to post security alert: %s", e)
            return "Failed"

    return "Posted"


def forward_alert(alert: AbuseAlert, url: Optional[str] = None) -> str:
    """
    Blocking variant of ``post_alert_to_webhook`` for use as a violation
    tracker handler, which runs synchronously inside the check.
    """
    url = url or Config.SECURITY_WEBHOOK_URL
    if not url:
        logger.debug("No SECURITY_WEBHOOK_URL configured; alert only logged")
        return "Skipped"

    with httpx.Client(timeout=10) as client:
        try:
            resp = client.post(url, json=build_alert_payload(alert))
            resp.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Failed to post security alert: %s", e)
            return "Failed"

    return "Posted"
