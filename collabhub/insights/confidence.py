"""Confidence thresholds shared by every generated insight."""

from __future__ import annotations

from collabhub.models import ConfidenceLevel

CONFIDENCE_THRESHOLDS = {
    ConfidenceLevel.HIGH: 70,
    ConfidenceLevel.MEDIUM: 40,
    ConfidenceLevel.LOW: 0,
}

_LABELS = {
    ConfidenceLevel.HIGH: "High confidence",
    ConfidenceLevel.MEDIUM: "Moderate confidence",
    ConfidenceLevel.LOW: "Based on limited data",
}


def confidence_level(score: float) -> ConfidenceLevel:
    if score >= CONFIDENCE_THRESHOLDS[ConfidenceLevel.HIGH]:
        return ConfidenceLevel.HIGH
    if score >= CONFIDENCE_THRESHOLDS[ConfidenceLevel.MEDIUM]:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


def confidence_label(level: ConfidenceLevel) -> str:
    return _LABELS[ConfidenceLevel(level)]
