"""Scoring engine — weighted risk scores, confidence, and the overall risk verdict."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, NotRequired, TypedDict

import yaml

from echoprint.core.base import DetectionSignal, RiskLevel, SignalType
from echoprint.core.paths import SCORING_PATH

if TYPE_CHECKING:
    from echoprint.detection.results import TargetDetectionResult


class _RiskTier(TypedDict):
    level: str
    min_total: int
    min_critical_profiles: NotRequired[int]
    min_high_scores: NotRequired[int]
    color: str
    description: str


def _load_scoring() -> dict:
    with open(SCORING_PATH) as f:
        return yaml.safe_load(f)


_SCORING = _load_scoring()

SIGNAL_WEIGHTS: dict[SignalType, int] = {
    SignalType(name): int(points) for name, points in _SCORING["signal_weights"].items()
}
DOMAIN_WEIGHT = SIGNAL_WEIGHTS[SignalType.DOMAIN]
SCRIPT_WEIGHT = SIGNAL_WEIGHTS[SignalType.SCRIPT]
FINGERPRINT_WEIGHT = SIGNAL_WEIGHTS[SignalType.FINGERPRINT]
STORAGE_WEIGHT = SIGNAL_WEIGHTS[SignalType.STORAGE]

MAX_SCORE: int = _SCORING["max_score"]
DETECTION_THRESHOLD: int = _SCORING["thresholds"]["detected"]
SURFACING_CONFIDENCE_THRESHOLD: int = _SCORING["thresholds"]["surfaced_confidence"]
HIGH_SCORE_THRESHOLD: int = _SCORING["thresholds"]["high_score"]
STORAGE_KEY_LIMIT: int = _SCORING["limits"]["storage_keys"]
RECOMMENDATION_LIMIT: int = _SCORING["limits"]["recommendations"]

_RISK_TIERS: list[_RiskTier] = _SCORING["risk_tiers"]


def compute_risk_score(signals: Iterable[DetectionSignal]) -> int:
    """Sum the per-type weights of every found signal, clamped to [0, MAX_SCORE]."""
    score = sum(SIGNAL_WEIGHTS.get(s.type, 0) for s in signals if s.found)
    return max(0, min(MAX_SCORE, score))


def compute_confidence(found: int, total: int) -> int:
    """Percentage of signals found, rounded half-up. Zero signals means zero confidence."""
    if total <= 0:
        return 0
    return (200 * found + total) // (2 * total)


def calculate_overall_risk(
    total_score: int, results: Sequence[TargetDetectionResult]
) -> RiskLevel:
    """Pick the first risk tier whose condition holds for the surfaced results."""
    critical_count = sum(1 for r in results if r.profile.risk_level == RiskLevel.CRITICAL)
    high_score_count = sum(1 for r in results if r.risk_score >= HIGH_SCORE_THRESHOLD)

    for tier in _RISK_TIERS:
        if _tier_matches(tier, total_score, critical_count, high_score_count):
            return RiskLevel(tier["level"])
    return RiskLevel.LOW


def _tier_matches(
    tier: _RiskTier, total_score: int, critical_count: int, high_score_count: int
) -> bool:
    if total_score >= tier["min_total"]:
        return True
    if "min_critical_profiles" in tier and critical_count >= tier["min_critical_profiles"]:
        return True
    return "min_high_scores" in tier and high_score_count >= tier["min_high_scores"]


def _tier_for(level: RiskLevel) -> _RiskTier | None:
    for tier in _RISK_TIERS:
        if tier["level"] == level:
            return tier
    return None


def get_risk_description(level: RiskLevel) -> str:
    """Return a one-line human description of an overall risk level."""
    tier = _tier_for(level)
    return tier["description"] if tier else str(level)


def get_risk_color(level: RiskLevel) -> str:
    """Return a Rich color name for a risk level."""
    tier = _tier_for(level)
    return tier["color"] if tier else "dim"
