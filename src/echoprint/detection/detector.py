"""Target detection engine — score every catalog profile and roll up the verdict.

Runs are pure functions of (catalog, bundle, page context): nothing is cached
between calls and no input is mutated, so concurrent runs need no coordination.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from echoprint.core.base import DetectionSignal, RiskLevel
from echoprint.core.scoring import (
    DETECTION_THRESHOLD,
    HIGH_SCORE_THRESHOLD,
    MAX_SCORE,
    SURFACING_CONFIDENCE_THRESHOLD,
    calculate_overall_risk,
    compute_confidence,
    compute_risk_score,
)
from echoprint.detection.evaluators import EVALUATORS
from echoprint.detection.recommendations import generate_recommendations
from echoprint.detection.results import FullDetectionResult, TargetDetectionResult
from echoprint.signals.bundle import PageContext, SignalBundle
from echoprint.targets.profile import AdversaryProfile
from echoprint.targets.registry import get_all_profiles, get_target_profile

logger = logging.getLogger(__name__)


def collect_signals(
    profile: AdversaryProfile,
    bundle: SignalBundle,
    page_context: PageContext | None = None,
) -> list[DetectionSignal]:
    """Run every evaluator and concatenate their signals in evaluator order."""
    signals: list[DetectionSignal] = []
    for evaluator in EVALUATORS:
        signals.extend(evaluator(profile, bundle, page_context))
    return signals


def score_profile(
    profile: AdversaryProfile,
    bundle: SignalBundle,
    page_context: PageContext | None = None,
) -> TargetDetectionResult:
    """Combine all evidence for one profile into a scored, explained result."""
    signals = collect_signals(profile, bundle, page_context)
    found = [s for s in signals if s.found]

    risk_score = compute_risk_score(signals)
    confidence = compute_confidence(len(found), len(signals))

    logger.debug(
        "%s: %d/%d signals found, risk=%d confidence=%d",
        profile.id,
        len(found),
        len(signals),
        risk_score,
        confidence,
    )

    return TargetDetectionResult(
        profile=profile,
        detected=risk_score >= DETECTION_THRESHOLD,
        confidence=confidence,
        signals=found,
        risk_score=risk_score,
        recommendations=generate_recommendations(profile, signals),
    )


def is_surfaced(result: TargetDetectionResult) -> bool:
    """Detected profiles are always surfaced; borderline ones above the confidence bar too."""
    return result.detected or result.confidence > SURFACING_CONFIDENCE_THRESHOLD


def detect_all(
    bundle: SignalBundle,
    page_context: PageContext | None = None,
    catalog: Sequence[AdversaryProfile] | None = None,
) -> FullDetectionResult:
    """Score every profile in catalog order, keep the surfaced ones, and rank them.

    Uses the configured catalog unless *catalog* is given.
    """
    profiles = get_all_profiles() if catalog is None else catalog

    results = [
        result
        for result in (score_profile(p, bundle, page_context) for p in profiles)
        if is_surfaced(result)
    ]
    # list.sort is stable, so equal scores keep catalog order
    results.sort(key=lambda r: r.risk_score, reverse=True)

    total_risk_score = min(MAX_SCORE, sum(r.risk_score for r in results))
    overall_risk = calculate_overall_risk(total_risk_score, results)

    critical_targets = [
        r.profile
        for r in results
        if r.risk_score >= HIGH_SCORE_THRESHOLD or r.profile.risk_level == RiskLevel.CRITICAL
    ]
    all_signals = [signal for r in results for signal in r.signals]

    logger.debug(
        "Surfaced %d of %d profiles, total=%d overall=%s",
        len(results),
        len(profiles),
        total_risk_score,
        overall_risk,
    )

    return FullDetectionResult(
        results=results,
        overall_risk=overall_risk,
        total_risk_score=total_risk_score,
        critical_targets=critical_targets,
        all_signals=all_signals,
    )


def detect_one(
    bundle: SignalBundle,
    profile_id: str,
    catalog: Sequence[AdversaryProfile] | None = None,
) -> TargetDetectionResult | None:
    """Re-check a single profile without page context. Unknown ids return None."""
    profile = get_target_profile(profile_id, catalog)
    if profile is None:
        logger.debug("No profile with id %r", profile_id)
        return None
    return score_profile(profile, bundle)
