"""Recommendation generator — countermeasure, signal, and platform advisories."""

from __future__ import annotations

from collections.abc import Iterable

from echoprint.core.base import DetectionSignal, Severity
from echoprint.core.scoring import RECOMMENDATION_LIMIT
from echoprint.targets.profile import AdversaryProfile

# Fixed advice for the shipped catalog entries, keyed by profile id
PROFILE_ADVISORIES: dict[str, tuple[str, ...]] = {
    "aliexpress": (
        "AliExpress transfers data to China without consent; use a VPN",
        "Disable WebRTC to prevent IP address leaks",
    ),
    "amazon": (
        "Sign out of Amazon before browsing other sites to limit cross-site attribution",
        "Turn off interest-based ads in your Amazon advertising preferences",
    ),
    "facebook": (
        "Install Mozilla's Facebook Container extension for isolation",
        "Use uBlock Origin with Facebook filter lists",
    ),
    "google": (
        "Open Google Account > Data & privacy and turn off activity tracking",
        "Use alternatives such as DuckDuckGo or Startpage",
    ),
    "tiktok": (
        "TikTok requests broad permissions; restrict its access",
        "Deny TikTok access to the clipboard and device sensors",
    ),
}


def _countermeasure_advice(profile: AdversaryProfile) -> list[str]:
    advice: list[str] = []
    measures = profile.countermeasures

    if measures.use_container:
        advice.append(f"Use a Firefox Container to isolate {profile.name}")
    if measures.block_domains:
        domains = ", ".join(profile.tracking_infra.primary_domains[:3])
        advice.append(f"Block domains: {domains}")
    if measures.clear_cookies:
        advice.append(f"Clear {profile.name} cookies regularly")
    if measures.spoof_fingerprint:
        advice.append(f"Consider fingerprint spoofing to protect against {profile.name}")

    return advice


def generate_recommendations(
    profile: AdversaryProfile, signals: Iterable[DetectionSignal]
) -> list[str]:
    """Build advice in generation order, truncated to the recommendation limit.

    Order: countermeasures (container, domain block, cookie clearing,
    fingerprint spoofing), then a summary of found critical signals, then
    the profile's fixed advisories.
    """
    recommendations = _countermeasure_advice(profile)

    critical = [s.name for s in signals if s.found and s.severity == Severity.CRITICAL]
    if critical:
        recommendations.append(f"Critical trackers detected: {', '.join(critical)}")

    recommendations.extend(PROFILE_ADVISORIES.get(profile.id, ()))

    return recommendations[:RECOMMENDATION_LIMIT]
