"""Signal evaluators — one independent evidence extractor per indicator category.

Every evaluator has the same shape, ``(profile, bundle, page_context) -> signals``,
and never mutates its inputs. A missing page context means nothing was observed.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from echoprint.core.base import DetectionSignal, Severity, SignalType
from echoprint.core.scoring import STORAGE_KEY_LIMIT
from echoprint.signals.bundle import PageContext, SignalBundle
from echoprint.targets.profile import AdversaryProfile

Evaluator = Callable[[AdversaryProfile, SignalBundle, PageContext | None], list[DetectionSignal]]

# (profile flag, bundle capability that gates it, signal name, severity, description)
# A capability of None means the method is reported whenever the profile declares it.
_FINGERPRINT_METHODS: tuple[tuple[str, str | None, str, Severity, str], ...] = (
    ("canvas", "canvas", "Canvas Fingerprinting", Severity.HIGH, "{} uses canvas fingerprinting"),
    ("webgl", "webgl", "WebGL Fingerprinting", Severity.HIGH, "{} uses WebGL fingerprinting"),
    ("audio", "audio", "Audio Fingerprinting", Severity.MEDIUM, "{} uses audio fingerprinting"),
    ("fonts", None, "Font Enumeration", Severity.MEDIUM, "{} enumerates installed fonts"),
    ("battery", "battery", "Battery API", Severity.MEDIUM, "{} reads the Battery API"),
    ("behavioral", None, "Behavioral Tracking", Severity.HIGH, "{} tracks user behavior"),
)


def _observed(values: Iterable[str], indicator: str) -> bool:
    """Case-sensitive substring match, no normalization."""
    return any(indicator in value for value in values)


def evaluate_domains(
    profile: AdversaryProfile,
    bundle: SignalBundle,
    page_context: PageContext | None = None,
) -> list[DetectionSignal]:
    """One signal per primary domain, then one per third-party tracker."""
    domains = page_context.domains if page_context is not None else ()
    signals: list[DetectionSignal] = []

    for domain in profile.tracking_infra.primary_domains:
        found = _observed(domains, domain)
        signals.append(
            DetectionSignal(
                type=SignalType.DOMAIN,
                name=domain,
                found=found,
                severity=Severity.HIGH if found else Severity.LOW,
                description=(
                    f"Connection to {domain} observed"
                    if found
                    else f"No connection to {domain} observed"
                ),
            )
        )

    for tracker in profile.tracking_infra.third_party_trackers:
        found = _observed(domains, tracker)
        signals.append(
            DetectionSignal(
                type=SignalType.DOMAIN,
                name=tracker,
                found=found,
                severity=Severity.MEDIUM if found else Severity.LOW,
                description=(
                    f"Third-party tracker {tracker} is active"
                    if found
                    else f"Tracker {tracker} not observed"
                ),
            )
        )

    return signals


def evaluate_scripts(
    profile: AdversaryProfile,
    bundle: SignalBundle,
    page_context: PageContext | None = None,
) -> list[DetectionSignal]:
    scripts = page_context.scripts if page_context is not None else ()
    signals: list[DetectionSignal] = []

    for library in profile.tracking_infra.js_libraries:
        found = _observed(scripts, library)
        signals.append(
            DetectionSignal(
                type=SignalType.SCRIPT,
                name=library,
                found=found,
                severity=Severity.CRITICAL if found else Severity.LOW,
                description=(
                    f"Tracking script {library} loaded" if found else f"Script {library} not loaded"
                ),
            )
        )

    return signals


def evaluate_fingerprint_methods(
    profile: AdversaryProfile,
    bundle: SignalBundle,
    page_context: PageContext | None = None,
) -> list[DetectionSignal]:
    """Report each declared method the browser is exposed to.

    Only found signals are produced: a method the profile does not declare, or
    whose capability the bundle reports as unsupported, yields nothing.
    """
    methods = profile.fingerprint_methods
    signals: list[DetectionSignal] = []

    for flag, capability, name, severity, description in _FINGERPRINT_METHODS:
        if not getattr(methods, flag):
            continue
        if capability is not None and not bundle.supports(capability):
            continue
        signals.append(
            DetectionSignal(
                type=SignalType.FINGERPRINT,
                name=name,
                found=True,
                severity=severity,
                description=description.format(profile.name),
            )
        )

    return signals


def evaluate_storage_keys(
    profile: AdversaryProfile,
    bundle: SignalBundle,
    page_context: PageContext | None = None,
) -> list[DetectionSignal]:
    """List the profile's first storage keys as candidates when localStorage is available.

    Key presence is not inspected, so every signal is reported as not found.
    """
    # TODO: match keys against page_context.cookies and page_context.local_storage
    # once collectors report real key names.
    if not bundle.storage.local_storage:
        return []

    return [
        DetectionSignal(
            type=SignalType.STORAGE,
            name=key,
            found=False,
            severity=Severity.MEDIUM,
            description=f"Key {key} may be used by {profile.name}",
        )
        for key in profile.storage_keys[:STORAGE_KEY_LIMIT]
    ]


# Canonical evaluation order; downstream signal ordering follows it.
EVALUATORS: tuple[Evaluator, ...] = (
    evaluate_domains,
    evaluate_scripts,
    evaluate_fingerprint_methods,
    evaluate_storage_keys,
)
