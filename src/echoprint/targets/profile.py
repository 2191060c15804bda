"""Adversary profile schema — a static description of one tracking platform."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from echoprint.core.base import RiskLevel


class TargetCategory(StrEnum):
    ECOMMERCE = "ecommerce"
    SOCIAL = "social"
    ADTECH = "adtech"
    ANALYTICS = "analytics"
    FINANCE = "finance"
    GOVERNMENT = "government"


class TrackingInfra(BaseModel):
    """Network and script indicators, matched as substrings of observed values."""

    model_config = ConfigDict(frozen=True)

    primary_domains: tuple[str, ...] = ()
    third_party_trackers: tuple[str, ...] = ()
    js_libraries: tuple[str, ...] = ()


class FingerprintMethods(BaseModel):
    """Fingerprinting techniques the platform is known to use."""

    model_config = ConfigDict(frozen=True)

    canvas: bool = False
    webgl: bool = False
    audio: bool = False
    fonts: bool = False
    sensors: bool = False
    battery: bool = False
    webrtc: bool = False
    behavioral: bool = False


class Countermeasures(BaseModel):
    """Mitigations recommended against the platform."""

    model_config = ConfigDict(frozen=True)

    block_domains: bool = False
    spoof_fingerprint: bool = False
    clear_cookies: bool = False
    use_container: bool = False


class KnownVulnerability(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    description: str
    status: str


class AdversaryProfile(BaseModel):
    """A tracking platform's known infrastructure and behavior.

    Profiles are immutable once loaded. Every list may be empty;
    only ``region_specific`` and ``data_transfer_destination`` may be None.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    risk_level: RiskLevel
    category: TargetCategory
    tracking_infra: TrackingInfra = Field(default_factory=TrackingInfra)
    fingerprint_methods: FingerprintMethods = Field(default_factory=FingerprintMethods)
    storage_keys: tuple[str, ...] = ()
    api_endpoints: tuple[str, ...] = ()
    detection_triggers: tuple[str, ...] = ()
    known_vulnerabilities: tuple[KnownVulnerability, ...] = ()
    countermeasures: Countermeasures = Field(default_factory=Countermeasures)
    region_specific: tuple[str, ...] | None = None
    data_transfer_destination: tuple[str, ...] | None = None
