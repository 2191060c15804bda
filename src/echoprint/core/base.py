"""Shared vocabulary — risk levels, signal severities, and the detection signal record."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class RiskLevel(StrEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class Severity(StrEnum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SignalType(StrEnum):
    DOMAIN = "domain"
    SCRIPT = "script"
    COOKIE = "cookie"
    API = "api"
    FINGERPRINT = "fingerprint"
    STORAGE = "storage"


class DetectionSignal(BaseModel):
    """One unit of evidence that a tracking indicator is (or is not) present."""

    model_config = ConfigDict(frozen=True)

    type: SignalType
    name: str
    found: bool
    severity: Severity
    description: str
