"""Detection results — one per profile per run, plus the run-wide roll-up."""

from __future__ import annotations

from pydantic import BaseModel, Field

from echoprint.core.base import DetectionSignal, RiskLevel
from echoprint.targets.profile import AdversaryProfile


class TargetDetectionResult(BaseModel):
    """Scored evidence for a single profile."""

    profile: AdversaryProfile
    detected: bool
    confidence: int = Field(ge=0, le=100)
    signals: list[DetectionSignal] = Field(default_factory=list)  # found signals only
    risk_score: int = Field(ge=0, le=100)
    recommendations: list[str] = Field(default_factory=list)


class FullDetectionResult(BaseModel):
    """Surfaced profiles ranked by risk, with the overall verdict."""

    results: list[TargetDetectionResult] = Field(default_factory=list)
    overall_risk: RiskLevel = RiskLevel.LOW
    total_risk_score: int = Field(default=0, ge=0, le=100)
    critical_targets: list[AdversaryProfile] = Field(default_factory=list)
    all_signals: list[DetectionSignal] = Field(default_factory=list)
