"""Collector output consumed by the detection engine.

The collector pipeline reports dozens of signals; only the capability flags
below influence detection. Unknown keys are accepted and ignored, and any
missing section counts as "not supported".
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CapabilitySignal(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    supported: bool = False


class StorageSignals(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    local_storage: bool = Field(default=False, alias="localStorage")
    session_storage: bool = Field(default=False, alias="sessionStorage")
    indexed_db: bool = Field(default=False, alias="indexedDB")


class SignalBundle(BaseModel):
    """Parsed fingerprint data. Read-only to the engine."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    canvas: CapabilitySignal = Field(default_factory=CapabilitySignal)
    webgl: CapabilitySignal = Field(default_factory=CapabilitySignal)
    audio: CapabilitySignal = Field(default_factory=CapabilitySignal)
    battery: CapabilitySignal = Field(default_factory=CapabilitySignal)
    storage: StorageSignals = Field(default_factory=StorageSignals)

    def supports(self, capability: str) -> bool:
        """Whether the collector reported *capability* as supported."""
        signal = getattr(self, capability, None)
        return isinstance(signal, CapabilitySignal) and signal.supported


class PageContext(BaseModel):
    """What was observed on the current page. Absent means nothing was observed."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    domains: tuple[str, ...] = ()
    scripts: tuple[str, ...] = ()
    cookies: tuple[str, ...] = ()
    local_storage: tuple[str, ...] = Field(default=(), alias="localStorage")

    @field_validator("domains", "scripts", "cookies", "local_storage", mode="before")
    @classmethod
    def _null_means_nothing_observed(cls, value: object) -> object:
        return () if value is None else value


def load_signal_bundle(path: Path) -> SignalBundle:
    """Parse a collector JSON dump. Raises pydantic.ValidationError on malformed input."""
    return SignalBundle.model_validate_json(path.read_text())


def load_page_context(path: Path) -> PageContext:
    return PageContext.model_validate_json(path.read_text())
