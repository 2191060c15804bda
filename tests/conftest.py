"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from echoprint.core import config
from echoprint.core.base import RiskLevel
from echoprint.signals.bundle import PageContext, SignalBundle
from echoprint.targets.profile import AdversaryProfile


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    """Keep user config files and env vars from changing which catalog is loaded."""
    monkeypatch.delenv("ECHOPRINT_CATALOG", raising=False)
    monkeypatch.setattr(config, "DEFAULT_CONFIG_PATHS", [])


@pytest.fixture
def empty_bundle() -> SignalBundle:
    """A bundle where the collectors reported nothing."""
    return SignalBundle()


@pytest.fixture
def canvas_webgl_bundle() -> SignalBundle:
    """Canvas and WebGL supported, audio not, no battery or storage data."""
    return SignalBundle.model_validate(
        {
            "canvas": {"supported": True, "hash": "a1b2c3"},
            "webgl": {"supported": True, "renderer": "ANGLE (Apple M1)"},
            "audio": {"supported": False},
        }
    )


@pytest.fixture
def full_bundle() -> SignalBundle:
    """Every capability the engine reads is reported as available."""
    return SignalBundle.model_validate(
        {
            "canvas": {"supported": True},
            "webgl": {"supported": True},
            "audio": {"supported": True},
            "battery": {"supported": True, "level": 0.8},
            "storage": {"localStorage": True, "sessionStorage": True},
        }
    )


@pytest.fixture
def alicdn_context() -> PageContext:
    return PageContext(domains=("g.alicdn.com", "criteo.com"))


@pytest.fixture
def make_profile() -> Callable[..., AdversaryProfile]:
    """Build a minimal profile; keyword arguments override the defaults."""

    def _make(profile_id: str = "test", **overrides: Any) -> AdversaryProfile:
        data: dict[str, Any] = {
            "id": profile_id,
            "name": profile_id.title(),
            "description": "Test platform",
            "risk_level": RiskLevel.MEDIUM,
            "category": "adtech",
        }
        data.update(overrides)
        return AdversaryProfile.model_validate(data)

    return _make
