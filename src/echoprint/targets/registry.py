"""Profile catalog — loads and looks up adversary profiles from YAML."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import ValidationError

from echoprint.core.base import RiskLevel
from echoprint.core.config import get_catalog_path
from echoprint.targets.profile import AdversaryProfile, TargetCategory

logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """Raised when a profile catalog file cannot be parsed or validated."""


def load_catalog(path: Path) -> tuple[AdversaryProfile, ...]:
    """Load and validate a profile catalog, preserving registration order."""
    if not path.exists():
        raise FileNotFoundError(f"Profile catalog not found: {path}")

    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise CatalogError(f"Malformed catalog {path}: {e}") from e

    if data is None:
        return ()
    if not isinstance(data, dict) or not isinstance(data.get("profiles", []), list):
        raise CatalogError(f"Catalog {path} must be a mapping with a 'profiles' list")

    profiles: list[AdversaryProfile] = []
    seen: set[str] = set()
    for index, entry in enumerate(data.get("profiles") or []):
        try:
            profile = AdversaryProfile.model_validate(entry)
        except ValidationError as e:
            raise CatalogError(f"Invalid profile #{index} in {path}: {e}") from e
        if profile.id in seen:
            raise CatalogError(f"Duplicate profile id '{profile.id}' in {path}")
        seen.add(profile.id)
        profiles.append(profile)

    logger.debug("Loaded %d profiles from %s", len(profiles), path)
    return tuple(profiles)


@lru_cache(maxsize=8)
def _cached_catalog(path: Path) -> tuple[AdversaryProfile, ...]:
    return load_catalog(path)


def get_all_profiles() -> tuple[AdversaryProfile, ...]:
    """Return the configured catalog. Loaded once per path and never mutated."""
    return _cached_catalog(get_catalog_path())


def get_target_profile(
    profile_id: str, catalog: Sequence[AdversaryProfile] | None = None
) -> AdversaryProfile | None:
    """Get a profile by id."""
    profiles = get_all_profiles() if catalog is None else catalog
    for profile in profiles:
        if profile.id == profile_id:
            return profile
    return None


def get_profiles_by_category(
    category: TargetCategory, catalog: Sequence[AdversaryProfile] | None = None
) -> list[AdversaryProfile]:
    profiles = get_all_profiles() if catalog is None else catalog
    return [p for p in profiles if p.category == category]


def get_profiles_by_risk(
    risk_level: RiskLevel, catalog: Sequence[AdversaryProfile] | None = None
) -> list[AdversaryProfile]:
    profiles = get_all_profiles() if catalog is None else catalog
    return [p for p in profiles if p.risk_level == risk_level]
