"""Configuration loading — reads optional TOML config file."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from echoprint.core.paths import CATALOG_PATH

DEFAULT_CONFIG_PATHS = [
    Path.home() / ".config" / "echoprint" / "config.toml",
    Path("echoprint.toml"),
]


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from a TOML file.

    Searches default paths if no explicit path is given. The only key read is
    `catalog`, a path to a custom profile catalog (see `get_catalog_path`).
    Returns an empty dict if no config file is found.
    """
    paths = [path] if path is not None else DEFAULT_CONFIG_PATHS

    for p in paths:
        if p.exists():
            with open(p, "rb") as f:
                return tomllib.load(f)

    return {}


def get_catalog_path() -> Path:
    """Get the profile catalog path: ECHOPRINT_CATALOG env var → config.toml → bundled catalog."""
    env = os.environ.get("ECHOPRINT_CATALOG")
    if env:
        return Path(env).expanduser()
    config = load_config()
    configured = config.get("catalog")
    if configured:
        return Path(configured).expanduser()
    return CATALOG_PATH
