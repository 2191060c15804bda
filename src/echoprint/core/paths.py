"""Bundled data directory resolution."""

from __future__ import annotations

from pathlib import Path

# src/echoprint/core/paths.py -> src/echoprint/data/
DATA_DIR = Path(__file__).resolve().parent.parent / "data"

SCORING_PATH = DATA_DIR / "scoring.yaml"
CATALOG_PATH = DATA_DIR / "profiles.yaml"
