# src/seiscat/config/paths.py
from __future__ import annotations

import os
from importlib.resources import files
from pathlib import Path
from typing import Optional

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

SOURCE_DIR = "seiscat"

# Seed filenames (packaged)
SEED_SURVEYS = "seed_surveys.json"

# Environment override for the default catalog file
CATALOG_ENV_VAR = "SEISCAT_CATALOG"

# ---------------------------------------------------------------------------
# Packaged reference paths
# ---------------------------------------------------------------------------

def seed_reference_path() -> Path:
    return Path(files(SOURCE_DIR) / "reference")

def seed_surveys_path() -> Path:
    return seed_reference_path() / SEED_SURVEYS

# ---------------------------------------------------------------------------
# Catalog discovery
# ---------------------------------------------------------------------------

def catalog_path(explicit: Optional[Path] = None) -> Path:
    """
    Resolve the catalog file to load.

    Order: explicit argument, then $SEISCAT_CATALOG, then the packaged
    seed catalog.
    """
    if explicit is not None:
        return Path(explicit)

    env = os.environ.get(CATALOG_ENV_VAR)
    if env:
        return Path(env).expanduser()

    return seed_surveys_path()
