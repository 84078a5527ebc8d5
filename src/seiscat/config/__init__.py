"""
Configuration and path helpers for seiscat.
"""

from .paths import (
    CATALOG_ENV_VAR,
    catalog_path,
    seed_reference_path,
    seed_surveys_path,
)

__all__ = [
    "CATALOG_ENV_VAR",
    "catalog_path",
    "seed_reference_path",
    "seed_surveys_path",
]
