# src/seiscat/cli/common.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from seiscat.catalog.io import load_catalog
from seiscat.catalog.store import CatalogStore
from seiscat.catalog.typedefs import (
    SurveyStatus,
    SurveyType,
    parse_status_filter,
    parse_type_filter,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Shared options
# ---------------------------------------------------------------------------

FILE_OPTION = typer.Option(
    None,
    "--file",
    "-f",
    help="Catalog file (.json or .jsonl). Defaults to $SEISCAT_CATALOG, "
    "then the bundled seed catalog.",
)

STATUS_OPTION = typer.Option(
    "all",
    "--status",
    "-s",
    help="Filter by status: all, active, processing, completed, archived.",
)

TYPE_OPTION = typer.Option(
    "all",
    "--type",
    "-t",
    help="Filter by survey type: all, 2D, 3D, 4D, VSP.",
)

SEARCH_OPTION = typer.Option(
    "",
    "--search",
    "-q",
    help="Case-insensitive text matched against name, location and contractor.",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def status_filter(value: str) -> Optional[SurveyStatus]:
    try:
        return parse_status_filter(value)
    except ValueError:
        raise typer.BadParameter(
            f"Unknown status '{value}'.", param_hint="--status"
        ) from None


def type_filter(value: str) -> Optional[SurveyType]:
    try:
        return parse_type_filter(value)
    except ValueError:
        raise typer.BadParameter(
            f"Unknown survey type '{value}'.", param_hint="--type"
        ) from None


def open_store(path: Optional[Path]) -> CatalogStore:
    """
    Load the catalog and build a store from its valid records. Rejected
    records are reported and skipped.
    """
    try:
        report = load_catalog(path)
    except FileNotFoundError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    except (json.JSONDecodeError, ValueError) as exc:
        typer.secho(f"Could not read catalog: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if report.rejected:
        typer.secho(
            f"Skipped {len(report.rejected)} invalid record(s); "
            "run `seiscat validate` for details.",
            fg=typer.colors.YELLOW,
            err=True,
        )

    return CatalogStore(report.accepted)
