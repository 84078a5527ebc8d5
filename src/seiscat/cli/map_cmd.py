# src/seiscat/cli/map_cmd.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from seiscat.cli.common import (
    FILE_OPTION,
    SEARCH_OPTION,
    STATUS_OPTION,
    TYPE_OPTION,
    open_store,
    status_filter,
    type_filter,
)
from seiscat.geo.export import dumps, to_feature_collection
from seiscat.session import CatalogSession

logger = logging.getLogger(__name__)


def map_callback(
    file: Optional[Path] = FILE_OPTION,
    status: str = STATUS_OPTION,
    survey_type: str = TYPE_OPTION,
    search: str = SEARCH_OPTION,
    areas: bool = typer.Option(
        True,
        "--areas/--no-areas",
        help="Include survey coverage polygons.",
    ),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Write GeoJSON to this file instead of stdout.",
    ),
):
    """
    Export map markers and coverage areas for the filtered surveys as GeoJSON.
    """
    session = CatalogSession(open_store(file))
    session.set_status_filter(status_filter(status))
    session.set_type_filter(type_filter(survey_type))
    session.set_search_term(search)
    session.set_show_areas(areas)

    snap = session.snapshot()
    text = dumps(to_feature_collection(snap.markers, snap.polygons))

    if out is None:
        typer.echo(text)
        return

    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text + "\n", encoding="utf-8")
    logger.info("Wrote %s", out)
    typer.secho(
        f"Wrote {len(snap.markers)} marker(s) and {len(snap.polygons)} "
        f"area(s) to {out}",
        fg=typer.colors.GREEN,
    )
