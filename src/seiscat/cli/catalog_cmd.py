# src/seiscat/cli/catalog_cmd.py
from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich import print
from rich.markup import escape
from rich.table import Table

from seiscat.catalog.io import load_catalog
from seiscat.catalog.typedefs import QualityBand, SurveySource, SurveyStatus
from seiscat.cli.common import (
    FILE_OPTION,
    SEARCH_OPTION,
    STATUS_OPTION,
    TYPE_OPTION,
    open_store,
    status_filter,
    type_filter,
)
from seiscat.util.formatting import format_quality
from seiscat.util.serialization import serialize

_STATUS_STYLE = {
    SurveyStatus.ACTIVE: "green",
    SurveyStatus.PROCESSING: "blue",
    SurveyStatus.COMPLETED: "cyan",
    SurveyStatus.ARCHIVED: "bright_black",
}

_QUALITY_STYLE = {
    QualityBand.HIGH: "green",
    QualityBand.MEDIUM: "yellow",
    QualityBand.LOW: "red",
}


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------

def _survey_json(survey: SurveySource) -> dict:
    data = serialize(survey)
    data["size"] = survey.size
    return data


def _print_surveys(surveys: List[SurveySource], total: int) -> None:
    if not surveys:
        print("[yellow]No seismic surveys found matching your criteria.[/yellow]")
        return

    table = Table(title=f"Seismic surveys ({len(surveys)} of {total})")
    table.add_column("ID", justify="right")
    table.add_column("Survey")
    table.add_column("Type", justify="center")
    table.add_column("Location")
    table.add_column("Size", justify="right")
    table.add_column("Quality", justify="right")
    table.add_column("Status")

    for s in surveys:
        q_style = _QUALITY_STYLE[s.quality_band]
        st_style = _STATUS_STYLE[s.status]
        table.add_row(
            s.id,
            f"{escape(s.name)}\n[dim]{escape(s.contractor)} • {escape(s.vessel)} • Area: {escape(s.area)}[/dim]",
            s.survey_type.value,
            escape(s.location),
            s.size,
            f"[{q_style}]{format_quality(s.quality)}[/{q_style}]",
            f"[{st_style}]{s.status.value.capitalize()}[/{st_style}]",
        )

    print(table)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def list_callback(
    file: Optional[Path] = FILE_OPTION,
    status: str = STATUS_OPTION,
    survey_type: str = TYPE_OPTION,
    search: str = SEARCH_OPTION,
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Emit the filtered surveys as JSON instead of a table.",
    ),
):
    """
    List surveys matching the status, type and search filters.
    """
    store = open_store(file)
    surveys = store.query(status_filter(status), type_filter(survey_type), search)

    if as_json:
        typer.echo(json.dumps([_survey_json(s) for s in surveys], indent=2))
        return

    _print_surveys(surveys, len(store))


def summary_callback(file: Optional[Path] = FILE_OPTION):
    """
    Show catalog totals over the whole collection (filters do not apply).
    """
    summary = open_store(file).aggregate()

    table = Table(title="Catalog summary", show_header=False)
    table.add_column("Metric")
    table.add_column("Value", justify="right")

    table.add_row("Total Surveys", str(summary.count))
    for status in SurveyStatus:
        table.add_row(status.value.capitalize(), str(summary.count_by_status[status]))
    table.add_row("Total Size", summary.total_size)

    print(table)


def show_callback(
    survey_id: str = typer.Argument(..., help="Survey id."),
    file: Optional[Path] = FILE_OPTION,
):
    """
    Show the detail panel for one survey.
    """
    store = open_store(file)
    try:
        s = store.get(survey_id)
    except KeyError:
        print(f"[red]No survey found with id '{escape(survey_id)}'.[/red]")
        raise typer.Exit(code=1)

    table = Table(title=escape(s.name), show_header=False)
    table.add_column("Field")
    table.add_column("Value")

    table.add_row("Status", s.status.value)
    table.add_row("Type", s.survey_type.value)
    table.add_row("Size", s.size)
    table.add_row("Quality", format_quality(s.quality))
    table.add_row("Contractor", escape(s.contractor))
    table.add_row("Processing Stage", escape(s.processing_stage))
    table.add_row("Vessel", escape(s.vessel))
    table.add_row("Acquisition Date", s.acquisition_date.isoformat())
    table.add_row("Location", escape(s.location))
    table.add_row("Area", escape(s.area))
    table.add_row("Owner", escape(s.owner))
    table.add_row("Last Accessed", s.last_accessed.isoformat())
    if s.coordinates is not None:
        table.add_row("Coordinates", f"{s.coordinates[0]}, {s.coordinates[1]}")

    print(table)


def validate_callback(
    file: Path = typer.Argument(..., help="Catalog file to validate."),
):
    """
    Validate a catalog file and report rejected records.

    Exits with status 1 when any record is rejected.
    """
    try:
        report = load_catalog(file)
    except FileNotFoundError as exc:
        print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)
    except ValueError as exc:
        print(f"[red]Could not read catalog: {exc}[/red]")
        raise typer.Exit(code=1)

    print(f"[green]Accepted:[/green] {len(report.accepted)}")

    if report.ok:
        return

    table = Table(title=f"Rejected records ({len(report.rejected)})")
    table.add_column("Record")
    table.add_column("Reason")
    for err in report.rejected:
        where = err.survey_id if err.survey_id is not None else f"#{err.index}"
        table.add_row(escape(str(where)), escape(err.reason))
    print(table)

    raise typer.Exit(code=1)
