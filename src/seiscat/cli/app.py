# src/seiscat/cli/app.py

from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

import typer

from seiscat.logging_config import setup_logging

from .catalog_cmd import list_callback as list_surveys
from .catalog_cmd import show_callback as show
from .catalog_cmd import summary_callback as summary
from .catalog_cmd import validate_callback as validate
from .map_cmd import map_callback as map_export

app = typer.Typer(help="seiscat seismic survey catalog")


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging.",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also write log records to this file.",
    ),
):
    setup_logging(logging.DEBUG if verbose else logging.WARNING, log_file=log_file)


# standalone verbs
app.command("list")(list_surveys)
app.command("summary")(summary)
app.command("show")(show)
app.command("map")(map_export)
app.command("validate")(validate)
