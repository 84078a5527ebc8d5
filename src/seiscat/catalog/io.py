# src/seiscat/catalog/io.py
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from seiscat.catalog.typedefs import LatLon, SurveySource, SurveyStatus, SurveyType
from seiscat.config.paths import catalog_path
from seiscat.errors import SurveyValidationError

logger = logging.getLogger(__name__)


# ------------------------------
# Field names (file form)
# ------------------------------

# dataclass field -> key in catalog files (camelCase, as in the seed data)
_FIELD_KEYS: Dict[str, str] = {
    "id": "id",
    "name": "name",
    "location": "location",
    "survey_type": "surveyType",
    "status": "status",
    "acquisition_date": "acquisitionDate",
    "last_accessed": "lastAccessed",
    "size_bytes": "sizeBytes",
    "contractor": "contractor",
    "vessel": "vessel",
    "area": "area",
    "owner": "owner",
    "processing_stage": "processingStage",
    "quality": "quality",
    "coordinates": "coordinates",
    "survey_area": "surveyArea",
}

_TEXT_FIELDS = (
    "name",
    "location",
    "contractor",
    "vessel",
    "area",
    "owner",
    "processing_stage",
)

MIN_AREA_VERTICES = 3


# ------------------------------
# Load report
# ------------------------------

@dataclass(slots=True)
class LoadReport:
    """
    Outcome of loading a catalog file.

    accepted: validated records, in file order
    rejected: one SurveyValidationError per record that failed
    """
    accepted: List[SurveySource] = field(default_factory=list)
    rejected: List[SurveyValidationError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.rejected


@dataclass(frozen=True, slots=True)
class MalformedLine:
    """
    A JSON Lines entry that could not be decoded. Kept in the row stream
    so it is rejected in place instead of failing the whole file.
    """
    lineno: int
    error: str


# ------------------------------
# Field helpers
# ------------------------------

def _get(row: Mapping[str, Any], name: str) -> Any:
    """
    Look up a field by its file key, falling back to the snake_case name.
    """
    key = _FIELD_KEYS[name]
    if key in row:
        return row[key]
    return row.get(name)


def _require(row: Mapping[str, Any], name: str) -> Any:
    value = _get(row, name)
    if value is None:
        raise ValueError(f"missing required field '{_FIELD_KEYS[name]}'")
    return value


def _parse_text(row: Mapping[str, Any], name: str) -> str:
    value = _require(row, name)
    if not isinstance(value, str):
        raise ValueError(f"'{_FIELD_KEYS[name]}' must be a string")
    return value


def _parse_date(row: Mapping[str, Any], name: str) -> date:
    value = _require(row, name)
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise ValueError(
            f"'{_FIELD_KEYS[name]}' is not an ISO date: {value!r}"
        ) from None


def _parse_int(row: Mapping[str, Any], name: str) -> int:
    value = _require(row, name)
    # bool is an int subclass; never accept it as a count or score
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{_FIELD_KEYS[name]}' must be an integer")
    return value


def _parse_point(value: Any, what: str) -> LatLon:
    if (
        not isinstance(value, (list, tuple))
        or len(value) != 2
        or not all(
            isinstance(v, (int, float)) and not isinstance(v, bool)
            for v in value
        )
    ):
        raise ValueError(f"{what} must be a [lat, lon] pair")

    lat, lon = float(value[0]), float(value[1])
    if not -90.0 <= lat <= 90.0:
        raise ValueError(f"{what} latitude out of range: {lat}")
    if not -180.0 <= lon <= 180.0:
        raise ValueError(f"{what} longitude out of range: {lon}")
    return (lat, lon)


def _parse_area(value: Any) -> Optional[Tuple[LatLon, ...]]:
    if value is None:
        return None
    if not isinstance(value, (list, tuple)):
        raise ValueError("'surveyArea' must be a list of [lat, lon] vertices")

    vertices = tuple(
        _parse_point(v, f"surveyArea vertex {i}") for i, v in enumerate(value)
    )
    if len(vertices) < MIN_AREA_VERTICES:
        raise ValueError(
            f"'surveyArea' needs at least {MIN_AREA_VERTICES} vertices, "
            f"got {len(vertices)}"
        )
    return vertices


# ------------------------------
# Record validation
# ------------------------------

def parse_survey(row: Mapping[str, Any], index: Optional[int] = None) -> SurveySource:
    """
    Validate one catalog row and build a SurveySource.

    Any stored display size ("size") is ignored; it is derived from
    sizeBytes. Missing coordinates are allowed.

    Raises SurveyValidationError describing the first problem found.
    """
    raw_id = row.get("id") if isinstance(row, Mapping) else None
    survey_id = None if raw_id is None else str(raw_id)

    try:
        if not isinstance(row, Mapping):
            raise ValueError("record must be a JSON object")
        if not survey_id:
            raise ValueError("missing required field 'id'")

        raw_type = _require(row, "survey_type")
        try:
            survey_type = SurveyType(raw_type)
        except ValueError:
            raise ValueError(f"unknown surveyType: {raw_type!r}") from None

        raw_status = _require(row, "status")
        try:
            status = SurveyStatus(raw_status)
        except ValueError:
            raise ValueError(f"unknown status: {raw_status!r}") from None

        quality = _parse_int(row, "quality")
        if not 0 <= quality <= 100:
            raise ValueError(f"quality must be within [0, 100], got {quality}")

        size_bytes = _parse_int(row, "size_bytes")
        if size_bytes < 0:
            raise ValueError(f"sizeBytes must be non-negative, got {size_bytes}")

        coords_raw = _get(row, "coordinates")
        coordinates = (
            None if coords_raw is None else _parse_point(coords_raw, "coordinates")
        )

        texts = {name: _parse_text(row, name) for name in _TEXT_FIELDS}

        return SurveySource(
            id=survey_id,
            survey_type=survey_type,
            status=status,
            acquisition_date=_parse_date(row, "acquisition_date"),
            last_accessed=_parse_date(row, "last_accessed"),
            size_bytes=size_bytes,
            quality=quality,
            coordinates=coordinates,
            survey_area=_parse_area(_get(row, "survey_area")),
            **texts,
        )
    except ValueError as exc:
        raise SurveyValidationError(
            str(exc), survey_id=survey_id, index=index
        ) from None


def validate_rows(rows: Iterable[Any]) -> LoadReport:
    """
    Validate rows independently. A bad row is recorded and skipped; it
    never prevents the remaining rows from loading.
    """
    report = LoadReport()
    seen: set[str] = set()

    for index, row in enumerate(rows):
        try:
            if isinstance(row, MalformedLine):
                raise SurveyValidationError(
                    f"line {row.lineno} is not valid JSON: {row.error}",
                    index=index,
                )
            survey = parse_survey(row, index=index)
            if survey.id in seen:
                raise SurveyValidationError(
                    "duplicate id", survey_id=survey.id, index=index
                )
        except SurveyValidationError as exc:
            logger.warning("Rejected catalog record: %s", exc)
            report.rejected.append(exc)
            continue

        seen.add(survey.id)
        report.accepted.append(survey)

    logger.info(
        "Loaded %d surveys (%d rejected)",
        len(report.accepted),
        len(report.rejected),
    )
    return report


# ------------------------------
# File loaders
# ------------------------------

def read_rows(path: Path) -> List[Any]:
    """
    Read raw catalog rows from a JSON array file or a JSON Lines file
    (.jsonl / .ndjson).

    A JSON Lines entry that does not decode becomes a MalformedLine; a
    JSON array file that does not decode raises, since no row survives.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    if path.suffix.lower() in (".jsonl", ".ndjson"):
        rows: List[Any] = []
        with path.open("r", encoding="utf-8") as fh:
            for lineno, line in enumerate(fh, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    rows.append(json.loads(line))
                except json.JSONDecodeError as exc:
                    rows.append(MalformedLine(lineno=lineno, error=exc.msg))
        return rows

    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, Mapping) and "surveys" in data:
        data = data["surveys"]
    if not isinstance(data, list):
        raise ValueError(
            f"{path}: expected a JSON array of surveys or an object with 'surveys'"
        )
    return data


def load_catalog(path: Optional[Path] = None) -> LoadReport:
    """
    Load and validate a catalog file. With no path, uses catalog_path()
    ($SEISCAT_CATALOG, else the packaged seed catalog).
    """
    resolved = catalog_path(path)
    logger.debug("Loading catalog from %s", resolved)
    return validate_rows(read_rows(resolved))
