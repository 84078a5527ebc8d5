# src/seiscat/geo/styles.py
from __future__ import annotations

from enum import Enum
from typing import Dict, List, Mapping, Tuple, Type

from seiscat.catalog.typedefs import SurveyStatus, SurveyType


# ---------------------------------------------------------------------
# Colour tables
# ---------------------------------------------------------------------

# Marker colour is driven by status alone
MARKER_COLOR_BY_STATUS: Dict[SurveyStatus, str] = {
    SurveyStatus.ACTIVE: "#00FF97",
    SurveyStatus.PROCESSING: "#00A3E0",
    SurveyStatus.COMPLETED: "#00D4AA",
    SurveyStatus.ARCHIVED: "#6B7280",
}

# Coverage polygons are coloured by survey type alone
POLYGON_COLOR_BY_TYPE: Dict[SurveyType, str] = {
    SurveyType.TWO_D: "#3B82F6",
    SurveyType.THREE_D: "#10B981",
    SurveyType.FOUR_D: "#8B5CF6",
    SurveyType.VSP: "#F59E0B",
}

# Legend order, highest priority first
STATUS_PRIORITY: Tuple[SurveyStatus, ...] = (
    SurveyStatus.ACTIVE,
    SurveyStatus.PROCESSING,
    SurveyStatus.COMPLETED,
    SurveyStatus.ARCHIVED,
)

POLYGON_FILL_OPACITY = 0.2
POLYGON_WEIGHT = 2


def _check_total(table: Mapping[Enum, str], enum_cls: Type[Enum]) -> None:
    missing = [m for m in enum_cls if m not in table]
    if missing:
        raise RuntimeError(
            f"Style table is missing {enum_cls.__name__} members: {missing}"
        )


# Adding an enum member without a colour fails at import, not at render time
_check_total(MARKER_COLOR_BY_STATUS, SurveyStatus)
_check_total(POLYGON_COLOR_BY_TYPE, SurveyType)
_check_total(dict.fromkeys(STATUS_PRIORITY, ""), SurveyStatus)


# ---------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------

def marker_color(status: SurveyStatus) -> str:
    return MARKER_COLOR_BY_STATUS[SurveyStatus(status)]


def polygon_color(survey_type: SurveyType) -> str:
    return POLYGON_COLOR_BY_TYPE[SurveyType(survey_type)]


def marker_glyph(survey_type: SurveyType) -> str:
    """
    Label drawn inside the marker pin. Survey type never affects colour.
    """
    return SurveyType(survey_type).value


def legend() -> List[Tuple[SurveyStatus, str]]:
    """
    (status, colour) pairs for the map legend, in priority order.
    """
    return [(status, MARKER_COLOR_BY_STATUS[status]) for status in STATUS_PRIORITY]
