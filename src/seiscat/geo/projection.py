# src/seiscat/geo/projection.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from seiscat.catalog.typedefs import LatLon, SurveySource, SurveyStatus, SurveyType
from seiscat.geo.icons import pin_data_uri, pin_svg
from seiscat.geo.styles import (
    POLYGON_FILL_OPACITY,
    POLYGON_WEIGHT,
    marker_color,
    marker_glyph,
    polygon_color,
)


# ============================================================
# MAP PRIMITIVES
# ============================================================

@dataclass(frozen=True, slots=True)
class PopupPayload:
    name: str
    survey_type: SurveyType
    status: SurveyStatus
    size: str
    quality: int


@dataclass(frozen=True, slots=True)
class Marker:
    survey_id: str
    position: LatLon
    color: str
    glyph: str
    popup: PopupPayload

    @property
    def icon_svg(self) -> str:
        return pin_svg(self.color, self.glyph)

    @property
    def icon_data_uri(self) -> str:
        return pin_data_uri(self.color, self.glyph)


@dataclass(frozen=True, slots=True)
class CoverageOutline:
    """
    Coverage polygon for one survey. Vertices are (lat, lon) and the ring
    is implicitly closed.
    """
    survey_id: str
    vertices: Tuple[LatLon, ...]
    color: str
    fill_color: str
    fill_opacity: float = POLYGON_FILL_OPACITY
    weight: int = POLYGON_WEIGHT


# ============================================================
# PROJECTION
# ============================================================

def marker_for(survey: SurveySource) -> Marker:
    if survey.coordinates is None:
        raise ValueError(f"Survey {survey.id!r} has no coordinates")

    return Marker(
        survey_id=survey.id,
        position=survey.coordinates,
        color=marker_color(survey.status),
        glyph=marker_glyph(survey.survey_type),
        popup=PopupPayload(
            name=survey.name,
            survey_type=survey.survey_type,
            status=survey.status,
            size=survey.size,
            quality=survey.quality,
        ),
    )


def markers_for(surveys: Iterable[SurveySource]) -> List[Marker]:
    """
    One marker per survey that has coordinates, in input order.
    Surveys without coordinates are skipped.
    """
    return [marker_for(s) for s in surveys if s.coordinates is not None]


def polygons_for(
    surveys: Iterable[SurveySource],
    show_areas: bool = True,
) -> List[CoverageOutline]:
    """
    Coverage outlines for surveys with both coordinates and a survey area.
    Always empty when show_areas is False.
    """
    if not show_areas:
        return []

    outlines: List[CoverageOutline] = []
    for s in surveys:
        if s.coordinates is None or not s.survey_area:
            continue

        color = polygon_color(s.survey_type)
        outlines.append(
            CoverageOutline(
                survey_id=s.id,
                vertices=s.survey_area,
                color=color,
                fill_color=color,
            )
        )
    return outlines
