# src/seiscat/geo/export.py
"""
GeoJSON export of map primitives.

Markers become Point features and coverage outlines become Polygon
features, so any GeoJSON-aware renderer (Leaflet, QGIS, geojson.io) can
draw the same map the browser shows. GeoJSON positions are (lon, lat);
the (lat, lon) pairs used everywhere else are swapped here and rings are
closed by repeating the first vertex.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

import geojson
from geojson import Feature, FeatureCollection, Point, Polygon

from seiscat.catalog.typedefs import LatLon
from seiscat.geo.projection import CoverageOutline, Marker
from seiscat.geo.styles import legend

logger = logging.getLogger(__name__)


def _lon_lat(point: LatLon) -> Tuple[float, float]:
    lat, lon = point
    return (lon, lat)


def marker_feature(marker: Marker) -> Feature:
    popup = marker.popup
    return Feature(
        id=f"marker-{marker.survey_id}",
        geometry=Point(_lon_lat(marker.position)),
        properties={
            "kind": "marker",
            "surveyId": marker.survey_id,
            "color": marker.color,
            "glyph": marker.glyph,
            "name": popup.name,
            "surveyType": popup.survey_type.value,
            "status": popup.status.value,
            "size": popup.size,
            "quality": popup.quality,
        },
    )


def outline_feature(outline: CoverageOutline) -> Feature:
    ring: List[Tuple[float, float]] = [_lon_lat(v) for v in outline.vertices]
    ring.append(ring[0])
    return Feature(
        id=f"area-{outline.survey_id}",
        geometry=Polygon([ring]),
        properties={
            "kind": "coverage",
            "surveyId": outline.survey_id,
            "color": outline.color,
            "fillColor": outline.fill_color,
            "fillOpacity": outline.fill_opacity,
            "weight": outline.weight,
        },
    )


def to_feature_collection(
    markers: Iterable[Marker],
    outlines: Iterable[CoverageOutline] = (),
) -> FeatureCollection:
    """
    Polygons come first so markers draw on top of coverage areas. The
    status legend travels as a foreign member for renderers that draw one.
    """
    features = [outline_feature(o) for o in outlines]
    features += [marker_feature(m) for m in markers]
    return FeatureCollection(
        features,
        legend=[
            {"status": status.value, "color": color} for status, color in legend()
        ],
    )


def dumps(collection: FeatureCollection, indent: int | None = 2) -> str:
    if not collection.is_valid:
        # geojson validates ring closure and coordinate shape
        logger.error("Invalid GeoJSON produced: %s", collection.errors())
        raise ValueError(f"Invalid GeoJSON: {collection.errors()}")
    return geojson.dumps(collection, indent=indent)
