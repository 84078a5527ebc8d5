# src/seiscat/geo/leaflet.py
"""
Leaflet page for the map view.

The page is built once. Every later view change is pushed into it as a
JSON payload passed to ``renderSurveys()``, so pan and zoom survive
filtering. Marker clicks call ``bridge.onMarkerClicked(surveyId)`` on the
QWebChannel object registered under BRIDGE_NAME.
"""
from __future__ import annotations

import json
from html import escape
from typing import Any, Iterable, List

from seiscat.geo.export import dumps, to_feature_collection
from seiscat.geo.icons import LEAFLET_CDN, IconDefaults
from seiscat.geo.projection import CoverageOutline, Marker
from seiscat.geo.styles import legend


# ---------------------------------------------------------------------
# Page constants
# ---------------------------------------------------------------------

MAP_CENTER = (30.0, 0.0)
MAP_ZOOM = 2

TILE_URL = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
TILE_ATTRIBUTION = (
    '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a>'
    " contributors"
)

LEAFLET_CSS = f"{LEAFLET_CDN}/leaflet.css"
LEAFLET_JS = f"{LEAFLET_CDN}/leaflet.js"

BRIDGE_NAME = "bridge"


def _script_json(obj: Any) -> str:
    # Keep "</" out of inline <script> blocks
    return json.dumps(obj).replace("</", "<\\/")


# ---------------------------------------------------------------------
# Payload
# ---------------------------------------------------------------------

def map_payload(
    markers: Iterable[Marker],
    outlines: Iterable[CoverageOutline] = (),
) -> str:
    """
    JSON argument for renderSurveys(): the GeoJSON collection plus the
    pin image for each marker, keyed by survey id.
    """
    markers = list(markers)
    collection = json.loads(dumps(to_feature_collection(markers, outlines), indent=None))
    return _script_json(
        {
            "collection": collection,
            "icons": {m.survey_id: m.icon_data_uri for m in markers},
        }
    )


# ---------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------

def _legend_html() -> str:
    rows: List[str] = []
    for status, color in legend():
        rows.append(
            '<div class="legend-row">'
            f'<span class="swatch" style="background:{escape(color)}"></span>'
            f"{escape(status.value.capitalize())}"
            "</div>"
        )
    return '<div class="legend"><h4>Legend</h4>' + "".join(rows) + "</div>"


_CSS = (
    "html, body, #map { height: 100%; margin: 0; }"
    ".legend { position: absolute; bottom: 16px; right: 16px; z-index: 1000;"
    "  background: rgba(255,255,255,0.92); padding: 8px 12px;"
    "  border-radius: 6px; font: 12px sans-serif; }"
    ".legend h4 { margin: 0 0 6px 0; }"
    ".legend-row { display: flex; align-items: center; margin: 2px 0; }"
    ".swatch { width: 12px; height: 12px; border-radius: 50%;"
    "  margin-right: 6px; display: inline-block; }"
    ".popup h4 { margin: 0 0 4px 0; }"
    ".popup p { margin: 2px 0; }"
)


def map_page_html(icon: IconDefaults) -> str:
    """
    Complete HTML document for the map view.

    ``icon`` supplies the shadow image and the pin geometry shared by
    every survey marker.
    """
    config = {
        "center": list(MAP_CENTER),
        "zoom": MAP_ZOOM,
        "tileUrl": TILE_URL,
        "attribution": TILE_ATTRIBUTION,
        "icon": {
            "shadowUrl": icon.shadow_url,
            "fallbackUrl": icon.icon_url,
            "iconSize": list(icon.icon_size),
            "iconAnchor": list(icon.icon_anchor),
            "popupAnchor": list(icon.popup_anchor),
        },
    }

    return (
        "<!DOCTYPE html>"
        "<html><head>"
        '<meta charset="utf-8">'
        f'<link rel="stylesheet" href="{LEAFLET_CSS}">'
        f"<style>{_CSS}</style>"
        f'<script src="{LEAFLET_JS}"></script>'
        '<script src="qrc:///qtwebchannel/qwebchannel.js"></script>'
        "</head><body>"
        '<div id="map"></div>'
        + _legend_html() +
        "<script>"
        f"const CONFIG = {_script_json(config)};"
        "let bridge = null;"
        "new QWebChannel(qt.webChannelTransport, function(channel) {"
        f"  bridge = channel.objects.{BRIDGE_NAME};"
        "});"

        "const map = L.map('map').setView(CONFIG.center, CONFIG.zoom);"
        "L.tileLayer(CONFIG.tileUrl, { attribution: CONFIG.attribution }).addTo(map);"
        "const surveyLayer = L.layerGroup().addTo(map);"

        "function pinIcon(url) {"
        "  return L.icon({"
        "    iconUrl: url || CONFIG.icon.fallbackUrl,"
        "    iconRetinaUrl: url || CONFIG.icon.fallbackUrl,"
        "    shadowUrl: CONFIG.icon.shadowUrl,"
        "    iconSize: CONFIG.icon.iconSize,"
        "    iconAnchor: CONFIG.icon.iconAnchor,"
        "    popupAnchor: CONFIG.icon.popupAnchor"
        "  });"
        "}"

        # Popup text is set through textContent, never parsed as HTML
        "function popupContent(p) {"
        "  const root = document.createElement('div');"
        "  root.className = 'popup';"
        "  const title = document.createElement('h4');"
        "  title.textContent = p.name;"
        "  root.appendChild(title);"
        "  [['Type', p.surveyType], ['Status', p.status],"
        "   ['Size', p.size], ['Quality', p.quality + '%']].forEach(function(row) {"
        "    const line = document.createElement('p');"
        "    const label = document.createElement('b');"
        "    label.textContent = row[0] + ': ';"
        "    line.appendChild(label);"
        "    line.appendChild(document.createTextNode(row[1]));"
        "    root.appendChild(line);"
        "  });"
        "  return root;"
        "}"

        "function renderSurveys(payload) {"
        "  surveyLayer.clearLayers();"
        "  L.geoJSON(payload.collection, {"
        "    style: function(feature) {"
        "      const p = feature.properties;"
        "      return { color: p.color, fillColor: p.fillColor,"
        "               fillOpacity: p.fillOpacity, weight: p.weight };"
        "    },"
        "    pointToLayer: function(feature, latlng) {"
        "      const url = payload.icons[feature.properties.surveyId];"
        "      return L.marker(latlng, { icon: pinIcon(url) });"
        "    },"
        "    onEachFeature: function(feature, layer) {"
        "      const p = feature.properties;"
        "      if (p.kind !== 'marker') return;"
        "      layer.bindPopup(popupContent(p));"
        "      layer.on('click', function() {"
        "        if (bridge) bridge.onMarkerClicked(p.surveyId);"
        "      });"
        "    }"
        "  }).addTo(surveyLayer);"
        "}"
        "</script>"
        "</body></html>"
    )
