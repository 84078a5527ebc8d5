from __future__ import annotations

import logging
from typing import Iterable, Optional

from PySide6.QtCore import QObject, QUrl, Signal, Slot
from PySide6.QtWebChannel import QWebChannel
from PySide6.QtWebEngineCore import QWebEngineSettings
from PySide6.QtWebEngineWidgets import QWebEngineView

from seiscat.geo.icons import default_icon
from seiscat.geo.leaflet import BRIDGE_NAME, map_page_html, map_payload
from seiscat.geo.projection import CoverageOutline, Marker

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# JS bridge
# ---------------------------------------------------------------------

class _MapBridge(QObject):
    markerClicked = Signal(str)

    @Slot(str)
    def onMarkerClicked(self, survey_id: str) -> None:
        self.markerClicked.emit(survey_id)


# ---------------------------------------------------------------------
# View
# ---------------------------------------------------------------------

class SurveyMapView(QWebEngineView):
    """
    Leaflet map of survey markers and coverage areas.

    - show_surveys() replaces everything drawn on the map
    - surveyClicked(survey_id) fires when a marker is clicked

    Requires initialize_default_icon() to have run.
    """

    surveyClicked = Signal(str)

    def __init__(self, parent=None) -> None:
        super().__init__(parent)

        self._ready = False
        self._pending: Optional[str] = None

        self._bridge = _MapBridge()
        self._bridge.markerClicked.connect(self.surveyClicked)

        channel = QWebChannel(self.page())
        channel.registerObject(BRIDGE_NAME, self._bridge)
        self.page().setWebChannel(channel)

        # Tiles and Leaflet come from the network; the page itself is local
        self.settings().setAttribute(
            QWebEngineSettings.WebAttribute.LocalContentCanAccessRemoteUrls, True
        )

        self.loadFinished.connect(self._on_load_finished)
        self.setHtml(map_page_html(default_icon()), QUrl("qrc:///"))

    # ------------------------------------------------------------------

    def show_surveys(
        self,
        markers: Iterable[Marker],
        outlines: Iterable[CoverageOutline] = (),
    ) -> None:
        payload = map_payload(markers, outlines)
        if not self._ready:
            self._pending = payload
            return
        self._render(payload)

    # ------------------------------------------------------------------

    def _on_load_finished(self, ok: bool) -> None:
        if not ok:
            logger.warning("Map page failed to load")
            return

        self._ready = True
        if self._pending is not None:
            self._render(self._pending)
            self._pending = None

    def _render(self, payload: str) -> None:
        self.page().runJavaScript(f"renderSurveys({payload});")
