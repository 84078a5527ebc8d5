from __future__ import annotations

import logging

from pathlib import Path
from typing import TYPE_CHECKING

from PySide6.QtCore import QModelIndex
from PySide6.QtWidgets import QLabel, QTableView

from seiscat.geo.export import dumps, to_feature_collection
from seiscat.gui.survey_table_model import COL_SELECTED, SurveyTableModel
from seiscat.gui.widgets.details_stack import SurveyDetailsStack
from seiscat.gui.widgets.filter_bar import FilterBar
from seiscat.session import CatalogSession

if TYPE_CHECKING:
    from seiscat.gui.widgets.map_view import SurveyMapView

logger = logging.getLogger(__name__)


class BrowserController:
    """
    Controller for the survey browser.

    Responsibilities:
    - Route filter bar events into the CatalogSession
    - Refresh the table model and counters after each change
    - Redraw the map after filter and area toggles
    - Drive the details stack from row and marker clicks

    Owns no state of its own; the session is the single source of truth.
    """

    def __init__(
        self,
        *,
        session: CatalogSession,
        filters: FilterBar,
        table: QTableView,
        details: SurveyDetailsStack,
        map_view: SurveyMapView,
        summary_label: QLabel,
    ) -> None:
        self._session = session
        self._filters = filters
        self._table = table
        self._details = details
        self._map = map_view
        self._summary_label = summary_label

        self._model = SurveyTableModel(session, table)
        self._table.setModel(self._model)

        # --- Wire signals ---
        self._filters.searchTextChanged.connect(self.on_search_text_changed)
        self._filters.statusFilterChanged.connect(self.on_status_filter_changed)
        self._filters.typeFilterChanged.connect(self.on_type_filter_changed)
        self._filters.showAreasToggled.connect(self.on_show_areas_toggled)

        self._table.clicked.connect(self.on_row_clicked)
        self._table.horizontalHeader().sectionClicked.connect(
            self.on_header_clicked
        )
        self._map.surveyClicked.connect(self.on_marker_clicked)
        self._details.details_view.dismissRequested.connect(self.on_dismiss)
        self._model.dataChanged.connect(lambda *_: self._update_summary())

        self._refresh()

    @property
    def model(self) -> SurveyTableModel:
        return self._model

    # ------------------------------------------------------------------
    # Filter events
    # ------------------------------------------------------------------

    def on_search_text_changed(self, text: str) -> None:
        self._session.set_search_term(text)
        self._refresh()

    def on_status_filter_changed(self, value: str) -> None:
        self._session.set_status_filter(value)
        self._refresh()

    def on_type_filter_changed(self, value: str) -> None:
        self._session.set_type_filter(value)
        self._refresh()

    def on_show_areas_toggled(self, show: bool) -> None:
        self._session.set_show_areas(show)
        self._render_map()

    # ------------------------------------------------------------------
    # Table events
    # ------------------------------------------------------------------

    def on_row_clicked(self, index: QModelIndex) -> None:
        if index.column() == COL_SELECTED:
            return

        survey = self._model.survey_at(index)
        if survey is None:
            return

        self._session.focus(survey.id)
        self._details.show_survey(survey)

    def on_header_clicked(self, section: int) -> None:
        if section != COL_SELECTED:
            return
        self._model.select_all()
        self._update_summary()

    # ------------------------------------------------------------------
    # Map events
    # ------------------------------------------------------------------

    def on_marker_clicked(self, survey_id: str) -> None:
        try:
            survey = self._session.focus(survey_id)
        except KeyError:
            logger.warning("Map reported unknown survey id %r", survey_id)
            return
        self._details.show_survey(survey)

    def on_dismiss(self) -> None:
        self._session.unfocus()
        self._details.show_empty()

    # ------------------------------------------------------------------
    # Map export
    # ------------------------------------------------------------------

    def export_geojson(self, path: Path) -> int:
        """
        Write markers (and areas, if shown) for the visible surveys.
        Returns the number of features written.
        """
        snap = self._session.snapshot()
        collection = to_feature_collection(snap.markers, snap.polygons)
        path.write_text(dumps(collection) + "\n", encoding="utf-8")
        logger.info("Exported %d features to %s", len(collection["features"]), path)
        return len(collection["features"])

    # ------------------------------------------------------------------

    def _refresh(self) -> None:
        self._model.refresh()
        self._filters.set_counts(self._model.rowCount(), len(self._session.store))
        self._update_summary()
        self._render_map()

    def _render_map(self) -> None:
        snap = self._session.snapshot()
        self._map.show_surveys(snap.markers, snap.polygons)

    def _update_summary(self) -> None:
        summary = self._session.summary()
        selected = len(self._session.state.selected_ids)

        parts = [
            f"Total Surveys: {summary.count}",
            *(
                f"{status.value.capitalize()}: {n}"
                for status, n in summary.count_by_status.items()
            ),
            f"Total Size: {summary.total_size}",
        ]
        if selected:
            parts.append(f"{selected} survey(s) selected")

        self._summary_label.setText("   ".join(parts))
