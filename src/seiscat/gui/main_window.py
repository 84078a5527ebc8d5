from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QAbstractItemView,
    QFileDialog,
    QHeaderView,
    QLabel,
    QMainWindow,
    QSplitter,
    QTableView,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from seiscat.gui.controller import BrowserController
from seiscat.gui.widgets.details_stack import SurveyDetailsStack
from seiscat.gui.widgets.filter_bar import FilterBar
from seiscat.gui.widgets.map_view import SurveyMapView
from seiscat.session import CatalogSession


class MainWindow(QMainWindow):
    """
    Main application window.

    Responsibilities:
    - Own application-level layout
    - Host the survey table, the map and the details panel
    - Display global status messages

    Contains NO domain logic.
    """

    def __init__(self, session: CatalogSession) -> None:
        super().__init__()

        self.setWindowTitle("Seismic Data")
        self.resize(1200, 800)

        central = QWidget(self)
        layout = QVBoxLayout(central)
        self.setCentralWidget(central)

        # --------------------------------------------------
        # Summary + filters
        # --------------------------------------------------

        self._summary_label = QLabel(central)
        layout.addWidget(self._summary_label)

        self._filter_bar = FilterBar(central)
        layout.addWidget(self._filter_bar)

        # --------------------------------------------------
        # (List | Map) | details
        # --------------------------------------------------

        splitter = QSplitter(Qt.Horizontal, central)
        layout.addWidget(splitter, stretch=1)

        self._views = QTabWidget(splitter)

        self._table = QTableView(self._views)
        self._table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self._table.setSelectionMode(QAbstractItemView.SingleSelection)
        self._table.verticalHeader().setVisible(False)
        self._table.horizontalHeader().setSectionResizeMode(QHeaderView.Interactive)
        self._table.horizontalHeader().setStretchLastSection(True)

        self._map_view = SurveyMapView(self._views)

        self._views.addTab(self._table, "List")
        self._views.addTab(self._map_view, "Map")

        self._details_stack = SurveyDetailsStack(splitter)

        splitter.addWidget(self._views)
        splitter.addWidget(self._details_stack)
        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 1)

        # --------------------------------------------------
        # Controller
        # --------------------------------------------------

        self._controller = BrowserController(
            session=session,
            filters=self._filter_bar,
            table=self._table,
            details=self._details_stack,
            map_view=self._map_view,
            summary_label=self._summary_label,
        )

        # --------------------------------------------------
        # Menu
        # --------------------------------------------------

        export_action = QAction("Export Map (GeoJSON)...", self)
        export_action.triggered.connect(self._on_export_map)
        self.menuBar().addMenu("&File").addAction(export_action)

        self.statusBar().showMessage(f"Loaded {len(session.store)} surveys")

    # --------------------------------------------------
    # Shared UI services
    # --------------------------------------------------

    def _on_export_map(self) -> None:
        filename, _ = QFileDialog.getSaveFileName(
            self,
            "Export Map",
            "surveys.geojson",
            "GeoJSON (*.geojson *.json)",
        )
        if not filename:
            return

        count = self._controller.export_geojson(Path(filename))
        self.statusBar().showMessage(f"Exported {count} features to {filename}")
