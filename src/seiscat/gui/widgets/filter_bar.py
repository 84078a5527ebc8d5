from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QWidget,
    QHBoxLayout,
    QLineEdit,
    QComboBox,
    QCheckBox,
    QLabel,
)

from seiscat.catalog.typedefs import ALL, SurveyStatus, SurveyType


class FilterBar(QWidget):
    """
    Search and filter controls shared by the list and map views.

    Emits:
    - searchTextChanged(str)
    - statusFilterChanged(str)   "all" or a status value
    - typeFilterChanged(str)     "all" or a survey type value
    - showAreasToggled(bool)
    """

    searchTextChanged = Signal(str)
    statusFilterChanged = Signal(str)
    typeFilterChanged = Signal(str)
    showAreasToggled = Signal(bool)

    def __init__(self, parent=None) -> None:
        super().__init__(parent)

        self._search_edit = QLineEdit(self)
        self._search_edit.setPlaceholderText("Search seismic surveys...")

        self._type_combo = QComboBox(self)
        self._status_combo = QComboBox(self)

        self._areas_check = QCheckBox("Survey Areas", self)
        self._areas_check.setChecked(True)

        self._count_label = QLabel(self)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        layout.addWidget(QLabel("Search:", self))
        layout.addWidget(self._search_edit, stretch=1)
        layout.addWidget(self._type_combo)
        layout.addWidget(self._status_combo)
        layout.addWidget(self._areas_check)
        layout.addWidget(self._count_label)

        self._populate_types()
        self._populate_statuses()

        # --- Signal wiring ---
        self._search_edit.textChanged.connect(self.searchTextChanged.emit)
        self._type_combo.currentIndexChanged.connect(
            lambda _i: self.typeFilterChanged.emit(self._type_combo.currentData())
        )
        self._status_combo.currentIndexChanged.connect(
            lambda _i: self.statusFilterChanged.emit(self._status_combo.currentData())
        )
        self._areas_check.toggled.connect(self.showAreasToggled.emit)

    # ------------------------------------------------------------------

    def _populate_types(self) -> None:
        self._type_combo.clear()
        self._type_combo.addItem("All Types", ALL)
        for kind in SurveyType:
            label = kind.value if kind is SurveyType.VSP else f"{kind.value} Seismic"
            self._type_combo.addItem(label, kind.value)

    def _populate_statuses(self) -> None:
        self._status_combo.clear()
        self._status_combo.addItem("All Status", ALL)
        for status in SurveyStatus:
            self._status_combo.addItem(status.value.capitalize(), status.value)

    # ------------------------------------------------------------------

    def set_counts(self, shown: int, total: int) -> None:
        self._count_label.setText(f"Showing {shown} of {total} surveys")
