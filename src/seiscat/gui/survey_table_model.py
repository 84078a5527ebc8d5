from __future__ import annotations

from typing import Any

from PySide6.QtCore import (
    QAbstractTableModel,
    QModelIndex,
    Qt,
)

from seiscat.catalog.typedefs import SurveySource
from seiscat.session import CatalogSession
from seiscat.util.formatting import format_quality


# ============================================================
# COLUMNS
# ============================================================

COL_SELECTED = 0
COL_SURVEY = 1
COL_TYPE = 2
COL_LOCATION = 3
COL_SIZE = 4
COL_QUALITY = 5
COL_STATUS = 6

COLUMNS = [
    "",             # checkbox
    "Survey",
    "Type",
    "Location",
    "Size",
    "Quality",
    "Status",
]


# ============================================================
# MODEL
# ============================================================

class SurveyTableModel(QAbstractTableModel):
    """
    Table model over the session's visible surveys.

    Column 0 is a checkbox bound to the session selection; every other
    column is read-only. Call refresh() after filters change.
    """

    def __init__(self, session: CatalogSession, parent=None) -> None:
        super().__init__(parent)
        self._session = session
        self._rows: list[SurveySource] = session.visible()

    # --------------------------------------------------------
    # Qt required overrides
    # --------------------------------------------------------

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(self._rows)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(COLUMNS)

    def headerData(
        self,
        section: int,
        orientation: Qt.Orientation,
        role: int = Qt.DisplayRole,
    ) -> Any:
        if role != Qt.DisplayRole:
            return None

        if orientation == Qt.Horizontal:
            return COLUMNS[section]

        return section + 1

    def data(self, index: QModelIndex, role: int = Qt.DisplayRole) -> Any:
        if not index.isValid():
            return None

        survey = self._rows[index.row()]
        col = index.column()

        if col == COL_SELECTED:
            if role == Qt.CheckStateRole:
                selected = survey.id in self._session.state.selected_ids
                return Qt.Checked if selected else Qt.Unchecked
            return None

        if role == Qt.ToolTipRole and col == COL_SURVEY:
            return f"{survey.contractor} • {survey.vessel}\nArea: {survey.area}"

        if role != Qt.DisplayRole:
            return None

        if col == COL_SURVEY:
            return survey.name
        if col == COL_TYPE:
            return survey.survey_type.value
        if col == COL_LOCATION:
            return survey.location
        if col == COL_SIZE:
            return survey.size
        if col == COL_QUALITY:
            return format_quality(survey.quality)
        if col == COL_STATUS:
            return survey.status.value.capitalize()

        return None

    def flags(self, index: QModelIndex) -> Qt.ItemFlags:
        if not index.isValid():
            return Qt.NoItemFlags

        if index.column() == COL_SELECTED:
            return Qt.ItemIsEnabled | Qt.ItemIsUserCheckable

        return Qt.ItemIsEnabled | Qt.ItemIsSelectable

    def setData(
        self,
        index: QModelIndex,
        value: Any,
        role: int = Qt.EditRole,
    ) -> bool:
        if not index.isValid():
            return False

        if index.column() != COL_SELECTED or role != Qt.CheckStateRole:
            return False

        survey = self._rows[index.row()]
        currently = survey.id in self._session.state.selected_ids
        wanted = _is_checked(value)
        if currently != wanted:
            self._session.toggle_selection(survey.id)

        self.dataChanged.emit(index, index, [Qt.CheckStateRole])
        return True

    # --------------------------------------------------------
    # Public helpers (used by the browser controller)
    # --------------------------------------------------------

    def survey_at(self, index: QModelIndex) -> SurveySource | None:
        if not index.isValid():
            return None
        return self._rows[index.row()]

    def select_all(self) -> None:
        """
        Header checkbox: select every visible row, or clear if all are
        already selected.
        """
        self._session.select_all()
        self._emit_checks_changed()

    def refresh(self) -> None:
        self.beginResetModel()
        self._rows = self._session.visible()
        self.endResetModel()

    def _emit_checks_changed(self) -> None:
        if not self._rows:
            return
        top_left = self.index(0, COL_SELECTED)
        bottom_right = self.index(self.rowCount() - 1, COL_SELECTED)
        self.dataChanged.emit(top_left, bottom_right, [Qt.CheckStateRole])


def _is_checked(value: Any) -> bool:
    # Views hand back either the enum or its integer value
    if value == Qt.Checked:
        return True
    try:
        return int(value) == Qt.Checked.value
    except (TypeError, ValueError, AttributeError):
        return False
