"""
Qt table model over the session. Runs headless; skipped without PySide6.
"""

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

pytest.importorskip("PySide6.QtWidgets")

from PySide6.QtCore import Qt  # noqa: E402
from PySide6.QtWidgets import QApplication  # noqa: E402

from seiscat.gui.survey_table_model import (  # noqa: E402
    COL_QUALITY,
    COL_SELECTED,
    COL_SIZE,
    COL_STATUS,
    COL_SURVEY,
    COLUMNS,
    SurveyTableModel,
)


@pytest.fixture(scope="module")
def qt_app():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def model(qt_app, session):
    return SurveyTableModel(session)


def _display(model, row, col):
    return model.data(model.index(row, col), Qt.DisplayRole)


def test_shape(model):
    assert model.rowCount() == 6
    assert model.columnCount() == len(COLUMNS)
    assert model.headerData(COL_SURVEY, Qt.Horizontal) == "Survey"


def test_display_values(model):
    assert _display(model, 0, COL_SURVEY) == "North Sea Block 15/25 3D Survey"
    assert _display(model, 0, COL_SIZE) == "2.09 TB"
    assert _display(model, 0, COL_QUALITY) == "92%"
    assert _display(model, 0, COL_STATUS) == "Completed"


def test_checkbox_toggles_session_selection(model, session):
    index = model.index(1, COL_SELECTED)
    assert model.data(index, Qt.CheckStateRole) == Qt.Unchecked

    assert model.setData(index, Qt.Checked, Qt.CheckStateRole)
    assert session.state.selected_ids == {"2"}
    assert model.data(index, Qt.CheckStateRole) == Qt.Checked

    model.setData(index, Qt.Unchecked, Qt.CheckStateRole)
    assert session.state.selected_ids == frozenset()


def test_setting_same_check_state_is_noop(model, session):
    index = model.index(1, COL_SELECTED)
    model.setData(index, Qt.Unchecked, Qt.CheckStateRole)
    assert session.state.selected_ids == frozenset()


def test_other_columns_are_read_only(model):
    assert not model.setData(model.index(0, COL_SURVEY), "x", Qt.EditRole)


def test_refresh_follows_filters(model, session):
    session.set_status_filter("processing")
    model.refresh()

    assert model.rowCount() == 2
    assert model.survey_at(model.index(1, COL_SURVEY)).id == "6"


def test_select_all_and_clear(model, session):
    session.set_type_filter("2D")
    model.refresh()

    model.select_all()
    assert session.state.selected_ids == {"3", "6"}

    model.select_all()
    assert session.state.selected_ids == frozenset()
