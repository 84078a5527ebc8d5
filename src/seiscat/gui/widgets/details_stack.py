from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from seiscat.catalog.typedefs import SurveySource
from seiscat.util.formatting import format_quality


class EmptyStateView(QWidget):
    """
    Placeholder view shown when no survey is focused.
    """

    def __init__(self, parent=None) -> None:
        super().__init__(parent)

        layout = QVBoxLayout(self)
        layout.setAlignment(Qt.AlignCenter)

        label = QLabel(
            "Select a Survey\n"
            "Click on a survey to view its details.",
            self,
        )
        label.setAlignment(Qt.AlignCenter)

        layout.addWidget(label)


class SurveyDetailsView(QWidget):
    """
    Read-only details for the focused survey.
    """

    dismissRequested = Signal()

    def __init__(self, parent=None) -> None:
        super().__init__(parent)

        main_layout = QVBoxLayout(self)

        header = QHBoxLayout()
        self._title = QLabel(self)
        self._title.setWordWrap(True)
        self._close_btn = QPushButton("×", self)
        self._close_btn.setFixedWidth(28)
        self._close_btn.clicked.connect(self.dismissRequested)
        header.addWidget(self._title, stretch=1)
        header.addWidget(self._close_btn)
        main_layout.addLayout(header)

        form = QFormLayout()
        main_layout.addLayout(form)

        self._fields: dict[str, QLabel] = {}
        for label in (
            "Status",
            "Type",
            "Size",
            "Quality",
            "Contractor",
            "Processing Stage",
            "Vessel",
            "Acquisition Date",
        ):
            value = QLabel(self)
            value.setTextInteractionFlags(Qt.TextSelectableByMouse)
            form.addRow(f"{label}:", value)
            self._fields[label] = value

        main_layout.addStretch(1)

    def set_survey(self, survey: SurveySource) -> None:
        self._title.setText(survey.name)
        self._fields["Status"].setText(survey.status.value)
        self._fields["Type"].setText(survey.survey_type.value)
        self._fields["Size"].setText(survey.size)
        self._fields["Quality"].setText(format_quality(survey.quality))
        self._fields["Contractor"].setText(survey.contractor)
        self._fields["Processing Stage"].setText(survey.processing_stage)
        self._fields["Vessel"].setText(survey.vessel)
        self._fields["Acquisition Date"].setText(survey.acquisition_date.isoformat())

    def clear(self) -> None:
        self._title.clear()
        for value in self._fields.values():
            value.clear()


class SurveyDetailsStack(QStackedWidget):
    """
    Switches between the empty state and the survey details.
    """

    def __init__(self, parent=None) -> None:
        super().__init__(parent)

        self._empty_view = EmptyStateView(self)
        self._details_view = SurveyDetailsView(self)

        self.addWidget(self._empty_view)
        self.addWidget(self._details_view)

        self.show_empty()

    def show_empty(self) -> None:
        self._details_view.clear()
        self.setCurrentWidget(self._empty_view)

    def show_survey(self, survey: SurveySource) -> None:
        self._details_view.set_survey(survey)
        self.setCurrentWidget(self._details_view)

    @property
    def details_view(self) -> SurveyDetailsView:
        return self._details_view
