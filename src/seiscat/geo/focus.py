# src/seiscat/geo/focus.py
from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Optional

from seiscat.catalog.typedefs import SurveySource

logger = logging.getLogger(__name__)


class PanelState(Enum):
    """
    Detail panel state. SHOWING always carries a focused survey.
    """
    EMPTY = auto()
    SHOWING = auto()


class DetailPanel:
    """
    Single-survey focus for the map's detail panel.

    - focus() moves EMPTY -> SHOWING, or SHOWING -> SHOWING with the new
      survey replacing the old one (no history)
    - dismiss() is the only way back to EMPTY
    - filtering never touches the panel; a focused survey may be absent
      from the visible markers
    """

    def __init__(self) -> None:
        self._survey: Optional[SurveySource] = None

    @property
    def state(self) -> PanelState:
        return PanelState.EMPTY if self._survey is None else PanelState.SHOWING

    @property
    def survey(self) -> Optional[SurveySource]:
        return self._survey

    @property
    def focused_id(self) -> Optional[str]:
        return None if self._survey is None else self._survey.id

    def focus(self, survey: SurveySource) -> None:
        if self._survey is not None and self._survey.id == survey.id:
            return
        logger.debug("Detail panel focus: %s", survey.id)
        self._survey = survey

    def dismiss(self) -> None:
        if self._survey is None:
            return
        logger.debug("Detail panel dismissed: %s", self._survey.id)
        self._survey = None

    # Aliases matching the map interaction vocabulary
    unfocus = dismiss
