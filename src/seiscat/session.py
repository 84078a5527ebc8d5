# src/seiscat/session.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional

from seiscat.catalog.store import CatalogStore, select_all, toggle_selection
from seiscat.catalog.typedefs import (
    CatalogSummary,
    StatusFilter,
    SurveySource,
    SurveyStatus,
    SurveyType,
    TypeFilter,
    parse_status_filter,
    parse_type_filter,
)
from seiscat.geo.focus import DetailPanel, PanelState
from seiscat.geo.projection import CoverageOutline, Marker, markers_for, polygons_for

logger = logging.getLogger(__name__)


# ============================================================================
# VIEW STATE
# ============================================================================

@dataclass(frozen=True, slots=True)
class ViewState:
    """
    Ephemeral per-view state. Created at mount, discarded at unmount,
    never persisted. Filters use None for "all".
    """
    selected_ids: frozenset[str] = frozenset()
    status_filter: Optional[SurveyStatus] = None
    type_filter: Optional[SurveyType] = None
    search_term: str = ""
    focused_survey_id: Optional[str] = None
    show_areas: bool = True


@dataclass(frozen=True, slots=True)
class ViewSnapshot:
    """
    Everything the renderers need for one revision of the view state.
    """
    revision: int
    state: ViewState
    visible: List[SurveySource] = field(default_factory=list)
    summary: Optional[CatalogSummary] = None
    markers: List[Marker] = field(default_factory=list)
    polygons: List[CoverageOutline] = field(default_factory=list)
    focused: Optional[SurveySource] = None

    @property
    def visible_ids(self) -> List[str]:
        return [s.id for s in self.visible]

    @property
    def all_visible_selected(self) -> bool:
        """
        Header checkbox state: checked only when the view is non-empty
        and every visible survey is selected.
        """
        return bool(self.visible) and all(
            s.id in self.state.selected_ids for s in self.visible
        )

    @property
    def focus_visible(self) -> bool:
        """
        False when the detail panel shows a survey that the current
        filters hide from the map.
        """
        if self.focused is None:
            return False
        return any(m.survey_id == self.focused.id for m in self.markers)


# ============================================================================
# SESSION
# ============================================================================

class CatalogSession:
    """
    View-state controller shared by the list and map views.

    - Applies discrete UI events to a ViewState
    - Recomputes filtered surveys, summary, markers and polygons on demand
    - Owns the map's DetailPanel

    Every mutation bumps ``revision``. A snapshot taken before a later
    mutation is stale; callers holding one can test it with is_current().
    Changing filters never prunes hidden selections; select_all() is the
    only operation that drops ids outside the visible set.
    """

    def __init__(self, store: CatalogStore) -> None:
        self._store = store
        self._state = ViewState()
        self._panel = DetailPanel()
        self._revision = 0

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def store(self) -> CatalogStore:
        return self._store

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def panel(self) -> DetailPanel:
        return self._panel

    def _update(self, **changes) -> None:
        self._state = replace(self._state, **changes)
        self._revision += 1

    # ------------------------------------------------------------------
    # Filter / search events
    # ------------------------------------------------------------------

    def set_search_term(self, text: str) -> None:
        self._update(search_term=text or "")

    def set_status_filter(self, value: StatusFilter) -> None:
        self._update(status_filter=parse_status_filter(value))

    def set_type_filter(self, value: TypeFilter) -> None:
        self._update(type_filter=parse_type_filter(value))

    def set_show_areas(self, show: bool) -> None:
        self._update(show_areas=bool(show))

    def toggle_show_areas(self) -> None:
        self.set_show_areas(not self._state.show_areas)

    # ------------------------------------------------------------------
    # Selection events
    # ------------------------------------------------------------------

    def toggle_selection(self, survey_id: str) -> None:
        if survey_id not in self._store:
            raise KeyError(f"Unknown survey id: {survey_id!r}")
        self._update(
            selected_ids=toggle_selection(self._state.selected_ids, survey_id)
        )

    def select_all(self) -> None:
        visible_ids = [s.id for s in self.visible()]
        self._update(
            selected_ids=select_all(self._state.selected_ids, visible_ids)
        )

    def clear_selection(self) -> None:
        self._update(selected_ids=frozenset())

    def selected_surveys(self) -> List[SurveySource]:
        """
        Selected surveys in collection order, including hidden ones.
        """
        return [s for s in self._store if s.id in self._state.selected_ids]

    # ------------------------------------------------------------------
    # Focus events
    # ------------------------------------------------------------------

    def focus(self, survey_id: str) -> SurveySource:
        survey = self._store.get(survey_id)
        self._panel.focus(survey)
        self._update(focused_survey_id=survey.id)
        return survey

    def unfocus(self) -> None:
        self._panel.dismiss()
        self._update(focused_survey_id=None)

    @property
    def panel_state(self) -> PanelState:
        return self._panel.state

    # ------------------------------------------------------------------
    # Derived outputs
    # ------------------------------------------------------------------

    def visible(self) -> List[SurveySource]:
        st = self._state
        return self._store.query(st.status_filter, st.type_filter, st.search_term)

    def summary(self) -> CatalogSummary:
        return self._store.aggregate()

    def markers(self) -> List[Marker]:
        return markers_for(self.visible())

    def polygons(self) -> List[CoverageOutline]:
        return polygons_for(self.visible(), self._state.show_areas)

    def focused_survey(self) -> Optional[SurveySource]:
        return self._panel.survey

    def snapshot(self) -> ViewSnapshot:
        visible = self.visible()
        snap = ViewSnapshot(
            revision=self._revision,
            state=self._state,
            visible=visible,
            summary=self._store.aggregate(),
            markers=markers_for(visible),
            polygons=polygons_for(visible, self._state.show_areas),
            focused=self._panel.survey,
        )
        logger.debug(
            "Snapshot r%d: %d visible, %d markers, %d polygons",
            snap.revision,
            len(snap.visible),
            len(snap.markers),
            len(snap.polygons),
        )
        return snap

    def is_current(self, snapshot: ViewSnapshot) -> bool:
        return snapshot.revision == self._revision
