# src/seiscat/catalog/store.py
from __future__ import annotations

import logging
from typing import AbstractSet, Dict, Iterable, Iterator, List, Optional, Sequence

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

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------

def matches_status(survey: SurveySource, status: Optional[SurveyStatus]) -> bool:
    return status is None or survey.status == status


def matches_type(survey: SurveySource, survey_type: Optional[SurveyType]) -> bool:
    return survey_type is None or survey.survey_type == survey_type


def matches_search(survey: SurveySource, search_term: str) -> bool:
    """
    Case-insensitive substring match on name, location or contractor.
    An empty term matches everything.
    """
    if not search_term:
        return True

    needle = search_term.lower()
    return (
        needle in survey.name.lower()
        or needle in survey.location.lower()
        or needle in survey.contractor.lower()
    )


# ---------------------------------------------------------------------------
# Query / selection / aggregate
# ---------------------------------------------------------------------------

def query(
    surveys: Iterable[SurveySource],
    status_filter: StatusFilter = None,
    type_filter: TypeFilter = None,
    search_term: str = "",
) -> List[SurveySource]:
    """
    Return the surveys passing all three predicates, in collection order.

    Filters accept an enum member, its text value, or None / "all".
    The result is a fresh list; records are frozen, so callers cannot
    corrupt the source collection through it.
    """
    status = parse_status_filter(status_filter)
    survey_type = parse_type_filter(type_filter)
    search_term = search_term or ""

    return [
        s
        for s in surveys
        if matches_status(s, status)
        and matches_type(s, survey_type)
        and matches_search(s, search_term)
    ]


def toggle_selection(selected_ids: AbstractSet[str], survey_id: str) -> frozenset[str]:
    return frozenset(selected_ids) ^ {survey_id}


def select_all(
    selected_ids: AbstractSet[str],
    visible_ids: Iterable[str],
) -> frozenset[str]:
    """
    Combined select-all / clear-all bound to the visible set.

    If every visible id is already selected the selection is cleared,
    otherwise it becomes exactly the visible ids. Selections outside the
    visible set are dropped in both cases.
    """
    visible = frozenset(visible_ids)
    if visible.issubset(selected_ids):
        return frozenset()
    return visible


def aggregate(surveys: Iterable[SurveySource]) -> CatalogSummary:
    count = 0
    total_bytes = 0
    by_status: Dict[SurveyStatus, int] = {status: 0 for status in SurveyStatus}

    for s in surveys:
        count += 1
        total_bytes += s.size_bytes
        by_status[s.status] += 1

    return CatalogSummary(
        count=count,
        total_bytes=total_bytes,
        count_by_status=by_status,
    )


# ======================================================================
# CatalogStore
# ======================================================================

class CatalogStore:
    """
    Read-only, in-memory survey collection.

    Holds the canonical records for one session and exposes the query
    helpers above bound to that collection. Build it from the output of
    seiscat.catalog.io (already validated records).
    """

    def __init__(self, surveys: Sequence[SurveySource]):
        self._surveys: tuple[SurveySource, ...] = tuple(surveys)
        self._by_id: Dict[str, SurveySource] = {}

        for s in self._surveys:
            if s.id in self._by_id:
                raise ValueError(f"Duplicate survey id: {s.id!r}")
            self._by_id[s.id] = s

        logger.debug("Catalog store holds %d surveys", len(self._surveys))

    # ------------------------------------------------------------------
    # Collection access
    # ------------------------------------------------------------------

    @property
    def surveys(self) -> tuple[SurveySource, ...]:
        return self._surveys

    @property
    def ids(self) -> frozenset[str]:
        return frozenset(self._by_id)

    def get(self, survey_id: str) -> SurveySource:
        try:
            return self._by_id[survey_id]
        except KeyError:
            raise KeyError(f"Unknown survey id: {survey_id!r}") from None

    def __contains__(self, survey_id: object) -> bool:
        return survey_id in self._by_id

    def __len__(self) -> int:
        return len(self._surveys)

    def __iter__(self) -> Iterator[SurveySource]:
        return iter(self._surveys)

    # ------------------------------------------------------------------
    # Bound helpers
    # ------------------------------------------------------------------

    def query(
        self,
        status_filter: StatusFilter = None,
        type_filter: TypeFilter = None,
        search_term: str = "",
    ) -> List[SurveySource]:
        return query(self._surveys, status_filter, type_filter, search_term)

    def aggregate(self) -> CatalogSummary:
        return aggregate(self._surveys)
