# src/seiscat/catalog/typedefs.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from seiscat.util.formatting import format_bytes


LatLon = Tuple[float, float]

# Textual filter value meaning "do not filter on this attribute"
ALL = "all"


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class SurveyType(str, Enum):
    TWO_D = "2D"
    THREE_D = "3D"
    FOUR_D = "4D"
    VSP = "VSP"


class SurveyStatus(str, Enum):
    ACTIVE = "active"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ARCHIVED = "archived"


StatusFilter = Union[SurveyStatus, str, None]
TypeFilter = Union[SurveyType, str, None]


class QualityBand(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


def quality_band(quality: int) -> QualityBand:
    """
    Bucket a 0-100 quality score for the list view's quality bar.
    """
    if quality >= 90:
        return QualityBand.HIGH
    if quality >= 80:
        return QualityBand.MEDIUM
    return QualityBand.LOW


# ---------------------------------------------------------------------------
# Survey record
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SurveySource:
    """
    One seismic data-acquisition record.

    Records are built by seiscat.catalog.io after validation and are never
    mutated afterwards. The display size is derived from ``size_bytes``
    through format_bytes() and is not stored.

      - coordinates: (lat, lon) of the survey marker, None for surveys
                     that cannot be placed on the map
      - survey_area: closed coverage polygon as (lat, lon) vertices,
                     first vertex not repeated at the end
    """

    id: str
    name: str
    location: str
    survey_type: SurveyType
    status: SurveyStatus

    acquisition_date: date
    last_accessed: date
    size_bytes: int

    contractor: str
    vessel: str
    area: str
    owner: str
    processing_stage: str
    quality: int

    coordinates: Optional[LatLon] = None
    survey_area: Optional[Tuple[LatLon, ...]] = None

    @property
    def size(self) -> str:
        return format_bytes(self.size_bytes)

    @property
    def quality_band(self) -> QualityBand:
        return quality_band(self.quality)

    @property
    def has_coverage(self) -> bool:
        return bool(self.survey_area)


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CatalogSummary:
    """
    Counters shown above the survey table. Always computed over the full
    collection, never over the filtered view.
    """
    count: int
    total_bytes: int
    count_by_status: Dict[SurveyStatus, int] = field(default_factory=dict)

    @property
    def total_size(self) -> str:
        return format_bytes(self.total_bytes)


# ---------------------------------------------------------------------------
# Filter parsing
# ---------------------------------------------------------------------------

def parse_status_filter(value: StatusFilter) -> Optional[SurveyStatus]:
    """
    Map a filter choice to a status, with None (or "all") meaning no filter.

    Raises ValueError for anything that is neither "all" nor a known status.
    """
    if value is None or isinstance(value, SurveyStatus):
        return value
    if value.strip().lower() == ALL:
        return None
    return SurveyStatus(value.strip().lower())


def parse_type_filter(value: TypeFilter) -> Optional[SurveyType]:
    """
    Map a filter choice to a survey type, with None (or "all") meaning no
    filter. Type labels are matched case-insensitively ("vsp" -> VSP).
    """
    if value is None or isinstance(value, SurveyType):
        return value
    if value.strip().lower() == ALL:
        return None
    return SurveyType(value.strip().upper())
