"""
Shared fixtures: the bundled seed catalog and a survey factory.
"""

import copy
import logging
from datetime import date

import pytest

from seiscat.catalog.io import load_catalog
from seiscat.catalog.store import CatalogStore
from seiscat.catalog.typedefs import SurveySource, SurveyStatus, SurveyType
from seiscat.config.paths import CATALOG_ENV_VAR, seed_surveys_path
from seiscat.geo.icons import reset_default_icon
from seiscat.session import CatalogSession


SEED_TOTAL_BYTES = (
    2300000000000
    + 4700000000000
    + 890000000
    + 156000000
    + 3200000000000
    + 1800000000000
)


def make_survey(**overrides) -> SurveySource:
    """Create a SurveySource with every required field filled in."""
    defaults = {
        "id": "x1",
        "name": "Test Survey",
        "location": "Nowhere",
        "survey_type": SurveyType.THREE_D,
        "status": SurveyStatus.ACTIVE,
        "acquisition_date": date(2024, 1, 1),
        "last_accessed": date(2024, 6, 1),
        "size_bytes": 1024,
        "contractor": "Acme Geo",
        "vessel": "Test Vessel",
        "area": "10 km²",
        "owner": "QA Team",
        "processing_stage": "Stack",
        "quality": 80,
        "coordinates": (10.0, 20.0),
        "survey_area": ((9.9, 19.9), (10.1, 19.9), (10.1, 20.1)),
    }
    defaults.update(overrides)
    return SurveySource(**defaults)


def raw_row(**overrides) -> dict:
    """A valid catalog-file row (camelCase keys)."""
    row = {
        "id": "r1",
        "name": "Row Survey",
        "location": "Somewhere",
        "surveyType": "2D",
        "status": "archived",
        "acquisitionDate": "2020-02-02",
        "lastAccessed": "2021-03-03",
        "sizeBytes": 2048,
        "contractor": "Row Contractor",
        "vessel": "Row Vessel",
        "area": "5 km",
        "owner": "Row Team",
        "processingStage": "Stack",
        "quality": 70,
        "coordinates": [1.0, 2.0],
        "surveyArea": [[0.9, 1.9], [1.1, 1.9], [1.1, 2.1]],
    }
    row.update(overrides)
    return copy.deepcopy(row)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """
    Keep $SEISCAT_CATALOG, the default icon and CLI logging setup from
    leaking between tests.
    """
    monkeypatch.delenv(CATALOG_ENV_VAR, raising=False)
    reset_default_icon()
    yield
    reset_default_icon()

    pkg_logger = logging.getLogger("seiscat")
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()
    pkg_logger.setLevel(logging.NOTSET)


@pytest.fixture
def seed_surveys():
    report = load_catalog(seed_surveys_path())
    assert report.ok
    return report.accepted


@pytest.fixture
def seed_store(seed_surveys):
    return CatalogStore(seed_surveys)


@pytest.fixture
def session(seed_store):
    return CatalogSession(seed_store)
