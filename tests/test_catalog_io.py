"""
Catalog loading and record validation.
"""

import json
import logging
from datetime import date

import pytest

from seiscat.catalog.io import (
    MalformedLine,
    load_catalog,
    parse_survey,
    read_rows,
    validate_rows,
)
from seiscat.catalog.typedefs import SurveyStatus, SurveyType
from seiscat.config.paths import CATALOG_ENV_VAR, catalog_path, seed_surveys_path
from seiscat.errors import SurveyValidationError

from conftest import raw_row


# ============================================================================
# parse_survey
# ============================================================================

class TestParseSurvey:

    def test_valid_row(self):
        survey = parse_survey(raw_row())
        assert survey.id == "r1"
        assert survey.survey_type is SurveyType.TWO_D
        assert survey.status is SurveyStatus.ARCHIVED
        assert survey.acquisition_date == date(2020, 2, 2)
        assert survey.size_bytes == 2048
        assert survey.size == "2 KB"
        assert survey.coordinates == (1.0, 2.0)
        assert survey.survey_area == ((0.9, 1.9), (1.1, 1.9), (1.1, 2.1))

    def test_stored_size_is_ignored(self):
        survey = parse_survey(raw_row(size="999 TB"))
        assert survey.size == "2 KB"

    def test_coordinates_optional(self):
        row = raw_row()
        del row["coordinates"]
        del row["surveyArea"]
        survey = parse_survey(row)
        assert survey.coordinates is None
        assert survey.survey_area is None

    def test_snake_case_keys_accepted(self):
        row = raw_row()
        row["survey_type"] = row.pop("surveyType")
        row["size_bytes"] = row.pop("sizeBytes")
        assert parse_survey(row).survey_type is SurveyType.TWO_D

    def test_numeric_id_is_stringified(self):
        assert parse_survey(raw_row(id=7)).id == "7"

    @pytest.mark.parametrize("quality", [-1, 101])
    def test_quality_out_of_range(self, quality):
        with pytest.raises(SurveyValidationError, match="quality"):
            parse_survey(raw_row(quality=quality))

    def test_bool_is_not_an_integer(self):
        with pytest.raises(SurveyValidationError):
            parse_survey(raw_row(quality=True))

    def test_negative_size(self):
        with pytest.raises(SurveyValidationError, match="sizeBytes"):
            parse_survey(raw_row(sizeBytes=-5))

    def test_unknown_status(self):
        with pytest.raises(SurveyValidationError, match="unknown status"):
            parse_survey(raw_row(status="lost"))

    def test_unknown_type(self):
        with pytest.raises(SurveyValidationError, match="unknown surveyType"):
            parse_survey(raw_row(surveyType="5D"))

    def test_missing_type_is_reported_as_missing(self):
        row = raw_row()
        del row["surveyType"]
        with pytest.raises(SurveyValidationError, match="missing required field"):
            parse_survey(row)

    def test_missing_id(self):
        row = raw_row()
        del row["id"]
        with pytest.raises(SurveyValidationError) as exc_info:
            parse_survey(row, index=3)
        assert exc_info.value.survey_id is None
        assert str(exc_info.value).startswith("record #3:")

    def test_bad_date(self):
        with pytest.raises(SurveyValidationError, match="ISO date"):
            parse_survey(raw_row(acquisitionDate="15/08/2023"))

    def test_latitude_out_of_range(self):
        with pytest.raises(SurveyValidationError, match="latitude"):
            parse_survey(raw_row(coordinates=[91.0, 0.0]))

    def test_longitude_out_of_range(self):
        with pytest.raises(SurveyValidationError, match="longitude"):
            parse_survey(raw_row(coordinates=[0.0, 181.0]))

    def test_area_needs_three_vertices(self):
        with pytest.raises(SurveyValidationError, match="at least 3"):
            parse_survey(raw_row(surveyArea=[[0.0, 0.0], [1.0, 1.0]]))

    def test_error_carries_id(self):
        with pytest.raises(SurveyValidationError) as exc_info:
            parse_survey(raw_row(status="lost"))
        err = exc_info.value
        assert err.survey_id == "r1"
        assert err.reason == "unknown status: 'lost'"
        assert str(err) == "survey 'r1': unknown status: 'lost'"

    def test_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_survey(raw_row(quality=500))

    def test_non_mapping_row(self):
        with pytest.raises(SurveyValidationError, match="JSON object"):
            parse_survey(["not", "a", "row"])


# ============================================================================
# validate_rows
# ============================================================================

class TestValidateRows:

    def test_bad_rows_do_not_block_good_ones(self):
        rows = [raw_row(id="a"), raw_row(id="b", quality=200), raw_row(id="c")]
        report = validate_rows(rows)

        assert [s.id for s in report.accepted] == ["a", "c"]
        assert [e.survey_id for e in report.rejected] == ["b"]
        assert not report.ok

    def test_duplicate_id_rejected(self):
        report = validate_rows([raw_row(id="a"), raw_row(id="a")])
        assert len(report.accepted) == 1
        assert report.rejected[0].reason == "duplicate id"
        assert report.rejected[0].index == 1

    def test_rejections_are_logged(self, caplog):
        caplog.set_level(logging.INFO, logger="seiscat")
        validate_rows([raw_row(status="lost")])

        assert "Rejected catalog record" in caplog.text
        assert "Loaded 0 surveys (1 rejected)" in caplog.text


# ============================================================================
# File loading
# ============================================================================

class TestReadRows:

    def test_json_array(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps([raw_row()]), encoding="utf-8")
        assert read_rows(path)[0]["id"] == "r1"

    def test_json_object_with_surveys(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({"surveys": [raw_row()]}), encoding="utf-8")
        assert len(read_rows(path)) == 1

    def test_jsonl_skips_blank_lines(self, tmp_path):
        path = tmp_path / "catalog.jsonl"
        lines = [json.dumps(raw_row(id="a")), "", json.dumps(raw_row(id="b"))]
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        assert [r["id"] for r in read_rows(path)] == ["a", "b"]

    def test_jsonl_keeps_undecodable_line_in_place(self, tmp_path):
        path = tmp_path / "catalog.jsonl"
        path.write_text(
            json.dumps(raw_row(id="a")) + "\n{not json\n",
            encoding="utf-8",
        )
        rows = read_rows(path)

        assert rows[0]["id"] == "a"
        assert isinstance(rows[1], MalformedLine)
        assert rows[1].lineno == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_rows(tmp_path / "nope.json")

    def test_wrong_top_level_shape(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({"items": []}), encoding="utf-8")
        with pytest.raises(ValueError):
            read_rows(path)


class TestLoadCatalog:

    def test_seed_catalog_is_valid(self):
        report = load_catalog(seed_surveys_path())
        assert report.ok
        assert [s.id for s in report.accepted] == ["1", "2", "3", "4", "5", "6"]

    def test_default_is_seed_catalog(self):
        assert catalog_path() == seed_surveys_path()
        assert len(load_catalog().accepted) == 6

    def test_env_var_overrides_default(self, tmp_path, monkeypatch):
        path = tmp_path / "mine.json"
        path.write_text(json.dumps([raw_row(id="env")]), encoding="utf-8")
        monkeypatch.setenv(CATALOG_ENV_VAR, str(path))

        assert catalog_path() == path
        assert [s.id for s in load_catalog().accepted] == ["env"]

    def test_explicit_path_beats_env_var(self, tmp_path, monkeypatch):
        monkeypatch.setenv(CATALOG_ENV_VAR, str(tmp_path / "ignored.json"))
        assert catalog_path(seed_surveys_path()) == seed_surveys_path()

    def test_jsonl_bad_line_is_rejected_and_rest_loads(self, tmp_path):
        path = tmp_path / "catalog.jsonl"
        lines = [json.dumps(raw_row(id="a")), "{not json", json.dumps(raw_row(id="b"))]
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")

        report = load_catalog(path)

        assert [s.id for s in report.accepted] == ["a", "b"]
        assert len(report.rejected) == 1
        err = report.rejected[0]
        assert err.index == 1
        assert err.survey_id is None
        assert err.reason.startswith("line 2 is not valid JSON")
