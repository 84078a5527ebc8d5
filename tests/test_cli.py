"""
Command line interface, driven through typer's CliRunner.
"""

import json

from typer.testing import CliRunner

from seiscat.cli.app import app

from conftest import raw_row

runner = CliRunner()


def _write_catalog(tmp_path, rows, name="catalog.json"):
    path = tmp_path / name
    path.write_text(json.dumps(rows), encoding="utf-8")
    return path


# ============================================================================
# list
# ============================================================================

class TestList:

    def test_json_status_filter(self):
        result = runner.invoke(app, ["list", "--json", "-s", "processing"])
        assert result.exit_code == 0, result.output

        data = json.loads(result.stdout)
        assert [row["id"] for row in data] == ["2", "6"]
        assert data[0]["size"] == "4.27 TB"
        assert data[0]["survey_type"] == "4D"
        assert data[0]["acquisition_date"] == "2024-11-10"

    def test_json_type_and_search(self):
        result = runner.invoke(app, ["list", "--json", "-t", "3d", "-q", "basin"])
        assert result.exit_code == 0, result.output
        assert [row["id"] for row in json.loads(result.stdout)] == ["5"]

    def test_table(self):
        result = runner.invoke(app, ["list", "-t", "VSP"])
        assert result.exit_code == 0, result.output
        assert "Seismic surveys (1 of 6)" in result.output
        assert "94%" in result.output

    def test_no_matches(self):
        result = runner.invoke(app, ["list", "-q", "no such survey"])
        assert result.exit_code == 0
        assert "No seismic surveys found" in result.output

    def test_bad_status(self):
        result = runner.invoke(app, ["list", "-s", "lost"])
        assert result.exit_code != 0

    def test_file_option(self, tmp_path):
        path = _write_catalog(tmp_path, [raw_row(id="x9")])
        result = runner.invoke(app, ["list", "--json", "-f", str(path)])
        assert result.exit_code == 0, result.output
        assert [row["id"] for row in json.loads(result.stdout)] == ["x9"]

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["list", "-f", str(tmp_path / "nope.json")])
        assert result.exit_code == 1


# ============================================================================
# summary / show
# ============================================================================

def test_summary():
    result = runner.invoke(app, ["summary"])
    assert result.exit_code == 0, result.output
    assert "Total Surveys" in result.output
    assert "Processing" in result.output
    assert "10.91 TB" in result.output


def test_show():
    result = runner.invoke(app, ["show", "3"])
    assert result.exit_code == 0, result.output
    assert "TGS" in result.output
    assert "848.77 MB" in result.output


def test_show_treats_catalog_text_literally(tmp_path):
    path = _write_catalog(
        tmp_path, [raw_row(id="m1", contractor="[bold]Acme[/bold]", vessel="[red]Sea")]
    )
    result = runner.invoke(app, ["show", "m1", "-f", str(path)])
    assert result.exit_code == 0, result.output
    assert "[bold]Acme[/bold]" in result.output
    assert "[red]Sea" in result.output


def test_show_unknown_id():
    result = runner.invoke(app, ["show", "99"])
    assert result.exit_code == 1
    assert "No survey found" in result.output


# ============================================================================
# validate
# ============================================================================

class TestValidate:

    def test_seed_catalog_is_clean(self):
        from seiscat.config.paths import seed_surveys_path

        result = runner.invoke(app, ["validate", str(seed_surveys_path())])
        assert result.exit_code == 0, result.output
        assert "Accepted: 6" in result.output

    def test_rejected_records_fail(self, tmp_path):
        path = _write_catalog(
            tmp_path, [raw_row(id="ok"), raw_row(id="bad", quality=150)]
        )
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1
        assert "Accepted: 1" in result.output
        assert "Rejected records (1)" in result.output

    def test_jsonl_bad_line_is_listed(self, tmp_path):
        path = tmp_path / "catalog.jsonl"
        lines = [json.dumps(raw_row(id="a")), "{not json", json.dumps(raw_row(id="b"))]
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")

        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1
        assert "Accepted: 2" in result.output
        assert "Rejected records (1)" in result.output

    def test_unreadable_file(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text("{not json", encoding="utf-8")
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1


# ============================================================================
# map
# ============================================================================

class TestMap:

    def test_stdout(self):
        result = runner.invoke(app, ["map"])
        assert result.exit_code == 0, result.output

        data = json.loads(result.stdout)
        kinds = [f["properties"]["kind"] for f in data["features"]]
        assert kinds.count("coverage") == 5
        assert kinds.count("marker") == 6

    def test_no_areas(self):
        result = runner.invoke(app, ["map", "--no-areas"])
        assert result.exit_code == 0, result.output

        data = json.loads(result.stdout)
        assert all(f["geometry"]["type"] == "Point" for f in data["features"])

    def test_filtered_to_file(self, tmp_path):
        out = tmp_path / "maps" / "processing.geojson"
        result = runner.invoke(app, ["map", "-s", "processing", "-o", str(out)])
        assert result.exit_code == 0, result.output
        assert "Wrote 2 marker(s) and 2 area(s)" in result.output

        data = json.loads(out.read_text(encoding="utf-8"))
        ids = {f["properties"]["surveyId"] for f in data["features"]}
        assert ids == {"2", "6"}


# ============================================================================
# logging options
# ============================================================================

def test_log_file_option(tmp_path):
    log_file = tmp_path / "logs" / "seiscat.log"
    result = runner.invoke(app, ["-v", "--log-file", str(log_file), "summary"])
    assert result.exit_code == 0, result.output

    text = log_file.read_text(encoding="utf-8")
    assert "Logging initialized at DEBUG" in text
    assert "Loaded 6 surveys (0 rejected)" in text
