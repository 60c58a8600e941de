"""Tests for the batch runner and command line entry point."""

import json

import pytest
from expectdiff import BatchRunner, InvalidConfigError, run_batch
from expectdiff.cli import EXIT_DIFFERENCES, EXIT_ERROR, EXIT_MATCH, main
from expectdiff.jsonpath_utils import COMPILE_CACHE_SIZE, JSONPathMatcher, _compile


def write_payload(folder, name, expected, actual, **extra):
    item = {"expected": expected, "actual": actual, **extra}
    (folder / f"{name}.json").write_text(json.dumps({"compare_item": item}))


@pytest.fixture
def payloads(tmp_path):
    folder = tmp_path / "payloads"
    folder.mkdir()
    write_payload(folder, "a_same", {"x": 1}, {"x": 1}, request_id="1")
    write_payload(folder, "b_changed", {"x": 1, "ts": "a"}, {"x": 2, "ts": "b"}, request_id="2")
    write_payload(folder, "c_only_ts", {"ts": "a"}, {"ts": "b"}, request_id="3")
    (folder / "d_broken.json").write_text("{not json")
    return folder


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "channel.yaml"
    path.write_text(
        "channel:\n"
        "  configuration:\n"
        "    ignore_paths:\n"
        "      - ts\n"
        "report_fields:\n"
        "  - $.compare_item.request_id\n"
    )
    return path


class TestBatchRunner:
    """Test running a folder of payloads."""

    def test_run_folder(self, payloads, config_file):
        """Test pass/fail/error accounting over a folder."""
        report = run_batch(str(config_file), str(payloads), print_report=False)

        assert report.total == 4
        assert report.passed == 2
        assert report.failed == 2
        assert report.errored == 1
        assert report.breakdown["no_differences"] == ["a_same", "c_only_ts"]
        assert report.breakdown["with_differences"] == ["b_changed"]
        assert report.breakdown["errors"] == ["d_broken"]

    def test_scenario_details(self, payloads, config_file):
        """Test scenario results carry differences, summaries and labels."""
        report = run_batch(str(config_file), str(payloads), print_report=False)
        changed = report.scenarios[1]

        assert changed.name == "b_changed"
        assert changed.differences == [
            {"path": "x", "type": "mismatch", "expected": 1, "actual": 2}
        ]
        assert changed.summary["mismatch"] == 1
        assert changed.labels == {"$.compare_item.request_id": "2"}

    def test_error_scenario(self, payloads):
        """Test unparseable payloads become error scenarios, not exceptions."""
        report = BatchRunner().run_folder(str(payloads), print_report=False)
        broken = report.scenarios[-1]

        assert broken.passed is False
        assert broken.error["code"] == "MALFORMED_INPUT"

    def test_without_config(self, payloads):
        """Test a batch without configuration compares everything."""
        report = run_batch(None, str(payloads), print_report=False)
        assert report.breakdown["with_differences"] == ["b_changed", "c_only_ts"]

    def test_report_serialization(self, payloads, config_file):
        """Test the report is JSON serializable."""
        report = run_batch(str(config_file), str(payloads), print_report=False)
        data = json.loads(json.dumps(report.to_dict()))
        assert data["summary"]["total_scenarios"] == 4
        assert data["summary"]["pass_rate"] == "50.0%"

    def test_print_summary(self, payloads, capsys):
        """Test console output lists each scenario."""
        run_batch(None, str(payloads), print_report=True)
        out = capsys.readouterr().out
        assert "PASS: a_same" in out
        assert "FAIL: d_broken" in out
        assert "Results: 1/4 passed" in out

    def test_missing_folder(self, tmp_path):
        """Test a missing payload folder."""
        with pytest.raises(FileNotFoundError):
            BatchRunner().run_folder(str(tmp_path / "missing"))

    def test_invalid_ignore_paths_in_config(self):
        """Test configuration problems surface when the runner is built."""
        with pytest.raises(InvalidConfigError):
            BatchRunner({"ignore_paths": [1]})

    @pytest.mark.parametrize("fields", ["$.a", [1], {"a": "$.a"}])
    def test_invalid_report_fields(self, fields):
        """Test report_fields must be an array of JSONPath strings."""
        with pytest.raises(InvalidConfigError, match='"report_fields" must be an array of strings'):
            BatchRunner({"report_fields": fields})

    def test_report_fields_optional(self):
        """Test absent or null report_fields yield no labels."""
        assert BatchRunner({}).report_fields == []
        assert BatchRunner({"report_fields": None}).report_fields == []
        assert BatchRunner({"report_fields": ["$.a"]}).report_fields == ["$.a"]


class TestJSONPathMatcher:
    """Test JSONPath compilation and lookup."""

    def test_compiled_expressions_reused(self):
        """Test compiling the same expression twice returns the same object."""
        assert JSONPathMatcher.compile("$.compare_item.id") is JSONPathMatcher.compile("$.compare_item.id")

    def test_compile_cache_is_bounded(self):
        """Test the compilation cache has a fixed size."""
        assert _compile.cache_info().maxsize == COMPILE_CACHE_SIZE

    def test_extract_labels(self):
        """Test single, multiple and missing matches."""
        data = {"id": 7, "items": [{"n": 1}, {"n": 2}]}
        labels = JSONPathMatcher.extract_labels(data, ["$.id", "$.items[*].n", "$.nope"])
        assert labels == {"$.id": 7, "$.items[*].n": [1, 2], "$.nope": None}


class TestCli:
    """Test the expectdiff command."""

    def test_match(self, tmp_path, capsys):
        """Test identical sections exit with 0."""
        path = tmp_path / "p.json"
        path.write_text(json.dumps({"expected": {"a": 1}, "actual": {"a": 1}}))
        assert main([str(path)]) == EXIT_MATCH
        assert "No differences detected" in capsys.readouterr().out

    def test_differences(self, tmp_path, capsys):
        """Test differences are listed and exit with 1."""
        path = tmp_path / "p.json"
        path.write_text(json.dumps({"expected": {"a": 1}, "actual": {"a": 2}}))
        assert main([str(path)]) == EXIT_DIFFERENCES
        out = capsys.readouterr().out
        assert "1 difference found" in out
        assert "[mismatch] a" in out
        assert "--- expected.json" in out

    def test_json_output_with_config(self, tmp_path, capsys):
        """Test --json output and a YAML configuration file."""
        path = tmp_path / "p.json"
        path.write_text(json.dumps({"expected": {"a": 1, "ts": 1}, "actual": {"a": 1, "ts": 2}}))
        config = tmp_path / "c.yaml"
        config.write_text("ignore_paths: [ts]\n")

        assert main([str(path), "-c", str(config), "--json"]) == EXIT_MATCH
        data = json.loads(capsys.readouterr().out)
        assert data["differences"] == []
        assert data["unifiedDiff"] == ""
        assert data["actual"] == {"a": 1, "ts": 2}

    def test_error(self, tmp_path, capsys):
        """Test errors are reported on stderr with exit code 2."""
        path = tmp_path / "p.json"
        path.write_text("{not valid json")
        assert main([str(path)]) == EXIT_ERROR
        error = json.loads(capsys.readouterr().err)
        assert error["success"] is False
        assert error["error"]["code"] == "MALFORMED_INPUT"
