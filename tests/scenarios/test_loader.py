"""
Tests for loading scenario records from fixture files.
"""

import json

import pytest
import yaml

from scenariogen.exceptions import ScenarioSourceError
from scenariogen.scenarios.loader import expand_sources, load_scenario_records


class TestLoadScenarioRecords:
    """Test reading the supported fixture formats."""

    def test_json_single_record(self, tmp_path, make_record):
        """Test a JSON file holding one record."""
        path = tmp_path / "simple.json"
        path.write_text(json.dumps(make_record("simple")))

        records = load_scenario_records([path])

        assert [record["name"] for record in records] == ["simple"]

    def test_yaml_record_list(self, tmp_path, make_record):
        """Test a YAML file holding a list of records."""
        path = tmp_path / "batch.yaml"
        path.write_text(yaml.safe_dump([make_record("one"), make_record("two")]))

        records = load_scenario_records([path])

        assert [record["name"] for record in records] == ["one", "two"]

    def test_toml_scenarios_table(self, tmp_path):
        """Test a TOML file with a scenarios array of tables."""
        path = tmp_path / "batch.toml"
        path.write_text(
            "[[scenarios]]\n"
            'name = "first"\n'
            "[scenarios.environment]\n"
            'python = "3.12"\n'
            "[scenarios.expected]\n"
            "satisfiable = false\n"
        )

        records = load_scenario_records([path])

        assert records == [
            {
                "name": "first",
                "environment": {"python": "3.12"},
                "expected": {"satisfiable": False},
            }
        ]

    def test_mapping_with_scenarios_key(self, tmp_path, make_record):
        """Test a mapping wrapping the records under "scenarios"."""
        path = tmp_path / "batch.json"
        path.write_text(json.dumps({"scenarios": [make_record("wrapped")]}))

        assert load_scenario_records([path])[0]["name"] == "wrapped"

    def test_empty_yaml_file(self, tmp_path):
        """Test an empty YAML file contributes no records."""
        path = tmp_path / "empty.yml"
        path.write_text("")

        assert load_scenario_records([path]) == []

    def test_order_across_files(self, tmp_path, make_record):
        """Test files keep argument order."""
        second = tmp_path / "b.json"
        first = tmp_path / "a.json"
        second.write_text(json.dumps(make_record("from-b")))
        first.write_text(json.dumps(make_record("from-a")))

        records = load_scenario_records([second, first])

        assert [record["name"] for record in records] == ["from-b", "from-a"]


class TestExpandSources:
    """Test expansion of fixture paths."""

    def test_directory_sorted(self, tmp_path):
        """Test directories expand to supported files in sorted order."""
        for name in ("c.yaml", "a.json", "b.toml", "notes.txt"):
            (tmp_path / name).write_text("")

        files = expand_sources([tmp_path])

        assert [path.name for path in files] == ["a.json", "b.toml", "c.yaml"]

    def test_missing_path(self, tmp_path):
        """Test a missing path is reported."""
        with pytest.raises(ScenarioSourceError, match="no such file"):
            expand_sources([tmp_path / "missing.json"])

    def test_unsupported_extension(self, tmp_path):
        """Test files with unknown extensions are rejected."""
        path = tmp_path / "scenarios.txt"
        path.write_text("")

        with pytest.raises(ScenarioSourceError, match="unsupported extension"):
            expand_sources([path])


class TestInvalidSources:
    """Test undecodable fixture files."""

    def test_invalid_json(self, tmp_path):
        """Test malformed JSON is reported with the file path."""
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(ScenarioSourceError) as exc_info:
            load_scenario_records([path])

        assert exc_info.value.path == str(path)
        assert "invalid json" in exc_info.value.reason

    def test_scalar_document(self, tmp_path):
        """Test a document that is neither a record nor a list."""
        path = tmp_path / "scalar.yaml"
        path.write_text("42\n")

        with pytest.raises(ScenarioSourceError, match="got int"):
            load_scenario_records([path])

    def test_non_mapping_record(self, tmp_path):
        """Test list entries must be mappings."""
        path = tmp_path / "list.json"
        path.write_text(json.dumps(["simple"]))

        with pytest.raises(ScenarioSourceError, match="record 0"):
            load_scenario_records([path])
