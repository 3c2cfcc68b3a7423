"""Integration tests for CLI."""

import json
import logging

import pytest
from click.testing import CliRunner
from rich.logging import RichHandler

from featureflow.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def portal(examples_dir):
    return str(examples_dir / "course_portal.json")


class TestValidateCommand:
    def test_validate_valid_file(self, runner, portal):
        result = runner.invoke(main, ["validate", portal])

        assert result.exit_code == 0
        assert "Validation passed" in result.output

    def test_validate_with_errors(self, runner, examples_dir):
        result = runner.invoke(
            main, ["validate", str(examples_dir / "invalid" / "dangling_edge.json")]
        )

        assert result.exit_code == 1
        assert "DANGLING_EDGE" in result.output

    def test_validate_with_warnings(self, runner, examples_dir):
        result = runner.invoke(
            main, ["validate", str(examples_dir / "invalid" / "isolated_node.yaml")]
        )

        # Warnings don't cause failure by default
        assert result.exit_code == 0
        assert "ISOLATED_NODE" in result.output

    def test_validate_strict_mode(self, runner, examples_dir):
        result = runner.invoke(
            main,
            ["validate", str(examples_dir / "invalid" / "isolated_node.yaml"), "--strict"],
        )

        assert result.exit_code == 1

    def test_validate_json_output(self, runner, portal):
        result = runner.invoke(main, ["validate", portal, "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["valid"] is True
        assert data["issues"] == []

    def test_format_from_environment(self, runner, portal):
        result = runner.invoke(main, ["validate", portal], env={"FEATUREFLOW_FORMAT": "json"})

        assert json.loads(result.output)["valid"] is True

    def test_validate_structurally_broken_file(self, runner, examples_dir):
        result = runner.invoke(
            main, ["validate", str(examples_dir / "invalid" / "missing_target.json")]
        )

        assert result.exit_code == 2
        assert "Graph validation error" in result.output
        assert "edges.0" in result.output

    def test_validate_nonexistent_file(self, runner):
        result = runner.invoke(main, ["validate", "/nonexistent/graph.json"])

        assert result.exit_code == 2


class TestLogging:
    def test_verbose_logs_through_rich(self, runner, portal, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

        result = runner.invoke(main, ["--verbose", "validate", portal])

        assert result.exit_code == 0
        assert calls[0]["level"] == logging.DEBUG
        handler = calls[0]["handlers"][0]
        assert isinstance(handler, RichHandler)
        assert handler.console.stderr

    def test_default_level_is_warning(self, runner, portal, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

        runner.invoke(main, ["validate", portal])

        assert calls[0]["level"] == logging.WARNING


class TestConditionsCommand:
    def test_lists_conditions(self, runner, portal):
        result = runner.invoke(main, ["conditions", portal])

        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert lines == [
            "age (number): 17",
            "exam_state (enum): open",
            "is_author (boolean): true",
            "role (enum): admin, guest, instructor",
        ]

    def test_json_output(self, runner, portal):
        result = runner.invoke(main, ["conditions", portal, "--format", "json"])

        data = json.loads(result.output)
        assert data[0] == {"name": "age", "type": "number", "options": [17]}


class TestSimulateCommand:
    def test_empty_context_reaches_everything(self, runner, portal):
        result = runner.invoke(main, ["simulate", portal, "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["unreachable_nodes"] == []
        assert all(data["valid_edges"].values())

    def test_set_values(self, runner, portal):
        result = runner.invoke(
            main,
            ["simulate", portal, "--set", "role=guest", "--format", "json"],
        )

        data = json.loads(result.output)
        assert data["context"] == {"role": "guest"}
        assert data["reachable_nodes"] == ["dashboard"]
        assert data["valid_edges"]["e-dashboard-course"] is False

    def test_context_file_with_override(self, runner, portal, examples_dir):
        result = runner.invoke(
            main,
            [
                "simulate",
                portal,
                "--context-file",
                str(examples_dir / "instructor_context.yaml"),
                "--set",
                "age=16",
                "--set",
                "is_author=false",
                "--format",
                "json",
            ],
        )

        data = json.loads(result.output)
        assert data["context"]["age"] == 16
        assert data["reachable_nodes"] == ["dashboard", "course"]
        assert data["valid_edges"]["e-course-exam"] is False
        assert data["valid_edges"]["e-exam-grading"] is False

    def test_text_output(self, runner, portal):
        result = runner.invoke(main, ["simulate", portal, "--set", "role=admin"])

        assert result.exit_code == 0
        assert "role = admin" in result.output
        assert "✔ admin (Admin Panel)" in result.output
        assert "✘ grading (Grading)" in result.output
        assert "5 of 6 node(s) reachable" in result.output

    def test_summary_ignores_undeclared_targets(self, runner, tmp_path):
        path = tmp_path / "dangling_target.json"
        path.write_text(
            json.dumps(
                {
                    "nodes": [{"id": "A", "position": {"x": 0, "y": 0}, "data": {"label": "A"}}],
                    "edges": [{"id": "e1", "source": "A", "target": "X"}],
                }
            )
        )

        result = runner.invoke(main, ["simulate", str(path)])

        assert result.exit_code == 0
        assert "1 of 1 node(s) reachable" in result.output

    def test_bad_assignment(self, runner, portal):
        result = runner.invoke(main, ["simulate", portal, "--set", "role"])

        assert result.exit_code == 2


class TestTraceCommand:
    def test_trace_leaf(self, runner, portal):
        result = runner.invoke(main, ["trace", portal, "grading", "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["highlighted_nodes"] == ["dashboard", "course", "exam", "grading"]
        assert data["highlighted_edges"] == [
            "e-dashboard-course",
            "e-course-exam",
            "e-exam-grading",
        ]

    def test_trace_root(self, runner, portal):
        result = runner.invoke(main, ["trace", portal, "dashboard"])

        assert result.exit_code == 0
        assert "(none)" in result.output

    def test_unknown_node(self, runner, portal):
        result = runner.invoke(main, ["trace", portal, "nowhere"])

        assert result.exit_code == 2


class TestConvertCommand:
    def test_json_to_yaml(self, runner, portal, tmp_path):
        import yaml

        out = tmp_path / "portal.yaml"

        result = runner.invoke(main, ["convert", portal, str(out)])

        assert result.exit_code == 0
        data = yaml.safe_load(out.read_text())
        assert len(data["nodes"]) == 6
        assert len(data["edges"]) == 5
