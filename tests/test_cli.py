# Copyright (c) Syntropy Systems
"""Tests for crucible-ir CLI commands."""

import json

import yaml
from typer.testing import CliRunner

from crucible_ir.cli.main import app

runner = CliRunner()

VALID_EXPERIMENT = {
    "id": "smoke",
    "backend": {"id": "gpt4"},
    "pipeline": [{"name": "run"}],
    "reliability": {"ensemble": {"strategy": "majority"}},
}

def _write_json(path, data):
    path.write_text(json.dumps(data))
    return path

class TestInitCommand:
    """Tests for crucible-ir init."""

    def test_init_creates_config(self, workdir):
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        config_path = workdir / ".crucible" / "config.yaml"
        assert config_path.exists()
        data = yaml.safe_load(config_path.read_text())
        assert data["default_kind"] == "experiment"
        assert data["json_indent"] == 2

    def test_init_already_initialized(self, crucible_project):
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert "Already initialized" in result.output

class TestKindsCommand:
    """Tests for crucible-ir kinds."""

    def test_lists_kinds(self, workdir):
        result = runner.invoke(app, ["kinds"])

        assert result.exit_code == 0
        assert "experiment" in result.output
        assert "backend_ref" in result.output
        assert "TrainingRun" in result.output

class TestValidateCommand:
    """Tests for crucible-ir validate."""

    def test_valid_file(self, workdir):
        path = _write_json(workdir / "exp.json", VALID_EXPERIMENT)

        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 0
        assert "valid Experiment" in result.output

    def test_invalid_file_lists_problems(self, workdir):
        data = {**VALID_EXPERIMENT, "backend": {"id": None}, "pipeline": []}
        path = _write_json(workdir / "exp.json", data)

        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 1
        assert "backend.id must be a non-nil atom" in result.output
        assert "pipeline must contain at least one stage" in result.output

    def test_malformed_json(self, workdir):
        path = workdir / "bad.json"
        path.write_text('{"id": ')

        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 1
        assert "malformed_json" in result.output

    def test_yaml_with_kind(self, workdir):
        path = workdir / "backend.yaml"
        path.write_text("id: gpt4\nprofile: fast\n")

        result = runner.invoke(app, ["validate", str(path), "--kind", "backend_ref"])

        assert result.exit_code == 0
        assert "valid BackendRef" in result.output

    def test_default_kind_from_config(self, crucible_project):
        (crucible_project / ".crucible" / "config.yaml").write_text(
            "default_kind: stats\n"
        )
        path = _write_json(crucible_project / "stats.json", {"alpha": 1.5})

        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 1
        assert "alpha must be between 0 and 1" in result.output

    def test_unknown_kind(self, workdir):
        path = _write_json(workdir / "exp.json", VALID_EXPERIMENT)

        result = runner.invoke(app, ["validate", str(path), "--kind", "spaceship"])

        assert result.exit_code == 1
        assert "Unknown kind" in result.output

    def test_missing_file(self, workdir):
        result = runner.invoke(app, ["validate", str(workdir / "nope.json")])

        assert result.exit_code == 1
        assert "Cannot read" in result.output

class TestConvertCommand:
    """Tests for crucible-ir convert."""

    def test_yaml_to_json_on_stdout(self, workdir):
        path = workdir / "exp.yaml"
        path.write_text(yaml.safe_dump({**VALID_EXPERIMENT, "unknown": "dropped"}))

        result = runner.invoke(app, ["convert", str(path)])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["id"] == "smoke"
        assert data["backend"]["profile"] == "default"
        assert data["reliability"]["ensemble"]["strategy"] == "majority"
        assert "unknown" not in data

    def test_writes_output_file(self, workdir):
        path = _write_json(workdir / "exp.json", VALID_EXPERIMENT)
        output = workdir / "normalized.json"

        result = runner.invoke(app, ["convert", str(path), "-o", str(output)])

        assert result.exit_code == 0
        data = json.loads(output.read_text())
        assert data["pipeline"] == [
            {"name": "run", "module": None, "options": None, "enabled": True}
        ]

    def test_config_controls_output(self, crucible_project):
        (crucible_project / ".crucible" / "config.yaml").write_text(
            "json_indent: null\nexclude_none: true\n"
        )
        path = _write_json(crucible_project / "exp.json", VALID_EXPERIMENT)

        result = runner.invoke(app, ["convert", str(path)])

        assert result.exit_code == 0
        assert result.output.count("\n") == 1
        data = json.loads(result.output)
        assert "description" not in data
        assert data["pipeline"] == [{"name": "run", "enabled": True}]

    def test_decode_failure(self, workdir):
        path = _write_json(workdir / "backend.json", {"profile": "fast"})

        result = runner.invoke(app, ["convert", str(path), "--kind", "backend_ref"])

        assert result.exit_code == 1
        assert "invalid_payload" in result.output


class TestBrokenConfig:
    """Commands with an unreadable config file."""

    def _break_global_config(self, monkeypatch, temp_dir):
        global_dir = temp_dir / "home" / ".crucible"
        global_dir.mkdir(parents=True)
        (global_dir / "config.yaml").write_text("- not\n- a mapping\n")
        monkeypatch.setattr("crucible_ir.config.get_global_config_dir", lambda: global_dir)

    def test_init_ignores_broken_global_config(self, workdir, monkeypatch):
        self._break_global_config(monkeypatch, workdir)

        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert (workdir / ".crucible" / "config.yaml").exists()

    def test_other_commands_report_it(self, workdir, monkeypatch):
        self._break_global_config(monkeypatch, workdir)

        result = runner.invoke(app, ["kinds"])

        assert result.exit_code == 1
        assert "must contain a mapping" in result.output
