"""
Command line tests.

The CLI is a dispatcher: these tests check exit codes, what is printed,
and that missing inputs are prompted for.
"""

import json

import pytest

from roster_render.batch.models import BatchRequest
from roster_render.batch.orchestrator import NO_SELECTION_MESSAGE, SUCCESS_MESSAGE
from roster_render.cli.main import (
    EXIT_PRECONDITION,
    EXIT_RUN_FAILURE,
    EXIT_SUCCESS,
    EXIT_SYSTEM_ERROR,
    main,
)
from roster_render.cli.prompt import ConfigPrompt


pytestmark = pytest.mark.cli


def _run_cli(argv):
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


def _write(path, data):
    path.write_text(json.dumps(data))
    return path


class TestRunCommand:

    def test_success(self, manifest_file, output_root, capsys):
        code = _run_cli([
            "run", "--project", str(manifest_file),
            "--start", "1", "--end", "2", "--output", str(output_root),
            "--no-prompt",
        ])

        assert code == EXIT_SUCCESS
        assert SUCCESS_MESSAGE in capsys.readouterr().out
        assert (output_root / "002_First2_Last2").is_dir()

    def test_json_output(self, manifest_file, output_root, capsys):
        code = _run_cli([
            "run", "--project", str(manifest_file),
            "--start", "5", "--end", "5", "--output", str(output_root),
            "--no-prompt", "--json",
        ])

        assert code == EXIT_SUCCESS
        result = json.loads(capsys.readouterr().out)
        assert result["state"] == "done"
        assert result["batches"][0]["folder"] == str(output_root / "007_Jane_Doe")
        assert len(result["batches"][0]["jobs"]) == 2

    def test_precondition_failure(self, tmp_path, manifest_data, output_root, capsys):
        for item in manifest_data["items"]:
            item["selected"] = False
        manifest = _write(tmp_path / "project.json", manifest_data)

        code = _run_cli([
            "run", "--project", str(manifest),
            "--start", "1", "--end", "1", "--output", str(output_root),
            "--no-prompt",
        ])

        assert code == EXIT_PRECONDITION
        assert NO_SELECTION_MESSAGE in capsys.readouterr().out

    def test_missing_range_without_prompt(self, manifest_file, output_root):
        code = _run_cli([
            "run", "--project", str(manifest_file), "--output", str(output_root), "--no-prompt",
        ])
        assert code == EXIT_PRECONDITION

    def test_mid_run_failure(self, tmp_path, manifest_data, output_root, capsys):
        manifest_data["render_queue"]["templates"] = ["Proxy"]
        manifest = _write(tmp_path / "project.json", manifest_data)

        code = _run_cli([
            "run", "--project", str(manifest),
            "--start", "1", "--end", "3", "--output", str(output_root),
            "--no-prompt",
        ])

        assert code == EXIT_RUN_FAILURE
        assert "Error in script:" in capsys.readouterr().out

    def test_missing_manifest(self, tmp_path, output_root):
        code = _run_cli([
            "run", "--project", str(tmp_path / "missing.json"),
            "--start", "1", "--end", "1", "--output", str(output_root), "--no-prompt",
        ])
        assert code == EXIT_SYSTEM_ERROR

    def test_invalid_settings(self, tmp_path, manifest_file, output_root):
        settings = _write(tmp_path / "settings.json", {"roster_size": 0})

        code = _run_cli([
            "run", "--project", str(manifest_file), "--settings", str(settings),
            "--start", "1", "--end", "1", "--output", str(output_root), "--no-prompt",
        ])
        assert code == EXIT_SYSTEM_ERROR

    def test_settings_wrong_type(self, tmp_path, manifest_file, output_root, capsys):
        settings = _write(tmp_path / "settings.json", {"container_extension": 5})

        code = _run_cli([
            "run", "--project", str(manifest_file), "--settings", str(settings),
            "--start", "1", "--end", "1", "--output", str(output_root), "--no-prompt",
        ])

        assert code == EXIT_SYSTEM_ERROR
        assert "container_extension" in capsys.readouterr().err

    def test_unreadable_manifest(self, tmp_path, output_root):
        manifest = tmp_path / "project.json"
        manifest.write_bytes(b"\xff\xfe")

        code = _run_cli([
            "run", "--project", str(manifest),
            "--start", "1", "--end", "1", "--output", str(output_root), "--no-prompt",
        ])
        assert code == EXIT_SYSTEM_ERROR

    def test_settings_change_roster_size(self, tmp_path, manifest_file, output_root):
        settings = _write(tmp_path / "settings.json", {"roster_size": 3})

        code = _run_cli([
            "run", "--project", str(manifest_file), "--settings", str(settings),
            "--start", "1", "--end", "4", "--output", str(output_root), "--no-prompt",
        ])
        assert code == EXIT_PRECONDITION

    def test_prompts_for_missing_inputs(self, manifest_file, output_root, monkeypatch):
        answers = iter(["2", "3", str(output_root)])
        monkeypatch.setattr("builtins.input", lambda _prompt: next(answers))

        code = _run_cli(["run", "--project", str(manifest_file)])

        assert code == EXIT_SUCCESS
        assert (output_root / "003_First3_Last3").is_dir()
        assert not (output_root / "001_First1_Last1").exists()

    def test_no_prompt_when_project_unusable(self, tmp_path, manifest_data, monkeypatch, capsys):
        """A broken project is reported before the operator is asked anything."""
        manifest_data["items"][0]["name"] = "Renamed"
        manifest = _write(tmp_path / "project.json", manifest_data)

        def unexpected_prompt(_prompt):
            raise AssertionError("operator was prompted")

        monkeypatch.setattr("builtins.input", unexpected_prompt)

        code = _run_cli(["run", "--project", str(manifest)])

        assert code == EXIT_PRECONDITION
        assert "Error: Composition '00_Simulator' not found!" in capsys.readouterr().out


class TestValidateCommand:

    def test_ready(self, manifest_file, output_root, capsys):
        code = _run_cli([
            "validate", "--project", str(manifest_file),
            "--start", "1", "--end", "47", "--output", str(output_root), "--no-prompt",
        ])

        out = capsys.readouterr().out
        assert code == EXIT_SUCCESS
        assert "Ready to render" in out
        assert "Jobs: 94" in out
        assert list(output_root.iterdir()) == []

    def test_not_ready(self, manifest_file, output_root, capsys):
        code = _run_cli([
            "validate", "--project", str(manifest_file),
            "--start", "0", "--end", "1", "--output", str(output_root), "--no-prompt",
        ])

        assert code == EXIT_PRECONDITION
        assert "Error: Invalid index range!" in capsys.readouterr().err


class TestConfigPrompt:

    def _prompt(self, *answers):
        remaining = iter(answers)
        return ConfigPrompt(input_fn=lambda _question: next(remaining))

    def test_defaults_on_empty_answers(self):
        request = self._prompt("", "", "/renders").complete(BatchRequest(), 47)

        assert request.start == 1
        assert request.end == 47
        assert request.output_root == "/renders"

    def test_non_numeric_becomes_missing(self):
        request = self._prompt("one", "5", "/renders").complete(BatchRequest(), 47)

        assert request.start is None
        assert request.end == 5

    def test_blank_folder_becomes_missing(self):
        request = self._prompt("1", "2", "   ").complete(BatchRequest(), 47)
        assert request.output_root is None

    def test_given_values_not_asked(self):
        prompt = self._prompt("/renders")
        request = prompt.complete(BatchRequest(start=3, end=4), 47)

        assert (request.start, request.end, request.output_root) == (3, 4, "/renders")

    def test_end_of_input(self):
        def closed(_question):
            raise EOFError

        request = ConfigPrompt(input_fn=closed).complete(BatchRequest(), 47)

        assert request.start is None
        assert request.end is None
        assert request.output_root is None
