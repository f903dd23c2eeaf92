"""Tests for ruleval.cli — entrypoint, argument parsing and ``ruleval check``."""

import io
import json
from pathlib import Path

import pytest

from ruleval.cli import main


def _write(path: Path, data: object) -> str:
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_check_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["check", "--help"])
        assert exc_info.value.code == 0


class TestCLIMissingArgs:
    def test_check_missing_rules(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["check", "record.json"])
        assert exc_info.value.code == 2


class TestCLINoCommand:
    def test_no_command_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        captured = capsys.readouterr()
        assert "ruleval" in captured.out


class TestCheck:
    def test_success(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        record = _write(tmp_path / "record.json", {"age": 30})
        rules = _write(tmp_path / "rules.json", {"age": "integer|between:18,65"})

        main(["check", record, rules])

        output = json.loads(capsys.readouterr().out)
        assert output == {"status": "success", "rejects": []}

    def test_failure_exits_one(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        record = _write(tmp_path / "record.json", {"age": 15, "name": "Al1ce"})
        rules = _write(tmp_path / "rules.json", {"age": "integer|between:18,65", "name": "alpha"})

        with pytest.raises(SystemExit) as exc_info:
            main(["check", record, rules])

        assert exc_info.value.code == 1
        output = json.loads(capsys.readouterr().out)
        assert output["rejects"] == [{"field": "age", "rule": "between"}]

    def test_resume_on_failed(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        record = _write(tmp_path / "record.json", {"age": 15, "name": "Al1ce"})
        rules = _write(tmp_path / "rules.json", {"age": "integer|between:18,65", "name": "alpha"})

        with pytest.raises(SystemExit):
            main(["check", record, rules, "--resume-on-failed"])

        output = json.loads(capsys.readouterr().out)
        assert len(output["rejects"]) == 2

    def test_stdin_record(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        rules = _write(tmp_path / "rules.json", {"x": "required"})
        monkeypatch.setattr("sys.stdin", io.StringIO('{"x": "here"}'))

        main(["check", "-", rules])

        assert json.loads(capsys.readouterr().out)["status"] == "success"

    def test_malformed_record_is_reject(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        record = tmp_path / "record.json"
        record.write_text("{broken", encoding="utf-8")
        rules = _write(tmp_path / "rules.json", {"x": "required"})

        with pytest.raises(SystemExit) as exc_info:
            main(["check", str(record), rules])

        assert exc_info.value.code == 1
        output = json.loads(capsys.readouterr().out)
        assert output["rejects"][0]["rule"] == "invalid_input"

    def test_missing_rules_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        record = _write(tmp_path / "record.json", {})

        with pytest.raises(SystemExit) as exc_info:
            main(["check", record, str(tmp_path / "nope.json")])

        assert exc_info.value.code == 2
        assert "Error" in capsys.readouterr().err

    def test_rules_not_object(self, tmp_path: Path) -> None:
        record = _write(tmp_path / "record.json", {})
        rules = _write(tmp_path / "rules.json", ["required"])

        with pytest.raises(SystemExit) as exc_info:
            main(["check", record, rules])

        assert exc_info.value.code == 2

    def test_strict_unknown_rule(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        record = _write(tmp_path / "record.json", {"x": 1})
        rules = _write(tmp_path / "rules.json", {"x": "integr"})

        with pytest.raises(SystemExit) as exc_info:
            main(["check", record, rules, "--strict"])

        assert exc_info.value.code == 2
        assert "integr" in capsys.readouterr().err
