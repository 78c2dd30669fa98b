"""Tests for CLI module."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from endnotexml.cli.main import cli


@pytest.fixture
def runner() -> CliRunner:
    """Provide Click test CLI runner."""
    return CliRunner()


def _read_jsonl(path: Path) -> list[dict]:
    with path.open(encoding="utf-8") as f:
        return [json.loads(line) for line in f if line.strip()]


# ---------------------------------------------------------------------------
# Top-level CLI
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_cli_version_flag(runner: CliRunner) -> None:
    """Test --version flag outputs version string."""
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "endnotexml" in result.output


@pytest.mark.unit
def test_cli_help(runner: CliRunner) -> None:
    """Test --help output lists commands."""
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "parse" in result.output
    assert "probe" in result.output


@pytest.mark.unit
def test_cli_invalid_command(runner: CliRunner) -> None:
    """Test invalid command returns non-zero exit code."""
    result = runner.invoke(cli, ["invalid-command"])

    assert result.exit_code != 0


# ---------------------------------------------------------------------------
# parse command
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_parse_help(runner: CliRunner) -> None:
    """Test parse command help."""
    result = runner.invoke(cli, ["parse", "--help"])

    assert result.exit_code == 0
    assert "Parse EndNote XML exports" in result.output


@pytest.mark.integration
def test_parse_file(runner: CliRunner, tmp_path: Path, fixtures_dir: Path) -> None:
    """Test parse command with a single file."""
    output_file = tmp_path / "output.jsonl"

    result = runner.invoke(
        cli, ["parse", str(fixtures_dir / "library.xml"), "-o", str(output_file)]
    )

    assert result.exit_code == 0
    assert "Successfully wrote 3 records" in result.output
    rows = _read_jsonl(output_file)
    assert [r["entry_type"] for r in rows] == ["article", "book", "inbook"]


@pytest.mark.integration
def test_parse_keyword_separator(runner: CliRunner, tmp_path: Path, fixtures_dir: Path) -> None:
    """Test --keyword-separator controls the joined keywords field."""
    output_file = tmp_path / "output.jsonl"

    result = runner.invoke(
        cli,
        [
            "parse",
            str(fixtures_dir / "library.xml"),
            "-o",
            str(output_file),
            "--keyword-separator",
            "|",
        ],
    )

    assert result.exit_code == 0
    assert _read_jsonl(output_file)[0]["fields"]["keywords"] == "machine learning| bibliometrics"


@pytest.mark.unit
def test_parse_blank_separator_fails(runner: CliRunner, tmp_path: Path, fixtures_dir: Path) -> None:
    """Test an invalid configuration exits with an error."""
    result = runner.invoke(
        cli,
        [
            "parse",
            str(fixtures_dir / "library.xml"),
            "-o",
            str(tmp_path / "out.jsonl"),
            "--keyword-separator",
            " ",
        ],
    )

    assert result.exit_code == 1
    assert "Error" in result.output


@pytest.mark.integration
def test_parse_malformed_file_fails(runner: CliRunner, tmp_path: Path, fixtures_dir: Path) -> None:
    """Test a single malformed file exits non-zero and writes nothing."""
    output_file = tmp_path / "output.jsonl"

    result = runner.invoke(
        cli, ["parse", str(fixtures_dir / "malformed.xml"), "-o", str(output_file)]
    )

    assert result.exit_code == 1
    assert "Could not parse document" in result.output
    assert not output_file.exists()


@pytest.mark.integration
def test_parse_folder(runner: CliRunner, tmp_path: Path, fixtures_dir: Path) -> None:
    """Test parse command with a folder warns about bad files and continues."""
    output_file = tmp_path / "output.jsonl"

    result = runner.invoke(cli, ["parse", str(fixtures_dir), "-o", str(output_file), "-v"])

    assert result.exit_code == 0
    assert "Warning: malformed.xml" in result.output
    assert "Warning: not_endnote.xml" in result.output
    assert len(_read_jsonl(output_file)) == 3


@pytest.mark.integration
def test_parse_writes_audit_log(runner: CliRunner, tmp_path: Path, fixtures_dir: Path) -> None:
    """Test --log records run and per-file events."""
    log_file = tmp_path / "logs" / "events.jsonl"

    result = runner.invoke(
        cli,
        [
            "parse",
            str(fixtures_dir),
            "-o",
            str(tmp_path / "out.jsonl"),
            "--log",
            str(log_file),
        ],
    )

    assert result.exit_code == 0
    events = _read_jsonl(log_file)
    names = [e["event"] for e in events]
    assert names[0] == "run_started"
    assert names[-1] == "run_finished"
    assert {"file_ingested", "file_skipped", "parse_failed"} <= set(names)
    assert events[-1]["data"]["records_processed"] == 3
    assert len({e["run_id"] for e in events}) == 1


@pytest.mark.integration
def test_parse_failure_logged(runner: CliRunner, tmp_path: Path, fixtures_dir: Path) -> None:
    """Test a failed run ends with a failed run_finished event."""
    log_file = tmp_path / "events.jsonl"

    result = runner.invoke(
        cli,
        [
            "parse",
            str(fixtures_dir / "malformed.xml"),
            "-o",
            str(tmp_path / "out.jsonl"),
            "--log",
            str(log_file),
        ],
    )

    assert result.exit_code == 1
    events = _read_jsonl(log_file)
    assert events[-1]["event"] == "run_finished"
    assert events[-1]["data"]["status"] == "failed"


@pytest.mark.unit
def test_parse_missing_input(runner: CliRunner, tmp_path: Path) -> None:
    """Test a nonexistent input path is rejected by click."""
    result = runner.invoke(cli, ["parse", "missing.xml", "-o", str(tmp_path / "o.jsonl")])

    assert result.exit_code == 2


# ---------------------------------------------------------------------------
# probe command
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_probe_recognized(runner: CliRunner, fixtures_dir: Path) -> None:
    """Test probe exits 0 for an EndNote export."""
    result = runner.invoke(cli, ["probe", str(fixtures_dir / "library.xml")])

    assert result.exit_code == 0
    assert "EndNote XML" in result.output


@pytest.mark.unit
def test_probe_not_recognized(runner: CliRunner, fixtures_dir: Path) -> None:
    """Test probe exits 1 for other XML documents."""
    result = runner.invoke(cli, ["probe", str(fixtures_dir / "not_endnote.xml")])

    assert result.exit_code == 1
    assert "not recognized" in result.output


@pytest.mark.unit
def test_probe_rejects_directory(runner: CliRunner, fixtures_dir: Path) -> None:
    """Test probe only accepts files."""
    result = runner.invoke(cli, ["probe", str(fixtures_dir)])

    assert result.exit_code == 2
