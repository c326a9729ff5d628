"""CLI tests for single-value, listing, and batch normalization commands."""

from __future__ import annotations

from pathlib import Path

from pytest import MonkeyPatch
from typer.testing import CliRunner

from nameprep.cli import app


def test_single_value_commands_print_normalized_values() -> None:
    """Each single-value command should print its normalized result."""

    runner = CliRunner()

    assert runner.invoke(app, ["citation", "   Hallo "]).output == "Hallo\n"
    assert runner.invoke(app, ["trim", "aCcepTed "]).output == "aCcepTed\n"
    assert runner.invoke(app, ["term", "aCcepTed "]).output == "accepted\n"
    assert runner.invoke(app, ["entities", "&#x43b;&#1086;&#12pia;"]).output == "ло&#12pia;\n"


def test_single_value_commands_render_absent_results_with_null_output() -> None:
    """Absent results should print as an empty line or the `--null-output` text."""

    runner = CliRunner()

    default_result = runner.invoke(app, ["trim", " NULL "])
    custom_result = runner.invoke(app, ["term", " ", "--null-output", "\\N"])

    assert default_result.exit_code == 0
    assert default_result.output == "\n"
    assert custom_result.exit_code == 0
    assert custom_result.output == "\\N\n"


def test_single_value_command_reads_null_output_from_environment(
    monkeypatch: MonkeyPatch,
) -> None:
    """`NAMEPREP_NULL_OUTPUT` should apply when no CLI override is given."""

    monkeypatch.setenv("NAMEPREP_NULL_OUTPUT", "<none>")
    runner = CliRunner()

    result = runner.invoke(app, ["trim", "\\N"])

    assert result.output == "<none>\n"


def test_split_ids_and_name_types_commands() -> None:
    """Listing commands should print one row per item."""

    runner = CliRunner()

    split_result = runner.invoke(app, ["split-ids", "123|456|783942|1|"])
    types_result = runner.invoke(app, ["name-types"])

    assert split_result.output.splitlines() == ["123", "456", "783942", "1"]
    assert "SCIENTIFIC parsable=true" in types_result.output
    assert "VIRUS parsable=false" in types_result.output
    assert "PHRASE parsable=true" in types_result.output
    assert "NO_NAME parsable=false" in types_result.output


def test_file_command_writes_normalized_lines_to_output(tmp_path: Path) -> None:
    """Batch command should normalize each line and report counts."""

    input_path = tmp_path / "status.txt"
    input_path.write_text("aCcepTed \r\nNULL\n  \n&#x53;ynonym\n", encoding="utf-8")
    out_path = tmp_path / "status.normalized.txt"
    runner = CliRunner()

    result = runner.invoke(
        app,
        [
            "file",
            str(input_path),
            "--kind",
            "term",
            "--out",
            str(out_path),
            "--null-output",
            "\\N",
            "--decode-entities",
        ],
    )

    assert result.exit_code == 0, result.output
    assert out_path.read_text(encoding="utf-8") == "accepted\n\\N\n\\N\nsynonym\n"
    assert "lines=4 absent=2" in result.output
    assert "[phase] level=INFO stage=normalize event=complete absent=2 lines=4" in result.output


def test_file_command_uses_yaml_config_defaults(tmp_path: Path) -> None:
    """Config file values should drive the batch command when no overrides are given."""

    input_path = tmp_path / "citations.txt"
    input_path.write_text("  Mill. 1768  \n", encoding="utf-8")
    out_path = tmp_path / "citations.out"
    config_path = tmp_path / "nameprep.yml"
    config_path.write_text("field_kind: citation\n", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["file", str(input_path), "--config", str(config_path), "--out", str(out_path)],
    )

    assert result.exit_code == 0, result.output
    assert out_path.read_text(encoding="utf-8") == "Mill. 1768\n"


def test_file_command_reports_missing_input_with_hint(tmp_path: Path) -> None:
    """Missing input should fail at the read stage with exit code 1."""

    runner = CliRunner()

    result = runner.invoke(app, ["file", str(tmp_path / "missing.txt")])

    assert result.exit_code == 1
    assert "file failed at stage `read`" in result.output
    assert "Hint: Verify the input path exists." in result.output


def test_file_command_reports_missing_config_file(tmp_path: Path) -> None:
    """Missing `--config` path should fail at the config stage."""

    input_path = tmp_path / "terms.txt"
    input_path.write_text("a\n", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["file", str(input_path), "--config", str(tmp_path / "missing.yml")],
    )

    assert result.exit_code == 1
    assert "file failed at stage `config`" in result.output
    assert "Config file not found" in result.output


def test_term_command_reports_invalid_config_values(tmp_path: Path) -> None:
    """Invalid config values should fail at the config stage for single-value commands."""

    config_path = tmp_path / "bad.yml"
    config_path.write_text("decode_entities: maybe\n", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["term", "x", "--config", str(config_path)])

    assert result.exit_code == 1
    assert "term failed at stage `config`" in result.output


def test_file_command_refuses_to_overwrite_its_input(tmp_path: Path) -> None:
    """Writing the output over the input file should fail before touching it."""

    input_path = tmp_path / "terms.txt"
    input_path.write_text("aCcepTed\nNULL\n", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["file", str(input_path), "--out", str(tmp_path / "." / "terms.txt")],
    )

    assert result.exit_code == 1
    assert "file failed at stage `write`" in result.output
    assert "is the input file" in result.output
    assert input_path.read_text(encoding="utf-8") == "aCcepTed\nNULL\n"


def test_file_command_leaves_no_output_when_input_is_missing(tmp_path: Path) -> None:
    """A failed read should neither create nor replace the output file."""

    out_path = tmp_path / "out.txt"
    existing_path = tmp_path / "existing.txt"
    existing_path.write_text("previous run\n", encoding="utf-8")
    runner = CliRunner()

    missing_result = runner.invoke(
        app, ["file", str(tmp_path / "missing.txt"), "--out", str(out_path)]
    )
    existing_result = runner.invoke(
        app, ["file", str(tmp_path / "missing.txt"), "--out", str(existing_path)]
    )

    assert missing_result.exit_code == 1
    assert existing_result.exit_code == 1
    assert "file failed at stage `read`" in missing_result.output
    assert not out_path.exists()
    assert existing_path.read_text(encoding="utf-8") == "previous run\n"
    assert sorted(path.name for path in tmp_path.iterdir()) == ["existing.txt"]
