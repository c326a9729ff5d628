"""Command-line interface for nameprep.

Responsibilities:
- Expose the normalization operations as user-facing commands.
- Convert CLI arguments into `NormalizerConfig` and run batch normalization.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from contextlib import suppress
from dataclasses import replace
from pathlib import Path
from typing import Annotated, Iterator, TextIO

import typer
from loguru import logger

from .cli_rendering import echo_batch_summary, echo_name_types, exit_with_command_error
from .config import ConfigLoader, NormalizerConfig
from .errors import CommandStage, NormalizeStageError
from .telemetry.logger import RunLogger
from .text.identifiers import split_pro_parte_ids
from .text.normalizer import FieldKind

app = typer.Typer(
    name="nameprep",
    no_args_is_help=True,
    help="Normalize citation, term, and name-string fields before name parsing.",
)

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to YAML config file with command defaults."),
]
NullOutputOption = Annotated[
    str | None,
    typer.Option(
        "--null-output",
        help="Text printed for absent results (overrides config file value).",
    ),
]


def _resolve_config(
    config_file: Path | None,
    field_kind: FieldKind | None = None,
    null_output: str | None = None,
    decode_entities: bool | None = None,
) -> NormalizerConfig:
    """Resolve effective config from env/YAML defaults and explicit CLI overrides."""

    try:
        config = ConfigLoader.load(config_file)
    except FileNotFoundError as exc:
        raise NormalizeStageError(
            stage=CommandStage.CONFIG,
            detail=f"Config file not found: `{config_file}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise NormalizeStageError(
            stage=CommandStage.CONFIG,
            detail=f"Invalid configuration: {exc}",
            hint="Fix config file or `NAMEPREP_*` environment values and rerun.",
        ) from exc
    except Exception as exc:
        raise NormalizeStageError(
            stage=CommandStage.CONFIG,
            detail=f"Failed to load config file `{config_file}`: {exc}",
            hint="Verify YAML syntax and file permissions.",
        ) from exc

    if field_kind is not None:
        config = replace(config, field_kind=field_kind)
    if null_output is not None:
        config = replace(config, null_output=null_output)
    if decode_entities is not None:
        config = replace(config, decode_entities=decode_entities)
    try:
        config.validate()
    except ValueError as exc:
        raise NormalizeStageError(stage=CommandStage.CONFIG, detail=str(exc)) from exc
    return config


def _run_single(
    command_name: str,
    kind: FieldKind,
    text: str,
    config_file: Path | None,
    null_output: str | None,
) -> None:
    """Normalize one value and print it, honoring config overrides."""

    try:
        config = _resolve_config(config_file, null_output=null_output)
        value = config.build_normalizer().normalize(text, kind)
    except Exception as exc:
        exit_with_command_error(command_name, exc)
    typer.echo(config.render(value))


@app.command("citation")
def citation_command(
    text: Annotated[str, typer.Argument(help="Citation text.")],
    config_file: ConfigOption = None,
    null_output: NullOutputOption = None,
) -> None:
    """Trim leading and trailing whitespace from a citation."""

    _run_single("citation", FieldKind.CITATION, text, config_file, null_output)


@app.command("trim")
def trim_command(
    text: Annotated[str, typer.Argument(help="Field value.")],
    config_file: ConfigOption = None,
    null_output: NullOutputOption = None,
) -> None:
    """Trim a value and collapse blank, `NULL`, and `\\N` values to absent."""

    _run_single("trim", FieldKind.TRIM, text, config_file, null_output)


@app.command("term")
def term_command(
    text: Annotated[str, typer.Argument(help="Vocabulary term.")],
    config_file: ConfigOption = None,
    null_output: NullOutputOption = None,
) -> None:
    """Trim and lower-case a controlled-vocabulary term."""

    _run_single("term", FieldKind.TERM, text, config_file, null_output)


@app.command("entities")
def entities_command(
    text: Annotated[str, typer.Argument(help="Text with numeric character references.")],
    config_file: ConfigOption = None,
    null_output: NullOutputOption = None,
) -> None:
    """Decode `&#NNN;` and `&#xHHHH;` references."""

    _run_single("entities", FieldKind.ENTITIES, text, config_file, null_output)


@app.command("split-ids")
def split_ids_command(
    text: Annotated[str, typer.Argument(help="`|`-separated identifier list.")],
) -> None:
    """Print each pro-parte identifier on its own line."""

    for identifier in split_pro_parte_ids(text):
        typer.echo(identifier)


@app.command("name-types")
def name_types_command() -> None:
    """List name types and whether each one is parsable."""

    echo_name_types()


def _read_lines(input_path: Path) -> Iterator[str]:
    """Yield input lines without line endings, mapping IO failures to stage errors."""

    try:
        with input_path.open("r", encoding="utf-8") as source:
            for line in source:
                yield line.rstrip("\r\n")
    except FileNotFoundError as exc:
        raise NormalizeStageError(
            stage=CommandStage.READ,
            detail=f"Input file not found: `{input_path}`.",
            hint="Verify the input path exists.",
            path=input_path,
        ) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise NormalizeStageError(
            stage=CommandStage.READ,
            detail=f"Failed to read input file `{input_path}`: {exc}",
            hint="Input must be a readable UTF-8 text file.",
            path=input_path,
        ) from exc


def _write_lines(
    config: NormalizerConfig, input_path: Path, sink: TextIO | None
) -> tuple[int, int]:
    """Normalize every input line, writing to `sink` or stdout; return line/absent counts."""

    normalizer = config.build_normalizer()
    line_count = 0
    absent_count = 0
    for value in normalizer.normalize_many(_read_lines(input_path), config.field_kind):
        line_count += 1
        if value is None:
            absent_count += 1
        rendered = config.render(value)
        if sink is None:
            typer.echo(rendered)
        else:
            sink.write(rendered + "\n")
    return line_count, absent_count


def _write_output_file(
    config: NormalizerConfig, input_path: Path, out: Path
) -> tuple[int, int]:
    """Normalize into a sibling partial file and move it over `out` on success.

    `out` is left untouched when reading or writing fails.
    """

    if out.resolve() == input_path.resolve():
        raise NormalizeStageError(
            stage=CommandStage.WRITE,
            detail=f"Output file `{out}` is the input file.",
            hint="Choose a different `--out` path.",
            path=out,
        )

    partial = out.with_name(f".{out.name}.partial")
    try:
        sink = partial.open("w", encoding="utf-8")
    except OSError as exc:
        raise NormalizeStageError(
            stage=CommandStage.WRITE,
            detail=f"Failed to open output file `{out}`: {exc}",
            hint="Verify the output directory exists and is writable.",
            path=out,
        ) from exc

    try:
        with sink:
            counts = _write_lines(config, input_path, sink)
        partial.replace(out)
    except OSError as exc:
        partial.unlink(missing_ok=True)
        raise NormalizeStageError(
            stage=CommandStage.WRITE,
            detail=f"Failed to write output file `{out}`: {exc}",
            path=out,
        ) from exc
    except BaseException:
        partial.unlink(missing_ok=True)
        raise
    return counts


@app.command("file")
def file_command(
    input_path: Annotated[Path, typer.Argument(help="UTF-8 text file, one value per line.")],
    kind: Annotated[
        FieldKind | None,
        typer.Option("--kind", help="Field operation (overrides config file value)."),
    ] = None,
    out: Annotated[
        Path | None,
        typer.Option("--out", help="Output file. Defaults to stdout."),
    ] = None,
    config_file: ConfigOption = None,
    null_output: NullOutputOption = None,
    decode_entities: Annotated[
        bool | None,
        typer.Option(
            "--decode-entities/--no-decode-entities",
            help="Decode numeric character references before the field operation.",
        ),
    ] = None,
) -> None:
    """Normalize each line of a file as one field kind."""

    try:
        config = _resolve_config(
            config_file,
            field_kind=kind,
            null_output=null_output,
            decode_entities=decode_entities,
        )
        with RunLogger(level=config.log_level) as run_logger:
            run_logger.log_stage_start("normalize", kind=config.field_kind.value)
            try:
                if out is None:
                    line_count, absent_count = _write_lines(config, input_path, None)
                else:
                    line_count, absent_count = _write_output_file(config, input_path, out)
            except NormalizeStageError as exc:
                run_logger.log_stage_failure(exc.stage.value, type(exc).__name__)
                raise
            run_logger.log_stage_complete("normalize", lines=line_count, absent=absent_count)
    except Exception as exc:
        exit_with_command_error("file", exc)

    echo_batch_summary(line_count, absent_count)


def main() -> None:
    """CLI entrypoint for console scripts."""

    # Handler 0 is loguru's default stderr sink; phase logs add their own.
    with suppress(ValueError):
        logger.remove(0)
    app()


if __name__ == "__main__":
    main()
