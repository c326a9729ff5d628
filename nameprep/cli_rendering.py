"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
batch summaries, and name-type listings.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from .errors import NormalizeStageError
from .models.name_type import NameType


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, NormalizeStageError):
        typer.secho(
            f"{command_name} {exc.summary}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_batch_summary(line_count: int, absent_count: int) -> None:
    """Print the batch line and absent-value counts to stderr."""

    typer.echo(f"lines={line_count} absent={absent_count}", err=True)


def echo_name_types() -> None:
    """Print one `NAME parsable=true|false` row per name type."""

    for name_type in NameType:
        parsable = "true" if name_type.is_parsable() else "false"
        typer.echo(f"{name_type.name} parsable={parsable}")
