"""Structured run logging utilities.

Responsibilities:
- Emit concise, deterministic phase-level runtime logs through `loguru`.
- Own exactly one loguru sink per logger so host-process sinks stay untouched.
"""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger as _loguru_logger


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


class RunLogger:
    """Emit deterministic phase logs for CLI-observable normalization runs.

    Each instance adds one loguru handler that only accepts records emitted by
    that instance. `close()` removes that handler again.
    """

    def __init__(self, sink: TextIO | None = None, level: str = "INFO") -> None:
        """Add a loguru sink writing to `sink` (stderr by default) at `level`."""

        token = object()
        self._logger = _loguru_logger.bind(run_logger=token)
        self._handler_id: int | None = _loguru_logger.add(
            sink or sys.stderr,
            format="{message}",
            level=level,
            colorize=False,
            filter=lambda record: record["extra"].get("run_logger") is token,
        )

    def __enter__(self) -> RunLogger:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    def close(self) -> None:
        """Remove this logger's sink; other loguru sinks are left in place."""

        if self._handler_id is not None:
            _loguru_logger.remove(self._handler_id)
            self._handler_id = None

    def _emit(self, level: str, event: str, stage: str, **context: object) -> None:
        """Emit one structured runtime log line."""

        line = f"[phase] level={level} stage={stage} event={event}{_format_context(context)}"
        self._logger.log(level, line)

    def log_stage_start(self, stage: str, **context: object) -> None:
        """Emit a stage-start runtime event."""

        self._emit("INFO", "start", stage, **context)

    def log_stage_complete(self, stage: str, **context: object) -> None:
        """Emit a stage-complete runtime event."""

        self._emit("INFO", "complete", stage, **context)

    def log_stage_failure(self, stage: str, error_type: str) -> None:
        """Emit a stage-failure runtime event without payload details."""

        self._emit("ERROR", "failure", stage, error_type=error_type)
