"""Domain exceptions for CLI and configuration diagnostics."""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class CommandStage(str, Enum):
    """Stages of a CLI command that can fail outside the pure normalizers."""

    CONFIG = "config"
    READ = "read"
    WRITE = "write"


class NormalizeStageError(RuntimeError):
    """Raised when a command cannot load its config or move lines between files.

    The normalization functions never raise; this error only covers the
    surrounding IO and configuration work.
    """

    def __init__(
        self,
        *,
        stage: CommandStage | str,
        detail: str,
        hint: str | None = None,
        path: Path | None = None,
    ) -> None:
        """Initialize a stage-scoped error; unknown stage names raise `ValueError`."""

        self.stage = CommandStage(stage)
        super().__init__(f"[{self.stage.value}] {detail}")
        self.detail = detail
        self.hint = hint
        self.path = path

    @property
    def summary(self) -> str:
        """One-line diagnostic of the form ``failed at stage `read`: <detail>``."""

        return f"failed at stage `{self.stage.value}`: {self.detail}"
