"""Configuration model and loaders for nameprep.

Responsibilities:
- Define runtime configuration for CLI normalization runs as a typed dataclass.
- Provide loader entry points for file- and environment-based configuration.
- Resolve precedence: explicit CLI value > YAML file > environment > default.

Key types:
- `NormalizerConfig`: normalized runtime settings for one run.
- `ConfigLoader`: static construction helpers for `NormalizerConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .text.normalizer import FieldKind, Normalizer, normalize_term

_SUPPORTED_LOG_LEVELS = frozenset(
    {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}
)
_TRUE_BOOLEAN_TERMS = frozenset({"1", "true", "yes", "on"})
_FALSE_BOOLEAN_TERMS = frozenset({"0", "false", "no", "off"})


def _config_term(value: object) -> str | None:
    """Read a config scalar as a lower-cased term.

    Config values are field values like any other: blanks, `NULL` and `\\N`
    mean the key is unset.
    """

    if value is None:
        return None
    return normalize_term(str(value))


@dataclass(slots=True)
class NormalizerConfig:
    """Runtime configuration for one normalization run.

    Attributes:
        field_kind: Operation applied by batch commands.
        null_output: Text written in place of absent results, e.g. `\\N`.
        decode_entities: Decode numeric character references before the field operation.
        log_level: Minimum loguru level for phase logs.
    """

    field_kind: FieldKind = FieldKind.TERM
    null_output: str = ""
    decode_entities: bool = False
    log_level: str = "INFO"

    def validate(self) -> None:
        """Validate configuration values before a run."""

        if not isinstance(self.field_kind, FieldKind):
            raise ValueError("`field_kind` must be a FieldKind member.")
        if "\n" in self.null_output or "\r" in self.null_output:
            raise ValueError("`null_output` must not contain line breaks.")
        if self.log_level not in _SUPPORTED_LOG_LEVELS:
            levels = ", ".join(sorted(_SUPPORTED_LOG_LEVELS))
            raise ValueError(f"`log_level` must be one of: {levels}.")

    def build_normalizer(self) -> Normalizer:
        """Return a `Normalizer` configured from this run config."""

        return Normalizer(decode_entities=self.decode_entities)

    def render(self, value: str | None) -> str:
        """Render a normalized value, substituting `null_output` for absent results."""

        return self.null_output if value is None else value


class ConfigLoader:
    """Build validated `NormalizerConfig` objects from external sources."""

    _SUPPORTED_YAML_KEYS = frozenset(
        {"field_kind", "null_output", "decode_entities", "log_level"}
    )
    _ENV_KEYS = {
        "NAMEPREP_FIELD_KIND": "field_kind",
        "NAMEPREP_NULL_OUTPUT": "null_output",
        "NAMEPREP_DECODE_ENTITIES": "decode_entities",
        "NAMEPREP_LOG_LEVEL": "log_level",
    }

    @staticmethod
    def from_yaml(path: Path) -> NormalizerConfig:
        """Create a validated config from a YAML file."""

        payload = ConfigLoader._read_yaml_payload(path)
        return ConfigLoader._build_config_from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> NormalizerConfig:
        """Create a validated config from `NAMEPREP_*` environment variables."""

        payload = ConfigLoader._env_payload(os.environ if env is None else env)
        return ConfigLoader._build_config_from_mapping(payload, source_label="environment")

    @staticmethod
    def load(
        path: Path | None = None, env: Mapping[str, str] | None = None
    ) -> NormalizerConfig:
        """Create a validated config where YAML values override environment values."""

        payload: dict[str, Any] = dict(
            ConfigLoader._env_payload(os.environ if env is None else env)
        )
        source_label = "environment"
        if path is not None:
            payload.update(ConfigLoader._read_yaml_payload(path))
            source_label = f"YAML `{path}`"
        return ConfigLoader._build_config_from_mapping(payload, source_label=source_label)

    @staticmethod
    def _read_yaml_payload(path: Path) -> Mapping[str, Any]:
        """Read YAML text and enforce a mapping root with supported keys."""

        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")

        unknown = sorted(
            str(key) for key in set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS)
        )
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(f"YAML config `{path}` includes unsupported key(s): {key_list}.")
        return payload

    @staticmethod
    def _env_payload(env: Mapping[str, str]) -> dict[str, Any]:
        """Map present `NAMEPREP_*` variables onto config keys."""

        return {
            key: env[env_key]
            for env_key, key in ConfigLoader._ENV_KEYS.items()
            if env_key in env
        }

    @staticmethod
    def _build_config_from_mapping(
        payload: Mapping[str, Any], source_label: str
    ) -> NormalizerConfig:
        """Build a validated config from a normalized mapping payload."""

        config = NormalizerConfig(
            field_kind=ConfigLoader._optional_field_kind(payload, source_label),
            null_output=ConfigLoader._optional_null_output(payload, source_label),
            decode_entities=ConfigLoader._optional_boolean(
                payload, "decode_entities", source_label, default=False
            ),
            log_level=ConfigLoader._optional_log_level(payload),
        )
        try:
            config.validate()
        except ValueError as exc:
            raise ValueError(f"{source_label}: {exc}") from exc
        return config

    @staticmethod
    def _optional_field_kind(payload: Mapping[str, Any], source_label: str) -> FieldKind:
        """Read an optional field kind, defaulting to `term`."""

        term = _config_term(payload.get("field_kind"))
        if term is None:
            return FieldKind.TERM
        try:
            return FieldKind(term)
        except ValueError as exc:
            kinds = ", ".join(kind.value for kind in FieldKind)
            raise ValueError(
                f"{source_label} field `field_kind` must be one of: {kinds}."
            ) from exc

    @staticmethod
    def _optional_null_output(payload: Mapping[str, Any], source_label: str) -> str:
        """Read `null_output` verbatim.

        Unlike other keys this is not passed through `trim_to_null`: `\\N` and
        surrounding whitespace are meaningful output values here.
        """

        value = payload.get("null_output")
        if value is None:
            return ""
        if not isinstance(value, str):
            raise ValueError(f"{source_label} field `null_output` must be a string.")
        return value

    @staticmethod
    def _optional_boolean(
        payload: Mapping[str, Any], key: str, source_label: str, default: bool
    ) -> bool:
        """Read a boolean field; blank or null-like values fall back to `default`."""

        raw_value = payload.get(key)
        if isinstance(raw_value, bool):
            return raw_value

        term = _config_term(raw_value)
        if term is None:
            return default
        if term in _TRUE_BOOLEAN_TERMS:
            return True
        if term in _FALSE_BOOLEAN_TERMS:
            return False
        raise ValueError(
            f"{source_label} field `{key}` must be a boolean value "
            "(`true`/`false`, `1`/`0`, `yes`/`no`)."
        )

    @staticmethod
    def _optional_log_level(payload: Mapping[str, Any]) -> str:
        """Read an optional log level name, upper-cased."""

        term = _config_term(payload.get("log_level"))
        return "INFO" if term is None else term.upper()
