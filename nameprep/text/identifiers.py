"""Splitting helpers for pro-parte identifier lists."""

from __future__ import annotations

import re

from .normalizer import trim_to_null

_PRO_PARTE_SPLITTER_RE = re.compile(r"\|+")


def split_pro_parte_ids(text: str | None) -> list[str]:
    """Split a `|`-separated identifier list, dropping blank and null-like parts.

    Example: ``"123|456|783942|1|"`` gives ``["123", "456", "783942", "1"]``.
    """

    if text is None:
        return []
    identifiers: list[str] = []
    for part in _PRO_PARTE_SPLITTER_RE.split(text):
        identifier = trim_to_null(part)
        if identifier is not None:
            identifiers.append(identifier)
    return identifiers
