"""Text normalization helpers applied before scientific-name parsing.

Responsibilities:
- Trim citation text and collapse null-like field values to `None`.
- Fold controlled-vocabulary terms to a canonical lower-case form.
- Decode numeric character references (`&#1083;`, `&#x43b;`) in plain text.

Key public functions:
- `normalize_citation`, `trim_to_null`, `normalize_term`, `replace_unicode_entities`.
- `Normalizer`: field-kind dispatcher over the functions above.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import re
from typing import Iterable, Iterator

_NULL_TOKENS = frozenset({"", "null", "\\n"})
_MAX_CODE_POINT = 0x10FFFF
_SURROGATE_RANGE = range(0xD800, 0xE000)
_NUMERIC_ENTITY_RE = re.compile(r"&#(?:[xX]([0-9a-fA-F]+)|([0-9]+));")


class FieldKind(str, Enum):
    """Kinds of text fields handled by `Normalizer`."""

    CITATION = "citation"
    TRIM = "trim"
    TERM = "term"
    ENTITIES = "entities"


def normalize_citation(text: str | None) -> str | None:
    """Strip leading and trailing whitespace from citation text.

    Internal spacing, punctuation and accented characters are kept verbatim.
    """

    if text is None:
        return None
    return text.strip()


def trim_to_null(text: str | None) -> str | None:
    """Return trimmed text, or `None` for blank and null-like values.

    `NULL` and `\\N` are recognized case-insensitively. Casing of any other
    value is preserved.
    """

    if text is None:
        return None
    trimmed = text.strip()
    if trimmed.lower() in _NULL_TOKENS:
        return None
    return trimmed


def normalize_term(text: str | None) -> str | None:
    """Return the trimmed, lower-cased term, or `None` for null-like values."""

    trimmed = trim_to_null(text)
    if trimmed is None:
        return None
    return trimmed.lower()


def _decode_code_point(digits: str, base: int) -> str | None:
    """Return the character for a digit run, or `None` when it is not decodable."""

    significant = digits.lstrip("0")
    # U+10FFFF needs 7 decimal / 6 hex digits; longer runs are out of range.
    if len(significant) > (7 if base == 10 else 6):
        return None
    code_point = int(significant or "0", base)
    if code_point > _MAX_CODE_POINT or code_point in _SURROGATE_RANGE:
        return None
    return chr(code_point)


def _replace_entity_match(match: re.Match[str]) -> str:
    """Decode one numeric reference match, keeping the raw text when invalid."""

    hex_digits, decimal_digits = match.groups()
    if hex_digits is not None:
        decoded = _decode_code_point(hex_digits, 16)
    else:
        decoded = _decode_code_point(decimal_digits, 10)
    return match.group(0) if decoded is None else decoded


def replace_unicode_entities(text: str | None) -> str | None:
    """Decode decimal and hexadecimal numeric character references.

    Only `&#<digits>;` and `&#x<hexdigits>;` (prefix and digits in any case)
    are decoded. Named entities such as `&amp;`, malformed candidates like
    `&#12pia;`, and references to invalid code points are left unchanged.

    Args:
        text: Arbitrary text, or `None`.

    Returns:
        Text with each well-formed reference replaced by its character, or
        `None` when `text` is `None`.
    """

    if text is None:
        return None
    if "&#" not in text:
        return text
    return _NUMERIC_ENTITY_RE.sub(_replace_entity_match, text)


_FIELD_OPERATIONS = {
    FieldKind.CITATION: normalize_citation,
    FieldKind.TRIM: trim_to_null,
    FieldKind.TERM: normalize_term,
    FieldKind.ENTITIES: replace_unicode_entities,
}


@dataclass(frozen=True, slots=True)
class Normalizer:
    """Apply one normalization operation per field kind.

    Attributes:
        decode_entities: Decode numeric character references before applying
            the field operation.
    """

    decode_entities: bool = False

    def normalize(self, text: str | None, kind: FieldKind | str) -> str | None:
        """Normalize one value as the given field kind."""

        operation = _FIELD_OPERATIONS[FieldKind(kind)]
        if self.decode_entities:
            text = replace_unicode_entities(text)
        return operation(text)

    def normalize_many(
        self, values: Iterable[str | None], kind: FieldKind | str
    ) -> Iterator[str | None]:
        """Lazily normalize every value as the given field kind."""

        field_kind = FieldKind(kind)
        for value in values:
            yield self.normalize(value, field_kind)
