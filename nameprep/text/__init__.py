"""Text normalization components.

This package provides the stateless cleanup functions applied to citation,
term, and name-string fields before scientific-name parsing.
"""

from .identifiers import split_pro_parte_ids
from .normalizer import (
    FieldKind,
    Normalizer,
    normalize_citation,
    normalize_term,
    replace_unicode_entities,
    trim_to_null,
)

__all__ = [
    "FieldKind",
    "Normalizer",
    "normalize_citation",
    "trim_to_null",
    "normalize_term",
    "replace_unicode_entities",
    "split_pro_parte_ids",
]
