"""Top-level package for nameprep.

This package cleans raw citation, term, and name-string fields before
scientific-name parsing. The main entry points are the functions re-exported
from `nameprep.text` and the `NameType` classification.
"""

from .models.name_type import NameType
from .text import (
    FieldKind,
    Normalizer,
    normalize_citation,
    normalize_term,
    replace_unicode_entities,
    split_pro_parte_ids,
    trim_to_null,
)

__all__ = [
    "FieldKind",
    "NameType",
    "Normalizer",
    "normalize_citation",
    "trim_to_null",
    "normalize_term",
    "replace_unicode_entities",
    "split_pro_parte_ids",
    "__version__",
]

__version__ = "0.1.0"
