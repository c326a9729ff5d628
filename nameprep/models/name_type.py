"""Short classification of scientific name strings.

`NameType` is consumed as an opaque tag by name-parsing logic. It has no
dependency on the normalization functions apart from `NameType.parse`.
"""

from __future__ import annotations

from enum import Enum
import re

from ..text.normalizer import normalize_term

_NAME_SEPARATOR_RE = re.compile(r"[\s\-]+")


class NameType(Enum):
    """Kinds of name strings distinguished before parsing."""

    SCIENTIFIC = "scientific"
    """Scientific latin name, possibly with authorship, not of any other type."""

    VIRUS = "virus"
    """A virus name."""

    HYBRID_FORMULA = "hybrid_formula"
    """Hybrid formula, not a hybrid name."""

    INFORMAL = "informal"
    """Scientific name with informal additions or shortcomings.

    Typical cases are `cf.` additions, indetermined names like `Abies spec.`,
    abbreviated genera like `A. alba Mill` and manuscript names such as
    `Verticordia sp.1`.
    """

    OTU = "otu"
    """Operational Taxonomic Unit, usually a DNA sequence similarity cluster."""

    PHRASE = "phrase"
    """Herbarium phrase name, e.g. `Dryandra sp. 1 (A.S.George 16647)`."""

    PLACEHOLDER = "placeholder"
    """Placeholder name like `incertae sedis` or `unknown genus`."""

    NO_NAME = "no_name"
    """Surely not a scientific name of any kind."""

    def is_parsable(self) -> bool:
        """Return whether a name parser can parse this kind into a parsed name."""

        return self in _PARSABLE_TYPES

    @classmethod
    def parsable_types(cls) -> list[NameType]:
        """Return parsable members in declaration order."""

        return [member for member in cls if member.is_parsable()]

    @classmethod
    def parse(cls, value: str | None) -> NameType | None:
        """Resolve a member from free text like `"hybrid formula"` or `" OTU "`.

        Raises:
            ValueError: If the text is not null-like and names no member.
        """

        term = normalize_term(value)
        if term is None:
            return None
        key = _NAME_SEPARATOR_RE.sub("_", term)
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(f"Unknown name type: `{value}`.")


_PARSABLE_TYPES = frozenset({NameType.SCIENTIFIC, NameType.INFORMAL, NameType.PHRASE})
