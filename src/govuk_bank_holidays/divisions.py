from __future__ import annotations

from enum import Enum
from typing import Tuple


class Division(Enum):
    """
    Parts of the UK with shared bank holiday dates.

    Values are the keys used by GOV.UK in its JSON feed. Members are ordered by
    their position in ``Division.all()``, England and Wales first.
    """
    ENGLAND_AND_WALES = "england-and-wales"
    SCOTLAND = "scotland"
    NORTHERN_IRELAND = "northern-ireland"

    @classmethod
    def all(cls) -> Tuple["Division", ...]:
        """All known divisions, in canonical order."""
        return _ALL

    @classmethod
    def default(cls) -> "Division":
        """Division used for holiday titles and notes when no division is given."""
        return cls.ENGLAND_AND_WALES

    @classmethod
    def parse(cls, text: str) -> "Division":
        """
        Resolve a division from its GOV.UK key, enum name or English name.

        >>> Division.parse("Northern Ireland")
        <Division.NORTHERN_IRELAND: 'northern-ireland'>
        """
        if not isinstance(text, str):
            raise ValueError(f"Unknown division: {text!r}")
        key = " ".join(text.strip().lower().replace("_", " ").replace("-", " ").split())
        for division in _ALL:
            if key in (division.value.replace("-", " "), division.label.lower()):
                return division
        raise ValueError(f"Unknown division: {text!r}")

    @property
    def label(self) -> str:
        """English name of division."""
        return _LABELS[self]

    def __lt__(self, other: "Division") -> bool:
        if not isinstance(other, Division):
            return NotImplemented
        return _ALL.index(self) < _ALL.index(other)

    def __str__(self) -> str:
        return self.label


_ALL: Tuple[Division, ...] = (
    Division.ENGLAND_AND_WALES,
    Division.SCOTLAND,
    Division.NORTHERN_IRELAND,
)

_LABELS = {
    Division.ENGLAND_AND_WALES: "England and Wales",
    Division.SCOTLAND: "Scotland",
    Division.NORTHERN_IRELAND: "Northern Ireland",
}
