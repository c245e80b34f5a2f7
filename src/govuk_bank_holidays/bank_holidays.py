from __future__ import annotations

import re
import datetime as dt
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .errors import ParseError

_WIRE_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


@dataclass(frozen=True)
class BankHoliday:
    """
    Details of a bank holiday.

    Equality compares every field; ordering is by date, then title.

    Attributes
    ----------
    date: dt.date
        Date of this bank holiday.
    title: str
        Title of this bank holiday, e.g. "Boxing Day".
    notes: str
        Notes such as "Substitute day"; typically blank.
    bunting: bool
        Whether GOV.UK decorates this day with bunting.
    """
    date: dt.date
    title: str
    notes: str = ""
    bunting: bool = False

    def _sort_key(self) -> Tuple[dt.date, str]:
        return self.date, self.title

    def __lt__(self, other: BankHoliday) -> bool:
        if not isinstance(other, BankHoliday):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __le__(self, other: BankHoliday) -> bool:
        if not isinstance(other, BankHoliday):
            return NotImplemented
        return self._sort_key() <= other._sort_key()

    def __gt__(self, other: BankHoliday) -> bool:
        if not isinstance(other, BankHoliday):
            return NotImplemented
        return self._sort_key() > other._sort_key()

    def __ge__(self, other: BankHoliday) -> bool:
        if not isinstance(other, BankHoliday):
            return NotImplemented
        return self._sort_key() >= other._sort_key()

    def __str__(self) -> str:
        text = f"{self.date.isoformat()} - {self.title}"
        if self.notes:
            text += f" ({self.notes})"
        return text

    # ---------- wire format
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> BankHoliday:
        """Build from one GOV.UK event object."""
        try:
            raw_date = data["date"]
            title = data["title"]
        except (KeyError, TypeError) as e:
            raise ParseError(f"Bank holiday event is missing a field: {e}") from e
        if not isinstance(raw_date, str) or not isinstance(title, str):
            raise ParseError(f"Bank holiday event has invalid date or title: {data!r}")
        if not _WIRE_DATE.fullmatch(raw_date):
            raise ParseError(f"Bank holiday event date is not YYYY-MM-DD: {raw_date!r}")
        try:
            date = dt.date.fromisoformat(raw_date)
        except ValueError as e:
            raise ParseError(f"Bank holiday event has invalid date: {raw_date!r}") from e
        notes = data.get("notes", "")
        bunting = data.get("bunting", False)
        if not isinstance(notes, str) or not isinstance(bunting, bool):
            raise ParseError(f"Bank holiday event has invalid notes or bunting: {data!r}")
        return cls(date=date, title=title, notes=notes, bunting=bunting)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "date": self.date.isoformat(),
            "notes": self.notes,
            "bunting": self.bunting,
        }
