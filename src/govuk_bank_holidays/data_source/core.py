"""
Mapping of "divisions" to bank holidays.

A concrete BankHolidayCalendar is built from a DataSource. It can be read from
and written to the JSON format used by GOV.UK (https://www.gov.uk/bank-holidays.json):

    {
      "england-and-wales": {
        "division": "england-and-wales",
        "events": [{"title": "...", "date": "YYYY-MM-DD", "notes": "...", "bunting": true}, ...]
      },
      ...
    }
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterator, List, Mapping, Optional, Protocol, Sequence, Union

from ..bank_holidays import BankHoliday
from ..divisions import Division
from ..errors import ParseError


class LoadDataSource(Protocol):
    """Anything that can provide bank holidays, e.g. a network client or a file."""

    def load_data_source(self) -> "DataSource":
        ...


def merge_events(existing: Sequence[BankHoliday], incoming: Sequence[BankHoliday]) -> List[BankHoliday]:
    """
    Merge two date-ordered lists of bank holidays.

    Both inputs must already be sorted by date with no repeated dates. When the
    same date appears in both, the incoming bank holiday replaces the existing one.
    Runs in O(n + m).
    """
    merged: List[BankHoliday] = []
    i = j = 0
    while i < len(existing) and j < len(incoming):
        if existing[i].date < incoming[j].date:
            merged.append(existing[i])
            i += 1
        else:
            if existing[i].date == incoming[j].date:
                i += 1
            merged.append(incoming[j])
            j += 1
    merged.extend(existing[i:])
    merged.extend(incoming[j:])
    return merged


class DataSource:
    """
    Bank holidays per division, before a calendar is built.

    Holidays are not sorted on construction: call ``sort()`` (and usually
    ``add_missing_divisions()``) before relying on date order.
    """

    def __init__(self, holiday_map: Optional[Mapping[Division, Sequence[BankHoliday]]] = None):
        self._holiday_map: Dict[Division, List[BankHoliday]] = {
            division: list(events) for division, events in (holiday_map or {}).items()
        }

    # ---------- mapping-like access
    def __getitem__(self, division: Division) -> List[BankHoliday]:
        return self._holiday_map[division]

    def __contains__(self, division: object) -> bool:
        return division in self._holiday_map

    def __iter__(self) -> Iterator[Division]:
        return iter(sorted(self._holiday_map))

    def __len__(self) -> int:
        return len(self._holiday_map)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DataSource):
            return NotImplemented
        return self._holiday_map == other._holiday_map

    def __repr__(self) -> str:
        counts = ", ".join(f"{division.value}={len(self._holiday_map[division])}" for division in self)
        return f"DataSource({counts})"

    def items(self):
        return ((division, self._holiday_map[division]) for division in self)

    def divisions(self) -> List[Division]:
        return list(self)

    def copy(self) -> DataSource:
        return DataSource(self._holiday_map)

    # ---------- finalisation
    def sort(self) -> None:
        """Sort each division by date (then title)."""
        for events in self._holiday_map.values():
            events.sort()

    def add_missing_divisions(self) -> None:
        """Ensure all divisions are present."""
        for division in Division.all():
            self._holiday_map.setdefault(division, [])

    def merge(self, other: DataSource) -> None:
        """
        Merge with another data source, division by division, with ``other``
        overriding this one if the same date appears in both.

        Both data sources must be sorted.
        """
        for division, other_events in other._holiday_map.items():
            if division in self._holiday_map:
                self._holiday_map[division] = merge_events(self._holiday_map[division], other_events)
            else:
                self._holiday_map[division] = list(other_events)

    # ---------- wire format
    @classmethod
    def from_dict(cls, data: Any) -> DataSource:
        if not isinstance(data, dict):
            raise ParseError("Expected a map of divisions to division and events lists.")
        holiday_map: Dict[Division, List[BankHoliday]] = {}
        for key, representation in data.items():
            division = _parse_division(key)
            if not isinstance(representation, dict):
                raise ParseError(f"Expected division and events for {key!r}.")
            if _parse_division(representation.get("division")) is not division:
                raise ParseError("divisions do not match")
            events = representation.get("events")
            if not isinstance(events, list):
                raise ParseError(f"Expected a list of events for {key!r}.")
            holiday_map[division] = [BankHoliday.from_dict(event) for event in events]
        return cls(holiday_map)

    @classmethod
    def from_json(cls, payload: Union[str, bytes]) -> DataSource:
        """Parse GOV.UK JSON (text or bytes)."""
        try:
            data = json.loads(payload)
        except ValueError as e:
            raise ParseError(f"Bank holiday data is not valid JSON: {e}") from e
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        # serialised in canonical division order for stable output shape
        return {
            division.value: {
                "division": division.value,
                "events": [event.to_dict() for event in events],
            }
            for division, events in self.items()
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False) + "\n"


def _parse_division(key: Any) -> Division:
    try:
        return Division(key)
    except ValueError as e:
        raise ParseError(f"Unknown division: {key!r}") from e
