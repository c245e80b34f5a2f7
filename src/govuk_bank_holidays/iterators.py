from __future__ import annotations

import datetime as dt
from typing import TYPE_CHECKING, Iterator, List, Optional, Sequence

from .bank_holidays import BankHoliday
from .dates import DateLike, next_day, previous_day, to_date
from .divisions import Division

if TYPE_CHECKING:
    from .calendar import BankHolidayCalendar


class HolidayIter(Iterator[BankHoliday]):
    """
    Bank holidays before or after a date, nearest first.

    The holidays are selected once when the iterator is created, so it is finite,
    its remaining length is known and it can only be consumed once.
    """

    def __init__(self, holidays: Sequence[BankHoliday]):
        # kept farthest first so that the next holiday is popped from the end
        self._holidays: List[BankHoliday] = list(reversed(holidays))

    def __iter__(self) -> HolidayIter:
        return self

    def __next__(self) -> BankHoliday:
        if not self._holidays:
            raise StopIteration
        return self._holidays.pop()

    def __len__(self) -> int:
        return len(self._holidays)

    def __length_hint__(self) -> int:
        return len(self._holidays)

    def __repr__(self) -> str:
        return f"HolidayIter(remaining={len(self)})"


class WorkDayIter(Iterator[dt.date]):
    """
    Work days before or after a date, skipping bank holidays.

    NB: this is an infinite iterator. Calendar days carry on past the last known
    bank holiday, so ``list(iterator)`` never returns; bound it with ``take``,
    ``until`` or ``itertools.islice``. It only stops when ``datetime.date`` runs
    out of range.

    The iterator keeps a reference to its calendar, which must not be modified
    while the iterator is in use.
    """

    def __init__(
        self,
        calendar: BankHolidayCalendar,
        date: dt.date,
        division: Optional[Division],
        forward: bool = True,
    ):
        self._calendar = calendar
        self._date = date
        self._division = division
        self._forward = forward

    @property
    def date(self) -> dt.date:
        """Last date reached (the anchor until the first value is produced)."""
        return self._date

    @property
    def forward(self) -> bool:
        return self._forward

    def _advance_date(self) -> None:
        try:
            self._date = next_day(self._date) if self._forward else previous_day(self._date)
        except OverflowError:
            raise StopIteration from None

    def __iter__(self) -> WorkDayIter:
        return self

    def __next__(self) -> dt.date:
        self._advance_date()
        while not self._calendar.is_work_day(self._date, self._division):
            self._advance_date()
        return self._date

    def take(self, n: int) -> List[dt.date]:
        """Next ``n`` work days."""
        if n < 0:
            raise ValueError(f"Cannot take a negative number of work days: {n}")
        return [d for _, d in zip(range(n), self)]

    def until(self, stop: DateLike) -> Iterator[dt.date]:
        """
        Work days strictly before ``stop`` (going forward) or strictly after it
        (going backward).
        """
        stop = to_date(stop)
        for d in self:
            if (d >= stop) if self._forward else (d <= stop):
                return
            yield d

    def __repr__(self) -> str:
        direction = "after" if self._forward else "before"
        return f"WorkDayIter({direction}={self._date.isoformat()}, division={self._division!r})"
