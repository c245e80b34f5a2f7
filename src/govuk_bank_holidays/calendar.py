from __future__ import annotations

import logging
import datetime as dt
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Optional, Tuple, Union

import numpy as np

from .bank_holidays import BankHoliday
from .dates import DateLike, date_range, to_date, to_datetime64
from .data_source import Cached, DataSource, LoadDataSource, UrlDataSource, SOURCE_URL, DEFAULT_TIMEOUT
from .divisions import Division
from .errors import FetchError, ParseError
from .iterators import HolidayIter, WorkDayIter
from .work_days import MonToFriWorkDays, WorkDays

logger = logging.getLogger(__name__)

DivisionLike = Union[Division, str, None]


def _to_division(division: DivisionLike) -> Optional[Division]:
    if division is None or isinstance(division, Division):
        return division
    return Division.parse(division)


class BankHolidayCalendar:
    """
    Calendar of known bank holidays.

    Bank holidays vary between parts of the UK so GOV.UK provide separate lists for
    different "divisions". Methods taking a ``division`` parameter only consider bank
    holidays common to *all* divisions if ``None`` is given.

    Once built, the holidays cannot change and the calendar can be read from several
    threads at once. Only the ``work_days`` policy may be replaced.

    Usage:
        calendar = BankHolidayCalendar.load()

        calendar.is_holiday(date(2026, 12, 25))
        calendar.is_work_day(date(2026, 7, 13), Division.NORTHERN_IRELAND)
        next(calendar.iter_holidays_after(date.today()))
        calendar.iter_work_days_after(date.today()).take(5)
    """

    def __init__(self, data_source: DataSource, work_days: Optional[WorkDays] = None):
        """
        Parameters
        ----------
        data_source: DataSource
            Sorted bank holidays, see ``DataSource.sort``.
        work_days: Optional[WorkDays], default MonToFriWorkDays()
            Decides which days are work days before bank holidays are considered.
        """
        holiday_map: Dict[Division, Tuple[BankHoliday, ...]] = {
            division: tuple(events) for division, events in data_source.items()
        }
        self._holiday_map: Mapping[Division, Tuple[BankHoliday, ...]] = MappingProxyType(holiday_map)
        self._holiday_dates: Mapping[Division, FrozenSet[dt.date]] = MappingProxyType({
            division: frozenset(holiday.date for holiday in events)
            for division, events in holiday_map.items()
        })

        common: Optional[FrozenSet[dt.date]] = None
        for dates in self._holiday_dates.values():
            common = dates if common is None else common & dates
        if common is None:
            logger.warning("Empty bank holiday calendar")
            common = frozenset()
        self._common_dates: FrozenSet[dt.date] = common

        self._work_days: WorkDays = work_days if work_days is not None else MonToFriWorkDays()

    # ---------- factories
    @classmethod
    def cached(cls, work_days: Optional[WorkDays] = None) -> BankHolidayCalendar:
        """Build from the bundled bank holidays, without any network access."""
        return cls(Cached.cached_data_source(), work_days)

    @classmethod
    def load(
        cls,
        work_days: Optional[WorkDays] = None,
        *,
        url: str = SOURCE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        merge_cached: bool = False,
    ) -> BankHolidayCalendar:
        """
        Load bank holidays from GOV.UK, falling back to the bundled bank holidays.

        Parameters
        ----------
        work_days: Optional[WorkDays]
            Work day policy, Monday to Friday by default.
        url: str
            Where to load bank holidays from.
        timeout: float
            Socket timeout in seconds.
        merge_cached: bool, default False
            Merge the downloaded bank holidays over the bundled ones, so that years
            GOV.UK no longer publishes remain known.
        """
        try:
            data_source = UrlDataSource(url, timeout=timeout).load_data_source()
        except (FetchError, ParseError) as e:
            logger.warning("Failed to load bank holidays: %s", e)
            logger.warning("Falling back to cached calendar data")
            return cls.cached(work_days)
        if merge_cached:
            merged = Cached.cached_data_source()
            merged.merge(data_source)
            data_source = merged
        return cls(data_source, work_days)

    @classmethod
    def custom(cls, loader: LoadDataSource, work_days: Optional[WorkDays] = None) -> BankHolidayCalendar:
        """Build with a custom source of bank holidays. Errors from the loader are not caught."""
        return cls(loader.load_data_source(), work_days)

    # ---------- work day policy
    @property
    def work_days(self) -> WorkDays:
        return self._work_days

    @work_days.setter
    def work_days(self, work_days: WorkDays) -> None:
        self._work_days = work_days

    # ---------- static information
    @property
    def divisions(self) -> List[Division]:
        """Divisions with bank holiday data, in canonical order."""
        return sorted(self._holiday_map)

    @property
    def common_dates(self) -> FrozenSet[dt.date]:
        """Dates that are bank holidays in every division."""
        return self._common_dates

    def _reference_division(self) -> Optional[Division]:
        if Division.default() in self._holiday_map:
            return Division.default()
        return min(self._holiday_map, default=None)

    # ---------- point queries
    def holidays(self, division: DivisionLike = None) -> List[BankHoliday]:
        """
        All known bank holidays in ``division``, or only those common to all divisions.

        When no division is given, titles and notes are taken from England and Wales
        (or the first division present) even if other divisions word them differently.
        """
        division = _to_division(division)
        if division is not None:
            return list(self._holiday_map.get(division, ()))
        reference = self._reference_division()
        if reference is None:
            return []
        return [holiday for holiday in self._holiday_map[reference] if holiday.date in self._common_dates]

    def is_holiday(self, date: DateLike, division: DivisionLike = None) -> bool:
        """Whether ``date`` is a bank holiday in ``division`` or common to all divisions."""
        date = to_date(date)
        division = _to_division(division)
        if division is not None:
            return date in self._holiday_dates.get(division, frozenset())
        return date in self._common_dates

    def is_work_day(self, date: DateLike, division: DivisionLike = None) -> bool:
        """Whether ``date`` is a work day and not a bank holiday in ``division`` or common to all divisions."""
        date = to_date(date)
        return self._work_days.is_work_day(date) and not self.is_holiday(date, division)

    def holiday_on(self, date: DateLike, division: DivisionLike = None) -> Optional[BankHoliday]:
        """The bank holiday falling on ``date``, if any."""
        date = to_date(date)
        if not self.is_holiday(date, division):
            return None
        division = _to_division(division)
        events = self._holiday_map[division if division is not None else self._reference_division()]
        return next(holiday for holiday in events if holiday.date == date)

    # ---------- bank holiday traversal
    def iter_holidays_after(self, date: DateLike, division: DivisionLike = None) -> HolidayIter:
        """Bank holidays strictly after ``date``, in date order."""
        date = to_date(date)
        return HolidayIter([holiday for holiday in self.holidays(division) if holiday.date > date])

    def iter_holidays_before(self, date: DateLike, division: DivisionLike = None) -> HolidayIter:
        """Bank holidays strictly before ``date``, in reverse date order."""
        date = to_date(date)
        return HolidayIter([holiday for holiday in reversed(self.holidays(division)) if holiday.date < date])

    def next_holiday(self, date: DateLike, division: DivisionLike = None) -> Optional[BankHoliday]:
        return next(self.iter_holidays_after(date, division), None)

    def previous_holiday(self, date: DateLike, division: DivisionLike = None) -> Optional[BankHoliday]:
        return next(self.iter_holidays_before(date, division), None)

    # ---------- work day traversal
    def iter_work_days_after(self, date: DateLike, division: DivisionLike = None) -> WorkDayIter:
        """
        Work days strictly after ``date``, skipping bank holidays.

        NB: this is an infinite iterator, see WorkDayIter.
        """
        return WorkDayIter(self, to_date(date), _to_division(division), forward=True)

    def iter_work_days_before(self, date: DateLike, division: DivisionLike = None) -> WorkDayIter:
        """
        Work days strictly before ``date``, skipping bank holidays.

        NB: this is an infinite iterator, see WorkDayIter.
        """
        return WorkDayIter(self, to_date(date), _to_division(division), forward=False)

    def next_work_day(self, date: DateLike, division: DivisionLike = None) -> dt.date:
        return next(self.iter_work_days_after(date, division))

    def previous_work_day(self, date: DateLike, division: DivisionLike = None) -> dt.date:
        return next(self.iter_work_days_before(date, division))

    def add_work_days(self, date: DateLike, n: int, division: DivisionLike = None) -> dt.date:
        """
        Move ``n`` work days from ``date`` (backwards if ``n`` is negative).
        ``date`` itself is returned unchanged when ``n`` is 0.

        Raises OverflowError if fewer than ``abs(n)`` work days remain before
        the end of the supported date range.
        """
        date = to_date(date)
        if n == 0:
            return date
        if n > 0:
            days = self.iter_work_days_after(date, division).take(n)
        else:
            days = self.iter_work_days_before(date, division).take(-n)
        if len(days) < abs(n):
            raise OverflowError(f"Cannot move {n} work days from {date.isoformat()}: date out of range")
        return days[-1]

    # ---------- ranges
    def work_day_mask(self, start: DateLike, end: DateLike, division: DivisionLike = None) -> np.ndarray:
        """
        Boolean mask over the days from ``start`` to ``end`` (inclusive), True for work days.

        Returns
        -------
        np.ndarray
            One entry per calendar day, in date order.
        """
        start = to_date(start)
        end = to_date(end)
        if end < start:
            raise ValueError("Please ensure that end >= start.")
        days = date_range(start, end)
        division = _to_division(division)
        if division is not None:
            holidays = self._holiday_dates.get(division, frozenset())
        else:
            holidays = self._common_dates
        holidays64 = np.array(
            [to_datetime64(d) for d in holidays if start <= d <= end],
            dtype="datetime64[D]",
        )
        return self._work_days.mask(days) & ~np.isin(days, holidays64)

    def work_days_between(self, start: DateLike, end: DateLike, division: DivisionLike = None) -> List[dt.date]:
        """Work days from ``start`` to ``end``, both included."""
        start = to_date(start)
        mask = self.work_day_mask(start, end, division)
        return [start + dt.timedelta(days=int(i)) for i in np.flatnonzero(mask)]

    def count_work_days(self, start: DateLike, end: DateLike, division: DivisionLike = None) -> int:
        """Number of work days from ``start`` to ``end``, both included."""
        return int(np.count_nonzero(self.work_day_mask(start, end, division)))

    def __repr__(self) -> str:
        counts = ", ".join(f"{division.value}={len(self._holiday_map[division])}" for division in self.divisions)
        return f"BankHolidayCalendar({counts}, work_days={self._work_days!r})"
