"""
govuk_bank_holidays

Loads the official list of bank holidays in the United Kingdom as supplied by
GOV.UK (https://www.gov.uk/bank-holidays), which tends to provide this list for
only a year or two into the future.

A bundled backup list of known bank holidays is shipped with this package, though
it is not updated often. GOV.UK no longer provide bank holidays for some of the
older years still part of this backup list.

Bank holidays differ around the UK. GOV.UK currently lists them for 3 "divisions":
  - England and Wales
  - Scotland
  - Northern Ireland

Methods on BankHolidayCalendar that take a ``division`` parameter consider bank
holidays only for the given division, or only those common to all divisions for None.

Usage:
    from datetime import date
    from govuk_bank_holidays import BankHolidayCalendar, Division

    calendar = BankHolidayCalendar.load()

    # bank holiday in _all_ divisions?
    calendar.is_holiday(date.today())

    # work day in Northern Ireland?
    calendar.is_work_day(date.today(), Division.NORTHERN_IRELAND)
"""

from .bank_holidays import BankHoliday
from .calendar import BankHolidayCalendar
from .data_source import DEFAULT_TIMEOUT, SOURCE_URL, Cached, DataSource, LoadDataSource, UrlDataSource
from .dates import DateLike, from_components, to_date
from .divisions import Division
from .errors import BankHolidayError, FetchError, InvalidDateError, ParseError
from .iterators import HolidayIter, WorkDayIter
from .work_days import MonToFriWorkDays, WeekmaskWorkDays, WorkDays

__version__ = "0.3.0"

__all__ = [
    "BankHoliday",
    "BankHolidayCalendar",
    "BankHolidayError",
    "Cached",
    "DataSource",
    "DateLike",
    "DEFAULT_TIMEOUT",
    "Division",
    "FetchError",
    "HolidayIter",
    "InvalidDateError",
    "LoadDataSource",
    "MonToFriWorkDays",
    "ParseError",
    "SOURCE_URL",
    "UrlDataSource",
    "WeekmaskWorkDays",
    "WorkDayIter",
    "WorkDays",
    "from_components",
    "to_date",
]
