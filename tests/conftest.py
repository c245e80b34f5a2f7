from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, List, Tuple

import pytest

from govuk_bank_holidays import BankHoliday, BankHolidayCalendar, DataSource, Division


def make_holidays(*entries: Tuple[date, str]) -> List[BankHoliday]:
    return [BankHoliday(d, title) for d, title in entries]


def make_source(mapping: Dict[Division, Iterable[Tuple[date, str]]]) -> DataSource:
    data_source = DataSource({division: make_holidays(*entries) for division, entries in mapping.items()})
    data_source.sort()
    return data_source


@pytest.fixture(scope="session")
def calendar() -> BankHolidayCalendar:
    return BankHolidayCalendar.cached()
