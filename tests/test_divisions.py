from __future__ import annotations

import pytest

from govuk_bank_holidays import BankHoliday, Division
from datetime import date


def test_canonical_order() -> None:
    assert Division.all() == (Division.ENGLAND_AND_WALES, Division.SCOTLAND, Division.NORTHERN_IRELAND)
    assert sorted(reversed(Division.all())) == list(Division.all())
    assert Division.default() is Division.ENGLAND_AND_WALES


@pytest.mark.parametrize(
    "text, expected",
    [
        ("england-and-wales", Division.ENGLAND_AND_WALES),
        ("ENGLAND_AND_WALES", Division.ENGLAND_AND_WALES),
        ("England and Wales", Division.ENGLAND_AND_WALES),
        ("scotland", Division.SCOTLAND),
        ("  Northern   Ireland ", Division.NORTHERN_IRELAND),
    ],
)
def test_parse(text: str, expected: Division) -> None:
    assert Division.parse(text) is expected


def test_parse_unknown() -> None:
    with pytest.raises(ValueError):
        Division.parse("wales")
    with pytest.raises(ValueError):
        Division.parse(5)


def test_labels() -> None:
    assert [str(d) for d in Division.all()] == ["England and Wales", "Scotland", "Northern Ireland"]
    assert {Division.SCOTLAND: 1}[Division("scotland")] == 1


# ============================================================
# BankHoliday
# ============================================================
def test_bank_holiday_order_and_equality() -> None:
    a = BankHoliday(date(2024, 12, 25), "Christmas Day")
    b = BankHoliday(date(2024, 12, 25), "Christmas Day", notes="Substitute day")
    c = BankHoliday(date(2024, 12, 26), "Boxing Day")
    d = BankHoliday(date(2024, 12, 25), "Another")

    assert a != b
    assert a <= b and a >= b
    assert not (a < b)
    assert a < c and c > a
    assert sorted([c, a, d]) == [d, a, c]
    assert len({a, b, a}) == 2


def test_bank_holiday_str() -> None:
    assert str(BankHoliday(date(2022, 1, 3), "New Year’s Day", "Substitute day")) == \
        "2022-01-03 - New Year’s Day (Substitute day)"
    assert str(BankHoliday(date(2022, 12, 25), "Christmas Day")) == "2022-12-25 - Christmas Day"
