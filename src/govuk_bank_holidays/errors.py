"""
Errors raised by govuk_bank_holidays.

The calendar itself never raises once built: these only surface at the edges
(decoding bank holiday data, loading it over the network, building dates).
"""


class BankHolidayError(Exception):
    pass


class ParseError(BankHolidayError):
    """Bank holiday data could not be parsed."""


class FetchError(BankHolidayError):
    """Bank holiday data could not be loaded."""


class InvalidDateError(BankHolidayError, ValueError):
    """Date is invalid."""
