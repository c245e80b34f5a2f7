import re
import numpy as np
import datetime as dt
from typing import Union, Any

from .errors import InvalidDateError

PandasTimestamp = Any
DateLike = Union[dt.date, dt.datetime, str, np.datetime64, PandasTimestamp]

_ONE_DAY = dt.timedelta(days=1)


def _parse_date_str(s: str, dayfirst: bool = True) -> dt.date:
    """
    Parse a date string without ambiguity.

    Rules:
        1. Only accept strings with exactly 3 numeric components (whatever the separators are).
        2. The year must be the only 4-digit component, and it must be either the first or the last component.
        3. If the year is first, the format is Y-M-D (ISO, as used by GOV.UK).
        4. If not, then the format is either D-M-Y or M-D-Y, and the dayfirst flag disambiguates.
        5. Reject all other formats (e.g. "20250131" or "01-02-03") as ambiguous.

    Parameters
    ----------
    s: str
        The date string to parse.
    dayfirst: bool, default True
        When the year comes last, interpret the string as day-first (UK style).

    Returns
    -------
    dt.date
        The parsed date.
    """
    s = s.strip()
    if not s:
        raise InvalidDateError("Empty date string.")

    if re.fullmatch(r"\d{8}", s):
        raise InvalidDateError(
            f"Ambiguous date string without separators: {s!r}. "
            "Please use a separator and a 4-digit year (e.g. '2025-01-31' or '31/01/2025')."
        )

    parts = re.findall(r"\d+", s)
    if len(parts) != 3:
        raise InvalidDateError(
            f"Invalid date string: {s!r}. Expected exactly 3 numeric components "
            "(e.g. '2025-01-31' or '31/01/2025')."
        )

    a, b, c = parts
    if len(a) == 4 and len(c) != 4:
        y, m, d = int(a), int(b), int(c)
    elif len(c) == 4 and len(a) != 4:
        y = int(c)
        if dayfirst:
            d, m = int(a), int(b)
        else:
            m, d = int(a), int(b)
    else:
        raise InvalidDateError(
            f"Ambiguous date string: {s!r}. "
            "A single 4-digit year must be either the first or the last component."
        )

    return from_components(y, m, d)


def from_components(year: int, month: int, day: int) -> dt.date:
    """Build a date, raising InvalidDateError for out-of-range components."""
    try:
        return dt.date(year, month, day)
    except (TypeError, ValueError) as e:
        raise InvalidDateError(f"Invalid date: (y={year}, m={month}, d={day}).") from e


def to_date(x: DateLike, *, dayfirst: bool = True) -> dt.date:
    """
    Convert various date-like inputs to a datetime.date.

    Supported input types :
        - datetime.date and datetime.datetime (time part ignored)
        - np.datetime64 (truncated to day precision)
        - str (parsed robustly, see _parse_date_str)
        - pandas.Timestamp or anything else exposing to_pydatetime (time part ignored)

    Parameters
    ----------
    x: DateLike
        The input date to convert.
    dayfirst: bool, default True
        When parsing strings without a clear year-first format, interpret them as day-first.

    Returns
    -------
    dt.date
        The corresponding date.
    """
    if isinstance(x, dt.datetime):
        return x.date()
    if isinstance(x, dt.date):
        return x
    if isinstance(x, np.datetime64):
        if np.isnat(x):
            raise InvalidDateError("NaT is not a date.")
        return from_datetime64(x)
    if isinstance(x, str):
        return _parse_date_str(x, dayfirst=dayfirst)
    if hasattr(x, "to_pydatetime"):
        py = x.to_pydatetime()
        if isinstance(py, dt.datetime):
            return py.date()
    raise InvalidDateError(f"Unsupported date type: {type(x)}")


def to_datetime64(d: dt.date) -> np.datetime64:
    return np.datetime64(d, "D")


def from_datetime64(d64: np.datetime64) -> dt.date:
    """Small helper to convert np.datetime64 to datetime.date."""
    s = np.datetime_as_string(d64.astype("datetime64[D]"), unit="D")
    return dt.date.fromisoformat(s)


def date_range(start: dt.date, end: dt.date) -> np.ndarray:
    """Contiguous days between start and end (inclusive) as datetime64[D]."""
    start64 = to_datetime64(start)
    n_days = (end - start).days + 1
    return start64 + np.arange(max(n_days, 0), dtype="int64").astype("timedelta64[D]")


def next_day(d: dt.date) -> dt.date:
    return d + _ONE_DAY


def previous_day(d: dt.date) -> dt.date:
    return d - _ONE_DAY
