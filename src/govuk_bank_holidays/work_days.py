import numpy as np
import datetime as dt
from dataclasses import dataclass
from abc import ABC, abstractmethod

from .dates import from_datetime64


def _weekday(days64: np.ndarray) -> np.ndarray:
    """Weekday of each datetime64[D] as int (Monday=0, Sunday=6)."""
    days_int = days64.astype("datetime64[D]").astype("int64")
    return (days_int + 3) % 7


class WorkDays(ABC):
    """
    Decides whether a date is a work day before bank holidays are considered
    (typically, but not necessarily, excluding the weekend).
    """
    @abstractmethod
    def is_work_day(self, date: dt.date) -> bool:
        """Whether the given date is a work day."""

    def mask(self, days: np.ndarray) -> np.ndarray:
        """
        Build a boolean mask of the same length as days, where True indicates a work day.

        Subclasses can override this with a vectorised version.

        Parameters
        ----------
        days: np.ndarray
            Array of datetime64[D].
        """
        return np.fromiter(
            (self.is_work_day(from_datetime64(d64)) for d64 in days),
            dtype=bool,
            count=len(days),
        )


class MonToFriWorkDays(WorkDays):
    """
    Typical working week, Monday to Friday.
    """
    def is_work_day(self, date: dt.date) -> bool:
        return date.weekday() < 5

    def mask(self, days: np.ndarray) -> np.ndarray:
        return _weekday(days) < 5

    def __repr__(self) -> str:
        return "MonToFriWorkDays()"


@dataclass(frozen=True)
class WeekmaskWorkDays(WorkDays):
    """
    Working week described by a weekmask, in the format numpy uses for business days.

    Attributes
    ----------
    weekmask: str
        Seven characters, Monday first, "1" for a work day and "0" otherwise.
        For example "1110000" is a Monday to Wednesday part-time week.
    """
    weekmask: str = "1111100"

    def __post_init__(self) -> None:
        if len(self.weekmask) != 7 or set(self.weekmask) - {"0", "1"}:
            raise ValueError(f"Invalid weekmask: {self.weekmask!r}, expected 7 characters of '0' or '1'.")
        if "1" not in self.weekmask:
            raise ValueError("Invalid weekmask: at least one day of the week must be a work day.")

    @property
    def _flags(self) -> np.ndarray:
        return np.array([c == "1" for c in self.weekmask], dtype=bool)

    def is_work_day(self, date: dt.date) -> bool:
        return self.weekmask[date.weekday()] == "1"

    def mask(self, days: np.ndarray) -> np.ndarray:
        return self._flags[_weekday(days)]
