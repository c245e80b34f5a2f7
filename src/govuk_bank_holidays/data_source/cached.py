from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from .core import DataSource

logger = logging.getLogger(__name__)

CACHED_DATA_PATH = Path(__file__).resolve().parent.parent / "data" / "bank-holidays.json"


@lru_cache(maxsize=1)
def _cached_data() -> DataSource:
    logger.debug("Parsing cached bank holidays from %s", CACHED_DATA_PATH)
    data_source = DataSource.from_json(CACHED_DATA_PATH.read_bytes())
    data_source.sort()
    data_source.add_missing_divisions()
    return data_source


class Cached:
    """
    Built-in list of bank holidays used as a backup, in testing or when network
    requests are not available. It is refreshed with ``govuk-bank-holidays download``.
    """

    @staticmethod
    def cached_data_source() -> DataSource:
        """
        Create a DataSource from cached data.

        The bundled file is parsed once per process; each call returns a fresh
        copy that the caller is free to modify.
        """
        return _cached_data().copy()

    def load_data_source(self) -> DataSource:
        return self.cached_data_source()

    def __repr__(self) -> str:
        return "Cached()"
