from __future__ import annotations

import logging
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ..errors import FetchError
from .core import DataSource

logger = logging.getLogger(__name__)

SOURCE_URL = "https://www.gov.uk/bank-holidays.json"
DEFAULT_TIMEOUT = 10.0


class UrlDataSource:
    """
    Loads bank holidays from a URL in GOV.UK's JSON format.

    Attributes
    ----------
    url: str
        Where to load from, GOV.UK by default.
    timeout: float
        Socket timeout in seconds.
    """

    def __init__(self, url: str = SOURCE_URL, timeout: float = DEFAULT_TIMEOUT):
        self.url = url
        self.timeout = timeout

    def fetch(self) -> bytes:
        """Download the raw JSON payload."""
        logger.debug("Loading bank holidays from %s", self.url)
        req = Request(self.url, headers={"Accept": "application/json"})  # noqa: S310
        try:
            with urlopen(req, timeout=self.timeout) as resp:  # noqa: S310
                return resp.read()
        except HTTPError as e:
            raise FetchError(f"Could not load bank holidays from {self.url}: HTTP {e.code}") from e
        except (URLError, OSError) as e:
            raise FetchError(f"Could not load bank holidays from {self.url}: {e}") from e

    def load_data_source(self) -> DataSource:
        """Download, parse, sort and complete bank holidays."""
        data_source = DataSource.from_json(self.fetch())
        data_source.sort()
        data_source.add_missing_divisions()
        return data_source

    def __repr__(self) -> str:
        return f"UrlDataSource(url={self.url!r}, timeout={self.timeout!r})"
