"""Loading and parsing bank holidays from GOV.UK or the bundled copy."""

from .cached import Cached
from .core import DataSource, LoadDataSource, merge_events
from .url import DEFAULT_TIMEOUT, SOURCE_URL, UrlDataSource

__all__ = [
    "Cached",
    "DataSource",
    "DEFAULT_TIMEOUT",
    "LoadDataSource",
    "SOURCE_URL",
    "UrlDataSource",
    "merge_events",
]
