"""
Error taxonomy for the search client.
"""

from typing import Optional


class SphinxsearchError(Exception):
    """Base class for all errors raised by this package."""


class SearchConnectionError(SphinxsearchError, ConnectionError):
    """The transport could not reach searchd (host/port or UNIX socket)."""


class InvalidArgumentError(SphinxsearchError, ValueError):
    """A setter received a value outside its enum."""


class SearchError(SphinxsearchError, RuntimeError):
    """searchd answered a single search with a non-OK status."""

    def __init__(
        self,
        index: str,
        query: str,
        message: str,
        label: Optional[str] = None,
    ):
        self.index = index
        self.query = query
        self.message = message
        self.label = label
        super().__init__(
            f'Searching index "{index}" for "{query}" failed with error "{message}".'
        )
