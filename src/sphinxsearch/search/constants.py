"""
Protocol constants shared with searchd.

Values mirror the daemon's own numbering so they can be handed to the
protocol driver unchanged.
"""

from enum import IntEnum


class SearchStatus(IntEnum):
    """Per-query status reported by searchd."""
    OK = 0
    ERROR = 1
    RETRY = 2
    WARNING = 3


class MatchMode(IntEnum):
    """How query terms are matched against indexed text."""
    ALL = 0
    ANY = 1
    PHRASE = 2
    BOOLEAN = 3
    EXTENDED = 4
    FULLSCAN = 5
    EXTENDED2 = 6


class SortMode(IntEnum):
    """Result ordering."""
    RELEVANCE = 0
    ATTR_DESC = 1
    ATTR_ASC = 2
    TIME_SEGMENTS = 3
    EXTENDED = 4
    EXPR = 5


# Maximum number of matches searchd keeps in memory per query
MAX_MATCHES = 20000

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 9312
