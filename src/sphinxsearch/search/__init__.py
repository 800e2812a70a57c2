"""Search client: index registry, session, multi-query batches, result normalization."""

from .client import Sphinxsearch
from .constants import MAX_MATCHES, MatchMode, SearchStatus, SortMode
from .errors import InvalidArgumentError, SearchConnectionError, SearchError, SphinxsearchError
from .normalizer import normalize_result, to_result_set
from .registry import IndexRegistry
from .schemas import Filter, Limits, PendingQuery, ResultSet, SearchOptions, SessionState
from .transport import SearchTransport, SphinxApiTransport

__all__ = [
    # Session
    "Sphinxsearch",
    "IndexRegistry",
    # Transport
    "SearchTransport",
    "SphinxApiTransport",
    # Models
    "SearchOptions",
    "SessionState",
    "Filter",
    "Limits",
    "PendingQuery",
    "ResultSet",
    # Constants
    "MatchMode",
    "SortMode",
    "SearchStatus",
    "MAX_MATCHES",
    # Errors
    "SphinxsearchError",
    "SearchConnectionError",
    "InvalidArgumentError",
    "SearchError",
    # Normalization
    "normalize_result",
    "to_result_set",
]
