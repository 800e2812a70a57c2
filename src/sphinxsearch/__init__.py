"""
Sphinxsearch - Query-batch client for the Sphinx search daemon

This package contains:
- search: index registry, search session, multi-query batches, result normalization
- platform: Cross-cutting concerns (configuration, logging)
"""

__version__ = "0.1.0"

from sphinxsearch.search import (
    IndexRegistry,
    InvalidArgumentError,
    MatchMode,
    ResultSet,
    SearchConnectionError,
    SearchError,
    SearchOptions,
    SearchStatus,
    SortMode,
    Sphinxsearch,
    SphinxsearchError,
    normalize_result,
)

__all__ = [
    "Sphinxsearch",
    "IndexRegistry",
    "SearchOptions",
    "ResultSet",
    "MatchMode",
    "SortMode",
    "SearchStatus",
    "SphinxsearchError",
    "SearchConnectionError",
    "InvalidArgumentError",
    "SearchError",
    "normalize_result",
]
