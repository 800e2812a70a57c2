"""
Transport layer: the protocol driver that actually talks to searchd.

The client only depends on the ``SearchTransport`` protocol below.
``SphinxApiTransport`` adapts the ``sphinxapi`` driver's ``SphinxClient``
to it; any other object with the same methods can be injected instead.
"""

from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, runtime_checkable

from sphinxsearch.platform.logging import get_logger

from .errors import SearchConnectionError

logger = get_logger(__name__)


@runtime_checkable
class SearchTransport(Protocol):
    """Operations the search client consumes from a protocol driver."""

    def connect(self, target: str, port: Optional[int] = None) -> None:
        """Point the driver at ``host:port`` or, with no port, a UNIX socket path."""
        ...

    def close(self) -> None: ...

    def escape(self, raw: str) -> str: ...

    def set_match_mode(self, mode: int) -> None: ...

    def set_sort_mode(self, mode: int, sort_by: str = "") -> None: ...

    def set_filter(self, attribute: str, values: Sequence[int], exclude: bool = False) -> None: ...

    def reset_filters(self) -> None: ...

    def set_limits(self, offset: int, limit: int, max_matches: int) -> None: ...

    def set_field_weights(self, weights: Mapping[str, int]) -> None: ...

    def query(self, text: str, index_names: str) -> Optional[Mapping[str, Any]]:
        """Run one query now. ``None`` means the daemon could not be reached."""
        ...

    def add_query(self, text: str, index_names: str) -> int: ...

    def run_queries(self) -> Optional[List[Mapping[str, Any]]]:
        """Run every staged query in one round trip and clear the batch."""
        ...

    def last_error(self) -> str: ...

    def last_warning(self) -> str: ...


class SphinxApiTransport:
    """``SearchTransport`` backed by ``sphinxapi.SphinxClient``."""

    def __init__(self, client: Any = None):
        if client is None:
            # Optional dependency, only needed when no client is injected
            import sphinxapi

            client = sphinxapi.SphinxClient()
        self._client = client

    def connect(self, target: str, port: Optional[int] = None) -> None:
        try:
            if port is None:
                if not target.startswith(("/", "unix://")):
                    target = f"unix://{target}"
                self._client.SetServer(target)
            else:
                self._client.SetServer(target, int(port))
        except (AssertionError, OSError) as e:
            logger.error("searchd_connect_failed", target=target, port=port, error=str(e))
            raise SearchConnectionError(f"Cannot use searchd at {target}: {e}") from e

    def close(self) -> None:
        self._client.Close()

    def escape(self, raw: str) -> str:
        return self._client.EscapeString(raw)

    def set_match_mode(self, mode: int) -> None:
        self._client.SetMatchMode(int(mode))

    def set_sort_mode(self, mode: int, sort_by: str = "") -> None:
        self._client.SetSortMode(int(mode), sort_by)

    def set_filter(self, attribute: str, values: Sequence[int], exclude: bool = False) -> None:
        self._client.SetFilter(attribute, list(values), 1 if exclude else 0)

    def reset_filters(self) -> None:
        self._client.ResetFilters()

    def set_limits(self, offset: int, limit: int, max_matches: int) -> None:
        self._client.SetLimits(offset, limit, max_matches)

    def set_field_weights(self, weights: Mapping[str, int]) -> None:
        self._client.SetFieldWeights(dict(weights))

    def query(self, text: str, index_names: str) -> Optional[Dict[str, Any]]:
        # SphinxClient.Query() maps daemon errors to None as well; staging a
        # one-query batch keeps the ERROR result so its status can be checked.
        self._client.AddQuery(text, index_names)
        try:
            results = self._client.RunQueries()
        finally:
            self._clear_requests()
        if not results:
            return None
        return results[0]

    def add_query(self, text: str, index_names: str) -> int:
        return self._client.AddQuery(text, index_names)

    def run_queries(self) -> Optional[List[Dict[str, Any]]]:
        try:
            return self._client.RunQueries()
        finally:
            self._clear_requests()

    def _clear_requests(self) -> None:
        # RunQueries() returns None on a connection failure without dropping
        # its staged requests; SphinxClient.Query() resets them the same way.
        self._client._reqs = []

    def last_error(self) -> str:
        return self._client.GetLastError()

    def last_warning(self) -> str:
        return self._client.GetLastWarning()
