"""
Sphinxsearch - Search session over a searchd protocol driver.

Holds the label -> index registry and the settings (match mode, sort mode,
filters, limits, field weights) that the driver applies to the next query,
and exposes single searches as well as multi-query batches.

A session is single-owner: setters mutate its state in place and the next
query reads it, so concurrent callers must serialize access themselves.
"""

from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from sphinxsearch.platform.config import SphinxSettings, get_settings
from sphinxsearch.platform.logging import get_logger

from .constants import DEFAULT_HOST, DEFAULT_PORT, MAX_MATCHES, MatchMode, SortMode
from .errors import InvalidArgumentError, SearchConnectionError, SphinxsearchError
from .normalizer import NormalizedResult, normalize_result, to_result_set
from .registry import IndexRegistry
from .schemas import Filter, Limits, PendingQuery, ResultSet, SearchOptions, SessionState
from .transport import SearchTransport, SphinxApiTransport

logger = get_logger(__name__)

OptionsLike = Union[SearchOptions, Mapping[str, Any], None]


class Sphinxsearch:
    """
    Client for searching Sphinx indexes by label.

    ``indexes`` maps labels to index names as defined in sphinx.conf::

        Sphinxsearch(indexes={"Articles": "articles_main", "Users": "users"})
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        socket: Optional[str] = None,
        indexes: Optional[Mapping[str, str]] = None,
        transport: Optional[SearchTransport] = None,
        max_matches: int = MAX_MATCHES,
    ):
        """
        Initialize the session and point the driver at searchd.

        Args:
            host: The server's host name/IP
            port: The port that the server is listening on
            socket: UNIX socket path; takes precedence over host/port
            indexes: Labels -> index names usable in searches
            transport: Protocol driver, defaults to ``SphinxApiTransport``
            max_matches: Cap on matches considered when pagination is applied
        """
        self.host = host
        self.port = port
        self.socket = socket
        self.indexes = IndexRegistry(indexes)
        self.max_matches = max_matches

        self._transport: SearchTransport = transport if transport is not None else SphinxApiTransport()
        self._state = SessionState()
        self._pending: List[PendingQuery] = []

        self._connect()

    @classmethod
    def from_settings(
        cls,
        settings: Optional[SphinxSettings] = None,
        transport: Optional[SearchTransport] = None,
    ) -> "Sphinxsearch":
        """Build a session from ``SPHINX_*`` settings."""
        settings = settings or get_settings()
        return cls(
            host=settings.SPHINX_HOST,
            port=settings.SPHINX_PORT,
            socket=settings.SPHINX_SOCKET,
            indexes=settings.SPHINX_INDEXES,
            transport=transport,
            max_matches=settings.SPHINX_MAX_MATCHES,
        )

    def _connect(self) -> None:
        try:
            if self.socket is not None:
                self._transport.connect(self.socket)
                logger.info("searchd_target_set", socket=self.socket)
            else:
                self._transport.connect(self.host, self.port)
                logger.info("searchd_target_set", host=self.host, port=self.port)
        except SearchConnectionError:
            raise
        except OSError as e:
            logger.error("searchd_connect_failed", host=self.host, port=self.port, socket=self.socket, error=str(e))
            raise SearchConnectionError(str(e)) from e

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> "Sphinxsearch":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def state(self) -> SessionState:
        """Snapshot of the settings the next query will use."""
        return self._state.model_copy(deep=True)

    @property
    def pending(self) -> Tuple[PendingQuery, ...]:
        return tuple(self._pending)

    def last_error(self) -> str:
        return self._transport.last_error()

    def last_warning(self) -> str:
        return self._transport.last_warning()

    # =========================================================================
    # SETTINGS
    # =========================================================================

    def escape_string(self, string: str) -> str:
        """Escape the characters searchd treats as query syntax."""
        return self._transport.escape(string)

    def set_match_mode(self, mode: Union[MatchMode, int]) -> None:
        try:
            mode = MatchMode(mode)
        except ValueError as e:
            raise InvalidArgumentError(f"Unknown match mode: {mode!r}") from e

        self._transport.set_match_mode(mode)
        self._state.match_mode = mode

    def set_sort_mode(self, mode: Union[SortMode, int], sort_by: str = "") -> None:
        """
        Set the result ordering.

        Args:
            mode: One of ``SortMode``; RELEVANCE ignores ``sort_by``
            sort_by: Attribute name (ATTR_*), SQL-like clause (EXTENDED) or
                expression (EXPR)
        """
        try:
            mode = SortMode(mode)
        except ValueError as e:
            raise InvalidArgumentError(f"Unknown sort mode: {mode!r}") from e

        self._transport.set_sort_mode(mode, sort_by)
        self._state.sort_mode = mode
        self._state.sort_by = sort_by

    def set_filter(self, attribute: str, values: Iterable[int], exclude: bool = False) -> None:
        """
        Add a filter on an integer attribute.

        Filters accumulate and persist across searches until reset_filters().
        """
        try:
            new_filter = Filter(attribute=attribute, values=list(values), exclude=exclude)
        except ValidationError as e:
            raise InvalidArgumentError(f"Invalid filter on {attribute!r}: {e}") from e

        self._transport.set_filter(new_filter.attribute, new_filter.values, new_filter.exclude)
        self._state.filters.append(new_filter)

    def reset_filters(self) -> None:
        self._transport.reset_filters()
        self._state.filters = []

    def _apply_options(self, options: SearchOptions) -> None:
        if options.has_limits:
            self._transport.set_limits(options.result_offset, options.result_limit, self.max_matches)
            self._state.limits = Limits(
                offset=options.result_offset,
                limit=options.result_limit,
                max_matches=self.max_matches,
            )

        if options.field_weights is not None:
            self._transport.set_field_weights(options.field_weights)
            self._state.field_weights = dict(options.field_weights)

    # =========================================================================
    # SINGLE SEARCH
    # =========================================================================

    def search(
        self,
        query: str,
        indexes: Mapping[str, OptionsLike],
        escape_query: bool = True,
    ) -> NormalizedResult:
        """
        Search for the specified query string.

        Args:
            query: The query string that we are searching for
            indexes: Labels to search, each with optional ``SearchOptions``
                (or a dict with ``result_offset``, ``result_limit``,
                ``field_weights``). Unknown labels are skipped.
            escape_query: Escape query syntax characters first

        Returns:
            The result of the search; a single requested index is unwrapped
            from the driver's per-index container.

        Raises:
            SearchError: If searchd reports a non-OK status
            SearchConnectionError: If searchd could not be reached
        """
        if self._pending:
            raise SphinxsearchError(
                f"{len(self._pending)} queries are staged for a batch; call run_queries() first"
            )

        if escape_query:
            query = self._transport.escape(query)

        index_names = []
        label = None
        for label, options in indexes.items():
            name = self.indexes.resolve(label)
            if name is None:
                logger.debug("unknown_index_label_skipped", label=label)
                continue

            if not isinstance(options, SearchOptions):
                try:
                    options = SearchOptions.model_validate(options or {})
                except ValidationError as e:
                    raise InvalidArgumentError(f"Invalid options for index {label!r}: {e}") from e
            self._apply_options(options)
            index_names.append(name)

        joined = " ".join(index_names)

        try:
            raw = self._transport.query(query, joined)
        except SearchConnectionError:
            raise
        except OSError as e:
            logger.error("searchd_unreachable", index=joined, query=query, error=str(e))
            raise SearchConnectionError(str(e)) from e

        if raw is None:
            error = self._transport.last_error()
            logger.error("searchd_unreachable", index=joined, query=query, error=error)
            raise SearchConnectionError(error or f'Searching index "{joined}" got no response')

        return normalize_result(
            raw,
            len(indexes),
            query=query,
            index=joined,
            label=label,
            last_error=self._transport.last_error(),
        )

    # =========================================================================
    # MULTI-QUERY BATCH
    # =========================================================================

    def add_query(self, query: str, indexes: Iterable[str]) -> int:
        """
        Add a query with the current settings to the multi-query batch.

        Later setting changes do not affect queries already added.

        Args:
            query: The query string that we are searching for
            indexes: Labels to search; unknown labels are skipped

        Returns:
            Position of the query in the batch (and in run_queries() results)
        """
        index_names = ""
        for _, name in self.indexes.resolve_many(indexes):
            # searchd splits on whitespace, the trailing space is harmless
            index_names += name + " "

        self._transport.add_query(query, index_names)
        self._pending.append(PendingQuery(query=query, index_names=index_names, state=self.state))
        logger.debug("query_staged", index=index_names, position=len(self._pending) - 1)
        return len(self._pending) - 1

    def run_queries(self) -> List[ResultSet]:
        """
        Run every query added with add_query() in one round trip.

        Returns one ``ResultSet`` per staged query, in the order they were
        added. Per-query statuses are not checked here: inspect
        ``ResultSet.status`` (or ``.ok``) on each result.

        Raises:
            SearchConnectionError: If searchd could not be reached
        """
        staged = len(self._pending)
        try:
            raw = self._transport.run_queries()
        except SearchConnectionError:
            raise
        except OSError as e:
            logger.error("batch_failed", queries=staged, error=str(e))
            raise SearchConnectionError(str(e)) from e
        finally:
            self._pending = []

        if raw is None:
            error = self._transport.last_error()
            logger.error("batch_failed", queries=staged, error=error)
            raise SearchConnectionError(error or "Running the query batch got no response")

        results = [to_result_set(entry) for entry in raw]
        logger.debug("batch_completed", queries=staged, failed=sum(1 for r in results if not r.ok))
        return results
