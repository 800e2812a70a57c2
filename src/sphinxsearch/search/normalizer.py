"""
Post-processing of raw searchd responses.
"""

from typing import Any, Dict, Mapping, Optional, Union

from sphinxsearch.platform.logging import get_logger

from .constants import SearchStatus
from .errors import SearchError
from .schemas import ResultSet

logger = get_logger(__name__)

NormalizedResult = Union[ResultSet, Dict[str, Any], Any]


def _is_result(entry: Any) -> bool:
    return isinstance(entry, Mapping) and "status" in entry


def to_result_set(raw: Mapping[str, Any]) -> ResultSet:
    """Coerce one raw result mapping into a ``ResultSet``."""
    return ResultSet.model_validate(dict(raw))


def _coerce(entry: Any) -> Any:
    if _is_result(entry):
        return to_result_set(entry)
    if isinstance(entry, Mapping):
        return {key: _coerce(value) for key, value in entry.items()}
    return entry


def _failure(raw: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
    """Return the result that carries a non-OK status, if any."""
    if "status" in raw:
        return None if raw["status"] == SearchStatus.OK else raw
    # Per-index group: every nested result has to be OK
    for entry in raw.values():
        if _is_result(entry) and entry["status"] != SearchStatus.OK:
            return entry
    return None


def normalize_result(
    raw: Mapping[str, Any],
    requested_labels: int,
    *,
    query: str,
    index: str,
    label: Optional[str] = None,
    last_error: str = "",
) -> NormalizedResult:
    """
    Check a raw ``search()`` response and unwrap single-index results.

    Args:
        raw: The driver's response container
        requested_labels: Number of labels the caller asked for, known or not
        query: Query string as sent to searchd (for the error message)
        index: Space-joined index names the query ran against
        label: Last label processed, reported alongside ``index``
        last_error: Driver's last error, used when the result carries none

    Returns:
        The single nested result when exactly one label was requested AND the
        container holds exactly one entry; otherwise the whole container.
        Empty results with an OK status are returned as they are.

    Raises:
        SearchError: If searchd reported any status other than OK
    """
    failed = _failure(raw)
    if failed is not None:
        message = failed.get("error") or last_error
        logger.error(
            "search_failed",
            index=index,
            label=label,
            query=query,
            status=failed.get("status"),
            error=message,
        )
        raise SearchError(index=index, query=query, message=message, label=label)

    if requested_labels == 1 and len(raw) == 1:
        return _coerce(next(iter(raw.values())))

    return _coerce(raw)
