"""
Typed request/response structures for the search client.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .constants import MatchMode, SearchStatus, SortMode


# --- Request side ---

class SearchOptions(BaseModel):
    """
    Per-label options for a single search.

    Offset and limit are only applied together; either one alone is ignored.
    """
    model_config = ConfigDict(extra="ignore")

    result_offset: Optional[int] = Field(None, ge=0)
    result_limit: Optional[int] = Field(None, gt=0)
    field_weights: Optional[Dict[str, int]] = None

    @property
    def has_limits(self) -> bool:
        return self.result_offset is not None and self.result_limit is not None


class Filter(BaseModel):
    attribute: str
    values: List[int]
    exclude: bool = False


class Limits(BaseModel):
    offset: int
    limit: int
    max_matches: int


class SessionState(BaseModel):
    """
    Settings applied to the next query issued on a session.

    Nothing here is reset between searches; filters in particular persist
    until reset_filters() is called.
    """
    match_mode: MatchMode = MatchMode.ALL
    sort_mode: SortMode = SortMode.RELEVANCE
    sort_by: str = ""
    filters: List[Filter] = Field(default_factory=list)
    limits: Optional[Limits] = None
    field_weights: Dict[str, int] = Field(default_factory=dict)


@dataclass(frozen=True)
class PendingQuery:
    """A query staged for the next multi-query batch."""
    query: str
    index_names: str
    state: SessionState


# --- Response side ---

class ResultSet(BaseModel):
    """One query's result as returned by searchd."""
    model_config = ConfigDict(extra="allow")

    status: SearchStatus
    matches: List[Dict[str, Any]] = Field(default_factory=list)
    total: int = 0
    total_found: int = 0
    time: float = 0.0
    # Shape of these differs between driver versions (list vs mapping)
    words: Any = Field(default_factory=dict)
    fields: List[str] = Field(default_factory=list)
    attrs: Any = Field(default_factory=list)
    error: str = ""
    warning: str = ""

    @property
    def ok(self) -> bool:
        return self.status == SearchStatus.OK

    def match_ids(self) -> Tuple[Any, ...]:
        return tuple(match.get("id") for match in self.matches)
