"""
Label -> index name registry.
"""

from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple
from types import MappingProxyType


class IndexRegistry(Mapping[str, str]):
    """
    Read-only mapping of caller-facing labels to index names as defined in
    sphinx.conf, e.g. ``{"Articles": "articles_main"}``.

    Unknown labels resolve to ``None``; the query builders skip them rather
    than failing.
    """

    def __init__(self, indexes: Optional[Mapping[str, str]] = None):
        self._indexes: Mapping[str, str] = MappingProxyType(dict(indexes or {}))

    def __getitem__(self, label: str) -> str:
        return self._indexes[label]

    def __iter__(self) -> Iterator[str]:
        return iter(self._indexes)

    def __len__(self) -> int:
        return len(self._indexes)

    def __repr__(self) -> str:
        return f"IndexRegistry({dict(self._indexes)!r})"

    def resolve(self, label: str) -> Optional[str]:
        return self._indexes.get(label)

    def resolve_many(self, labels: Iterable[str]) -> List[Tuple[str, str]]:
        """Return ``(label, index_name)`` pairs for known labels, in order."""
        resolved = []
        for label in labels:
            name = self._indexes.get(label)
            if name is not None:
                resolved.append((label, name))
        return resolved

    def as_dict(self) -> Dict[str, str]:
        return dict(self._indexes)
