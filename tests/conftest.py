"""
Pytest configuration and shared fixtures.
"""

import os
import sys
from unittest.mock import MagicMock

import pytest

sys.path.append(os.path.join(os.getcwd(), "src"))

from sphinxsearch.search.transport import SphinxApiTransport


INDEXES = {
    "Articles": "articles_main",
    "Users": "users_main",
    "Comments": "comments_delta",
}


def make_result(status=0, matches=None, error="", **extra):
    """Raw result mapping shaped like the driver's output."""
    matches = matches or []
    result = {
        "error": error,
        "warning": "",
        "status": status,
        "fields": ["title", "body"],
        "attrs": [["created_at", 2]],
        "matches": matches,
        "total": len(matches),
        "total_found": len(matches),
        "time": "0.002",
        "words": {},
    }
    result.update(extra)
    return result


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment() -> None:
    """Set up test environment variables."""
    os.environ.setdefault("APP_ENV", "test")
    os.environ.setdefault("LOG_LEVEL", "debug")


@pytest.fixture
def transport():
    """Mock protocol driver; escaping wraps the query so it is recognizable."""
    mock = MagicMock(spec=SphinxApiTransport)
    mock.escape.side_effect = lambda raw: f"<{raw}>"
    mock.query.return_value = make_result()
    mock.run_queries.return_value = []
    mock.last_error.return_value = ""
    mock.last_warning.return_value = ""
    return mock


@pytest.fixture
def sphinx(transport):
    from sphinxsearch.search.client import Sphinxsearch

    return Sphinxsearch(indexes=INDEXES, transport=transport)


@pytest.fixture
def result_factory():
    return make_result
