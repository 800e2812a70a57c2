"""
Unit tests for single searches: index resolution, options, unwrapping, errors.
"""

import pytest

from sphinxsearch.search.constants import MAX_MATCHES, SearchStatus
from sphinxsearch.search.errors import InvalidArgumentError, SearchConnectionError, SearchError, SphinxsearchError
from sphinxsearch.search.schemas import ResultSet, SearchOptions


def test_query_is_escaped_by_default(sphinx, transport):
    sphinx.search("foo-bar", {"Articles": {}})

    transport.query.assert_called_once_with("<foo-bar>", "articles_main")


def test_escape_can_be_bypassed(sphinx, transport):
    raw_query = '"exact phrase" | @title (foo -bar)'

    sphinx.search(raw_query, {"Articles": {}}, escape_query=False)

    transport.escape.assert_not_called()
    transport.query.assert_called_once_with(raw_query, "articles_main")


def test_unknown_label_is_skipped(sphinx, transport):
    sphinx.search("q", {"Nope": {"result_offset": 0, "result_limit": 5}})

    transport.set_limits.assert_not_called()
    transport.query.assert_called_once_with("<q>", "")


def test_unknown_label_behaves_like_empty_mapping(sphinx, transport):
    sphinx.search("q", {"Nope": {"field_weights": {"title": 10}}})
    with_unknown = transport.query.call_args

    transport.reset_mock()
    sphinx.search("q", {})

    assert transport.query.call_args == with_unknown
    transport.set_field_weights.assert_not_called()


def test_index_names_joined_with_single_spaces(sphinx, transport):
    sphinx.search("q", {"Articles": {}, "Nope": {}, "Users": {}, "Comments": {}})

    transport.query.assert_called_once_with("<q>", "articles_main users_main comments_delta")


def test_limits_use_fixed_max_matches(sphinx, transport):
    sphinx.search("q", {"Articles": {"result_offset": 5, "result_limit": 10}})

    transport.set_limits.assert_called_once_with(5, 10, MAX_MATCHES)
    assert MAX_MATCHES == 20000
    assert sphinx.state.limits.offset == 5


def test_limits_require_offset_and_limit_together(sphinx, transport):
    sphinx.search("q", {"Articles": {"result_limit": 10}})
    sphinx.search("q", {"Articles": SearchOptions(result_offset=3)})

    transport.set_limits.assert_not_called()
    assert sphinx.state.limits is None


def test_field_weights_applied(sphinx, transport):
    sphinx.search("q", {"Articles": SearchOptions(field_weights={"title": 10, "body": 1})})

    transport.set_field_weights.assert_called_once_with({"title": 10, "body": 1})
    assert sphinx.state.field_weights == {"title": 10, "body": 1}


def test_negative_offset_is_rejected(sphinx, transport):
    with pytest.raises(InvalidArgumentError):
        sphinx.search("q", {"Articles": {"result_offset": -1, "result_limit": 10}})

    transport.query.assert_not_called()


def test_single_label_single_entry_is_unwrapped(sphinx, transport, result_factory):
    inner = result_factory(matches=[{"id": 3, "weight": 2, "attrs": {}}])
    transport.query.return_value = {"articles_main": inner}

    result = sphinx.search("q", {"Articles": {}})

    assert isinstance(result, ResultSet)
    assert result.match_ids() == (3,)


def test_two_labels_are_not_unwrapped(sphinx, transport, result_factory):
    transport.query.return_value = {"articles_main": result_factory()}

    result = sphinx.search("q", {"Articles": {}, "Users": {}})

    assert isinstance(result, dict)
    assert list(result) == ["articles_main"]


def test_flat_result_returned_as_result_set(sphinx, transport, result_factory):
    transport.query.return_value = result_factory(matches=[{"id": 1, "weight": 1, "attrs": {}}])

    result = sphinx.search("q", {"Articles": {}})

    assert result.ok
    assert result.total == 1


def test_error_status_raises_search_error(sphinx, transport, result_factory):
    transport.query.return_value = result_factory(status=SearchStatus.ERROR, error="")
    transport.last_error.return_value = "index articles_main: syntax error"

    with pytest.raises(SearchError) as exc_info:
        sphinx.search("bad (query", {"Articles": {}}, escape_query=False)

    err = exc_info.value
    assert err.query == "bad (query"
    assert err.message == "index articles_main: syntax error"
    assert err.index == "articles_main"
    assert err.label == "Articles"


def test_no_response_raises_connection_error(sphinx, transport):
    transport.query.return_value = None
    transport.last_error.return_value = "connection to localhost:9312 failed"

    with pytest.raises(SearchConnectionError, match="9312"):
        sphinx.search("q", {"Articles": {}})


def test_filters_persist_until_reset(sphinx, transport):
    sphinx.set_filter("category_id", [1])
    sphinx.search("q", {"Articles": {}})
    assert len(sphinx.state.filters) == 1

    sphinx.reset_filters()
    sphinx.search("q", {"Articles": {}})

    assert sphinx.state.filters == []
    transport.set_filter.assert_called_once()
    transport.reset_filters.assert_called_once()


def test_search_refused_while_batch_is_pending(sphinx, transport):
    sphinx.add_query("a", ["Articles"])

    with pytest.raises(SphinxsearchError):
        sphinx.search("q", {"Articles": {}})

    transport.query.assert_not_called()


def test_zero_limit_is_rejected(sphinx, transport):
    with pytest.raises(InvalidArgumentError):
        sphinx.search("q", {"Articles": {"result_offset": 0, "result_limit": 0}})

    transport.set_limits.assert_not_called()
    transport.query.assert_not_called()


def test_transport_os_error_surfaces_as_connection_error(sphinx, transport):
    transport.query.side_effect = OSError("Connection refused")

    with pytest.raises(SearchConnectionError, match="Connection refused") as exc_info:
        sphinx.search("q", {"Articles": {}})

    assert isinstance(exc_info.value.__cause__, OSError)
