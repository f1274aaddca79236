import copy

from vidsearch.domain.models.continuation import IssueCode
from vidsearch.domain.services.continuation import validate_continuation

CLIENT_CONTEXT = {
    "client": {
        "utcOffsetMinutes": 0,
        "gl": "US",
        "hl": "en",
        "clientName": "WEB",
        "clientVersion": "2.20240101.00.00",
    },
    "user": {},
    "request": {},
}

SEARCH_STATE = {
    "limit": None,
    "safeSearch": False,
    "pages": 1,
    "requestOptions": {"method": "GET"},
    "query": {"gl": "US", "hl": "en", "search_query": "BONK meme"},
    "search": "BONK meme",
}


def test_empty_sequence_is_valid() -> None:
    result = validate_continuation([])

    assert result.success is True
    assert result.data == []


def test_all_three_variants_are_accepted() -> None:
    payload = ["api-key", "token", CLIENT_CONTEXT, SEARCH_STATE]

    result = validate_continuation(payload)

    assert result.success is True
    assert result.data == payload


def test_valid_value_is_returned_unchanged() -> None:
    """未知字段不会被丢弃，保证令牌可以原样往返"""
    context = copy.deepcopy(CLIENT_CONTEXT)
    context["user"] = {"lockedSafetyMode": False}
    context["client"]["platform"] = "DESKTOP"

    result = validate_continuation([context])

    assert result.success is True
    assert result.data[0]["client"]["platform"] == "DESKTOP"
    assert result.data[0]["user"] == {"lockedSafetyMode": False}


def test_optional_search_state_fields_may_be_absent() -> None:
    state = copy.deepcopy(SEARCH_STATE)
    del state["limit"]
    del state["requestOptions"]

    assert validate_continuation([state]).success is True
    assert validate_continuation([dict(state, requestOptions={})]).success is True


def test_non_array_is_rejected() -> None:
    result = validate_continuation({"search": "x"})

    assert result.success is False
    assert result.issues[0].code == IssueCode.SCHEMA_VIOLATION
    assert result.issues[0].path == ["continuation"]


def test_types_are_not_coerced() -> None:
    state = copy.deepcopy(SEARCH_STATE)
    state["pages"] = "1"
    state["safeSearch"] = 1

    result = validate_continuation([state])

    assert result.success is False
    paths = [issue.path for issue in result.issues]
    assert ["continuation", 0, "SearchState", "pages"] in paths
    assert ["continuation", 0, "SearchState", "safeSearch"] in paths


def test_limit_must_be_null_when_present() -> None:
    result = validate_continuation([dict(SEARCH_STATE, limit=10)])

    assert result.success is False
    assert ["continuation", 0, "SearchState", "limit"] in [
        issue.path for issue in result.issues
    ]


def test_issues_are_collected_across_all_elements() -> None:
    missing_query = copy.deepcopy(SEARCH_STATE)
    del missing_query["query"]["search_query"]
    bad_context = copy.deepcopy(CLIENT_CONTEXT)
    bad_context["client"]["utcOffsetMinutes"] = "zero"

    result = validate_continuation(["ok", missing_query, 42, bad_context])

    assert result.success is False
    assert all(issue.code == IssueCode.SCHEMA_VIOLATION for issue in result.issues)
    paths = [issue.path for issue in result.issues]
    assert ["continuation", 1, "SearchState", "query", "search_query"] in paths
    assert ["continuation", 3, "ClientContext", "client", "utcOffsetMinutes"] in paths
    assert {path[1] for path in paths} == {1, 2, 3}
    assert all(issue.message for issue in result.issues)


def test_custom_root_is_used_as_path_prefix() -> None:
    result = validate_continuation([None], root="next")

    assert result.success is False
    assert all(issue.path[:2] == ["next", 0] for issue in result.issues)


def test_null_request_options_are_rejected() -> None:
    result = validate_continuation([dict(SEARCH_STATE, requestOptions=None)])

    assert result.success is False
    assert ["continuation", 0, "SearchState", "requestOptions"] in [
        issue.path for issue in result.issues
    ]


def test_null_request_method_is_rejected() -> None:
    result = validate_continuation([dict(SEARCH_STATE, requestOptions={"method": None})])

    assert result.success is False
    assert ["continuation", 0, "SearchState", "requestOptions", "method"] in [
        issue.path for issue in result.issues
    ]


def test_lone_surrogate_cursor_is_valid() -> None:
    result = validate_continuation(["\ud800"])

    assert result.success is True
    assert result.data == ["\ud800"]
