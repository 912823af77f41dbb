import httpx

from rinkside.error_handling import (
    ErrorCategory,
    ErrorHandler,
    ErrorSeverity,
    get_error_handler,
    handle_fetch_error,
)
from rinkside.utils.exceptions import APIError


def test_handler_bounds_history_and_counts():
    handler = ErrorHandler(max_errors=3)
    for i in range(5):
        handler.handle_error(ValueError(f"e{i}"), ErrorCategory.DATA_PARSING, ErrorSeverity.LOW, should_log=False)
    assert [e.message for e in handler.get_recent_errors()] == ["e2", "e3", "e4"]
    summary = handler.get_error_summary()
    assert summary["total_errors"] == 3
    assert summary["by_category"] == {"data_parsing": 5}
    handler.clear_errors()
    assert handler.get_recent_errors() == []


def test_fetch_errors_are_classified():
    handler = get_error_handler()
    handler.clear_errors()
    info = handle_fetch_error(httpx.ConnectError("refused"), "standings")
    assert info.category is ErrorCategory.NETWORK
    assert info.context == {"key": "standings"}
    info = handle_fetch_error(APIError("HTTP 500", status_code=500), "schedule:2024-01-15")
    assert info.category is ErrorCategory.FETCH
    assert info.to_dict()["category"] == "fetch"
