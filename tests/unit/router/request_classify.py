"""Unit tests for /mcp request classification."""

from __future__ import annotations

import pytest

from mcpgate.router import RouteKind, classify_request
from tests.helpers.fakes import INIT_MESSAGE, request


def test_post_initialize_without_session_initiates() -> None:
    assert classify_request("POST", None, INIT_MESSAGE) is RouteKind.INITIATE


@pytest.mark.parametrize(
    ("method", "expected"),
    [
        ("POST", RouteKind.CONTINUE),
        ("post", RouteKind.CONTINUE),
        ("GET", RouteKind.RESUME),
        ("DELETE", RouteKind.TERMINATE),
        ("PUT", RouteKind.MALFORMED),
    ],
)
def test_session_header_routes_by_method(method: str, expected: RouteKind) -> None:
    assert classify_request(method, "abc", request("ping")) is expected


def test_post_non_initialize_without_session_is_malformed() -> None:
    assert classify_request("POST", None, request("tools/list")) is RouteKind.MALFORMED


def test_initialize_notification_does_not_initiate() -> None:
    message = {"jsonrpc": "2.0", "method": "initialize"}
    assert classify_request("POST", None, message) is RouteKind.MALFORMED


@pytest.mark.parametrize("method", ["GET", "DELETE"])
def test_get_and_delete_without_session_are_malformed(method: str) -> None:
    assert classify_request(method, None) is RouteKind.MALFORMED


def test_empty_session_header_counts_as_missing() -> None:
    assert classify_request("GET", "") is RouteKind.MALFORMED
