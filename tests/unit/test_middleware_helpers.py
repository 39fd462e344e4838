"""Unit tests for request ID sanitizing and request provenance."""

import uuid

from starlette.requests import Request

from sikap.middleware.request_id import REQUEST_ID_MAX_LENGTH, sanitize_request_id
from sikap.shared.request_audit import UNKNOWN, get_request_provenance


def _request(headers: list[tuple[bytes, bytes]], client=("10.0.0.5", 1234), state=None) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "headers": headers,
        "client": client,
        "state": state or {},
    }
    return Request(scope)


class TestSanitizeRequestId:
    def test_valid_is_kept(self) -> None:
        assert sanitize_request_id("abc-123_DEF") == "abc-123_DEF"

    def test_log_injection_replaced(self) -> None:
        value = sanitize_request_id("abc\nFAKE LOG LINE")
        assert uuid.UUID(value)

    def test_too_long_replaced(self) -> None:
        value = sanitize_request_id("a" * (REQUEST_ID_MAX_LENGTH + 1))
        assert uuid.UUID(value)

    def test_missing_generated(self) -> None:
        assert uuid.UUID(sanitize_request_id(None))


class TestRequestProvenance:
    def test_forwarded_for_first_hop(self) -> None:
        request = _request(
            [
                (b"x-forwarded-for", b"203.0.113.1, 10.0.0.1"),
                (b"user-agent", b"Mozilla/5.0"),
            ],
            state={"request_id": "req-9"},
        )
        provenance = get_request_provenance(request)
        assert provenance.ip_address == "203.0.113.1"
        assert provenance.user_agent == "Mozilla/5.0"
        assert provenance.request_id == "req-9"

    def test_falls_back_to_peer_address(self) -> None:
        provenance = get_request_provenance(_request([]))
        assert provenance.ip_address == "10.0.0.5"
        assert provenance.user_agent == UNKNOWN
        assert provenance.request_id is None

    def test_unknown_when_nothing_available(self) -> None:
        provenance = get_request_provenance(_request([], client=None))
        assert provenance.ip_address == UNKNOWN
