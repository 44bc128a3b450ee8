"""Tests for request-scoped logging context."""

from uuid import uuid4

from fastapi.testclient import TestClient

from src.core.context import (
    RequestContext,
    clear_context,
    get_context,
    get_request_id,
    get_trace_id,
    get_user_id,
    set_request_id,
    set_trace_id,
    set_user_id,
)
from src.core.logging import filter_sensitive_data
from src.core.middleware import extract_traceparent


class TestContextVariables:
    """Getters, setters and clearing."""

    def test_set_and_clear(self) -> None:
        user_id = uuid4()
        set_request_id("req-1")
        set_user_id(user_id)
        set_trace_id("trace-1")

        assert get_context() == {
            "request_id": "req-1",
            "user_id": str(user_id),
            "trace_id": "trace-1",
        }

        clear_context()
        assert get_context() == {}
        assert get_user_id() is None
        assert get_trace_id() is None

    def test_generated_request_id(self) -> None:
        request_id = set_request_id()
        assert request_id
        assert get_request_id() == request_id
        clear_context()

    def test_request_context_restores_previous_values(self) -> None:
        clear_context()
        with RequestContext(request_id="job", user_id="u-1"):
            assert get_request_id() == "job"
            assert get_user_id() == "u-1"

        assert get_request_id() == ""
        assert get_user_id() is None


class TestTraceparent:
    def test_extracts_trace_id(self) -> None:
        header = "00-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-01"
        assert extract_traceparent(header) == "4bf92f3577b34da6a3ce929d0e0e4736"

    def test_missing_or_malformed(self) -> None:
        assert extract_traceparent(None) is None
        assert extract_traceparent("garbage") is None


class TestSensitiveData:
    def test_passwords_are_masked(self) -> None:
        event = filter_sensitive_data(
            None, "info", {"event": "login", "password": "password123"}
        )
        assert event["password"] != "password123"
        assert event["event"] == "login"


class TestMiddleware:
    """RequestContextMiddleware through the app."""

    def test_request_id_echoed(self, client: TestClient) -> None:
        response = client.get("/health/live", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"

    def test_request_id_generated(self, client: TestClient) -> None:
        response = client.get("/health/live")
        assert response.headers["X-Request-ID"]

    def test_error_body_carries_request_id(self, client: TestClient) -> None:
        response = client.get("/v1/courses", headers={"X-Request-ID": "req-401"})

        assert response.status_code == 401
        assert response.json()["request_id"] == "req-401"
        assert response.headers["WWW-Authenticate"] == "Bearer"
