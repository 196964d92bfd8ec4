import logging
import uuid

import pytest

pytestmark = pytest.mark.integration


def _messages(caplog) -> list:
    return [record.getMessage() for record in caplog.records]


class TestCorrelationIdMiddleware:
    def test_echoes_client_request_id(self, client):
        response = client.get("/health", HTTP_X_REQUEST_ID="desk-request-123")
        assert response["X-Request-ID"] == "desk-request-123"

    def test_generates_uuid4_when_absent(self, client):
        request_id = client.get("/health")["X-Request-ID"]
        assert str(uuid.UUID(request_id, version=4)) == request_id

    def test_ids_are_bound_to_log_lines(self, client, caplog):
        with caplog.at_level(logging.INFO):
            client.get(
                "/health",
                HTTP_X_REQUEST_ID="log-correlation-456",
                HTTP_X_SESSION_ID="desk-session-7",
            )

        messages = _messages(caplog)
        assert any("log-correlation-456" in m for m in messages), messages
        assert any("desk-session-7" in m for m in messages), messages

    def test_fixture_client_sends_request_id(self, api_client_with_correlation):
        client, cid = api_client_with_correlation
        assert client.get("/api/v1/me")["X-Request-ID"] == cid


class TestCurrentUser:
    def test_requires_auth(self, api_client):
        assert api_client.get("/api/v1/me").status_code == 401

    def test_returns_the_desk_user(self, auth_client):
        data = auth_client.get("/api/v1/me").json()
        assert data["username"] == "desk"
        assert data["is_staff"] is False
