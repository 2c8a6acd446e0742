import logging

from fastapi.testclient import TestClient

from app.main import app
from app.services.sessions import get_session_store


class _CorruptStore:
    """Session store whose every read blows up."""

    def sessions(self):
        raise KeyError("sessions index corrupted")


def test_unexpected_error_becomes_logged_problem(caplog):
    app.dependency_overrides[get_session_store] = lambda: _CorruptStore()
    try:
        client = TestClient(app, raise_server_exceptions=False)
        with caplog.at_level(logging.ERROR):
            response = client.get("/api/v0/sessions")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.headers["content-type"].startswith("application/problem+json")
    body = response.json()
    assert body["code"] == "internal_server_error"
    assert "sessions index corrupted" in body["detail"]
    record = next(r for r in caplog.records if r.message == "Unhandled exception")
    assert record.exc_info[0] is KeyError
