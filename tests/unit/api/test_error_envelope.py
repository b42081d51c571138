"""
Name: Error Envelope Tests

Responsibilities:
  - Internal failures become 500 with the envelope contract
  - EXPOSE_INTERNAL_ERRORS controls whether the raw error text is included
  - Constraint violations escaping a use case become 400
  - Unknown routes and request ids travel through the same envelope
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from hr_api.api.exception_handlers import register_exception_handlers
from hr_api.crosscutting.config import get_settings
from hr_api.crosscutting.exceptions import (
    ConstraintKind,
    ConstraintViolationError,
    DatabaseError,
)

pytestmark = pytest.mark.unit


def _failing_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/db")
    def db_failure():
        raise DatabaseError("connection refused")

    @app.get("/constraint")
    def constraint_failure():
        raise ConstraintViolationError(
            "duplicate", kind=ConstraintKind.UNIQUE, constraint="uq_users_email"
        )

    @app.get("/boom")
    def boom():
        raise RuntimeError("kaboom")

    return app


def _client() -> TestClient:
    return TestClient(_failing_app(), raise_server_exceptions=False)


def test_database_error_exposes_raw_text_by_default():
    response = _client().get("/db")

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "message": "Error interno del servidor: connection refused",
    }


def test_unhandled_error_exposes_raw_text_by_default():
    response = _client().get("/boom")

    assert response.status_code == 500
    assert response.json()["message"] == "Error interno del servidor: kaboom"


@pytest.mark.parametrize("path", ["/db", "/boom"])
def test_internal_text_hidden_when_disabled(monkeypatch, path):
    monkeypatch.setenv("EXPOSE_INTERNAL_ERRORS", "false")
    get_settings.cache_clear()

    response = _client().get(path)

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "message": "Error interno del servidor",
    }


def test_constraint_violation_is_400():
    response = _client().get("/constraint")

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_unknown_route_uses_envelope(client):
    response = client.get("/api/nope")

    assert response.status_code == 404
    assert response.json()["success"] is False


def test_request_id_is_echoed(client):
    response = client.get("/healthz", headers={"X-Request-Id": "req-123"})

    assert response.headers["X-Request-Id"] == "req-123"
    assert response.json() == {"ok": True, "db": "connected", "request_id": "req-123"}


def test_request_id_is_generated_when_missing(client):
    response = client.get("/healthz")

    assert response.headers["X-Request-Id"]
