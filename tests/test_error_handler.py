"""
Tests for the HTTP error boundary (utils/error_handler.py).
"""
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel, Field

from enums.error_kind import ErrorKind
from exceptions import (
    DatabaseOperationException,
    DuplicateResourceException,
    EmptyOrderException,
    OrderNotFoundException,
    StoreTimeoutException,
    StoreUnavailableException,
)
from middleware.trace_id import TraceIdMiddleware
from utils.error_handler import ERROR_KIND_STATUS, register_exception_handlers


class _Payload(BaseModel):
    quantity: int = Field(..., ge=1)


@pytest.fixture
def client():
    app = FastAPI()
    app.add_middleware(TraceIdMiddleware)
    register_exception_handlers(app)

    errors = {
        "not-found": OrderNotFoundException("o1"),
        "invalid": EmptyOrderException(),
        "conflict": DuplicateResourceException("Category", "name", "Books"),
        "unavailable": StoreUnavailableException("cache store", "get"),
        "timeout": StoreTimeoutException("document store", "get"),
        "internal": DatabaseOperationException("list", "sqlite3.OperationalError: disk I/O error"),
    }

    @app.get("/raise/{name}")
    async def raise_error(name: str):
        raise errors[name]

    @app.get("/crash")
    async def crash():
        raise RuntimeError("secret driver text")

    @app.post("/validate")
    async def validate(payload: _Payload):
        return payload

    return TestClient(app, raise_server_exceptions=False)


class TestErrorKindStatus:

    def test_every_kind_has_a_status(self):
        assert set(ERROR_KIND_STATUS) == set(ErrorKind)

    @pytest.mark.parametrize("name,status_code,code", [
        ("not-found", 404, "ORDER_NOT_FOUND"),
        ("invalid", 400, "EMPTY_ORDER"),
        ("conflict", 409, "DUPLICATE_RESOURCE"),
        ("unavailable", 503, "STORE_UNAVAILABLE"),
        ("timeout", 504, "STORE_TIMEOUT"),
        ("internal", 500, "DATABASE_ERROR"),
    ])
    def test_status_per_kind(self, client, name, status_code, code):
        response = client.get(f"/raise/{name}")

        assert response.status_code == status_code
        assert response.json()["code"] == code


class TestErrorEnvelope:

    def test_envelope_fields(self, client):
        response = client.get("/raise/not-found", headers={"X-Trace-Id": "trace-123"})

        body = response.json()
        assert "o1" in body["message"]
        assert body["details"] == {"order_id": "o1"}
        assert body["trace_id"] == "trace-123"
        assert "timestamp" in body
        assert response.headers["X-Trace-Id"] == "trace-123"

    def test_empty_details_are_omitted(self, client):
        body = client.get("/raise/invalid").json()

        assert "details" not in body

    def test_internal_error_is_sanitized(self, client):
        body = client.get("/raise/internal").json()

        assert "disk I/O" not in body["message"]
        assert "details" not in body

    def test_unhandled_exception_is_500(self, client):
        response = client.get("/crash")

        assert response.status_code == 500
        assert response.json()["code"] == "INTERNAL_ERROR"
        assert "secret driver text" not in response.text

    def test_validation_error_is_400(self, client):
        response = client.post("/validate", json={"quantity": 0})

        body = response.json()
        assert response.status_code == 400
        assert body["code"] == "VALIDATION_ERROR"
        assert body["details"][0]["field"] == "quantity"

    def test_unknown_route_is_404(self, client):
        response = client.get("/nope")

        assert response.status_code == 404
        assert response.json()["code"] == "HTTP_404"
