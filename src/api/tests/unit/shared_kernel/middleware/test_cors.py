"""Unit tests for PermissiveCORSMiddleware."""

from __future__ import annotations

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from shared_kernel.middleware import (
    CORS_HEADERS,
    PermissiveCORSMiddleware,
    install_error_handlers,
)


@pytest.fixture
def app() -> FastAPI:
    """Application with one working, one refusing and one crashing route."""
    app = FastAPI()
    app.add_middleware(PermissiveCORSMiddleware)
    install_error_handlers(app)

    @app.post("/echo")
    def echo():
        return {"echo": True}

    @app.post("/refuse")
    def refuse():
        raise HTTPException(status_code=403, detail="Forbidden")

    @app.post("/crash")
    def crash():
        raise RuntimeError("boom")

    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


def assert_cors_headers(response) -> None:
    for name, value in CORS_HEADERS.items():
        assert response.headers[name] == value


class TestPermissiveCORSMiddleware:
    """Tests for pre-flight handling and header stamping."""

    def test_preflight_answers_ok(self, client: TestClient) -> None:
        response = client.options("/echo")

        assert response.status_code == 200
        assert response.text == "ok"
        assert_cors_headers(response)

    def test_preflight_for_unknown_path_still_answers_ok(
        self, client: TestClient
    ) -> None:
        response = client.options("/does-not-exist")

        assert response.status_code == 200
        assert response.text == "ok"

    def test_successful_response_carries_headers(self, client: TestClient) -> None:
        response = client.post("/echo")

        assert response.status_code == 200
        assert response.json() == {"echo": True}
        assert_cors_headers(response)

    def test_error_response_carries_headers(self, client: TestClient) -> None:
        response = client.post("/refuse")

        assert response.status_code == 403
        assert response.json() == {"error": "Forbidden"}
        assert_cors_headers(response)

    def test_unhandled_exception_becomes_server_error(
        self, client: TestClient
    ) -> None:
        response = client.post("/crash")

        assert response.status_code == 500
        assert response.json() == {"error": "Server error"}
        assert_cors_headers(response)

    def test_allowed_methods_are_post_and_options(self) -> None:
        assert CORS_HEADERS["Access-Control-Allow-Methods"] == "POST, OPTIONS"
        assert CORS_HEADERS["Access-Control-Allow-Origin"] == "*"
