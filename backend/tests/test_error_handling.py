from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from storefront.main import create_app


def _boom():
    raise RuntimeError("dsn=postgres://u:pw@db/storefront")


@pytest.fixture
def make_client(settings):
    """Client over an app with a failing route; server errors come back as responses."""
    clients = []

    def _make(**overrides):
        app = create_app(settings.model_copy(update=overrides))
        app.add_api_route("/boom", _boom)
        client = TestClient(app, raise_server_exceptions=False)
        client.__enter__()
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.__exit__(None, None, None)


def test_production_hides_exception_text_even_with_debug(make_client) -> None:
    client = make_client(app_env="production", app_debug=True)

    response = client.get("/boom")

    assert response.status_code == 500
    body = response.json()
    assert body["error"]["code"] == "internal_error"
    assert body["error"]["details"] is None
    assert "pw@db" not in response.text


def test_development_debug_shows_exception_text(make_client) -> None:
    client = make_client(app_env="development", app_debug=True)

    response = client.get("/boom")

    assert response.status_code == 500
    assert response.json()["error"]["details"].startswith("RuntimeError:")


def test_debug_off_hides_exception_text(make_client) -> None:
    client = make_client(app_env="development", app_debug=False)

    assert client.get("/boom").json()["error"]["details"] is None


def test_server_error_keeps_request_id(make_client) -> None:
    client = make_client(app_debug=False)

    response = client.get("/boom", headers={"x-request-id": "req-abc123"})

    assert response.status_code == 500
    assert response.json()["meta"]["request_id"] == "req-abc123"
    assert response.headers["x-request-id"] == "req-abc123"


def test_server_error_generates_request_id(make_client) -> None:
    client = make_client(app_debug=False)

    response = client.get("/boom")

    request_id = response.json()["meta"]["request_id"]
    assert request_id and request_id.startswith("req-")
    assert response.headers["x-request-id"] == request_id
