from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from factories import DbStub
from storefront.core.config import Settings
from storefront.main import create_app

TEST_SECRET = "test-secret-key-for-storefront-0123456789"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        app_secret_key=TEST_SECRET,
        app_env="test",
        app_debug=False,
        database_url_override=f"sqlite+aiosqlite:///{tmp_path / 'storefront.db'}",
        cors_origins="http://localhost:3000",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db() -> DbStub:
    return DbStub()
