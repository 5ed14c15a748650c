"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from resumevault.config import Settings
from resumevault.interfaces.api.app import create_app
from resumevault.interfaces.api.middleware.cors import CORSMiddleware
from resumevault.main import build_resources


@pytest.fixture
def settings() -> Settings:
    """Settings without reading .env from the working directory."""
    return Settings(_env_file=None, cors_origins="http://localhost:3000")


@pytest.fixture
def app(uow_factory, settings):
    """Falcon ASGI app wired against the in-memory store."""
    return create_app(
        **build_resources(uow_factory, settings),
        middleware=[CORSMiddleware(settings.cors_origin_list)],
    )


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)
