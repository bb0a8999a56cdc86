import os

# Must be set before ``crud_api.app.main`` builds its module-level app.
os.environ.setdefault("APP_ENV", "test")

import pytest
from fastapi.testclient import TestClient

from crud_api.app.core.config import Settings
from crud_api.app.main import create_app
from crud_api.app.services import PostService, UserService


def make_settings(**overrides) -> Settings:
    values = dict(
        environment="test",
        cors_allowed_origins="*",
        rate_limit_window_seconds=60,
        rate_limit_max=1000,
        rate_limit_strict_max=1000,
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def user_service() -> UserService:
    return UserService()


@pytest.fixture
def post_service() -> PostService:
    return PostService()


@pytest.fixture
def app(settings, user_service, post_service):
    return create_app(settings, user_service=user_service, post_service=post_service)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
