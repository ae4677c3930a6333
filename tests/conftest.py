"""
Shared fixtures: persistence backends, an app wired to a temporary upload
directory, and authenticated clients.
"""

from contextlib import ExitStack

import pytest
from fastapi.testclient import TestClient

from buildhub.application.services.auth_service import create_user
from buildhub.application.services.notification_service import NotificationCenter
from buildhub.config import Settings, get_settings
from buildhub.domain.roles import Role
from buildhub.infrastructure.backends import MemoryBackend, SQLAlchemyBackend
from buildhub.infrastructure.database import create_db_engine
from buildhub.infrastructure.file_storage import LocalFileStorage
from buildhub.main import create_app

PASSWORD = "secret123"


# =============================================================================
# Persistence
# =============================================================================


@pytest.fixture(params=["memory", "sqlite"])
def backend(request):
    """Every repository-level test runs against both backends."""
    if request.param == "memory":
        backend = MemoryBackend()
    else:
        backend = SQLAlchemyBackend(create_db_engine("sqlite://"))
    backend.init()
    yield backend
    backend.dispose()


@pytest.fixture
def repos(backend):
    with backend.repositories() as bundle:
        yield bundle


@pytest.fixture
def owner(repos):
    return create_user(repos.users, name="Olivia Owner", email="owner@example.com", password=PASSWORD)


@pytest.fixture
def other_user(repos):
    return create_user(repos.users, name="Sam Other", email="other@example.com", password=PASSWORD)


@pytest.fixture
def admin(repos):
    return create_user(repos.users, name="Ada Admin", email="ada@example.com", password=PASSWORD, role=Role.ADMIN)


@pytest.fixture
def storage(tmp_path):
    return LocalFileStorage(tmp_path / "uploads")


# =============================================================================
# Application
# =============================================================================


@pytest.fixture
def notifications():
    return NotificationCenter()


@pytest.fixture
def app(storage, notifications):
    return create_app(backend=MemoryBackend(), file_storage=storage, notifications=notifications)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def client_with(storage, notifications):
    """Factory for a client whose app is built from the given setting overrides."""
    with ExitStack() as stack:
        def _client_with(**overrides):
            app = create_app(
                settings=Settings(**overrides),
                backend=MemoryBackend(),
                file_storage=storage,
                notifications=notifications,
            )
            return stack.enter_context(TestClient(app))
        yield _client_with


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client):
    """Sign a user up through the API; returns (user, headers)."""
    def _register(email, name="Test User", password=PASSWORD):
        response = client.post("/api/auth/signup", json={"email": email, "password": password, "name": name})
        assert response.status_code == 201, response.text
        body = response.json()
        return body["user"], auth_headers(body["token"])
    return _register


@pytest.fixture
def user_session(register):
    """(user, headers) of a freshly signed-up regular user."""
    return register("jane@example.com", name="Jane Builder")


@pytest.fixture
def other_session(register):
    return register("rival@example.com", name="Rita Rival")


@pytest.fixture
def admin_session(client):
    """The admin account seeded at startup."""
    settings = get_settings()
    response = client.post(
        "/api/auth/login",
        json={"email": settings.DEFAULT_ADMIN_EMAIL, "password": settings.DEFAULT_ADMIN_PASSWORD},
    )
    assert response.status_code == 200, response.text
    body = response.json()
    return body["user"], auth_headers(body["token"])
