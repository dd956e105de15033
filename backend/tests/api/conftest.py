"""API-specific test fixtures."""

import pytest
from fastapi.testclient import TestClient

from venture_hub.api.deps import get_ai
from venture_hub.core.auth import AuthenticatedUser, require_auth
from venture_hub.main import create_app

USER_A = "user-a"
USER_B = "user-b"


@pytest.fixture
def app(unconfigured_ai):
    """Fresh application per test, with the LLM left unconfigured."""
    app = create_app()
    app.dependency_overrides[get_ai] = lambda: unconfigured_ai
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def login(app):
    """Authenticate subsequent requests as ``user_id`` (pass None to log out)."""

    def _login(user_id: str | None = USER_A, **claims):
        if user_id is None:
            app.dependency_overrides.pop(require_auth, None)
            return None
        user = AuthenticatedUser(
            user_id=user_id,
            claims={"sub": user_id, "email": f"{user_id}@example.com", "first_name": user_id.title(), **claims},
        )
        app.dependency_overrides[require_auth] = lambda: user
        return user

    return _login


@pytest.fixture
def api_client(app):
    """Unauthenticated client; the lifespan creates and seeds the store."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def client(api_client, login):
    """Client signed in as USER_A."""
    login(USER_A)
    return api_client


@pytest.fixture
def store(api_client):
    return api_client.app.state.store
