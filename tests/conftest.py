"""Shared test fixtures."""
import pytest
from fastapi.testclient import TestClient

from portal.api_server import create_app
from portal.auth import PasswordHasher
from portal.storage import MemStorage


@pytest.fixture
def storage() -> MemStorage:
    """Fresh store seeded with sample data."""
    return MemStorage()


@pytest.fixture
def hasher() -> PasswordHasher:
    """Minimum bcrypt work factor to keep tests fast."""
    return PasswordHasher(rounds=4)


@pytest.fixture
def client(storage, hasher):
    """Create FastAPI test client over a fresh store."""
    app = create_app(storage=storage, password_hasher=hasher)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def user_payload():
    """Valid registration body."""
    def _create(**overrides):
        payload = {
            "username": "jdoe",
            "password": "s3cret!",
            "email": "jdoe@example.com",
            "firstName": "Jane",
            "lastName": "Doe",
        }
        payload.update(overrides)
        return payload
    return _create


@pytest.fixture
def registered_user(client, user_payload):
    """Register a user and return the response body."""
    response = client.post("/api/users/register", json=user_payload())
    assert response.status_code == 201
    return response.json()
