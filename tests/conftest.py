import os
import time

# Config reads the environment at import time
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ["APP_ENV"] = "testing"

import jwt
import pytest
from fastapi.testclient import TestClient

from myumkm.config.settings import TestingConfig
from myumkm.fastapi_app import create_fastapi_app
from myumkm.infrastructure.persistence import (
    InMemoryConversationRepository,
    InMemoryDatabase,
    InMemoryMessageRepository,
    InMemoryUserRepository,
)
from myumkm.infrastructure.security import CredentialCodec, PasswordHasher

JWT_SECRET = os.environ["JWT_SECRET"]
PASSWORD = "secret1"


def make_token(subject_id="user_000000000001", email="a@x.com", exp_offset=3600, **overrides):
    """Sign a credential directly, bypassing the codec."""
    now = int(time.time())
    payload = {
        "subjectId": subject_id,
        "email": email,
        "iss": "my-umkm",
        "aud": "user",
        "iat": now,
        "exp": now + exp_offset,
    }
    payload.update(overrides)
    return jwt.encode(payload, JWT_SECRET, algorithm="HS256")


@pytest.fixture()
def anyio_backend():
    return "asyncio"


@pytest.fixture()
def config():
    return TestingConfig


@pytest.fixture()
def codec():
    return CredentialCodec(secret=JWT_SECRET)


@pytest.fixture()
def hasher():
    return PasswordHasher(iterations=1000)


@pytest.fixture()
def db():
    return InMemoryDatabase()


@pytest.fixture()
def user_repo(db):
    return InMemoryUserRepository(db)


@pytest.fixture()
def conversation_repo(db):
    return InMemoryConversationRepository(db)


@pytest.fixture()
def message_repo(db):
    return InMemoryMessageRepository(db)


@pytest.fixture()
def app(config):
    """Create and configure a new FastAPI app instance for each test."""
    return create_fastapi_app(config)


@pytest.fixture()
def client(app):
    """A test client for the FastAPI app."""
    with TestClient(app) as test_client:
        yield test_client


def register(client, name, email, password=PASSWORD):
    res = client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert res.status_code == 201, res.text
    return res.json()["user"]


def login(client, email, password=PASSWORD):
    res = client.post("/api/auth/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.text
    return res.json()["token"]


@pytest.fixture()
def alice(client):
    user = register(client, "Alice Umkm", "a@x.com")
    token = login(client, "a@x.com")
    # Tests pass headers explicitly; the login cookie must not authenticate them
    client.cookies.clear()
    return {**user, "token": token, "headers": {"Authorization": f"Bearer {token}"}}


@pytest.fixture()
def bob(client):
    user = register(client, "Bob Warung", "b@x.com")
    token = login(client, "b@x.com")
    client.cookies.clear()
    return {**user, "token": token, "headers": {"Authorization": f"Bearer {token}"}}


@pytest.fixture()
def carol(client):
    user = register(client, "Carol Batik", "c@x.com")
    token = login(client, "c@x.com")
    client.cookies.clear()
    return {**user, "token": token, "headers": {"Authorization": f"Bearer {token}"}}
