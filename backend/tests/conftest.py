"""Shared fixtures: both store backends, an app per backend, auth helpers."""

import os

# must be set before contact_tracing.core.config builds its singleton
os.environ["STORE_BACKEND"] = "memory"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["SEED_DEMO_USERS"] = "true"
os.environ["CORS_ORIGINS"] = "http://localhost:3000/"

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from contact_tracing.db.session import make_engine
from contact_tracing.main import create_app
from contact_tracing.store.memory import MemoryStore
from contact_tracing.store.provider import SqlStoreProvider

NOW = datetime(2026, 10, 1, 12, 0, 0, tzinfo=timezone.utc)

BACKENDS = ["memory", "sql"]


def fixed_clock():
    return NOW


@pytest.fixture
def memory_provider():
    store = MemoryStore()
    yield store
    store.reset()


@pytest.fixture
def sql_provider():
    engine = make_engine("sqlite://")
    provider = SqlStoreProvider(engine)
    provider.prepare()
    yield provider
    engine.dispose()


@pytest.fixture(params=BACKENDS)
def provider(request):
    return request.getfixturevalue(f"{request.param}_provider")


@pytest.fixture
def store(provider):
    with provider.session() as s:
        yield s


@pytest.fixture
def client(provider):
    app = create_app(provider)
    with TestClient(app) as c:
        yield c


def add_user(store, username, role="member"):
    return store.create_user(username=username, password_hash="x", role=role)


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def login(client, username, password):
    resp = client.post("/api/auth/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()


@pytest.fixture
def admin_headers(client):
    return bearer(login(client, "admin", "admin")["token"])


@pytest.fixture
def member_headers(client):
    return bearer(login(client, "user1", "password")["token"])
