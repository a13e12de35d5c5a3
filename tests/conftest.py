import os
import tempfile
from pathlib import Path

# Configure the application BEFORE importing it: settings are read at import.
_TMP = Path(tempfile.mkdtemp(prefix="techmatch-test-"))
os.environ["ENVIRONMENT"] = "test"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["SKIP_AUTH"] = "false"
os.environ["DB_DRIVER_NAME"] = "sqlite"
os.environ["DB_DATABASE_NAME"] = ":memory:"
os.environ["UPLOAD_DIR"] = str(_TMP / "uploads")
os.environ["PUBLIC_DIR"] = str(_TMP / "no-public-pages")
os.environ["WP_BASE_URL"] = ""

import pytest
from fastapi.testclient import TestClient

from techmatch.api.auth import TokenIdentityProvider
from techmatch.api.content_gateway import ContentGateway
from techmatch.api.models import Identity
from techmatch.database.config.config import settings
from techmatch.database.config.connection_engine import connection_engine, init_db, metadata
from techmatch.main import app

PASSWORD = "correct-horse-1"


@pytest.fixture(autouse=True)
def database():
    """Fresh schema for each test."""
    init_db()
    yield
    metadata.drop_all(bind=connection_engine)


@pytest.fixture(autouse=True)
def app_state(monkeypatch):
    """Token auth and a local-only content gateway, restored after each test."""
    monkeypatch.setattr(app.state, "identity_provider", TokenIdentityProvider(), raising=False)
    monkeypatch.setattr(app.state, "content_gateway", ContentGateway(remote=None), raising=False)
    monkeypatch.setattr(settings, "ADMIN_ROLE_REQUIRED", False)
    monkeypatch.setattr(settings, "ALLOW_SELF_INTEREST", True)
    yield


@pytest.fixture
def upload_dir() -> Path:
    path = Path(settings.UPLOAD_DIR)
    path.mkdir(parents=True, exist_ok=True)
    return path


@pytest.fixture
def client() -> TestClient:
    """Anonymous client."""
    return TestClient(app)


@pytest.fixture
def make_user():
    """
    Register an account and return ``(client, identity)`` with the session
    cookie already set on the client. Every call gets its own cookie jar.
    """
    counter = {"n": 0}

    def _make(role: str = "seller", name: str | None = None, email: str | None = None,
              organization: str | None = None):
        counter["n"] += 1
        email = email or f"{role}{counter['n']}@example.com"
        name = name or f"{role.title()} {counter['n']}"
        user_client = TestClient(app)
        resp = user_client.post("/api/register", json={
            "email": email, "password": PASSWORD, "name": name,
            "role": role, "organization": organization,
        })
        assert resp.status_code == 200, resp.text
        resp = user_client.post("/api/login", json={"email": email, "password": PASSWORD})
        assert resp.status_code == 200, resp.text
        return user_client, Identity(**resp.json()["user"])

    return _make


@pytest.fixture
def seller(make_user):
    return make_user("seller", name="Seller One")


@pytest.fixture
def buyer(make_user):
    return make_user("buyer", name="Buyer One")


@pytest.fixture
def admin(make_user):
    return make_user("admin", name="Admin One")


@pytest.fixture
def create_listing():
    """Create a patent through the API as the given client; returns the serialized patent."""

    def _create(user_client: TestClient, **fields) -> dict:
        body = {"title": "Solid-state battery separator", "description": "Thin ceramic separator",
                "category": "energy", "price": 1000}
        body.update(fields)
        resp = user_client.post("/api/patents", json=body)
        assert resp.status_code == 200, resp.text
        return resp.json()["patent"]

    return _create
