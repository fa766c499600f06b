# File: tests/conftest.py

"""
Shared fixtures.

Every test gets a fresh application backed by an in-memory SQLite database.
Use the client fixture inside tests; the lifespan (table creation, admin seed)
runs when the TestClient context opens.
"""

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_application

ADMIN_EMAIL = "admin@rwa.io"
ADMIN_PASSWORD = "Adm1nPass"
DEFAULT_PASSWORD = "Passw0rd"


def make_settings(**overrides) -> Settings:
    values = dict(
        environment="test",
        database_url="sqlite:///:memory:",
        jwt_secret="test-secret-key-with-enough-length-for-hs256",
        bcrypt_rounds=4,
        rate_limit_max_requests=10_000,
        frontend_dist_dir="/nonexistent-dist",
        admin_email=ADMIN_EMAIL,
        admin_password=ADMIN_PASSWORD,
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def app(settings):
    return create_application(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def register(client, name="Jane Doe", email="jane@x.com", password=DEFAULT_PASSWORD):
    return client.post("/api/auth/register", json={"name": name, "email": email, "password": password})


def login(client, email="jane@x.com", password=DEFAULT_PASSWORD):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def auth_headers_for(client, email="jane@x.com", name="Jane Doe"):
    resp = register(client, name=name, email=email)
    assert resp.status_code == 201, resp.text
    token = login(client, email=email).json()["token"]
    return {"Authorization": f"Bearer {token}"}


def pledge(client, headers, asset_type="real_estate", value=250000, description="Two-bedroom flat"):
    resp = client.post(
        "/api/assets/pledge",
        json={"assetType": asset_type, "description": description, "estimatedValue": value},
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["asset"]


@pytest.fixture
def auth_headers(client):
    return auth_headers_for(client)


@pytest.fixture
def other_headers(client):
    return auth_headers_for(client, email="bob@y.com", name="Bob Smith")


@pytest.fixture
def admin_headers(client):
    token = login(client, email=ADMIN_EMAIL, password=ADMIN_PASSWORD).json()["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def approved_asset(client, auth_headers, admin_headers):
    asset = pledge(client, auth_headers)
    resp = client.post(f"/api/admin/assets/{asset['id']}/approve", headers=admin_headers)
    assert resp.status_code == 200, resp.text
    return resp.json()["asset"]


@pytest.fixture
def tokenized_asset(client, auth_headers, approved_asset):
    resp = client.post(
        f"/api/assets/{approved_asset['id']}/mint",
        json={"tokenSymbol": "flat", "tokenSupply": 1000},
        headers=auth_headers,
    )
    assert resp.status_code == 200, resp.text
    return resp.json()["asset"]
