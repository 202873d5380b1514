"""
Shared fixtures: an app wired to the in-memory Supabase fake and helpers
that create accounts and listings.
"""
import uuid

import pytest
from fastapi.testclient import TestClient

from looply.main import app
from looply.database.supabase_client import get_supabase, get_service_supabase
from looply.modules.auth.service import clear_auth_cache
from tests.fakes import FakeSupabase


@pytest.fixture
def db():
    return FakeSupabase()


@pytest.fixture
def client(db):
    app.dependency_overrides[get_supabase] = lambda: db
    app.dependency_overrides[get_service_supabase] = lambda: db
    clear_auth_cache()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    clear_auth_cache()


@pytest.fixture
def make_account(db):
    """Factory for signed-up accounts with a profile row"""
    def _make(role: str = "user", name: str = None, **kwargs):
        email = f"{role}_{uuid.uuid4().hex[:8]}@example.com"
        return db.create_account(email, name=name or f"{role.upper()} account", role=role, **kwargs)
    return _make


@pytest.fixture
def alice(make_account):
    return make_account(name="Alice")


@pytest.fixture
def bob(make_account):
    return make_account(name="Bob")


@pytest.fixture
def ngo(make_account):
    return make_account(role="ngo", name="Green Hands")


def listing_payload(**overrides):
    payload = {
        "title": "Vintage denim jacket",
        "description": "Lightly worn denim jacket, size M",
        "category": "Fashion",
        "condition": "good",
        "mode": "gift",
        "tags": ["denim", "jacket"],
        "location": "Berlin",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def create_listing(client):
    """Factory posting a listing through the API as the given account"""
    def _create(account, **overrides):
        response = client.post("/api/v1/items", json=listing_payload(**overrides), headers=account["headers"])
        assert response.status_code == 201, response.text
        return response.json()
    return _create
