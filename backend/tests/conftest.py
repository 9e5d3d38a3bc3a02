import os

# === Set environment BEFORE any app imports ===
os.environ.setdefault("JWT_ACCESS_TOKEN", "test-signing-secret-0123456789abcdef0123456789")
os.environ.setdefault("DATABASE_URI", "mongodb://localhost:27017")

import mongomock
import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.database import get_job_collection
from app.main import app
from app.utils.security import create_access_token


@pytest.fixture
def collection():
    client = mongomock.MongoClient()
    yield client[settings.database_name][settings.job_collection]
    client.close()


@pytest.fixture
def client(collection):
    app.dependency_overrides[get_job_collection] = lambda: collection
    # https so the Secure auth cookie round-trips through the client's jar
    c = TestClient(app, base_url="https://testserver")
    yield c
    app.dependency_overrides.clear()


@pytest.fixture
def login(client):
    """Authenticate the test client as the given email."""

    def _login(email: str):
        client.cookies.set(settings.cookie_name, create_access_token({"email": email}))
        return email

    return _login


@pytest.fixture
def job_payload():
    def _payload(**overrides):
        payload = {
            "title": "Backend Engineer",
            "type": "full-time",
            "deadline": "2030-06-01T12:00:00Z",
            "min_salary": 50000,
            "max_salary": 80000,
            "banner": "https://example.com/banner.png",
            "description": "Build APIs",
            "company": {"name": "Acme Corp", "logo": "https://example.com/logo.png"},
            "created_by": {"name": "Owner", "email": "owner@x.com"},
        }
        payload.update(overrides)
        return payload

    return _payload


@pytest.fixture
def create_job(client, job_payload):
    def _create(**overrides):
        r = client.post("/job", json=job_payload(**overrides))
        assert r.status_code == 201
        return r.json()["result"]["inserted_id"]

    return _create
