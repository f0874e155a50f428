# Shared fixtures: an in-memory MongoDB (mongomock) wired into the app,
# a fresh token store per test and a logged-in Authorization header.

import os

import mongomock
import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("ADMIN_USERNAME", "admin")
os.environ.setdefault("ADMIN_PASSWORD", "password123")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import database
from main import app
from security import TokenStore


@pytest.fixture
def db():
    client = mongomock.MongoClient()
    test_db = client["portfolio_builder_test"]
    database.ensure_indexes(test_db)
    yield test_db
    client.close()


@pytest.fixture
def client(db, monkeypatch):
    monkeypatch.setattr(database, "ping", lambda _db: True)
    app.state.db = db
    app.state.indexes_ready = True
    app.state.db_ready_until = 0
    app.state.token_store = TokenStore()
    with TestClient(app) as c:
        yield c
    app.state.db = None


@pytest.fixture
def auth_header(client):
    resp = client.post("/auth/login", json={"username": "admin", "password": "password123"})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture
def user(client):
    resp = client.post("/user", json={
        "username": "john_doe",
        "email": "john@example.com",
        "fullName": "John Doe",
    })
    assert resp.status_code == 201
    return resp.json()["data"]
