"""Pytest fixtures: every store-backed test runs against both backends."""
import pytest
from fastapi.testclient import TestClient

from timemaster.database import create_engine_for
from timemaster.main import create_app
from timemaster.store import JsonStore, SqlStore


@pytest.fixture(params=["json", "sql"])
def store(request, tmp_path):
    """A fresh storage backend: JSON file or SQLite database under tmp_path."""
    if request.param == "json":
        backend = JsonStore(tmp_path / "timemaster.json")
    else:
        engine = create_engine_for(f"sqlite:///{tmp_path / 'test.db'}")
        backend = SqlStore(engine, create_schema=True)
    yield backend
    backend.close()


@pytest.fixture
def client(store):
    """FastAPI TestClient wired to the parametrized store."""
    app = create_app(store)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def headers(client):
    """Authorization headers for a freshly registered user."""
    return auth_headers(register_user(client)["token"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def register_user(client: TestClient, name: str = "Ana", email: str = "ana@example.com",
                  password: str = "secret") -> dict:
    """Helper: POST /api/auth/register and return response JSON."""
    resp = client.post("/api/auth/register", json={
        "name": name,
        "email": email,
        "password": password,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def create_task(client: TestClient, headers: dict, **fields) -> dict:
    """Helper: POST /api/tasks and return response JSON."""
    payload = {"title": "Task"}
    payload.update(fields)
    resp = client.post("/api/tasks", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()
