"""Application-level behaviour: health check and error rendering."""
from fastapi.testclient import TestClient

from timemaster.main import create_app
from timemaster.store import JsonStore


class ExplodingStore(JsonStore):
    """A backend whose reads fail, standing in for a storage fault."""

    def list_all(self, user_id, collection):
        raise RuntimeError("disk unavailable")


class TestApp:

    def test_health(self, client, store):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "storage": store.backend_name}

    def test_unknown_route_uses_error_body(self, client):
        resp = client.get("/api/nothing-here")
        assert resp.status_code == 404
        assert "error" in resp.json()

    def test_non_integer_id_is_400(self, client, headers):
        resp = client.get("/api/tasks/abc", headers=headers)
        assert resp.status_code == 400
        assert resp.json()["error"]

    def test_storage_fault_becomes_500(self, tmp_path):
        store = ExplodingStore(tmp_path / "db.json")
        app = create_app(store)
        with TestClient(app, raise_server_exceptions=False) as c:
            token = c.post("/api/auth/register", json={
                "name": "Ana", "email": "ana@example.com", "password": "secret",
            }).json()["token"]
            resp = c.get("/api/categories", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 500
        assert resp.json() == {"error": "disk unavailable"}


class TestCollectionPaths:
    """Collection endpoints answer on the bare path, without a redirect."""

    def test_bare_paths_do_not_redirect(self, client, headers):
        checks = [
            ("post", "/api/tasks", {"title": "Direct"}, 201),
            ("get", "/api/tasks", None, 200),
            ("post", "/api/categories", {"name": "Music"}, 201),
            ("post", "/api/blocks", {"title": "B", "start_datetime": "2026-10-19T08:00",
                                     "end_datetime": "2026-10-19T09:00"}, 201),
            ("post", "/api/pomodoro", {}, 201),
            ("get", "/api/pomodoro", None, 200),
            ("get", "/api/settings", None, 200),
            ("put", "/api/settings", {"theme": "dark"}, 200),
        ]
        for method, path, body, expected in checks:
            kwargs = {"headers": headers, "follow_redirects": False}
            if body is not None:
                kwargs["json"] = body
            resp = getattr(client, method)(path, **kwargs)
            assert resp.status_code == expected, (method, path, resp.status_code)


class TestStorageWriteFailure:

    def test_failed_write_is_500(self, tmp_path, monkeypatch):
        store = JsonStore(tmp_path / "db.json")
        app = create_app(store)
        with TestClient(app, raise_server_exceptions=False) as c:
            token = c.post("/api/auth/register", json={
                "name": "Ana", "email": "ana@example.com", "password": "secret",
            }).json()["token"]

            def refuse(src, dst):
                raise OSError("No space left on device")

            monkeypatch.setattr("timemaster.store.json_store.os.replace", refuse)
            resp = c.post("/api/tasks", json={"title": "Lost"}, headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 500
        assert resp.json() == {"error": "Could not write the database file"}
