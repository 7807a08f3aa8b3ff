"""Tests for Task endpoints: CRUD, filters, ordering, today, upcoming reminders."""
from datetime import timedelta

from tests.conftest import auth_headers, create_task, register_user
from timemaster import clock


class TestTaskCRUD:

    def test_create_defaults(self, client, headers):
        task = create_task(client, headers, title="Write essay")
        assert task["id"] == 1
        assert task["status"] == "pending"
        assert task["priority"] == 2
        assert task["description"] == ""
        assert task["reminder_minutes_before"] == 10
        assert task["voice_reminder"] is True
        assert task["category_id"] is None
        assert task["created_at"]

    def test_create_ignores_client_status(self, client, headers):
        task = create_task(client, headers, title="Sneaky", status="completed")
        assert task["status"] == "pending"

    def test_create_requires_title(self, client, headers):
        resp = client.post("/api/tasks", json={"description": "no title"}, headers=headers)
        assert resp.status_code == 400
        assert "title" in resp.json()["error"]

    def test_empty_category_means_none(self, client, headers):
        task = create_task(client, headers, category_id="")
        assert task["category_id"] is None

    def test_get_and_not_found(self, client, headers):
        task = create_task(client, headers)
        assert client.get(f"/api/tasks/{task['id']}", headers=headers).json() == task
        resp = client.get("/api/tasks/999", headers=headers)
        assert resp.status_code == 404
        assert resp.json()["error"]

    def test_partial_update(self, client, headers):
        task = create_task(client, headers, title="Read", description="chapter 3", priority=1)
        resp = client.put(f"/api/tasks/{task['id']}", json={"status": "completed"}, headers=headers)
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "completed"
        assert data["description"] == "chapter 3"
        assert data["priority"] == 1
        assert data["updated_at"]

    def test_update_rejects_unknown_status(self, client, headers):
        task = create_task(client, headers)
        resp = client.put(f"/api/tasks/{task['id']}", json={"status": "archived"}, headers=headers)
        assert resp.status_code == 400

    def test_update_cannot_clear_required_fields(self, client, headers):
        task = create_task(client, headers, title="Keep title")
        for body in ({"title": None}, {"title": ""}, {"status": None}, {"priority": None}):
            resp = client.put(f"/api/tasks/{task['id']}", json=body, headers=headers)
            assert resp.status_code == 400, body
        assert client.get(f"/api/tasks/{task['id']}", headers=headers).json()["title"] == "Keep title"

    def test_update_can_clear_optional_fields(self, client, headers):
        task = create_task(client, headers, category_id=1, due_date="2026-10-19")
        resp = client.put(f"/api/tasks/{task['id']}", json={"category_id": None, "due_date": None}, headers=headers)
        assert resp.status_code == 200
        assert resp.json()["category_id"] is None
        assert resp.json()["due_date"] is None

    def test_update_unknown_is_404(self, client, headers):
        resp = client.put("/api/tasks/404", json={"title": "ghost"}, headers=headers)
        assert resp.status_code == 404

    def test_delete_is_idempotent(self, client, headers):
        task = create_task(client, headers)
        for _ in range(2):
            resp = client.delete(f"/api/tasks/{task['id']}", headers=headers)
            assert resp.status_code == 200
            assert resp.json() == {"success": True}
        assert client.get(f"/api/tasks/{task['id']}", headers=headers).status_code == 404


class TestTaskList:

    def test_sorted_by_priority_with_category(self, client, headers):
        create_task(client, headers, title="low", priority=1, category_id=1)
        create_task(client, headers, title="high", priority=3)
        create_task(client, headers, title="mid", priority=2, category_id=5)

        tasks = client.get("/api/tasks", headers=headers).json()
        assert [t["title"] for t in tasks] == ["high", "mid", "low"]
        assert tasks[0]["category_name"] is None
        assert tasks[1]["category_name"] == "Sport"
        assert tasks[2]["category_name"] == "École"
        assert tasks[2]["category_color"] == "#4DA8DA"

    def test_filters(self, client, headers):
        a = create_task(client, headers, title="a", category_id=1, due_date="2026-10-19")
        create_task(client, headers, title="b", category_id=2, due_date="2026-10-20")
        client.put(f"/api/tasks/{a['id']}", json={"status": "completed"}, headers=headers)

        def titles(**params):
            resp = client.get("/api/tasks", params=params, headers=headers)
            assert resp.status_code == 200
            return sorted(t["title"] for t in resp.json())

        assert titles(status="completed") == ["a"]
        assert titles(status="pending") == ["b"]
        assert titles(category=2) == ["b"]
        assert titles(date="2026-10-19") == ["a"]
        assert titles(category=1, status="pending") == []

    def test_dangling_category_after_delete(self, client, headers):
        cat = client.post("/api/categories", json={"name": "Temp"}, headers=headers).json()
        task = create_task(client, headers, title="linked", category_id=cat["id"])

        client.delete(f"/api/categories/{cat['id']}", headers=headers)

        assert client.get(f"/api/tasks/{task['id']}", headers=headers).json()["category_id"] == cat["id"]
        listed = client.get("/api/tasks", headers=headers).json()
        assert listed[0]["category_name"] is None
        assert listed[0]["category_color"] is None

    def test_users_do_not_see_each_other(self, client, headers):
        create_task(client, headers, title="mine")
        other = auth_headers(register_user(client, name="Bob", email="bob@example.com")["token"])

        assert client.get("/api/tasks", headers=other).json() == []
        assert client.get("/api/tasks/1", headers=other).status_code == 404
        assert client.put("/api/tasks/1", json={"title": "x"}, headers=other).status_code == 404
        client.delete("/api/tasks/1", headers=other)
        assert client.get("/api/tasks/1", headers=headers).json()["title"] == "mine"


class TestTodayAndUpcoming:

    def test_today_ordered_by_due_time(self, client, headers):
        today = clock.today().isoformat()
        create_task(client, headers, title="untimed", due_date=today, priority=3)
        create_task(client, headers, title="late", due_date=today, due_time="18:00")
        create_task(client, headers, title="early", due_date=today, due_time="07:00", category_id=1)
        create_task(client, headers, title="tomorrow", due_date=(clock.today() + timedelta(days=1)).isoformat())

        tasks = client.get("/api/tasks/today", headers=headers).json()
        assert [t["title"] for t in tasks] == ["early", "late", "untimed"]
        assert tasks[0]["category_name"] == "École"

    def test_upcoming_reminders(self, client, headers):
        due = clock.now() + timedelta(minutes=30)
        far = clock.now() + timedelta(hours=5)
        common = {"due_date": due.date().isoformat(), "reminder_minutes_before": 10}
        create_task(client, headers, title="soon", due_time=due.strftime("%H:%M"), **common)
        create_task(client, headers, title="muted", due_time=due.strftime("%H:%M"), voice_reminder=False, **common)
        create_task(client, headers, title="later", due_date=far.date().isoformat(), due_time=far.strftime("%H:%M"))

        resp = client.get("/api/tasks/upcoming", headers=headers)
        assert resp.status_code == 200
        assert [t["title"] for t in resp.json()] == ["soon"]
