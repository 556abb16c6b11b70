"""
Taskboard Test Suite — HTTP Server
===================================
End-to-end tests of the route table through FastAPI's TestClient.

Usage:
    python -m pytest tests/test_server.py -v
    python tests/test_server.py
"""
import sys
import os
import inspect
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from taskboard.config import ServerConfig
from taskboard.server import create_app
from taskboard.store import TaskStore


class ServerTestCase(unittest.TestCase):

    def setUp(self):
        self.app = create_app(ServerConfig())
        self.store = self.app.state.store
        self.client = TestClient(self.app)

    def create(self, **body):
        return self.client.post("/api/tasks", json=body)


# ─────────────────────────────────────────────
#  Read Routes
# ─────────────────────────────────────────────

class TestReadRoutes(ServerTestCase):

    def test_list_seeded(self):
        resp = self.client.get("/api/tasks")
        self.assertEqual(resp.status_code, 200)
        payload = resp.json()
        self.assertTrue(payload["success"])
        self.assertEqual(payload["count"], 2)
        self.assertEqual(payload["data"][0]["title"], "Complete project documentation")
        self.assertEqual(payload["data"][1]["status"], "in-progress")

    def test_list_unseeded(self):
        client = TestClient(create_app(ServerConfig(seed=False)))
        payload = client.get("/api/tasks").json()
        self.assertEqual(payload, {"success": True, "count": 0, "data": []})

    def test_get(self):
        task_id = self.store.list()[0].id
        resp = self.client.get(f"/api/tasks/{task_id}")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["data"]["id"], task_id)

    def test_get_missing(self):
        resp = self.client.get("/api/tasks/nope")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"success": False, "message": "Task not found"})


# ─────────────────────────────────────────────
#  Create
# ─────────────────────────────────────────────

class TestCreate(ServerTestCase):

    def test_create_defaults(self):
        resp = self.create(title="Buy milk")
        self.assertEqual(resp.status_code, 201)
        payload = resp.json()
        self.assertEqual(payload["message"], "Task created successfully")
        task = payload["data"]
        self.assertEqual(task["title"], "Buy milk")
        self.assertEqual(task["description"], "")
        self.assertEqual(task["status"], "pending")
        self.assertIn("createdAt", task)
        self.assertNotIn("updatedAt", task)

    def test_create_appends(self):
        task_id = self.create(title="Buy milk").json()["data"]["id"]
        data = self.client.get("/api/tasks").json()["data"]
        self.assertEqual(data[-1]["id"], task_id)

    def test_create_whitespace_title(self):
        resp = self.create(title="  ")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"success": False, "message": "Title is required"})
        self.assertEqual(len(self.store), 2)

    def test_create_without_body(self):
        resp = self.client.post("/api/tasks")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Title is required")

    def test_create_wrong_type(self):
        resp = self.create(title=42)
        self.assertEqual(resp.status_code, 400)
        payload = resp.json()
        self.assertFalse(payload["success"])
        self.assertEqual(payload["message"], "Invalid request body")
        self.assertEqual(len(self.store), 2)

    def test_create_malformed_json(self):
        resp = self.client.post(
            "/api/tasks", content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Invalid request body")

    def test_ids_unique(self):
        seen = {t.id for t in self.store.list()}
        for i in range(20):
            task_id = self.create(title=f"T{i}").json()["data"]["id"]
            self.assertNotIn(task_id, seen)
            seen.add(task_id)


# ─────────────────────────────────────────────
#  Update & Delete
# ─────────────────────────────────────────────

class TestUpdateDelete(ServerTestCase):

    def test_update_status_only(self):
        before = self.create(title="Buy milk", description="two litres").json()["data"]
        resp = self.client.put(f"/api/tasks/{before['id']}", json={"status": "done"})
        self.assertEqual(resp.status_code, 200)
        after = resp.json()["data"]
        self.assertEqual(resp.json()["message"], "Task updated successfully")
        self.assertEqual(after["status"], "done")
        self.assertIn("updatedAt", after)
        for key in ("id", "title", "description", "createdAt"):
            self.assertEqual(after[key], before[key])

    def test_update_trims_and_accepts_empty(self):
        task_id = self.create(title="Buy milk", description="two litres").json()["data"]["id"]
        resp = self.client.put(
            f"/api/tasks/{task_id}", json={"title": "  Buy oat milk ", "description": ""},
        )
        data = resp.json()["data"]
        self.assertEqual(data["title"], "Buy oat milk")
        self.assertEqual(data["description"], "")

    def test_update_missing(self):
        before = self.client.get("/api/tasks").json()
        resp = self.client.put("/api/tasks/nope", json={"title": "x"})
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["message"], "Task not found")
        self.assertEqual(self.client.get("/api/tasks").json(), before)

    def test_update_missing_with_bad_body(self):
        resp = self.client.put("/api/tasks/nope", json={"title": 5})
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"success": False, "message": "Task not found"})

    def test_update_bad_body_on_known_id(self):
        task_id = self.store.list()[0].id
        resp = self.client.put(f"/api/tasks/{task_id}", json={"title": 5})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Invalid request body")

    def test_update_null_status(self):
        task_id = self.store.list()[0].id
        resp = self.client.put(f"/api/tasks/{task_id}", json={"status": None})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()["data"]
        self.assertIsNone(data["status"])
        self.assertIn("updatedAt", data)

    def test_update_null_title(self):
        task = self.store.list()[0]
        resp = self.client.put(f"/api/tasks/{task.id}", json={"title": None})
        self.assertEqual(resp.status_code, 400)
        self.assertFalse(resp.json()["success"])
        self.assertEqual(self.store.get(task.id).title, "Complete project documentation")
        self.assertIsNone(self.store.get(task.id).updated_at)

    def test_update_without_body(self):
        task_id = self.store.list()[0].id
        resp = self.client.put(f"/api/tasks/{task_id}")
        self.assertEqual(resp.status_code, 200)
        self.assertIn("updatedAt", resp.json()["data"])

    def test_delete(self):
        task_id = self.create(title="Buy milk").json()["data"]["id"]
        resp = self.client.delete(f"/api/tasks/{task_id}")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["data"]["id"], task_id)
        self.assertEqual(self.client.get(f"/api/tasks/{task_id}").status_code, 404)
        self.assertEqual(self.client.delete(f"/api/tasks/{task_id}").status_code, 404)

    def test_creates_and_deletes_keep_order(self):
        ids = [self.create(title=f"T{i}").json()["data"]["id"] for i in range(5)]
        for task_id in ids[1::2]:
            self.client.delete(f"/api/tasks/{task_id}")
        payload = self.client.get("/api/tasks").json()
        self.assertEqual(payload["count"], 2 + 3)
        self.assertEqual([t["id"] for t in payload["data"][2:]], ids[0::2])


# ─────────────────────────────────────────────
#  Boundary Behaviour
# ─────────────────────────────────────────────

class TestBoundary(ServerTestCase):

    def test_unknown_route(self):
        resp = self.client.get("/api/unknown")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"success": False, "message": "Route not found"})

    def test_trailing_slash_served(self):
        resp = self.client.get("/api/tasks/", follow_redirects=False)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["count"], 2)

        resp = self.client.post("/api/tasks/", json={"title": "Buy milk"}, follow_redirects=False)
        self.assertEqual(resp.status_code, 201)
        task_id = resp.json()["data"]["id"]

        resp = self.client.get(f"/api/tasks/{task_id}/", follow_redirects=False)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["data"]["id"], task_id)

        resp = self.client.delete(f"/api/tasks/{task_id}/", follow_redirects=False)
        self.assertEqual(resp.status_code, 200)

    def test_no_slash_redirects(self):
        self.assertFalse(self.app.router.redirect_slashes)
        resp = self.client.get("/api/tasks/abc/extra/", follow_redirects=False)
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["message"], "Route not found")

    def test_handlers_run_on_thread_pool(self):
        task_routes = [r for r in self.app.routes if getattr(r, "path", "").startswith("/api/tasks")]
        self.assertEqual(len(task_routes), 10)
        for route in task_routes:
            self.assertFalse(inspect.iscoroutinefunction(route.endpoint), route.path)

    def test_wrong_method_is_route_not_found(self):
        resp = self.client.patch("/api/tasks/abc", json={})
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["message"], "Route not found")

    def test_docs_disabled(self):
        self.assertEqual(self.client.get("/docs").status_code, 404)
        self.assertEqual(self.client.get("/openapi.json").status_code, 404)

    def test_cors_any_origin(self):
        resp = self.client.get("/api/tasks", headers={"Origin": "http://example.com"})
        self.assertEqual(resp.headers["access-control-allow-origin"], "*")

    def test_cors_preflight(self):
        resp = self.client.options(
            "/api/tasks",
            headers={
                "Origin": "http://example.com",
                "Access-Control-Request-Method": "POST",
            },
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.headers["access-control-allow-origin"], "*")

    def test_internal_error_is_enveloped(self):
        class BrokenStore(TaskStore):
            def list(self):
                raise RuntimeError("disk on fire")

        client = TestClient(create_app(ServerConfig(), store=BrokenStore()))
        resp = client.get("/api/tasks")
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(
            resp.json(),
            {"success": False, "message": "Server error", "error": "disk on fire"},
        )

    def test_apps_do_not_share_state(self):
        other = TestClient(create_app(ServerConfig()))
        self.create(title="Only here")
        self.assertEqual(other.get("/api/tasks").json()["count"], 2)

    def test_lifespan(self):
        with TestClient(create_app(ServerConfig())) as client:
            self.assertEqual(client.get("/api/tasks").status_code, 200)


if __name__ == "__main__":
    unittest.main(verbosity=2)
