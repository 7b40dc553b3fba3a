"""HTTP tests for the gated board API: tasks, epics, comments and uploads."""

import pytest

from kanban.core.modules.session.models import SESSION_COOKIE

API_TOKEN = "board-api-token"


@pytest.fixture
def gated(make_client):
    """Client for a deployment that requires the API token or a session."""
    return make_client(api_token=API_TOKEN)


class TestGate:
    def test_open_without_configured_token(self, client):
        assert client.get("/api/tasks").status_code == 200

    def test_rejects_anonymous(self, gated):
        response = gated.get("/api/tasks")

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized", "type": "authentication_error"}

    @pytest.mark.parametrize(
        "headers",
        [{"Authorization": f"Bearer {API_TOKEN}"}, {"x-api-token": API_TOKEN}],
    )
    def test_accepts_api_token(self, gated, headers):
        assert gated.get("/api/tasks", headers=headers).status_code == 200

    @pytest.mark.parametrize(
        "headers",
        [{"Authorization": f"bearer {API_TOKEN}"}, {"Authorization": "Bearer wrong"}, {"x-api-token": "wrong"}],
    )
    def test_rejects_bad_token(self, gated, headers):
        assert gated.get("/api/tasks", headers=headers).status_code == 401

    def test_accepts_session_cookie(self, gated):
        gated.post("/api/auth/login", json={"code": "000000"})
        assert gated.cookies.get(SESSION_COOKIE)

        assert gated.get("/api/tasks").status_code == 200
        assert gated.get("/api/epics").status_code == 200

    def test_public_endpoints(self, gated):
        assert gated.get("/health").json() == {"status": "healthy"}
        assert gated.get("/api/auth/session").status_code == 200
        assert gated.post("/api/auth/logout").status_code == 200


class TestTasksApi:
    def test_crud(self, client):
        created = client.post("/api/tasks", json={"title": "Ship it", "priority": "high"})
        assert created.status_code == 201
        task = created.json()
        assert task["title"] == "Ship it"
        assert task["priority"] == "high"
        assert task["columnId"] == "backlog"
        assert task["imageUrls"] == []

        moved = client.patch(f"/api/tasks/{task['id']}", json={"columnId": "review"})
        assert moved.status_code == 200
        assert moved.json()["columnId"] == "review"
        assert moved.json()["priority"] == "high"

        assert [t["id"] for t in client.get("/api/tasks").json()] == [task["id"]]
        assert client.get(f"/api/tasks/{task['id']}").json()["columnId"] == "review"

        assert client.delete(f"/api/tasks/{task['id']}").json() == {"success": True}
        assert client.get(f"/api/tasks/{task['id']}").status_code == 404

    def test_invalid_payloads(self, client):
        assert client.post("/api/tasks", json={"title": ""}).status_code == 400
        assert client.post("/api/tasks", json={"title": "x", "columnId": "nowhere"}).status_code == 400
        assert client.get("/api/tasks/not-a-uuid").status_code == 400

    def test_clear_optional_field(self, client):
        task = client.post("/api/tasks", json={"title": "Task", "prUrl": "https://example.com/pr/1"}).json()

        updated = client.patch(f"/api/tasks/{task['id']}", json={"prUrl": None}).json()

        assert updated["prUrl"] is None
        assert updated["title"] == "Task"


class TestEpicsApi:
    def test_lifecycle(self, client):
        epic = client.post("/api/epics", json={"name": "Launch"})
        assert epic.status_code == 201
        epic_id = epic.json()["id"]
        assert epic.json()["color"] == "#3b82f6"

        task = client.post("/api/tasks", json={"title": "Task", "epicId": epic_id}).json()
        assert task["epicId"] == epic_id

        renamed = client.patch(f"/api/epics/{epic_id}", json={"name": "Launch v2", "color": "#10B981"})
        assert renamed.json()["name"] == "Launch v2"
        assert renamed.json()["color"] == "#10b981"

        assert client.delete(f"/api/epics/{epic_id}").status_code == 200
        assert client.get(f"/api/tasks/{task['id']}").json()["epicId"] is None
        assert client.get("/api/epics").json() == []

    def test_unknown_epic_on_task(self, client):
        response = client.post("/api/tasks", json={"title": "Task", "epicId": "00000000-0000-0000-0000-000000000000"})

        assert response.status_code == 404


class TestCommentsApi:
    def test_lifecycle(self, client):
        task = client.post("/api/tasks", json={"title": "Task"}).json()

        created = client.post(f"/api/tasks/{task['id']}/comments", json={"content": "Nice", "author": "Ana"})
        assert created.status_code == 201
        comment = created.json()
        assert comment["taskId"] == task["id"]

        assert client.get(f"/api/tasks/{task['id']}/comments").json() == [comment]
        assert client.delete(f"/api/comments/{comment['id']}").status_code == 200
        assert client.get(f"/api/tasks/{task['id']}/comments").json() == []

    def test_comments_removed_with_task(self, client):
        task = client.post("/api/tasks", json={"title": "Task"}).json()
        client.post(f"/api/tasks/{task['id']}/comments", json={"content": "Nice"})

        client.delete(f"/api/tasks/{task['id']}")

        assert client.get(f"/api/tasks/{task['id']}/comments").status_code == 404


class TestUploadApi:
    def test_upload_and_serve(self, client, png_bytes):
        response = client.post("/api/upload", files={"file": ("shot 1.png", png_bytes, "image/png")})

        assert response.status_code == 200
        url = response.json()["url"]
        assert url.startswith("/uploads/")
        assert url.endswith("-shot-1.png")
        assert client.get(url).content == png_bytes

    def test_rejects_non_image(self, client):
        response = client.post("/api/upload", files={"file": ("notes.txt", b"hello", "text/plain")})

        assert response.status_code == 400
        assert response.json()["error"] == "Only image files are allowed"

    def test_requires_authorization(self, gated, png_bytes):
        response = gated.post("/api/upload", files={"file": ("a.png", png_bytes, "image/png")})

        assert response.status_code == 401
