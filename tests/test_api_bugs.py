"""API-level tests for the /api/bugs endpoints."""

import uuid


def make_valid_bug_payload(**overrides) -> dict:
    """Create a valid bug payload with optional overrides."""
    defaults = {
        "title": "New Bug",
        "description": "This is a new bug description",
        "status": "open",
        "priority": "high",
        "reportedBy": "John Doe",
    }
    defaults.update(overrides)
    return defaults


def create_bug(client, **overrides) -> dict:
    response = client.post("/api/bugs", json=make_valid_bug_payload(**overrides))
    assert response.status_code == 201, response.json()
    return response.json()["data"]


class TestSystemEndpoints:
    """Health and version endpoints."""

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {
            "status": "OK",
            "message": "Bug Tracker API is running",
        }

    def test_version(self, client):
        response = client.get("/version")
        assert response.status_code == 200
        assert isinstance(response.json()["version"], str)

    def test_unknown_route(self, client):
        response = client.get("/api/nothing-here")
        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Route not found"}


class TestListBugs:
    """GET /api/bugs"""

    def test_empty_list(self, client):
        response = client.get("/api/bugs")

        assert response.status_code == 200
        assert response.json() == {"success": True, "count": 0, "data": []}

    def test_returns_all_bugs(self, client):
        create_bug(client, title="Bug 1", reportedBy="User 1")
        create_bug(client, title="Bug 2", reportedBy="User 2")

        data = client.get("/api/bugs").json()

        assert data["success"] is True
        assert data["count"] == 2
        assert {b["title"] for b in data["data"]} == {"Bug 1", "Bug 2"}

    def test_filters_by_status(self, client):
        create_bug(client, title="Open bug", status="open")
        create_bug(client, title="Fixed bug", status="resolved")

        data = client.get("/api/bugs", params={"status": "resolved"}).json()

        assert data["count"] == 1
        assert data["data"][0]["title"] == "Fixed bug"

    def test_invalid_status_filter_is_client_error(self, client):
        response = client.get("/api/bugs", params={"status": "closed"})

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert response.json()["error"] == "Validation Error"


class TestCreateBug:
    """POST /api/bugs"""

    def test_creates_bug(self, client):
        response = client.post("/api/bugs", json=make_valid_bug_payload())

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["data"]["title"] == "New Bug"
        assert data["data"]["priority"] == "high"
        uuid.UUID(data["data"]["id"])
        assert data["data"]["createdAt"] is not None

    def test_applies_defaults_and_trims(self, client):
        response = client.post(
            "/api/bugs",
            json={
                "title": "  Valid Title  ",
                "description": "This is a valid bug description",
                "reportedBy": " John Doe ",
            },
        )

        bug = response.json()["data"]
        assert bug["title"] == "Valid Title"
        assert bug["reportedBy"] == "John Doe"
        assert bug["status"] == "open"
        assert bug["priority"] == "medium"

    def test_rejects_invalid_data_with_all_messages(self, client):
        response = client.post(
            "/api/bugs",
            json={"title": "AB", "description": "Short", "reportedBy": ""},
        )

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "Validation failed",
            "details": [
                "Title must be at least 3 characters",
                "Description must be at least 10 characters",
                "Reporter name is required",
            ],
        }
        assert client.get("/api/bugs").json()["count"] == 0

    def test_ignores_caller_supplied_id(self, client):
        supplied = str(uuid.uuid4())
        bug = create_bug(client, id=supplied, createdAt="2000-01-01T00:00:00")

        assert bug["id"] != supplied
        assert not bug["createdAt"].startswith("2000")

    def test_non_object_body_is_client_error(self, client):
        response = client.post("/api/bugs", json=["not", "an", "object"])

        assert response.status_code == 400
        assert response.json()["success"] is False


class TestGetBug:
    """GET /api/bugs/{id}"""

    def test_returns_bug(self, client):
        bug = create_bug(client)

        response = client.get(f"/api/bugs/{bug['id']}")

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": bug}

    def test_unknown_id_is_404(self, client):
        response = client.get(f"/api/bugs/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Bug not found"}

    def test_malformed_id_is_400(self, client):
        response = client.get("/api/bugs/not-a-uuid")

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Invalid ID format"}


class TestUpdateBug:
    """PUT /api/bugs/{id}"""

    def test_updates_present_fields_only(self, client):
        bug = create_bug(client)

        response = client.put(
            f"/api/bugs/{bug['id']}", json={"title": "Updated title", "priority": "low"}
        )

        assert response.status_code == 200
        updated = response.json()["data"]
        assert updated["title"] == "Updated title"
        assert updated["priority"] == "low"
        assert updated["description"] == bug["description"]
        assert updated["createdAt"] == bug["createdAt"]

    def test_rejects_immutable_field(self, client):
        bug = create_bug(client)

        response = client.put(f"/api/bugs/{bug['id']}", json={"reportedBy": "Mallory"})

        assert response.status_code == 400
        assert response.json()["details"] == [
            "Field 'reportedBy' cannot be modified after creation"
        ]
        stored = client.get(f"/api/bugs/{bug['id']}").json()["data"]
        assert stored["reportedBy"] == "John Doe"

    def test_failed_update_applies_nothing(self, client):
        bug = create_bug(client)

        response = client.put(
            f"/api/bugs/{bug['id']}",
            json={"title": "Perfectly fine title", "status": "closed"},
        )

        assert response.status_code == 400
        stored = client.get(f"/api/bugs/{bug['id']}").json()["data"]
        assert stored["title"] == bug["title"]
        assert stored["status"] == bug["status"]

    def test_unknown_bug_is_404(self, client):
        response = client.put(f"/api/bugs/{uuid.uuid4()}", json={"title": "Whatever"})
        assert response.status_code == 404


class TestUpdateBugStatus:
    """PATCH /api/bugs/{id}/status"""

    def test_open_to_resolved(self, client):
        bug = create_bug(client, status="open")

        response = client.patch(
            f"/api/bugs/{bug['id']}/status", json={"status": "resolved"}
        )

        assert response.status_code == 200
        updated = response.json()["data"]
        assert updated["status"] == "resolved"
        assert updated["title"] == bug["title"]

    def test_resolved_back_to_open(self, client):
        bug = create_bug(client, status="resolved")

        response = client.patch(f"/api/bugs/{bug['id']}/status", json={"status": "open"})

        assert response.json()["data"]["status"] == "open"

    def test_invalid_status(self, client):
        bug = create_bug(client)

        response = client.patch(
            f"/api/bugs/{bug['id']}/status", json={"status": "closed"}
        )

        assert response.status_code == 400
        assert response.json()["details"] == [
            "Status must be one of: open, in-progress, resolved"
        ]

    def test_missing_status(self, client):
        bug = create_bug(client)

        response = client.patch(f"/api/bugs/{bug['id']}/status", json={})

        assert response.status_code == 400
        assert response.json()["details"] == ["Status is required"]


class TestDeleteBug:
    """DELETE /api/bugs/{id}"""

    def test_deletes_bug(self, client):
        bug = create_bug(client)

        response = client.delete(f"/api/bugs/{bug['id']}")

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Bug deleted successfully",
        }
        assert client.get(f"/api/bugs/{bug['id']}").status_code == 404

    def test_unknown_bug_is_404(self, client):
        response = client.delete(f"/api/bugs/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"] == "Bug not found"
