# =============================================================================
# tests/test_users_api.py - User Endpoint Tests
# =============================================================================
# End-to-end tests through FastAPI's TestClient against the in-memory
# database:
# - Status codes and bodies for every endpoint
# - Email normalization and uniqueness
# - Partial update semantics
# - Not-found handling for unknown and malformed ids
# =============================================================================

from bson import ObjectId


def _create(client, name="John Doe", email="john@x.com", password="secret1"):
    response = client.post(
        "/api/users",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()


# =============================================================================
# Create
# =============================================================================

class TestCreateUser:
    """POST /api/users"""

    def test_create_returns_201_with_lowercased_email(self, client, sample_user_payload):
        response = client.post("/api/users", json=sample_user_payload)

        assert response.status_code == 201
        body = response.json()
        assert body["email"] == "john@x.com"
        assert body["name"] == "John Doe"
        assert ObjectId.is_valid(body["id"])
        assert body["createdAt"] == body["updatedAt"]

    def test_create_then_read(self, client, sample_user_payload):
        created = client.post("/api/users", json=sample_user_payload).json()

        response = client.get(f"/api/users/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created
        assert response.json()["password"] == "secret1"

    def test_duplicate_email_rejected(self, client):
        original = _create(client, name="First", email="dup@x.com")

        response = client.post(
            "/api/users",
            json={"name": "Second", "email": "DUP@x.com", "password": "secret2"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "DUPLICATE_EMAIL"
        assert "dup@x.com" in response.json()["message"]

        stored = client.get(f"/api/users/{original['id']}").json()
        assert stored == original
        assert len(client.get("/api/users").json()) == 1

    def test_short_password_rejected(self, client):
        response = client.post(
            "/api/users",
            json={"name": "John", "email": "john@x.com", "password": "12345"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert body["message"].startswith("password:")

    def test_missing_fields_rejected(self, client):
        response = client.post("/api/users", json={"name": "John"})

        assert response.status_code == 400
        fields = {error["field"] for error in response.json()["errors"]}
        assert fields == {"email", "password"}

    def test_invalid_email_rejected(self, client):
        response = client.post(
            "/api/users",
            json={"name": "John", "email": "nope", "password": "secret1"},
        )

        assert response.status_code == 400

    def test_body_level_error_names_body(self, client):
        response = client.post("/api/users", json=["not", "an", "object"])

        assert response.status_code == 400
        body = response.json()
        assert body["errors"][0]["field"] == "body"
        assert body["message"].startswith("body:")

    def test_malformed_json_rejected(self, client):
        response = client.post(
            "/api/users",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400

    def test_failed_create_writes_nothing(self, client):
        client.post("/api/users", json={"name": "John", "email": "john@x.com", "password": "123"})

        assert client.get("/api/users").json() == []


# =============================================================================
# List
# =============================================================================

class TestListUsers:
    """GET /api/users"""

    def test_empty(self, client):
        response = client.get("/api/users")

        assert response.status_code == 200
        assert response.json() == []

    def test_lists_all_users(self, client):
        _create(client, name="A", email="a@x.com")
        _create(client, name="B", email="b@x.com")

        response = client.get("/api/users")

        assert response.status_code == 200
        assert [u["name"] for u in response.json()] == ["A", "B"]


# =============================================================================
# Read one
# =============================================================================

class TestGetUser:
    """GET /api/users/{id}"""

    def test_unknown_id(self, client):
        response = client.get(f"/api/users/{ObjectId()}")

        assert response.status_code == 404
        assert response.json()["message"] == "User not found"

    def test_malformed_id(self, client):
        response = client.get("/api/users/not-a-real-id")

        assert response.status_code == 404


# =============================================================================
# Update
# =============================================================================

class TestUpdateUser:
    """PUT /api/users/{id}"""

    def test_name_only_keeps_email(self, client):
        user = _create(client, name="Ann", email="a@b.com")

        response = client.put(f"/api/users/{user['id']}", json={"name": "Jane"})

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Jane"
        assert body["email"] == "a@b.com"
        assert body["id"] == user["id"]
        assert body["createdAt"] == user["createdAt"]

    def test_email_only_keeps_name(self, client):
        user = _create(client, name="Ann", email="a@b.com")

        response = client.put(f"/api/users/{user['id']}", json={"email": "ANN@New.com"})

        assert response.status_code == 200
        assert response.json()["name"] == "Ann"
        assert response.json()["email"] == "ann@new.com"

    def test_update_is_persisted(self, client):
        user = _create(client)

        client.put(f"/api/users/{user['id']}", json={"name": "Jane"})

        assert client.get(f"/api/users/{user['id']}").json()["name"] == "Jane"

    def test_password_not_updatable(self, client):
        user = _create(client)

        response = client.put(f"/api/users/{user['id']}", json={"password": "changed!"})

        assert response.status_code == 200
        assert response.json()["password"] == "secret1"

    def test_duplicate_email_rejected(self, client):
        _create(client, name="Taken", email="taken@x.com")
        user = _create(client, name="Ann", email="ann@x.com")

        response = client.put(f"/api/users/{user['id']}", json={"email": "taken@x.com"})

        assert response.status_code == 400
        assert client.get(f"/api/users/{user['id']}").json()["email"] == "ann@x.com"

    def test_invalid_email_rejected(self, client):
        user = _create(client)

        response = client.put(f"/api/users/{user['id']}", json={"email": "bad"})

        assert response.status_code == 400

    def test_no_body_keeps_stored_values(self, client):
        user = _create(client, name="Ann", email="a@b.com")

        response = client.put(f"/api/users/{user['id']}")

        assert response.status_code == 200
        assert response.json()["name"] == "Ann"
        assert response.json()["email"] == "a@b.com"
        assert response.json()["createdAt"] == user["createdAt"]

    def test_removed_during_update(self, client, test_app, monkeypatch):
        user = _create(client, name="Ann", email="a@b.com")
        repository = test_app.state.user_service.repository
        original_find = repository.find_by_id

        async def find_then_remove(user_id):
            document = await original_find(user_id)
            await repository.delete(user_id)
            return document

        monkeypatch.setattr(repository, "find_by_id", find_then_remove)

        response = client.put(f"/api/users/{user['id']}", json={"name": "Ghost"})

        assert response.status_code == 404
        assert client.get("/api/users").json() == []

    def test_unknown_id(self, client):
        response = client.put(f"/api/users/{ObjectId()}", json={"name": "Jane"})

        assert response.status_code == 404

    def test_malformed_id(self, client):
        response = client.put("/api/users/123", json={"name": "Jane"})

        assert response.status_code == 404


# =============================================================================
# Delete
# =============================================================================

class TestDeleteUser:
    """DELETE /api/users/{id}"""

    def test_delete_then_read(self, client):
        user = _create(client)

        response = client.delete(f"/api/users/{user['id']}")

        assert response.status_code == 200
        assert response.json() == {"message": "User removed"}
        assert client.get(f"/api/users/{user['id']}").status_code == 404

    def test_delete_twice(self, client):
        user = _create(client)
        client.delete(f"/api/users/{user['id']}")

        assert client.delete(f"/api/users/{user['id']}").status_code == 404

    def test_unknown_id(self, client):
        assert client.delete(f"/api/users/{ObjectId()}").status_code == 404

    def test_malformed_id(self, client):
        assert client.delete("/api/users/xyz").status_code == 404


# =============================================================================
# Routing
# =============================================================================

class TestRouting:
    """Paths and methods outside the user resource."""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["message"] == "Welcome to the User API"

    def test_unsupported_method(self, client):
        assert client.patch("/api/users").status_code == 405

    def test_unknown_path(self, client):
        assert client.get("/api/accounts").status_code == 404
