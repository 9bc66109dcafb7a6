# tests/test_users_api.py
"""
HTTP tests for /api/users
"""
from datetime import date

from water_reports_api.app.services import user_service


NULL_IDENTITY = {"id": None, "name": None, "email": None, "role": None, "department": None}


class TestRegisterApi:

    def test_register(self, client, user_payload):
        response = client.post("/api/users/register", json=user_payload)
        assert response.status_code == 201
        data = response.json()
        assert data["id"] > 0
        assert data["email"] == "john@citizen.com"
        assert data["createdAt"] == date.today().isoformat()
        assert "password" not in data

    def test_duplicate_email(self, client, user_payload):
        client.post("/api/users/register", json=user_payload)
        response = client.post("/api/users/register", json=user_payload)
        assert response.status_code == 400
        assert response.json() == {**NULL_IDENTITY, "message": "Email already registered"}

    def test_invalid_email(self, client, user_payload):
        response = client.post("/api/users/register", json={**user_payload, "email": "john.citizen"})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid email format"

    def test_intranet_email(self, client, user_payload):
        response = client.post("/api/users/register", json={**user_payload, "email": "ops@intranet"})
        assert response.status_code == 201
        assert response.json()["email"] == "ops@intranet"

    def test_missing_password(self, client, user_payload):
        body = dict(user_payload)
        del body["password"]
        response = client.post("/api/users/register", json=body)
        assert response.status_code == 400
        assert response.json()["message"] == "Password is required"


class TestLoginApi:

    def test_login(self, client, user_payload):
        user = client.post("/api/users/register", json=user_payload).json()
        response = client.post("/api/users/login", json={"email": "john@citizen.com", "password": "demo123"})
        assert response.status_code == 200
        assert response.json() == {
            "id": user["id"],
            "name": "John Citizen",
            "email": "john@citizen.com",
            "role": "citizen",
            "department": "Community Member",
            "message": "Login successful",
        }

    def test_wrong_password(self, client, user_payload):
        client.post("/api/users/register", json=user_payload)
        response = client.post("/api/users/login", json={"email": "john@citizen.com", "password": "wrong"})
        assert response.status_code == 401
        assert response.json() == {**NULL_IDENTITY, "message": "Invalid email or password"}

    def test_unknown_user(self, client):
        response = client.post("/api/users/login", json={"email": "ghost@citizen.com", "password": "demo123"})
        assert response.status_code == 401


class TestUserCrudApi:

    def test_list_and_get(self, client, user_payload):
        user = client.post("/api/users/register", json=user_payload).json()
        assert [u["id"] for u in client.get("/api/users").json()] == [user["id"]]
        response = client.get(f"/api/users/{user['id']}")
        assert response.status_code == 200
        assert response.json() == user

    def test_get_missing(self, client):
        response = client.get("/api/users/12")
        assert response.status_code == 404
        assert response.json() == {"message": "User not found with id: 12"}

    def test_update(self, client, user_payload):
        user = client.post("/api/users/register", json=user_payload).json()
        body = {**user_payload, "name": "John C.", "department": "Neighbourhood Watch"}
        response = client.put(f"/api/users/{user['id']}", json=body)
        assert response.status_code == 200
        assert response.json()["name"] == "John C."
        assert response.json()["department"] == "Neighbourhood Watch"
        assert response.json()["createdAt"] == user["createdAt"]

    def test_update_missing(self, client, user_payload):
        response = client.put("/api/users/77", json=user_payload)
        assert response.status_code == 404
        assert "message" in response.json()

    def test_update_user_deleted_mid_request(self, client, user_payload, deleted_mid_update):
        user = client.post("/api/users/register", json=user_payload).json()
        deleted_mid_update(user_service, "users", user["id"])
        response = client.put(f"/api/users/{user['id']}", json=user_payload)
        assert response.status_code == 404
        assert response.json() == {"message": f"User not found with id: {user['id']}"}

    def test_delete(self, client, user_payload):
        user = client.post("/api/users/register", json=user_payload).json()
        response = client.delete(f"/api/users/{user['id']}")
        assert response.status_code == 200
        assert response.json() == {"message": "User deleted successfully"}
        assert client.get(f"/api/users/{user['id']}").status_code == 404
        assert client.delete(f"/api/users/{user['id']}").status_code == 404
