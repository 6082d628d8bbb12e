"""Tests for user API endpoints."""

from fastapi import status
from fastapi.testclient import TestClient


class TestCreateUser:
    """Test suite for POST /users endpoint."""

    def test_create_user_success(self, client: TestClient, raw) -> None:
        response = client.post("/users", json={"username": "alice"})

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["username"] == "alice"
        assert data["id"]
        assert raw("SELECT id FROM users WHERE username = ?", ("alice",)) == [{"id": data["id"]}]

    def test_create_user_blank_username(self, client: TestClient, raw) -> None:
        """A blank username is rejected and nothing is stored."""
        response = client.post("/users", json={"username": "   "})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "username required"}
        assert raw("SELECT COUNT(*) AS n FROM users") == [{"n": 1}]  # only the seeded user

    def test_create_user_missing_username(self, client: TestClient) -> None:
        response = client.post("/users", json={})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "error" in response.json()

    def test_create_user_duplicate_username(self, client: TestClient, raw) -> None:
        """The second registration of a username conflicts and leaves one row."""
        first = client.post("/users", json={"username": "alice"})
        second = client.post("/users", json={"username": "alice"})

        assert first.status_code == status.HTTP_201_CREATED
        assert second.status_code == status.HTTP_409_CONFLICT
        assert second.json() == {"error": "username already exists"}
        assert len(raw("SELECT id FROM users WHERE username = 'alice'")) == 1

    def test_create_user_ids_are_unique(self, client: TestClient) -> None:
        ids = {client.post("/users", json={"username": f"user{i}"}).json()["id"] for i in range(5)}

        assert len(ids) == 5


class TestListUsers:
    """Test suite for GET /users endpoint."""

    def test_list_users_includes_initial_user(self, client: TestClient) -> None:
        response = client.get("/users")

        assert response.status_code == status.HTTP_200_OK
        assert {"id": "0", "username": "initial_user"} in response.json()

    def test_list_users_filters_by_substring(self, client: TestClient) -> None:
        for name in ("alice", "malik", "bob"):
            client.post("/users", json={"username": name})

        response = client.get("/users", params={"username": "li"})

        assert response.status_code == status.HTTP_200_OK
        assert sorted(u["username"] for u in response.json()) == ["alice", "malik"]

    def test_list_users_filter_wildcards_are_literal(self, client: TestClient) -> None:
        client.post("/users", json={"username": "50%off"})
        client.post("/users", json={"username": "500"})
        client.post("/users", json={"username": "a_b"})
        client.post("/users", json={"username": "axb"})

        percent = client.get("/users", params={"username": "%"}).json()
        underscore = client.get("/users", params={"username": "_"}).json()

        assert [u["username"] for u in percent] == ["50%off"]
        assert [u["username"] for u in underscore] == ["initial_user", "a_b"]

    def test_list_users_no_match(self, client: TestClient) -> None:
        response = client.get("/users", params={"username": "nobody"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == []


class TestGetUser:
    """Test suite for GET /users/{id} endpoint."""

    def test_get_user_success(self, client: TestClient, test_user: dict) -> None:
        response = client.get(f"/users/{test_user['id']}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == test_user

    def test_get_initial_user(self, client: TestClient) -> None:
        response = client.get("/users/0")

        assert response.json() == {"id": "0", "username": "initial_user"}

    def test_get_user_not_found(self, client: TestClient) -> None:
        response = client.get("/users/does-not-exist")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": "user not found"}


class TestDeleteUser:
    """Test suite for DELETE /users/{id} endpoint."""

    def test_delete_user_cascades_to_decks_and_cards(
        self, client: TestClient, test_user: dict, test_deck: dict, raw
    ) -> None:
        response = client.delete(f"/users/{test_user['id']}")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert response.content == b""
        assert client.get(f"/users/{test_user['id']}").status_code == status.HTTP_404_NOT_FOUND
        assert client.get(f"/decks/{test_deck['id']}").status_code == status.HTTP_404_NOT_FOUND
        assert raw("SELECT id FROM cards") == []

    def test_delete_user_not_found(self, client: TestClient) -> None:
        response = client.delete("/users/does-not-exist")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": "user not found"}
