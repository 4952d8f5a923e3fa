"""
用户管理API测试
"""

from restaurant.config.settings import settings


def _find_user(client, headers, username):
    users = client.get("/api/users", headers=headers).json()
    return next(user for user in users if user["username"] == username)


class TestUsersAPI:
    """用户管理测试"""

    def test_list_users_hides_passwords(self, client, admin_headers):
        response = client.get("/api/users", headers=admin_headers)

        assert response.status_code == 200
        users = response.json()
        assert [user["username"] for user in users] == [settings.default_admin_username]
        assert all("password" not in user for user in users)

    def test_list_users_requires_admin(self, client, user_headers):
        assert client.get("/api/users").status_code == 401
        assert client.get("/api/users", headers=user_headers).status_code == 403

    def test_create_user(self, client, admin_headers):
        response = client.post(
            "/api/users",
            headers=admin_headers,
            json={"username": "manager", "password": "manager123"}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["username"] == "manager"
        assert data["role"] == "admin"
        assert data["isFirstLogin"] is True

    def test_create_duplicate_user(self, client, admin_headers):
        payload = {"username": "manager", "password": "manager123"}
        client.post("/api/users", headers=admin_headers, json=payload)

        response = client.post("/api/users", headers=admin_headers, json=payload)

        assert response.status_code == 400
        assert response.json()["message"] == "Username already exists"

    def test_create_user_short_password(self, client, admin_headers):
        response = client.post(
            "/api/users",
            headers=admin_headers,
            json={"username": "manager", "password": "123"}
        )
        assert response.status_code == 400

    def test_reset_password(self, client, admin_headers):
        client.post(
            "/api/users",
            headers=admin_headers,
            json={"username": "manager", "password": "manager123"}
        )
        login = client.post("/api/login", json={"username": "manager", "password": "manager123"})
        manager_headers = {"Authorization": f"Bearer {login.json()['token']}"}
        client.post(
            "/api/change-password",
            headers=manager_headers,
            json={"currentPassword": "manager123", "newPassword": "changed123"}
        )
        user_id = _find_user(client, admin_headers, "manager")["id"]

        response = client.post(
            f"/api/users/{user_id}/reset-password",
            headers=admin_headers,
            json={"password": "temporary1"}
        )

        assert response.status_code == 200
        assert _find_user(client, admin_headers, "manager")["isFirstLogin"] is True
        login = client.post("/api/login", json={"username": "manager", "password": "temporary1"})
        assert login.status_code == 200

    def test_reset_password_unknown_user(self, client, admin_headers):
        response = client.post(
            "/api/users/9999/reset-password",
            headers=admin_headers,
            json={"password": "temporary1"}
        )
        assert response.status_code == 404

    def test_delete_user(self, client, admin_headers):
        created = client.post(
            "/api/users",
            headers=admin_headers,
            json={"username": "manager", "password": "manager123"}
        ).json()

        response = client.delete(f"/api/users/{created['id']}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "User deleted successfully"
        usernames = [u["username"] for u in client.get("/api/users", headers=admin_headers).json()]
        assert "manager" not in usernames

    def test_cannot_delete_default_admin(self, client, admin_headers):
        admin = _find_user(client, admin_headers, settings.default_admin_username)

        response = client.delete(f"/api/users/{admin['id']}", headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Cannot delete default admin user"
