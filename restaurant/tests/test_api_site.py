"""
站点配置API测试
键值设置、门店位置、员工、社交媒体
"""

LOCATION = {
    "address": "Av. Principal, Caracas",
    "phone": "0412-7654321",
    "email": "hola@llamas.example",
    "mapCoordinates": "10.4806,-66.9036",
    "hours": '{"Lunes - Viernes": "12:00 - 22:00"}',
}


class TestSettingsAPI:
    """键值设置测试"""

    def test_default_settings_seeded(self, client):
        response = client.get("/api/settings")

        assert response.status_code == 200
        pairs = {s["key"]: s["value"] for s in response.json()}
        assert pairs["restaurantName"] == "LLAMAS!"
        assert "restaurantLogo" in pairs

    def test_get_setting(self, client):
        response = client.get("/api/settings/restaurantName")

        assert response.status_code == 200
        assert response.json() == {"key": "restaurantName", "value": "LLAMAS!"}

    def test_get_missing_setting(self, client):
        response = client.get("/api/settings/doesNotExist")

        assert response.status_code == 404
        assert response.json()["message"] == "Setting not found"

    def test_update_setting_upserts(self, client, admin_headers):
        response = client.put(
            "/api/settings/heroTitle",
            headers=admin_headers,
            json={"value": "Fuego y sabor"}
        )

        assert response.status_code == 200
        assert response.json()["value"] == "Fuego y sabor"
        assert client.get("/api/settings/heroTitle").json()["value"] == "Fuego y sabor"

    def test_update_setting_requires_value(self, client, admin_headers):
        response = client.put("/api/settings/heroTitle", headers=admin_headers, json={})
        assert response.status_code == 400

    def test_update_setting_requires_admin(self, client, user_headers):
        response = client.put(
            "/api/settings/heroTitle",
            headers=user_headers,
            json={"value": "X"}
        )
        assert response.status_code == 403

    def test_site_settings_typed_view(self, client, admin_headers):
        client.put("/api/settings/restaurantName", headers=admin_headers, json={"value": "Casa Llama"})

        data = client.get("/api/site-settings").json()

        assert data["restaurantName"] == "Casa Llama"
        assert data["heroTitle"]
        assert data["heroImage"].startswith("http")


class TestLocationAPI:
    """门店位置测试"""

    def test_location_empty_when_unset(self, client):
        response = client.get("/api/location")

        assert response.status_code == 200
        assert response.json() == {}

    def test_first_location_requires_all_fields(self, client, admin_headers):
        response = client.put(
            "/api/location",
            headers=admin_headers,
            json={"address": "Solo dirección"}
        )

        assert response.status_code == 400
        assert "phone" in response.json()["details"]["missing"]

    def test_create_and_update_location(self, client, admin_headers):
        created = client.put("/api/location", headers=admin_headers, json=LOCATION)
        assert created.status_code == 200
        assert created.json()["mapCoordinates"] == LOCATION["mapCoordinates"]

        updated = client.put("/api/location", headers=admin_headers, json={"phone": "0414-0000000"})

        assert updated.status_code == 200
        data = client.get("/api/location").json()
        assert data["phone"] == "0414-0000000"
        assert data["address"] == LOCATION["address"]

    def test_update_location_requires_admin(self, client):
        assert client.put("/api/location", json=LOCATION).status_code == 401


class TestStaffAPI:
    """员工测试"""

    def test_staff_crud(self, client, admin_headers):
        created = client.post(
            "/api/staff",
            headers=admin_headers,
            json={
                "name": "Carlos",
                "position": "Chef",
                "bio": "Parrillero desde 2010",
                "image": "https://example.com/carlos.jpg"
            }
        )
        assert created.status_code == 201
        staff_id = created.json()["id"]

        assert [s["name"] for s in client.get("/api/staff").json()] == ["Carlos"]

        updated = client.put(
            f"/api/staff/{staff_id}",
            headers=admin_headers,
            json={"position": "Chef ejecutivo"}
        )
        assert updated.json()["position"] == "Chef ejecutivo"
        assert updated.json()["bio"] == "Parrillero desde 2010"

        assert client.delete(f"/api/staff/{staff_id}", headers=admin_headers).status_code == 204
        assert client.get(f"/api/staff/{staff_id}").status_code == 404

    def test_create_staff_missing_fields(self, client, admin_headers):
        response = client.post("/api/staff", headers=admin_headers, json={"name": "Carlos"})
        assert response.status_code == 400


class TestSocialMediaAPI:
    """社交媒体测试"""

    def test_social_media_crud(self, client, admin_headers):
        created = client.post(
            "/api/social-media",
            headers=admin_headers,
            json={"name": "Instagram", "url": "https://instagram.com/llamas", "icon": "instagram"}
        )
        assert created.status_code == 201
        link = created.json()
        assert link["isActive"] is True

        updated = client.put(
            f"/api/social-media/{link['id']}",
            headers=admin_headers,
            json={"isActive": False}
        )
        assert updated.json()["isActive"] is False

        assert client.delete(f"/api/social-media/{link['id']}", headers=admin_headers).status_code == 204
        assert client.get("/api/social-media").json() == []

    def test_delete_missing_link(self, client, admin_headers):
        assert client.delete("/api/social-media/9999", headers=admin_headers).status_code == 404


class TestHealth:
    """服务探针"""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root(self, client):
        assert client.get("/").json()["version"]
