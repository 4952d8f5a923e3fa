"""
预订API集成测试
公开创建、管理员查询与状态修改、通知草稿
"""

import pytest


class TestCreateReservation:
    """公开创建预订"""

    def test_create_is_always_pending(self, client, reservation_payload):
        payload = dict(reservation_payload, status="confirmed")

        response = client.post("/api/reservations", json=payload)

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "pending"
        assert data["date"] == "2030-05-01"
        assert data["guests"] == 4
        assert data["createdAt"]

    def test_create_accepts_legacy_date_format(self, client, reservation_payload):
        payload = dict(reservation_payload, date="01/05/2030")

        response = client.post("/api/reservations", json=payload)

        assert response.status_code == 201
        assert response.json()["date"] == "2030-05-01"

    def test_create_accepts_iso_timestamp(self, client, reservation_payload):
        payload = dict(reservation_payload, date="2030-05-01T00:00:00.000Z")

        response = client.post("/api/reservations", json=payload)

        assert response.status_code == 201
        assert response.json()["date"] == "2030-05-01"

    def test_create_without_message(self, client, reservation_payload):
        reservation_payload.pop("message")

        response = client.post("/api/reservations", json=reservation_payload)

        assert response.status_code == 201
        assert response.json()["message"] is None

    @pytest.mark.parametrize("field,value", [
        ("guests", 21),
        ("guests", 0),
        ("name", "Al"),
        ("email", "not-an-email"),
        ("phone", "123"),
        ("time", "16:00"),
        ("date", "31/02/2030"),
    ])
    def test_create_rejects_invalid_field(self, client, reservation_payload, field, value):
        payload = dict(reservation_payload, **{field: value})

        response = client.post("/api/reservations", json=payload)

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "VALIDATION_ERROR"
        assert field in data["details"]["fields"]

    def test_create_does_not_require_login(self, client, reservation_payload, admin_headers):
        client.post("/api/reservations", json=reservation_payload)

        listed = client.get("/api/reservations", headers=admin_headers).json()

        assert len(listed) == 1
        assert listed[0]["name"] == reservation_payload["name"]


class TestManageReservations:
    """管理员管理预订"""

    def test_list_requires_admin(self, client, user_headers):
        assert client.get("/api/reservations").status_code == 401
        assert client.get("/api/reservations", headers=user_headers).status_code == 403

    def test_list_newest_first(self, client, admin_headers, reservation_payload):
        client.post("/api/reservations", json=dict(reservation_payload, name="Primero"))
        client.post("/api/reservations", json=dict(reservation_payload, name="Segundo"))

        names = [r["name"] for r in client.get("/api/reservations", headers=admin_headers).json()]

        assert names == ["Segundo", "Primero"]

    def test_get_reservation(self, client, admin_headers, sample_reservation):
        response = client.get(f"/api/reservations/{sample_reservation['id']}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["email"] == "maria@example.com"

    def test_get_missing_reservation(self, client, admin_headers):
        response = client.get("/api/reservations/9999", headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Reservation not found"

    def test_cancel_reservation(self, client, admin_headers, sample_reservation):
        response = client.put(
            f"/api/reservations/{sample_reservation['id']}",
            headers=admin_headers,
            json={"status": "cancelled"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "cancelled"
        assert data["name"] == sample_reservation["name"]

    def test_any_status_can_follow_any_other(self, client, admin_headers, sample_reservation):
        url = f"/api/reservations/{sample_reservation['id']}"
        for status in ("completed", "pending", "in-progress", "confirmed"):
            response = client.put(url, headers=admin_headers, json={"status": status})
            assert response.status_code == 200
            assert response.json()["status"] == status

    def test_update_rejects_unknown_status(self, client, admin_headers, sample_reservation):
        response = client.put(
            f"/api/reservations/{sample_reservation['id']}",
            headers=admin_headers,
            json={"status": "archived"}
        )
        assert response.status_code == 400

    @pytest.mark.parametrize("time", ["03:17", "", "7pm"])
    def test_update_rejects_unknown_time_slot(self, client, admin_headers, sample_reservation, time):
        url = f"/api/reservations/{sample_reservation['id']}"

        response = client.put(url, headers=admin_headers, json={"time": time})

        assert response.status_code == 400
        assert client.get(url, headers=admin_headers).json()["time"] == sample_reservation["time"]

    def test_update_accepts_time_slot(self, client, admin_headers, sample_reservation):
        response = client.put(
            f"/api/reservations/{sample_reservation['id']}",
            headers=admin_headers,
            json={"time": "20:30"}
        )

        assert response.status_code == 200
        assert response.json()["time"] == "20:30"

    def test_partial_update_keeps_other_fields(self, client, admin_headers, sample_reservation):
        response = client.put(
            f"/api/reservations/{sample_reservation['id']}",
            headers=admin_headers,
            json={"guests": 6}
        )

        data = response.json()
        assert data["guests"] == 6
        assert data["time"] == sample_reservation["time"]
        assert data["status"] == "pending"

    def test_list_by_status(self, client, admin_headers, reservation_payload):
        first = client.post("/api/reservations", json=reservation_payload).json()
        client.post("/api/reservations", json=reservation_payload)
        client.put(
            f"/api/reservations/{first['id']}",
            headers=admin_headers,
            json={"status": "confirmed"}
        )

        confirmed = client.get("/api/reservations/status/confirmed", headers=admin_headers).json()
        pending = client.get("/api/reservations/status/pending", headers=admin_headers).json()

        assert [r["id"] for r in confirmed] == [first["id"]]
        assert len(pending) == 1

    def test_list_by_unknown_status(self, client, admin_headers):
        response = client.get("/api/reservations/status/archived", headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid status: archived"

    def test_delete_reservation(self, client, admin_headers, sample_reservation):
        url = f"/api/reservations/{sample_reservation['id']}"

        assert client.delete(url, headers=admin_headers).status_code == 204
        assert client.get(url, headers=admin_headers).status_code == 404
        assert client.delete(url, headers=admin_headers).status_code == 404


class TestReservationNotification:
    """通知草稿（由管理员手动发送）"""

    def test_confirmation_draft(self, client, admin_headers, sample_reservation):
        response = client.get(
            f"/api/reservations/{sample_reservation['id']}/notification",
            headers=admin_headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "pending"
        assert "LLAMAS!" in data["message"]
        assert "1 de mayo a las 19:30" in data["message"]
        assert "4 personas" in data["message"]
        assert data["url"].startswith("https://wa.me/584121234567?text=")

    def test_cancelled_draft(self, client, admin_headers, sample_reservation):
        response = client.get(
            f"/api/reservations/{sample_reservation['id']}/notification",
            params={"status": "cancelled"},
            headers=admin_headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "cancelled"
        assert "ha sido cancelada" in data["message"]

    def test_status_change_does_not_depend_on_draft(self, client, admin_headers, sample_reservation):
        """改状态只改记录，草稿按请求的目标状态生成"""
        client.put(
            f"/api/reservations/{sample_reservation['id']}",
            headers=admin_headers,
            json={"status": "cancelled"}
        )

        response = client.get(
            f"/api/reservations/{sample_reservation['id']}/notification",
            params={"status": "completed"},
            headers=admin_headers
        )

        assert "gracias por visitarnos" in response.json()["message"]

    def test_pending_has_no_template(self, client, admin_headers, sample_reservation):
        response = client.get(
            f"/api/reservations/{sample_reservation['id']}/notification",
            params={"status": "pending"},
            headers=admin_headers
        )
        assert response.status_code == 400

    def test_draft_uses_configured_restaurant_name(self, client, admin_headers, sample_reservation):
        client.put(
            "/api/settings/restaurantName",
            headers=admin_headers,
            json={"value": "Casa Llama"}
        )

        response = client.get(
            f"/api/reservations/{sample_reservation['id']}/notification",
            params={"status": "confirmed"},
            headers=admin_headers
        )

        assert "Casa Llama" in response.json()["message"]

    def test_draft_requires_admin(self, client, sample_reservation):
        response = client.get(f"/api/reservations/{sample_reservation['id']}/notification")
        assert response.status_code == 401
