"""
服务层测试
直接使用内存数据库，不经过 HTTP
"""

import json

import pytest

from restaurant.app import bootstrap_database
from restaurant.core.exceptions import (
    BusinessRuleError,
    DatabaseError,
    InvalidReservationStatusError,
    ReservationNotFoundError,
    ValidationError,
)
from restaurant.models.site import parse_hours
from restaurant.services import (
    CategoryService,
    LocationService,
    ReservationService,
    SettingsService,
    UserService,
)


@pytest.fixture
def db(test_db):
    bootstrap_database(test_db)
    return test_db


def actions(db):
    return [row["action"] for row in db.execute_query("SELECT action FROM logs ORDER BY log_id")]


class TestBootstrap:

    def test_bootstrap_is_idempotent(self, db):
        bootstrap_database(db)

        assert len(UserService(db).list_users()) == 1
        assert len(CategoryService(db).list_all()) == 4
        assert SettingsService(db).get("restaurantName") == "LLAMAS!"

    def test_default_admin_must_change_password(self, db):
        admin = UserService(db).list_users()[0]
        assert admin.is_first_login is True
        assert admin.is_admin


class TestAuditTrail:

    @pytest.fixture
    def failing_audit(self, monkeypatch):
        def fail(*args, **kwargs):
            raise DatabaseError("audit insert failed")

        monkeypatch.setattr("restaurant.services.crud_service.log_operation", fail)

    def test_create_is_rolled_back_when_audit_fails(self, db, failing_audit):
        service = CategoryService(db)

        with pytest.raises(DatabaseError):
            service.create({"name": "Sopas"})

        assert service.get_by_slug("sopas") is None
        assert len(service.list_all()) == 4

    def test_delete_is_rolled_back_when_audit_fails(self, db, failing_audit):
        service = CategoryService(db)
        category = service.list_all()[0]

        with pytest.raises(DatabaseError):
            service.delete(category.id)

        assert service.get(category.id) is not None

    def test_mutations_are_audited(self, db):
        service = CategoryService(db)
        category = service.create({"name": "Sopas"}, actor_id=1)
        service.update(category.id, {"name": "Sopas del día"}, actor_id=1)
        service.delete(category.id, actor_id=1)

        assert actions(db)[-3:] == ["categories_create", "categories_update", "categories_delete"]


class TestReservationService:

    def test_status_changes_are_audited(self, db):
        service = ReservationService(db)
        reservation = service.create({
            "name": "Pedro", "email": "p@example.com", "phone": "04141234567",
            "date": "2030-07-01", "time": "12:30", "guests": 2,
        })

        service.update_status(reservation.id, "confirmed", actor_id=1)

        assert service.get(reservation.id).status == "confirmed"
        assert actions(db)[-2:] == ["reservations_create", "reservations_update"]
        detail = json.loads(db.scalar("SELECT detail_json FROM logs ORDER BY log_id DESC LIMIT 1"))
        assert detail == {"id": reservation.id, "status": "confirmed"}

    def test_unknown_status(self, db):
        with pytest.raises(InvalidReservationStatusError):
            ReservationService(db).list_by_status("archived")

    def test_update_missing(self, db):
        with pytest.raises(ReservationNotFoundError):
            ReservationService(db).update_status(404, "confirmed")


class TestSiteServices:

    def test_settings_upsert_rejects_empty_value(self, db):
        with pytest.raises(ValidationError):
            SettingsService(db).upsert("heroTitle", "")

    def test_site_settings_defaults(self, db):
        site = SettingsService(db).get_site_settings()
        assert site.restaurant_name == "LLAMAS!"
        assert site.hero_title

    def test_location_phone_empty_when_unset(self, db):
        assert LocationService(db).get_phone() == ""

    def test_location_hours(self, db):
        location = LocationService(db).upsert({
            "address": "Centro", "phone": "0412-0000000", "email": "a@b.c",
            "map_coordinates": "0,0", "hours": '{"Sábado": "12:00 - 23:00"}',
        })
        assert parse_hours(location.hours) == {"Sábado": "12:00 - 23:00"}
        assert LocationService(db).get_phone() == "0412-0000000"

    @pytest.mark.parametrize("raw", [None, "", "not json", "[1, 2]"])
    def test_parse_hours_is_tolerant(self, raw):
        assert parse_hours(raw) == {}


class TestUserService:

    def test_cannot_delete_default_admin(self, db):
        service = UserService(db)
        admin = service.list_users()[0]

        with pytest.raises(BusinessRuleError):
            service.delete_user(admin.id)
