"""
站点配置服务
键值设置、门店位置（单例）、员工、社交媒体链接
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.database import DatabaseManager, db_manager
from ..core.exceptions import ResourceNotFoundError, ValidationError
from ..models.site import Location, Setting, SiteSettings, SocialMedia, Staff
from .crud_service import CrudService, log_operation

logger = logging.getLogger(__name__)

LOCATION_COLUMNS = ("address", "phone", "email", "map_coordinates", "hours")


class SettingsService:
    """键值设置服务"""

    def __init__(self, db: Optional[DatabaseManager] = None):
        self.db = db or db_manager

    def get_all(self) -> List[Setting]:
        rows = self.db.execute_query("SELECT id, key, value FROM settings ORDER BY id")
        return [Setting.model_validate(row) for row in rows]

    def get(self, key: str) -> Optional[str]:
        return self.db.scalar("SELECT value FROM settings WHERE key = ?", [key])

    def get_or_raise(self, key: str) -> Setting:
        row = self.db.execute_one("SELECT id, key, value FROM settings WHERE key = ?", [key])
        if not row:
            raise ResourceNotFoundError("Setting not found")
        return Setting.model_validate(row)

    def upsert(self, key: str, value: str, actor_id: Optional[int] = None) -> Setting:
        """存在则更新，否则插入"""
        if not value:
            raise ValidationError("Value is required")
        with self.db.transaction():
            existing = self.db.scalar("SELECT id FROM settings WHERE key = ?", [key])
            if existing is not None:
                self.db.execute("UPDATE settings SET value = ? WHERE id = ?", [value, existing])
            else:
                self.db.execute("INSERT INTO settings (key, value) VALUES (?, ?)", [key, value])
            log_operation(self.db, actor_id, "settings_update", {"key": key, "value": value})
        return self.get_or_raise(key)

    def get_site_settings(self) -> SiteSettings:
        """类型化的站点设置，缺失项取默认值"""
        pairs = {setting.key: setting.value for setting in self.get_all()}
        return SiteSettings.from_pairs(pairs)

    def seed_defaults(self) -> None:
        """首次启动时写入默认站点设置"""
        defaults = SiteSettings()
        for key in ("restaurantName", "restaurantLogo"):
            if self.get(key) is None:
                self.upsert(key, defaults.model_dump(by_alias=True)[key])


class LocationService:
    """门店位置服务（单例记录）"""

    def __init__(self, db: Optional[DatabaseManager] = None):
        self.db = db or db_manager

    def get(self) -> Optional[Location]:
        row = self.db.execute_one("SELECT * FROM locations ORDER BY id LIMIT 1")
        return Location.model_validate(row) if row else None

    def get_phone(self) -> str:
        """订单和预订通知的 WhatsApp 目标号码，未配置时为空串"""
        location = self.get()
        return location.phone if location else ""

    def upsert(self, data: Dict[str, Any], actor_id: Optional[int] = None) -> Location:
        values = {k: v for k, v in data.items() if k in LOCATION_COLUMNS and v is not None}
        current = self.get()
        if current is None:
            missing = [name for name in LOCATION_COLUMNS if name not in values]
            if missing:
                raise ValidationError(
                    "Invalid location data",
                    details={"missing": missing}
                )
        with self.db.transaction():
            if current is None:
                placeholders = ", ".join("?" for _ in LOCATION_COLUMNS)
                self.db.execute(
                    f"INSERT INTO locations ({', '.join(LOCATION_COLUMNS)}) VALUES ({placeholders})",
                    [values[name] for name in LOCATION_COLUMNS]
                )
            elif values:
                assignments = ", ".join(f"{name} = ?" for name in values)
                self.db.execute(
                    f"UPDATE locations SET {assignments} WHERE id = ?",
                    [*values.values(), current.id]
                )
            log_operation(self.db, actor_id, "location_update", values)
        return self.get()


class StaffService(CrudService):
    """员工服务"""

    table = "staff"
    model = Staff
    columns = ("name", "position", "bio", "image")
    resource_name = "Staff member"


class SocialMediaService(CrudService):
    """社交媒体链接服务"""

    table = "social_media"
    model = SocialMedia
    columns = ("name", "url", "icon", "is_active")
    resource_name = "Social media link"
