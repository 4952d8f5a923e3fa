"""
路由依赖：按请求绑定的数据库构造服务实例
"""

from fastapi import Depends

from ..core.database import DatabaseManager, get_db
from ..services import (
    AuthService,
    CategoryService,
    LocationService,
    MenuItemService,
    ReservationService,
    SettingsService,
    SocialMediaService,
    StaffService,
    UserService,
)


def get_auth_service(db: DatabaseManager = Depends(get_db)) -> AuthService:
    return AuthService(db)


def get_user_service(db: DatabaseManager = Depends(get_db)) -> UserService:
    return UserService(db)


def get_menu_item_service(db: DatabaseManager = Depends(get_db)) -> MenuItemService:
    return MenuItemService(db)


def get_category_service(db: DatabaseManager = Depends(get_db)) -> CategoryService:
    return CategoryService(db)


def get_reservation_service(db: DatabaseManager = Depends(get_db)) -> ReservationService:
    return ReservationService(db)


def get_settings_service(db: DatabaseManager = Depends(get_db)) -> SettingsService:
    return SettingsService(db)


def get_location_service(db: DatabaseManager = Depends(get_db)) -> LocationService:
    return LocationService(db)


def get_staff_service(db: DatabaseManager = Depends(get_db)) -> StaffService:
    return StaffService(db)


def get_social_media_service(db: DatabaseManager = Depends(get_db)) -> SocialMediaService:
    return SocialMediaService(db)
