"""
Business logic services.
Contains service layer implementations for core business operations.
"""

from .auth_service import AuthService
from .crud_service import CrudService
from .menu_service import CategoryService, MenuItemService
from .notification_service import NotificationComposer
from .reservation_service import ReservationService
from .site_service import LocationService, SettingsService, SocialMediaService, StaffService
from .user_service import UserService

__all__ = [
    "AuthService",
    "CategoryService",
    "CrudService",
    "LocationService",
    "MenuItemService",
    "NotificationComposer",
    "ReservationService",
    "SettingsService",
    "SocialMediaService",
    "StaffService",
    "UserService",
]
