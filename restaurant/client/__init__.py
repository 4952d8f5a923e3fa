"""
浏览器端状态的 Python 实现
购物车、结账消息、预订表单，以及访问后端 API 的 HTTP 客户端
"""

from .api_client import ApiClient, ApiError
from .cart import CartItem, CartStore, CheckoutError, MenuItemSnapshot
from .messages import DeliveryDetails, build_order_message
from .reservation_form import (
    PhonePolicy,
    ReservationForm,
    ReservationFormController,
    ReservationValidationError,
    is_selectable_date,
    selectable_date_range,
)
from .storage import JsonFileStorage, LocalStorage, MemoryStorage

__all__ = [
    "ApiClient",
    "ApiError",
    "CartItem",
    "CartStore",
    "CheckoutError",
    "DeliveryDetails",
    "JsonFileStorage",
    "LocalStorage",
    "MemoryStorage",
    "MenuItemSnapshot",
    "PhonePolicy",
    "ReservationForm",
    "ReservationFormController",
    "ReservationValidationError",
    "build_order_message",
    "is_selectable_date",
    "selectable_date_range",
]
