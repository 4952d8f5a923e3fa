"""
购物车
保存当前会话的菜品条目，每次修改后整体写入本地存储（键 "cart"），
结账时生成 WhatsApp 订单链接交给外部打开。结账不会清空购物车。
"""

import logging
import uuid
import webbrowser
from typing import Any, Callable, Dict, List, Optional

from pydantic import ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from ..config.settings import settings
from ..models.base import CamelModel
from ..utils.formatting import build_whatsapp_url, normalize_phone
from .messages import DeliveryDetails, build_order_message
from .storage import JsonFileStorage, LocalStorage, MemoryStorage

logger = logging.getLogger(__name__)

CART_STORAGE_KEY = "cart"

ADDED_TITLE = "Añadido al carrito"
CHECKOUT_ERROR_TITLE = "Error"
NO_PHONE_MESSAGE = "No se ha configurado un número de WhatsApp para realizar pedidos"

Notifier = Callable[[str, str], None]


class CheckoutError(Exception):
    """结账失败（未配置餐厅电话）"""


class MenuItemSnapshot(CamelModel):
    """加入购物车时的菜品快照"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: int
    name: str
    price: float
    image: Optional[str] = None


class CartItem(CamelModel):
    """购物车条目；id 为条目自身的标识，与菜品 id 无关"""
    id: str
    menu_item: MenuItemSnapshot
    quantity: int = Field(..., ge=1)


_cart_adapter = TypeAdapter(List[CartItem])


def _is_valid_quantity(quantity: Any) -> bool:
    return isinstance(quantity, int) and not isinstance(quantity, bool) and quantity >= 1


def _log_notification(title: str, description: str) -> None:
    logger.info("%s: %s", title, description)


class CartStore:
    """
    购物车状态

    Args:
        storage: 本地存储后端，构造时从中恢复购物车
        location_provider: 返回餐厅 WhatsApp 号码的回调
        notifier: 提示回调 (title, description)
        link_opener: 打开深链接的回调，默认在浏览器新标签页打开
    """

    def __init__(self, storage: Optional[LocalStorage] = None,
                 location_provider: Optional[Callable[[], Optional[str]]] = None,
                 notifier: Optional[Notifier] = None,
                 link_opener: Optional[Callable[[str], Any]] = None):
        self.storage = storage if storage is not None else MemoryStorage()
        self.location_provider = location_provider
        self.notifier = notifier or _log_notification
        self.link_opener = link_opener or webbrowser.open_new_tab
        self.is_open = False
        self._items: List[CartItem] = self._restore()

    @classmethod
    def load(cls, storage: Optional[LocalStorage] = None, **kwargs) -> "CartStore":
        """按配置创建购物车；配置了 cart_storage_dir 时持久化到磁盘"""
        if storage is None:
            if settings.cart_storage_dir:
                storage = JsonFileStorage(settings.cart_storage_dir)
            else:
                storage = MemoryStorage()
        return cls(storage=storage, **kwargs)

    # 持久化

    def _restore(self) -> List[CartItem]:
        """读取失败或数据损坏时返回空购物车；同一菜品的多个条目合并为一条"""
        raw = self.storage.get_item(CART_STORAGE_KEY)
        if not raw:
            return []
        try:
            stored = _cart_adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning("Discarding unreadable cart data: %s", e.error_count())
            return []

        merged: Dict[int, CartItem] = {}
        for item in stored:
            existing = merged.get(item.menu_item.id)
            if existing:
                existing.quantity += item.quantity
            else:
                merged[item.menu_item.id] = item
        return list(merged.values())

    def _save(self) -> None:
        self.storage.set_item(
            CART_STORAGE_KEY,
            _cart_adapter.dump_json(self._items, by_alias=True).decode("utf-8"),
        )

    # 查询

    @property
    def items(self) -> List[CartItem]:
        return list(self._items)

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self._items)

    @property
    def total_price(self) -> float:
        return sum(item.menu_item.price * item.quantity for item in self._items)

    def find_by_menu_item(self, menu_item_id: int) -> Optional[CartItem]:
        for item in self._items:
            if item.menu_item.id == menu_item_id:
                return item
        return None

    # 修改

    def add_item(self, menu_item: Any, quantity: int = 1) -> CartItem:
        """
        加入菜品；同一菜品合并数量

        Args:
            menu_item: 菜品（模型对象或字典，需要 id/name/price/image）
            quantity: 数量，必须是 >= 1 的整数

        Raises:
            ValueError: 数量不是整数或小于 1
        """
        if not _is_valid_quantity(quantity):
            raise ValueError(f"quantity must be an integer of at least 1, got {quantity!r}")
        snapshot = MenuItemSnapshot.model_validate(menu_item)

        existing = self.find_by_menu_item(snapshot.id)
        if existing:
            existing.quantity += quantity
            line = existing
        else:
            line = CartItem(id=uuid.uuid4().hex, menu_item=snapshot, quantity=quantity)
            self._items.append(line)
        self._save()

        self.notifier(ADDED_TITLE, f"{snapshot.name} ha sido añadido al carrito.")
        self.open_cart()
        return line

    def remove_item(self, item_id: str) -> None:
        """删除条目；不存在时忽略"""
        self._items = [item for item in self._items if item.id != item_id]
        self._save()

    def update_quantity(self, item_id: str, quantity: int) -> None:
        """修改数量；非整数或小于 1 时忽略，不会删除条目"""
        if not _is_valid_quantity(quantity):
            return
        for item in self._items:
            if item.id == item_id:
                item.quantity = quantity
        self._save()

    def clear_cart(self) -> None:
        self._items = []
        self._save()

    def open_cart(self) -> None:
        self.is_open = True

    def close_cart(self) -> None:
        self.is_open = False

    # 结账

    def checkout(self, delivery: Optional[DeliveryDetails] = None) -> str:
        """
        生成订单消息并打开 WhatsApp 链接

        Returns:
            str: 打开的深链接

        Raises:
            CheckoutError: 未配置餐厅电话，此时不会打开任何链接
        """
        phone = self.location_provider() if self.location_provider else None
        if not normalize_phone(phone or ""):
            self.notifier(CHECKOUT_ERROR_TITLE, NO_PHONE_MESSAGE)
            raise CheckoutError(NO_PHONE_MESSAGE)

        message = build_order_message(self._items, self.total_price, delivery)
        url = build_whatsapp_url(phone, message)
        self.link_opener(url)
        logger.info("Checkout opened for %d items", self.total_items)
        return url
