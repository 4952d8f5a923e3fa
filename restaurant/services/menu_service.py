"""
菜单服务
菜品与分类的 CRUD。删除分类不会影响引用它的菜品，
读取时悬空的 category_id 视为空，分类名显示为 "uncategorized"
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.exceptions import DuplicateResourceError, MenuItemNotFoundError, ValidationError
from ..models.menu import UNCATEGORIZED_LABEL, Category, MenuItem
from ..utils.formatting import slugify
from .crud_service import CrudService

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = ("Entradas", "Platos Principales", "Postres", "Bebidas")

MENU_ITEM_COLUMNS = (
    "name", "description", "price", "image", "ingredients",
    "category_id", "is_available", "is_featured",
)


class MenuItemService(CrudService):
    """菜品服务"""

    table = "menu_items"
    model = MenuItem
    columns = MENU_ITEM_COLUMNS
    nullable_columns = ("category_id",)
    order_by = "is_featured DESC, id"
    resource_name = "Menu item"
    not_found_error = MenuItemNotFoundError

    def select_sql(self) -> str:
        return f"""
        SELECT m.id, m.name, m.description, m.price, m.image, m.ingredients,
               CASE WHEN c.id IS NULL THEN NULL ELSE m.category_id END AS category_id,
               COALESCE(c.name, '{UNCATEGORIZED_LABEL}') AS category_name,
               m.is_available, m.is_featured, m.created_at
        FROM menu_items m
        LEFT JOIN categories c ON c.id = m.category_id
        """

    def list_menu(self, include_unavailable: bool = False) -> List[MenuItem]:
        """菜单列表；公开访问只返回可售菜品，推荐菜品在前"""
        if include_unavailable:
            return self.list_all()
        return self._filtered("r.is_available")

    def list_featured(self) -> List[MenuItem]:
        return self._filtered("r.is_featured AND r.is_available")

    def list_by_category(self, category_id: int) -> List[MenuItem]:
        return self._filtered("r.category_id = ? AND r.is_available", [category_id])

    def _filtered(self, where: str, params: Optional[list] = None) -> List[MenuItem]:
        rows = self.db.execute_query(
            f"SELECT * FROM ({self.select_sql()}) AS r WHERE {where} ORDER BY {self.order_by}",
            params
        )
        return [MenuItem.model_validate(row) for row in rows]


class CategoryService(CrudService):
    """分类服务"""

    table = "categories"
    model = Category
    columns = ("name", "slug")
    resource_name = "Category"

    def create(self, data: Dict[str, Any], actor_id: Optional[int] = None) -> Category:
        data = dict(data)
        data["slug"] = slugify(data.get("slug") or data.get("name") or "")
        if not data["slug"]:
            raise ValidationError("Invalid category data")
        self._ensure_unique_slug(data["slug"])
        return super().create(data, actor_id)

    def update(self, resource_id: int, data: Dict[str, Any],
               actor_id: Optional[int] = None) -> Category:
        data = dict(data)
        if data.get("slug"):
            data["slug"] = slugify(data["slug"])
            self._ensure_unique_slug(data["slug"], exclude_id=resource_id)
        return super().update(resource_id, data, actor_id)

    def get_by_slug(self, slug: str) -> Optional[Category]:
        row = self.db.execute_one("SELECT * FROM categories WHERE slug = ?", [slug])
        return Category.model_validate(row) if row else None

    def _ensure_unique_slug(self, slug: str, exclude_id: Optional[int] = None) -> None:
        existing = self.get_by_slug(slug)
        if existing and existing.id != exclude_id:
            raise DuplicateResourceError(f"Category slug already exists: {slug}")

    def seed_defaults(self) -> int:
        """分类表为空时写入默认分类，返回新增数量"""
        if self.db.scalar("SELECT COUNT(*) FROM categories"):
            return 0
        for name in DEFAULT_CATEGORIES:
            self.create({"name": name})
        logger.info("Seeded %d default categories", len(DEFAULT_CATEGORIES))
        return len(DEFAULT_CATEGORIES)
