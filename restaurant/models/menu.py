"""
菜单相关数据模型
"""

from datetime import datetime
from typing import Optional

from .base import BaseEntity

UNCATEGORIZED_LABEL = "uncategorized"


class Category(BaseEntity):
    """菜品分类"""
    name: str
    slug: str


class MenuItem(BaseEntity):
    """菜品完整模型

    category_id 可能指向已删除的分类，此时 category_name 为 "uncategorized"。
    """
    name: str
    description: str
    price: float
    image: str
    ingredients: str
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    is_available: bool = True
    is_featured: bool = False
    created_at: Optional[datetime] = None
