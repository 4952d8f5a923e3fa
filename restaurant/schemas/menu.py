"""
菜单相关的请求模式
"""

from typing import Optional

from pydantic import Field

from ..models.base import CamelModel


class MenuItemCreateRequest(CamelModel):
    """菜品创建请求"""
    name: str = Field(..., min_length=1)
    description: str
    price: float = Field(..., ge=0)
    image: str
    ingredients: str
    category_id: Optional[int] = None
    is_available: bool = True
    is_featured: bool = False


class MenuItemUpdateRequest(CamelModel):
    """菜品更新请求"""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    image: Optional[str] = None
    ingredients: Optional[str] = None
    category_id: Optional[int] = None
    is_available: Optional[bool] = None
    is_featured: Optional[bool] = None


class CategoryCreateRequest(CamelModel):
    """分类创建请求，slug 缺省时由名称生成"""
    name: str = Field(..., min_length=1)
    slug: Optional[str] = None


class CategoryUpdateRequest(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    slug: Optional[str] = None
