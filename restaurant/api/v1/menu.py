"""
菜单路由模块
菜品与分类的 CRUD；查询公开，修改需要管理员
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Response, status

from ...core.security import get_optional_user, is_admin, require_admin
from ...models.menu import Category, MenuItem
from ...schemas.menu import (
    CategoryCreateRequest,
    CategoryUpdateRequest,
    MenuItemCreateRequest,
    MenuItemUpdateRequest,
)
from ...services import CategoryService, MenuItemService
from ..deps import get_category_service, get_menu_item_service

router = APIRouter()


@router.get("/menu-items", response_model=List[MenuItem])
def list_menu_items(
    user: Optional[Dict[str, Any]] = Depends(get_optional_user),
    service: MenuItemService = Depends(get_menu_item_service)
):
    """菜单列表；管理员可以看到下架的菜品"""
    return service.list_menu(include_unavailable=is_admin(user))


@router.get("/menu-items/featured", response_model=List[MenuItem])
def list_featured_menu_items(service: MenuItemService = Depends(get_menu_item_service)):
    return service.list_featured()


@router.get("/menu-items/category/{category_id}", response_model=List[MenuItem])
def list_menu_items_by_category(
    category_id: int,
    service: MenuItemService = Depends(get_menu_item_service)
):
    return service.list_by_category(category_id)


@router.get("/menu-items/{item_id}", response_model=MenuItem)
def get_menu_item(item_id: int, service: MenuItemService = Depends(get_menu_item_service)):
    return service.get_or_raise(item_id)


@router.post("/menu-items", response_model=MenuItem, status_code=status.HTTP_201_CREATED)
def create_menu_item(
    req: MenuItemCreateRequest,
    admin: Dict[str, Any] = Depends(require_admin),
    service: MenuItemService = Depends(get_menu_item_service)
):
    return service.create(req.model_dump(), admin["id"])


@router.put("/menu-items/{item_id}", response_model=MenuItem)
def update_menu_item(
    item_id: int,
    req: MenuItemUpdateRequest,
    admin: Dict[str, Any] = Depends(require_admin),
    service: MenuItemService = Depends(get_menu_item_service)
):
    return service.update(item_id, req.model_dump(exclude_unset=True), admin["id"])


@router.delete("/menu-items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_menu_item(
    item_id: int,
    admin: Dict[str, Any] = Depends(require_admin),
    service: MenuItemService = Depends(get_menu_item_service)
):
    service.delete(item_id, admin["id"])
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/categories", response_model=List[Category])
def list_categories(service: CategoryService = Depends(get_category_service)):
    return service.list_all()


@router.get("/categories/{category_id}", response_model=Category)
def get_category(category_id: int, service: CategoryService = Depends(get_category_service)):
    return service.get_or_raise(category_id)


@router.post("/categories", response_model=Category, status_code=status.HTTP_201_CREATED)
def create_category(
    req: CategoryCreateRequest,
    admin: Dict[str, Any] = Depends(require_admin),
    service: CategoryService = Depends(get_category_service)
):
    return service.create(req.model_dump(), admin["id"])


@router.put("/categories/{category_id}", response_model=Category)
def update_category(
    category_id: int,
    req: CategoryUpdateRequest,
    admin: Dict[str, Any] = Depends(require_admin),
    service: CategoryService = Depends(get_category_service)
):
    return service.update(category_id, req.model_dump(exclude_unset=True), admin["id"])


@router.delete("/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: int,
    admin: Dict[str, Any] = Depends(require_admin),
    service: CategoryService = Depends(get_category_service)
):
    """删除分类；引用它的菜品保留，读取时显示为未分类"""
    service.delete(category_id, admin["id"])
    return Response(status_code=status.HTTP_204_NO_CONTENT)
