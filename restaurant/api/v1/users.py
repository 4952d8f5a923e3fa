"""
用户管理路由模块
仅管理员可用；响应中从不包含密码
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from ...core.security import require_admin
from ...models.user import User
from ...schemas.common import MessageResponse
from ...schemas.user import PasswordResetRequest, UserCreateRequest
from ...services import UserService
from ..deps import get_user_service

router = APIRouter()


@router.get("/users", response_model=List[User])
def list_users(
    admin: Dict[str, Any] = Depends(require_admin),
    service: UserService = Depends(get_user_service)
):
    return service.list_users()


@router.post("/users", response_model=User, status_code=status.HTTP_201_CREATED)
def create_user(
    req: UserCreateRequest,
    admin: Dict[str, Any] = Depends(require_admin),
    service: UserService = Depends(get_user_service)
):
    """创建管理员账号，首次登录需要修改密码"""
    return service.create_user(req.username, req.password, actor_id=admin["id"])


@router.post("/users/{user_id}/reset-password", response_model=MessageResponse)
def reset_password(
    user_id: int,
    req: PasswordResetRequest,
    admin: Dict[str, Any] = Depends(require_admin),
    service: UserService = Depends(get_user_service)
):
    service.reset_password(user_id, req.password, actor_id=admin["id"])
    return MessageResponse(message="Password reset successful")


@router.delete("/users/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    admin: Dict[str, Any] = Depends(require_admin),
    service: UserService = Depends(get_user_service)
):
    """删除用户；默认管理员不可删除"""
    service.delete_user(user_id, actor_id=admin["id"])
    return MessageResponse(message="User deleted successfully")
