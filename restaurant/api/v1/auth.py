"""
用户认证路由模块
用户名密码登录，签发 Bearer JWT；注销是无状态的
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from ...core.security import get_current_user
from ...models.user import User
from ...schemas.auth import ChangePasswordRequest, LoginRequest, LoginResponse, RegisterRequest
from ...schemas.common import MessageResponse
from ...services import AuthService
from ..deps import get_auth_service

router = APIRouter()


@router.post("/register", response_model=LoginResponse, status_code=status.HTTP_201_CREATED)
def register(req: RegisterRequest, auth: AuthService = Depends(get_auth_service)):
    """注册新账号并返回访问令牌"""
    return LoginResponse(**auth.register(req.username, req.password))


@router.post("/login", response_model=LoginResponse)
def login(req: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    """
    用户名密码登录

    Returns:
        LoginResponse: JWT token 和用户信息；
        user.isFirstLogin 为 true 时前端应引导修改密码
    """
    return LoginResponse(**auth.login(req.username, req.password))


@router.post("/logout", response_model=MessageResponse)
def logout(user: Dict[str, Any] = Depends(get_current_user)):
    """令牌由客户端丢弃即可，服务端不保存会话"""
    return MessageResponse(message="Logged out")


@router.get("/user", response_model=User)
def current_user(user: Dict[str, Any] = Depends(get_current_user)):
    """获取当前登录用户"""
    return User.model_validate(user)


@router.post("/change-password", response_model=User)
def change_password(
    req: ChangePasswordRequest,
    user: Dict[str, Any] = Depends(get_current_user),
    auth: AuthService = Depends(get_auth_service)
):
    """修改当前用户密码"""
    return auth.change_password(user["id"], req.current_password, req.new_password)
