"""
认证相关的请求/响应模式
"""

from pydantic import BaseModel, Field

from ..models.base import CamelModel
from ..models.user import User


class LoginRequest(BaseModel):
    """登录请求"""
    username: str = Field(..., min_length=1, description="用户名")
    password: str = Field(..., min_length=1, description="密码")


class RegisterRequest(BaseModel):
    """注册请求"""
    username: str = Field(..., min_length=3, description="用户名")
    password: str = Field(..., min_length=6, description="密码")


class ChangePasswordRequest(CamelModel):
    """修改密码请求"""
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)


class LoginResponse(BaseModel):
    """登录响应"""
    token: str = Field(description="JWT访问令牌")
    token_type: str = Field(default="Bearer", description="令牌类型")
    user: User = Field(description="当前用户")
