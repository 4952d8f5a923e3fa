"""
用户管理相关的请求模式
"""

from pydantic import BaseModel, Field


class UserCreateRequest(BaseModel):
    """管理员创建用户请求"""
    username: str = Field(..., min_length=3, description="用户名")
    password: str = Field(..., min_length=6, description="初始密码")


class PasswordResetRequest(BaseModel):
    """重置密码请求"""
    password: str = Field(..., min_length=6, description="新密码")
