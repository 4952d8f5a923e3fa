"""
用户相关数据模型
"""

from .base import BaseEntity


class User(BaseEntity):
    """用户（不含密码）"""
    username: str
    is_first_login: bool = True
    role: str = "admin"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
