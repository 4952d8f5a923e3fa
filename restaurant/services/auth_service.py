"""
认证服务
处理用户登录、注册、修改密码和 JWT token 签发
"""

import logging
from typing import Optional

from ..core.database import DatabaseManager, db_manager
from ..core.exceptions import AuthenticationError, ValidationError
from ..core.security import USER_ROLE, security_manager
from ..models.user import User
from .crud_service import log_operation
from .user_service import UserService

logger = logging.getLogger(__name__)


class AuthService:
    """认证服务"""

    def __init__(self, db: Optional[DatabaseManager] = None):
        self.db = db or db_manager
        self.users = UserService(self.db)

    def login(self, username: str, password: str) -> dict:
        """用户名密码登录，返回 token 和用户信息"""
        record = self.users.get_by_username(username)
        if not record or not security_manager.verify_password(record["password"], password):
            logger.warning("Failed login for %s", username)
            raise AuthenticationError("Invalid username or password")

        user = User.model_validate(record)
        log_operation(self.db, user.id, "login", {"username": username})
        return {
            "token": security_manager.create_jwt_token(user.id, {"role": user.role}),
            "user": user,
        }

    def register(self, username: str, password: str) -> dict:
        """注册新用户并直接登录；公开注册的账号不是管理员"""
        user = self.users.create_user(username, password, role=USER_ROLE)
        return {
            "token": security_manager.create_jwt_token(user.id, {"role": user.role}),
            "user": user,
        }

    def change_password(self, user_id: int, current_password: str, new_password: str) -> User:
        """校验当前密码后修改，并清除首次登录标记"""
        user = self.users.get_user_or_raise(user_id)
        record = self.users.get_by_username(user.username)
        if not security_manager.verify_password(record["password"], current_password):
            raise ValidationError("Current password is incorrect", error_code="INVALID_PASSWORD")
        return self.users.set_password(user_id, new_password, is_first_login=False, actor_id=user_id)
