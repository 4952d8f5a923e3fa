"""
用户服务
后台用户的创建、查询、重置密码和删除；密码只以哈希形式保存且从不返回
"""

import logging
from typing import Any, Dict, List, Optional

from ..config.settings import settings
from ..core.database import DatabaseManager, db_manager
from ..core.exceptions import BusinessRuleError, UserNotFoundError, ValidationError
from ..core.security import ADMIN_ROLE, security_manager
from ..models.user import User
from .crud_service import log_operation

logger = logging.getLogger(__name__)

USER_FIELDS = "id, username, is_first_login, role"


class UserService:
    """用户服务"""

    def __init__(self, db: Optional[DatabaseManager] = None):
        self.db = db or db_manager

    def list_users(self) -> List[User]:
        rows = self.db.execute_query(f"SELECT {USER_FIELDS} FROM users ORDER BY id")
        return [User.model_validate(row) for row in rows]

    def get_user(self, user_id: int) -> Optional[User]:
        row = self.db.execute_one(f"SELECT {USER_FIELDS} FROM users WHERE id = ?", [user_id])
        return User.model_validate(row) if row else None

    def get_user_or_raise(self, user_id: int) -> User:
        user = self.get_user(user_id)
        if user is None:
            raise UserNotFoundError("User not found")
        return user

    def get_by_username(self, username: str) -> Optional[Dict[str, Any]]:
        """含密码哈希的原始记录，仅供认证使用"""
        return self.db.execute_one(
            "SELECT id, username, password, is_first_login, role FROM users WHERE username = ?",
            [username]
        )

    def create_user(self, username: str, password: str, role: str = ADMIN_ROLE,
                    is_first_login: bool = True, actor_id: Optional[int] = None) -> User:
        if self.get_by_username(username):
            raise ValidationError("Username already exists", error_code="DUPLICATE_USERNAME")
        with self.db.transaction():
            new_id = self.db.scalar(
                "INSERT INTO users (username, password, is_first_login, role) VALUES (?, ?, ?, ?) RETURNING id",
                [username, security_manager.hash_password(password), is_first_login, role]
            )
            log_operation(self.db, actor_id, "user_create", {"id": new_id, "username": username})
        logger.info("Created user %s", username)
        return self.get_user_or_raise(new_id)

    def set_password(self, user_id: int, password: str, is_first_login: bool,
                     actor_id: Optional[int] = None) -> User:
        self.get_user_or_raise(user_id)
        with self.db.transaction():
            self.db.execute(
                "UPDATE users SET password = ?, is_first_login = ? WHERE id = ?",
                [security_manager.hash_password(password), is_first_login, user_id]
            )
            log_operation(self.db, actor_id, "user_password_set", {"id": user_id})
        return self.get_user_or_raise(user_id)

    def reset_password(self, user_id: int, password: str, actor_id: Optional[int] = None) -> User:
        """管理员重置密码，用户下次登录需要修改"""
        return self.set_password(user_id, password, is_first_login=True, actor_id=actor_id)

    def delete_user(self, user_id: int, actor_id: Optional[int] = None) -> None:
        user = self.get_user_or_raise(user_id)
        if user.username == settings.default_admin_username:
            raise BusinessRuleError("Cannot delete default admin user")
        with self.db.transaction():
            self.db.execute("DELETE FROM users WHERE id = ?", [user_id])
            log_operation(self.db, actor_id, "user_delete", {"id": user_id, "username": user.username})
        logger.info("Deleted user %s", user.username)

    def ensure_default_admin(self) -> bool:
        """默认管理员不存在时创建，返回是否新建"""
        if self.get_by_username(settings.default_admin_username):
            return False
        self.create_user(settings.default_admin_username, settings.default_admin_password)
        logger.info("Default admin user created")
        return True

