"""
安全相关功能
JWT 令牌签发与校验、密码哈希，以及 FastAPI 认证依赖
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from werkzeug.security import check_password_hash, generate_password_hash

from ..config.settings import settings
from .database import DatabaseManager, get_db
from .exceptions import AuthenticationError, PermissionDeniedError

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"
USER_ROLE = "user"


class SecurityManager:
    """安全管理器"""

    def __init__(self, secret: Optional[str] = None, algorithm: Optional[str] = None,
                 expire_hours: Optional[int] = None):
        self.secret = secret or settings.jwt_secret_key
        self.algorithm = algorithm or settings.jwt_algorithm
        self.expire_hours = expire_hours or settings.jwt_expire_hours

    def create_jwt_token(self, user_id: int, additional_claims: Dict[str, Any] = None) -> str:
        """创建JWT token"""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "exp": now + timedelta(hours=self.expire_hours),
            "iat": now,
        }
        if additional_claims:
            payload.update(additional_claims)
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict[str, Any]:
        """解码JWT token"""
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise AuthenticationError(f"Invalid token: {e}")

    def get_user_id_from_token(self, token: str) -> int:
        """从token中提取用户ID"""
        payload = self.decode_jwt_token(token)
        subject = payload.get("sub")
        if not subject or not str(subject).isdigit():
            raise AuthenticationError("Token missing subject")
        return int(subject)

    @staticmethod
    def hash_password(password: str) -> str:
        return generate_password_hash(password)

    @staticmethod
    def verify_password(password_hash: str, password: str) -> bool:
        return check_password_hash(password_hash, password)


# 全局安全管理器实例
security_manager = SecurityManager()

_bearer = HTTPBearer(auto_error=False)


def _load_user(db: DatabaseManager, user_id: int) -> Optional[Dict[str, Any]]:
    return db.execute_one(
        "SELECT id, username, password, is_first_login, role FROM users WHERE id = ?",
        [user_id]
    )


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    db: DatabaseManager = Depends(get_db)
) -> Optional[Dict[str, Any]]:
    """有令牌则解析当前用户，无令牌或令牌无效返回 None"""
    if credentials is None:
        return None
    try:
        user_id = security_manager.get_user_id_from_token(credentials.credentials)
    except AuthenticationError:
        return None
    return _load_user(db, user_id)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    db: DatabaseManager = Depends(get_db)
) -> Dict[str, Any]:
    """从Authorization header中提取并验证当前用户"""
    if credentials is None:
        raise AuthenticationError("Not authenticated")
    user_id = security_manager.get_user_id_from_token(credentials.credentials)
    user = _load_user(db, user_id)
    if not user:
        raise AuthenticationError("Not authenticated")
    return user


async def require_admin(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    """检查管理员权限"""
    if user.get("role") != ADMIN_ROLE:
        logger.warning("User %s denied admin access", user.get("username"))
        raise PermissionDeniedError("Not authorized")
    return user


def is_admin(user: Optional[Dict[str, Any]]) -> bool:
    return bool(user) and user.get("role") == ADMIN_ROLE
