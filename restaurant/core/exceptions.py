"""
自定义异常类
提供更精确的错误处理和异常信息
"""

from typing import Any, Dict, Optional


class BaseApplicationError(Exception):
    """应用基础异常类"""

    default_code = "APPLICATION_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code or self.default_code
        self.details = details or {}
        super().__init__(self.message)


class DatabaseError(BaseApplicationError):
    """数据库相关异常"""
    default_code = "DATABASE_ERROR"


class AuthenticationError(BaseApplicationError):
    """认证相关异常"""
    default_code = "AUTHENTICATION_REQUIRED"


class PermissionDeniedError(BaseApplicationError):
    """权限拒绝错误"""
    default_code = "PERMISSION_DENIED"


class ValidationError(BaseApplicationError):
    """数据验证异常"""
    default_code = "VALIDATION_ERROR"


class ResourceNotFoundError(BaseApplicationError):
    """资源不存在异常"""
    default_code = "RESOURCE_NOT_FOUND"


class DuplicateResourceError(BaseApplicationError):
    """资源重复异常"""
    default_code = "DUPLICATE_RESOURCE"


class BusinessRuleError(BaseApplicationError):
    """业务规则错误"""
    default_code = "BUSINESS_RULE_VIOLATION"


class ReservationNotFoundError(ResourceNotFoundError):
    """预订不存在异常"""
    default_code = "RESERVATION_NOT_FOUND"


class MenuItemNotFoundError(ResourceNotFoundError):
    """菜品不存在异常"""
    default_code = "MENU_ITEM_NOT_FOUND"


class UserNotFoundError(ResourceNotFoundError):
    """用户不存在异常"""
    default_code = "USER_NOT_FOUND"


class InvalidReservationStatusError(ValidationError):
    """预订状态非法"""
    default_code = "INVALID_RESERVATION_STATUS"
