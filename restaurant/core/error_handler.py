"""
统一错误处理模块
提供标准化的错误响应格式和错误处理中间件

主要功能：
- 统一的错误响应格式 {message, error}
- 自动异常捕获和日志记录
- HTTP状态码映射
- 未知异常只返回脱敏消息，细节写入服务端日志
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .exceptions import (
    AuthenticationError,
    BaseApplicationError,
    DatabaseError,
    DuplicateResourceError,
    PermissionDeniedError,
    ResourceNotFoundError,
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


class ErrorResponse:
    """标准错误响应格式"""

    def __init__(self, error_code: Optional[str], message: str,
                 details: Optional[Dict[str, Any]] = None,
                 http_status: int = 400):
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        self.http_status = http_status

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式；5xx 不暴露错误码和细节"""
        if self.http_status >= 500:
            return {"message": self.message}
        body: Dict[str, Any] = {"message": self.message, "error": self.error_code}
        if self.details:
            body["details"] = self.details
        return body

    def to_json_response(self) -> JSONResponse:
        """转换为FastAPI JSONResponse"""
        return JSONResponse(status_code=self.http_status, content=self.to_dict())


class ErrorHandler:
    """全局错误处理器"""

    # 按异常类型映射HTTP状态码，子类优先匹配
    ERROR_CLASS_STATUS_MAP = [
        (AuthenticationError, 401),
        (PermissionDeniedError, 403),
        (ResourceNotFoundError, 404),
        (DuplicateResourceError, 409),
        (DatabaseError, 500),
    ]

    @classmethod
    def status_for(cls, error: BaseApplicationError) -> int:
        for error_class, status in cls.ERROR_CLASS_STATUS_MAP:
            if isinstance(error, error_class):
                return status
        return 400

    @classmethod
    def handle_application_error(cls, error: BaseApplicationError) -> ErrorResponse:
        """处理应用业务异常"""
        http_status = cls.status_for(error)
        if http_status >= 500:
            logger.error("Application error %s: %s", error.error_code, error.message)
            return ErrorResponse(None, INTERNAL_ERROR_MESSAGE, http_status=http_status)
        return ErrorResponse(
            error_code=error.error_code,
            message=error.message,
            details=error.details,
            http_status=http_status
        )

    @classmethod
    def handle_http_exception(cls, error: StarletteHTTPException) -> ErrorResponse:
        """处理HTTP异常"""
        return ErrorResponse(
            error_code="HTTP_ERROR",
            message=str(error.detail),
            http_status=error.status_code
        )

    @classmethod
    def handle_validation_error(cls, error: RequestValidationError) -> ErrorResponse:
        """处理请求体验证错误"""
        return ErrorResponse(
            error_code="VALIDATION_ERROR",
            message="Invalid request data",
            details={"fields": format_validation_errors(error.errors())},
            http_status=400
        )

    @classmethod
    def handle_unknown_error(cls, error: Exception) -> ErrorResponse:
        """处理未知异常"""
        logger.exception("Unhandled error: %s", type(error).__name__)
        return ErrorResponse(None, INTERNAL_ERROR_MESSAGE, http_status=500)


def format_validation_errors(errors: List[Dict[str, Any]]) -> Dict[str, str]:
    """把 pydantic 错误列表压缩为 字段 -> 消息"""
    fields: Dict[str, str] = {}
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or "__root__"
        fields.setdefault(field, err.get("msg", "Invalid value"))
    return fields


async def application_error_handler(request: Request, exc: BaseApplicationError) -> JSONResponse:
    """应用异常处理中间件"""
    return ErrorHandler.handle_application_error(exc).to_json_response()


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """HTTP异常处理中间件"""
    return ErrorHandler.handle_http_exception(exc).to_json_response()


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """验证异常处理中间件"""
    return ErrorHandler.handle_validation_error(exc).to_json_response()


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """通用异常处理中间件"""
    return ErrorHandler.handle_unknown_error(exc).to_json_response()
