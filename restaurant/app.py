"""
LLAMAS! 餐厅网站后端服务 - 主应用入口
提供菜单、预订和站点配置的后端API服务

主要功能模块：
- 管理员登录与用户管理
- 菜品和分类管理
- 顾客预订及状态流转
- 站点设置、门店位置、员工、社交媒体

技术栈：FastAPI + DuckDB + JWT认证
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import api_router
from .config.settings import settings
from .core.database import DatabaseManager, db_manager
from .core.error_handler import (
    application_error_handler,
    general_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from .core.exceptions import BaseApplicationError, DatabaseError
from .core.logging import configure_logging
from .services import CategoryService, SettingsService, UserService

logger = logging.getLogger(__name__)


def bootstrap_database(db: DatabaseManager) -> None:
    """建表并写入默认管理员、站点设置和分类"""
    db.init_database()
    UserService(db).ensure_default_admin()
    SettingsService(db).seed_defaults()
    CategoryService(db).seed_defaults()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    db: DatabaseManager = app.state.db
    bootstrap_database(db)
    logger.info("Database initialized: %s", db.db_path)

    yield

    db.close()


def create_app(db: Optional[DatabaseManager] = None) -> FastAPI:
    """
    创建FastAPI应用

    Args:
        db: 数据库管理器；测试时传入内存库，缺省使用全局实例
    """
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description="LLAMAS! 餐厅网站API",
        debug=settings.debug,
        lifespan=lifespan
    )
    app.state.db = db or db_manager

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 注册异常处理器
    app.add_exception_handler(BaseApplicationError, application_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # 注册路由
    app.include_router(api_router, prefix=settings.api_prefix)

    # 健康检查
    @app.get("/health")
    def health_check():
        try:
            app.state.db.scalar("SELECT 1")
        except DatabaseError as e:
            logger.error("Health check failed: %s", e)
            return {
                "status": "unhealthy",
                "version": settings.api_version,
                "database": "error"
            }
        return {
            "status": "healthy",
            "version": settings.api_version,
            "database": "connected"
        }

    @app.get("/")
    def root():
        return {
            "name": settings.api_title,
            "version": settings.api_version,
            "description": "LLAMAS! 餐厅网站API"
        }

    return app


# 应用实例
app = create_app()
