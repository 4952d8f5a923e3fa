import os

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    # 数据库配置
    database_url: str = "duckdb://./data/restaurant.duckdb"

    # JWT配置
    jwt_secret_key: str = "your-secret-key"
    jwt_algorithm: str = "HS256"
    jwt_expire_hours: int = 24 * 7  # 7天

    # 默认管理员（首次启动时创建）
    default_admin_username: str = "admin"
    default_admin_password: str = "admin123"

    # API配置
    api_title: str = "Restaurant API"
    api_version: str = "1.0.0"
    api_prefix: str = "/api"
    cors_origins: List[str] = ["http://localhost:3000"]

    # WhatsApp 深链接
    whatsapp_base_url: str = "https://wa.me"
    whatsapp_country_code: str = "58"

    # 客户端配置
    api_base_url: str = "http://localhost:8000"
    client_timeout_seconds: float = 10.0
    cart_storage_dir: Optional[str] = None
    reservation_success_display_seconds: float = 3.0

    # 服务监听
    host: str = "127.0.0.1"
    port: int = 8000

    # 开发模式
    debug: bool = False
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False


def get_settings(environment: Optional[str] = None) -> Settings:
    """按环境名创建配置；缺省读取 APP_ENV，未设置时为 production"""
    from .environments import DevelopmentSettings, TestingSettings

    environments = {
        "production": Settings,
        "development": DevelopmentSettings,
        "testing": TestingSettings,
    }
    name = (environment or os.getenv("APP_ENV") or "production").lower()
    if name not in environments:
        raise ValueError(f"Unknown environment: {name}")
    return environments[name]()


# 全局设置实例
settings = get_settings()
