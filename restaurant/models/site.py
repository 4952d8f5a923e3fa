"""
站点配置相关数据模型：键值设置、门店位置、社交媒体、员工
"""

import json
import logging
from typing import Any, Dict, Optional

from .base import BaseEntity, CamelModel

logger = logging.getLogger(__name__)

DEFAULT_RESTAURANT_NAME = "LLAMAS!"
DEFAULT_RESTAURANT_LOGO = (
    "https://images.unsplash.com/photo-1656137002630-6da73c6d5b11"
    "?w=800&auto=format&fit=crop&q=60"
)
DEFAULT_HERO_IMAGE = (
    "https://images.unsplash.com/photo-1517248135467-4c7edcad34c4"
    "?w=1200&auto=format&fit=crop&q=80"
)


class Setting(BaseEntity):
    """站点键值设置"""
    key: str
    value: str


class SiteSettings(CamelModel):
    """站点设置的类型化视图

    键值表中缺失的项统一在这里取默认值，调用方不再各自写兜底。
    """
    restaurant_name: str = DEFAULT_RESTAURANT_NAME
    restaurant_logo: str = DEFAULT_RESTAURANT_LOGO
    hero_title: str = "Sabor que enciende"
    hero_subtitle: str = "Comida hecha al fuego, para llevar o disfrutar en el local"
    hero_image: str = DEFAULT_HERO_IMAGE

    @classmethod
    def from_pairs(cls, pairs: Dict[str, str]) -> "SiteSettings":
        known = {}
        for name, field in cls.model_fields.items():
            if field.alias in pairs:
                known[name] = pairs[field.alias]
        return cls(**known)


class Location(BaseEntity):
    """门店位置（单例记录）

    hours 是 JSON 字符串，例如 {"Lunes - Viernes": "12:00 - 22:00"}。
    """
    address: str
    phone: str
    email: str
    map_coordinates: str
    hours: str


def parse_hours(raw: Optional[str]) -> Dict[str, Any]:
    """宽松解析营业时间 JSON，格式错误时返回空字典"""
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Location hours is not valid JSON: %r", raw)
        return {}
    return data if isinstance(data, dict) else {}


class SocialMedia(BaseEntity):
    """社交媒体链接"""
    name: str
    url: str
    icon: str
    is_active: bool = True


class Staff(BaseEntity):
    """员工"""
    name: str
    position: str
    bio: str
    image: str
