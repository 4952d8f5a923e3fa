"""
站点配置相关的请求模式
"""

from typing import Optional

from pydantic import Field

from ..models.base import CamelModel


class SettingUpdateRequest(CamelModel):
    value: str = Field(..., min_length=1, description="设置值")


class LocationUpdateRequest(CamelModel):
    """门店位置更新请求（首次写入时必须给出全部字段）"""
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    map_coordinates: Optional[str] = None
    hours: Optional[str] = None


class StaffCreateRequest(CamelModel):
    name: str = Field(..., min_length=1)
    position: str
    bio: str
    image: str


class StaffUpdateRequest(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    position: Optional[str] = None
    bio: Optional[str] = None
    image: Optional[str] = None


class SocialMediaCreateRequest(CamelModel):
    name: str = Field(..., min_length=1)
    url: str
    icon: str
    is_active: bool = True


class SocialMediaUpdateRequest(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    url: Optional[str] = None
    icon: Optional[str] = None
    is_active: Optional[bool] = None
