"""
站点配置路由模块
键值设置、门店位置、员工和社交媒体链接；读取公开，修改需要管理员
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Response, status

from ...core.security import require_admin
from ...models.site import Setting, SiteSettings, SocialMedia, Staff
from ...schemas.site import (
    LocationUpdateRequest,
    SettingUpdateRequest,
    SocialMediaCreateRequest,
    SocialMediaUpdateRequest,
    StaffCreateRequest,
    StaffUpdateRequest,
)
from ...services import LocationService, SettingsService, SocialMediaService, StaffService
from ..deps import (
    get_location_service,
    get_settings_service,
    get_social_media_service,
    get_staff_service,
)

router = APIRouter()


# 键值设置

@router.get("/settings", response_model=List[Setting])
def list_settings(service: SettingsService = Depends(get_settings_service)):
    return service.get_all()


@router.get("/settings/{key}")
def get_setting(key: str, service: SettingsService = Depends(get_settings_service)):
    setting = service.get_or_raise(key)
    return {"key": setting.key, "value": setting.value}


@router.put("/settings/{key}", response_model=Setting)
def update_setting(
    key: str,
    req: SettingUpdateRequest,
    admin: Dict[str, Any] = Depends(require_admin),
    service: SettingsService = Depends(get_settings_service)
):
    return service.upsert(key, req.value, admin["id"])


@router.get("/site-settings", response_model=SiteSettings)
def get_site_settings(service: SettingsService = Depends(get_settings_service)):
    """类型化站点设置，缺失的键使用默认值"""
    return service.get_site_settings()


# 门店位置

@router.get("/location")
def get_location(service: LocationService = Depends(get_location_service)):
    """未配置时返回空对象"""
    location = service.get()
    return location.model_dump(by_alias=True) if location else {}


@router.put("/location")
def update_location(
    req: LocationUpdateRequest,
    admin: Dict[str, Any] = Depends(require_admin),
    service: LocationService = Depends(get_location_service)
):
    location = service.upsert(req.model_dump(exclude_unset=True), admin["id"])
    return location.model_dump(by_alias=True)


# 员工

@router.get("/staff", response_model=List[Staff])
def list_staff(service: StaffService = Depends(get_staff_service)):
    return service.list_all()


@router.get("/staff/{staff_id}", response_model=Staff)
def get_staff_member(staff_id: int, service: StaffService = Depends(get_staff_service)):
    return service.get_or_raise(staff_id)


@router.post("/staff", response_model=Staff, status_code=status.HTTP_201_CREATED)
def create_staff_member(
    req: StaffCreateRequest,
    admin: Dict[str, Any] = Depends(require_admin),
    service: StaffService = Depends(get_staff_service)
):
    return service.create(req.model_dump(), admin["id"])


@router.put("/staff/{staff_id}", response_model=Staff)
def update_staff_member(
    staff_id: int,
    req: StaffUpdateRequest,
    admin: Dict[str, Any] = Depends(require_admin),
    service: StaffService = Depends(get_staff_service)
):
    return service.update(staff_id, req.model_dump(exclude_unset=True), admin["id"])


@router.delete("/staff/{staff_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_staff_member(
    staff_id: int,
    admin: Dict[str, Any] = Depends(require_admin),
    service: StaffService = Depends(get_staff_service)
):
    service.delete(staff_id, admin["id"])
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# 社交媒体

@router.get("/social-media", response_model=List[SocialMedia])
def list_social_media(service: SocialMediaService = Depends(get_social_media_service)):
    return service.list_all()


@router.get("/social-media/{social_id}", response_model=SocialMedia)
def get_social_media(social_id: int, service: SocialMediaService = Depends(get_social_media_service)):
    return service.get_or_raise(social_id)


@router.post("/social-media", response_model=SocialMedia, status_code=status.HTTP_201_CREATED)
def create_social_media(
    req: SocialMediaCreateRequest,
    admin: Dict[str, Any] = Depends(require_admin),
    service: SocialMediaService = Depends(get_social_media_service)
):
    return service.create(req.model_dump(), admin["id"])


@router.put("/social-media/{social_id}", response_model=SocialMedia)
def update_social_media(
    social_id: int,
    req: SocialMediaUpdateRequest,
    admin: Dict[str, Any] = Depends(require_admin),
    service: SocialMediaService = Depends(get_social_media_service)
):
    return service.update(social_id, req.model_dump(exclude_unset=True), admin["id"])


@router.delete("/social-media/{social_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_social_media(
    social_id: int,
    admin: Dict[str, Any] = Depends(require_admin),
    service: SocialMediaService = Depends(get_social_media_service)
):
    service.delete(social_id, admin["id"])
    return Response(status_code=status.HTTP_204_NO_CONTENT)
