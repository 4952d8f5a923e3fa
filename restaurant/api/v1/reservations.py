"""
预订路由模块
创建公开；查询、更新、删除和通知草稿需要管理员
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ...config.settings import settings
from ...core.exceptions import BusinessRuleError
from ...core.security import require_admin
from ...models.reservation import Reservation
from ...schemas.reservation import (
    NotificationResponse,
    ReservationCreateRequest,
    ReservationUpdateRequest,
)
from ...services import NotificationComposer, ReservationService, SettingsService
from ...services.reservation_service import parse_status
from ..deps import get_reservation_service, get_settings_service

router = APIRouter()


@router.post("/reservations", response_model=Reservation, status_code=status.HTTP_201_CREATED)
def create_reservation(
    req: ReservationCreateRequest,
    service: ReservationService = Depends(get_reservation_service)
):
    """提交预订（无需登录），状态固定为 pending"""
    return service.create(req.model_dump())


@router.get("/reservations", response_model=List[Reservation])
def list_reservations(
    admin: Dict[str, Any] = Depends(require_admin),
    service: ReservationService = Depends(get_reservation_service)
):
    return service.list_all()


@router.get("/reservations/status/{reservation_status}", response_model=List[Reservation])
def list_reservations_by_status(
    reservation_status: str,
    admin: Dict[str, Any] = Depends(require_admin),
    service: ReservationService = Depends(get_reservation_service)
):
    return service.list_by_status(reservation_status)


@router.get("/reservations/{reservation_id}", response_model=Reservation)
def get_reservation(
    reservation_id: int,
    admin: Dict[str, Any] = Depends(require_admin),
    service: ReservationService = Depends(get_reservation_service)
):
    return service.get_or_raise(reservation_id)


@router.put("/reservations/{reservation_id}", response_model=Reservation)
def update_reservation(
    reservation_id: int,
    req: ReservationUpdateRequest,
    admin: Dict[str, Any] = Depends(require_admin),
    service: ReservationService = Depends(get_reservation_service)
):
    """部分更新，包括状态；不会自动通知顾客"""
    return service.update(reservation_id, req.model_dump(exclude_unset=True), admin["id"])


@router.delete("/reservations/{reservation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_reservation(
    reservation_id: int,
    admin: Dict[str, Any] = Depends(require_admin),
    service: ReservationService = Depends(get_reservation_service)
):
    service.delete(reservation_id, admin["id"])
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/reservations/{reservation_id}/notification", response_model=NotificationResponse)
def compose_notification(
    reservation_id: int,
    target_status: Optional[str] = Query(None, alias="status"),
    admin: Dict[str, Any] = Depends(require_admin),
    service: ReservationService = Depends(get_reservation_service),
    site: SettingsService = Depends(get_settings_service)
):
    """
    生成发给顾客的通知草稿

    Args:
        target_status: 目标状态；缺省时生成完整的预订确认消息

    Returns:
        NotificationResponse: 文本和 wa.me 链接，由管理员手动打开发送
    """
    reservation = service.get_or_raise(reservation_id)
    composer = NotificationComposer(site.get_site_settings().restaurant_name)

    if target_status is None:
        return NotificationResponse(
            status=reservation.status,
            message=composer.confirmation_message(reservation),
            url=composer.confirmation_link(reservation, settings.whatsapp_country_code),
        )

    target = parse_status(target_status)
    message = composer.status_message(reservation, target)
    if not message:
        raise BusinessRuleError(f"No notification template for status: {target.value}")
    return NotificationResponse(
        status=target,
        message=message,
        url=composer.status_link(reservation, target, settings.whatsapp_country_code),
    )
