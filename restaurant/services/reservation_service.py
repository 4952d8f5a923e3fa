"""
预订服务
处理预订的创建、查询、更新和删除

业务规则：
- 公开创建的预订一律为 pending，忽略请求体中的 status
- 状态可以被管理员改成任意合法值，不校验转换路径
- 服务端从不发送通知，只提供通知草稿（见 notification_service）
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.exceptions import InvalidReservationStatusError, ReservationNotFoundError
from ..models.reservation import Reservation, ReservationStatus
from .crud_service import CrudService

logger = logging.getLogger(__name__)

RESERVATION_COLUMNS = ("name", "email", "phone", "date", "time", "guests", "message", "status")


def parse_status(value: str) -> ReservationStatus:
    """把字符串解析为预订状态，非法值抛出 InvalidReservationStatusError"""
    try:
        return ReservationStatus(value)
    except ValueError:
        allowed = ", ".join(status.value for status in ReservationStatus)
        raise InvalidReservationStatusError(
            f"Invalid status: {value}",
            details={"allowed": allowed}
        )


class ReservationService(CrudService):
    """预订服务"""

    table = "reservations"
    model = Reservation
    columns = RESERVATION_COLUMNS
    nullable_columns = ("message",)
    order_by = "created_at DESC, id DESC"
    resource_name = "Reservation"
    not_found_error = ReservationNotFoundError

    def create(self, data: Dict[str, Any], actor_id: Optional[int] = None) -> Reservation:
        """创建预订（公开接口），状态固定为 pending"""
        values = dict(data)
        values["status"] = ReservationStatus.PENDING.value
        reservation = super().create(values, actor_id)
        logger.info(
            "New reservation %s for %s on %s %s (%s guests)",
            reservation.id, reservation.name, reservation.date, reservation.time, reservation.guests
        )
        return reservation

    def list_by_status(self, status: str) -> List[Reservation]:
        target = parse_status(status)
        rows = self.db.execute_query(
            f"SELECT * FROM reservations WHERE status = ? ORDER BY {self.order_by}",
            [target.value]
        )
        return [Reservation.model_validate(row) for row in rows]

    def update(self, resource_id: int, data: Dict[str, Any],
               actor_id: Optional[int] = None) -> Reservation:
        """部分更新；status 接受任意合法值"""
        values = dict(data)
        if values.get("status") is not None:
            values["status"] = parse_status(getattr(values["status"], "value", values["status"])).value
        previous = self.get_or_raise(resource_id)
        reservation = super().update(resource_id, values, actor_id)
        if previous.status != reservation.status:
            logger.info(
                "Reservation %s status %s -> %s",
                resource_id, previous.status, reservation.status
            )
        return reservation

    def update_status(self, resource_id: int, status: str,
                      actor_id: Optional[int] = None) -> Reservation:
        return self.update(resource_id, {"status": status}, actor_id)
