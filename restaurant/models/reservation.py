"""
预订相关数据模型
"""

from datetime import date as DateType, datetime
from enum import Enum
from typing import Any, Optional

from pydantic import Field, field_validator

from .base import BaseEntity


class ReservationStatus(str, Enum):
    """预订状态枚举

    状态之间不做转换约束：管理员可以把任意状态改为任意状态，
    以便纠正误操作。约定流程为 pending → confirmed → in-progress → completed，
    或任意阶段 → cancelled。
    """
    PENDING = "pending"            # 待确认（创建时的初始状态）
    CONFIRMED = "confirmed"        # 已确认
    IN_PROGRESS = "in-progress"    # 用餐中
    COMPLETED = "completed"        # 已完成
    CANCELLED = "cancelled"        # 已取消


# 午市与晚市的半小时时段
LUNCH_SLOTS = ("12:00", "12:30", "13:00", "13:30", "14:00", "14:30")
DINNER_SLOTS = ("19:00", "19:30", "20:00", "20:30", "21:00", "21:30", "22:00")
TIME_SLOTS = LUNCH_SLOTS + DINNER_SLOTS

MIN_GUESTS = 1
MAX_GUESTS = 20

LEGACY_DATE_FORMAT = "%d/%m/%Y"


def parse_reservation_date(value: Any) -> DateType:
    """把客户端提交的日期规范化为 date

    规范格式为 ISO-8601（YYYY-MM-DD 或完整时间戳），
    旧版客户端发送的 dd/mm/yyyy 仍然兼容。
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, DateType):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError("date is required")

    text = value.strip()
    if "/" in text:
        try:
            return datetime.strptime(text, LEGACY_DATE_FORMAT).date()
        except ValueError:
            raise ValueError(f"invalid date: {text}")

    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise ValueError(f"invalid date: {text}")


class Reservation(BaseEntity):
    """预订完整模型"""
    name: str
    email: str
    phone: str
    date: DateType
    time: str
    guests: int
    message: Optional[str] = None
    status: ReservationStatus = ReservationStatus.PENDING
    created_at: Optional[datetime] = Field(None)

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, v):
        return parse_reservation_date(v)

    @property
    def guests_label(self) -> str:
        return "persona" if self.guests == 1 else "personas"
