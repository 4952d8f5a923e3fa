"""
预订相关的请求/响应模式
"""

from datetime import date as DateType
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from ..models.reservation import (
    MAX_GUESTS,
    MIN_GUESTS,
    TIME_SLOTS,
    ReservationStatus,
    parse_reservation_date,
)


def check_time_slot(value: str) -> str:
    if value not in TIME_SLOTS:
        raise ValueError(f"time must be one of {', '.join(TIME_SLOTS)}")
    return value


class ReservationFields(BaseModel):
    """预订表单公共字段及校验规则"""
    name: str = Field(..., min_length=3, description="姓名")
    email: EmailStr = Field(..., description="邮箱")
    phone: str = Field(..., min_length=7, description="联系电话")
    date: DateType = Field(..., description="预订日期")
    time: str = Field(..., description="时段")
    guests: int = Field(2, ge=MIN_GUESTS, le=MAX_GUESTS, description="人数")
    message: Optional[str] = Field(None, description="备注")

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, v):
        return parse_reservation_date(v)

    @field_validator("time")
    @classmethod
    def validate_time_slot(cls, v: str) -> str:
        return check_time_slot(v)


class ReservationCreateRequest(ReservationFields):
    """公开的预订创建请求；请求体中的 status 会被忽略"""


class ReservationUpdateRequest(BaseModel):
    """管理员更新请求，只合并提交的字段"""
    name: Optional[str] = Field(None, min_length=3)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=7)
    date: Optional[DateType] = None
    time: Optional[str] = None
    guests: Optional[int] = Field(None, ge=MIN_GUESTS, le=MAX_GUESTS)
    message: Optional[str] = None
    status: Optional[ReservationStatus] = None

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, v):
        if v is None:
            return v
        return parse_reservation_date(v)

    @field_validator("time")
    @classmethod
    def validate_time_slot(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return check_time_slot(v)


class NotificationResponse(BaseModel):
    """状态通知草稿：由管理员手动点击链接发送"""
    status: ReservationStatus = Field(..., description="目标状态")
    message: str = Field(..., description="通知文本")
    url: str = Field(..., description="WhatsApp 深链接")
