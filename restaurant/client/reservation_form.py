"""
预订表单
提交前在客户端完成校验：字段规则与服务端一致，另外限制可选日期范围，
可选地按本地手机号规则校验电话。
"""

import calendar
import logging
import re
import time
from datetime import date as DateType
from typing import Any, Callable, Dict, Optional, Tuple

from pydantic import ValidationError, ValidationInfo, field_validator

from ..config.settings import settings
from ..schemas.reservation import ReservationFields
from .api_client import ApiClient, ApiError

logger = logging.getLogger(__name__)

SELECTABLE_MONTHS = 3

DEFAULT_VALUES: Dict[str, Any] = {
    "name": "",
    "email": "",
    "phone": "",
    "date": None,
    "time": "",
    "guests": 2,
    "message": "",
}


class ReservationValidationError(Exception):
    """表单校验失败，errors 为 字段 -> 错误信息"""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("; ".join(f"{field}: {msg}" for field, msg in errors.items()))
        self.errors = errors


class PhonePolicy:
    """电话号码附加规则"""

    def __init__(self, pattern: str, message: str):
        self.pattern = re.compile(pattern)
        self.message = message

    def check(self, phone: str) -> bool:
        return bool(self.pattern.match(phone))


# 委内瑞拉手机号：04XXXXXXXXX、4XXXXXXXXX 或 04XX-XXXXXXX
VENEZUELAN_MOBILE = PhonePolicy(
    r"^(0?4[0-9]{9}|0?4[0-9]{2}-[0-9]{7})$",
    "Ingrese un número de teléfono válido (ej. 0412-1234567)",
)


def add_months(value: DateType, months: int) -> DateType:
    """按月偏移，月末日期取目标月的最后一天"""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def selectable_date_range(today: Optional[DateType] = None) -> Tuple[DateType, DateType]:
    """可选择的日期区间：今天到三个月后（含两端）"""
    today = today or DateType.today()
    return today, add_months(today, SELECTABLE_MONTHS)


def is_selectable_date(value: DateType, today: Optional[DateType] = None) -> bool:
    start, end = selectable_date_range(today)
    return start <= value <= end


class ReservationForm(ReservationFields):
    """
    客户端预订表单

    校验上下文（model_validate 的 context）支持：
        phone_policy: PhonePolicy，附加电话规则
        today: date，启用可选日期范围检查
    """

    @field_validator("phone")
    @classmethod
    def validate_phone_policy(cls, v: str, info: ValidationInfo) -> str:
        policy = (info.context or {}).get("phone_policy")
        if policy is not None and not policy.check(v):
            raise ValueError(policy.message)
        return v

    @field_validator("date")
    @classmethod
    def validate_selectable(cls, v: DateType, info: ValidationInfo) -> DateType:
        today = (info.context or {}).get("today")
        if today is not None and not is_selectable_date(v, today):
            start, end = selectable_date_range(today)
            raise ValueError(f"date must be between {start.isoformat()} and {end.isoformat()}")
        return v

    def to_payload(self) -> Dict[str, Any]:
        """请求体，日期为 ISO-8601"""
        payload = self.model_dump(mode="json")
        if not payload.get("message"):
            payload.pop("message", None)
        return payload


def validate_reservation(values: Dict[str, Any], phone_policy: Optional[PhonePolicy] = None,
                         today: Optional[DateType] = None) -> ReservationForm:
    """
    校验表单

    Raises:
        ReservationValidationError: 每个字段只保留第一条错误
    """
    try:
        return ReservationForm.model_validate(
            values, context={"phone_policy": phone_policy, "today": today}
        )
    except ValidationError as e:
        errors: Dict[str, str] = {}
        for error in e.errors():
            field = str(error["loc"][0]) if error["loc"] else "__root__"
            errors.setdefault(field, error["msg"])
        raise ReservationValidationError(errors)


class ReservationFormController:
    """
    预订表单状态

    提交成功后进入 success 状态，持续 success_display_seconds 秒，
    之后调用 refresh() 会重置表单；提交失败保留已填写的内容。
    """

    def __init__(self, api: ApiClient, phone_policy: Optional[PhonePolicy] = None,
                 success_display_seconds: Optional[float] = None,
                 clock: Callable[[], float] = time.monotonic,
                 today_provider: Callable[[], DateType] = DateType.today):
        self.api = api
        self.phone_policy = phone_policy
        self.success_display_seconds = (
            settings.reservation_success_display_seconds
            if success_display_seconds is None else success_display_seconds
        )
        self.clock = clock
        self.today_provider = today_provider
        self.reset()

    def reset(self) -> None:
        self.values: Dict[str, Any] = dict(DEFAULT_VALUES)
        self.errors: Dict[str, str] = {}
        self.server_error: Optional[str] = None
        self.submitting = False
        self.success = False
        self.last_reservation: Optional[Dict[str, Any]] = None
        self._success_at: Optional[float] = None

    def set_value(self, field: str, value: Any) -> None:
        self.values[field] = value
        self.errors.pop(field, None)

    def submit(self, values: Optional[Dict[str, Any]] = None) -> bool:
        """校验并提交；校验失败时不发送请求"""
        if values:
            self.values.update(values)
        self.server_error = None

        try:
            form = validate_reservation(self.values, self.phone_policy, self.today_provider())
        except ReservationValidationError as e:
            self.errors = e.errors
            return False
        self.errors = {}

        self.submitting = True
        try:
            self.last_reservation = self.api.create_reservation(form.to_payload())
        except ApiError as e:
            logger.warning("Reservation submit failed: %s", e.message)
            self.server_error = e.message
            return False
        finally:
            self.submitting = False

        self.success = True
        self._success_at = self.clock()
        return True

    def refresh(self, now: Optional[float] = None) -> None:
        """成功提示到期后重置表单"""
        if not self.success or self._success_at is None:
            return
        now = self.clock() if now is None else now
        if now - self._success_at >= self.success_display_seconds:
            self.reset()
