"""
格式化工具
价格、电话号码、日期以及 WhatsApp 深链接的构造，
购物车结账和预订通知共用
"""

import re
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Union
from urllib.parse import quote

from ..config.settings import settings

_NON_DIGITS = re.compile(r"\D")

SPANISH_MONTHS = (
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
)


def format_price(value: Union[int, float, Decimal], currency_symbol: str = "$") -> str:
    """格式化金额，例如 1234.5 -> "$1,234.50" """
    amount = Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency_symbol}{abs(amount):,.2f}"


def normalize_phone(phone: str, country_code: str = None) -> str:
    """只保留数字，缺少国家代码时补上；空号码返回空串"""
    code = settings.whatsapp_country_code if country_code is None else country_code
    digits = _NON_DIGITS.sub("", phone or "")
    if not digits:
        return ""
    # 本地号码常带前导 0（如 0412...），拼接国家代码前去掉
    if code and not digits.startswith(code):
        digits = code + digits.lstrip("0")
    return digits


def build_whatsapp_url(phone: str, message: str, country_code: str = None,
                       base_url: str = None) -> str:
    """构造 https://wa.me/<digits>?text=<encoded> 深链接"""
    digits = normalize_phone(phone, country_code)
    if not digits:
        raise ValueError("destination phone number is empty")
    base = (base_url or settings.whatsapp_base_url).rstrip("/")
    return f"{base}/{digits}?text={quote(message, safe='')}"


def format_long_date(value: date) -> str:
    """西语长日期，例如 date(2025, 5, 1) -> "1 de mayo" """
    return f"{value.day} de {SPANISH_MONTHS[value.month - 1]}"


def slugify(text: str) -> str:
    """生成 URL 友好的 slug"""
    slug = text.strip().lower()
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"[^\w-]+", "", slug)
    slug = re.sub(r"--+", "-", slug)
    return slug
