"""
结账消息与格式化工具测试
"""

from datetime import date

import pytest

from restaurant.client.cart import CartItem, MenuItemSnapshot
from restaurant.client.messages import DeliveryDetails, build_order_message
from restaurant.utils.formatting import (
    build_whatsapp_url,
    format_long_date,
    format_price,
    normalize_phone,
    slugify,
)


def line(menu_id, name, price, quantity):
    return CartItem(
        id=f"line-{menu_id}",
        menu_item=MenuItemSnapshot(id=menu_id, name=name, price=price),
        quantity=quantity,
    )


ITEMS = [line(1, "Hamburguesa", 8.5, 2), line(2, "Refresco", 1.25, 3)]


class TestFormatPrice:

    @pytest.mark.parametrize("value,expected", [
        (0, "$0.00"),
        (5, "$5.00"),
        (1234.5, "$1,234.50"),
        (0.125, "$0.13"),
        (-3.2, "-$3.20"),
    ])
    def test_format_price(self, value, expected):
        assert format_price(value) == expected


class TestOrderMessage:

    def test_itemized_message(self):
        message = build_order_message(ITEMS, 20.75)

        assert message == (
            "Hola, quiero hacer un pedido:\n\n"
            "2x Hamburguesa - $17.00\n"
            "3x Refresco - $3.75\n\n"
            "Total: $20.75"
        )

    def test_delivery_section(self):
        message = build_order_message(
            ITEMS, 20.75, DeliveryDetails(delivery=True, address="  Urb. El Paraíso, torre B  ")
        )

        assert message.endswith(
            "Total: $20.75\n\n"
            "Entrega a domicilio:\n"
            "Urb. El Paraíso, torre B\n"
            "El servicio de delivery tiene un costo adicional."
        )

    def test_delivery_does_not_change_total(self):
        message = build_order_message(ITEMS, 20.75, DeliveryDetails(delivery=True, address="x"))
        assert "Total: $20.75" in message

    def test_pickup_section(self):
        message = build_order_message(ITEMS, 20.75, DeliveryDetails(delivery=False))
        assert message.endswith("Total: $20.75\n\nRetiro en el local.")

    def test_empty_cart(self):
        assert build_order_message([], 0) == "Hola, quiero hacer un pedido:\n\n\nTotal: $0.00"


class TestPhoneAndLinks:

    @pytest.mark.parametrize("raw,expected", [
        ("+58 412-123-4567", "584121234567"),
        ("0412-1234567", "584121234567"),
        ("4121234567", "584121234567"),
        ("(58) 412 1234567", "584121234567"),
        ("", ""),
        ("---", ""),
    ])
    def test_normalize_phone(self, raw, expected):
        assert normalize_phone(raw, "58") == expected

    def test_normalize_phone_without_country_code(self):
        assert normalize_phone("0412-1234567", "") == "04121234567"

    def test_whatsapp_url_is_percent_encoded(self):
        url = build_whatsapp_url("0412-1234567", "Hola & adiós\nTotal: $5.00", country_code="58")

        assert url == (
            "https://wa.me/584121234567?text="
            "Hola%20%26%20adi%C3%B3s%0ATotal%3A%20%245.00"
        )

    def test_whatsapp_url_requires_phone(self):
        with pytest.raises(ValueError):
            build_whatsapp_url("", "Hola")


class TestTextHelpers:

    def test_format_long_date(self):
        assert format_long_date(date(2030, 5, 1)) == "1 de mayo"
        assert format_long_date(date(2030, 12, 24)) == "24 de diciembre"

    def test_slugify(self):
        assert slugify("  Platos Principales ") == "platos-principales"
        assert slugify("Café & Té") == "café-té"
