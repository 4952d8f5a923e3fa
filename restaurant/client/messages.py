"""
结账消息构造
纯函数：把购物车内容排版成发送给餐厅的 WhatsApp 文本
"""

from typing import TYPE_CHECKING, Optional, Sequence, Union

from pydantic import BaseModel, Field

from ..utils.formatting import build_whatsapp_url, format_price, normalize_phone

if TYPE_CHECKING:
    from .cart import CartItem

ORDER_GREETING = "Hola, quiero hacer un pedido:"
DELIVERY_HEADER = "Entrega a domicilio:"
DELIVERY_CHARGE_NOTE = "El servicio de delivery tiene un costo adicional."
PICKUP_NOTE = "Retiro en el local."

__all__ = [
    "DeliveryDetails",
    "build_order_message",
    "build_whatsapp_url",
    "format_line",
    "format_price",
    "normalize_phone",
]


class DeliveryDetails(BaseModel):
    """配送选项；delivery 为 False 时表示到店自取"""
    delivery: bool = Field(False, description="是否配送")
    address: Optional[str] = Field(None, description="地址及补充说明")


def format_line(item: "CartItem") -> str:
    """单行："{数量}x {名称} - {小计}" """
    subtotal = item.menu_item.price * item.quantity
    return f"{item.quantity}x {item.menu_item.name} - {format_price(subtotal)}"


def build_order_message(items: Sequence["CartItem"], total_price: Union[int, float],
                        delivery: Optional[DeliveryDetails] = None) -> str:
    """
    生成订单文本

    Args:
        items: 购物车条目
        total_price: 总价，配送费不计入
        delivery: 配送选项；None 时不附加配送/自取说明
    """
    lines = [ORDER_GREETING, ""]
    lines.extend(format_line(item) for item in items)
    lines.append("")
    lines.append(f"Total: {format_price(total_price)}")

    if delivery is not None:
        lines.append("")
        if delivery.delivery:
            lines.append(DELIVERY_HEADER)
            if delivery.address and delivery.address.strip():
                lines.append(delivery.address.strip())
            lines.append(DELIVERY_CHARGE_NOTE)
        else:
            lines.append(PICKUP_NOTE)

    return "\n".join(lines)
