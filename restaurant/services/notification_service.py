"""
预订通知草稿
按目标状态生成发给顾客的 WhatsApp 文本和深链接。
服务端只负责"撰写"，由管理员在后台点击链接手动发送。
"""

from typing import Optional

from ..models.reservation import Reservation, ReservationStatus
from ..models.site import DEFAULT_RESTAURANT_NAME
from ..utils.formatting import build_whatsapp_url, format_long_date


class NotificationComposer:
    """预订通知撰写器"""

    def __init__(self, restaurant_name: str = DEFAULT_RESTAURANT_NAME):
        self.restaurant_name = restaurant_name

    def confirmation_message(self, reservation: Reservation) -> str:
        """预订列表中"确认"快捷按钮使用的完整确认消息"""
        return (
            f"Hola {reservation.name}, ¡tu reserva en {self.restaurant_name} ha sido confirmada! "
            f"Te esperamos el {format_long_date(reservation.date)} a las {reservation.time} "
            f"para {reservation.guests} {reservation.guests_label}. "
            "Cualquier cambio, por favor avísanos con anticipación. ¡Gracias!"
        )

    def status_message(self, reservation: Reservation, status: ReservationStatus) -> str:
        """状态变更消息；pending 没有对应模板，返回空串"""
        status = ReservationStatus(status)
        name = reservation.name
        when = f"{format_long_date(reservation.date)} a las {reservation.time}"

        if status == ReservationStatus.CONFIRMED:
            return (
                f"Hola {name}, ¡tu reserva en {self.restaurant_name} ha sido confirmada! "
                f"Te esperamos el {when}."
            )
        if status == ReservationStatus.IN_PROGRESS:
            return (
                f"Hola {name}, ¡esperamos estés disfrutando tu experiencia en {self.restaurant_name}! "
                "Si necesitas algo adicional, no dudes en pedirlo a nuestro personal."
            )
        if status == ReservationStatus.COMPLETED:
            return (
                f"Hola {name}, ¡gracias por visitarnos en {self.restaurant_name}! "
                "Esperamos que hayas disfrutado tu experiencia. "
                "Nos encantaría recibir tus comentarios y verte nuevamente pronto."
            )
        if status == ReservationStatus.CANCELLED:
            return (
                f"Hola {name}, lamentamos informarte que tu reserva en {self.restaurant_name} "
                f"para el {when} ha sido cancelada. "
                "Para más información o para reprogramar, por favor contáctanos."
            )
        return ""

    def status_link(self, reservation: Reservation, status: ReservationStatus,
                    country_code: Optional[str] = None) -> Optional[str]:
        """顾客号码的深链接；无模板时返回 None"""
        message = self.status_message(reservation, status)
        if not message:
            return None
        return build_whatsapp_url(reservation.phone, message, country_code)

    def confirmation_link(self, reservation: Reservation,
                          country_code: Optional[str] = None) -> str:
        return build_whatsapp_url(reservation.phone, self.confirmation_message(reservation), country_code)
