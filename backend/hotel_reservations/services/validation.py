"""
预订校验 - 纯函数式检查，无副作用、不访问数据库
"""
from typing import Optional
from datetime import date
from hotel_reservations.exceptions import ValidationError


def _client_identity(reservation) -> Optional[int]:
    client_id = getattr(reservation, "client_id", None)
    if client_id is not None:
        return client_id
    client = getattr(reservation, "client", None)
    return getattr(client, "id", None) if client is not None else None


class ReservationValidator:
    """
    预订校验器

    按固定顺序检查，遇到第一条违反的规则即抛出 ValidationError：
    开始日期、结束日期、先后顺序、不早于今天、房间号、客户。
    """

    def validate(self, reservation, today: Optional[date] = None) -> None:
        today = today or date.today()

        if reservation.start_date is None:
            raise ValidationError("The start date is required")
        if reservation.end_date is None:
            raise ValidationError("The end date is required")
        if reservation.start_date > reservation.end_date:
            raise ValidationError("The start date cannot be after the end date")
        if reservation.start_date < today:
            raise ValidationError("The start date cannot be before today")
        if reservation.room_number is None or reservation.room_number <= 0:
            raise ValidationError("The room number must be valid")
        if _client_identity(reservation) is None:
            raise ValidationError("The client is required")
