"""
领域层 - 带状态机的领域实体
"""
from hotel_reservations.domain.reservation import REMOVED, ReservationEntity

__all__ = ["REMOVED", "ReservationEntity"]
