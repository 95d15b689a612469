"""
房间可用性检查

一个房间在 [start_date, end_date] 不可用，当且仅当存在同房间的 CONFIRMED 预订 R
满足 R.start_date <= end_date 且 R.end_date >= start_date（可排除一个预订 id）。
检查与随后的写入之间没有加锁。
"""
from typing import List, Optional
from datetime import date
import logging
from sqlalchemy.orm import Session
from hotel_reservations.models.ontology import Reservation
from hotel_reservations.repositories import ReservationRepository

logger = logging.getLogger(__name__)


class AvailabilityChecker:
    """可用性检查器"""

    def __init__(self, db: Session, repository: Optional[ReservationRepository] = None):
        self.repository = repository or ReservationRepository(db)

    def is_available(self, room_number: int, start_date: date, end_date: date,
                     exclude_reservation_id: Optional[int] = None) -> bool:
        count = self.repository.count_overlapping(
            room_number, start_date, end_date, exclude_reservation_id
        )
        logger.debug(
            f"Room {room_number} [{start_date}, {end_date}] "
            f"exclude={exclude_reservation_id}: {count} overlapping"
        )
        return count == 0

    def find_conflicts(self, room_number: int, start_date: date, end_date: date,
                       exclude_reservation_id: Optional[int] = None) -> List[Reservation]:
        """返回与给定区间重叠的已确认预订"""
        return self.repository.find_overlapping(
            room_number, start_date, end_date, exclude_reservation_id
        )
