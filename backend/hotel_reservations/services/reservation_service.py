"""
预订服务 - 生命周期控制
创建 / 更新 / 取消 / 删除预订，以及各类查询
"""
from typing import List, Optional, Dict
from datetime import date
import logging
from sqlalchemy.orm import Session
from hotel_reservations.domain.reservation import ReservationEntity
from hotel_reservations.exceptions import NotFoundError, ConflictError
from hotel_reservations.models.ontology import Client, Reservation, ReservationState
from hotel_reservations.models.schemas import ReservationCreate, ReservationUpdate
from hotel_reservations.repositories import ClientRepository, ReservationRepository
from hotel_reservations.services.availability import AvailabilityChecker
from hotel_reservations.services.validation import ReservationValidator

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = ("client_id", "start_date", "end_date", "room_number", "observations")


class ReservationService:
    """预订服务"""

    def __init__(self, db: Session):
        self.db = db
        self.reservations = ReservationRepository(db)
        self.clients = ClientRepository(db)
        self.validator = ReservationValidator()
        self.availability = AvailabilityChecker(db, self.reservations)

    # ============== 内部辅助 ==============

    def _require(self, reservation_id: int) -> Reservation:
        reservation = self.reservations.find_by_id(reservation_id)
        if reservation is None:
            raise NotFoundError(f"Reservation not found with ID: {reservation_id}")
        return reservation

    def _resolve_client(self, client_id: int) -> Client:
        client = self.clients.find_by_id(client_id)
        if client is None:
            raise NotFoundError("Client not found")
        return client

    def _ensure_available(self, candidate: Reservation, exclude_id: Optional[int] = None) -> None:
        if not self.availability.is_available(
            candidate.room_number, candidate.start_date, candidate.end_date, exclude_id
        ):
            logger.warning(
                f"Room {candidate.room_number} unavailable for "
                f"{candidate.start_date}..{candidate.end_date} (exclude={exclude_id})"
            )
            raise ConflictError(
                f"The room {candidate.room_number} is not available in the selected dates"
            )

    # ============== 生命周期 ==============

    def create_reservation(self, data: ReservationCreate) -> Reservation:
        """
        创建预订

        顺序：校验 -> 解析客户 -> 可用性检查 -> 默认状态 -> 持久化
        """
        candidate = Reservation(**data.model_dump())
        self.validator.validate(candidate)

        client = self._resolve_client(candidate.client_id)
        self._ensure_available(candidate)

        candidate.client = client
        if candidate.state is None:
            candidate.state = ReservationState.CONFIRMED

        reservation = self.reservations.save(candidate)
        self.db.commit()
        self.db.refresh(reservation)
        logger.info(
            f"Reservation {reservation.id} created: room {reservation.room_number} "
            f"{reservation.start_date}..{reservation.end_date} for client {client.id}"
        )
        return reservation

    def update_reservation(self, reservation_id: int, data: ReservationUpdate) -> Reservation:
        """
        更新预订

        在未修改持久化对象的候选副本上校验，检查可用性时排除自身。
        """
        reservation = self._require(reservation_id)

        values = {field: getattr(reservation, field) for field in _EDITABLE_FIELDS}
        values.update(data.model_dump(exclude_unset=True))
        candidate = Reservation(**values)

        self.validator.validate(candidate)
        self._ensure_available(candidate, exclude_id=reservation.id)
        client = self._resolve_client(candidate.client_id)

        for field in _EDITABLE_FIELDS:
            setattr(reservation, field, values[field])
        reservation.client = client

        reservation = self.reservations.update(reservation)
        self.db.commit()
        self.db.refresh(reservation)
        logger.info(f"Reservation {reservation.id} updated")
        return reservation

    def cancel_reservation(self, reservation_id: int) -> Reservation:
        """取消预订（仅 CONFIRMED）"""
        reservation = self._require(reservation_id)
        ReservationEntity(reservation).cancel()

        self.reservations.update(reservation)
        self.db.commit()
        self.db.refresh(reservation)
        return reservation

    def delete_reservation(self, reservation_id: int) -> None:
        """删除预订（仅 CANCELLED）"""
        reservation = self._require(reservation_id)
        entity = ReservationEntity(reservation)
        entity.mark_deleted()

        self.reservations.delete(reservation)
        self.db.commit()
        logger.info(f"Reservation {reservation_id} deleted ({', '.join(entity.transitions())})")

    # ============== 查询 ==============

    def get_reservation(self, reservation_id: int) -> Optional[Reservation]:
        return self.reservations.find_by_id(reservation_id)

    def get_reservations(self) -> List[Reservation]:
        """全部预订，按入住日期排序"""
        return self.reservations.find_all()

    def find_by_client(self, client_id: int) -> List[Reservation]:
        return self.reservations.find_by_client(client_id)

    def find_by_room_number(self, room_number: int) -> List[Reservation]:
        return self.reservations.find_by_room_number(room_number)

    def find_by_date_range(self, start_date: date, end_date: date) -> List[Reservation]:
        return self.reservations.find_by_date_range(start_date, end_date)

    def find_by_state(self, state: ReservationState) -> List[Reservation]:
        return self.reservations.find_by_state(state)

    def find_active_reservations(self, today: Optional[date] = None) -> List[Reservation]:
        return self.reservations.find_active(today or date.today())

    def find_current_reservations(self, today: Optional[date] = None) -> List[Reservation]:
        return self.reservations.find_current(today or date.today())

    def search_reservations(self, term: Optional[str]) -> List[Reservation]:
        """数字按房间号查找，否则按客户姓名模糊查找；空关键字返回全部"""
        if term is None or not term.strip():
            return self.get_reservations()
        term = term.strip()
        if term.isdigit():
            return self.find_by_room_number(int(term))
        return self.reservations.find_by_client_name(term)

    def is_room_available(self, room_number: int, start_date: date, end_date: date,
                          exclude_reservation_id: Optional[int] = None) -> bool:
        return self.availability.is_available(
            room_number, start_date, end_date, exclude_reservation_id
        )

    def find_conflicts(self, room_number: int, start_date: date, end_date: date,
                       exclude_reservation_id: Optional[int] = None) -> List[Reservation]:
        return self.availability.find_conflicts(
            room_number, start_date, end_date, exclude_reservation_id
        )

    def count(self) -> int:
        return self.reservations.count()

    def count_by_state(self, state: ReservationState) -> int:
        return self.reservations.count_by_state(state)

    def get_stats(self) -> Dict:
        """总数与各状态数量"""
        return {
            "total": self.count(),
            "by_state": {s.value: self.count_by_state(s) for s in ReservationState},
        }

    def is_active(self, reservation: Reservation, today: Optional[date] = None) -> bool:
        return ReservationEntity(reservation).is_active(today)

    def is_current(self, reservation: Reservation, today: Optional[date] = None) -> bool:
        return ReservationEntity(reservation).is_current(today)

    def get_reservation_detail(self, reservation_id: int) -> Optional[dict]:
        """获取预订详情（包含客户姓名与派生分类）"""
        reservation = self.get_reservation(reservation_id)
        if not reservation:
            return None
        return ReservationEntity(reservation).to_dict()

    def to_detail(self, reservation: Reservation) -> dict:
        return ReservationEntity(reservation).to_dict()
