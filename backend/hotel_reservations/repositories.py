"""
仓储层 - Client / Reservation 的持久化操作
只做读写，不含业务规则；事务由服务层提交
"""
from typing import List, Optional
from datetime import date
from sqlalchemy import func
from sqlalchemy.orm import Session
from hotel_reservations.models.ontology import Client, Reservation, ReservationState


class ClientRepository:
    """Client 仓储"""

    def __init__(self, db: Session):
        self.db = db

    def save(self, client: Client) -> Client:
        """新增客户，flush 以获得 id"""
        self.db.add(client)
        self.db.flush()
        return client

    def update(self, client: Client) -> Client:
        return self.db.merge(client)

    def delete(self, client: Client) -> None:
        self.db.delete(client)

    def find_by_id(self, client_id: int) -> Optional[Client]:
        return self.db.get(Client, client_id)

    def find_by_email(self, email: str) -> Optional[Client]:
        return self.db.query(Client).filter(Client.email == email).first()

    def find_by_name(self, name: str) -> List[Client]:
        """按姓名模糊查询"""
        return self.db.query(Client).filter(
            Client.name.like(f"%{name}%")
        ).order_by(Client.name).all()

    def find_all(self) -> List[Client]:
        return self.db.query(Client).order_by(Client.name).all()

    def find_page(self, offset: int, limit: int) -> List[Client]:
        return self.db.query(Client).order_by(Client.name).offset(offset).limit(limit).all()

    def exists_by_email(self, email: str, exclude_id: Optional[int] = None) -> bool:
        """邮箱是否已被占用，可排除某个客户（更新时）"""
        query = self.db.query(func.count(Client.id)).filter(Client.email == email)
        if exclude_id is not None:
            query = query.filter(Client.id != exclude_id)
        return query.scalar() > 0

    def count(self) -> int:
        return self.db.query(func.count(Client.id)).scalar()


class ReservationRepository:
    """Reservation 仓储"""

    def __init__(self, db: Session):
        self.db = db

    def save(self, reservation: Reservation) -> Reservation:
        self.db.add(reservation)
        self.db.flush()
        return reservation

    def update(self, reservation: Reservation) -> Reservation:
        return self.db.merge(reservation)

    def delete(self, reservation: Reservation) -> None:
        self.db.delete(reservation)

    def delete_by_client(self, client_id: int) -> int:
        """删除某客户的全部预订，返回删除数量"""
        reservations = self.find_by_client(client_id)
        for r in reservations:
            self.db.delete(r)
        return len(reservations)

    def find_by_id(self, reservation_id: int) -> Optional[Reservation]:
        return self.db.get(Reservation, reservation_id)

    def find_all(self) -> List[Reservation]:
        return self.db.query(Reservation).order_by(Reservation.start_date, Reservation.id).all()

    def find_by_client(self, client_id: int) -> List[Reservation]:
        return self.db.query(Reservation).filter(
            Reservation.client_id == client_id
        ).order_by(Reservation.start_date).all()

    def find_by_client_name(self, name: str) -> List[Reservation]:
        return self.db.query(Reservation).join(Client).filter(
            Client.name.like(f"%{name}%")
        ).order_by(Reservation.start_date).all()

    def find_by_room_number(self, room_number: int) -> List[Reservation]:
        return self.db.query(Reservation).filter(
            Reservation.room_number == room_number
        ).order_by(Reservation.start_date).all()

    def find_by_date_range(self, start_date: date, end_date: date) -> List[Reservation]:
        """完全落在 [start_date, end_date] 内的预订"""
        return self.db.query(Reservation).filter(
            Reservation.start_date >= start_date,
            Reservation.end_date <= end_date,
        ).order_by(Reservation.start_date).all()

    def find_by_state(self, state: ReservationState) -> List[Reservation]:
        return self.db.query(Reservation).filter(
            Reservation.state == state
        ).order_by(Reservation.start_date).all()

    def find_active(self, today: date) -> List[Reservation]:
        """已确认且未开始"""
        return self.db.query(Reservation).filter(
            Reservation.state == ReservationState.CONFIRMED,
            Reservation.start_date > today,
        ).order_by(Reservation.start_date).all()

    def find_current(self, today: date) -> List[Reservation]:
        """已确认且进行中"""
        return self.db.query(Reservation).filter(
            Reservation.state == ReservationState.CONFIRMED,
            Reservation.start_date <= today,
            Reservation.end_date >= today,
        ).order_by(Reservation.start_date).all()

    def _overlapping_query(self, room_number: int, start_date: date, end_date: date,
                           exclude_id: Optional[int] = None):
        # 闭区间相交：端点相接也算重叠
        query = self.db.query(Reservation).filter(
            Reservation.room_number == room_number,
            Reservation.state == ReservationState.CONFIRMED,
            Reservation.start_date <= end_date,
            Reservation.end_date >= start_date,
        )
        if exclude_id is not None:
            query = query.filter(Reservation.id != exclude_id)
        return query

    def count_overlapping(self, room_number: int, start_date: date, end_date: date,
                          exclude_id: Optional[int] = None) -> int:
        return self._overlapping_query(room_number, start_date, end_date, exclude_id).count()

    def find_overlapping(self, room_number: int, start_date: date, end_date: date,
                         exclude_id: Optional[int] = None) -> List[Reservation]:
        return self._overlapping_query(
            room_number, start_date, end_date, exclude_id
        ).order_by(Reservation.start_date).all()

    def count(self) -> int:
        return self.db.query(func.count(Reservation.id)).scalar()

    def count_by_state(self, state: ReservationState) -> int:
        return self.db.query(func.count(Reservation.id)).filter(
            Reservation.state == state
        ).scalar()
