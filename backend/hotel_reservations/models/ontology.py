"""
本体对象定义 (Ontology Objects)
Client 与 Reservation 两个持久化实体
"""
from datetime import datetime
from enum import Enum
from sqlalchemy import (
    Column, Integer, String, DateTime, Date, ForeignKey, Text, Index,
    Enum as SQLEnum
)
from sqlalchemy.orm import relationship
from hotel_reservations.database import Base


# ============== 枚举定义 ==============

class ReservationState(str, Enum):
    """预订状态枚举（按名称存储）"""
    CONFIRMED = "CONFIRMED"      # 已确认
    CANCELLED = "CANCELLED"      # 客人取消
    COMPLETED = "COMPLETED"      # 已退房（未被任何转换使用）
    IN_PROGRESS = "IN_PROGRESS"  # 入住中（未被任何转换使用）

    @property
    def description(self) -> str:
        return _STATE_DESCRIPTIONS[self]


_STATE_DESCRIPTIONS = {
    ReservationState.CONFIRMED: "Confirmed",
    ReservationState.CANCELLED: "Cancelled",
    ReservationState.COMPLETED: "Completed",
    ReservationState.IN_PROGRESS: "In Progress",
}


# ============== 标识相等 ==============

class IdentityMixin:
    """
    基于已分配 id 的相等性

    两个实体相等当且仅当类型相同且 id 均已赋值并相等；
    未持久化的实体只与自身相等。hash 不依赖 id，赋值前后保持不变。
    """

    def __eq__(self, other):
        if self is other:
            return True
        if other is None or type(self) is not type(other):
            return False
        return self.id is not None and self.id == other.id

    def __hash__(self):
        return hash(type(self))


# ============== 本体对象定义 ==============

class Client(IdentityMixin, Base):
    """
    客户对象
    reservations 为只读集合，删除客户时由 ClientService 显式删除其预订
    """
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)                   # 姓名
    email = Column(String(150), nullable=False, unique=True, index=True)  # 邮箱（全局唯一）
    phone = Column(String(20), nullable=False)                   # 电话
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 链接：只读，不做级联
    reservations = relationship(
        "Reservation",
        viewonly=True,
        order_by="Reservation.start_date",
    )

    def __repr__(self):
        return f"Client(id={self.id}, name={self.name!r}, email={self.email!r}, phone={self.phone!r})"


class Reservation(IdentityMixin, Base):
    """
    预订对象
    client 为反向引用，由 ReservationService 维护
    """
    __tablename__ = "reservations"

    id = Column(Integer, primary_key=True, index=True)
    start_date = Column(Date, nullable=False)            # 入住日期
    end_date = Column(Date, nullable=False)              # 离店日期
    room_number = Column(Integer, nullable=False, index=True)  # 房间号
    observations = Column(Text)                          # 备注（最多 500 字）
    state = Column(
        SQLEnum(ReservationState, native_enum=False, length=20),
        nullable=False,
        default=ReservationState.CONFIRMED,
        index=True,
    )
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 链接
    client = relationship("Client")

    __table_args__ = (
        Index("idx_reservations_dates", "start_date", "end_date"),
    )

    def __repr__(self):
        client_name = self.client.name if self.client is not None else None
        return (
            f"Reservation(id={self.id}, start_date={self.start_date}, end_date={self.end_date}, "
            f"room_number={self.room_number}, state={self.state}, client={client_name!r})"
        )
