"""
hotel_reservations/domain/reservation.py

Reservation 领域实体
封装 ORM 模型，提供生命周期状态机与只读分类
"""
from typing import List, Optional, TYPE_CHECKING
from datetime import date
import logging

from reservation_core.engine.state_machine import StateMachine, StateMachineConfig, StateTransition
from hotel_reservations.exceptions import IllegalStateError
from hotel_reservations.models.ontology import ReservationState

if TYPE_CHECKING:
    from hotel_reservations.models.ontology import Reservation

logger = logging.getLogger(__name__)

# 状态机内部的终止伪状态：记录已被物理删除，不写入数据库
REMOVED = "REMOVED"

TRIGGER_CANCEL = "cancel"
TRIGGER_DELETE = "delete"


# ============== 状态机配置 ==============

def _create_reservation_state_machine(initial_state: str) -> StateMachine:
    """
    创建预订状态机

    只声明 CONFIRMED --cancel--> CANCELLED --delete--> REMOVED。
    COMPLETED / IN_PROGRESS 是合法状态，但没有任何转换到达或离开它们。
    """
    return StateMachine(
        config=StateMachineConfig(
            name="Reservation",
            states=[s.value for s in ReservationState] + [REMOVED],
            transitions=[
                StateTransition(
                    from_state=ReservationState.CONFIRMED.value,
                    to_state=ReservationState.CANCELLED.value,
                    trigger=TRIGGER_CANCEL,
                ),
                StateTransition(
                    from_state=ReservationState.CANCELLED.value,
                    to_state=REMOVED,
                    trigger=TRIGGER_DELETE,
                ),
            ],
            initial_state=initial_state,
        )
    )


# ============== Reservation 领域实体 ==============

class ReservationEntity:
    """
    Reservation 领域实体

    Attributes:
        _orm_model: 内部 ORM 模型实例
        _state_machine: 状态机实例
    """

    def __init__(self, orm_model: "Reservation"):
        self._orm_model = orm_model
        if orm_model.state is None:
            orm_model.state = ReservationState.CONFIRMED
        self._state_machine = _create_reservation_state_machine(ReservationState(orm_model.state).value)

    @property
    def model(self) -> "Reservation":
        return self._orm_model

    @property
    def id(self) -> Optional[int]:
        return self._orm_model.id

    @property
    def state(self) -> ReservationState:
        return ReservationState(self._orm_model.state)

    @property
    def start_date(self) -> Optional[date]:
        return self._orm_model.start_date

    @property
    def end_date(self) -> Optional[date]:
        return self._orm_model.end_date

    @property
    def room_number(self) -> Optional[int]:
        return self._orm_model.room_number

    # ============== 生命周期 ==============

    def transitions(self) -> List[str]:
        """本实例上已执行的触发动作"""
        return [s.trigger for s in self._state_machine.get_history()]

    def can_cancel(self) -> bool:
        return self._state_machine.can_fire(TRIGGER_CANCEL)

    def can_delete(self) -> bool:
        return self._state_machine.can_fire(TRIGGER_DELETE)

    def cancel(self) -> None:
        """
        取消预订：CONFIRMED -> CANCELLED

        Raises:
            IllegalStateError: 当前状态不是 CONFIRMED
        """
        if not self._state_machine.fire(TRIGGER_CANCEL):
            raise IllegalStateError("Only confirmed reservations can be canceled")
        self._orm_model.state = ReservationState.CANCELLED
        logger.info(f"Reservation {self.id} cancelled (room {self.room_number})")

    def mark_deleted(self) -> None:
        """
        删除前的状态检查：CANCELLED -> REMOVED

        Raises:
            IllegalStateError: 当前状态不是 CANCELLED
        """
        if not self._state_machine.fire(TRIGGER_DELETE):
            raise IllegalStateError("Only canceled reservations can be deleted")

    # ============== 查询方法 ==============

    def duration_days(self) -> int:
        """住宿天数，日期缺失时为 0"""
        if self.start_date and self.end_date:
            return (self.end_date - self.start_date).days
        return 0

    def is_active(self, today: Optional[date] = None) -> bool:
        """已确认且尚未开始"""
        today = today or date.today()
        return (
            self.state == ReservationState.CONFIRMED
            and self.start_date is not None
            and self.start_date > today
        )

    def is_current(self, today: Optional[date] = None) -> bool:
        """已确认且今天落在 [start_date, end_date] 内"""
        today = today or date.today()
        return (
            self.state == ReservationState.CONFIRMED
            and self.start_date is not None
            and self.end_date is not None
            and self.start_date <= today <= self.end_date
        )

    # ============== 序列化 ==============

    def to_dict(self, today: Optional[date] = None) -> dict:
        m = self._orm_model
        return {
            "id": m.id,
            "client_id": m.client_id,
            "client_name": m.client.name if m.client is not None else None,
            "start_date": m.start_date,
            "end_date": m.end_date,
            "room_number": m.room_number,
            "observations": m.observations,
            "state": self.state,
            "state_description": self.state.description,
            "duration_days": self.duration_days(),
            "is_active": self.is_active(today),
            "is_current": self.is_current(today),
            "created_at": m.created_at,
            "updated_at": m.updated_at,
        }


__all__ = [
    "REMOVED",
    "ReservationEntity",
]
