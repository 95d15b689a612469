"""
reservation_core/engine/state_machine.py

状态机引擎 - 声明式状态与转换，记录转换历史
"""
from typing import Dict, List, Optional
from dataclasses import dataclass, field
import logging
import time

logger = logging.getLogger(__name__)


@dataclass
class StateTransition:
    """
    状态转换定义

    Attributes:
        from_state: 源状态
        to_state: 目标状态
        trigger: 触发动作
    """

    from_state: str
    to_state: str
    trigger: str


@dataclass
class StateMachineConfig:
    """
    状态机配置

    Attributes:
        name: 状态机名称（通常是实体类型）
        states: 所有合法状态
        transitions: 允许的转换
        initial_state: 初始状态
    """

    name: str
    states: List[str]
    transitions: List[StateTransition]
    initial_state: str

    def __post_init__(self):
        if self.initial_state not in self.states:
            raise ValueError(f"Unknown initial state '{self.initial_state}' for {self.name}")
        for t in self.transitions:
            if t.from_state not in self.states or t.to_state not in self.states:
                raise ValueError(
                    f"Transition '{t.trigger}' of {self.name} references an undeclared state"
                )


@dataclass
class StateMachineSnapshot:
    """一次已执行转换的记录"""

    previous_state: str
    current_state: str
    trigger: str
    timestamp: float = field(default_factory=time.time)


class StateMachine:
    """
    状态机

    所有未声明的 (状态, 触发) 组合都被视为非法。

    Example:
        >>> machine = StateMachine(
        ...     config=StateMachineConfig(
        ...         name="Reservation",
        ...         states=["CONFIRMED", "CANCELLED"],
        ...         transitions=[StateTransition("CONFIRMED", "CANCELLED", "cancel")],
        ...         initial_state="CONFIRMED",
        ...     )
        ... )
        >>> machine.fire("cancel")
        True
    """

    def __init__(self, config: StateMachineConfig):
        self._config = config
        self._current_state = config.initial_state
        self._history: List[StateMachineSnapshot] = []
        # from_state -> trigger -> transition
        self._transition_map: Dict[str, Dict[str, StateTransition]] = {}
        for t in config.transitions:
            self._transition_map.setdefault(t.from_state, {})[t.trigger] = t

    @property
    def current_state(self) -> str:
        return self._current_state

    @property
    def config(self) -> StateMachineConfig:
        return self._config

    def _find(self, trigger: str) -> Optional[StateTransition]:
        return self._transition_map.get(self._current_state, {}).get(trigger)

    def can_fire(self, trigger: str) -> bool:
        """检查触发动作在当前状态下是否合法"""
        return self._find(trigger) is not None

    def fire(self, trigger: str) -> bool:
        """
        执行触发动作

        Returns:
            True 如果转换成功；非法转换返回 False 且状态不变
        """
        transition = self._find(trigger)
        if transition is None:
            logger.warning(
                f"{self._config.name}: invalid trigger '{trigger}' in state {self._current_state}"
            )
            return False

        previous_state = self._current_state
        self._current_state = transition.to_state
        self._history.append(StateMachineSnapshot(
            previous_state=previous_state,
            current_state=transition.to_state,
            trigger=trigger,
        ))
        logger.info(
            f"{self._config.name}: {previous_state} -> {transition.to_state} (trigger: {trigger})"
        )
        return True

    def get_history(self) -> List[StateMachineSnapshot]:
        """获取转换历史"""
        return list(self._history)


__all__ = [
    "StateTransition",
    "StateMachineConfig",
    "StateMachineSnapshot",
    "StateMachine",
]
