"""
基座类型定义

定义基座状态枚举和不可变的基座数据结构。
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple

from ..deck.card import Card

__all__ = ['SlotState', 'Slot', 'ALLOWED_SLOT_TRANSITIONS']


class SlotState(Enum):
    """基座状态枚举"""
    EMPTY = auto()
    OPEN = auto()
    BLIND_PENDING = auto()
    BLIND_RESOLVED = auto()


# 基座生命周期只能单向前进，OPEN和BLIND_RESOLVED为终态
ALLOWED_SLOT_TRANSITIONS = {
    SlotState.EMPTY: frozenset({SlotState.OPEN, SlotState.BLIND_PENDING}),
    SlotState.OPEN: frozenset(),
    SlotState.BLIND_PENDING: frozenset({SlotState.BLIND_RESOLVED}),
    SlotState.BLIND_RESOLVED: frozenset(),
}


@dataclass(frozen=True)
class Slot:
    """基座状态快照"""
    index: int
    state: SlotState = SlotState.EMPTY
    value: Optional[int] = None
    blind_candidates: Optional[Tuple[Card, Card]] = None
    selected_value: Optional[int] = None

    def __post_init__(self):
        """验证基座数据与状态的一致性"""
        if self.index < 0:
            raise ValueError("index不能为负数")
        if self.state == SlotState.OPEN and self.value is None:
            raise ValueError("OPEN基座必须有value")
        if self.state in (SlotState.BLIND_PENDING, SlotState.BLIND_RESOLVED):
            if self.blind_candidates is None or len(self.blind_candidates) != 2:
                raise ValueError("盲注基座必须恰好有2张候选牌")
        if self.state == SlotState.BLIND_RESOLVED and self.selected_value is None:
            raise ValueError("已揭示的盲注基座必须有selected_value")

    @property
    def effective_value(self) -> Optional[int]:
        """参与序列校验的数值：优先取揭示值，其次取明牌值"""
        if self.selected_value is not None:
            return self.selected_value
        return self.value

    @property
    def is_filled(self) -> bool:
        """基座是否已离开EMPTY状态"""
        return self.state != SlotState.EMPTY

    @property
    def is_final(self) -> bool:
        """基座是否处于终态"""
        return self.state in (SlotState.OPEN, SlotState.BLIND_RESOLVED)

    @property
    def card_count(self) -> int:
        """基座上实际占用的卡牌数量"""
        if self.state == SlotState.EMPTY:
            return 0
        if self.state == SlotState.BLIND_PENDING:
            return 2
        return 1
