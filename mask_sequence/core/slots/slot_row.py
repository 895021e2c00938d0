"""
基座行管理

定义不可变的SlotRow类。所有放置和揭示操作都返回新的基座行，
非法操作抛出异常且不产生任何修改。
"""

from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple

from ..deck.card import Card
from ..errors import InvalidChoiceError, InvalidSlotError
from .types import Slot, SlotState

__all__ = ['SlotRow']


@dataclass(frozen=True)
class SlotRow:
    """
    固定长度的有序基座行.

    Attributes:
        slots: 按索引排列的基座
    """

    slots: Tuple[Slot, ...]

    @classmethod
    def create(cls, size: int) -> 'SlotRow':
        """
        创建全部为空的基座行.

        Args:
            size: 基座数量

        Returns:
            SlotRow: 新的基座行
        """
        if size <= 0:
            raise ValueError("基座数量必须大于0")
        return cls(tuple(Slot(index=i) for i in range(size)))

    def place_open(self, index: int, card: Card) -> 'SlotRow':
        """
        将明牌放入空基座.

        Raises:
            InvalidSlotError: 索引越界或基座不是空的
        """
        slot = self.require_empty(index)
        return self._with_slot(replace(slot, state=SlotState.OPEN, value=card.value))

    def place_blind(self, index: int, cards: Sequence[Card]) -> 'SlotRow':
        """
        将两张暗牌放入空基座，等待揭示.

        Raises:
            InvalidSlotError: 索引越界或基座不是空的
            ValueError: 候选牌不是恰好2张
        """
        if len(cards) != 2:
            raise ValueError(f"盲注必须恰好2张牌，实际: {len(cards)}")
        slot = self.require_empty(index)
        return self._with_slot(replace(
            slot,
            state=SlotState.BLIND_PENDING,
            blind_candidates=(cards[0], cards[1]),
        ))

    def resolve_blind(self, index: int, chosen_value: int) -> Tuple['SlotRow', Card]:
        """
        揭示盲注基座.

        Args:
            index: 基座索引
            chosen_value: 选定的候选牌数值

        Returns:
            Tuple[SlotRow, Card]: 新的基座行和被丢弃的另一张候选牌

        Raises:
            InvalidSlotError: 索引越界或基座不是待揭示的盲注
            InvalidChoiceError: 数值不属于两张候选牌
        """
        slot = self._slot_at(index)
        if slot.state != SlotState.BLIND_PENDING:
            raise InvalidSlotError(f"基座 {index} 不是待揭示的盲注，当前状态: {slot.state.name}")

        first, second = slot.blind_candidates
        if first.value == chosen_value:
            discarded = second
        elif second.value == chosen_value:
            discarded = first
        else:
            raise InvalidChoiceError(
                f"数值 {chosen_value} 不属于基座 {index} 的候选牌 ({first.value}, {second.value})"
            )

        resolved = replace(
            slot,
            state=SlotState.BLIND_RESOLVED,
            value=chosen_value,
            selected_value=chosen_value,
        )
        return self._with_slot(resolved), discarded

    def is_complete(self) -> bool:
        """所有基座都处于OPEN或BLIND_RESOLVED"""
        return all(slot.is_final for slot in self.slots)

    def is_filled(self) -> bool:
        """所有基座都已离开EMPTY"""
        return all(slot.is_filled for slot in self.slots)

    def has_pending_blind(self) -> bool:
        """是否存在待揭示的盲注"""
        return any(slot.state == SlotState.BLIND_PENDING for slot in self.slots)

    def pending_blind_indices(self) -> Tuple[int, ...]:
        return tuple(slot.index for slot in self.slots if slot.state == SlotState.BLIND_PENDING)

    def empty_indices(self) -> Tuple[int, ...]:
        return tuple(slot.index for slot in self.slots if slot.state == SlotState.EMPTY)

    def card_count(self) -> int:
        """基座行上占用的卡牌总数"""
        return sum(slot.card_count for slot in self.slots)

    def neighbour_bounds(self, index: int) -> Tuple[int, Optional[int]]:
        """
        获取索引两侧最近的已知数值.

        Returns:
            Tuple[int, Optional[int]]: 左侧下界（无则为0）和右侧上界（无则为None）
        """
        self._slot_at(index)
        lower = 0
        for slot in reversed(self.slots[:index]):
            if slot.effective_value is not None:
                lower = slot.effective_value
                break
        upper = None
        for slot in self.slots[index + 1:]:
            if slot.effective_value is not None:
                upper = slot.effective_value
                break
        return lower, upper

    def _slot_at(self, index: int) -> Slot:
        if not isinstance(index, int) or not 0 <= index < len(self.slots):
            raise InvalidSlotError(f"基座索引越界: {index}，有效范围 0-{len(self.slots) - 1}")
        return self.slots[index]

    def require_empty(self, index: int) -> Slot:
        """
        获取空基座.

        Raises:
            InvalidSlotError: 索引越界或基座不是空的
        """
        slot = self._slot_at(index)
        if slot.state != SlotState.EMPTY:
            raise InvalidSlotError(f"基座 {index} 已被占用，当前状态: {slot.state.name}")
        return slot

    def _with_slot(self, slot: Slot) -> 'SlotRow':
        slots = list(self.slots)
        slots[slot.index] = slot
        return SlotRow(tuple(slots))

    def __len__(self) -> int:
        return len(self.slots)

    def __iter__(self):
        return iter(self.slots)

    def __getitem__(self, index: int) -> Slot:
        return self.slots[index]
