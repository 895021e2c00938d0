"""
序列校验与收益计算

纯函数，只读取基座数据。
"""

from typing import Iterable

from ..slots.slot_row import SlotRow
from ..slots.types import Slot, SlotState
from .types import ProfitBreakdown

__all__ = ['verify_sequence', 'compute_profit', 'is_move_dangerous']


def verify_sequence(slots: Iterable[Slot]) -> bool:
    """
    按索引顺序检查基座数值是否非递减（允许相等）.

    Args:
        slots: 已填满的基座

    Returns:
        bool: 序列合法返回True
    """
    prev = 0
    for slot in slots:
        value = slot.effective_value or 0
        if value < prev:
            return False
        prev = value
    return True


def compute_profit(slots: Iterable[Slot], small_bet_active: bool = False,
                   blind_multiplier: int = 5, small_bet_bonus: int = 50) -> ProfitBreakdown:
    """
    计算收益：明牌基座按原值计，已揭示盲注按倍率计，小额加注额外加固定奖金.

    Args:
        slots: 基座
        small_bet_active: 是否持有小额加注
        blind_multiplier: 盲注倍率
        small_bet_bonus: 小额加注奖金

    Returns:
        ProfitBreakdown: 收益明细
    """
    open_sum = 0
    blind_sum = 0
    for slot in slots:
        if slot.state == SlotState.OPEN:
            open_sum += slot.value
        elif slot.state == SlotState.BLIND_RESOLVED:
            blind_sum += slot.selected_value
    return ProfitBreakdown(
        open_total=open_sum,
        blind_total=blind_sum * blind_multiplier,
        bonus=small_bet_bonus if small_bet_active else 0,
    )


def is_move_dangerous(row: SlotRow, index: int, value: int) -> bool:
    """把value放入index是否会与两侧已知数值冲突"""
    lower, upper = row.neighbour_bounds(index)
    return value < lower or (upper is not None and value > upper)
