"""
回合阶段逻辑模块

提供回合阶段转换规则和合法性判断。
"""

from typing import FrozenSet

from ..errors import PhaseError
from .types import RoundPhase, PhaseChange

__all__ = [
    'PHASE_TRANSITIONS',
    'get_possible_next_phases',
    'can_transition',
    'validate_transition',
]


PHASE_TRANSITIONS = {
    RoundPhase.PLAYING: frozenset({RoundPhase.REVELATION, RoundPhase.LOST}),
    RoundPhase.REVELATION: frozenset({RoundPhase.WON, RoundPhase.LOST}),
    RoundPhase.WON: frozenset(),   # 终态
    RoundPhase.LOST: frozenset(),  # 终态
}


def get_possible_next_phases(current_phase: RoundPhase) -> FrozenSet[RoundPhase]:
    """
    获取从当前阶段可能转换到的所有下一阶段

    Args:
        current_phase: 当前回合阶段

    Returns:
        可能的下一阶段集合
    """
    return PHASE_TRANSITIONS.get(current_phase, frozenset())


def can_transition(current_phase: RoundPhase, target_phase: RoundPhase) -> bool:
    return target_phase in get_possible_next_phases(current_phase)


def validate_transition(current_phase: RoundPhase, target_phase: RoundPhase) -> PhaseChange:
    """
    检查阶段转换合法性

    Raises:
        PhaseError: 当转换不合法时
    """
    if not can_transition(current_phase, target_phase):
        raise PhaseError(f"不能从 {current_phase.name} 转换到 {target_phase.name}")
    return PhaseChange(current_phase, target_phase)
