"""
回合模块

提供回合状态快照、回合控制器（纯函数操作）、阶段逻辑和结算逻辑。
"""

from .types import (
    RoundPhase,
    ActionType,
    RoundAction,
    RoundSetup,
    RoundModifiers,
    PhaseChange,
    RoundEffects,
    ProfitBreakdown,
    RoundSummary,
)
from .round_state import RoundState, MESSAGE_LOG_SIZE
from .phase_logic import get_possible_next_phases, can_transition, validate_transition
from .scoring import verify_sequence, compute_profit, is_move_dangerous
from . import round_engine
from .round_engine import RoundOutcome, apply_action, summarize, profit_of

__all__ = [
    'RoundPhase',
    'ActionType',
    'RoundAction',
    'RoundSetup',
    'RoundModifiers',
    'PhaseChange',
    'RoundEffects',
    'ProfitBreakdown',
    'RoundSummary',
    'RoundState',
    'MESSAGE_LOG_SIZE',
    'get_possible_next_phases',
    'can_transition',
    'validate_transition',
    'verify_sequence',
    'compute_profit',
    'is_move_dangerous',
    'round_engine',
    'RoundOutcome',
    'apply_action',
    'summarize',
    'profit_of',
]
