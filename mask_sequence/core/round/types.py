"""
回合类型定义

定义回合阶段、玩家行动、回合参数和行动效果等基础类型。
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Tuple

from ..deck.card import Card

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
]


class RoundPhase(Enum):
    """回合阶段枚举"""
    PLAYING = auto()
    REVELATION = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (RoundPhase.WON, RoundPhase.LOST)


class ActionType(Enum):
    """玩家行动类型"""
    PLACE = auto()
    CAST_BLIND = auto()
    SACRIFICE = auto()
    RESOLVE_BLIND = auto()
    TOGGLE_VOID_MODE = auto()
    COMMIT_PEEK = auto()
    ABANDON = auto()


@dataclass(frozen=True)
class RoundAction:
    """
    玩家行动.

    Attributes:
        action_type: 行动类型
        slot_index: 目标基座（放置、盲注、揭示时使用）
        value: 揭示时选定的数值
        use_blind: 透镜确认时是否按盲注处理（否则按换牌处理）
    """
    action_type: ActionType
    slot_index: Optional[int] = None
    value: Optional[int] = None
    use_blind: bool = False

    @classmethod
    def place(cls, slot_index: int) -> 'RoundAction':
        return cls(ActionType.PLACE, slot_index=slot_index)

    @classmethod
    def cast_blind(cls, slot_index: int) -> 'RoundAction':
        return cls(ActionType.CAST_BLIND, slot_index=slot_index)

    @classmethod
    def sacrifice(cls) -> 'RoundAction':
        return cls(ActionType.SACRIFICE)

    @classmethod
    def resolve_blind(cls, slot_index: int, value: int) -> 'RoundAction':
        return cls(ActionType.RESOLVE_BLIND, slot_index=slot_index, value=value)

    @classmethod
    def toggle_void_mode(cls) -> 'RoundAction':
        return cls(ActionType.TOGGLE_VOID_MODE)

    @classmethod
    def commit_peek(cls, use_blind: bool, slot_index: Optional[int] = None) -> 'RoundAction':
        return cls(ActionType.COMMIT_PEEK, slot_index=slot_index, use_blind=use_blind)

    @classmethod
    def abandon(cls) -> 'RoundAction':
        return cls(ActionType.ABANDON)


@dataclass(frozen=True)
class RoundSetup:
    """会话层传入的回合开始参数"""
    tier_slots: int
    tier_deck_size: int
    expansion_bonus: int = 0
    include_jackpot: bool = False
    base_sacrifices: int = 1
    extra_sacrifice_granted: bool = False
    small_bet_granted: bool = False
    goggles_granted: bool = False

    def __post_init__(self):
        """验证回合参数的有效性"""
        if self.tier_slots <= 0:
            raise ValueError("tier_slots必须大于0")
        if self.tier_deck_size <= 0:
            raise ValueError("tier_deck_size必须大于0")
        if self.expansion_bonus < 0:
            raise ValueError("expansion_bonus不能为负数")
        if self.base_sacrifices < 0:
            raise ValueError("base_sacrifices不能为负数")


@dataclass(frozen=True)
class RoundModifiers:
    """回合内生效的道具和结算参数"""
    small_bet_granted: bool = False
    goggles_granted: bool = False
    blind_multiplier: int = 5
    small_bet_bonus: int = 50


@dataclass(frozen=True)
class PhaseChange:
    """阶段转换记录"""
    from_phase: RoundPhase
    to_phase: RoundPhase


@dataclass(frozen=True)
class RoundEffects:
    """
    一次行动产生的效果.

    Attributes:
        messages: 面向玩家的消息
        phase_changes: 按发生顺序排列的阶段转换
        cards_drawn: 本次从牌库抽出的牌数
        discarded: 本次进入弃牌堆的牌
    """
    messages: Tuple[str, ...] = ()
    phase_changes: Tuple[PhaseChange, ...] = ()
    cards_drawn: int = 0
    discarded: Tuple[Card, ...] = ()

    def merge(self, other: 'RoundEffects') -> 'RoundEffects':
        """按顺序合并两次效果"""
        return RoundEffects(
            messages=self.messages + other.messages,
            phase_changes=self.phase_changes + other.phase_changes,
            cards_drawn=self.cards_drawn + other.cards_drawn,
            discarded=self.discarded + other.discarded,
        )


@dataclass(frozen=True)
class ProfitBreakdown:
    """收益明细"""
    open_total: int
    blind_total: int
    bonus: int = 0

    @property
    def total(self) -> int:
        return self.open_total + self.blind_total + self.bonus


@dataclass(frozen=True)
class RoundSummary:
    """回合结束时交给会话层的汇总结果"""
    won: bool
    profit: int
    consumed_extra_sacrifice: bool = False
    consumed_small_bet: bool = False
    consumed_goggles: bool = False
    phase_history: Tuple[PhaseChange, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.profit < 0:
            raise ValueError("profit不能为负数")
        if not self.won and self.profit != 0:
            raise ValueError("失败回合的profit必须为0")
