"""
回合状态快照

RoundState是不可变的：每个引擎操作都返回新的快照。
"""

import random
from dataclasses import dataclass, replace
from typing import Iterable, Optional, Tuple

from ..deck.card import Card
from ..deck.deck import Deck, JACKPOT_VALUE
from ..deck.types import TierConfig
from ..sacrifice.sacrifice_budget import SacrificeBudget
from ..slots.slot_row import SlotRow
from .types import RoundPhase, RoundModifiers, RoundSetup, PhaseChange

__all__ = ['RoundState', 'MESSAGE_LOG_SIZE']

MESSAGE_LOG_SIZE = 5


@dataclass(frozen=True)
class RoundState:
    """
    回合状态快照.

    Attributes:
        deck: 剩余牌库
        slots: 基座行
        hand: 当前手牌，牌库抽空后为None
        budget: 换牌预算
        phase: 回合阶段
        modifiers: 生效的道具和结算参数
        total_cards: 本回合生成的卡牌总数
        discard: 弃牌堆
        void_mode: 隐藏模式开关（界面信号）
        consumed_extra_sacrifice: 是否已消耗备用换牌
        consumed_goggles: 是否已消耗虚空透镜
        messages: 最近的玩家消息
        phase_history: 阶段转换历史
    """

    deck: Deck
    slots: SlotRow
    hand: Optional[Card]
    budget: SacrificeBudget
    phase: RoundPhase = RoundPhase.PLAYING
    modifiers: RoundModifiers = RoundModifiers()
    total_cards: int = 0
    discard: Tuple[Card, ...] = ()
    void_mode: bool = False
    consumed_extra_sacrifice: bool = False
    consumed_goggles: bool = False
    messages: Tuple[str, ...] = ()
    phase_history: Tuple[PhaseChange, ...] = ()

    @classmethod
    def start(cls, setup: RoundSetup, rng: Optional[random.Random] = None,
              blind_multiplier: int = 5, small_bet_bonus: int = 50,
              jackpot_value: int = JACKPOT_VALUE) -> 'RoundState':
        """
        按回合参数生成牌库、抽第一张手牌并创建空基座行.

        Args:
            setup: 回合开始参数
            rng: 随机数生成器
            blind_multiplier: 盲注倍率
            small_bet_bonus: 小额加注奖金
            jackpot_value: 大奖牌的牌面数值

        Returns:
            RoundState: 处于PLAYING阶段的初始状态
        """
        tier = TierConfig(
            tier_id="round",
            name="round",
            slots=setup.tier_slots,
            deck_size=setup.tier_deck_size,
        )
        deck = Deck.generate(tier, setup.expansion_bonus, setup.include_jackpot, rng,
                             jackpot_value=jackpot_value)
        return cls.from_cards(
            cards=deck.cards,
            slot_count=setup.tier_slots,
            budget=SacrificeBudget.create(setup.base_sacrifices, setup.extra_sacrifice_granted),
            modifiers=RoundModifiers(
                small_bet_granted=setup.small_bet_granted,
                goggles_granted=setup.goggles_granted,
                blind_multiplier=blind_multiplier,
                small_bet_bonus=small_bet_bonus,
            ),
        )

    @classmethod
    def from_cards(cls, cards: Iterable[Card], slot_count: int, budget: SacrificeBudget,
                   modifiers: Optional[RoundModifiers] = None,
                   hand: Optional[Card] = None) -> 'RoundState':
        """
        用已排好顺序的卡牌创建回合状态.

        未指定hand时从牌库顶部抽出第一张手牌。
        """
        deck = Deck(tuple(cards))
        total = len(deck) + (1 if hand is not None else 0)
        if hand is None:
            hand, deck = deck.draw()
        return cls(
            deck=deck,
            slots=SlotRow.create(slot_count),
            hand=hand,
            budget=budget,
            modifiers=modifiers or RoundModifiers(),
            total_cards=total,
        )

    @property
    def goggles_available(self) -> bool:
        return self.modifiers.goggles_granted and not self.consumed_goggles

    @property
    def is_finished(self) -> bool:
        return self.phase.is_terminal

    def cards_accounted(self) -> int:
        """牌库、手牌、基座和弃牌堆中的卡牌总数"""
        return (
            len(self.deck)
            + (1 if self.hand is not None else 0)
            + self.slots.card_count()
            + len(self.discard)
        )

    def with_messages(self, *messages: str) -> 'RoundState':
        """追加消息，只保留最近的若干条"""
        if not messages:
            return self
        log = (self.messages + tuple(messages))[-MESSAGE_LOG_SIZE:]
        return replace(self, messages=log)
