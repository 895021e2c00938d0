"""
符文牌库管理.

定义不可变的Deck类。抽牌操作不修改原牌库，而是返回抽出的牌和新的牌库.
"""

import random
from dataclasses import dataclass
from typing import Optional, Tuple

from ..errors import InsufficientCardsError
from .card import Card
from .types import TierConfig

__all__ = ['Deck', 'JACKPOT_VALUE']

JACKPOT_VALUE = 100


@dataclass(frozen=True)
class Deck:
    """
    表示一副符文牌库.

    cards[0] 为下一张要抽的牌。牌库只会从顶部减少。
    每次抽牌复制剩余的元组，代价为O(n)；一副牌最多几十张。

    Attributes:
        cards: 当前牌库中的牌

    Examples:
        >>> deck = Deck.generate(TierConfig("t", "t", 4, 15), rng=random.Random(1))
        >>> card, deck = deck.draw()
        >>> len(deck)
        14
    """

    cards: Tuple[Card, ...] = ()

    @classmethod
    def generate(cls, tier: TierConfig, expansion_bonus: int = 0,
                 include_jackpot: bool = False,
                 rng: Optional[random.Random] = None,
                 jackpot_value: int = JACKPOT_VALUE) -> 'Deck':
        """
        生成并洗好一副牌库.

        Args:
            tier: 区域配置
            expansion_bonus: 扩容芯片带来的额外牌数
            include_jackpot: 是否加入一张大奖牌
            rng: 随机数生成器，用于确定性测试
            jackpot_value: 大奖牌的牌面数值

        Returns:
            Deck: 洗好的牌库

        Raises:
            ValueError: 当expansion_bonus为负数时
        """
        if expansion_bonus < 0:
            raise ValueError("expansion_bonus不能为负数")

        total = tier.deck_size + expansion_bonus
        cards = [Card(f"card-{value}", value) for value in range(1, total + 1)]
        if include_jackpot:
            cards.append(Card(f"jackpot-{jackpot_value}", jackpot_value, is_jackpot=True))

        cls._fisher_yates(cards, rng or random.Random())
        return cls(tuple(cards))

    @staticmethod
    def _fisher_yates(cards: list, rng: random.Random) -> None:
        """原地洗牌：从最后一个位置向前，与 [0, i] 中均匀选取的位置交换."""
        for i in range(len(cards) - 1, 0, -1):
            j = rng.randint(0, i)
            cards[i], cards[j] = cards[j], cards[i]

    def draw(self) -> Tuple[Optional[Card], 'Deck']:
        """
        抽一张牌.

        Returns:
            Tuple[Optional[Card], Deck]: 抽出的牌（牌库为空时为None）和剩余牌库
        """
        if not self.cards:
            return None, self
        return self.cards[0], Deck(self.cards[1:])

    def draw_many(self, count: int) -> Tuple[Tuple[Card, ...], 'Deck']:
        """
        原子地抽多张牌，要么全部抽出，要么一张都不抽.

        Args:
            count: 要抽的牌数

        Returns:
            Tuple[Tuple[Card, ...], Deck]: 抽出的牌和剩余牌库

        Raises:
            ValueError: 当count为负数时
            InsufficientCardsError: 当牌库中的牌不足时
        """
        if count < 0:
            raise ValueError("Count must be non-negative")
        if count > len(self.cards):
            raise InsufficientCardsError(count, len(self.cards))
        return self.cards[:count], Deck(self.cards[count:])

    def peek_front(self, count: int) -> Tuple[Card, ...]:
        """
        查看顶部的牌但不抽出.

        Args:
            count: 要查看的牌数

        Returns:
            Tuple[Card, ...]: 顶部最多count张牌
        """
        if count < 0:
            raise ValueError("Count must be non-negative")
        return self.cards[:count]

    @property
    def cards_remaining(self) -> int:
        """剩余牌数"""
        return len(self.cards)

    @property
    def is_empty(self) -> bool:
        """牌库是否为空"""
        return not self.cards

    def __len__(self) -> int:
        return len(self.cards)

    def __str__(self) -> str:
        return f"Deck({len(self.cards)} cards remaining)"

    def __repr__(self) -> str:
        return f"Deck(cards_remaining={len(self.cards)})"
