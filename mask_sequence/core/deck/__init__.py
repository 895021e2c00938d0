"""
符文牌库模块.

提供Card、Deck和TierConfig，实现牌库生成、洗牌和抽牌.
"""

from .card import Card
from .deck import Deck, JACKPOT_VALUE
from .types import TierConfig

__all__ = ['Card', 'Deck', 'TierConfig', 'JACKPOT_VALUE']
