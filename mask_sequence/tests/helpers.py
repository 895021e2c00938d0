"""测试辅助函数：固定牌序的卡牌和回合状态"""

from mask_sequence.core.deck import Card
from mask_sequence.core.round import RoundModifiers, RoundState
from mask_sequence.core.sacrifice import SacrificeBudget


def make_cards(*values):
    """按给定顺序生成卡牌，id保证唯一"""
    return tuple(Card(f"c{i}-{v}", v) for i, v in enumerate(values))


def make_state(hand, deck_values, slots=4, sacrifices=1, extra=False,
               small_bet=False, goggles=False):
    """用固定手牌和牌序创建回合状态"""
    return RoundState.from_cards(
        cards=make_cards(*deck_values),
        slot_count=slots,
        budget=SacrificeBudget.create(sacrifices, extra),
        modifiers=RoundModifiers(small_bet_granted=small_bet, goggles_granted=goggles),
        hand=Card("hand", hand),
    )
