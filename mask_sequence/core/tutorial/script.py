"""
教程脚本

固定的教程步骤和预设牌序。
预设牌序（1-15范围）：
初始手牌 3；依次抽到 5、1（小于5，迫使换牌）、8、10 和 12（盲注）、15（收尾）。
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from ..deck.card import Card
from ..round.round_state import RoundState
from ..round.types import ActionType, RoundAction, RoundModifiers
from ..sacrifice.sacrifice_budget import SacrificeBudget

__all__ = [
    'TutorialStep',
    'TUTORIAL_HAND',
    'TUTORIAL_DECK',
    'TUTORIAL_STEPS',
    'TUTORIAL_SLOT_COUNT',
    'TUTORIAL_SACRIFICES',
    'create_tutorial_round',
]

TUTORIAL_SLOT_COUNT = 4
TUTORIAL_SACRIFICES = 3


@dataclass(frozen=True)
class TutorialStep:
    """
    教程步骤.

    Attributes:
        step_id: 步骤编号
        text: 提示文本
        required_action: 本步骤唯一允许的行动
        allowed_target: 允许的基座索引，None表示不限制
    """
    step_id: int
    text: str
    required_action: ActionType
    allowed_target: Optional[int] = None

    def matches(self, action: RoundAction) -> bool:
        """行动类型和目标基座是否都符合本步骤"""
        if action.action_type != self.required_action:
            return False
        if self.allowed_target is not None and action.slot_index != self.allowed_target:
            return False
        return True


TUTORIAL_HAND = Card("tut-3", 3)

TUTORIAL_DECK: Tuple[Card, ...] = (
    Card("tut-5", 5),
    Card("tut-1", 1),
    Card("tut-8", 8),
    Card("tut-10", 10),
    Card("tut-12", 12),
    Card("tut-15", 15),
)

TUTORIAL_STEPS: Tuple[TutorialStep, ...] = (
    TutorialStep(
        0,
        "系统校准中... 欢迎来到边缘。规则只有一条：序列必须递增。将手牌 [3] 放入第一个基座。",
        ActionType.PLACE,
        0,
    ),
    TutorialStep(
        1,
        "很好。数值 [5] 大于 [3]，这是安全的链接。继续构建序列。",
        ActionType.PLACE,
        1,
    ),
    TutorialStep(
        2,
        "警告：监测到死局。手牌 [1] 小于前序节点 [5]。强行放置将导致序列崩溃。\n"
        "使用【换牌】消耗一次机会重置当前符文。",
        ActionType.SACRIFICE,
    ),
    TutorialStep(
        3,
        "危机解除。但在虚空中，常规收益只能勉强糊口。\n"
        "开启【隐藏模式】。这需要消耗手牌并盲抽两张填入。",
        ActionType.TOGGLE_VOID_MODE,
    ),
    TutorialStep(
        4,
        "高风险伴随高回报。若盲注数值正确，结算收益将翻 5 倍。\n将虚空注注入基座 3。",
        ActionType.CAST_BLIND,
        2,
    ),
    TutorialStep(
        5,
        "收尾阶段。完成最后的序列链接。",
        ActionType.PLACE,
        3,
    ),
    TutorialStep(
        6,
        "仪式完成。现在，直面真理。揭示盲注卡牌的结果。",
        ActionType.RESOLVE_BLIND,
        2,
    ),
)


def create_tutorial_round(blind_multiplier: int = 5,
                          sacrifices: int = TUTORIAL_SACRIFICES) -> RoundState:
    """创建使用预设牌序的教程回合（不携带任何道具）"""
    return RoundState.from_cards(
        cards=TUTORIAL_DECK,
        slot_count=TUTORIAL_SLOT_COUNT,
        budget=SacrificeBudget.create(sacrifices),
        modifiers=RoundModifiers(blind_multiplier=blind_multiplier),
        hand=TUTORIAL_HAND,
    )
