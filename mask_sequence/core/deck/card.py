"""
符文卡牌数据结构.

定义不可变的Card类。卡牌的身份由id决定，游戏逻辑只比较牌面数值.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Card:
    """
    表示一张符文卡牌.

    Attributes:
        card_id: 卡牌唯一标识
        value: 牌面数值，必须 >= 1
        is_jackpot: 是否为贪婪护符加入的大奖牌

    Examples:
        >>> card = Card("card-7", 7)
        >>> str(card)
        '7'
        >>> card.value
        7
    """

    card_id: str
    value: int
    is_jackpot: bool = False

    def __post_init__(self) -> None:
        """
        验证卡牌数据的有效性.

        Raises:
            TypeError: 当数值类型无效时
            ValueError: 当id为空或数值小于1时
        """
        if not self.card_id:
            raise ValueError("card_id不能为空")
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise TypeError(f"牌面数值必须是int类型，实际: {type(self.value)}")
        if self.value < 1:
            raise ValueError(f"牌面数值必须 >= 1，实际: {self.value}")

    def __str__(self) -> str:
        return f"{self.value}*" if self.is_jackpot else str(self.value)

    def __repr__(self) -> str:
        return f"Card({self.card_id!r}, {self.value})"

    def __lt__(self, other: 'Card') -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.value < other.value
