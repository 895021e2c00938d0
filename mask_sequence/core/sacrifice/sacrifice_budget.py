"""
换牌预算

记录本回合剩余的换牌次数。备用换牌道具提供一次额外机会，
当剩余次数超过基础次数时，本次换牌消耗的就是这次额外机会。
"""

from dataclasses import dataclass, replace
from typing import Tuple

from ..errors import SacrificeExhaustedError

__all__ = ['SacrificeBudget']


@dataclass(frozen=True)
class SacrificeBudget:
    """
    换牌预算.

    Attributes:
        base: 基础换牌次数
        remaining: 剩余换牌次数，永不为负
        extra_granted: 是否持有备用换牌道具
    """

    base: int
    remaining: int
    extra_granted: bool = False

    def __post_init__(self):
        if self.base < 0:
            raise ValueError("base不能为负数")
        if self.remaining < 0:
            raise ValueError("remaining不能为负数")

    @classmethod
    def create(cls, base: int, extra_granted: bool = False) -> 'SacrificeBudget':
        """按基础次数创建预算，持有备用换牌时额外+1"""
        return cls(base=base, remaining=base + (1 if extra_granted else 0), extra_granted=extra_granted)

    @property
    def can_spend(self) -> bool:
        return self.remaining > 0

    @property
    def next_spend_is_extra(self) -> bool:
        """下一次换牌是否消耗备用换牌道具"""
        return self.remaining > self.base

    def spend(self) -> Tuple['SacrificeBudget', bool]:
        """
        消耗一次换牌机会.

        Returns:
            Tuple[SacrificeBudget, bool]: 新预算，以及本次是否消耗了备用换牌道具

        Raises:
            SacrificeExhaustedError: 剩余次数为0
        """
        if not self.can_spend:
            raise SacrificeExhaustedError("换牌次数已用完")
        spent_extra = self.next_spend_is_extra
        return replace(self, remaining=self.remaining - 1), spent_extra
