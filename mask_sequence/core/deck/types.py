"""
牌库类型定义

定义生成牌库所需的区域（Tier）配置。
"""

from dataclasses import dataclass

__all__ = ['TierConfig']


@dataclass(frozen=True)
class TierConfig:
    """
    区域配置.

    Attributes:
        tier_id: 区域标识
        name: 区域名称
        slots: 基座数量
        deck_size: 基础牌库大小（牌面为 1..deck_size）
        cost: 入场费用
        subtext: 区域副标题
    """

    tier_id: str
    name: str
    slots: int
    deck_size: int
    cost: int = 0
    subtext: str = ""

    def __post_init__(self) -> None:
        """验证区域配置的有效性"""
        if not self.tier_id:
            raise ValueError("tier_id不能为空")
        if self.slots <= 0:
            raise ValueError("slots必须大于0")
        if self.deck_size <= 0:
            raise ValueError("deck_size必须大于0")
        if self.cost < 0:
            raise ValueError("cost不能为负数")
