"""数据传输对象定义.

这个模块定义了回合引擎与会话层、UI层之间传输数据的标准格式。
使用Pydantic dataclass确保数据验证和序列化的一致性。
"""

from typing import Optional, List

from pydantic import Field, field_validator
from pydantic.dataclasses import dataclass as pydantic_dataclass

from ..core.round.types import RoundSetup, RoundSummary


@pydantic_dataclass
class RoundStartParams:
    """回合开始参数.

    会话层根据区域配置和背包道具生成，交给回合引擎。
    """
    tier_slots: int = Field(..., gt=0, description="基座数量")
    tier_deck_size: int = Field(..., gt=0, description="基础牌库大小")
    expansion_bonus: int = Field(0, ge=0, description="扩容芯片增加的牌数")
    include_jackpot: bool = Field(False, description="是否加入大奖牌")
    base_sacrifices: int = Field(1, ge=0, description="基础换牌次数")
    extra_sacrifice_granted: bool = Field(False, description="是否持有备用换牌")
    small_bet_granted: bool = Field(False, description="是否持有小额加注")
    goggles_granted: bool = Field(False, description="是否持有虚空透镜")

    def to_setup(self) -> RoundSetup:
        """转换为核心层的回合参数"""
        return RoundSetup(
            tier_slots=self.tier_slots,
            tier_deck_size=self.tier_deck_size,
            expansion_bonus=self.expansion_bonus,
            include_jackpot=self.include_jackpot,
            base_sacrifices=self.base_sacrifices,
            extra_sacrifice_granted=self.extra_sacrifice_granted,
            small_bet_granted=self.small_bet_granted,
            goggles_granted=self.goggles_granted,
        )


@pydantic_dataclass
class RoundExitReport:
    """回合结束报告.

    会话层只依赖这份报告结算筹码和道具。
    """
    won: bool = Field(..., description="是否获胜")
    profit: int = Field(0, ge=0, description="收益，失败时为0")
    consumed_extra_sacrifice: bool = Field(False, description="是否消耗了备用换牌")
    consumed_small_bet: bool = Field(False, description="是否消耗了小额加注")
    consumed_goggles: bool = Field(False, description="是否消耗了虚空透镜")
    is_tutorial: bool = Field(False, description="是否为教程回合")

    @field_validator('profit')
    @classmethod
    def validate_profit(cls, v, info):
        """失败回合不能有收益."""
        if info.data.get('won') is False and v != 0:
            raise ValueError("失败回合的profit必须为0")
        return v

    @classmethod
    def from_summary(cls, summary: RoundSummary, is_tutorial: bool = False) -> 'RoundExitReport':
        return cls(
            won=summary.won,
            profit=summary.profit,
            consumed_extra_sacrifice=summary.consumed_extra_sacrifice,
            consumed_small_bet=summary.consumed_small_bet,
            consumed_goggles=summary.consumed_goggles,
            is_tutorial=is_tutorial,
        )


@pydantic_dataclass
class SlotView:
    """基座视图.

    待揭示的盲注只暴露候选牌数量，揭示阶段才公开候选数值。
    """
    index: int = Field(..., ge=0, description="基座索引")
    state: str = Field(..., description="基座状态")
    value: Optional[int] = Field(None, description="明牌或已揭示的数值")
    candidate_values: List[int] = Field(default_factory=list, description="可选的候选数值（仅揭示阶段）")


@pydantic_dataclass
class RoundView:
    """回合视图.

    供UI层渲染的只读快照，不暴露牌库内容。
    """
    round_id: str = Field(..., min_length=1, description="回合ID")
    phase: str = Field(..., description="回合阶段")
    slots: List[SlotView] = Field(..., description="基座列表")
    deck_count: int = Field(..., ge=0, description="剩余牌数")
    sacrifices_left: int = Field(..., ge=0, description="剩余换牌次数")
    hand_value: Optional[int] = Field(None, description="当前手牌数值")
    hand_is_jackpot: bool = Field(False, description="手牌是否为大奖牌")
    void_mode: bool = Field(False, description="隐藏模式是否开启")
    goggles_available: bool = Field(False, description="透镜是否可用")
    can_cast_blind: bool = Field(False, description="牌库是否足够盲注")
    potential_profit: int = Field(0, ge=0, description="当前基座的预计收益")
    messages: List[str] = Field(default_factory=list, description="最近的消息")
    is_tutorial: bool = Field(False, description="是否为教程回合")
    tutorial_text: Optional[str] = Field(None, description="当前教程提示")
