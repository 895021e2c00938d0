"""
Core Module - 纯领域逻辑层

该模块包含回合引擎的核心业务逻辑。
核心模块只能依赖其他核心模块，不能依赖应用层或UI层。

Modules:
    deck: 牌库生成、洗牌和抽牌
    slots: 基座行和基座生命周期
    sacrifice: 换牌预算
    round: 回合状态、回合控制器和结算逻辑
    tutorial: 教程脚本和行动拦截器
    invariant: 卡牌守恒和基座生命周期不变量检查
    events: 领域事件系统
"""

from .errors import (
    RoundError,
    InvalidSlotError,
    InsufficientCardsError,
    InvalidChoiceError,
    SacrificeExhaustedError,
    CapabilityMissingError,
    PhaseError,
)

__all__ = [
    'RoundError',
    'InvalidSlotError',
    'InsufficientCardsError',
    'InvalidChoiceError',
    'SacrificeExhaustedError',
    'CapabilityMissingError',
    'PhaseError',
]
