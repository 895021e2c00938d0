"""
回合引擎异常定义

核心层只抛出这些异常，应用层负责把它们转换为命令结果。
所有异常都不是致命的：抛出时回合状态保持不变。
"""

from typing import Optional

__all__ = [
    'RoundError',
    'InvalidSlotError',
    'InsufficientCardsError',
    'InvalidChoiceError',
    'SacrificeExhaustedError',
    'CapabilityMissingError',
    'PhaseError',
]


class RoundError(Exception):
    """回合引擎异常基类"""

    error_code = "ROUND_ERROR"

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if error_code is not None:
            self.error_code = error_code


class InvalidSlotError(RoundError):
    """基座索引越界或目标基座不是空的"""

    error_code = "INVALID_SLOT"


class InsufficientCardsError(RoundError):
    """牌库剩余牌数不足以完成本次抽牌"""

    error_code = "INSUFFICIENT_CARDS"

    def __init__(self, requested: int, remaining: int):
        super().__init__(f"牌库不足: 需要 {requested} 张，剩余 {remaining} 张")
        self.requested = requested
        self.remaining = remaining


class InvalidChoiceError(RoundError):
    """揭示的数值不属于盲注的两张候选牌"""

    error_code = "INVALID_CHOICE"


class SacrificeExhaustedError(RoundError):
    """换牌次数已用完"""

    error_code = "SACRIFICE_EXHAUSTED"


class CapabilityMissingError(RoundError):
    """未持有执行该行动所需的道具"""

    error_code = "CAPABILITY_MISSING"


class PhaseError(RoundError):
    """当前阶段不接受该行动"""

    error_code = "INVALID_PHASE"
