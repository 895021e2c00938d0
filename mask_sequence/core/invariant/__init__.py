"""
不变量检查模块

提供回合不变量检查器及其结果类型。
"""

from .types import InvariantType, InvariantViolation, InvariantCheckResult, InvariantError
from .round_invariants import RoundInvariants

__all__ = [
    'InvariantType',
    'InvariantViolation',
    'InvariantCheckResult',
    'InvariantError',
    'RoundInvariants',
]
