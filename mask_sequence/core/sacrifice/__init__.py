"""
换牌预算模块
"""

from .sacrifice_budget import SacrificeBudget

__all__ = ['SacrificeBudget']
