"""
Anti-Cheat System - 反作弊系统

该目录包含反作弊检查工具，确保测试使用真实的核心模块。

Modules:
    core_usage_checker.py: 核心模块使用检查器
"""

from .core_usage_checker import CoreUsageChecker

__all__ = ['CoreUsageChecker']
