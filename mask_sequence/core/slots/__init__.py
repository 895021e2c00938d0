"""
基座模块

提供基座状态和固定长度的基座行。
"""

from .types import Slot, SlotState, ALLOWED_SLOT_TRANSITIONS
from .slot_row import SlotRow

__all__ = ['Slot', 'SlotState', 'SlotRow', 'ALLOWED_SLOT_TRANSITIONS']
