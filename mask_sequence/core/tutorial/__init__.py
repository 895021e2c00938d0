"""
教程模块

提供固定的教程脚本和拦截器。
"""

from .script import (
    TutorialStep,
    TUTORIAL_HAND,
    TUTORIAL_DECK,
    TUTORIAL_STEPS,
    TUTORIAL_SLOT_COUNT,
    TUTORIAL_SACRIFICES,
    create_tutorial_round,
)
from .interceptor import TutorialInterceptor, INTERCEPTED_ACTIONS

__all__ = [
    'TutorialStep',
    'TUTORIAL_HAND',
    'TUTORIAL_DECK',
    'TUTORIAL_STEPS',
    'TUTORIAL_SLOT_COUNT',
    'TUTORIAL_SACRIFICES',
    'create_tutorial_round',
    'TutorialInterceptor',
    'INTERCEPTED_ACTIONS',
]
