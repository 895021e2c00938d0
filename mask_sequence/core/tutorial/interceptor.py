"""
教程拦截器

位于回合控制器之前的守卫：教程进行中只放行脚本当前步骤规定的行动和目标，
其余行动静默丢弃。拦截器从不读取或修改回合状态，只负责判断和转发，
因此教程和正式对局使用完全相同的回合控制器。
"""

import logging
from typing import Callable, Optional, Sequence, TypeVar

from ..round.types import ActionType, RoundAction
from .script import TUTORIAL_STEPS, TutorialStep

__all__ = ['TutorialInterceptor', 'INTERCEPTED_ACTIONS']

T = TypeVar('T')

# 教程只管控这些行动；其余行动（放弃回合、透镜）直接透传且不推进游标
INTERCEPTED_ACTIONS = frozenset({
    ActionType.PLACE,
    ActionType.CAST_BLIND,
    ActionType.SACRIFICE,
    ActionType.RESOLVE_BLIND,
    ActionType.TOGGLE_VOID_MODE,
})


class TutorialInterceptor:
    """教程拦截器

    持有指向脚本步骤的游标。匹配的行动被转发；转发成功后游标前进一步。
    脚本走完后拦截器变为透传。
    """

    def __init__(self, steps: Sequence[TutorialStep] = TUTORIAL_STEPS):
        """
        初始化拦截器

        Args:
            steps: 有序的脚本步骤
        """
        if not steps:
            raise ValueError("steps不能为空")
        self._steps = tuple(steps)
        self._cursor = 0
        self._logger = logging.getLogger(__name__)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def is_complete(self) -> bool:
        return self._cursor >= len(self._steps)

    @property
    def current_step(self) -> Optional[TutorialStep]:
        """当前步骤，脚本走完后为None"""
        if self.is_complete:
            return None
        return self._steps[self._cursor]

    def permits(self, action: RoundAction) -> bool:
        """检查行动是否符合当前步骤"""
        if action.action_type not in INTERCEPTED_ACTIONS:
            return True
        step = self.current_step
        if step is None:
            return True
        return step.matches(action)

    def intercept(self, action: RoundAction, forward: Callable[[RoundAction], T]) -> Optional[T]:
        """
        拦截一次行动

        Args:
            action: 玩家行动
            forward: 把行动交给回合控制器的回调

        Returns:
            forward的返回值；行动被丢弃时返回None

        Raises:
            forward抛出的任何异常；此时游标不前进
        """
        if not self.permits(action):
            step = self.current_step
            self._logger.debug(
                f"教程拦截: 丢弃 {action.action_type.name}(slot={action.slot_index})，"
                f"当前步骤 {step.step_id} 需要 {step.required_action.name}(slot={step.allowed_target})"
            )
            return None

        result = forward(action)
        if action.action_type in INTERCEPTED_ACTIONS and not self.is_complete:
            self._cursor += 1
            self._logger.debug(f"教程推进到步骤 {self._cursor}/{len(self._steps)}")
        return result

    def reset(self) -> None:
        """游标回到脚本开头"""
        self._cursor = 0
