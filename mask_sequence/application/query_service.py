"""
Round Query Service - 回合查询服务

处理所有回合只读操作，遵循CQRS模式。
查询服务负责：
- 生成供UI渲染的回合视图
- 查询可用行动
- 收益预估和放置风险提示
- 查询当前教程步骤
"""

from typing import List, Optional

from ..core.round import ProfitBreakdown, RoundPhase, RoundState, is_move_dangerous, profit_of
from ..core.round.types import ActionType
from ..core.slots.types import Slot, SlotState
from ..core.tutorial import INTERCEPTED_ACTIONS, TutorialStep
from .command_service import RoundCommandService, RoundSession
from .dto import RoundView, SlotView
from .types import QueryResult


PEEK_ACTION = "PEEK"


class RoundQueryService:
    """回合查询服务"""

    def __init__(self, command_service: RoundCommandService):
        """
        初始化查询服务

        Args:
            command_service: 持有回合会话的命令服务
        """
        self._command_service = command_service

    def get_round_view(self, round_id: str) -> QueryResult[RoundView]:
        """
        获取回合视图

        揭示阶段之前，盲注基座只显示为待揭示，不暴露候选数值。

        Args:
            round_id: 回合ID

        Returns:
            查询结果，包含RoundView
        """
        session_result = self._command_service.get_session(round_id)
        if not session_result.success:
            return QueryResult.failure_result(session_result.message, error_code=session_result.error_code)

        session = session_result.data
        state = session.state
        step = self._current_step(session)
        view = RoundView(
            round_id=round_id,
            phase=state.phase.name,
            slots=[self._slot_view(slot, state.phase) for slot in state.slots],
            deck_count=len(state.deck),
            sacrifices_left=state.budget.remaining,
            hand_value=state.hand.value if state.hand is not None else None,
            hand_is_jackpot=state.hand.is_jackpot if state.hand is not None else False,
            void_mode=state.void_mode,
            goggles_available=state.goggles_available,
            can_cast_blind=len(state.deck) >= 2,
            potential_profit=profit_of(state).total,
            messages=list(state.messages),
            is_tutorial=session.is_tutorial,
            tutorial_text=step.text if step is not None else None,
        )
        return QueryResult.success_result(view)

    def get_available_actions(self, round_id: str) -> QueryResult[List[str]]:
        """
        获取当前可用的行动名称

        教程进行中只列出当前步骤规定的行动（以及不受教程管控的行动）。
        """
        session_result = self._command_service.get_session(round_id)
        if not session_result.success:
            return QueryResult.failure_result(session_result.message, error_code=session_result.error_code)

        session = session_result.data
        actions = self._actions_for(session.state)
        step = self._current_step(session)
        if step is not None:
            actions = [
                name for name in actions
                if name not in ActionType.__members__
                or ActionType[name] not in INTERCEPTED_ACTIONS
                or ActionType[name] == step.required_action
            ]
        return QueryResult.success_result(actions)

    def get_profit_preview(self, round_id: str) -> QueryResult[ProfitBreakdown]:
        """按当前基座预估收益（不论是否获胜）"""
        state_result = self._command_service.get_round_state(round_id)
        if not state_result.success:
            return QueryResult.failure_result(state_result.message, error_code=state_result.error_code)
        return QueryResult.success_result(profit_of(state_result.data))

    def check_move_danger(self, round_id: str, slot_index: int,
                          value: Optional[int] = None) -> QueryResult[bool]:
        """
        检查把一个数值放入基座是否会与两侧已知数值冲突

        Args:
            round_id: 回合ID
            slot_index: 目标基座
            value: 要检查的数值，None表示当前手牌
        """
        state_result = self._command_service.get_round_state(round_id)
        if not state_result.success:
            return QueryResult.failure_result(state_result.message, error_code=state_result.error_code)

        state = state_result.data
        if not 0 <= slot_index < len(state.slots):
            return QueryResult.failure_result(f"基座索引越界: {slot_index}", error_code="INVALID_SLOT")
        if value is None:
            if state.hand is None:
                return QueryResult.failure_result("没有手牌", error_code="NO_HAND")
            value = state.hand.value
        return QueryResult.success_result(is_move_dangerous(state.slots, slot_index, value))

    def get_tutorial_step(self, round_id: str) -> QueryResult[Optional[TutorialStep]]:
        """获取当前教程步骤；非教程回合或教程已完成时为None"""
        session_result = self._command_service.get_session(round_id)
        if not session_result.success:
            return QueryResult.failure_result(session_result.message, error_code=session_result.error_code)
        return QueryResult.success_result(self._current_step(session_result.data))

    @staticmethod
    def _current_step(session: RoundSession) -> Optional[TutorialStep]:
        if session.interceptor is None:
            return None
        return session.interceptor.current_step

    @staticmethod
    def _slot_view(slot: Slot, phase: RoundPhase) -> SlotView:
        revealed = phase != RoundPhase.PLAYING
        candidates = []
        if slot.blind_candidates is not None and revealed:
            candidates = [card.value for card in slot.blind_candidates]
        value = slot.effective_value if slot.state != SlotState.BLIND_PENDING else None
        return SlotView(
            index=slot.index,
            state=slot.state.name,
            value=value,
            candidate_values=candidates,
        )

    @staticmethod
    def _actions_for(state: RoundState) -> List[str]:
        if state.phase == RoundPhase.REVELATION:
            return [ActionType.RESOLVE_BLIND.name, ActionType.ABANDON.name]
        if state.phase != RoundPhase.PLAYING:
            return []

        actions = []
        has_empty = bool(state.slots.empty_indices())
        if has_empty and state.hand is not None:
            actions.append(ActionType.PLACE.name)
        if has_empty and len(state.deck) >= 2:
            actions.append(ActionType.CAST_BLIND.name)
        if state.budget.can_spend:
            actions.append(ActionType.SACRIFICE.name)
        if state.goggles_available and len(state.deck) >= 2:
            actions.append(PEEK_ACTION)
            actions.append(ActionType.COMMIT_PEEK.name)
        actions.append(ActionType.TOGGLE_VOID_MODE.name)
        actions.append(ActionType.ABANDON.name)
        return actions
