"""
Round Command Service - 回合命令服务

处理所有回合状态变更操作，遵循CQRS模式。
命令服务负责：
- 开始正式回合和教程回合
- 把玩家行动交给回合控制器（教程回合先经过拦截器）
- 把核心层异常转换为命令结果
- 发布领域事件
- 验证回合不变量
"""

import logging
import random
import time
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..core.errors import (
    InvalidChoiceError,
    InvalidSlotError,
    PhaseError,
    RoundError,
)
from ..core.events import (
    ActionRefusedEvent,
    EventBus,
    EventType,
    PhaseChangedEvent,
    RoundActionEvent,
    RoundEndedEvent,
    RoundStartedEvent,
    get_event_bus,
)
from ..core.invariant import InvariantError, RoundInvariants
from ..core.round import RoundAction, RoundState, round_engine
from ..core.round.types import ActionType
from ..core.tutorial import TutorialInterceptor, create_tutorial_round
from .config_service import ConfigService, get_config_service
from .dto import RoundExitReport, RoundStartParams
from .types import CommandResult, QueryResult, ResultStatus

logger = logging.getLogger(__name__)

# 被接受的行动对应的领域事件；放弃回合只产生阶段转换事件
ACTION_EVENT_TYPES = {
    ActionType.PLACE: EventType.CARD_PLACED,
    ActionType.CAST_BLIND: EventType.BLIND_CAST,
    ActionType.SACRIFICE: EventType.CARD_SACRIFICED,
    ActionType.COMMIT_PEEK: EventType.GOGGLES_USED,
    ActionType.RESOLVE_BLIND: EventType.BLIND_RESOLVED,
    ActionType.TOGGLE_VOID_MODE: EventType.VOID_MODE_TOGGLED,
}


@dataclass
class RoundSession:
    """回合会话"""
    round_id: str
    state: RoundState
    created_at: float
    last_updated: float
    interceptor: Optional[TutorialInterceptor] = None

    @property
    def is_tutorial(self) -> bool:
        return self.interceptor is not None

    def update_timestamp(self) -> None:
        """更新最后修改时间"""
        self.last_updated = time.time()


class RoundCommandService:
    """回合命令服务"""

    def __init__(self, event_bus: Optional[EventBus] = None,
                 enable_invariant_checks: bool = True,
                 config_service: Optional[ConfigService] = None,
                 rules_profile: str = "default"):
        """
        初始化命令服务

        Args:
            event_bus: 事件总线，如果为None则使用全局事件总线
            enable_invariant_checks: 是否在每次行动后检查不变量
            config_service: 配置服务
            rules_profile: 回合规则配置名
        """
        self._event_bus = event_bus or get_event_bus()
        self._sessions: Dict[str, RoundSession] = {}
        self._enable_invariant_checks = enable_invariant_checks
        self._invariants = RoundInvariants()
        self._config_service = config_service or get_config_service()
        self._rules_profile = rules_profile

    def start_round(self, params: RoundStartParams, round_id: Optional[str] = None,
                    seed: Optional[int] = None) -> CommandResult:
        """
        开始正式回合

        Args:
            params: 会话层生成的回合参数
            round_id: 回合ID，如果为None则自动生成
            seed: 洗牌种子，None表示使用系统随机源

        Returns:
            命令执行结果，data中包含round_id
        """
        round_id = round_id or f"round_{uuid.uuid4().hex[:8]}"
        if round_id in self._sessions:
            return CommandResult.validation_error(
                f"回合 {round_id} 已存在",
                error_code="ROUND_ALREADY_EXISTS"
            )

        rules = self._config_service.get_round_rules_config(self._rules_profile).data
        try:
            state = RoundState.start(
                params.to_setup(),
                rng=random.Random(seed),
                blind_multiplier=rules.blind_multiplier,
                small_bet_bonus=rules.small_bet_bonus,
                jackpot_value=rules.jackpot_value,
            )
        except ValueError as e:
            return CommandResult.validation_error(f"回合参数无效: {e}", error_code="INVALID_PARAMS")

        self._open_session(round_id, state, interceptor=None)
        logger.info(f"回合 {round_id} 开始: {params.tier_slots} 个基座，牌库 {state.total_cards} 张")
        return CommandResult.success_result(f"回合 {round_id} 已开始", data={'round_id': round_id})

    def start_tutorial(self, round_id: Optional[str] = None) -> CommandResult:
        """开始使用预设牌序的教程回合"""
        round_id = round_id or f"tutorial_{uuid.uuid4().hex[:8]}"
        if round_id in self._sessions:
            return CommandResult.validation_error(
                f"回合 {round_id} 已存在",
                error_code="ROUND_ALREADY_EXISTS"
            )

        rules = self._config_service.get_round_rules_config(self._rules_profile).data
        state = create_tutorial_round(blind_multiplier=rules.blind_multiplier,
                                      sacrifices=rules.tutorial_sacrifices)
        self._open_session(round_id, state, interceptor=TutorialInterceptor())
        logger.info(f"教程回合 {round_id} 开始")
        return CommandResult.success_result("教程已开始", data={'round_id': round_id})

    def place(self, round_id: str, slot_index: int) -> CommandResult:
        return self._execute(round_id, RoundAction.place(slot_index))

    def cast_blind(self, round_id: str, slot_index: int) -> CommandResult:
        return self._execute(round_id, RoundAction.cast_blind(slot_index))

    def select_slot(self, round_id: str, slot_index: int) -> CommandResult:
        """
        选择基座：隐藏模式开启时进行盲注，否则放置明牌

        Args:
            round_id: 回合ID
            slot_index: 目标基座
        """
        session = self._sessions.get(round_id)
        if session is None:
            return self._round_not_found(round_id)
        if session.state.void_mode:
            return self.cast_blind(round_id, slot_index)
        return self.place(round_id, slot_index)

    def sacrifice(self, round_id: str) -> CommandResult:
        return self._execute(round_id, RoundAction.sacrifice())

    def resolve_blind(self, round_id: str, slot_index: int, value: int) -> CommandResult:
        return self._execute(round_id, RoundAction.resolve_blind(slot_index, value))

    def toggle_void_mode(self, round_id: str) -> CommandResult:
        return self._execute(round_id, RoundAction.toggle_void_mode())

    def commit_peek(self, round_id: str, use_blind: bool,
                    slot_index: Optional[int] = None) -> CommandResult:
        return self._execute(round_id, RoundAction.commit_peek(use_blind, slot_index))

    def abandon(self, round_id: str) -> CommandResult:
        return self._execute(round_id, RoundAction.abandon())

    def peek(self, round_id: str) -> CommandResult:
        """
        使用透镜查看牌库顶部两张牌，不改变回合状态

        Returns:
            命令执行结果，data['values']为两张牌的数值
        """
        session = self._sessions.get(round_id)
        if session is None:
            return self._round_not_found(round_id)
        try:
            cards = round_engine.peek(session.state)
        except RoundError as e:
            logger.info(f"回合 {round_id} 拒绝查看: {e.message}")
            self._publish_refusal(round_id, "PEEK", e)
            return CommandResult.business_rule_violation(e.message, error_code=e.error_code)
        return CommandResult.success_result(
            "透镜显示了接下来的两张牌",
            data={'values': [card.value for card in cards]}
        )

    def finish_round(self, round_id: str) -> CommandResult:
        """
        结束已分出胜负的回合，生成交给会话层的结束报告并移除会话

        Returns:
            命令执行结果，data['report']为RoundExitReport
        """
        session = self._sessions.get(round_id)
        if session is None:
            return self._round_not_found(round_id)
        if not session.state.is_finished:
            return CommandResult.validation_error(
                f"回合 {round_id} 尚未结束，当前阶段: {session.state.phase.name}",
                error_code="ROUND_NOT_FINISHED"
            )

        summary = round_engine.summarize(session.state)
        report = RoundExitReport.from_summary(summary, is_tutorial=session.is_tutorial)
        del self._sessions[round_id]
        logger.info(f"回合 {round_id} 结算: won={report.won}, profit={report.profit}")
        return CommandResult.success_result("回合已结算", data={'report': report})

    def get_session(self, round_id: str) -> QueryResult[RoundSession]:
        session = self._sessions.get(round_id)
        if session is None:
            return QueryResult.failure_result(f"回合 {round_id} 不存在", error_code="ROUND_NOT_FOUND")
        return QueryResult.success_result(session)

    def get_round_state(self, round_id: str) -> QueryResult[RoundState]:
        """获取回合状态快照"""
        session_result = self.get_session(round_id)
        if not session_result.success:
            return QueryResult.failure_result(session_result.message, error_code=session_result.error_code)
        return QueryResult.success_result(session_result.data.state)

    def get_active_rounds(self) -> List[str]:
        return list(self._sessions.keys())

    def _open_session(self, round_id: str, state: RoundState,
                      interceptor: Optional[TutorialInterceptor]) -> None:
        now = time.time()
        self._sessions[round_id] = RoundSession(
            round_id=round_id,
            state=state,
            created_at=now,
            last_updated=now,
            interceptor=interceptor,
        )
        self._event_bus.publish(RoundStartedEvent.create(
            round_id=round_id,
            slot_count=len(state.slots),
            deck_size=state.total_cards,
            is_tutorial=interceptor is not None,
        ))

    def _execute(self, round_id: str, action: RoundAction) -> CommandResult:
        """
        执行一次玩家行动

        行动被拒绝时会话状态保持不变。教程拦截器丢弃的行动返回IGNORED结果，
        不产生任何事件。
        """
        session = self._sessions.get(round_id)
        if session is None:
            return self._round_not_found(round_id)

        before = session.state

        def forward(forwarded: RoundAction) -> round_engine.RoundOutcome:
            outcome = round_engine.apply_action(before, forwarded)
            if self._enable_invariant_checks:
                self._invariants.check_all(outcome.state, before, raise_on_violation=True)
            return outcome

        try:
            if session.interceptor is not None:
                outcome = session.interceptor.intercept(action, forward)
                if outcome is None:
                    return CommandResult.ignored()
            else:
                outcome = forward(action)
        except (InvalidSlotError, InvalidChoiceError, PhaseError) as e:
            logger.debug(f"回合 {round_id} 拒绝 {action.action_type.name}: {e.message}")
            self._publish_refusal(round_id, action.action_type.name, e)
            return CommandResult.validation_error(e.message, error_code=e.error_code)
        except RoundError as e:
            logger.info(f"回合 {round_id} 拒绝 {action.action_type.name}: {e.message}")
            self._publish_refusal(round_id, action.action_type.name, e)
            return CommandResult.business_rule_violation(e.message, error_code=e.error_code)
        except InvariantError as e:
            logger.error(f"回合 {round_id} 在 {action.action_type.name} 后违反不变量: {e}", exc_info=True)
            return CommandResult.failure_result(
                f"不变量违反: {e}",
                error_code="INVARIANT_VIOLATION",
                status=ResultStatus.SYSTEM_ERROR
            )
        except Exception as e:
            logger.error(f"执行 {action.action_type.name} 时发生未知错误: {e}", exc_info=True)
            return CommandResult.failure_result(
                f"系统错误: {e}",
                error_code="SYSTEM_ERROR",
                status=ResultStatus.SYSTEM_ERROR
            )

        session.state = outcome.state
        session.update_timestamp()
        self._publish_outcome(round_id, action, before, outcome)

        messages = list(outcome.effects.messages)
        return CommandResult.success_result(
            messages[-1] if messages else "操作成功",
            data={'phase': outcome.state.phase.name, 'messages': messages}
        )

    def _publish_outcome(self, round_id: str, action: RoundAction, before: RoundState,
                         outcome: round_engine.RoundOutcome) -> None:
        event_type = ACTION_EVENT_TYPES.get(action.action_type)
        if event_type is not None:
            self._event_bus.publish(RoundActionEvent.create(
                round_id=round_id,
                event_type=event_type,
                slot_index=action.slot_index,
                value=action.value,
            ))

        for change in outcome.effects.phase_changes:
            self._event_bus.publish(PhaseChangedEvent.create(
                round_id=round_id,
                from_phase=change.from_phase.name,
                to_phase=change.to_phase.name,
            ))

        if not before.is_finished and outcome.state.is_finished:
            summary = round_engine.summarize(outcome.state)
            self._event_bus.publish(RoundEndedEvent.create(
                round_id=round_id,
                won=summary.won,
                profit=summary.profit,
            ))

    def _publish_refusal(self, round_id: str, action_name: str, error: RoundError) -> None:
        self._event_bus.publish(ActionRefusedEvent.create(
            round_id=round_id,
            action_type=action_name,
            error_code=error.error_code,
            reason=error.message,
        ))

    @staticmethod
    def _round_not_found(round_id: str) -> CommandResult:
        return CommandResult.validation_error(f"回合 {round_id} 不存在", error_code="ROUND_NOT_FOUND")

    def get_stats(self) -> Dict[str, Any]:
        """获取服务统计信息"""
        return {
            'active_rounds': len(self._sessions),
            'tutorial_rounds': sum(1 for s in self._sessions.values() if s.is_tutorial),
            'invariant_checks_enabled': self._enable_invariant_checks,
        }
