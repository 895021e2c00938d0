"""
回合控制器

每个操作都是纯函数 (RoundState, 参数) -> RoundOutcome。
非法操作抛出RoundError子类，调用方持有的原状态不受影响。

阶段流转: PLAYING -> REVELATION -> {WON | LOST}，放弃回合可随时转为LOST。
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from ..deck.card import Card
from ..errors import (
    CapabilityMissingError,
    InsufficientCardsError,
    InvalidSlotError,
    PhaseError,
)
from .phase_logic import validate_transition
from .round_state import RoundState
from .scoring import compute_profit, verify_sequence
from .types import (
    ActionType,
    ProfitBreakdown,
    RoundAction,
    RoundEffects,
    RoundPhase,
    RoundSummary,
)

__all__ = [
    'RoundOutcome',
    'place',
    'cast_blind',
    'sacrifice',
    'peek',
    'commit_peek',
    'resolve_blind',
    'toggle_void_mode',
    'abandon',
    'apply_action',
    'profit_of',
    'summarize',
]

BLIND_CARD_COUNT = 2
PEEK_CARD_COUNT = 2


@dataclass(frozen=True)
class RoundOutcome:
    """行动结果：新状态和产生的效果"""
    state: RoundState
    effects: RoundEffects

    def __iter__(self):
        return iter((self.state, self.effects))


def place(state: RoundState, index: int) -> RoundOutcome:
    """
    将手牌明牌放入空基座，并抽下一张手牌.

    Raises:
        PhaseError: 不在PLAYING阶段或没有手牌
        InvalidSlotError: 基座越界或非空
    """
    _require_phase(state, RoundPhase.PLAYING)
    if state.hand is None:
        raise PhaseError("没有可放置的手牌")

    placed = state.hand
    slots = state.slots.place_open(index, placed)
    hand, deck = state.deck.draw()
    message = f"在基座 {index + 1} 放置了 {placed.value}"
    state = replace(state, slots=slots, hand=hand, deck=deck, void_mode=False)
    effects = RoundEffects(messages=(message,), cards_drawn=1 if hand is not None else 0)
    return _after_playing_move(state.with_messages(message), effects)


def cast_blind(state: RoundState, index: int) -> RoundOutcome:
    """
    从牌库顶部原子地抽两张暗牌放入空基座，当前手牌作废并重新抽一张.

    Raises:
        PhaseError: 不在PLAYING阶段
        InvalidSlotError: 基座越界或非空
        InsufficientCardsError: 牌库不足两张
    """
    _require_phase(state, RoundPhase.PLAYING)
    # 先校验基座，再动牌库
    state.slots.require_empty(index)
    candidates, deck = state.deck.draw_many(BLIND_CARD_COUNT)
    slots = state.slots.place_blind(index, candidates)
    discarded: Tuple[Card, ...] = (state.hand,) if state.hand is not None else ()
    hand, deck = deck.draw()

    message = f"向基座 {index + 1} 进行了隐藏出牌。"
    state = replace(
        state,
        slots=slots,
        deck=deck,
        hand=hand,
        discard=state.discard + discarded,
        void_mode=False,
    )
    effects = RoundEffects(
        messages=(message,),
        cards_drawn=BLIND_CARD_COUNT + (1 if hand is not None else 0),
        discarded=discarded,
    )
    return _after_playing_move(state.with_messages(message), effects)


def sacrifice(state: RoundState) -> RoundOutcome:
    """
    弃掉当前手牌并重新抽一张，消耗一次换牌机会.

    Raises:
        PhaseError: 不在PLAYING阶段
        SacrificeExhaustedError: 换牌次数为0
    """
    _require_phase(state, RoundPhase.PLAYING)
    budget, spent_extra = state.budget.spend()

    messages = []
    if spent_extra:
        messages.append("消耗了备用换牌。")
    messages.append("进行了换牌。")

    discarded: Tuple[Card, ...] = (state.hand,) if state.hand is not None else ()
    hand, deck = state.deck.draw()
    state = replace(
        state,
        budget=budget,
        hand=hand,
        deck=deck,
        discard=state.discard + discarded,
        void_mode=False,
        consumed_extra_sacrifice=state.consumed_extra_sacrifice or spent_extra,
    )
    effects = RoundEffects(
        messages=tuple(messages),
        cards_drawn=1 if hand is not None else 0,
        discarded=discarded,
    )
    return _after_playing_move(state.with_messages(*messages), effects)


def peek(state: RoundState) -> Tuple[Card, ...]:
    """
    使用虚空透镜查看牌库顶部两张牌，不改变任何状态.

    Raises:
        PhaseError: 不在PLAYING阶段
        CapabilityMissingError: 未持有或已消耗透镜
        InsufficientCardsError: 牌库不足两张
    """
    _require_phase(state, RoundPhase.PLAYING)
    _require_goggles(state)
    if len(state.deck) < PEEK_CARD_COUNT:
        raise InsufficientCardsError(PEEK_CARD_COUNT, len(state.deck))
    return state.deck.peek_front(PEEK_CARD_COUNT)


def commit_peek(state: RoundState, use_blind: bool,
                index: Optional[int] = None) -> RoundOutcome:
    """
    透镜查看后做出决定：按盲注放入基座，或按换牌弃掉手牌.

    只有当所选行动被接受时才消耗透镜。

    Raises:
        CapabilityMissingError: 未持有或已消耗透镜
        InvalidSlotError: 选择盲注但未给出基座
        以及cast_blind/sacrifice可能抛出的异常
    """
    _require_phase(state, RoundPhase.PLAYING)
    _require_goggles(state)
    if use_blind and index is None:
        raise InvalidSlotError("按盲注处理时必须指定基座")

    # 透镜消息排在后续行动和阶段消息之前
    message = "透镜生效。"
    state = state.with_messages(message)
    if use_blind:
        state, effects = cast_blind(state, index)
    else:
        state, effects = sacrifice(state)

    state = replace(state, consumed_goggles=True)
    return RoundOutcome(state, RoundEffects(messages=(message,)).merge(effects))


def resolve_blind(state: RoundState, index: int, value: int) -> RoundOutcome:
    """
    揭示盲注基座；全部盲注揭示后进行序列校验.

    Raises:
        PhaseError: 不在REVELATION阶段
        InvalidSlotError: 基座不是待揭示的盲注
        InvalidChoiceError: 数值不属于候选牌
    """
    _require_phase(state, RoundPhase.REVELATION)
    slots, discarded_card = state.slots.resolve_blind(index, value)

    message = f"揭示基座 {index + 1}: {value}"
    state = replace(state, slots=slots, discard=state.discard + (discarded_card,))
    effects = RoundEffects(messages=(message,), discarded=(discarded_card,))
    state = state.with_messages(message)

    if not slots.has_pending_blind():
        state, verdict_effects = _verify(state)
        effects = effects.merge(verdict_effects)
    return RoundOutcome(state, effects)


def toggle_void_mode(state: RoundState) -> RoundOutcome:
    """切换隐藏模式（界面信号，不影响牌局）"""
    _require_phase(state, RoundPhase.PLAYING)
    return RoundOutcome(replace(state, void_mode=not state.void_mode), RoundEffects())


def abandon(state: RoundState) -> RoundOutcome:
    """放弃本回合：未结束的回合直接判负，已结束的回合保持不变"""
    if state.phase.is_terminal:
        return RoundOutcome(state, RoundEffects())
    message = "放弃了本回合。"
    state, effects = _transition(state, RoundPhase.LOST, message)
    return RoundOutcome(state, effects)


def apply_action(state: RoundState, action: RoundAction) -> RoundOutcome:
    """
    按行动类型分发到对应的操作.

    Raises:
        InvalidSlotError: 行动缺少必需的参数
    """
    action_type = action.action_type
    if action_type == ActionType.PLACE:
        return place(state, _require_index(action))
    if action_type == ActionType.CAST_BLIND:
        return cast_blind(state, _require_index(action))
    if action_type == ActionType.SACRIFICE:
        return sacrifice(state)
    if action_type == ActionType.RESOLVE_BLIND:
        if action.value is None:
            raise InvalidSlotError("揭示行动必须指定数值")
        return resolve_blind(state, _require_index(action), action.value)
    if action_type == ActionType.TOGGLE_VOID_MODE:
        return toggle_void_mode(state)
    if action_type == ActionType.COMMIT_PEEK:
        return commit_peek(state, action.use_blind, action.slot_index)
    if action_type == ActionType.ABANDON:
        return abandon(state)
    raise PhaseError(f"未知的行动类型: {action_type}")


def profit_of(state: RoundState) -> ProfitBreakdown:
    """当前基座的收益明细（不论阶段）"""
    return compute_profit(
        state.slots,
        small_bet_active=state.modifiers.small_bet_granted,
        blind_multiplier=state.modifiers.blind_multiplier,
        small_bet_bonus=state.modifiers.small_bet_bonus,
    )


def summarize(state: RoundState) -> RoundSummary:
    """
    生成回合结束汇总.

    Raises:
        PhaseError: 回合尚未结束
    """
    if not state.phase.is_terminal:
        raise PhaseError(f"回合尚未结束，当前阶段: {state.phase.name}")
    won = state.phase == RoundPhase.WON
    return RoundSummary(
        won=won,
        profit=profit_of(state).total if won else 0,
        consumed_extra_sacrifice=state.consumed_extra_sacrifice,
        consumed_small_bet=won and state.modifiers.small_bet_granted,
        consumed_goggles=state.consumed_goggles,
        phase_history=state.phase_history,
    )


def _after_playing_move(state: RoundState, effects: RoundEffects) -> RoundOutcome:
    """PLAYING阶段每次变更后的终局检查"""
    if state.slots.is_filled():
        state, reveal_effects = _transition(state, RoundPhase.REVELATION, "仪式完成。揭示时刻到来...")
        effects = effects.merge(reveal_effects)
        if not state.slots.has_pending_blind():
            state, verdict_effects = _verify(state)
            effects = effects.merge(verdict_effects)
    elif state.hand is None and state.deck.is_empty:
        state, lost_effects = _transition(state, RoundPhase.LOST, "虚空枯竭。无牌可用。")
        effects = effects.merge(lost_effects)
    return RoundOutcome(state, effects)


def _verify(state: RoundState) -> Tuple[RoundState, RoundEffects]:
    if verify_sequence(state.slots):
        return _transition(state, RoundPhase.WON, "序列成立。")
    return _transition(state, RoundPhase.LOST, "序列崩溃。")


def _transition(state: RoundState, target: RoundPhase,
                message: str) -> Tuple[RoundState, RoundEffects]:
    change = validate_transition(state.phase, target)
    state = replace(
        state,
        phase=target,
        phase_history=state.phase_history + (change,),
    ).with_messages(message)
    return state, RoundEffects(messages=(message,), phase_changes=(change,))


def _require_phase(state: RoundState, phase: RoundPhase) -> None:
    if state.phase != phase:
        raise PhaseError(f"{state.phase.name} 阶段不接受该行动，需要 {phase.name}")


def _require_goggles(state: RoundState) -> None:
    if not state.goggles_available:
        raise CapabilityMissingError("未持有虚空透镜")


def _require_index(action: RoundAction) -> int:
    if action.slot_index is None:
        raise InvalidSlotError(f"{action.action_type.name} 行动必须指定基座")
    return action.slot_index
