"""
Tutorial Unit Tests

测试教程脚本和拦截器：只有脚本规定的行动和目标被转发，其余行动静默丢弃。
"""

import pytest

from mask_sequence.core.errors import InvalidSlotError
from mask_sequence.core.round import ActionType, RoundAction, RoundPhase, round_engine
from mask_sequence.core.tutorial import (
    TUTORIAL_DECK,
    TUTORIAL_HAND,
    TUTORIAL_STEPS,
    TutorialInterceptor,
    TutorialStep,
    create_tutorial_round,
)
from mask_sequence.tests.anti_cheat.core_usage_checker import CoreUsageChecker

SCRIPTED_ACTIONS = [
    RoundAction.place(0),
    RoundAction.place(1),
    RoundAction.sacrifice(),
    RoundAction.toggle_void_mode(),
    RoundAction.cast_blind(2),
    RoundAction.place(3),
    RoundAction.resolve_blind(2, 10),
]


def recording_forward(calls):
    def forward(action):
        calls.append(action)
        return action
    return forward


class TestTutorialScript:

    def test_tutorial_round_fixture(self, tutorial_state):
        CoreUsageChecker.verify_real_objects(tutorial_state, "RoundState")
        assert tutorial_state.hand == TUTORIAL_HAND
        assert tutorial_state.deck.cards == TUTORIAL_DECK
        assert tutorial_state.budget.remaining == 3
        assert len(tutorial_state.slots) == 4
        assert not tutorial_state.goggles_available

    def test_tutorial_sacrifice_count(self):
        state = create_tutorial_round(sacrifices=5)
        assert state.budget.remaining == 5
        assert state.deck.cards == TUTORIAL_DECK

    def test_steps_match_scripted_actions(self):
        assert len(TUTORIAL_STEPS) == len(SCRIPTED_ACTIONS)
        for step, action in zip(TUTORIAL_STEPS, SCRIPTED_ACTIONS):
            assert step.matches(action)

    def test_step_without_target_accepts_any_slot(self):
        step = TutorialStep(0, "换牌", ActionType.SACRIFICE)
        assert step.matches(RoundAction.sacrifice())
        assert not step.matches(RoundAction.place(0))


class TestTutorialInterceptor:

    def test_right_target_wrong_action_is_dropped(self):
        interceptor = TutorialInterceptor()
        calls = []
        assert interceptor.intercept(RoundAction.cast_blind(0), recording_forward(calls)) is None
        assert calls == []
        assert interceptor.cursor == 0

    def test_right_action_wrong_target_is_dropped(self):
        interceptor = TutorialInterceptor()
        calls = []
        assert interceptor.intercept(RoundAction.place(1), recording_forward(calls)) is None
        assert calls == []
        assert interceptor.cursor == 0

    def test_prescribed_sequence_completes_script(self):
        interceptor = TutorialInterceptor()
        calls = []
        for action in SCRIPTED_ACTIONS:
            assert interceptor.intercept(action, recording_forward(calls)) is action
        assert calls == SCRIPTED_ACTIONS
        assert interceptor.is_complete
        assert interceptor.current_step is None

    def test_failed_forward_does_not_advance(self):
        interceptor = TutorialInterceptor()

        def failing(action):
            raise InvalidSlotError("refused")

        with pytest.raises(InvalidSlotError):
            interceptor.intercept(RoundAction.place(0), failing)
        assert interceptor.cursor == 0

    def test_unscripted_actions_pass_through(self):
        interceptor = TutorialInterceptor()
        calls = []
        interceptor.intercept(RoundAction.abandon(), recording_forward(calls))
        assert calls == [RoundAction.abandon()]
        assert interceptor.cursor == 0

    def test_complete_script_passes_everything(self):
        interceptor = TutorialInterceptor(steps=TUTORIAL_STEPS[:1])
        calls = []
        interceptor.intercept(RoundAction.place(0), recording_forward(calls))
        interceptor.intercept(RoundAction.place(3), recording_forward(calls))
        assert len(calls) == 2

    def test_reset(self):
        interceptor = TutorialInterceptor()
        interceptor.intercept(RoundAction.place(0), lambda action: action)
        interceptor.reset()
        assert interceptor.cursor == 0

    def test_empty_script_rejected(self):
        with pytest.raises(ValueError):
            TutorialInterceptor(steps=())

    def test_drives_real_engine_to_win(self, tutorial_state):
        interceptor = TutorialInterceptor()
        state = tutorial_state

        def forward(action):
            return round_engine.apply_action(state, action)

        for action in [RoundAction.sacrifice()] + SCRIPTED_ACTIONS:
            outcome = interceptor.intercept(action, forward)
            if outcome is not None:
                state = outcome.state
        assert state.phase == RoundPhase.WON
        assert round_engine.summarize(state).profit == 73
