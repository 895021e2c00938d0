"""
Round Engine Unit Tests

测试回合控制器的纯函数操作、终局检查、结算和阶段历史。
"""

import pytest

from mask_sequence.core.deck import Card
from mask_sequence.core.errors import (
    CapabilityMissingError,
    InsufficientCardsError,
    InvalidChoiceError,
    InvalidSlotError,
    PhaseError,
    SacrificeExhaustedError,
)
from mask_sequence.core.round import (
    MESSAGE_LOG_SIZE,
    ActionType,
    PhaseChange,
    RoundAction,
    RoundPhase,
    RoundSetup,
    RoundState,
    compute_profit,
    round_engine,
    verify_sequence,
)
from mask_sequence.core.slots import SlotRow, SlotState
from mask_sequence.tests.anti_cheat.core_usage_checker import CoreUsageChecker
from mask_sequence.tests.helpers import make_state


def play_open(state, *indices):
    for index in indices:
        state, _ = round_engine.place(state, index)
    return state


class TestRoundStart:

    def test_start_draws_first_hand(self, rng):
        state = RoundState.start(RoundSetup(tier_slots=4, tier_deck_size=15), rng=rng)
        CoreUsageChecker.verify_real_objects(state, "RoundState")
        assert state.phase == RoundPhase.PLAYING
        assert state.hand is not None
        assert len(state.deck) == 14
        assert state.total_cards == 15
        assert len(state.slots) == 4
        assert state.budget.remaining == 1

    def test_start_with_modifiers(self, rng):
        setup = RoundSetup(tier_slots=5, tier_deck_size=20, expansion_bonus=5, include_jackpot=True,
                           extra_sacrifice_granted=True, small_bet_granted=True, goggles_granted=True)
        state = RoundState.start(setup, rng=rng)
        assert state.total_cards == 26
        assert state.budget.remaining == 2
        assert state.modifiers.small_bet_granted
        assert state.goggles_available

    def test_start_with_custom_jackpot_value(self, rng):
        setup = RoundSetup(tier_slots=4, tier_deck_size=15, include_jackpot=True)
        state = RoundState.start(setup, rng=rng, jackpot_value=77)
        jackpots = [card for card in state.deck.cards + (state.hand,) if card.is_jackpot]
        assert [card.value for card in jackpots] == [77]

    def test_invalid_setup(self):
        with pytest.raises(ValueError):
            RoundSetup(tier_slots=0, tier_deck_size=15)


class TestPlace:

    def test_place_open_and_draw(self):
        state = make_state(3, [5, 1, 8])
        new_state, effects = round_engine.place(state, 0)
        assert new_state.slots[0].state == SlotState.OPEN
        assert new_state.slots[0].value == 3
        assert new_state.hand.value == 5
        assert len(new_state.deck) == 2
        assert effects.cards_drawn == 1
        # 原快照不变
        assert state.slots[0].state == SlotState.EMPTY
        assert state.hand.value == 3

    def test_place_on_occupied_slot(self):
        state = play_open(make_state(3, [5, 1, 8]), 0)
        with pytest.raises(InvalidSlotError):
            round_engine.place(state, 0)

    def test_place_out_of_range(self):
        with pytest.raises(InvalidSlotError):
            round_engine.place(make_state(3, [5]), 7)

    def test_place_resets_void_mode(self):
        state, _ = round_engine.toggle_void_mode(make_state(3, [5, 1]))
        assert state.void_mode
        state, _ = round_engine.place(state, 0)
        assert not state.void_mode


class TestCastBlind:

    def test_cast_blind_draws_two_and_discards_hand(self):
        state = make_state(3, [10, 12, 15])
        new_state, effects = round_engine.cast_blind(state, 2)
        slot = new_state.slots[2]
        assert slot.state == SlotState.BLIND_PENDING
        assert [card.value for card in slot.blind_candidates] == [10, 12]
        assert new_state.hand.value == 15
        assert [card.value for card in new_state.discard] == [3]
        assert effects.cards_drawn == 3
        assert new_state.cards_accounted() == new_state.total_cards

    def test_cast_blind_insufficient_cards(self):
        state = make_state(3, [10])
        with pytest.raises(InsufficientCardsError):
            round_engine.cast_blind(state, 0)
        assert len(state.deck) == 1

    def test_cast_blind_checks_slot_before_drawing(self):
        state = play_open(make_state(3, [5, 10, 12]), 0)
        with pytest.raises(InvalidSlotError):
            round_engine.cast_blind(state, 0)

    def test_cast_blind_filling_last_slot_enters_revelation(self):
        state = make_state(3, [10, 12], slots=1)
        new_state, effects = round_engine.cast_blind(state, 0)
        assert new_state.phase == RoundPhase.REVELATION
        assert effects.phase_changes == (PhaseChange(RoundPhase.PLAYING, RoundPhase.REVELATION),)


class TestSacrifice:

    def test_sacrifice_discards_and_draws(self):
        state = make_state(1, [8, 9])
        new_state, effects = round_engine.sacrifice(state)
        assert new_state.hand.value == 8
        assert [card.value for card in new_state.discard] == [1]
        assert new_state.budget.remaining == 0
        assert effects.messages == ("进行了换牌。",)

    def test_sacrifice_exhausted(self):
        state, _ = round_engine.sacrifice(make_state(1, [8, 9]))
        with pytest.raises(SacrificeExhaustedError):
            round_engine.sacrifice(state)
        assert state.budget.remaining == 0

    def test_extra_sacrifice_is_reported(self):
        state = make_state(1, [8, 9], extra=True)
        new_state, effects = round_engine.sacrifice(state)
        assert new_state.consumed_extra_sacrifice
        assert effects.messages == ("消耗了备用换牌。", "进行了换牌。")

    def test_sacrifice_last_card_loses_round(self):
        state = make_state(1, [])
        new_state, _ = round_engine.sacrifice(state)
        assert new_state.hand is None
        assert new_state.phase == RoundPhase.LOST
        assert new_state.messages[-1] == "虚空枯竭。无牌可用。"


class TestDeckExhaustion:

    def test_last_card_placed_without_filling_row(self):
        state, _ = round_engine.place(make_state(3, []), 0)
        assert state.phase == RoundPhase.LOST

    def test_no_action_after_loss(self):
        state, _ = round_engine.place(make_state(3, []), 0)
        with pytest.raises(PhaseError):
            round_engine.sacrifice(state)


class TestPeek:

    def test_peek_requires_goggles(self):
        with pytest.raises(CapabilityMissingError):
            round_engine.peek(make_state(3, [5, 7, 9]))

    def test_peek_is_read_only(self):
        state = make_state(3, [5, 7, 9], goggles=True)
        cards = round_engine.peek(state)
        assert [card.value for card in cards] == [5, 7]
        assert len(state.deck) == 3
        assert state.goggles_available

    def test_peek_insufficient_cards(self):
        with pytest.raises(InsufficientCardsError):
            round_engine.peek(make_state(3, [5], goggles=True))

    def test_commit_peek_as_blind(self):
        state = make_state(3, [5, 7, 9], goggles=True)
        new_state, effects = round_engine.commit_peek(state, use_blind=True, index=1)
        assert new_state.slots[1].state == SlotState.BLIND_PENDING
        assert new_state.consumed_goggles
        assert not new_state.goggles_available
        assert "透镜生效。" in effects.messages
        with pytest.raises(CapabilityMissingError):
            round_engine.peek(new_state)

    def test_commit_peek_as_sacrifice(self):
        state = make_state(3, [5, 7, 9], goggles=True)
        new_state, _ = round_engine.commit_peek(state, use_blind=False)
        assert new_state.hand.value == 5
        assert new_state.consumed_goggles

    def test_refused_commit_keeps_goggles(self):
        state = make_state(3, [5, 7, 9], sacrifices=0, goggles=True)
        with pytest.raises(SacrificeExhaustedError):
            round_engine.commit_peek(state, use_blind=False)
        assert state.goggles_available

    def test_commit_peek_message_order(self):
        state = make_state(3, [5, 7, 9], slots=1, goggles=True)
        new_state, effects = round_engine.commit_peek(state, use_blind=True, index=0)
        assert new_state.phase == RoundPhase.REVELATION
        assert effects.messages[0] == "透镜生效。"
        assert new_state.messages == effects.messages

    def test_commit_blind_requires_slot(self):
        with pytest.raises(InvalidSlotError):
            round_engine.commit_peek(make_state(3, [5, 7], goggles=True), use_blind=True)


class TestRevelation:

    @pytest.fixture
    def revelation_state(self):
        # 2, 4 明牌；基座2盲注 10/11；手牌9被作废
        state = play_open(make_state(2, [4, 9, 10, 11], slots=3), 0, 1)
        state, _ = round_engine.cast_blind(state, 2)
        assert state.phase == RoundPhase.REVELATION
        return state

    def test_actions_refused_during_revelation(self, revelation_state):
        with pytest.raises(PhaseError):
            round_engine.sacrifice(revelation_state)

    def test_resolve_wrong_value(self, revelation_state):
        with pytest.raises(InvalidChoiceError):
            round_engine.resolve_blind(revelation_state, 2, 99)

    def test_resolve_open_slot(self, revelation_state):
        with pytest.raises(InvalidSlotError):
            round_engine.resolve_blind(revelation_state, 0, 2)

    def test_resolve_wins_and_scores(self, revelation_state):
        state, effects = round_engine.resolve_blind(revelation_state, 2, 10)
        assert state.phase == RoundPhase.WON
        assert round_engine.profit_of(state).total == 56
        assert state.cards_accounted() == state.total_cards
        assert [change.to_phase for change in state.phase_history] == [RoundPhase.REVELATION, RoundPhase.WON]
        assert effects.messages[-1] == "序列成立。"

    def test_verdict_waits_for_every_blind(self):
        # 基座0盲注 2/3，基座2盲注 4/5，基座1明牌6
        state = make_state(1, [2, 3, 9, 4, 5, 6], slots=3)
        state, _ = round_engine.cast_blind(state, 0)
        state, _ = round_engine.cast_blind(state, 2)
        state, _ = round_engine.place(state, 1)
        assert state.phase == RoundPhase.REVELATION

        state, effects = round_engine.resolve_blind(state, 0, 3)
        assert state.phase == RoundPhase.REVELATION
        assert effects.phase_changes == ()

        state, _ = round_engine.resolve_blind(state, 2, 5)
        assert state.phase == RoundPhase.LOST
        assert [slot.effective_value for slot in state.slots] == [3, 6, 5]
        assert round_engine.summarize(state).profit == 0

    def test_resolve_outside_revelation(self):
        with pytest.raises(PhaseError):
            round_engine.resolve_blind(make_state(3, [5]), 0, 3)


class TestVerdict:

    def test_non_decreasing_sequence_wins(self):
        state = play_open(make_state(3, [5, 5, 8]), 0, 1, 2, 3)
        assert state.phase == RoundPhase.WON
        summary = round_engine.summarize(state)
        assert summary.won
        assert summary.profit == 21

    def test_decreasing_pair_loses(self):
        state = play_open(make_state(3, [5, 4, 8]), 0, 1, 2, 3)
        assert state.phase == RoundPhase.LOST
        assert state.messages[-1] == "序列崩溃。"
        assert round_engine.summarize(state).profit == 0

    def test_verify_sequence_treats_equal_as_valid(self):
        row = SlotRow.create(2).place_open(0, Card("a", 5)).place_open(1, Card("b", 5))
        assert verify_sequence(row)


class TestProfit:

    def test_profit_formula(self):
        row = SlotRow.create(3).place_open(0, Card("a", 2)).place_open(1, Card("b", 4))
        row = row.place_blind(2, (Card("c", 10), Card("d", 11)))
        row, _ = row.resolve_blind(2, 10)
        assert compute_profit(row).total == 56
        assert compute_profit(row, small_bet_active=True).total == 106

    def test_pending_blind_scores_nothing(self):
        row = SlotRow.create(1).place_blind(0, (Card("c", 10), Card("d", 11)))
        assert compute_profit(row).total == 0

    def test_small_bet_consumed_only_on_win(self):
        won = play_open(make_state(3, [5, 5, 8], small_bet=True), 0, 1, 2, 3)
        lost = play_open(make_state(3, [5, 4, 8], small_bet=True), 0, 1, 2, 3)
        assert round_engine.summarize(won).consumed_small_bet
        assert round_engine.summarize(won).profit == 71
        assert not round_engine.summarize(lost).consumed_small_bet


class TestAbandonAndSummary:

    def test_abandon_playing_round(self):
        state, effects = round_engine.abandon(make_state(3, [5]))
        assert state.phase == RoundPhase.LOST
        assert effects.phase_changes == (PhaseChange(RoundPhase.PLAYING, RoundPhase.LOST),)

    def test_abandon_terminal_round_is_noop(self):
        state, _ = round_engine.abandon(make_state(3, [5]))
        again, effects = round_engine.abandon(state)
        assert again is state
        assert effects.phase_changes == ()

    def test_summarize_requires_terminal_phase(self):
        with pytest.raises(PhaseError):
            round_engine.summarize(make_state(3, [5]))


class TestApplyAction:

    def test_dispatch_matches_direct_call(self):
        state = make_state(3, [5, 1, 8])
        via_action, _ = round_engine.apply_action(state, RoundAction.place(0))
        direct, _ = round_engine.place(state, 0)
        assert via_action == direct

    def test_missing_slot_index(self):
        with pytest.raises(InvalidSlotError):
            round_engine.apply_action(make_state(3, [5]), RoundAction(ActionType.PLACE))


def test_message_log_keeps_latest():
    state = make_state(1, list(range(2, 12)), slots=8, sacrifices=8)
    for _ in range(MESSAGE_LOG_SIZE + 2):
        state, _ = round_engine.sacrifice(state)
    assert len(state.messages) == MESSAGE_LOG_SIZE
    assert state.messages[-1] == "进行了换牌。"
