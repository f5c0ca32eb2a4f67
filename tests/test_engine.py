# tests/test_engine.py
import logging
import random

import pytest

from trick_trainer.agents import BiddingTrickAgent, RandomTrickAgent
from trick_trainer.cards import SEATS, Seat, Suit, card_from_id
from trick_trainer.engine import (
    HandEngine,
    advance_to_next_trick,
    apply_play,
    compute_legal_by_seat,
    explain_refusal,
    is_hand_in_progress,
    is_play_legal,
    reset_trick,
    resolve_trick,
)
from trick_trainer.rules import PlayRefusal
from trick_trainer.state import GameState, Play, TrumpConfig

NO_TRUMP = TrumpConfig()
SPADES = TrumpConfig(enabled=True, suit=Suit.SPADES, must_break=False)


def _make_state(**kwargs) -> GameState:
    hands = {
        Seat.ME: [card_from_id("H10"), card_from_id("C9")],
        Seat.LEFT: [card_from_id("S2"), card_from_id("D4")],
        Seat.ACROSS: [card_from_id("H5"), card_from_id("C2")],
        Seat.RIGHT: [card_from_id("H7"), card_from_id("D9")],
    }
    return GameState(hands=hands, **kwargs)


def _play_all(state, trump, *plays):
    for seat, cid in plays:
        state = apply_play(state, Play(seat, card_from_id(cid)), trump)
    return state


def _hand_ids(state):
    return {seat: sorted(c.id for c in cards) for seat, cards in state.hands.items()}


def test_apply_play_moves_card_and_advances_turn():
    state = _make_state()
    after = apply_play(state, Play(Seat.ME, card_from_id("H10")), NO_TRUMP)

    assert [c.id for c in after.hands[Seat.ME]] == ["C9"]
    assert after.turn == Seat.LEFT
    assert len(after.trick) == 1
    assert after.trick_start_leader == Seat.ME
    # Original state untouched.
    assert len(state.hands[Seat.ME]) == 2
    assert state.trick == ()


def test_turn_holds_after_fourth_play_until_resolved():
    state = _play_all(
        _make_state(),
        NO_TRUMP,
        (Seat.ME, "H10"),
        (Seat.LEFT, "D4"),
        (Seat.ACROSS, "H5"),
        (Seat.RIGHT, "H7"),
    )
    assert state.turn == Seat.RIGHT

    resolved = resolve_trick(state, NO_TRUMP)
    assert resolved.tricks_won[Seat.ME] == 1
    assert resolved.leader == resolved.turn == Seat.ME
    assert len(resolved.trick_history) == 1
    # The trick stays visible until advanced.
    assert len(resolved.trick) == 4
    assert resolved.trick_no == 1

    advanced = advance_to_next_trick(resolved)
    assert advanced.trick == ()
    assert advanced.trick_no == 2


def test_resolve_and_advance_are_noops_out_of_order():
    state = _play_all(_make_state(), NO_TRUMP, (Seat.ME, "H10"))
    assert resolve_trick(state, NO_TRUMP) is state

    empty = _make_state()
    assert advance_to_next_trick(empty) is empty
    assert reset_trick(empty, NO_TRUMP) is empty


def test_thirteenth_trick_completes_the_hand():
    state = _play_all(
        _make_state(trick_no=13),
        NO_TRUMP,
        (Seat.ME, "H10"),
        (Seat.LEFT, "D4"),
        (Seat.ACROSS, "H5"),
        (Seat.RIGHT, "H7"),
    )
    resolved = resolve_trick(state, NO_TRUMP)
    assert resolved.hand_complete
    assert advance_to_next_trick(resolved) is resolved


def test_reset_undoes_an_unresolved_trick():
    before = _make_state()
    state = _play_all(before, NO_TRUMP, (Seat.ME, "H10"), (Seat.LEFT, "D4"))

    undone = reset_trick(state, NO_TRUMP)
    assert _hand_ids(undone) == _hand_ids(before)
    assert undone.leader == before.leader
    assert undone.turn == before.turn
    assert undone.trick == ()
    assert undone.tricks_won == before.tricks_won


def test_reset_of_an_unresolved_full_trick_keeps_earlier_credit():
    state = _play_all(
        _make_state(),
        NO_TRUMP,
        (Seat.ME, "H10"),
        (Seat.LEFT, "D4"),
        (Seat.ACROSS, "H5"),
        (Seat.RIGHT, "H7"),
    )
    before = advance_to_next_trick(resolve_trick(state, NO_TRUMP))
    assert before.tricks_won[Seat.ME] == 1

    # Trick two is full and won by ME but the resolve never ran.
    state = _play_all(
        before,
        NO_TRUMP,
        (Seat.ME, "C9"),
        (Seat.LEFT, "S2"),
        (Seat.ACROSS, "C2"),
        (Seat.RIGHT, "D9"),
    )
    undone = reset_trick(state, NO_TRUMP)

    assert undone.tricks_won == before.tricks_won
    assert undone.trick_history == before.trick_history
    assert sum(undone.tricks_won.values()) == len(undone.trick_history)
    assert _hand_ids(undone) == _hand_ids(before)
    assert undone.leader == undone.turn == Seat.ME
    assert undone.trick == ()


def test_reset_of_resolved_trick_unbreaks_trump():
    before = _make_state()
    state = _play_all(
        before,
        SPADES,
        (Seat.ME, "H10"),
        (Seat.LEFT, "S2"),
        (Seat.ACROSS, "H5"),
        (Seat.RIGHT, "H7"),
    )
    resolved = resolve_trick(state, SPADES)
    assert resolved.trump_broken
    assert resolved.tricks_won[Seat.LEFT] == 1
    assert resolved.leader == Seat.LEFT

    undone = reset_trick(resolved, SPADES)
    assert not undone.trump_broken
    assert undone.tricks_won[Seat.LEFT] == 0
    assert undone.trick_history == ()
    assert undone.leader == undone.turn == Seat.ME
    assert _hand_ids(undone) == _hand_ids(before)
    assert not undone.hand_complete


def test_compute_legal_by_seat_and_refusals():
    state = _play_all(_make_state(), NO_TRUMP, (Seat.ME, "H10"))
    legal = compute_legal_by_seat(state, NO_TRUMP)

    assert legal[Seat.ACROSS] == {"H5"}
    assert legal[Seat.LEFT] == {"S2", "D4"}
    assert is_play_legal(state, Seat.ACROSS, card_from_id("H5"), NO_TRUMP)
    assert not is_play_legal(state, Seat.ACROSS, card_from_id("C2"), NO_TRUMP)

    assert explain_refusal(
        state, Seat.ACROSS, card_from_id("H5"), NO_TRUMP
    ) == PlayRefusal.NOT_YOUR_TURN
    assert explain_refusal(state, Seat.LEFT, card_from_id("D4"), NO_TRUMP) is None


def test_only_the_leader_may_open_a_trick():
    state = _make_state()
    assert explain_refusal(
        state, Seat.LEFT, card_from_id("D4"), NO_TRUMP
    ) == PlayRefusal.NOT_YOUR_TURN
    assert explain_refusal(
        _make_state(hand_complete=True), Seat.ME, card_from_id("H10"), NO_TRUMP
    ) == PlayRefusal.HAND_COMPLETE


def test_is_hand_in_progress():
    state = _make_state()
    assert not is_hand_in_progress(state)
    assert is_hand_in_progress(_play_all(state, NO_TRUMP, (Seat.ME, "C9")))


def _random_agents(base_seed: int = 100):
    return {
        seat: RandomTrickAgent(rng=random.Random(base_seed + i))
        for i, seat in enumerate(SEATS)
    }


def test_full_hand_basic_invariants():
    engine = HandEngine(_random_agents(), seed=999, trump=SPADES)
    outcome = engine.play_hand()
    state = outcome.state

    assert state.hand_complete
    assert len(state.trick_history) == 13
    assert sum(state.tricks_won.values()) == 13
    assert all(not cards for cards in state.hands.values())
    assert outcome.bid_state is None

    played = [p.card.id for trick in state.trick_history for p in trick]
    assert len(set(played)) == 52


def test_full_hand_with_bidding():
    agents = {
        seat: BiddingTrickAgent(rng=random.Random(i)) for i, seat in enumerate(SEATS)
    }
    outcome = HandEngine(agents, seed=3, trump=SPADES, bidding=True).play_hand()

    bids = outcome.bid_state.bids
    assert all(bid is not None and 0 <= bid <= 13 for bid in bids.values())
    assert sum(outcome.state.tricks_won.values()) == 13


def test_missing_agent_is_rejected():
    agents = _random_agents()
    del agents[Seat.RIGHT]
    with pytest.raises(ValueError):
        HandEngine(agents, seed=1)


class _NoCardAgent:
    def choose_bid(self, observation):
        return 0

    def choose_card(self, observation):
        return None


def test_illegal_choice_falls_back_to_a_legal_card(caplog):
    agents = _random_agents()
    agents[Seat.ME] = _NoCardAgent()

    with caplog.at_level(logging.WARNING, logger="trick_trainer.engine"):
        outcome = HandEngine(agents, seed=5).play_hand()

    assert outcome.state.hand_complete
    assert "chose illegal card" in caplog.text
