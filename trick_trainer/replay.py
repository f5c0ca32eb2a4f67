# trick_trainer/replay.py
"""
Rebuild hand state at any point of trick history.

Nothing is stored per step: the deal is re-created from the seed and the
recorded plays are replayed on top of it, so a snapshot is a pure function
of (history, trick index, step, seed, trump).
"""
from __future__ import annotations

from typing import Dict, List, Sequence

from .cards import SEATS, Card, Seat, create_rng, deal_new_hands
from .rules import determine_trick_winner, is_trump, next_seat
from .state import (
    PLAYS_PER_TRICK,
    TRICKS_PER_HAND,
    GameState,
    HistorySnapshot,
    Play,
    ReplayState,
    Trick,
    TrumpConfig,
)


def _remove_played(hands: Dict[Seat, List[Card]], play: Play) -> None:
    hand = hands[play.seat]
    if play.card in hand:
        hand.remove(play.card)


def replay_state_from_history(
    history: Sequence[Trick],
    seed: int,
    trump: TrumpConfig,
    pause_before_next_trick: bool = False,
) -> ReplayState:
    """
    State after every trick in `history` has been played and resolved.

    With `pause_before_next_trick`, the last trick is left on the table and
    the state waits for an explicit continue, as it would live.
    """
    hands = deal_new_hands(create_rng(seed))
    tricks_won = {seat: 0 for seat in SEATS}
    leader = Seat.ME
    trump_broken = False

    for trick in history:
        for play in trick:
            _remove_played(hands, play)
            if is_trump(play.card, trump):
                trump_broken = True
        if len(trick) == PLAYS_PER_TRICK:
            winner = determine_trick_winner(trick, trump)
            tricks_won[winner] += 1
            leader = winner

    completed = len(history)
    hand_complete = completed >= TRICKS_PER_HAND
    await_continue = False
    trick: Trick = ()
    trick_no = completed + 1

    if completed > 0:
        if hand_complete:
            trick_no = TRICKS_PER_HAND
            trick = tuple(history[-1])
        elif pause_before_next_trick:
            await_continue = True
            trick_no = completed
            trick = tuple(history[-1])

    return ReplayState(
        hands=hands,
        tricks_won=tricks_won,
        leader=leader,
        turn=leader,
        trump_broken=trump_broken,
        trick_no=trick_no,
        hand_complete=hand_complete,
        trick=trick,
        await_continue=await_continue,
    )


def build_history_snapshot(
    history: Sequence[Trick],
    trick_index: int,
    step: int,
    seed: int,
    trump: TrumpConfig,
) -> HistorySnapshot:
    """
    The table as it looked `step` plays into trick `trick_index` (0-based).

    Step 0 is the moment before the trick's lead; step 4 is the trick fully
    played and resolved, waiting for continue, with the trick included in
    `history_slice`.
    """
    prior = tuple(history[:trick_index])
    base = replay_state_from_history(prior, seed, trump)
    trick_plays: Trick = (
        tuple(history[trick_index]) if trick_index < len(history) else ()
    )
    max_step = max(0, min(step, len(trick_plays)))

    hands = {seat: list(cards) for seat, cards in base.hands.items()}
    tricks_won = dict(base.tricks_won)
    leader = base.leader
    turn = base.leader
    trump_broken = base.trump_broken

    shown = trick_plays[:max_step]
    for play in shown:
        _remove_played(hands, play)
        if is_trump(play.card, trump):
            trump_broken = True
        turn = next_seat(play.seat)

    await_continue = False
    hand_complete = False
    history_slice = prior

    if max_step >= PLAYS_PER_TRICK and len(trick_plays) == PLAYS_PER_TRICK:
        winner = determine_trick_winner(trick_plays, trump)
        tricks_won[winner] += 1
        leader = winner
        turn = winner
        await_continue = True
        history_slice = prior + (trick_plays,)
        hand_complete = trick_index >= TRICKS_PER_HAND - 1

    return HistorySnapshot(
        hands=hands,
        tricks_won=tricks_won,
        leader=leader,
        turn=turn,
        trump_broken=trump_broken,
        trick_no=trick_index + 1,
        hand_complete=hand_complete,
        trick=shown,
        await_continue=await_continue,
        history_slice=history_slice,
        trick_start_leader=base.leader,
        trick_start_turn=base.leader,
    )


def resume_from_snapshot(snapshot: HistorySnapshot) -> GameState:
    """
    Live state that continues play from a history snapshot.

    Any tricks after the snapshot are discarded, and the trick-start seats
    are carried over so `reset_trick` still works after the rewind.
    """
    return GameState(
        hands={seat: list(cards) for seat, cards in snapshot.hands.items()},
        tricks_won=dict(snapshot.tricks_won),
        leader=snapshot.leader,
        turn=snapshot.turn,
        trick=tuple(snapshot.trick),
        trick_history=tuple(snapshot.history_slice),
        trick_no=snapshot.trick_no,
        hand_complete=snapshot.hand_complete,
        trump_broken=snapshot.trump_broken,
        trick_start_leader=snapshot.trick_start_leader,
        trick_start_turn=snapshot.trick_start_turn,
    )
