# trick_trainer/flow.py
from __future__ import annotations

from dataclasses import dataclass

from .cards import Seat


@dataclass(frozen=True)
class PlayGate:
    lead_prompt_active: bool = False
    await_continue: bool = False
    hand_complete: bool = False
    viewing_history: bool = False
    bidding_active: bool = False
    bidding_complete: bool = False


@dataclass(frozen=True)
class AdvanceGate:
    await_continue: bool = False
    hand_complete: bool = False
    viewing_history: bool = False


@dataclass(frozen=True)
class AiGate:
    turn: Seat
    leader: Seat
    trick_length: int = 0
    ai_enabled: bool = True
    bidding_active: bool = False
    bidding_complete: bool = False
    resolving: bool = False
    hand_complete: bool = False
    await_continue: bool = False
    viewing_history: bool = False
    ai_plays_me: bool = False
    lead_prompt_active: bool = False
    suit_count_prompt_active: bool = False


def can_play_card(gate: PlayGate) -> bool:
    """Whether the table accepts a card from the human right now."""
    return (
        not gate.lead_prompt_active
        and not gate.await_continue
        and not gate.hand_complete
        and not gate.viewing_history
        and (not gate.bidding_active or gate.bidding_complete)
    )


def can_advance_trick(gate: AdvanceGate) -> bool:
    return gate.await_continue and not gate.hand_complete and not gate.viewing_history


def should_run_ai(gate: AiGate) -> bool:
    """Whether an automated seat should take its turn now."""
    if not gate.ai_enabled:
        return False
    if gate.bidding_active and not gate.bidding_complete:
        return False
    if gate.resolving or gate.hand_complete or gate.await_continue:
        return False
    if gate.viewing_history:
        return False
    if gate.turn == Seat.ME and not gate.ai_plays_me:
        return False
    if gate.lead_prompt_active or gate.suit_count_prompt_active:
        return False
    # A fresh trick must be opened by its leader.
    if gate.trick_length == 0 and gate.turn != gate.leader:
        return False
    return True
