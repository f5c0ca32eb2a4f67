# trick_trainer/state.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .cards import SEATS, Card, Seat, Suit, create_rng, deal_new_hands


@dataclass(frozen=True)
class Play:
    seat: Seat
    card: Card


# Plays in play order. Completed tricks hold exactly four.
Trick = Tuple[Play, ...]

TRICKS_PER_HAND = 13
PLAYS_PER_TRICK = 4


@dataclass(frozen=True)
class TrumpConfig:
    enabled: bool = False
    suit: Suit = Suit.SPADES
    must_break: bool = True

    def __str__(self) -> str:
        if not self.enabled:
            return "no trump"
        rule = "must break" if self.must_break else "may lead"
        return f"{self.suit.name.title()} ({rule})"


def _zero_tricks() -> Dict[Seat, int]:
    return {seat: 0 for seat in SEATS}


@dataclass
class GameState:
    """
    One dealt hand of play.

    Transition functions in `engine` never mutate a GameState; they return a
    new one with copied containers, so an old instance stays valid for anyone
    still reading it.
    """
    hands: Dict[Seat, List[Card]]
    tricks_won: Dict[Seat, int] = field(default_factory=_zero_tricks)
    leader: Seat = Seat.ME
    turn: Seat = Seat.ME
    trick: Trick = ()
    trick_history: Tuple[Trick, ...] = ()
    trick_no: int = 1
    hand_complete: bool = False
    trump_broken: bool = False
    # {leader, turn} when the current trick began; restored by reset_trick.
    trick_start_leader: Seat = Seat.ME
    trick_start_turn: Seat = Seat.ME


@dataclass(frozen=True)
class ReplayState:
    hands: Dict[Seat, List[Card]]
    tricks_won: Dict[Seat, int]
    leader: Seat
    turn: Seat
    trump_broken: bool
    trick_no: int
    hand_complete: bool
    trick: Trick
    await_continue: bool


@dataclass(frozen=True)
class HistorySnapshot(ReplayState):
    history_slice: Tuple[Trick, ...] = ()
    trick_start_leader: Seat = Seat.ME
    trick_start_turn: Seat = Seat.ME


def init_game_state(seed: int) -> GameState:
    """Deal a fresh hand for `seed`. The human seat leads trick 1."""
    return GameState(hands=deal_new_hands(create_rng(seed)))
