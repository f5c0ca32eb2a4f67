# trick_trainer/voids.py
from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from .cards import HAND_SIZE, OPPONENTS, SEATS, Card, Seat, Suit
from .rules import trick_lead_suit
from .state import Play, Trick

# Opponent seat -> suit -> observed void.
VoidGrid = Dict[Seat, Dict[Suit, bool]]


def create_void_grid() -> VoidGrid:
    return {seat: {suit: False for suit in Suit} for seat in OPPONENTS}


def compute_actual_void(
    trick_history: Sequence[Trick], current_trick: Sequence[Play]
) -> VoidGrid:
    """
    Voids proven by play: an opponent who failed to follow the lead suit.

    The current trick only counts once someone has followed the lead. The
    human seat is never tracked.
    """
    out = create_void_grid()
    observed: List[Sequence[Play]] = list(trick_history)
    if len(current_trick) > 1:
        observed.append(current_trick)
    for trick in observed:
        lead = trick_lead_suit(trick)
        if lead is None:
            continue
        for play in trick[1:]:
            if play.card.suit != lead and play.seat != Seat.ME:
                out[play.seat][lead] = True
    return out


def any_void_observed(grid: VoidGrid) -> bool:
    return any(any(by_suit.values()) for by_suit in grid.values())


def trick_lead_count(trick_history: Sequence[Trick], suit: Suit) -> int:
    """How many completed tricks were led in `suit`."""
    return sum(1 for t in trick_history if trick_lead_suit(t) == suit)


def _has_off_suit(trick: Sequence[Play]) -> bool:
    lead = trick_lead_suit(trick)
    if lead is None:
        return False
    return any(play.card.suit != lead for play in trick[1:])


def should_prompt_suit_count(
    trick_history: Sequence[Trick], trick: Sequence[Play]
) -> Optional[Suit]:
    """
    Lead suit to ask a suit-count question about, or None.

    Fires the first time someone shows out of a suit: the current trick has
    an off-suit play and no earlier trick led in that suit had one.
    """
    lead = trick_lead_suit(trick)
    if lead is None or not _has_off_suit(trick):
        return None
    for past in trick_history:
        if trick_lead_suit(past) == lead and _has_off_suit(past):
            return None
    return lead


def remaining_suit_count_not_in_hand(
    suit: Suit, hand: Iterable[Card], trick_history: Sequence[Trick]
) -> int:
    """Cards of `suit` still out among the other players."""
    in_hand = sum(1 for c in hand if c.suit == suit)
    played = sum(
        1 for trick in trick_history for play in trick if play.card.suit == suit
    )
    return max(0, HAND_SIZE - in_hand - played)


def void_selection_mismatches(
    selections: Mapping[Seat, bool],
    grid: VoidGrid,
    suit: Suit,
    lead_seat: Optional[Seat] = None,
) -> List[Seat]:
    """Opponents whose claimed void status in `suit` is wrong; the leader is exempt."""
    return [
        seat
        for seat in OPPONENTS
        if seat != lead_seat and bool(selections.get(seat, False)) != grid[seat][suit]
    ]


def _remaining_seats(current_seat: Seat, trick: Sequence[Play]) -> List[Seat]:
    played = {p.seat for p in trick}
    return [s for s in SEATS if s != current_seat and s not in played]


def remaining_players_void_in_suit(
    suit: Suit,
    current_seat: Seat,
    trick: Sequence[Play],
    actual_void: VoidGrid,
) -> bool:
    """
    True if every seat still to act after `current_seat` is a known void.

    The human seat is never a known void. No one left to act counts as True.
    """
    for seat in _remaining_seats(current_seat, trick):
        if seat == Seat.ME or not actual_void[seat][suit]:
            return False
    return True


def any_remaining_void_in_suit(
    suit: Suit,
    current_seat: Seat,
    trick: Sequence[Play],
    actual_void: VoidGrid,
) -> bool:
    return any(
        seat != Seat.ME and actual_void[seat][suit]
        for seat in _remaining_seats(current_seat, trick)
    )


def remaining_opponent_seats(trick: Sequence[Play]) -> List[Seat]:
    played = {p.seat for p in trick}
    return [seat for seat in OPPONENTS if seat not in played]
