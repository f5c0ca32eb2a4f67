# trick_trainer/win_intent.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .cards import RANK_ACE, Card, Seat, Suit
from .rules import is_trump, trick_lead_suit
from .state import Play, Trick, TrumpConfig
from .training import played_ranks_in_suit, remaining_honors_in_suit
from .voids import VoidGrid, remaining_opponent_seats, remaining_players_void_in_suit

WARN_HIGHER_OR_TRUMP = "This card can be beaten by a higher card or trump"
WARN_HIGHER = "This card can be beaten by a higher card"
WARN_TRUMP = "This card can be trumped"


@dataclass(frozen=True)
class WinIntentResult:
    warning: Optional[str]
    higher_ranks: List[int]
    trump_threats: List[Seat]


def remaining_higher_ranks_in_suit(
    card: Card,
    suit: Suit,
    trick_history: Sequence[Trick],
    trick: Sequence[Play],
    hand: Sequence[Card],
) -> List[int]:
    """Ranks above `card` in `suit` that are neither played nor in `hand`."""
    seen = played_ranks_in_suit(trick_history, trick, suit)
    seen.update(c.rank for c in hand if c.suit == suit)
    return [r for r in range(card.rank + 1, RANK_ACE + 1) if r not in seen]


def evaluate_win_intent(
    card: Card,
    trick_history: Sequence[Trick],
    trick: Sequence[Play],
    hand: Sequence[Card],
    trump: TrumpConfig,
    actual_void: VoidGrid,
    *,
    warn_trump: bool = True,
    warn_honors_only: bool = True,
) -> WinIntentResult:
    """
    Risks to the human winning the trick with `card`.

    Two risks are checked: an unseen higher card in the effective suit (lead
    suit, or the card's own suit when leading), and opponents still to act
    who are void in that suit but not known void in trump.
    """
    lead = trick_lead_suit(trick) or card.suit
    if warn_honors_only:
        held = {c.rank for c in hand if c.suit == lead}
        higher_ranks = [
            r
            for r in remaining_honors_in_suit(trick_history, trick, lead)
            if r > card.rank and r not in held
        ]
    else:
        higher_ranks = remaining_higher_ranks_in_suit(
            card, lead, trick_history, trick, hand
        )

    trump_threats: List[Seat] = []
    if (
        warn_trump
        and trump.enabled
        and lead != trump.suit
        and not is_trump(card, trump)
        and not remaining_players_void_in_suit(lead, Seat.ME, trick, actual_void)
    ):
        trump_threats = [
            seat
            for seat in remaining_opponent_seats(trick)
            if actual_void[seat][lead] and not actual_void[seat][trump.suit]
        ]

    if higher_ranks and trump_threats:
        warning: Optional[str] = WARN_HIGHER_OR_TRUMP
    elif higher_ranks:
        warning = WARN_HIGHER
    elif trump_threats:
        warning = WARN_TRUMP
    else:
        warning = None
    return WinIntentResult(
        warning=warning,
        higher_ranks=higher_ranks,
        trump_threats=trump_threats,
    )
