# trick_trainer/training.py
from __future__ import annotations

from typing import Dict, List, Sequence, Set

from .cards import RANK_ACE, RANK_JACK, RANK_KING, RANK_QUEEN, Card, Suit
from .state import Play, Trick

HONOR_RANKS = (RANK_JACK, RANK_QUEEN, RANK_KING, RANK_ACE)


def played_ranks_in_suit(
    trick_history: Sequence[Trick], current_trick: Sequence[Play], suit: Suit
) -> Set[int]:
    played = {
        play.card.rank
        for trick in trick_history
        for play in trick
        if play.card.suit == suit
    }
    played.update(p.card.rank for p in current_trick if p.card.suit == suit)
    return played


def remaining_honors_in_suit(
    trick_history: Sequence[Trick], current_trick: Sequence[Play], suit: Suit
) -> List[int]:
    """J/Q/K/A of `suit` not yet seen on the table, ascending."""
    played = played_ranks_in_suit(trick_history, current_trick, suit)
    return [r for r in HONOR_RANKS if r not in played]


def honor_remaining_by_suit(
    trick_history: Sequence[Trick], current_trick: Sequence[Play]
) -> Dict[Suit, List[int]]:
    return {
        suit: remaining_honors_in_suit(trick_history, current_trick, suit)
        for suit in Suit
    }


def can_be_beaten_by_honor(card: Card, remaining_honors: Sequence[int]) -> bool:
    if card.rank >= RANK_ACE:
        return False
    return any(r > card.rank for r in remaining_honors)
