# trick_trainer/rules.py
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence
import enum

from .cards import SEATS, Card, Seat, Suit
from .state import Play, TrumpConfig

SUIT_ORDERS = {
    "bridge": (Suit.SPADES, Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS),
    "poker": (Suit.CLUBS, Suit.DIAMONDS, Suit.HEARTS, Suit.SPADES),
}


class InvalidStateError(RuntimeError):
    """Raised when the engine is asked to do something only a bug could ask."""


class PlayRefusal(enum.Enum):
    NOT_IN_HAND = "card not in hand"
    MUST_BREAK_TRUMP = "must break trump"
    MUST_FOLLOW_SUIT = "must follow suit"
    NOT_YOUR_TURN = "not your turn"
    HAND_COMPLETE = "hand complete"


def next_seat(seat: Seat) -> Seat:
    """Left -> Across -> Right -> Me -> Left."""
    return SEATS[(SEATS.index(seat) + 1) % len(SEATS)]


def trick_lead_suit(trick: Sequence[Play]) -> Optional[Suit]:
    return trick[0].card.suit if trick else None


def can_follow_suit(hand: Iterable[Card], suit: Suit) -> bool:
    return any(c.suit == suit for c in hand)


def is_trump(card: Card, trump: TrumpConfig) -> bool:
    return trump.enabled and card.suit == trump.suit


def play_refusal_reason(
    hand: Sequence[Card],
    card: Card,
    trick: Sequence[Play],
    is_leader: bool,
    trump: TrumpConfig,
    trump_broken: bool,
) -> Optional[PlayRefusal]:
    """
    Why `card` may not be played from `hand`, or None when it may.

    Rules, checked in this order:
    - the card must be in hand;
    - with must-break on, trump may not be led before it is broken unless
      the hand holds nothing but trump;
    - a player holding the lead suit must follow it.
    """
    if card not in hand:
        return PlayRefusal.NOT_IN_HAND

    if (
        is_leader
        and not trick
        and trump.enabled
        and trump.must_break
        and not trump_broken
        and is_trump(card, trump)
    ):
        if any(not is_trump(c, trump) for c in hand):
            return PlayRefusal.MUST_BREAK_TRUMP

    lead = trick_lead_suit(trick)
    if lead is not None and card.suit != lead and can_follow_suit(hand, lead):
        return PlayRefusal.MUST_FOLLOW_SUIT

    return None


def is_legal_play(
    hand: Sequence[Card],
    card: Card,
    trick: Sequence[Play],
    is_leader: bool,
    trump: TrumpConfig,
    trump_broken: bool,
) -> bool:
    return (
        play_refusal_reason(hand, card, trick, is_leader, trump, trump_broken)
        is None
    )


def compare_cards_in_trick(
    a: Card, b: Card, lead: Suit, trump: TrumpConfig
) -> int:
    """
    Compare two cards within a trick led in `lead`.

    Returns 1 if `a` beats `b`, -1 if `b` beats `a`, 0 if neither displaces
    the other. Two off-suit, non-trump cards of different suits compare 0, so
    whichever was already winning keeps winning.
    """
    a_trump = is_trump(a, trump)
    b_trump = is_trump(b, trump)
    if a_trump and not b_trump:
        return 1
    if b_trump and not a_trump:
        return -1

    a_follow = a.suit == lead
    b_follow = b.suit == lead
    if a_follow and not b_follow:
        return 1
    if b_follow and not a_follow:
        return -1

    if a.suit == b.suit:
        if a.rank == b.rank:
            return 0
        return 1 if a.rank > b.rank else -1

    return 0


def _best_play(trick: Sequence[Play], trump: TrumpConfig) -> Play:
    lead = trick_lead_suit(trick)
    if lead is None:
        raise InvalidStateError("Cannot determine winner of an empty trick")
    # Fold strictly in play order: a challenger only displaces the running
    # best when it is strictly better.
    best = trick[0]
    for challenger in trick[1:]:
        if compare_cards_in_trick(challenger.card, best.card, lead, trump) == 1:
            best = challenger
    return best


def current_best_card(trick: Sequence[Play], trump: TrumpConfig) -> Card:
    """The card currently winning a non-empty trick."""
    return _best_play(trick, trump).card


def determine_trick_winner(trick: Sequence[Play], trump: TrumpConfig) -> Seat:
    return _best_play(trick, trump).seat


def sort_hand(
    hand: Iterable[Card], suit_order: Sequence[Suit], ascending: bool = True
) -> List[Card]:
    """Sort by position in `suit_order`, then by rank. Returns a new list."""
    suit_index = {suit: i for i, suit in enumerate(suit_order)}
    factor = 1 if ascending else -1
    return sorted(
        hand,
        key=lambda c: (suit_index.get(c.suit, 0), c.rank * factor),
    )


def suit_order_for(mode: str) -> tuple[Suit, ...]:
    try:
        return SUIT_ORDERS[mode]
    except KeyError:
        raise ValueError(
            f"Unknown suit order {mode!r}; expected one of {sorted(SUIT_ORDERS)}"
        ) from None


def same_trick(a: Sequence[Play], b: Sequence[Play]) -> bool:
    if len(a) != len(b):
        return False
    return all(
        x.seat == y.seat and x.card.id == y.card.id for x, y in zip(a, b)
    )
