# trick_trainer/prompts.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Collection, Mapping, Optional, Sequence
import enum

from .cards import OPPONENTS, RANK_ACE, Card, Seat, Suit
from .rules import (
    can_follow_suit,
    compare_cards_in_trick,
    current_best_card,
    is_trump,
    next_seat,
    trick_lead_suit,
)
from .state import Play, TrumpConfig
from .training import HONOR_RANKS
from .voids import VoidGrid, any_remaining_void_in_suit, remaining_players_void_in_suit


class VoidPromptScope(enum.Enum):
    # Prompt once any void has been seen anywhere.
    GLOBAL = "global"
    # Prompt only when someone is already void in the suit just led.
    PER_SUIT = "per-suit"


@dataclass(frozen=True)
class VoidPromptLead:
    lead_seat: Seat
    lead_suit: Suit


def get_void_prompt_lead(
    *,
    trick: Sequence[Play],
    trick_no: int,
    hands: Mapping[Seat, Sequence[Card]],
    trump: TrumpConfig,
    actual_void: VoidGrid,
    any_void_observed: bool,
    enabled: bool = True,
    tracked_suits: Collection[Suit] = tuple(Suit),
    skip_low_impact: bool = False,
    only_when_leading: bool = False,
    scope: VoidPromptScope = VoidPromptScope.PER_SUIT,
) -> Optional[VoidPromptLead]:
    """
    Decide whether a fresh lead should pause play for a void check.

    Only a trick with exactly one card, after trick 1, in a tracked suit is
    eligible. Low-impact skip drops the prompt when the human acts last in
    the trick, or holds neither the lead suit nor trump.
    """
    if not enabled:
        return None
    if len(trick) != 1 or trick_no == 1:
        return None
    lead_seat = trick[0].seat
    lead_suit = trick[0].card.suit
    if lead_suit not in tracked_suits:
        return None

    if skip_low_impact:
        last_seat = next_seat(next_seat(next_seat(lead_seat)))
        if last_seat == Seat.ME:
            return None
        my_hand = hands[Seat.ME]
        has_lead = can_follow_suit(my_hand, lead_suit)
        has_trump = any(is_trump(c, trump) for c in my_hand)
        if not has_lead and not has_trump:
            return None

    if only_when_leading and lead_seat != Seat.ME:
        return None

    if scope == VoidPromptScope.GLOBAL:
        should_prompt = any_void_observed
    else:
        should_prompt = any(actual_void[o][lead_suit] for o in OPPONENTS)
    if not should_prompt:
        return None
    return VoidPromptLead(lead_seat=lead_seat, lead_suit=lead_suit)


def _trick_has_all_higher_honors(card: Card, suit: Suit, trick: Sequence[Play]) -> bool:
    if card.rank >= RANK_ACE:
        return False
    in_trick = {p.card.rank for p in trick if p.card.suit == suit}
    return all(r in in_trick for r in HONOR_RANKS if r > card.rank)


def _higher_honors_all_in_hand(
    card: Card,
    suit: Suit,
    honor_remaining_by_suit: Mapping[Suit, Sequence[int]],
    hand: Sequence[Card],
) -> bool:
    if card.rank >= RANK_ACE:
        return False
    remaining = [r for r in honor_remaining_by_suit[suit] if r > card.rank]
    if not remaining:
        return False
    held = {c.rank for c in hand if c.suit == suit}
    return all(r in held for r in remaining)


def _already_losing(
    card: Card, suit: Suit, trick: Sequence[Play], trump: TrumpConfig
) -> bool:
    if not trick:
        return False
    best = current_best_card(trick, trump)
    return compare_cards_in_trick(card, best, suit, trump) == -1


def should_prompt_win_intent(
    *,
    card: Card,
    seat: Seat,
    trick: Sequence[Play],
    trick_no: int,
    honor_remaining_by_suit: Mapping[Suit, Sequence[int]],
    hands: Mapping[Seat, Sequence[Card]],
    trump: TrumpConfig,
    actual_void: VoidGrid,
    enabled: bool = True,
    min_rank: int = 10,
    ai_plays_me: bool = False,
) -> bool:
    """Whether to ask the human "do you intend to win this trick?" before `card`."""
    if not enabled or seat != Seat.ME or ai_plays_me:
        return False
    # Nothing to decide on the last card of a trick.
    if len(trick) >= 3:
        return False
    if trick_no == 1 or card.rank < min_rank:
        return False

    lead = trick_lead_suit(trick) or card.suit
    if card.rank == RANK_ACE and not any_remaining_void_in_suit(
        lead, seat, trick, actual_void
    ):
        return False
    if _trick_has_all_higher_honors(card, lead, trick):
        return False
    if _higher_honors_all_in_hand(card, lead, honor_remaining_by_suit, hands[Seat.ME]):
        return False
    if _already_losing(card, lead, trick, trump):
        return False
    if remaining_players_void_in_suit(lead, seat, trick, actual_void):
        return False
    return True

