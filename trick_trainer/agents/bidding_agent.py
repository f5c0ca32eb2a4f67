# trick_trainer/agents/bidding_agent.py
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Collection, Dict, List, Mapping, Optional, Sequence

from ..cards import RANK_ACE, Card, Rng, Seat, Suit
from ..rules import compare_cards_in_trick, current_best_card, is_trump, trick_lead_suit
from ..state import Play, TrumpConfig
from .base import TrickAgent
from .heuristics import estimate_bid

_TRUMP_WEIGHT = 20


@dataclass(frozen=True)
class BidAiContext:
    seat: Seat
    hand: Sequence[Card]
    legal_ids: Collection[str]
    trick: Sequence[Play]
    leader: Seat
    trump: TrumpConfig
    tricks_won: Mapping[Seat, int]
    bid: Optional[int]


def _count_suits(cards: Sequence[Card]) -> Dict[Suit, int]:
    counts = {suit: 0 for suit in Suit}
    for c in cards:
        counts[c.suit] += 1
    return counts


def _lose_score(card: Card, trump: TrumpConfig) -> int:
    return card.rank + (_TRUMP_WEIGHT if is_trump(card, trump) else 0)


def _win_score(card: Card, trump: TrumpConfig, suit_counts: Mapping[Suit, int]) -> float:
    return _lose_score(card, trump) + suit_counts[card.suit] * 0.5


def _lowest_card(cards: Sequence[Card], trump: TrumpConfig) -> Card:
    return min(cards, key=lambda c: _lose_score(c, trump))


def _lowest_in_suit(cards: Sequence[Card], suit: Suit) -> Card:
    return min((c for c in cards if c.suit == suit), key=lambda c: c.rank)


def _highest_in_suit(cards: Sequence[Card], suit: Suit) -> Card:
    return max((c for c in cards if c.suit == suit), key=lambda c: c.rank)


def _shortest_suit(cards: Sequence[Card]) -> Suit:
    counts = {s: n for s, n in _count_suits(cards).items() if n}
    return min(counts, key=lambda s: counts[s])


def _strongest_suit(cards: Sequence[Card]) -> Suit:
    """Suit holding the highest card; earlier suits win ties."""
    best_suit = Suit.SPADES
    best_rank = -1
    for suit in Suit:
        ranks = [c.rank for c in cards if c.suit == suit]
        if ranks and max(ranks) > best_rank:
            best_rank = max(ranks)
            best_suit = suit
    return best_suit


def _highest_card(
    cards: Sequence[Card],
    trump: TrumpConfig,
    suit_counts: Mapping[Suit, int],
    rng: Rng,
) -> Card:
    # Random tie-break among equal scores.
    scored = [(-_win_score(c, trump, suit_counts), rng(), i) for i, c in enumerate(cards)]
    return cards[min(scored)[2]]


def _lowest_winning_card(
    cards: Sequence[Card], trick: Sequence[Play], trump: TrumpConfig
) -> Optional[Card]:
    lead = trick_lead_suit(trick)
    if lead is None:
        return None
    best = current_best_card(trick, trump)
    winners = [c for c in cards if compare_cards_in_trick(c, best, lead, trump) == 1]
    if not winners:
        return None
    low = winners[0]
    for c in winners[1:]:
        if compare_cards_in_trick(c, low, lead, trump) == -1:
            low = c
    return low


def choose_card_to_play_for_bid(
    ctx: BidAiContext, rng: Rng = random.random
) -> Optional[Card]:
    """
    Pick a card that steers this seat toward exactly its bid.

    While short of the bid it tries to win cheaply (off-trump winners first
    when following, short suits then top cards when leading). Once the bid is
    reached it sheds the lowest card to avoid overtricks.
    """
    legal = [c for c in ctx.hand if c.id in ctx.legal_ids]
    if not legal:
        return None

    needs_tricks = ctx.tricks_won[ctx.seat] < (ctx.bid or 0)
    trump = ctx.trump

    if trick_lead_suit(ctx.trick) is not None:
        if needs_tricks:
            winning = _lowest_winning_card(legal, ctx.trick, trump)
            if winning is not None:
                off_trump = _lowest_winning_card(
                    [c for c in legal if not is_trump(c, trump)], ctx.trick, trump
                )
                return off_trump or winning
        return _lowest_card(legal, trump)

    if not needs_tricks:
        return _lowest_card(legal, trump)

    trumps: List[Card] = [c for c in legal if is_trump(c, trump)]
    side: List[Card] = [c for c in legal if not is_trump(c, trump)]
    if side:
        shortest = _shortest_suit(side)
        if _count_suits(side)[shortest] <= 2:
            return _lowest_in_suit(side, shortest)
        return _highest_in_suit(side, _strongest_suit(side))
    if trump.enabled and trumps:
        holds_ace = any(
            c.suit == trump.suit and c.rank == RANK_ACE for c in ctx.hand
        )
        if holds_ace:
            return _highest_in_suit(trumps, trump.suit)
        return _lowest_card(trumps, trump)
    # Unreachable with a non-empty legal set: no side cards means all trump.
    return _highest_card(legal, trump, _count_suits(ctx.hand), rng)


@dataclass
class BiddingTrickAgent(TrickAgent):
    """
    Opponent that bids from hand strength and plays to make that bid exactly.
    """

    rng: random.Random

    def choose_bid(self, observation: Dict[str, Any]) -> int:
        return estimate_bid(observation["hand_cards"], observation["trump"])

    def choose_card(self, observation: Dict[str, Any]) -> Optional[Card]:
        ctx = BidAiContext(
            seat=observation["seat"],
            hand=observation["hand_cards"],
            legal_ids=observation["legal_ids"],
            trick=observation["trick"],
            leader=observation["leader"],
            trump=observation["trump"],
            tricks_won=observation["tricks_won"],
            bid=observation.get("bid"),
        )
        return choose_card_to_play_for_bid(ctx, self.rng.random)
