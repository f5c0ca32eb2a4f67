# trick_trainer/agents/heuristics.py
"""
Hand-strength bid estimate.

This is a deliberately rough model, not a double-dummy solver. Each held
honor is worth a trick if the holder has enough low cards ("sacrifices") to
outlast the higher honors still missing in that suit. With trump, short
side suits add ruffing value, paid for with low trumps.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..cards import HAND_SIZE, RANK_ACE, RANK_QUEEN, Card, Suit
from ..state import TrumpConfig

_TRUMP_HONOR_MIN = 10

_SINGLETON_BONUS = 1.0
_DOUBLETON_BONUS = 0.5

_NO_TRUMP_CAP = 3.0


@dataclass
class SuitBreakdown:
    suit: Suit
    length: int
    is_trump: bool
    honors_held: List[int]
    sacrifices: int
    honor_points: float
    # How many unheld honors sit above each entry of honors_held.
    missing_higher: List[int] = field(default_factory=list)
    # Trump suit only: ruffing value actually paid for with low trumps.
    ruff_points: float = 0.0
    cap: Optional[float] = None

    @property
    def points(self) -> float:
        return self.honor_points + self.ruff_points

    @property
    def capped_points(self) -> float:
        if self.cap is None:
            return self.points
        return min(self.points, self.cap)


@dataclass
class BidBreakdown:
    trump: TrumpConfig
    suits: Dict[Suit, SuitBreakdown] = field(default_factory=dict)
    # Raw singleton/doubleton value before it is matched against low trumps.
    shortness_bonus: float = 0.0

    @property
    def total(self) -> float:
        return sum(s.capped_points for s in self.suits.values())

    @property
    def bid(self) -> int:
        return max(0, min(HAND_SIZE, math.floor(self.total)))

    def suit_lengths(self) -> Dict[Suit, int]:
        return {suit: s.length for suit, s in self.suits.items()}


def _honor_floor(suit: Suit, trump: TrumpConfig) -> int:
    if trump.enabled and suit == trump.suit:
        return _TRUMP_HONOR_MIN
    return RANK_QUEEN


def _side_suit_cap(length: int) -> float:
    if length <= 4:
        return 3.0
    if length == 5:
        return 2.0
    return 1.5


def _missing_higher(honors_held: Sequence[int], honor_floor: int) -> List[int]:
    held = set(honors_held)
    return [
        sum(
            1
            for higher in range(rank + 1, RANK_ACE + 1)
            if higher >= honor_floor and higher not in held
        )
        for rank in honors_held
    ]


def _honor_points(missing_higher: Sequence[int], sacrifices: int) -> float:
    """Full credit if sacrifices cover the missing higher honors, half if one short."""
    points = 0.0
    for missing in missing_higher:
        short = missing - sacrifices
        if short <= 0:
            points += 1.0
        elif short == 1:
            points += 0.5
    return points


def build_bid_breakdown(hand: Sequence[Card], trump: TrumpConfig) -> BidBreakdown:
    by_suit: Dict[Suit, List[Card]] = {suit: [] for suit in Suit}
    for card in hand:
        by_suit[card.suit].append(card)

    breakdown = BidBreakdown(trump=trump)
    if trump.enabled:
        for suit, cards in by_suit.items():
            if suit == trump.suit:
                continue
            if len(cards) == 1:
                breakdown.shortness_bonus += _SINGLETON_BONUS
            elif len(cards) == 2:
                breakdown.shortness_bonus += _DOUBLETON_BONUS

    for suit, cards in by_suit.items():
        floor_rank = _honor_floor(suit, trump)
        honors = sorted((c.rank for c in cards if c.rank >= floor_rank), reverse=True)
        sacrifices = len(cards) - len(honors)
        suit_is_trump = trump.enabled and suit == trump.suit

        ruff_points = 0.0
        if suit_is_trump:
            # Each ruff spends a low trump before the honors are counted.
            ruffs = min(sacrifices, math.ceil(breakdown.shortness_bonus))
            ruff_points = min(breakdown.shortness_bonus, float(ruffs))
            sacrifices -= ruffs
            cap = None
        elif trump.enabled:
            cap = _side_suit_cap(len(cards))
        else:
            cap = _NO_TRUMP_CAP

        missing = _missing_higher(honors, floor_rank)
        breakdown.suits[suit] = SuitBreakdown(
            suit=suit,
            length=len(cards),
            is_trump=suit_is_trump,
            honors_held=honors,
            sacrifices=sacrifices,
            honor_points=_honor_points(missing, sacrifices),
            missing_higher=missing,
            ruff_points=ruff_points,
            cap=cap,
        )
    return breakdown


def estimate_bid(hand: Sequence[Card], trump: TrumpConfig) -> int:
    """Tricks this hand should expect to take, 0..13."""
    return build_bid_breakdown(hand, trump).bid
