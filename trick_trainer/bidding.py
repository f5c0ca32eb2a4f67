# trick_trainer/bidding.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, List, Mapping, Optional

from .cards import SEATS, Seat
from .rules import next_seat


def _empty_bids() -> Dict[Seat, Optional[int]]:
    return {seat: None for seat in SEATS}


def _unrevealed() -> Dict[Seat, bool]:
    return {seat: False for seat in SEATS}


@dataclass
class BidState:
    order: List[Seat]
    index: int = 0
    bids: Dict[Seat, Optional[int]] = field(default_factory=_empty_bids)
    revealed: Dict[Seat, bool] = field(default_factory=_unrevealed)


@dataclass(frozen=True)
class BidResult:
    bid: Optional[int]
    tricks_won: int
    made: bool


def build_bid_order(start: Seat = Seat.ME) -> List[Seat]:
    """All four seats in rotation, starting with `start`."""
    order = [start]
    cur = start
    for _ in range(len(SEATS) - 1):
        cur = next_seat(cur)
        order.append(cur)
    return order


def init_bid_state(start: Seat = Seat.ME) -> BidState:
    return BidState(order=build_bid_order(start))


def current_bidder(state: BidState) -> Optional[Seat]:
    if state.index >= len(state.order):
        return None
    return state.order[state.index]


def is_bidding_complete(state: BidState) -> bool:
    return state.index >= len(state.order)


def submit_bid(state: BidState, seat: Seat, bid: int) -> BidState:
    """
    Record `seat`'s bid and move to the next bidder.

    A bid out of turn, or after everyone has bid, leaves the state unchanged.
    """
    if current_bidder(state) != seat:
        return state
    bids = dict(state.bids)
    bids[seat] = bid
    revealed = dict(state.revealed)
    revealed[seat] = True
    return replace(state, index=state.index + 1, bids=bids, revealed=revealed)


def evaluate_exact_bids(
    bids: Mapping[Seat, Optional[int]],
    tricks_won: Mapping[Seat, int],
) -> Dict[Seat, BidResult]:
    """
    Score each seat on making its bid exactly.

    A seat made its bid only if it bid and took exactly that many tricks.
    """
    results: Dict[Seat, BidResult] = {}
    for seat in SEATS:
        bid = bids.get(seat)
        won = tricks_won.get(seat, 0)
        results[seat] = BidResult(
            bid=bid,
            tricks_won=won,
            made=bid is not None and bid == won,
        )
    return results
