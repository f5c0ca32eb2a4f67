# trick_trainer/game_log.py
from __future__ import annotations

import csv
from typing import Any, Dict, Iterable, List, Optional

from .bidding import evaluate_exact_bids
from .cards import SEATS
from .engine import HandOutcome
from .state import TRICKS_PER_HAND

FIELDNAMES = [
    "hand_id",
    "seed",
    "trump",
    "seat",
    "bid",
    "tricks_won",
    "made",
    "miss",
]


def build_hand_rows(
    outcome: HandOutcome,
    hand_id: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    One row per seat for a finished hand.

    `miss` is tricks_won - bid (negative = fell short). Without bidding, bid,
    made and miss are left empty. An unfinished hand yields no rows.
    """
    state = outcome.state
    if len(state.trick_history) != TRICKS_PER_HAND:
        return []

    bids = outcome.bid_state.bids if outcome.bid_state is not None else {}
    results = evaluate_exact_bids(bids, state.tricks_won)

    rows: List[Dict[str, Any]] = []
    for seat in SEATS:
        result = results[seat]
        has_bid = result.bid is not None
        rows.append(
            {
                "hand_id": hand_id,
                "seed": outcome.seed,
                "trump": outcome.trump.suit.name if outcome.trump.enabled else None,
                "seat": seat.value,
                "bid": result.bid,
                "tricks_won": result.tricks_won,
                "made": result.made if has_bid else None,
                "miss": result.tricks_won - result.bid if has_bid else None,
            }
        )
    return rows


def write_hand_rows_csv(rows: Iterable[Dict[str, Any]], path) -> None:
    """
    Write hand rows to a CSV file.

    `path` can be a string or any path-like object accepted by `open`.
    """
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()
        for row in rows:
            writer.writerow({field: row.get(field) for field in FIELDNAMES})
