# trick_trainer/agents/random_agent.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Collection, Dict, Optional, Sequence
import random

from ..cards import Card, Rng
from .base import TrickAgent


def pick_random_legal_card(
    hand: Sequence[Card],
    legal_ids: Collection[str],
    rng: Rng = random.random,
) -> Optional[Card]:
    """Uniform pick over the legal ids; None when nothing is legal."""
    if not legal_ids:
        return None
    ids = sorted(legal_ids)
    pick = ids[int(rng() * len(ids))]
    return next((c for c in hand if c.id == pick), None)


@dataclass
class RandomTrickAgent(TrickAgent):
    """
    Baseline opponent.

    - choose_bid: uniform over 0..hand size.
    - choose_card: uniform over legal cards.
    """

    rng: random.Random

    def choose_bid(self, observation: Dict[str, Any]) -> int:
        return self.rng.randint(0, len(observation["hand_cards"]))

    def choose_card(self, observation: Dict[str, Any]) -> Optional[Card]:
        return pick_random_legal_card(
            observation["hand_cards"],
            observation["legal_ids"],
            self.rng.random,
        )
