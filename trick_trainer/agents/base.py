# trick_trainer/agents/base.py
from __future__ import annotations

from typing import Any, Dict, Optional, Protocol, runtime_checkable

from ..cards import Card


@runtime_checkable
class TrickAgent(Protocol):
    """
    Interface for any seat that is not played by a human.

    `observation` is a dict built by the hand engine containing:
      - "seat", "hand_cards" (Card objects) and "hand" (card dicts)
      - "trump" (TrumpConfig), "trump_broken"
      - "trick", "trick_no", "trick_history", "leader"
      - "tricks_won", "bids", "bid"
      - "legal_ids" during the play phase
    """

    def choose_bid(self, observation: Dict[str, Any]) -> int:
        """Return the bid (0..13)."""

        raise NotImplementedError

    def choose_card(self, observation: Dict[str, Any]) -> Optional[Card]:
        """
        Return the card to play.

        Must be one whose id is in observation["legal_ids"].
        """
        raise NotImplementedError
