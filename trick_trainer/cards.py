# trick_trainer/cards.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Sequence, TypeVar
import enum
import random

T = TypeVar("T")

# Zero-argument float generator in [0, 1).
Rng = Callable[[], float]

RANK_JACK = 11
RANK_QUEEN = 12
RANK_KING = 13
RANK_ACE = 14

RANKS = tuple(range(2, RANK_ACE + 1))
HAND_SIZE = 13

_RANK_LABELS = {RANK_JACK: "J", RANK_QUEEN: "Q", RANK_KING: "K", RANK_ACE: "A"}


class Suit(enum.Enum):
    SPADES = "S"
    HEARTS = "H"
    DIAMONDS = "D"
    CLUBS = "C"


class Seat(enum.Enum):
    LEFT = "Left"
    ACROSS = "Across"
    RIGHT = "Right"
    ME = "Me"


# Fixed rotation and deal order. Me is the human seat.
SEATS: tuple[Seat, ...] = (Seat.LEFT, Seat.ACROSS, Seat.RIGHT, Seat.ME)
OPPONENTS: tuple[Seat, ...] = (Seat.LEFT, Seat.ACROSS, Seat.RIGHT)


@dataclass(frozen=True)
class Card:
    """
    A standard playing card.

    rank runs 2..14 (11=J, 12=Q, 13=K, 14=A). Two cards with the same suit and
    rank are the same card, so `id` is unique within a 52-card deck.
    """
    suit: Suit
    rank: int

    def __post_init__(self) -> None:
        if not (2 <= self.rank <= RANK_ACE):
            raise ValueError("Card rank must be between 2 and 14")

    @property
    def id(self) -> str:
        return f"{self.suit.value}{self.rank}"

    def __str__(self) -> str:
        return f"{rank_label(self.rank)}{self.suit.value}"


def rank_label(rank: int) -> str:
    """Short label for a rank: 2..10, J, Q, K, A."""
    return _RANK_LABELS.get(rank, str(rank))


def card_to_dict(card: Card) -> Dict[str, Any]:
    """Convert a Card to a JSON-serializable dict."""
    return {
        "id": card.id,
        "suit": card.suit.value,
        "rank": card.rank,
    }


def dict_to_card(data: Dict[str, Any]) -> Card:
    """Convert a dict back into a Card."""
    try:
        suit = Suit(data["suit"])
        rank = int(data["rank"])
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Malformed card data: {data!r}") from exc
    return Card(suit, rank)


def card_from_id(card_id: str) -> Card:
    """Parse an id such as 'H14' back into a Card."""
    if len(card_id) < 2:
        raise ValueError(f"Malformed card id: {card_id!r}")
    try:
        return Card(Suit(card_id[0]), int(card_id[1:]))
    except ValueError as exc:
        raise ValueError(f"Malformed card id: {card_id!r}") from exc


def build_deck() -> List[Card]:
    """The 52 canonical cards, suit-then-rank order."""
    deck = [Card(suit, rank) for suit in Suit for rank in RANKS]
    if len(deck) != 52:
        raise RuntimeError("Deck must contain exactly 52 cards")
    return deck


def create_rng(seed: int) -> Rng:
    """
    Deterministic float generator for a deal seed.

    The seed is assumed to be an already validated non-negative integer; it is
    folded to 32 bits so it matches what the settings layer stores.
    """
    return random.Random(seed & 0xFFFFFFFF).random


def shuffle(items: Sequence[T], rng: Rng) -> List[T]:
    """
    Fisher-Yates shuffle into a new list.

    Draws exactly one value from `rng` per index, from the last index down,
    so the same generator state always produces the same order.
    """
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = int(rng() * (i + 1))
        out[i], out[j] = out[j], out[i]
    return out


def deal_new_hands(rng: Rng) -> Dict[Seat, List[Card]]:
    """Shuffle a fresh deck once and deal 13 rounds in seat order."""
    deck = shuffle(build_deck(), rng)
    hands: Dict[Seat, List[Card]] = {seat: [] for seat in SEATS}
    idx = 0
    for _ in range(HAND_SIZE):
        for seat in SEATS:
            hands[seat].append(deck[idx])
            idx += 1
    return hands
