# tests/test_heuristics.py
import pytest

from trick_trainer.agents.heuristics import build_bid_breakdown, estimate_bid
from trick_trainer.cards import Suit, card_from_id
from trick_trainer.state import TrumpConfig

NO_TRUMP = TrumpConfig()
SPADES = TrumpConfig(enabled=True, suit=Suit.SPADES)


def _hand(*ids):
    hand = [card_from_id(i) for i in ids]
    assert len(hand) == 13
    return hand


def test_flat_hand_without_honors_bids_zero():
    hand = _hand(
        "S2", "S3", "S4", "S5",
        "H2", "H3", "H4",
        "D2", "D3", "D4",
        "C2", "C3", "C4",
    )
    assert estimate_bid(hand, NO_TRUMP) == 0
    assert estimate_bid(hand, SPADES) == 0


def test_four_aces_bid_four():
    hand = _hand(
        "S14", "S2", "S3", "S4",
        "H14", "H2", "H3",
        "D14", "D2", "D3",
        "C14", "C2", "C3",
    )
    breakdown = build_bid_breakdown(hand, NO_TRUMP)
    assert breakdown.total == pytest.approx(4.0)
    assert breakdown.bid == 4
    assert estimate_bid(hand, NO_TRUMP) == 4


def test_sacrifices_cover_missing_higher_honors():
    hand = _hand(
        "S13", "S2",  # guarded king: full trick
        "H13",  # bare king: half
        "D12",  # bare queen: nothing
        "C2", "C3", "C4", "C5", "C6", "C7", "C8", "C9", "C10",
    )
    suits = build_bid_breakdown(hand, NO_TRUMP).suits

    assert suits[Suit.SPADES].honors_held == [13]
    assert suits[Suit.SPADES].sacrifices == 1
    assert suits[Suit.SPADES].missing_higher == [1]
    assert suits[Suit.DIAMONDS].missing_higher == [2]
    assert suits[Suit.SPADES].points == 1.0
    assert suits[Suit.HEARTS].points == 0.5
    assert suits[Suit.DIAMONDS].points == 0.0
    assert suits[Suit.CLUBS].honors_held == []
    assert estimate_bid(hand, NO_TRUMP) == 1


def test_trump_shortness_is_paid_for_with_low_trumps():
    hand = _hand(
        "S14", "S13", "S2", "S3", "S4", "S5",
        "H14",
        "D2", "D3",
        "C2", "C3", "C4", "C5",
    )
    breakdown = build_bid_breakdown(hand, SPADES)
    spades = breakdown.suits[Suit.SPADES]

    assert breakdown.shortness_bonus == pytest.approx(1.5)
    assert spades.is_trump
    assert spades.cap is None
    assert spades.ruff_points == pytest.approx(1.5)
    assert spades.sacrifices == 2
    assert spades.honor_points == pytest.approx(2.0)
    assert breakdown.suits[Suit.HEARTS].capped_points == pytest.approx(1.0)
    assert breakdown.total == pytest.approx(4.5)
    assert breakdown.bid == 4


def test_trump_suit_counts_ten_and_jack_as_honors():
    hand = _hand(
        "S14", "S13", "S12", "S11", "S10",
        "H2", "H3", "H4",
        "D2", "D3", "D4",
        "C2", "C3",
    )
    spades = build_bid_breakdown(hand, SPADES).suits[Suit.SPADES]
    assert spades.honors_held == [14, 13, 12, 11, 10]
    assert spades.honor_points == pytest.approx(5.0)

    plain = build_bid_breakdown(hand, NO_TRUMP).suits[Suit.SPADES]
    assert plain.honors_held == [14, 13, 12]
    assert plain.capped_points == pytest.approx(3.0)


def test_long_side_suit_is_capped_with_trump():
    hand = _hand(
        "H14", "H13", "H12", "H2", "H3", "H4",
        "S2",
        "D2", "D3", "D4",
        "C2", "C3", "C4",
    )
    breakdown = build_bid_breakdown(hand, SPADES)
    hearts = breakdown.suits[Suit.HEARTS]

    assert hearts.points == pytest.approx(3.0)
    assert hearts.cap == pytest.approx(1.5)
    assert hearts.capped_points == pytest.approx(1.5)
    assert breakdown.bid == 1
    assert estimate_bid(hand, NO_TRUMP) == 3


def test_suit_lengths():
    hand = _hand(
        "H14", "H13", "H12", "H2", "H3", "H4",
        "S2",
        "D2", "D3", "D4",
        "C2", "C3", "C4",
    )
    lengths = build_bid_breakdown(hand, NO_TRUMP).suit_lengths()
    assert lengths == {Suit.SPADES: 1, Suit.HEARTS: 6, Suit.DIAMONDS: 3, Suit.CLUBS: 3}
