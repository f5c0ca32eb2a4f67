# tests/test_voids.py
from trick_trainer.cards import Seat, Suit, card_from_id
from trick_trainer.state import Play
from trick_trainer.voids import (
    any_remaining_void_in_suit,
    any_void_observed,
    compute_actual_void,
    create_void_grid,
    remaining_opponent_seats,
    remaining_players_void_in_suit,
    remaining_suit_count_not_in_hand,
    should_prompt_suit_count,
    trick_lead_count,
    void_selection_mismatches,
)


def _trick(*plays):
    return tuple(Play(seat, card_from_id(cid)) for seat, cid in plays)


# Right shows out of hearts.
HEART_TRICK = _trick(
    (Seat.LEFT, "H5"), (Seat.ACROSS, "H9"), (Seat.RIGHT, "D3"), (Seat.ME, "H2")
)


def _grid(**voids):
    grid = create_void_grid()
    for seat_name, suits in voids.items():
        for suit in suits:
            grid[Seat[seat_name.upper()]][suit] = True
    return grid


def test_void_grid_tracks_opponents_only():
    grid = create_void_grid()
    assert set(grid) == {Seat.LEFT, Seat.ACROSS, Seat.RIGHT}
    assert not any_void_observed(grid)


def test_compute_actual_void_from_history():
    grid = compute_actual_void((HEART_TRICK,), ())
    assert grid[Seat.RIGHT][Suit.HEARTS]
    assert not grid[Seat.LEFT][Suit.HEARTS]
    assert not grid[Seat.RIGHT][Suit.DIAMONDS]
    assert any_void_observed(grid)


def test_current_trick_counts_after_second_play():
    lead_only = _trick((Seat.LEFT, "C2"))
    assert not any_void_observed(compute_actual_void((), lead_only))

    shown_out = _trick((Seat.LEFT, "C2"), (Seat.ACROSS, "S3"))
    assert compute_actual_void((), shown_out)[Seat.ACROSS][Suit.CLUBS]


def test_human_showing_out_is_not_tracked():
    trick = _trick(
        (Seat.LEFT, "C5"), (Seat.ACROSS, "C9"), (Seat.RIGHT, "C3"), (Seat.ME, "D2")
    )
    assert not any_void_observed(compute_actual_void((trick,), ()))


def test_suit_count_prompt_fires_on_first_show_out():
    current = _trick((Seat.LEFT, "S4"), (Seat.ACROSS, "S5"), (Seat.RIGHT, "H6"))
    assert should_prompt_suit_count((), current) == Suit.SPADES

    earlier = _trick(
        (Seat.ME, "S9"), (Seat.LEFT, "D2"), (Seat.ACROSS, "S2"), (Seat.RIGHT, "S3")
    )
    assert should_prompt_suit_count((earlier,), current) is None

    followed = _trick((Seat.LEFT, "S4"), (Seat.ACROSS, "S5"))
    assert should_prompt_suit_count((), followed) is None


def test_remaining_suit_count_not_in_hand():
    hand = [card_from_id(i) for i in ("H3", "H7", "H12", "C2")]
    # 13 hearts - 3 held - 3 played.
    assert remaining_suit_count_not_in_hand(Suit.HEARTS, hand, (HEART_TRICK,)) == 7
    assert remaining_suit_count_not_in_hand(Suit.CLUBS, hand, ()) == 12


def test_trick_lead_count():
    assert trick_lead_count((HEART_TRICK, HEART_TRICK), Suit.HEARTS) == 2
    assert trick_lead_count((HEART_TRICK,), Suit.CLUBS) == 0


def test_void_selection_mismatches():
    grid = _grid(right=[Suit.HEARTS])
    selections = {Seat.LEFT: True, Seat.ACROSS: False, Seat.RIGHT: True}

    assert void_selection_mismatches(selections, grid, Suit.HEARTS) == [Seat.LEFT]
    assert void_selection_mismatches(
        selections, grid, Suit.HEARTS, lead_seat=Seat.LEFT
    ) == []


def test_remaining_players_void_in_suit():
    grid = _grid(across=[Suit.HEARTS], right=[Suit.HEARTS])
    led = _trick((Seat.LEFT, "H5"))

    # Human still to act.
    assert not remaining_players_void_in_suit(Suit.HEARTS, Seat.ACROSS, led, grid)
    # Across and Right still to act, both void.
    assert remaining_players_void_in_suit(Suit.HEARTS, Seat.ME, led, grid)
    # Nobody left.
    full = _trick((Seat.LEFT, "H5"), (Seat.ACROSS, "D2"), (Seat.RIGHT, "C3"))
    assert remaining_players_void_in_suit(Suit.HEARTS, Seat.ME, full, create_void_grid())

    one_void = _grid(right=[Suit.HEARTS])
    assert not remaining_players_void_in_suit(Suit.HEARTS, Seat.ME, led, one_void)
    assert any_remaining_void_in_suit(Suit.HEARTS, Seat.ME, led, one_void)
    assert not any_remaining_void_in_suit(Suit.HEARTS, Seat.ME, led, create_void_grid())


def test_remaining_opponent_seats():
    assert remaining_opponent_seats(_trick((Seat.LEFT, "H5"))) == [Seat.ACROSS, Seat.RIGHT]
    assert remaining_opponent_seats(()) == [Seat.LEFT, Seat.ACROSS, Seat.RIGHT]
