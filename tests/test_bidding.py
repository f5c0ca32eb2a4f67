# tests/test_bidding.py
from trick_trainer.bidding import (
    BidResult,
    build_bid_order,
    current_bidder,
    evaluate_exact_bids,
    init_bid_state,
    is_bidding_complete,
    submit_bid,
)
from trick_trainer.cards import SEATS, Seat


def test_bid_order_starts_with_the_given_seat():
    assert build_bid_order(Seat.ME) == [Seat.ME, Seat.LEFT, Seat.ACROSS, Seat.RIGHT]
    assert build_bid_order(Seat.RIGHT) == [Seat.RIGHT, Seat.ME, Seat.LEFT, Seat.ACROSS]


def test_bidding_runs_in_order():
    state = init_bid_state(Seat.ME)
    assert current_bidder(state) == Seat.ME
    assert all(bid is None for bid in state.bids.values())

    for i, seat in enumerate(build_bid_order(Seat.ME)):
        state = submit_bid(state, seat, i)

    assert is_bidding_complete(state)
    assert current_bidder(state) is None
    assert state.bids == {Seat.ME: 0, Seat.LEFT: 1, Seat.ACROSS: 2, Seat.RIGHT: 3}
    assert all(state.revealed.values())


def test_out_of_turn_bid_is_ignored():
    state = init_bid_state(Seat.ME)
    assert submit_bid(state, Seat.LEFT, 4) is state

    after_me = submit_bid(state, Seat.ME, 2)
    assert after_me is not state
    assert state.bids[Seat.ME] is None
    assert after_me.bids[Seat.ME] == 2
    assert current_bidder(after_me) == Seat.LEFT


def test_bid_after_completion_is_ignored():
    state = init_bid_state(Seat.ME)
    for seat in build_bid_order(Seat.ME):
        state = submit_bid(state, seat, 1)
    assert submit_bid(state, Seat.ME, 5) is state


def test_evaluate_exact_bids():
    bids = {Seat.ME: 3, Seat.LEFT: 2, Seat.ACROSS: None, Seat.RIGHT: 0}
    won = {Seat.ME: 3, Seat.LEFT: 4, Seat.ACROSS: 6, Seat.RIGHT: 0}
    results = evaluate_exact_bids(bids, won)

    assert set(results) == set(SEATS)
    assert results[Seat.ME] == BidResult(bid=3, tricks_won=3, made=True)
    assert not results[Seat.LEFT].made
    assert not results[Seat.ACROSS].made
    assert results[Seat.RIGHT].made
