# trick_trainer/engine.py
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Mapping, Optional, Set

from .agents.base import TrickAgent
from .bidding import BidState, current_bidder, init_bid_state, is_bidding_complete, submit_bid
from .cards import HAND_SIZE, SEATS, Card, Seat, card_to_dict
from .hand_log import HandTranscriptLogger
from .rules import (
    InvalidStateError,
    PlayRefusal,
    determine_trick_winner,
    is_trump,
    next_seat,
    play_refusal_reason,
    same_trick,
)
from .state import (
    PLAYS_PER_TRICK,
    TRICKS_PER_HAND,
    GameState,
    Play,
    TrumpConfig,
    init_game_state,
)

logger = logging.getLogger(__name__)


def _copy_hands(hands: Mapping[Seat, List[Card]]) -> Dict[Seat, List[Card]]:
    return {seat: list(cards) for seat, cards in hands.items()}


# -----------------------------------------------------------------------------
# Transitions
# -----------------------------------------------------------------------------


def apply_play(state: GameState, play: Play, trump: TrumpConfig) -> GameState:
    """
    Put `play` on the table.

    Legality is the caller's job (see `is_play_legal`); this only moves the
    card from the seat's hand into the trick and advances the turn. After the
    fourth play the turn stays put until the trick is resolved.
    """
    hands = _copy_hands(state.hands)
    hand = hands[play.seat]
    if play.card in hand:
        hand.remove(play.card)

    trick_start_leader = state.trick_start_leader
    trick_start_turn = state.trick_start_turn
    if not state.trick:
        trick_start_leader = state.leader
        trick_start_turn = state.turn

    trick = state.trick + (play,)
    turn = next_seat(play.seat) if len(trick) < PLAYS_PER_TRICK else state.turn

    return replace(
        state,
        hands=hands,
        trick=trick,
        turn=turn,
        trump_broken=state.trump_broken or is_trump(play.card, trump),
        trick_start_leader=trick_start_leader,
        trick_start_turn=trick_start_turn,
    )


def resolve_trick(state: GameState, trump: TrumpConfig) -> GameState:
    """
    Credit the winner of a four-play trick and append it to history.

    Anything short of four plays returns `state` unchanged. The trick stays
    on the table until `advance_to_next_trick`.
    """
    if len(state.trick) != PLAYS_PER_TRICK:
        return state
    winner = determine_trick_winner(state.trick, trump)
    tricks_won = dict(state.tricks_won)
    tricks_won[winner] += 1
    return replace(
        state,
        tricks_won=tricks_won,
        leader=winner,
        turn=winner,
        trick_history=state.trick_history + (state.trick,),
        hand_complete=state.trick_no >= TRICKS_PER_HAND,
    )


def advance_to_next_trick(state: GameState) -> GameState:
    """Clear the resolved trick and move to the next trick number."""
    if not state.trick or state.hand_complete:
        return state
    return replace(state, trick=(), trick_no=state.trick_no + 1)


def reset_trick(state: GameState, trump: TrumpConfig) -> GameState:
    """
    Undo the trick on the table.

    Cards go back to their owners and leader/turn return to where they were
    when the trick began. If the trick was already resolved, its credit and
    its history entry are rolled back as well, and trump_broken is recomputed
    from what is left in history. An empty trick leaves `state` untouched.
    """
    if not state.trick:
        return state

    hands = _copy_hands(state.hands)
    for play in state.trick:
        hands[play.seat].append(play.card)

    tricks_won = state.tricks_won
    history = state.trick_history
    resolved = (
        len(state.trick) == PLAYS_PER_TRICK
        and bool(history)
        and same_trick(history[-1], state.trick)
    )
    if resolved:
        winner = determine_trick_winner(state.trick, trump)
        tricks_won = dict(state.tricks_won)
        tricks_won[winner] = max(0, tricks_won[winner] - 1)
        history = history[:-1]

    trump_broken = trump.enabled and any(
        is_trump(play.card, trump) for trick in history for play in trick
    )

    return replace(
        state,
        hands=hands,
        tricks_won=tricks_won,
        trick_history=history,
        trick=(),
        leader=state.trick_start_leader,
        turn=state.trick_start_turn,
        trump_broken=trump_broken,
        hand_complete=False,
    )


# -----------------------------------------------------------------------------
# Legality views
# -----------------------------------------------------------------------------


def _is_leading(state: GameState, seat: Seat) -> bool:
    return seat == state.leader and not state.trick


def compute_legal_by_seat(
    state: GameState, trump: TrumpConfig
) -> Dict[Seat, Set[str]]:
    """Ids of every card each seat could legally play right now."""
    out: Dict[Seat, Set[str]] = {seat: set() for seat in SEATS}
    for seat, hand in state.hands.items():
        leading = _is_leading(state, seat)
        for card in hand:
            reason = play_refusal_reason(
                hand, card, state.trick, leading, trump, state.trump_broken
            )
            if reason is None:
                out[seat].add(card.id)
    return out


def is_play_legal(
    state: GameState, seat: Seat, card: Card, trump: TrumpConfig
) -> bool:
    reason = play_refusal_reason(
        state.hands[seat],
        card,
        state.trick,
        _is_leading(state, seat),
        trump,
        state.trump_broken,
    )
    return reason is None


def explain_refusal(
    state: GameState, seat: Seat, card: Card, trump: TrumpConfig
) -> Optional[PlayRefusal]:
    """
    Full reason a play would be refused, including turn order.

    Returns None when `seat` may play `card` now.
    """
    if state.hand_complete:
        return PlayRefusal.HAND_COMPLETE
    if len(state.trick) >= PLAYS_PER_TRICK or seat != state.turn:
        return PlayRefusal.NOT_YOUR_TURN
    # Only the leader may lead a new trick.
    if not state.trick and seat != state.leader:
        return PlayRefusal.NOT_YOUR_TURN
    return play_refusal_reason(
        state.hands[seat],
        card,
        state.trick,
        _is_leading(state, seat),
        trump,
        state.trump_broken,
    )


def is_hand_in_progress(state: GameState) -> bool:
    """True once any card has been played in this hand."""
    return bool(state.trick_history) or bool(state.trick)


# -----------------------------------------------------------------------------
# Headless hand runner
# -----------------------------------------------------------------------------


@dataclass
class HandOutcome:
    seed: int
    trump: TrumpConfig
    state: GameState
    bid_state: Optional[BidState] = None


class HandEngine:
    """
    Plays one dealt hand to completion with pluggable agents.

    This is the same transition sequence a UI drives (apply four plays,
    resolve, advance), minus any timers. Agents implement the TrickAgent
    protocol.
    """

    def __init__(
        self,
        agents: Mapping[Seat, TrickAgent],
        seed: int,
        trump: Optional[TrumpConfig] = None,
        *,
        bidding: bool = False,
        hand_label: Optional[str] = None,
        transcript: Optional[HandTranscriptLogger] = None,
    ) -> None:
        missing = [seat.value for seat in SEATS if seat not in agents]
        if missing:
            raise ValueError(f"Missing agents for seats: {', '.join(missing)}")

        self.agents: Dict[Seat, TrickAgent] = dict(agents)
        self.seed = seed
        self.trump = trump or TrumpConfig()
        self.bidding = bidding
        self.hand_label = hand_label
        self.transcript = transcript

        self.state = init_game_state(seed)
        self.bid_state: Optional[BidState] = (
            init_bid_state(Seat.ME) if bidding else None
        )

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def play_hand(self) -> HandOutcome:
        """Bid (if enabled) and play all 13 tricks."""
        if self.transcript is not None:
            self.transcript.log_hand_start(
                hand_label=self.hand_label,
                seed=self.seed,
                trump_desc=str(self.trump),
            )
        if self.bid_state is not None:
            self._bidding_phase()

        while not self.state.hand_complete:
            self._play_trick()

        logger.info(
            "Finished hand%s: tricks %s",
            f" {self.hand_label}" if self.hand_label else "",
            ", ".join(
                f"{seat.value}={self.state.tricks_won[seat]}" for seat in SEATS
            ),
        )
        if self.transcript is not None:
            self.transcript.log_hand_end(
                hand_label=self.hand_label,
                tricks_won=self.state.tricks_won,
                bids=self.bid_state.bids if self.bid_state else None,
            )
        return HandOutcome(
            seed=self.seed,
            trump=self.trump,
            state=self.state,
            bid_state=self.bid_state,
        )

    # -------------------------------------------------------------------------
    # Phases
    # -------------------------------------------------------------------------

    def _bidding_phase(self) -> None:
        assert self.bid_state is not None
        while not is_bidding_complete(self.bid_state):
            seat = current_bidder(self.bid_state)
            if seat is None:
                break
            obs = self._build_observation(seat)
            obs["phase"] = "bidding"
            bid = self.agents[seat].choose_bid(obs)
            if not isinstance(bid, int):
                raise ValueError("Agent returned non-int bid")
            if bid < 0 or bid > HAND_SIZE:
                # Clamp to valid range; a bad bid should not end the hand.
                bid = max(0, min(HAND_SIZE, bid))
            self.bid_state = submit_bid(self.bid_state, seat, bid)
            logger.debug("%s bids %d", seat.value, bid)

    def _play_trick(self) -> None:
        for _ in range(PLAYS_PER_TRICK):
            seat = self.state.turn
            legal_ids = self._legal_ids(seat)
            if not legal_ids:
                raise InvalidStateError(f"{seat.value} has no legal card to play")

            obs = self._build_observation(seat)
            obs["phase"] = "play"
            obs["legal_ids"] = legal_ids
            card = self.agents[seat].choose_card(obs)
            if card is None or card.id not in legal_ids:
                fallback = next(
                    c for c in self.state.hands[seat] if c.id in legal_ids
                )
                logger.warning(
                    "%s chose illegal card %s; playing %s instead",
                    seat.value,
                    card,
                    fallback,
                )
                card = fallback

            self.state = apply_play(self.state, Play(seat, card), self.trump)

        trick = self.state.trick
        self.state = resolve_trick(self.state, self.trump)
        logger.info(
            "Trick %d%s: %s -> %s",
            self.state.trick_no,
            f" ({self.hand_label})" if self.hand_label else "",
            " ".join(f"{p.seat.value}:{p.card}" for p in trick),
            self.state.leader.value,
        )
        if self.transcript is not None:
            self.transcript.log_trick(
                hand_label=self.hand_label,
                trick_no=self.state.trick_no,
                plays=trick,
                winner=self.state.leader,
            )
        self.state = advance_to_next_trick(self.state)

    # -------------------------------------------------------------------------
    # Observation builders
    # -------------------------------------------------------------------------

    def _legal_ids(self, seat: Seat) -> Set[str]:
        return {
            c.id
            for c in self.state.hands[seat]
            if is_play_legal(self.state, seat, c, self.trump)
        }

    def _build_observation(self, seat: Seat) -> Dict[str, Any]:
        hand = self.state.hands[seat]
        bids = dict(self.bid_state.bids) if self.bid_state else {}
        return {
            "hand_label": self.hand_label,
            "seat": seat,
            "hand_cards": hand[:],
            "hand": [card_to_dict(c) for c in hand],
            "trump": self.trump,
            "trump_broken": self.state.trump_broken,
            "trick": self.state.trick,
            "trick_no": self.state.trick_no,
            "trick_history": self.state.trick_history,
            "leader": self.state.leader,
            "tricks_won": dict(self.state.tricks_won),
            "bids": bids,
            "bid": bids.get(seat),
        }
