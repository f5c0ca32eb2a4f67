# trick_trainer/agents/__init__.py
from .base import TrickAgent
from .random_agent import RandomTrickAgent, pick_random_legal_card
from .bidding_agent import BidAiContext, BiddingTrickAgent, choose_card_to_play_for_bid
from .heuristics import BidBreakdown, SuitBreakdown, build_bid_breakdown, estimate_bid

__all__ = [
    "TrickAgent",
    "RandomTrickAgent",
    "pick_random_legal_card",
    "BidAiContext",
    "BiddingTrickAgent",
    "choose_card_to_play_for_bid",
    "BidBreakdown",
    "SuitBreakdown",
    "build_bid_breakdown",
    "estimate_bid",
]
