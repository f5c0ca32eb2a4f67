# trick_trainer/cli.py
from __future__ import annotations

import argparse
import dataclasses
import logging
import random
from typing import Any, Dict, List, Optional

from .agents import BiddingTrickAgent, RandomTrickAgent, TrickAgent
from .cards import SEATS, Seat, Suit
from .engine import HandEngine
from .game_log import build_hand_rows, write_hand_rows_csv
from .hand_log import HandTranscriptLogger
from .paths import ensure_results_dir, resolve_results_path
from .settings import AI_MODES, TrainerSettings, load_settings, parse_seed

_TRUMP_CHOICES = ["none"] + [s.name.lower() for s in Suit]


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="trick-trainer",
        description=(
            "Play trick-taking hands with computer players in every seat and "
            "log per-seat bids and tricks to a CSV file."
        ),
    )
    parser.add_argument(
        "--hands",
        type=int,
        default=1,
        help="Number of hands to play (default: 1).",
    )
    parser.add_argument(
        "--seed",
        type=str,
        default=None,
        help="Deal seed for the first hand; later hands use seed+1, seed+2, ...",
    )
    parser.add_argument(
        "--trump",
        choices=_TRUMP_CHOICES,
        default=None,
        help="Trump suit, or 'none' (default: from settings, else none).",
    )
    parser.add_argument(
        "--no-must-break",
        action="store_true",
        help="Allow leading trump before it has been played.",
    )
    parser.add_argument(
        "--ai-mode",
        choices=AI_MODES,
        default=None,
        help="'bidding' bids and plays to the bid; 'random' plays uniformly.",
    )
    parser.add_argument(
        "--csv",
        type=str,
        default="trick_trainer_hands.csv",
        help="Path to the output CSV file (default: trick_trainer_hands.csv).",
    )
    parser.add_argument(
        "--transcript",
        type=str,
        default=None,
        help="Optional path for a trick-by-trick text transcript.",
    )
    parser.add_argument(
        "--settings",
        type=str,
        default=None,
        help="Optional JSON settings file supplying defaults.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ...). Default: INFO.",
    )
    return parser.parse_args(argv)


def _resolve_settings(args: argparse.Namespace) -> TrainerSettings:
    """Settings file first, then any explicit command-line overrides."""
    settings = load_settings(args.settings) if args.settings else TrainerSettings()

    if args.seed is not None:
        try:
            settings.seed = parse_seed(args.seed)
        except ValueError as exc:
            raise SystemExit(f"Invalid --seed: {exc}") from exc

    trump = settings.trump
    if args.trump == "none":
        trump = dataclasses.replace(trump, enabled=False)
    elif args.trump is not None:
        trump = dataclasses.replace(trump, enabled=True, suit=Suit[args.trump.upper()])
    if args.no_must_break:
        trump = dataclasses.replace(trump, must_break=False)
    settings.trump = trump

    if args.ai_mode is not None:
        settings.ai_mode = args.ai_mode
    return settings


def _build_agents(ai_mode: str, agent_seed: int) -> Dict[Seat, TrickAgent]:
    agents: Dict[Seat, TrickAgent] = {}
    for i, seat in enumerate(SEATS):
        rng = random.Random(agent_seed + i)
        if ai_mode == "bidding":
            agents[seat] = BiddingTrickAgent(rng=rng)
        else:
            agents[seat] = RandomTrickAgent(rng=rng)
    return agents


def play_hands(
    settings: TrainerSettings,
    hands: int,
    transcript: Optional[HandTranscriptLogger] = None,
) -> List[Dict[str, Any]]:
    """Play `hands` self-play hands and return their CSV rows."""
    rows: List[Dict[str, Any]] = []
    for hand_index in range(hands):
        hand_id = f"hand-{hand_index + 1}"
        seed = (settings.seed + hand_index) & 0xFFFFFFFF
        engine = HandEngine(
            agents=_build_agents(settings.ai_mode, seed * 10),
            seed=seed,
            trump=settings.trump,
            bidding=settings.ai_mode == "bidding",
            hand_label=hand_id,
            transcript=transcript,
        )
        outcome = engine.play_hand()
        rows.extend(build_hand_rows(outcome, hand_id=hand_id))
    return rows


def main(argv: List[str] | None = None) -> None:
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.hands < 1:
        raise SystemExit(f"--hands must be at least 1; got {args.hands}.")

    settings = _resolve_settings(args)
    ensure_results_dir()
    csv_path = resolve_results_path(args.csv)
    transcript_path = (
        resolve_results_path(args.transcript) if args.transcript else None
    )

    logging.info("Hands to play: %d", args.hands)
    logging.info("Seed: %d, trump: %s, AI mode: %s", settings.seed, settings.trump, settings.ai_mode)
    logging.info("Output CSV: %s", csv_path)
    if transcript_path:
        logging.info("Transcript: %s", transcript_path)

    transcript = HandTranscriptLogger(transcript_path) if transcript_path else None

    rows = play_hands(settings, args.hands, transcript)
    write_hand_rows_csv(rows, csv_path)
    logging.info("Finished %d hands; wrote %d rows to %s", args.hands, len(rows), csv_path)

    if transcript:
        transcript.flush()


if __name__ == "__main__":
    main()
