# trick_trainer/hand_log.py
from __future__ import annotations

from pathlib import Path
from threading import Lock
from typing import List, Mapping, Optional, Sequence

from .cards import SEATS, Seat
from .state import Play


class HandTranscriptLogger:
    """Accumulates a trick-by-trick transcript of self-play hands."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._entries: List[str] = []
        self._lock = Lock()

    def log_hand_start(
        self,
        *,
        hand_label: Optional[str],
        seed: int,
        trump_desc: str,
    ) -> None:
        header_parts = [f"Seed: {seed}", f"Trump: {trump_desc}"]
        if hand_label is not None:
            header_parts.insert(0, f"Hand: {hand_label}")
        self._append(f"=== {' | '.join(header_parts)} ===")

    def log_trick(
        self,
        *,
        hand_label: Optional[str],
        trick_no: int,
        plays: Sequence[Play],
        winner: Seat,
    ) -> None:
        cards = " ".join(f"{p.seat.value}:{p.card}" for p in plays)
        prefix = f"[{hand_label}] " if hand_label is not None else ""
        self._append(f"{prefix}Trick {trick_no}: {cards} -> {winner.value}")

    def log_hand_end(
        self,
        *,
        hand_label: Optional[str],
        tricks_won: Mapping[Seat, int],
        bids: Optional[Mapping[Seat, Optional[int]]] = None,
    ) -> None:
        lines = []
        for seat in SEATS:
            line = f"  {seat.value}: {tricks_won.get(seat, 0)} tricks"
            if bids is not None:
                bid = bids.get(seat)
                line += f" (bid {bid if bid is not None else '-'})"
            lines.append(line)
        prefix = f"[{hand_label}] " if hand_label is not None else ""
        self._append(f"{prefix}Result:\n" + "\n".join(lines))

    def _append(self, entry: str) -> None:
        with self._lock:
            self._entries.append(entry.strip())

    def flush(self) -> None:
        with self._lock:
            if not self._entries:
                return
            to_write = "\n".join(self._entries)
            self._entries.clear()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(to_write + "\n", encoding="utf-8")
