# trick_trainer/settings.py
from __future__ import annotations

import json
import logging
import math
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Callable, Dict, Tuple

from .cards import RANK_ACE, Suit
from .prompts import VoidPromptScope
from .rules import SUIT_ORDERS
from .state import TrumpConfig

logger = logging.getLogger(__name__)

AI_MODES = ("random", "bidding")


def parse_seed(value: str) -> int:
    """
    Parse a user-typed deal seed.

    Accepts any finite number; fractions are floored and the result is wrapped
    to 32 bits. Blank, non-numeric and negative input raise ValueError.
    """
    text = value.strip()
    if not text:
        raise ValueError("Seed must not be blank")
    try:
        number = float(text)
    except ValueError as exc:
        raise ValueError(f"Seed must be a number, got {value!r}") from exc
    if not math.isfinite(number):
        raise ValueError(f"Seed must be finite, got {value!r}")
    seed = math.floor(number)
    if seed < 0:
        raise ValueError(f"Seed must be non-negative, got {value!r}")
    return seed & 0xFFFFFFFF


@dataclass
class TrainerSettings:
    """Everything the trainer remembers between sessions."""

    seed: int = 0
    trump: TrumpConfig = field(default_factory=TrumpConfig)

    void_tracking_enabled: bool = True
    void_prompt_scope: VoidPromptScope = VoidPromptScope.PER_SUIT
    void_prompt_only_when_leading: bool = False
    void_prompt_skip_low_impact: bool = False
    tracked_suits: Tuple[Suit, ...] = tuple(Suit)

    suit_count_prompt_enabled: bool = False

    win_intent_prompt_enabled: bool = False
    win_intent_warn_trump: bool = True
    win_intent_warn_honors_only: bool = True
    win_intent_min_rank: int = 10

    ai_enabled: bool = True
    ai_mode: str = "bidding"
    ai_plays_me: bool = False
    pause_before_next_trick: bool = False

    suit_order: str = "bridge"
    sort_ascending: bool = True


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def _parse_trump(value: Any) -> TrumpConfig:
    if not isinstance(value, dict):
        raise ValueError("trump must be an object")
    enabled = value.get("enabled")
    must_break = value.get("must_break")
    if not _is_bool(enabled) or not _is_bool(must_break):
        raise ValueError("trump.enabled and trump.must_break must be booleans")
    return TrumpConfig(enabled=enabled, suit=Suit(value.get("suit")), must_break=must_break)


def _parse_seed_value(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("seed must be a number")
    return parse_seed(str(value))


def _parse_min_rank(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("win_intent_min_rank must be a number")
    rank = math.floor(value)
    if not 2 <= rank <= RANK_ACE:
        raise ValueError("win_intent_min_rank must be between 2 and 14")
    return rank


def _parse_choice(choices: Tuple[str, ...]) -> Callable[[Any], str]:
    def parse(value: Any) -> str:
        if value not in choices:
            raise ValueError(f"expected one of {', '.join(choices)}")
        return value

    return parse


def _parse_tracked_suits(value: Any) -> Tuple[Suit, ...]:
    if not isinstance(value, list):
        raise ValueError("tracked_suits must be a list")
    chosen = {Suit(v) for v in value}
    return tuple(s for s in Suit if s in chosen)


def _parse_bool(value: Any) -> bool:
    if not _is_bool(value):
        raise ValueError("expected a boolean")
    return value


_PARSERS: Dict[str, Callable[[Any], Any]] = {
    "seed": _parse_seed_value,
    "trump": _parse_trump,
    "void_prompt_scope": VoidPromptScope,
    "tracked_suits": _parse_tracked_suits,
    "win_intent_min_rank": _parse_min_rank,
    "ai_mode": _parse_choice(AI_MODES),
    "suit_order": _parse_choice(tuple(SUIT_ORDERS)),
}


def settings_from_dict(data: Dict[str, Any]) -> TrainerSettings:
    """
    Build settings from a loaded blob.

    Each field is validated on its own: a bad or unknown value is dropped with
    a warning and the default is kept, so one stale key never discards the
    rest of the file.
    """
    values: Dict[str, Any] = {}
    known = {f.name for f in fields(TrainerSettings)}
    for key, raw in data.items():
        if key not in known:
            logger.warning("Ignoring unknown setting %r", key)
            continue
        parser = _PARSERS.get(key, _parse_bool)
        try:
            values[key] = parser(raw)
        except (ValueError, TypeError) as exc:
            logger.warning("Ignoring invalid setting %s=%r: %s", key, raw, exc)
    return TrainerSettings(**values)


def settings_to_dict(settings: TrainerSettings) -> Dict[str, Any]:
    """JSON-ready dict; inverse of `settings_from_dict`."""
    data = asdict(settings)
    data["trump"] = {
        "enabled": settings.trump.enabled,
        "suit": settings.trump.suit.value,
        "must_break": settings.trump.must_break,
    }
    data["void_prompt_scope"] = settings.void_prompt_scope.value
    data["tracked_suits"] = [s.value for s in settings.tracked_suits]
    return data


def load_settings(path: str | Path) -> TrainerSettings:
    """
    Read settings from a JSON file.

    A missing file gives the defaults. A file that is not a JSON object raises
    ValueError.
    """
    path = Path(path)
    if not path.exists():
        logger.info("No settings file at %s; using defaults", path)
        return TrainerSettings()
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Settings file {path} is not valid JSON") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a JSON object")
    return settings_from_dict(data)


def save_settings(settings: TrainerSettings, path: str | Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(settings_to_dict(settings), f, indent=2, sort_keys=True)
