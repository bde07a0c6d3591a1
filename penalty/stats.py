"""Career statistics — cumulative totals persisted to a JSON file between games.

Storage problems are logged and swallowed here; they never reach the
simulation, which keeps no persistent state of its own.
"""

import json
import logging
import math
import os
from dataclasses import asdict, fields, replace
from pathlib import Path
from typing import Optional, Union

from penalty.types import CareerStats, Tally
from penalty import pitch

logger = logging.getLogger(__name__)

STORAGE_KEY = "pixelPenaltyStats"
DEFAULT_STATS_PATH = Path.home() / ".pixel_penalty" / "stats.json"

_FIELD_NAMES = {f.name for f in fields(CareerStats)}


def _resolve_path(path: Union[str, os.PathLike, None]) -> Path:
    return Path(path) if path is not None else DEFAULT_STATS_PATH


def load_stats(path: Union[str, os.PathLike, None] = None) -> CareerStats:
    """Read saved stats, falling back to zeros for anything missing or unreadable."""
    stats_path = _resolve_path(path)
    if not stats_path.exists():
        return CareerStats()

    try:
        with open(stats_path, encoding="utf-8") as f:
            saved = json.load(f).get(STORAGE_KEY, {})
        # Saved values win over defaults; unknown keys and non-finite numbers are ignored
        known = {
            k: int(v) for k, v in saved.items()
            if k in _FIELD_NAMES and isinstance(v, (int, float)) and math.isfinite(v)
        }
    except (OSError, ValueError, AttributeError) as e:
        logger.error("Failed to load stats from %s: %s", stats_path, e)
        return CareerStats()

    return replace(CareerStats(), **known)


def save_stats(stats: CareerStats, path: Union[str, os.PathLike, None] = None) -> bool:
    """Write stats to disk. Returns False (and logs) on failure."""
    stats_path = _resolve_path(path)
    try:
        stats_path.parent.mkdir(parents=True, exist_ok=True)
        with open(stats_path, "w", encoding="utf-8") as f:
            json.dump({STORAGE_KEY: asdict(stats)}, f, indent=2)
    except OSError as e:
        logger.error("Failed to save stats to %s: %s", stats_path, e)
        return False
    return True


def update_after_game(
    stats: CareerStats,
    tally: Tally,
    total_shots: int = pitch.SHOTS_PER_GAME,
) -> CareerStats:
    """Fold one finished game into the career totals. Returns a new CareerStats."""
    return CareerStats(
        total_shots=stats.total_shots + total_shots,
        total_goals=stats.total_goals + tally.goals,
        total_saves=stats.total_saves + tally.saves,
        total_misses=stats.total_misses + tally.misses,
        best_streak=max(stats.best_streak, tally.max_streak),
        games_played=stats.games_played + 1,
        perfect_games=stats.perfect_games + (1 if tally.goals == total_shots else 0),
    )


def accuracy(stats: CareerStats) -> int:
    """Career goal percentage, rounded."""
    if stats.total_shots == 0:
        return 0
    return round(stats.total_goals / stats.total_shots * 100)


def record_game(
    tally: Tally,
    total_shots: int = pitch.SHOTS_PER_GAME,
    path: Union[str, os.PathLike, None] = None,
) -> Optional[CareerStats]:
    """Load, update and save in one go. Returns the updated stats, or None if saving failed."""
    updated = update_after_game(load_stats(path), tally, total_shots)
    if not save_stats(updated, path):
        return None
    logger.info(
        "Career: %d/%d goals over %d games",
        updated.total_goals, updated.total_shots, updated.games_played,
    )
    return updated
