"""Game-wide tunables.

Values mirror the shipped game: a 10×10 board, a one second countdown, a
200 ms pursuit tick and hints that stay on screen for three seconds.
"""

from dataclasses import dataclass
from typing import Dict

from carmines_quest.types import Difficulty


@dataclass(frozen=True)
class GameConfig:
    """Session tunables.

    Attributes:
        grid_size: Width and height of the square board in tiles.
        countdown_interval_ms: Period of the countdown timer.
        pursuit_interval_ms: Period of the pursuit timer.
        hint_duration_ms: How long a requested hint stays visible.
        pursuit_threshold: First level at which pursuers step onto the
            courier's cell and catching the courier ends the session.
        max_spawn_attempts: Random draws before spawn placement falls back to
            a deterministic scan of the board.
        min_time_limit: Floor of the per-level time budget, in seconds.
    """

    grid_size: int = 10
    countdown_interval_ms: int = 1000
    pursuit_interval_ms: int = 200
    hint_duration_ms: int = 3000
    pursuit_threshold: int = 3
    max_spawn_attempts: int = 100
    min_time_limit: int = 10


DEFAULT_CONFIG = GameConfig()

BASE_TIME_LIMIT: Dict[Difficulty, int] = {
    Difficulty.EASY: 45,
    Difficulty.MEDIUM: 30,
    Difficulty.HARD: 20,
}
"""Seconds available on early levels, before level-based reductions."""
