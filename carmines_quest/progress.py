"""Persisted player progress.

One JSON record per save slot holds the completed levels, aggregate delivery
statistics, unlocked achievements and player settings. The record is an
immutable :class:`Progress` value; :func:`complete_level` returns an updated
copy and :class:`ProgressStore` ties it to a directory on disk and to the
``on_complete`` hook of :class:`carmines_quest.loop.GameLoop`.

The on-disk layout uses the same camelCase keys as the browser version of the
game so existing save files load unchanged.
"""

import json
import logging
from dataclasses import dataclass, field, replace
from enum import StrEnum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from pyrsistent import pmap, pvector, thaw
from pyrsistent.typing import PMap, PVector

from carmines_quest.config import DEFAULT_CONFIG, GameConfig
from carmines_quest.levels.catalog import LEVEL_COUNT, time_limit
from carmines_quest.levels.config import LevelConfig
from carmines_quest.loop import GameLoop
from carmines_quest.scheduler import Scheduler
from carmines_quest.types import Difficulty

logger = logging.getLogger(__name__)

PROGRESS_KEY = "carmines-quest-data"

PERFECT_RUN_MIN_SECONDS = 20
SPEED_DEMON_MIN_SECONDS = 25


class Achievement(StrEnum):
    FIRST_DELIVERY = "first-delivery"
    NO_HINTS = "no-hints"
    SPEED_DEMON = "speed-demon"
    ALL_LEVELS = "all-levels"


@dataclass(frozen=True)
class Settings:
    sound_enabled: bool = True
    difficulty: Difficulty = Difficulty.MEDIUM
    show_grid: bool = True


@dataclass(frozen=True)
class GameStats:
    """Aggregate statistics over all completed deliveries.

    Attributes:
        total_deliveries: Completed sessions, repeats included.
        total_time: Seconds spent on completed sessions.
        best_times: Highest remaining time per level number.
        achievements: Unlocked achievement ids in unlock order.
        hints_used: Hints requested across completed sessions.
        perfect_runs: Completions without hints and with more than
            ``PERFECT_RUN_MIN_SECONDS`` left.
    """

    total_deliveries: int = 0
    total_time: int = 0
    best_times: PMap[int, int] = pmap()
    achievements: PVector[str] = pvector()
    hints_used: int = 0
    perfect_runs: int = 0


@dataclass(frozen=True)
class Progress:
    completed_levels: PVector[int] = pvector()
    stats: GameStats = field(default_factory=GameStats)
    settings: Settings = field(default_factory=Settings)


def unlock_achievement(progress: Progress, achievement: str) -> Progress:
    """Add ``achievement`` unless already unlocked."""
    stats = progress.stats
    if achievement in stats.achievements:
        return progress
    stats = replace(stats, achievements=stats.achievements.append(achievement))
    return replace(progress, stats=stats)


def complete_level(
    progress: Progress,
    level: int,
    time_remaining: int,
    hints_used: int,
    time_budget: int,
) -> Progress:
    """Record a completed delivery.

    Args:
        progress: Current record.
        level: Completed level number.
        time_remaining: Seconds left on the clock at completion.
        hints_used: Hints requested during the session.
        time_budget: Seconds the session started with.

    Returns:
        Progress: Updated record with statistics and newly unlocked
        achievements.
    """
    completed = progress.completed_levels
    if level not in completed:
        completed = completed.append(level)

    stats = progress.stats
    best = stats.best_times.get(level)
    stats = replace(
        stats,
        total_deliveries=stats.total_deliveries + 1,
        total_time=stats.total_time + max(0, time_budget - time_remaining),
        hints_used=stats.hints_used + hints_used,
        best_times=(
            stats.best_times.set(level, time_remaining)
            if best is None or time_remaining > best
            else stats.best_times
        ),
        perfect_runs=stats.perfect_runs
        + (1 if hints_used == 0 and time_remaining > PERFECT_RUN_MIN_SECONDS else 0),
    )
    progress = replace(progress, completed_levels=completed, stats=stats)

    if level == 1:
        progress = unlock_achievement(progress, Achievement.FIRST_DELIVERY)
    if hints_used == 0:
        progress = unlock_achievement(progress, Achievement.NO_HINTS)
    if time_remaining > SPEED_DEMON_MIN_SECONDS:
        progress = unlock_achievement(progress, Achievement.SPEED_DEMON)
    if len(completed) >= LEVEL_COUNT:
        progress = unlock_achievement(progress, Achievement.ALL_LEVELS)
    return progress


def is_level_unlocked(progress: Progress, level: int) -> bool:
    """Level 1 is always open; any later level needs the previous one done."""
    return level <= 1 or (level - 1) in progress.completed_levels


def best_times_ranking(progress: Progress) -> List[Tuple[int, int]]:
    """``(level, seconds remaining)`` pairs, most time left first.

    Equal times are ordered by level number.
    """
    return sorted(progress.stats.best_times.items(), key=lambda e: (-e[1], e[0]))


def update_settings(progress: Progress, **changes: Any) -> Progress:
    return replace(progress, settings=replace(progress.settings, **changes))


def reset_progress(progress: Progress) -> Progress:
    """Forget levels, statistics and achievements but keep the settings."""
    return Progress(settings=progress.settings)


def to_dict(progress: Progress) -> Dict[str, Any]:
    """JSON-friendly representation."""
    stats = progress.stats
    return {
        "completedLevels": thaw(progress.completed_levels),
        "gameStats": {
            "totalDeliveries": stats.total_deliveries,
            "totalTime": stats.total_time,
            "bestTimes": {str(k): v for k, v in stats.best_times.items()},
            "achievements": thaw(stats.achievements),
            "hintsUsed": stats.hints_used,
            "perfectRuns": stats.perfect_runs,
        },
        "settings": {
            "soundEnabled": progress.settings.sound_enabled,
            "difficulty": str(progress.settings.difficulty),
            "showGrid": progress.settings.show_grid,
        },
    }


def from_dict(data: Dict[str, Any]) -> Progress:
    """Inverse of :func:`to_dict`; missing sections fall back to defaults."""
    raw_stats = data.get("gameStats") or {}
    raw_settings = data.get("settings") or {}
    defaults = Settings()
    stats = GameStats(
        total_deliveries=int(raw_stats.get("totalDeliveries", 0)),
        total_time=int(raw_stats.get("totalTime", 0)),
        best_times=pmap(
            {int(k): int(v) for k, v in (raw_stats.get("bestTimes") or {}).items()}
        ),
        achievements=pvector(raw_stats.get("achievements") or []),
        hints_used=int(raw_stats.get("hintsUsed", 0)),
        perfect_runs=int(raw_stats.get("perfectRuns", 0)),
    )
    settings = Settings(
        sound_enabled=bool(raw_settings.get("soundEnabled", defaults.sound_enabled)),
        difficulty=Difficulty(raw_settings.get("difficulty", defaults.difficulty)),
        show_grid=bool(raw_settings.get("showGrid", defaults.show_grid)),
    )
    return Progress(
        completed_levels=pvector(int(n) for n in data.get("completedLevels") or []),
        stats=stats,
        settings=settings,
    )


def save_progress(
    progress: Progress, directory: Union[str, Path], key: str = PROGRESS_KEY
) -> Path:
    """Write ``progress`` to ``<directory>/<key>.json`` and return the path."""
    path = Path(directory) / f"{key}.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(to_dict(progress), indent=2), encoding="utf-8")
    return path


def load_progress(directory: Union[str, Path], key: str = PROGRESS_KEY) -> Progress:
    """Read the save slot ``key``; an absent slot yields a fresh record."""
    path = Path(directory) / f"{key}.json"
    if not path.exists():
        return Progress()
    return from_dict(json.loads(path.read_text(encoding="utf-8")))


class ProgressStore:
    """Save slot bound to a directory.

    Sessions should be started with :meth:`play`, which runs the level at the
    saved difficulty and records each completion against the time budget the
    session actually had. ``on_complete`` also matches
    :data:`carmines_quest.loop.CompletionCallback`; handed directly to a game
    loop it assumes the loop plays an authored level at the saved difficulty.
    """

    def __init__(self, directory: Union[str, Path], key: str = PROGRESS_KEY) -> None:
        self._directory = Path(directory)
        self._key = key
        self.progress = load_progress(self._directory, key)

    def play(
        self,
        level: Union[int, LevelConfig] = 1,
        difficulty: Optional[Difficulty] = None,
        config: GameConfig = DEFAULT_CONFIG,
        seed: Optional[int] = None,
        scheduler: Optional[Scheduler] = None,
    ) -> GameLoop:
        """Start a :class:`GameLoop` whose completions are recorded here.

        Args:
            level: Level number or custom level configuration.
            difficulty: Overrides the saved difficulty for this loop.
            config: Game tunables.
            seed: Seed for pursuer placement.
            scheduler: Scheduler to register the loop's timers on.
        """
        loop: Optional[GameLoop] = None

        def record(number: int, time_left: int, hints_used: int) -> None:
            assert loop is not None
            self.on_complete(
                number, time_left, hints_used, time_budget=loop.level.time_limit
            )

        loop = GameLoop(
            level=level,
            difficulty=difficulty or self.progress.settings.difficulty,
            config=config,
            on_complete=record,
            seed=seed,
            scheduler=scheduler,
        )
        return loop

    def on_complete(
        self,
        level: int,
        time_left: int,
        hints_used: int,
        time_budget: Optional[int] = None,
    ) -> None:
        """Record a completed delivery and save.

        ``time_budget`` defaults to the authored budget of ``level`` at the
        saved difficulty.
        """
        if time_budget is None:
            time_budget = time_limit(self.progress.settings.difficulty, level)
        self.progress = complete_level(
            self.progress, level, time_left, hints_used, time_budget
        )
        path = self.save()
        logger.info("Level %d completed, progress saved to %s", level, path)

    def save(self) -> Path:
        return save_progress(self.progress, self._directory, self._key)

    def reset(self) -> None:
        self.progress = reset_progress(self.progress)
        self.save()
