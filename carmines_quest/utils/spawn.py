"""Pursuer spawn placement.

A spawn cell must be free terrain that is neither the courier's start nor the
delivery target. Cells are drawn at random; after ``max_attempts`` misses the
board is scanned row by row and the first free cell is used, so placement
terminates even on nearly full boards.
"""

import logging
import random
from typing import Iterator

from carmines_quest.components import Position
from carmines_quest.grid import Grid

logger = logging.getLogger(__name__)


def is_spawnable(grid: Grid, pos: Position) -> bool:
    """Return True if a pursuer may be placed on ``pos``."""
    return (
        grid.is_in_bounds(pos)
        and not grid.is_blocked(pos)
        and pos != grid.start
        and pos != grid.target
    )


def _scan(grid: Grid) -> Iterator[Position]:
    for y in range(grid.size):
        for x in range(grid.size):
            yield Position(x, y)


def choose_spawn_position(
    grid: Grid, rng: random.Random, max_attempts: int = 100
) -> Position:
    """Pick a spawn cell for one pursuer.

    Raises:
        ValueError: If the board has no spawnable cell at all.
    """
    for _ in range(max_attempts):
        pos = Position(rng.randrange(grid.size), rng.randrange(grid.size))
        if is_spawnable(grid, pos):
            return pos

    logger.warning(
        "No spawn cell found after %d random draws; scanning the grid", max_attempts
    )
    for pos in _scan(grid):
        if is_spawnable(grid, pos):
            return pos
    raise ValueError("Grid has no free cell to spawn a pursuer")
