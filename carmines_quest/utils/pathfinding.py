"""Shortest-path engine (Lee's algorithm).

Breadth-first search over the board from a source cell, producing a dense
distance field, followed by a walk back from the destination that recovers one
shortest route. Used by pursuers every pursuit tick and by the hint system.

Distance field layout: a ``size × size`` numpy array indexed ``[y, x]``. Each
entry is either :data:`UNVISITED`, :data:`BLOCKED`, or the number of steps
from the source. A new field is allocated for every query; nothing is cached
between calls.

Tie-breaks: both expansion and reconstruction scan neighbors down, right, up,
left (:data:`carmines_quest.utils.grid.DIRECTIONS`), so identical inputs
always yield the identical path.
"""

import logging
from collections import deque
from typing import Deque

import numpy as np
import numpy.typing as npt

from carmines_quest.components import Position
from carmines_quest.grid import Grid
from carmines_quest.types import Path
from carmines_quest.utils.grid import is_adjacent, is_contiguous, neighbors

logger = logging.getLogger(__name__)

UNVISITED = -1
BLOCKED = -2

DistanceField = npt.NDArray[np.int32]


def distance_field(grid: Grid, start: Position, end: Position) -> DistanceField:
    """Run BFS from ``start`` until ``end`` is dequeued.

    Every obstacle and building is marked :data:`BLOCKED` except a building
    located at ``end``, so the delivery target can always be entered. Cells
    farther than ``end`` may be left :data:`UNVISITED` because expansion stops
    as soon as ``end`` is reached.

    Args:
        grid: Board to search.
        start: Source cell; callers guarantee it is in-bounds and walkable.
        end: Destination cell.

    Returns:
        DistanceField: ``[y, x]`` array of distances and sentinels.
    """
    field: DistanceField = np.full((grid.size, grid.size), UNVISITED, dtype=np.int32)
    for pos in grid.obstacles:
        field[pos.y, pos.x] = BLOCKED
    for pos in grid.buildings:
        if pos != end:
            field[pos.y, pos.x] = BLOCKED

    field[start.y, start.x] = 0
    queue: Deque[Position] = deque([start])

    while queue:
        current = queue.popleft()
        if current == end:
            break
        dist = int(field[current.y, current.x])
        for nxt in neighbors(current, grid.size):
            if field[nxt.y, nxt.x] == UNVISITED:
                field[nxt.y, nxt.x] = dist + 1
                queue.append(nxt)

    return field


def reconstruct_path(field: DistanceField, start: Position, end: Position) -> Path:
    """Walk back from ``end`` to ``start`` along strictly decreasing distances.

    At each cell the first neighbor (down, right, up, left) whose distance is
    exactly one less is taken. If no such neighbor exists the walk stops and
    the partial path built so far is returned; use :func:`is_full_path` to
    tell the two apart.

    Returns:
        Path: Cells from just after ``start`` to ``end`` inclusive.
    """
    size = field.shape[0]
    path: Deque[Position] = deque()
    current = end
    while current != start:
        path.appendleft(current)
        dist = int(field[current.y, current.x])
        if dist <= 0:
            break
        prev = next(
            (n for n in neighbors(current, size) if field[n.y, n.x] == dist - 1),
            None,
        )
        if prev is None:
            break
        current = prev
    return list(path)


def find_path(grid: Grid, start: Position, end: Position) -> Path:
    """Shortest 4-directional path from ``start`` to ``end``.

    Pure function. The result excludes ``start``, includes ``end`` and never
    crosses an obstacle or a building other than ``end`` itself.

    Returns:
        Path: Empty if ``end == start`` or ``end`` is unreachable.
    """
    if start == end:
        return []
    field = distance_field(grid, start, end)
    if field[end.y, end.x] < 0:
        logger.debug("find_path: %s unreachable from %s", end, start)
        return []
    return reconstruct_path(field, start, end)


def is_full_path(path: Path, start: Position) -> bool:
    """Return True if ``path`` is a non-empty contiguous route leaving ``start``."""
    if not path or not is_adjacent(start, path[0]):
        return False
    return is_contiguous(path)

