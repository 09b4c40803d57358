"""Grid math helpers.

Neighbor enumeration used by the shortest-path engine. The order of
``DIRECTIONS`` decides which of several equally short routes is chosen, so it
must stay down, right, up, left.
"""

from typing import Iterator, Sequence, Tuple

from carmines_quest.components import Position

DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))


def neighbors(pos: Position, size: int) -> Iterator[Position]:
    """Yield in-bounds 4-neighbors of ``pos`` in ``DIRECTIONS`` order."""
    for dx, dy in DIRECTIONS:
        x, y = pos.x + dx, pos.y + dy
        if 0 <= x < size and 0 <= y < size:
            yield Position(x, y)


def is_adjacent(a: Position, b: Position) -> bool:
    """Return True if ``a`` and ``b`` share an edge."""
    return abs(a.x - b.x) + abs(a.y - b.y) == 1


def manhattan_distance(a: Position, b: Position) -> int:
    return abs(a.x - b.x) + abs(a.y - b.y)


def is_contiguous(cells: Sequence[Position]) -> bool:
    """Return True if every consecutive pair of ``cells`` is adjacent."""
    return all(is_adjacent(a, b) for a, b in zip(cells, cells[1:]))
