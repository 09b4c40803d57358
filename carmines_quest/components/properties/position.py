"""Position component.

Immutable integer grid coordinates, used both as the per-entity component in
``State.position`` and as the cell type of grids, distance fields and paths.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """Grid coordinate.

    Attributes:
        x: Column index (0 at left).
        y: Row index (0 at top).
    """

    x: int
    y: int
