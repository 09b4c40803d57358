"""Static level terrain.

A :class:`Grid` describes everything about a board that does not move during
a session: its size, the trees and rocks, the town's buildings and which of
them is the delivery target. Buildings are impassable except the target,
which the courier enters to finish the delivery.
"""

from dataclasses import dataclass
from enum import StrEnum, auto

from pyrsistent import pmap
from pyrsistent.typing import PMap

from carmines_quest.components import Position


class ObstacleKind(StrEnum):
    TREE = auto()
    ROCK = auto()


class BuildingKind(StrEnum):
    HOUSE = auto()
    MANSION = auto()
    RESTAURANT = auto()
    CLINIC = auto()
    SCHOOL = auto()
    HOSPITAL = auto()
    CHURCH = auto()
    FIRE_STATION = "fire-station"


@dataclass(frozen=True)
class Grid:
    """Immutable board description.

    Attributes:
        size: Width and height in tiles.
        start: Courier spawn cell.
        target: Delivery cell; must be one of ``buildings``.
        obstacles: Trees and rocks keyed by cell.
        buildings: Buildings keyed by cell.

    Raises:
        ValueError: If a cell lies outside the board or the target is not a
            building.
    """

    size: int
    start: Position
    target: Position
    obstacles: PMap[Position, ObstacleKind] = pmap()
    buildings: PMap[Position, BuildingKind] = pmap()

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise ValueError(f"Grid size must be positive, got {self.size}")
        cells = [self.start, self.target, *self.obstacles, *self.buildings]
        for cell in cells:
            if not self.is_in_bounds(cell):
                raise ValueError(
                    f"Out of bounds: {(cell.x, cell.y)} for grid {self.size}x{self.size}"
                )
        if self.target not in self.buildings:
            raise ValueError(f"Target {self.target} is not a building")

    def is_in_bounds(self, pos: Position) -> bool:
        """Return True if ``pos`` lies on the board."""
        return 0 <= pos.x < self.size and 0 <= pos.y < self.size

    def is_obstacle(self, pos: Position) -> bool:
        return pos in self.obstacles

    def is_building(self, pos: Position) -> bool:
        return pos in self.buildings

    def is_blocked(self, pos: Position) -> bool:
        """Return True for any obstacle or building cell, the target included."""
        return pos in self.obstacles or pos in self.buildings

    def is_walkable(self, pos: Position) -> bool:
        """Return True if the courier may stand on ``pos``.

        In-bounds, not an obstacle, and not a building other than the target.
        """
        if not self.is_in_bounds(pos) or pos in self.obstacles:
            return False
        return pos not in self.buildings or pos == self.target
