"""The authored delivery levels.

Eight deliveries around the same town. Every level shares the eight
buildings; trees and rocks accumulate as levels progress, more (and faster)
animals join the chase, and the time budget shrinks on the late levels.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from pyrsistent import pmap, pvector
from pyrsistent.typing import PMap

from carmines_quest.components import Position
from carmines_quest.config import BASE_TIME_LIMIT, DEFAULT_CONFIG, GameConfig
from carmines_quest.grid import BuildingKind, Grid, ObstacleKind
from carmines_quest.levels.config import LevelConfig, PursuerSpec
from carmines_quest.types import Difficulty

TREE = ObstacleKind.TREE
ROCK = ObstacleKind.ROCK


@dataclass(frozen=True)
class Delivery:
    """Narrative and placement data for one level."""

    target: Position
    start: Position
    recipient: str
    item: str
    message: str


DELIVERIES: Dict[int, Delivery] = {
    1: Delivery(
        Position(8, 8),
        Position(1, 1),
        "grandmother",
        "rice",
        "Thank you for the rice, dear!",
    ),
    2: Delivery(
        Position(7, 2),
        Position(1, 1),
        "businessman",
        "bread",
        "Excellent! The town appreciates your service!",
    ),
    3: Delivery(
        Position(5, 7),
        Position(2, 2),
        "chef",
        "vegetables",
        "Perfect! These vegetables will make a great dish!",
    ),
    4: Delivery(
        Position(3, 3),
        Position(8, 1),
        "doctor",
        "medicine",
        "Thank you! This medicine will help many patients!",
    ),
    5: Delivery(
        Position(6, 5),
        Position(1, 8),
        "schoolboy",
        "lunch box",
        "AHHH! My lunch! Thank you so much!",
    ),
    6: Delivery(
        Position(9, 1),
        Position(0, 9),
        "hospital",
        "emergency kit",
        "Emergency delivery completed! You are a life saver, Carmine!",
    ),
    7: Delivery(
        Position(2, 9),
        Position(9, 0),
        "bride",
        "flowers",
        "Beautiful flowers! My wedding will be perfect thanks to you!",
    ),
    8: Delivery(
        Position(8, 3),
        Position(0, 0),
        "firefighter",
        "fire extinguisher",
        "Fire equipment delivered! The city is safer thanks to Carmine!",
    ),
}

LEVEL_COUNT = len(DELIVERIES)

BUILDINGS: PMap[Position, BuildingKind] = pmap(
    {
        Position(8, 8): BuildingKind.HOUSE,
        Position(7, 2): BuildingKind.MANSION,
        Position(5, 7): BuildingKind.RESTAURANT,
        Position(3, 3): BuildingKind.CLINIC,
        Position(6, 5): BuildingKind.SCHOOL,
        Position(9, 1): BuildingKind.HOSPITAL,
        Position(2, 9): BuildingKind.CHURCH,
        Position(8, 3): BuildingKind.FIRE_STATION,
    }
)

ObstacleTier = List[Tuple[int, int, ObstacleKind]]

BASE_OBSTACLES: ObstacleTier = [
    (3, 4, TREE),
    (4, 4, TREE),
    (5, 4, TREE),
    (7, 6, ROCK),
    (7, 7, ROCK),
    (8, 6, TREE),
]

# (first level, obstacles unlocked from that level on)
OBSTACLE_TIERS: List[Tuple[int, ObstacleTier]] = [
    (3, [(6, 1, TREE), (6, 2, TREE), (1, 5, ROCK), (3, 6, TREE)]),
    (
        5,
        [(9, 4, ROCK), (9, 5, ROCK), (4, 9, TREE), (5, 2, TREE), (2, 3, ROCK)],
    ),
    (
        7,
        [
            (0, 6, ROCK),
            (2, 0, TREE),
            (8, 9, ROCK),
            (7, 4, TREE),
            (7, 5, TREE),
            (4, 6, ROCK),
            (5, 6, ROCK),
        ],
    ),
]

# Final level only
FINAL_LEVEL_OBSTACLES: ObstacleTier = [
    (2, 2, TREE),
    (3, 2, ROCK),
    (3, 5, ROCK),
    (9, 6, ROCK),
    (9, 7, ROCK),
    (5, 9, ROCK),
]


def obstacles_for_level(level: int) -> PMap[Position, ObstacleKind]:
    """Return the trees and rocks present on ``level``."""
    cells: ObstacleTier = list(BASE_OBSTACLES)
    for first_level, tier in OBSTACLE_TIERS:
        if level >= first_level:
            cells.extend(tier)
    if level == LEVEL_COUNT:
        cells.extend(FINAL_LEVEL_OBSTACLES)
    return pmap({Position(x, y): kind for x, y, kind in cells})


def roster_for_level(level: int) -> List[PursuerSpec]:
    """Pursuers chasing the courier on ``level``, slowest roster first."""
    roster = [PursuerSpec(speed=3)]
    if level >= 3:
        roster.append(PursuerSpec(speed=2 if level >= 6 else 3))
    if level >= 6:
        roster.append(PursuerSpec(speed=2))
    if level == LEVEL_COUNT:
        roster.append(PursuerSpec(speed=3))
    return roster


def time_limit(
    difficulty: Difficulty, level: int, config: GameConfig = DEFAULT_CONFIG
) -> int:
    """Seconds on the clock for ``level`` at ``difficulty``."""
    seconds = BASE_TIME_LIMIT[difficulty]
    if level >= 6:
        seconds -= 5
    if level == LEVEL_COUNT:
        seconds -= 3
    return max(config.min_time_limit, seconds)


def build_level(
    number: int,
    difficulty: Difficulty = Difficulty.MEDIUM,
    config: GameConfig = DEFAULT_CONFIG,
) -> LevelConfig:
    """Assemble the :class:`LevelConfig` for an authored level.

    Unknown level numbers play the first delivery's layout but keep their
    number, so level-dependent rules (obstacle tiers, roster, aggression)
    still follow ``number``.
    """
    delivery = DELIVERIES.get(number, DELIVERIES[1])
    grid = Grid(
        size=config.grid_size,
        start=delivery.start,
        target=delivery.target,
        obstacles=obstacles_for_level(number),
        buildings=BUILDINGS,
    )
    return LevelConfig(
        number=number,
        grid=grid,
        time_limit=time_limit(difficulty, number, config),
        pursuers=pvector(roster_for_level(number)),
        pursuit_threshold=config.pursuit_threshold,
        recipient=delivery.recipient,
        item=delivery.item,
        message=delivery.message,
    )
