"""Property component aggregates.

Stable attributes of the session's actors. Terrain (trees, rocks, buildings)
is static per level and lives on :class:`carmines_quest.grid.Grid`, so only
the courier and the pursuing animals carry components.
"""

from .agent import Agent
from .position import Position
from .pursuer import Pursuer, PursuerKind

__all__ = [
    "Agent",
    "Position",
    "Pursuer",
    "PursuerKind",
]
