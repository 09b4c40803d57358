"""Core immutable session ``State`` dataclass.

This module defines the frozen :class:`State` object that represents one
delivery session at a single instant. Systems are pure functions that take a
previous ``State`` plus inputs (an ``Action``, elapsed time) and return a
*new* ``State``; no mutation happens in-place. Timers live outside the state
(see :mod:`carmines_quest.loop`), which only ever swaps one snapshot for the
next.

Design notes:

* Component stores are **persistent maps** (``pyrsistent.PMap``) keyed by
    ``EntityID``. Absence of a key means the entity does not currently possess
    that component.
* Static terrain is not stored as entities: the board is
    ``level.grid`` and never changes during a session.
* ``status`` is the session state machine; see
    :class:`carmines_quest.types.SessionStatus` and :mod:`carmines_quest.step`.
"""

from dataclasses import dataclass
from typing import Optional

from pyrsistent import pmap
from pyrsistent.typing import PMap

from carmines_quest.components import Agent, Hint, Position, Pursuer
from carmines_quest.grid import Grid
from carmines_quest.levels.config import LevelConfig
from carmines_quest.types import EntityID, SessionStatus


@dataclass(frozen=True)
class State:
    """Immutable session state.

    Attributes:
        level (LevelConfig): Level being played (grid, time budget, roster).
        agent (PMap[EntityID, Agent]): The courier marker.
        position (PMap[EntityID, Position]): Current cell of every actor.
        pursuer (PMap[EntityID, Pursuer]): Chasing animals.
        hint (PMap[EntityID, Hint]): Hint currently displayed to an agent.
        time_left (int): Countdown seconds remaining.
        moves (int): Accepted courier moves.
        hints_used (int): Hints requested this session.
        frame (int): Pursuit ticks processed.
        status (SessionStatus): Lifecycle state.
        message (str | None): Terminal message for the view layer.
        seed (int | None): Seed used for pursuer placement.
    """

    level: LevelConfig

    # Components
    ## Effects
    hint: PMap[EntityID, Hint] = pmap()
    ## Properties
    agent: PMap[EntityID, Agent] = pmap()
    position: PMap[EntityID, Position] = pmap()
    pursuer: PMap[EntityID, Pursuer] = pmap()

    # Session
    time_left: int = 0
    moves: int = 0
    hints_used: int = 0
    frame: int = 0
    status: SessionStatus = SessionStatus.PLAYING
    message: Optional[str] = None

    # RNG
    seed: Optional[int] = None

    @property
    def grid(self) -> Grid:
        return self.level.grid

    @property
    def agent_id(self) -> Optional[EntityID]:
        """First agent entity, or ``None`` if the state has none."""
        return next(iter(self.agent.keys()), None)
