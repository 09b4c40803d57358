"""Build live sessions from level configuration.

:func:`to_state` allocates the courier and the pursuer roster of a
:class:`LevelConfig` as ECS entities and returns a fresh ``PLAYING`` session.
Level reset goes through the same function, so a reset session is
indistinguishable from a newly loaded one.
"""

import random
from typing import Dict, Optional

from pyrsistent import pmap

from carmines_quest.components import Agent, Position, Pursuer, PursuerKind
from carmines_quest.config import DEFAULT_CONFIG, GameConfig
from carmines_quest.entity import new_entity_id
from carmines_quest.levels.config import LevelConfig
from carmines_quest.state import State
from carmines_quest.types import EntityID, SessionStatus
from carmines_quest.utils.spawn import choose_spawn_position


def to_state(
    level: LevelConfig,
    seed: Optional[int] = None,
    config: GameConfig = DEFAULT_CONFIG,
) -> State:
    """Create the initial session for ``level``.

    Args:
        level: Level to play.
        seed: Seed for pursuer placement and kind draws; ``None`` for
            non-deterministic placement.
        config: Tunables (spawn attempt bound).

    Returns:
        State: ``PLAYING`` session with the courier on the start cell, the
        full time budget and every roster pursuer spawned.
    """
    rng = random.Random(seed)
    grid = level.grid

    agent: Dict[EntityID, Agent] = {}
    position: Dict[EntityID, Position] = {}
    pursuer: Dict[EntityID, Pursuer] = {}

    agent_id = new_entity_id()
    agent[agent_id] = Agent()
    position[agent_id] = grid.start

    kinds = list(PursuerKind)
    for spec in level.pursuers:
        eid = new_entity_id()
        position[eid] = choose_spawn_position(grid, rng, config.max_spawn_attempts)
        kind = spec.kind if spec.kind is not None else rng.choice(kinds)
        pursuer[eid] = Pursuer(kind=kind, speed=spec.speed)

    return State(
        level=level,
        agent=pmap(agent),
        position=pmap(position),
        pursuer=pmap(pursuer),
        time_left=level.time_limit,
        status=SessionStatus.PLAYING,
        seed=seed,
    )
