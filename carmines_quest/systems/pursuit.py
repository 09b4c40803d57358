"""Pursuit system.

Advances every :class:`Pursuer` toward the courier once per pursuit tick:

1. ``counter`` is incremented; the pursuer only acts when it reaches
    ``speed`` (then ``counter`` resets to zero).
2. A shortest path from the pursuer to the courier is computed.
3. On lenient levels (below ``LevelConfig.pursuit_threshold``) the pursuer
    needs a path of at least two cells, so it halts next to the courier
    instead of stepping onto it. At full aggression a single cell suffices.
4. The next cell is re-checked against the terrain before moving.

After all pursuers move, a pursuer sharing the courier's cell catches it, but
only at full aggression.
"""

from dataclasses import replace
from typing import Dict, Mapping, NamedTuple, Optional

from pyrsistent import pmap
from pyrsistent.typing import PMap

from carmines_quest.components import Position, Pursuer
from carmines_quest.grid import Grid
from carmines_quest.levels.config import LevelConfig
from carmines_quest.state import State
from carmines_quest.types import EntityID, Path, SessionStatus
from carmines_quest.utils.pathfinding import find_path, is_full_path


class PursuitResult(NamedTuple):
    pursuer: PMap[EntityID, Pursuer]
    position: PMap[EntityID, Position]
    captured: bool


def next_step(path: Path, start: Position, aggressive: bool) -> Optional[Position]:
    """Cell a pursuer at ``start`` moves to along ``path``, if any."""
    required = 1 if aggressive else 2
    if len(path) < required or not is_full_path(path, start):
        return None
    return path[0]


def advance_pursuit(
    pursuer: Mapping[EntityID, Pursuer],
    position: Mapping[EntityID, Position],
    player_pos: Position,
    grid: Grid,
    level: LevelConfig,
) -> PursuitResult:
    """Run one pursuit tick for every pursuer.

    Args:
        pursuer: Pursuer components keyed by entity id.
        position: Position store; must contain every pursuer.
        player_pos: Courier cell the pursuers chase.
        grid: Board used for path search.
        level: Level whose number and threshold decide aggression.

    Returns:
        PursuitResult: Updated pursuer and position stores and whether a
        pursuer caught the courier.
    """
    aggressive = level.is_aggressive
    new_pursuer: Dict[EntityID, Pursuer] = dict(pursuer)
    new_position: Dict[EntityID, Position] = dict(position)

    for eid, chaser in pursuer.items():
        pos = position.get(eid)
        if pos is None:
            continue
        counter = chaser.counter + 1
        if counter < chaser.speed:
            new_pursuer[eid] = replace(chaser, counter=counter)
            continue
        new_pursuer[eid] = replace(chaser, counter=0)

        candidate = next_step(find_path(grid, pos, player_pos), pos, aggressive)
        if candidate is None or grid.is_blocked(candidate):
            continue
        new_position[eid] = candidate

    captured = aggressive and any(
        new_position.get(eid) == player_pos for eid in pursuer
    )
    return PursuitResult(pmap(new_pursuer), pmap(new_position), captured)


def pursuit_system(state: State) -> State:
    """Advance pursuers for the session and flag a capture."""
    agent_id = state.agent_id
    if agent_id is None or agent_id not in state.position:
        return state

    result = advance_pursuit(
        state.pursuer,
        state.position,
        state.position[agent_id],
        state.grid,
        state.level,
    )
    state = replace(state, pursuer=result.pursuer, position=result.position)
    if result.captured:
        state = replace(
            state,
            status=SessionStatus.CAUGHT,
            message=_caught_message(state, agent_id),
        )
    return state


def _caught_message(state: State, agent_id: EntityID) -> str:
    player_pos = state.position[agent_id]
    for eid, chaser in state.pursuer.items():
        if state.position.get(eid) == player_pos:
            return f"Oh no! The {chaser.kind} caught you!"
    return "Oh no! You were caught!"
