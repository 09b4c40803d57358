"""Courier movement system.

Moves the agent one tile toward ``next_pos``. The destination is clamped to
the board, so pushing against an edge is simply a move that goes nowhere.
A move is rejected, leaving the ``State`` unchanged, when it:

1. would not change the courier's cell,
2. ends on a tree, a rock or any building other than the delivery target, or
3. ends on a cell currently occupied by a pursuer.

Accepted moves increment ``moves``.
"""

from dataclasses import replace

from carmines_quest.components import Position
from carmines_quest.state import State
from carmines_quest.types import EntityID


def clamp_to_grid(pos: Position, size: int) -> Position:
    return Position(min(max(pos.x, 0), size - 1), min(max(pos.y, 0), size - 1))


def is_occupied_by_pursuer(state: State, pos: Position) -> bool:
    return any(state.position.get(eid) == pos for eid in state.pursuer)


def movement_system(state: State, entity_id: EntityID, next_pos: Position) -> State:
    """Move agent one tile if allowed.

    Args:
        state (State): Current state.
        entity_id (EntityID): Agent entity id (ignored if not an agent).
        next_pos (Position): Desired destination position, possibly off-board.

    Returns:
        State: Same state if the move is rejected, otherwise updated with the
        new position and move count.
    """
    if entity_id not in state.agent:
        return state

    current = state.position.get(entity_id)
    next_pos = clamp_to_grid(next_pos, state.grid.size)
    if current is None or next_pos == current:
        return state

    if not state.grid.is_walkable(next_pos) or is_occupied_by_pursuer(state, next_pos):
        return state

    return replace(
        state,
        position=state.position.set(entity_id, next_pos),
        moves=state.moves + 1,
    )
