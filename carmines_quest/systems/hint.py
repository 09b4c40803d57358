"""Hint systems.

A hint is the shortest path from the courier to the delivery target, attached
to the agent as a :class:`Hint` effect for a fixed display time. Only one hint
can be shown at a time: requesting another while one is displayed changes
nothing, neither the remaining time nor the ``hints_used`` counter.
"""

from dataclasses import replace

from pyrsistent import pvector

from carmines_quest.components import Hint
from carmines_quest.state import State
from carmines_quest.types import EntityID
from carmines_quest.utils.pathfinding import find_path


def is_hint_active(state: State, agent_id: EntityID) -> bool:
    return agent_id in state.hint


def hint_request_system(state: State, agent_id: EntityID, duration_ms: int) -> State:
    """Compute and attach a hint for ``agent_id`` unless one is displayed.

    Args:
        state: Current state.
        agent_id: Courier requesting the hint.
        duration_ms: Display time of the new hint.

    Returns:
        State: Unchanged if a hint is already active or the agent has no
        position; otherwise with the hint attached and ``hints_used`` bumped.
    """
    if is_hint_active(state, agent_id) or agent_id not in state.position:
        return state

    path = find_path(state.grid, state.position[agent_id], state.grid.target)
    hint = Hint(path=pvector(path), remaining_ms=duration_ms)
    return replace(
        state,
        hint=state.hint.set(agent_id, hint),
        hints_used=state.hints_used + 1,
    )


def hint_expiry_system(state: State, elapsed_ms: int) -> State:
    """Age displayed hints by ``elapsed_ms`` and drop expired ones."""
    if not state.hint:
        return state

    hints = state.hint
    for eid, hint in state.hint.items():
        remaining = hint.remaining_ms - elapsed_ms
        if remaining <= 0:
            hints = hints.discard(eid)
        else:
            hints = hints.set(eid, replace(hint, remaining_ms=remaining))
    return replace(state, hint=hints)
