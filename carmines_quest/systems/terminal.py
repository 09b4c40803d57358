"""Terminal condition systems.

Sets the session status to ``COMPLETED`` exactly once when the courier
reaches the delivery target. Failure transitions are owned by the systems
that detect them (:mod:`carmines_quest.systems.pursuit` for ``CAUGHT`` and
:mod:`carmines_quest.systems.countdown` for ``TIMED_OUT``).
"""

from dataclasses import replace

from carmines_quest.state import State
from carmines_quest.types import EntityID, SessionStatus
from carmines_quest.utils.terminal import is_terminal_state, is_valid_state


def win_system(state: State, agent_id: EntityID) -> State:
    """Mark the delivery completed if the agent stands on the target.

    Skips evaluation if state already terminal or agent invalid.
    """
    if not is_valid_state(state, agent_id) or is_terminal_state(state):
        return state

    if state.position[agent_id] == state.grid.target:
        return replace(
            state, status=SessionStatus.COMPLETED, message=state.level.message
        )
    return state
