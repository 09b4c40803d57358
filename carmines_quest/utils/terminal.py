"""Session status helper predicates."""

from carmines_quest.state import State
from carmines_quest.types import EntityID, SessionStatus


def is_valid_state(state: State, agent_id: EntityID) -> bool:
    """Return True if agent exists and has a position."""
    return agent_id in state.agent and state.position.get(agent_id) is not None


def is_active_state(state: State) -> bool:
    """Return True while the session accepts input and timers run."""
    return state.status is SessionStatus.PLAYING


def is_terminal_state(state: State) -> bool:
    """Return True once the delivery is completed or has failed."""
    return state.status.is_terminal
