"""State reducer and tick functions.

The session advances through two kinds of inputs, both handled by pure
functions returning a *new* :class:`carmines_quest.state.State`:

* Player input, via :func:`step`. ``PAUSE`` toggles between ``PLAYING`` and
    ``PAUSED``; every other action is ignored unless the session is
    ``PLAYING``.
* Timer events, via :func:`countdown_tick`, :func:`pursuit_tick` and
    :func:`hint_tick`. The scheduler in :mod:`carmines_quest.loop` only calls
    them while the session is ``PLAYING``; the countdown and pursuit ticks
    also check it themselves.

Terminal sessions (completed, caught, timed out) only leave their status
through :func:`reset`.
"""

from dataclasses import replace
from typing import Optional

from carmines_quest.actions import Action, MOVE_ACTIONS, MOVE_DELTAS
from carmines_quest.components import Position
from carmines_quest.config import DEFAULT_CONFIG, GameConfig
from carmines_quest.levels.convert import to_state
from carmines_quest.state import State
from carmines_quest.systems.countdown import countdown_system
from carmines_quest.systems.hint import hint_expiry_system, hint_request_system
from carmines_quest.systems.movement import movement_system
from carmines_quest.systems.pursuit import pursuit_system
from carmines_quest.systems.terminal import win_system
from carmines_quest.types import EntityID, SessionStatus
from carmines_quest.utils.terminal import is_active_state, is_valid_state


def step(
    state: State,
    action: Action,
    agent_id: Optional[EntityID] = None,
    config: GameConfig = DEFAULT_CONFIG,
) -> State:
    """Apply one player action.

    Args:
        state (State): Previous immutable session state.
        action (Action): Player action to apply.
        agent_id (EntityID | None): Explicit agent entity id. If ``None`` the
            first entity in ``state.agent`` is used.
        config (GameConfig): Tunables (hint display time).

    Returns:
        State: Next state. Inputs other than ``PAUSE`` return the same object
        unless the session is ``PLAYING``.

    Raises:
        ValueError: If there is no agent or the action is not recognized.
    """
    if agent_id is None and (agent_id := state.agent_id) is None:
        raise ValueError("State contains no agent")

    if action == Action.PAUSE:
        return toggle_pause(state)

    if not is_active_state(state) or not is_valid_state(state, agent_id):
        return state

    if action in MOVE_ACTIONS:
        return _step_move(state, action, agent_id)
    elif action == Action.HINT:
        return hint_request_system(state, agent_id, config.hint_duration_ms)
    elif action == Action.WAIT:
        return state
    raise ValueError("Action is not valid")


def _step_move(state: State, action: Action, agent_id: EntityID) -> State:
    """Move the courier one tile and check for a completed delivery."""
    pos = state.position[agent_id]
    dx, dy = MOVE_DELTAS[action]
    state = movement_system(state, agent_id, Position(pos.x + dx, pos.y + dy))
    return win_system(state, agent_id)


def toggle_pause(state: State) -> State:
    """Switch ``PLAYING`` ⇄ ``PAUSED``; terminal sessions are left alone."""
    if state.status is SessionStatus.PLAYING:
        return replace(state, status=SessionStatus.PAUSED)
    if state.status is SessionStatus.PAUSED:
        return replace(state, status=SessionStatus.PLAYING)
    return state


def countdown_tick(state: State) -> State:
    """One-second countdown tick; times the session out at zero."""
    if not is_active_state(state):
        return state
    return countdown_system(state)


def pursuit_tick(state: State) -> State:
    """Pursuit tick: every pursuer may advance one cell."""
    if not is_active_state(state):
        return state
    state = pursuit_system(state)
    return replace(state, frame=state.frame + 1)


def hint_tick(state: State, elapsed_ms: int) -> State:
    """Age the displayed hint by ``elapsed_ms``."""
    return hint_expiry_system(state, elapsed_ms)


def reset(
    state: State, seed: Optional[int] = None, config: GameConfig = DEFAULT_CONFIG
) -> State:
    """Restart the session's level from scratch.

    The courier returns to the start cell, the clock to the full budget,
    counters and hints are cleared and the pursuer roster is spawned anew.
    """
    return to_state(state.level, seed=seed, config=config)
