"""Countdown system.

Consumes one second of the level's time budget per countdown tick. The
session times out on the tick that brings ``time_left`` to zero.
"""

from dataclasses import replace

from carmines_quest.state import State
from carmines_quest.types import SessionStatus


def countdown_system(state: State) -> State:
    if state.time_left <= 1:
        return replace(
            state,
            time_left=0,
            status=SessionStatus.TIMED_OUT,
            message="Time's up!",
        )
    return replace(state, time_left=state.time_left - 1)
