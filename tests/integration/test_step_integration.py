from dataclasses import replace

import pytest

from carmines_quest.actions import Action
from carmines_quest.components import Position
from carmines_quest.levels.config import PursuerSpec
from carmines_quest.state import State
from carmines_quest.step import reset, step
from carmines_quest.types import SessionStatus
from tests.test_utils import make_grid, make_level, make_session_state


def test_step_without_agent_raises() -> None:
    with pytest.raises(ValueError):
        step(State(level=make_level()), Action.UP)


def test_unknown_action_raises() -> None:
    state, _ = make_session_state()
    with pytest.raises(ValueError):
        step(state, "jump")  # type: ignore[arg-type]


def test_moves_follow_screen_directions() -> None:
    state, agent_id = make_session_state(agent_pos=(4, 4))
    assert step(state, Action.UP).position[agent_id] == Position(4, 3)
    assert step(state, Action.DOWN).position[agent_id] == Position(4, 5)
    assert step(state, Action.LEFT).position[agent_id] == Position(3, 4)
    assert step(state, Action.RIGHT).position[agent_id] == Position(5, 4)


def test_pause_toggles_and_blocks_input() -> None:
    state, agent_id = make_session_state()

    paused = step(state, Action.PAUSE)
    assert paused.status is SessionStatus.PAUSED
    assert step(paused, Action.RIGHT) is paused
    assert step(paused, Action.HINT) is paused

    resumed = step(paused, Action.PAUSE)
    assert resumed.status is SessionStatus.PLAYING
    moved = step(resumed, Action.RIGHT)
    assert moved.position[agent_id] == Position(1, 0)


def test_pause_does_not_leave_terminal_status() -> None:
    state, _ = make_session_state()
    caught = replace(state, status=SessionStatus.CAUGHT)
    assert step(caught, Action.PAUSE) is caught
    assert step(caught, Action.RIGHT) is caught


def test_reaching_target_completes_delivery() -> None:
    level = make_level(grid=make_grid(target=(2, 0)))
    state, agent_id = make_session_state(level=level)

    state = step(state, Action.RIGHT)
    assert state.status is SessionStatus.PLAYING
    state = step(state, Action.RIGHT)

    assert state.status is SessionStatus.COMPLETED
    assert state.message == "Delivered!"
    assert state.moves == 2
    assert step(state, Action.LEFT) is state


def test_hint_and_wait() -> None:
    state, agent_id = make_session_state()
    assert step(state, Action.WAIT) is state

    state = step(state, Action.HINT)
    assert agent_id in state.hint
    assert state.hints_used == 1


def test_reset_restores_initial_session() -> None:
    level = make_level(
        grid=make_grid(start=(1, 1)),
        time_limit=25,
        pursuers=[PursuerSpec(speed=3), PursuerSpec(speed=2)],
    )
    state, _ = make_session_state(level=level, time_left=4)
    state = step(state, Action.HINT)
    state = step(state, Action.RIGHT)
    state = replace(state, status=SessionStatus.TIMED_OUT, frame=40)

    fresh = reset(state, seed=3)

    agent_id = fresh.agent_id
    assert agent_id is not None
    assert fresh.status is SessionStatus.PLAYING
    assert fresh.position[agent_id] == Position(1, 1)
    assert fresh.time_left == 25
    assert fresh.moves == 0
    assert fresh.hints_used == 0
    assert fresh.frame == 0
    assert not fresh.hint
    assert sorted(p.speed for p in fresh.pursuer.values()) == [2, 3]
    assert all(p.counter == 0 for p in fresh.pursuer.values())


def test_reset_with_same_seed_places_pursuers_identically() -> None:
    level = make_level(pursuers=[PursuerSpec(speed=3), PursuerSpec(speed=2)])
    state, _ = make_session_state(level=level)

    a = reset(state, seed=11)
    b = reset(state, seed=11)

    def placements(s: State):
        cells = []
        for eid, p in s.pursuer.items():
            pos = s.position[eid]
            cells.append((pos.x, pos.y, p.speed, str(p.kind)))
        return sorted(cells)

    assert placements(a) == placements(b)
