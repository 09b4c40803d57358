from dataclasses import replace

from carmines_quest.components import Position
from carmines_quest.state import State
from carmines_quest.step import pursuit_tick
from carmines_quest.systems.pursuit import advance_pursuit, next_step, pursuit_system
from carmines_quest.types import EntityID, SessionStatus
from tests.test_utils import make_grid, make_level, make_session_state

PURSUER: EntityID = 2


def open_state(
    pursuer_pos=(0, 0), player_pos=(9, 9), speed: int = 1, number: int = 1
) -> State:
    level = make_level(grid=make_grid(target=(0, 9)), number=number)
    state, _ = make_session_state(
        level=level,
        agent_pos=player_pos,
        pursuers={PURSUER: (pursuer_pos, speed)},
    )
    return state


def run(state: State, ticks: int) -> State:
    for _ in range(ticks):
        state = pursuit_system(state)
    return state


def test_counter_gates_movement() -> None:
    state = open_state(speed=2)

    state = pursuit_system(state)
    assert state.position[PURSUER] == Position(0, 0)
    assert state.pursuer[PURSUER].counter == 1

    state = pursuit_system(state)
    assert state.position[PURSUER] == Position(1, 0)
    assert state.pursuer[PURSUER].counter == 0


def test_speed_three_moves_every_third_tick() -> None:
    state = run(open_state(speed=3), 9)
    assert state.position[PURSUER] == Position(3, 0)
    assert state.pursuer[PURSUER].counter == 0


def test_each_move_is_one_orthogonal_step() -> None:
    state = open_state(pursuer_pos=(2, 3), player_pos=(7, 8), speed=1)
    previous = state.position[PURSUER]
    for _ in range(5):
        state = pursuit_system(state)
        current = state.position[PURSUER]
        assert abs(current.x - previous.x) + abs(current.y - previous.y) == 1
        previous = current


def test_lenient_pursuer_stops_next_to_player() -> None:
    state = open_state(pursuer_pos=(3, 5), player_pos=(5, 5))

    state = pursuit_system(state)
    assert state.position[PURSUER] == Position(4, 5)

    state = run(state, 5)
    assert state.position[PURSUER] == Position(4, 5)
    assert state.status is SessionStatus.PLAYING


def test_aggressive_pursuer_catches_player() -> None:
    state = open_state(pursuer_pos=(4, 5), player_pos=(5, 5), number=3)

    state = pursuit_system(state)

    assert state.position[PURSUER] == Position(5, 5)
    assert state.status is SessionStatus.CAUGHT
    assert state.message == "Oh no! The dog caught you!"


def test_unreachable_player_leaves_pursuer_in_place() -> None:
    level = make_level(
        grid=make_grid(target=(0, 9), obstacles=[(1, 0), (0, 1)]), number=5
    )
    state, _ = make_session_state(
        level=level, agent_pos=(5, 5), pursuers={PURSUER: ((0, 0), 1)}
    )
    state = run(state, 3)
    assert state.position[PURSUER] == Position(0, 0)
    assert state.status is SessionStatus.PLAYING


def test_pursuer_never_enters_blocked_cell() -> None:
    level = make_level(
        grid=make_grid(target=(0, 9), obstacles=[(2, 0), (2, 1), (2, 2)]),
        number=4,
    )
    state, _ = make_session_state(
        level=level, agent_pos=(4, 0), pursuers={PURSUER: ((0, 0), 1)}
    )
    for _ in range(10):
        state = pursuit_system(state)
        assert not level.grid.is_blocked(state.position[PURSUER])


def test_next_step_thresholds() -> None:
    start = Position(0, 0)
    one = [Position(1, 0)]
    two = [Position(1, 0), Position(2, 0)]
    assert next_step(one, start, aggressive=True) == Position(1, 0)
    assert next_step(one, start, aggressive=False) is None
    assert next_step(two, start, aggressive=False) == Position(1, 0)
    assert next_step([], start, aggressive=True) is None
    assert next_step([Position(2, 0)], start, aggressive=True) is None


def test_advance_pursuit_reports_capture() -> None:
    state = open_state(pursuer_pos=(4, 5), player_pos=(5, 5), number=8)
    result = advance_pursuit(
        state.pursuer,
        state.position,
        Position(5, 5),
        state.grid,
        state.level,
    )
    assert result.captured
    assert result.position[PURSUER] == Position(5, 5)


def test_pursuit_tick_counts_frames_and_skips_paused() -> None:
    state = open_state(speed=1)
    state = pursuit_tick(state)
    assert state.frame == 1
    assert state.position[PURSUER] == Position(1, 0)

    paused = replace(state, status=SessionStatus.PAUSED)
    assert pursuit_tick(paused) is paused
