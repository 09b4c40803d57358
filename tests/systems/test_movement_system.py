from carmines_quest.components import Position
from carmines_quest.systems.movement import clamp_to_grid, movement_system
from tests.test_utils import make_grid, make_level, make_session_state


def test_move_to_free_cell() -> None:
    state, agent_id = make_session_state()
    state = movement_system(state, agent_id, Position(1, 0))
    assert state.position[agent_id] == Position(1, 0)
    assert state.moves == 1


def test_move_off_board_is_rejected() -> None:
    state, agent_id = make_session_state()
    new_state = movement_system(state, agent_id, Position(-1, 0))
    assert new_state is state
    assert new_state.moves == 0


def test_obstacle_and_building_block_movement() -> None:
    level = make_level(grid=make_grid(obstacles=[(1, 0)], buildings=[(0, 1)]))
    state, agent_id = make_session_state(level=level)
    assert movement_system(state, agent_id, Position(1, 0)) is state
    assert movement_system(state, agent_id, Position(0, 1)) is state


def test_target_building_can_be_entered() -> None:
    level = make_level(grid=make_grid(target=(1, 0)))
    state, agent_id = make_session_state(level=level)
    state = movement_system(state, agent_id, Position(1, 0))
    assert state.position[agent_id] == Position(1, 0)


def test_pursuer_cell_is_rejected() -> None:
    state, agent_id = make_session_state(pursuers={2: ((1, 0), 3)})
    assert movement_system(state, agent_id, Position(1, 0)) is state


def test_non_agent_entity_is_ignored() -> None:
    state, _ = make_session_state(pursuers={2: ((5, 5), 3)})
    assert movement_system(state, 2, Position(5, 6)) is state


def test_clamp_to_grid() -> None:
    assert clamp_to_grid(Position(-1, 4), 10) == Position(0, 4)
    assert clamp_to_grid(Position(3, 12), 10) == Position(3, 9)
    assert clamp_to_grid(Position(5, 5), 10) == Position(5, 5)
