import numpy as np
import pytest

from carmines_quest.actions import GymAction
from carmines_quest.gym_env import CellCode, DeliveryEnv, grid_observation
from tests.test_utils import make_grid, make_level


def test_reset_observation() -> None:
    env = DeliveryEnv(level=1, seed=0)
    obs, info = env.reset()

    grid = obs["grid"]
    assert grid.shape == (10, 10)
    assert grid.dtype == np.int8
    assert grid[1, 1] == CellCode.AGENT
    assert grid[8, 8] == CellCode.TARGET
    assert grid[4, 3] == CellCode.OBSTACLE
    assert grid[2, 7] == CellCode.BUILDING
    assert np.count_nonzero(grid == CellCode.PURSUER) == 1

    status = obs["info"]["status"]
    assert status["phase"] == "ongoing"
    assert status["time_left"] == 30
    assert obs["info"]["config"]["level"] == 1
    assert obs["info"]["config"]["aggressive"] is False
    assert info == {}


def test_wait_advances_one_pursuit_tick() -> None:
    env = DeliveryEnv(level=1, seed=0)
    obs, reward, terminated, truncated, _ = env.step(GymAction.WAIT)
    assert obs["info"]["status"]["frame"] == 1
    assert reward == 0.0
    assert not terminated and not truncated


def test_hint_is_drawn_on_grid() -> None:
    env = DeliveryEnv(level=1, seed=0)
    obs, *_ = env.step(GymAction.HINT)
    assert obs["info"]["status"]["hints_used"] == 1
    assert np.count_nonzero(obs["grid"] == CellCode.HINT) > 0


def test_time_out_truncates_with_negative_reward() -> None:
    env = DeliveryEnv(level=1, seed=0, frame_ms=1000)
    rewards = []
    for _ in range(30):
        obs, reward, terminated, truncated, _ = env.step(GymAction.WAIT)
        rewards.append(reward)

    assert truncated and not terminated
    assert rewards == [0.0] * 29 + [-1.0]
    assert obs["info"]["status"]["phase"] == "lose"

    _, reward, _, truncated, _ = env.step(GymAction.WAIT)
    assert reward == 0.0
    assert truncated


def test_delivery_terminates_with_positive_reward() -> None:
    env = DeliveryEnv(seed=0)
    assert env.loop is not None
    env.loop.load_level(make_level(grid=make_grid(start=(0, 0), target=(2, 0))))

    _, reward, terminated, _, _ = env.step(GymAction.RIGHT)
    assert reward == 0.0 and not terminated

    obs, reward, terminated, truncated, _ = env.step(GymAction.RIGHT)
    assert reward == 1.0
    assert terminated and not truncated
    assert obs["info"]["status"]["phase"] == "win"


def test_same_seed_same_episode() -> None:
    env = DeliveryEnv(level=6)
    first, _ = env.reset(seed=5)
    second, _ = env.reset(seed=5)
    assert np.array_equal(first["grid"], second["grid"])


def test_invalid_action_raises() -> None:
    env = DeliveryEnv(seed=0)
    with pytest.raises(ValueError):
        env.step(np.int64(len(GymAction)))


def test_ansi_render() -> None:
    env = DeliveryEnv(level=1, seed=0, render_mode="ansi")
    text = env.render()
    assert text is not None
    rows = text.split("\n")
    assert len(rows) == 10
    assert rows[1][1] == "C"
    assert rows[8][8] == "T"
    assert DeliveryEnv(seed=0).render() is None


def test_grid_observation_matches_state() -> None:
    env = DeliveryEnv(level=3, seed=1)
    obs = grid_observation(env.state)
    for eid in env.state.pursuer:
        pos = env.state.position[eid]
        assert obs[pos.y, pos.x] == CellCode.PURSUER
