"""Gymnasium environment wrapper for Carmine's Quest.

Each environment step applies one :class:`GymAction` and then lets
``frame_ms`` milliseconds of game time pass, so pursuers, the countdown and
hint expiry keep running on the same timers as interactive play.

Observation schema:

``{"grid": np.ndarray(size, size) of CellCode, "info": {"status": {...}, "config": {...}}}``

Reward is ``+1`` on the step that completes the delivery, ``-1`` on the step
that fails it (caught or timed out) and ``0`` otherwise. ``terminated`` is
``True`` on completion and ``truncated`` on failure.

Usage:

``env = DeliveryEnv(level=3, difficulty=Difficulty.HARD, seed=7)``
"""

from enum import IntEnum
from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from carmines_quest.actions import GymAction
from carmines_quest.config import DEFAULT_CONFIG, GameConfig
from carmines_quest.loop import GameLoop
from carmines_quest.state import State
from carmines_quest.types import Difficulty, SessionStatus

ObsType = Dict[str, Any]


class CellCode(IntEnum):
    """Grid observation codes; later members are drawn over earlier ones."""

    EMPTY = 0
    OBSTACLE = 1
    BUILDING = 2
    TARGET = 3
    HINT = 4
    PURSUER = 5
    AGENT = 6


def grid_observation(state: State) -> np.ndarray:
    """Encode the board as an ``[y, x]`` int8 array of :class:`CellCode`."""
    grid = state.grid
    obs = np.full((grid.size, grid.size), CellCode.EMPTY, dtype=np.int8)
    for pos in grid.obstacles:
        obs[pos.y, pos.x] = CellCode.OBSTACLE
    for pos in grid.buildings:
        obs[pos.y, pos.x] = CellCode.BUILDING
    obs[grid.target.y, grid.target.x] = CellCode.TARGET
    for hint in state.hint.values():
        for pos in hint.path:
            obs[pos.y, pos.x] = CellCode.HINT
    for eid in state.pursuer:
        pos = state.position.get(eid)
        if pos is not None:
            obs[pos.y, pos.x] = CellCode.PURSUER
    for eid in state.agent:
        pos = state.position.get(eid)
        if pos is not None:
            obs[pos.y, pos.x] = CellCode.AGENT
    return obs


def env_status_observation_dict(state: State) -> Dict[str, Any]:
    """Status portion of observation (phase, clock, counters)."""
    phase = "ongoing"
    if state.status is SessionStatus.COMPLETED:
        phase = "win"
    elif state.status.is_failed:
        phase = "lose"
    return {
        "phase": phase,
        "status": str(state.status),
        "time_left": int(state.time_left),
        "moves": int(state.moves),
        "hints_used": int(state.hints_used),
        "frame": int(state.frame),
    }


def env_config_observation_dict(state: State) -> Dict[str, Any]:
    """Config portion of observation (level, size, seed)."""
    return {
        "level": int(state.level.number),
        "size": int(state.grid.size),
        "time_limit": int(state.level.time_limit),
        "aggressive": bool(state.level.is_aggressive),
        "seed": -1 if state.seed is None else int(state.seed),
    }


class DeliveryEnv(gym.Env[ObsType, np.integer]):
    """Gymnasium ``Env`` implementation of one delivery level.

    The action space is ``Discrete(len(GymAction))``; see
    :mod:`carmines_quest.actions`.
    """

    metadata = {"render_modes": ["ansi"]}

    def __init__(
        self,
        level: int = 1,
        difficulty: Difficulty = Difficulty.MEDIUM,
        frame_ms: Optional[int] = None,
        seed: Optional[int] = None,
        config: GameConfig = DEFAULT_CONFIG,
        render_mode: Optional[str] = None,
    ):
        """Create a new environment instance.

        Arguments:
            level: Level number to play.
            difficulty: Difficulty used for the time budget.
            frame_ms: Game time per environment step; defaults to one pursuit
                tick.
            seed: Seed for pursuer placement.
            config: Game tunables.
            render_mode: ``"ansi"`` to render the board as text.
        """
        self._level = level
        self._difficulty = difficulty
        self._config = config
        self._frame_ms = (
            frame_ms if frame_ms is not None else config.pursuit_interval_ms
        )
        self._seed = seed
        self.render_mode = render_mode
        self.loop: Optional[GameLoop] = None

        size = config.grid_size
        text_space_short = spaces.Text(max_length=32)

        def int_box(low: int, high: int) -> spaces.Box:
            return spaces.Box(
                low=np.array(low, dtype=np.int64),
                high=np.array(high, dtype=np.int64),
                shape=(),
                dtype=np.int64,
            )

        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(
                    low=0,
                    high=int(max(CellCode)),
                    shape=(size, size),
                    dtype=np.int8,
                ),
                "info": spaces.Dict(
                    {
                        "status": spaces.Dict(
                            {
                                "phase": text_space_short,
                                "status": text_space_short,
                                "time_left": int_box(0, 1_000),
                                "moves": int_box(0, 1_000_000),
                                "hints_used": int_box(0, 1_000_000),
                                "frame": int_box(0, 1_000_000_000),
                            }
                        ),
                        "config": spaces.Dict(
                            {
                                "level": int_box(-1_000, 1_000),
                                "size": int_box(1, 10_000),
                                "time_limit": int_box(0, 1_000),
                                "aggressive": spaces.Discrete(2),
                                "seed": int_box(-1, 2**32),
                            }
                        ),
                    }
                ),
            }
        )
        self.action_space = spaces.Discrete(len(GymAction))

        # Initialize first episode
        self.reset()

    @property
    def state(self) -> State:
        assert self.loop is not None
        return self.loop.state

    def reset(
        self, *, seed: Optional[int] = None, options: Optional[Dict[str, object]] = None
    ) -> Tuple[ObsType, Dict[str, object]]:
        """Start a new episode.

        Arguments:
            seed: Overrides the construction seed for this and later episodes.
            options: Gymnasium options (unused).
        """
        super().reset(seed=seed)
        if seed is not None:
            self._seed = seed
        if self.loop is not None:
            self.loop.close()
        self.loop = GameLoop(
            level=self._level,
            difficulty=self._difficulty,
            config=self._config,
            seed=self._seed,
        )
        return self._get_obs(), self._get_info()

    def step(
        self, action: np.integer
    ) -> Tuple[ObsType, float, bool, bool, Dict[str, object]]:
        """Apply one environment step.

        Returns:
            (observation, reward, terminated, truncated, info)
        """
        assert self.loop is not None

        if not 0 <= int(action) < len(GymAction):
            raise ValueError(f"Invalid action: {action}")

        before = self.loop.status
        self.loop.handle_action(GymAction(int(action)).action)
        if self.loop.status is SessionStatus.PLAYING:
            self.loop.advance(self._frame_ms)
        after = self.loop.status

        reward = 0.0
        if before is not after:
            if after is SessionStatus.COMPLETED:
                reward = 1.0
            elif after.is_failed:
                reward = -1.0
        terminated = after is SessionStatus.COMPLETED
        truncated = after.is_failed
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[str]:  # type: ignore[override]
        """Return the board as text in ``"ansi"`` mode."""
        if self.render_mode != "ansi":
            return None
        glyphs = ".#BT*PC"
        rows = grid_observation(self.state)
        return "\n".join("".join(glyphs[c] for c in row) for row in rows)

    def state_info(self) -> Dict[str, Dict[str, Any]]:
        """Return structured ``info`` sub-dict used in observations."""
        return {
            "status": env_status_observation_dict(self.state),
            "config": env_config_observation_dict(self.state),
        }

    def _get_obs(self) -> ObsType:
        return {"grid": grid_observation(self.state), "info": self.state_info()}

    def _get_info(self) -> Dict[str, object]:
        return {}

    def close(self) -> None:
        if self.loop is not None:
            self.loop.close()
