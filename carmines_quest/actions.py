"""Action enumerations.

Defines the human readable :class:`Action` (string enum) used by the reducer,
a stable integer :class:`GymAction` mapping for Gymnasium compatibility and
the keyboard bindings of the browser version of the game.

``MOVE_ACTIONS`` is the canonical ordered list of movement actions; checks like
``if action in MOVE_ACTIONS`` are preferred over enum name comparisons.
"""

from enum import IntEnum, StrEnum, auto
from typing import Dict, Tuple


class Action(StrEnum):
    """String enum of player actions.

    Members:
        UP, DOWN, LEFT, RIGHT: Movement directions.
        HINT: Show the shortest route to the delivery target.
        PAUSE: Toggle pause.
        WAIT: Do nothing (lets timers advance in automated play).
    """

    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    HINT = auto()
    PAUSE = auto()
    WAIT = auto()


MOVE_ACTIONS = [Action.UP, Action.DOWN, Action.LEFT, Action.RIGHT]

MOVE_DELTAS: Dict[Action, Tuple[int, int]] = {
    Action.UP: (0, -1),
    Action.DOWN: (0, 1),
    Action.LEFT: (-1, 0),
    Action.RIGHT: (1, 0),
}

KEY_BINDINGS: Dict[str, Action] = {
    "ArrowUp": Action.UP,
    "w": Action.UP,
    "W": Action.UP,
    "ArrowDown": Action.DOWN,
    "s": Action.DOWN,
    "S": Action.DOWN,
    "ArrowLeft": Action.LEFT,
    "a": Action.LEFT,
    "A": Action.LEFT,
    "ArrowRight": Action.RIGHT,
    "d": Action.RIGHT,
    "D": Action.RIGHT,
    " ": Action.HINT,
    "Escape": Action.PAUSE,
}


class GymAction(IntEnum):
    """Stable integer mapping for Gymnasium ``Discrete`` spaces.

    Pausing is not exposed; an environment step always advances time.
    """

    UP = 0  # start at 0 for explicitness
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    HINT = auto()
    WAIT = auto()

    @property
    def action(self) -> Action:
        return Action[self.name]
