"""Per-level configuration handed to the session.

A :class:`LevelConfig` bundles the static :class:`carmines_quest.grid.Grid`
with everything else that is fixed for the level: the time budget, the
pursuer roster and the pursuit-intensity threshold. It is authoring-time data;
:func:`carmines_quest.levels.convert.to_state` turns it into a live session.
"""

from dataclasses import dataclass
from typing import Optional

from pyrsistent import pvector
from pyrsistent.typing import PVector

from carmines_quest.components import PursuerKind
from carmines_quest.grid import Grid


@dataclass(frozen=True)
class PursuerSpec:
    """Roster entry for one pursuer.

    Attributes:
        speed: Pursuit ticks per move.
        kind: Fixed animal kind, or ``None`` to draw one at spawn time.
    """

    speed: int
    kind: Optional[PursuerKind] = None


@dataclass(frozen=True)
class LevelConfig:
    """Static description of one playable level.

    Attributes:
        number: 1-based level number.
        grid: Board terrain, start and target.
        time_limit: Countdown budget in seconds.
        pursuers: Pursuer roster spawned at level start and on reset.
        pursuit_threshold: Levels numbered at or above this are played with
            full pursuit aggression (pursuers step onto the courier and catch
            it); below it pursuers stop one cell short.
        recipient: Who receives the delivery.
        item: What is being delivered.
        message: Thank-you line shown on completion.
    """

    number: int
    grid: Grid
    time_limit: int
    pursuers: PVector[PursuerSpec] = pvector()
    pursuit_threshold: int = 3
    recipient: str = ""
    item: str = ""
    message: str = ""

    @property
    def is_aggressive(self) -> bool:
        """True if pursuit runs at full aggression on this level."""
        return self.number >= self.pursuit_threshold
