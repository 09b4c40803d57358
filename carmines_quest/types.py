"""Common type aliases and enumerations."""

from enum import StrEnum, auto
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from carmines_quest.components import Position

EntityID = int

Path = List["Position"]


class Difficulty(StrEnum):
    """Player-selected difficulty; controls the base time budget."""

    EASY = auto()
    MEDIUM = auto()
    HARD = auto()


class SessionStatus(StrEnum):
    """Lifecycle state of a delivery session.

    ``CAUGHT`` and ``TIMED_OUT`` are the two failure variants. Failed and
    ``COMPLETED`` sessions are terminal until an explicit reset.
    """

    PLAYING = auto()
    PAUSED = auto()
    COMPLETED = auto()
    CAUGHT = auto()
    TIMED_OUT = auto()

    @property
    def is_failed(self) -> bool:
        return self in (SessionStatus.CAUGHT, SessionStatus.TIMED_OUT)

    @property
    def is_terminal(self) -> bool:
        return self is SessionStatus.COMPLETED or self.is_failed
