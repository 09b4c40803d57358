"""Pursuer component.

Animals chasing the courier. Every pursuit tick the pursuit system bumps
``counter``; once it reaches ``speed`` the animal re-plans a shortest path to
the courier and advances a single cell.
"""

from dataclasses import dataclass
from enum import StrEnum, auto


class PursuerKind(StrEnum):
    DOG = auto()
    CAT = auto()


@dataclass(frozen=True)
class Pursuer:
    """Shortest-path chaser.

    Attributes:
        kind: Animal variant (only affects presentation and messages).
        speed: Pursuit ticks per move; lower is faster.
        counter: Ticks elapsed since the last move.
    """

    kind: PursuerKind
    speed: int = 3
    counter: int = 0
