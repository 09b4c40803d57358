"""Agent marker component.

Presence of :class:`Agent` designates the courier controlled by the player.
The reducer selects the first agent if several exist.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Agent:
    """Marker (no fields)."""

    pass
