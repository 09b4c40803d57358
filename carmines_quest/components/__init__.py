"""carmines_quest.components
=================================

Aggregate import surface for the ECS component dataclasses of a session.

*Properties* describe what an entity is (the courier, a pursuing animal, where
it stands); *effects* are temporary attachments with a limited lifetime (the
hint path shown to the courier).

    from carmines_quest.components import Position, Pursuer, Hint

All component classes are frozen ``@dataclass`` value objects manipulated by
the systems in :mod:`carmines_quest.systems`.
"""

# Effects
from .effects import Hint

# Properties
from .properties import Agent
from .properties import Position
from .properties import Pursuer, PursuerKind

__all__ = [
    "Hint",
    "Agent",
    "Position",
    "Pursuer",
    "PursuerKind",
]
