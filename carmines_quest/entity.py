"""Entity ID generation.

Each actor of a session (the courier and every pursuing animal) is an
``EntityID`` plus component dataclasses stored in persistent maps on
:class:`carmines_quest.state.State`. Static terrain lives in the
:class:`carmines_quest.grid.Grid` instead.

IDs are *not* recycled; a simple incrementing counter is sufficient because a
session is rebuilt from scratch on every level load or reset.
"""

from typing import Iterator

from carmines_quest.types import EntityID


def entity_id_generator() -> Iterator[EntityID]:
    """Yield an infinite sequence of monotonically increasing entity IDs."""
    eid = 0
    while True:
        yield eid
        eid += 1


_entity_id_gen = entity_id_generator()


def new_entity_id() -> EntityID:
    """Return a newly allocated unique entity ID."""
    return next(_entity_id_gen)


