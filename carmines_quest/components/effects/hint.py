from dataclasses import dataclass

from pyrsistent import pvector
from pyrsistent.typing import PVector

from carmines_quest.components.properties.position import Position


@dataclass(frozen=True)
class Hint:
    """Shortest route to the delivery target shown to the courier.

    Attached to the agent entity while displayed. The hint system decrements
    ``remaining_ms`` as wall time passes and removes the component once it
    reaches zero; only one hint may be attached at a time.

    Attributes:
        path:
            Cells from just after the courier's position up to the target,
            inclusive. Empty if the target was unreachable.
        remaining_ms:
            Display time left in milliseconds.
    """

    path: PVector[Position] = pvector()
    remaining_ms: int = 0
