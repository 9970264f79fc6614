"""Character state types."""

from __future__ import annotations

from enum import Enum


class Direction(Enum):
    """Facing direction of the character.

    Values double as the animation names expected in the character's
    descriptor file.
    """

    SOUTH = "South"
    EAST = "East"
    WEST = "West"
    NORTH = "North"

    @property
    def animation(self) -> str:
        return self.value
