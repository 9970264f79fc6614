"""Movement system for the player character."""

from __future__ import annotations

from typing import Optional

from powerkids.types import Direction, Rect, Vec, ZERO


def facing_for(velocity: Vec, current: Direction) -> Direction:
    """Classify the facing direction from velocity sign.

    Horizontal movement wins over vertical, so a diagonal always faces
    East or West. Zero velocity keeps the current facing.
    """
    if velocity.x > 0:
        return Direction.EAST
    if velocity.x < 0:
        return Direction.WEST
    if velocity.y < 0:
        return Direction.SOUTH
    if velocity.y > 0:
        return Direction.NORTH
    return current


class CharacterPhysics:
    """Position, velocity and facing of the player character."""

    def __init__(self, rect: Optional[Rect] = None, size: float = 64.0):
        """Initialize the physics state.

        Args:
            rect: Starting bounds. Defaults to a size x size square centred
                on the origin.
            size: Side length used for the default bounds.
        """
        self.rect = rect or Rect.centered(ZERO, size, size)
        self.velocity = ZERO
        self._facing = Direction.SOUTH

    @property
    def facing(self) -> Direction:
        return self._facing

    @property
    def position(self) -> Vec:
        return self.rect.center

    def update(self, dt: float, ctrl: Vec) -> None:
        """Apply one tick of control input.

        The control vector is a per-tick displacement and is added to the
        position as-is; dt is not applied.

        Args:
            dt: Delta time in seconds.
            ctrl: Control vector for this tick.
        """
        self.velocity = ctrl
        self.rect = self.rect.moved(ctrl)
        self._facing = facing_for(self.velocity, self._facing)

    def restart(self) -> None:
        """Move back to the origin and stop."""
        self.rect = self.rect.moved(self.rect.center.scaled(-1))
        self.velocity = ZERO
        self._facing = Direction.SOUTH
