"""Animation system for the player character."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from powerkids.errors import MissingAnimationError
from powerkids.types import Direction, Frame

if TYPE_CHECKING:
    from powerkids.types import SpriteSheetIndex

    from .movement import CharacterPhysics

logger = logging.getLogger(__name__)


class CharacterAnimator:
    """Picks the character frame from its facing direction.

    One animation per Direction, looked up by the direction's name. By
    default each direction shows a static pose (frame 0 of its range);
    with cycle_frames the range is played in a loop at ``rate`` seconds
    per frame.
    """

    def __init__(
        self,
        sheet: SpriteSheetIndex,
        rate: float = 1.0 / 10,
        cycle_frames: bool = False,
    ):
        """Initialize the animator.

        Args:
            sheet: Character sprite sheet.
            rate: Seconds per frame when cycling.
            cycle_frames: Play the whole range instead of a static pose.

        Raises:
            MissingAnimationError: If the sheet lacks a direction animation.
        """
        missing = [d.animation for d in Direction if d.animation not in sheet]
        if missing:
            raise MissingAnimationError(
                f"character sheet has no animation for {', '.join(missing)}"
            )
        if cycle_frames and rate <= 0:
            raise ValueError(f"animation rate must be positive, got {rate}")

        self.sheet = sheet
        self.rate = rate
        self.cycle_frames = cycle_frames

        self.state = Direction.SOUTH
        self.counter = 0.0
        self.frame = self._select_frame()

    def update(self, dt: float, phys: CharacterPhysics) -> None:
        """Advance the counter and follow the character's facing.

        Args:
            dt: Delta time in seconds.
            phys: Physics state of the character.
        """
        self.counter += dt

        new_state = phys.facing
        if self.state != new_state:
            logger.debug("animation state %s -> %s", self.state.value, new_state.value)
            self.state = new_state
            self.counter = 0.0

        self.frame = self._select_frame()
        if self.counter == 0:
            logger.debug("frame %s", self.frame)

    def reset(self) -> None:
        """Return to the initial state."""
        self.state = Direction.SOUTH
        self.counter = 0.0
        self.frame = self._select_frame()

    def _select_frame(self) -> Frame:
        frames = self.sheet.frames(self.state.animation)
        if not self.cycle_frames:
            return frames[0]
        return frames[int(self.counter / self.rate) % len(frames)]
