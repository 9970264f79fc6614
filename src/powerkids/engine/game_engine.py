"""Main game engine for PowerKids."""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from powerkids.config import GameConfig
from powerkids.types import Frame, SpriteSheetIndex, Vec

from .systems import CharacterAnimator, CharacterPhysics, Goal

logger = logging.getLogger(__name__)


class GameEngine:
    """Owns the player character and the goal, and advances them per tick."""

    def __init__(
        self,
        character_sheet: SpriteSheetIndex,
        config: Optional[GameConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        """Initialize the game engine.

        Args:
            character_sheet: Sprite sheet with South/East/West/North animations.
            config: Optional game configuration.
            rng: Random generator for the goal colors.
        """
        self._config = config or GameConfig()
        self.character_sheet = character_sheet

        self.physics = CharacterPhysics(size=character_sheet.frame_size)
        self.animator = CharacterAnimator(
            character_sheet,
            rate=self._config.animation_rate,
            cycle_frames=self._config.cycle_frames,
        )

        self.goal: Optional[Goal] = None
        if self._config.goal_enabled:
            self.goal = Goal(
                position=Vec(*self._config.goal_position),
                radius=self._config.goal_radius,
                step=self._config.goal_step,
                rng=rng or np.random.default_rng(self._config.seed),
            )

    @property
    def character_frame(self) -> Frame:
        return self.animator.frame

    @property
    def character_position(self) -> Vec:
        return self.physics.position

    def update(self, dt: float, ctrl: Vec) -> None:
        """Advance one tick.

        Args:
            dt: Delta time in seconds.
            ctrl: Control vector from the player's input.
        """
        self.physics.update(dt, ctrl)
        self.animator.update(dt, self.physics)
        if self.goal is not None:
            self.goal.update(dt)

    def restart(self) -> None:
        """Put the character back at the origin."""
        logger.info("restarting level")
        self.physics.restart()
        self.animator.reset()
