"""Game engine for PowerKids."""

from __future__ import annotations

from .game_engine import GameEngine
from .systems import CharacterPhysics, CharacterAnimator, Goal

__all__ = [
    "GameEngine",
    "CharacterPhysics",
    "CharacterAnimator",
    "Goal",
]
