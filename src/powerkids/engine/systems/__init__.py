"""Game systems for PowerKids."""

from __future__ import annotations

from .movement import CharacterPhysics, facing_for
from .animation import CharacterAnimator
from .goal import Goal, random_nice_color

__all__ = [
    "CharacterPhysics",
    "facing_for",
    "CharacterAnimator",
    "Goal",
    "random_nice_color",
]
