"""Type definitions for PowerKids."""

from .geometry import Vec, Rect, ZERO
from .entities import Direction
from .sprites import Frame, FrameRange, SpriteSheetIndex
from .world import TileMap, Camera

__all__ = [
    # Geometry
    "Vec",
    "Rect",
    "ZERO",
    # Character
    "Direction",
    # Sprites
    "Frame",
    "FrameRange",
    "SpriteSheetIndex",
    # World
    "TileMap",
    "Camera",
]
