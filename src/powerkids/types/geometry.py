"""2D vector and rectangle types in world space (Y grows upwards)."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vec:
    """Immutable 2D vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec) -> Vec:
        return Vec(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec) -> Vec:
        return Vec(self.x - other.x, self.y - other.y)

    def scaled(self, factor: float) -> Vec:
        """Return this vector multiplied by a scalar."""
        return Vec(self.x * factor, self.y * factor)

    def lerp(self, target: Vec, t: float) -> Vec:
        """Linearly interpolate towards target.

        Args:
            target: Vector reached at t == 1.
            t: Interpolation factor.

        Returns:
            The interpolated vector.
        """
        return Vec(
            self.x + (target.x - self.x) * t,
            self.y + (target.y - self.y) * t,
        )

    def length(self) -> float:
        """Euclidean length."""
        return math.hypot(self.x, self.y)


ZERO = Vec(0.0, 0.0)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle given by its min and max corners."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def centered(cls, center: Vec, width: float, height: float) -> Rect:
        """Create a rectangle of the given size around a center point."""
        half_w = width / 2
        half_h = height / 2
        return cls(
            center.x - half_w,
            center.y - half_h,
            center.x + half_w,
            center.y + half_h,
        )

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Vec:
        return Vec(
            (self.min_x + self.max_x) / 2,
            (self.min_y + self.max_y) / 2,
        )

    def moved(self, delta: Vec) -> Rect:
        """Return this rectangle translated by delta."""
        return Rect(
            self.min_x + delta.x,
            self.min_y + delta.y,
            self.max_x + delta.x,
            self.max_y + delta.y,
        )
