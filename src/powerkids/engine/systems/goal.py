"""Goal marker with cycling colors."""

from __future__ import annotations

from collections import deque
from typing import Optional

import numpy as np

from powerkids.types import Vec

Color = tuple[float, float, float]

GOAL_RINGS = 5


def random_nice_color(
    rng: np.random.Generator, max_attempts: int = 64
) -> Color:
    """Sample a random RGB color scaled to unit length.

    Zero-length samples are rejected and drawn again.

    Args:
        rng: Random generator.
        max_attempts: Samples to try before giving up.

    Returns:
        (r, g, b) with Euclidean norm 1.

    Raises:
        RuntimeError: If every sample had zero length.
    """
    for _ in range(max_attempts):
        rgb = rng.random(3)
        length = float(np.linalg.norm(rgb))
        if length > 0:
            r, g, b = (rgb / length).tolist()
            return (r, g, b)
    raise RuntimeError(f"no non-zero color after {max_attempts} samples")


class Goal:
    """A ring of colors that shifts outwards every ``step`` seconds."""

    def __init__(
        self,
        position: Vec,
        radius: float = 18.0,
        step: float = 1.0 / 7,
        rng: Optional[np.random.Generator] = None,
    ):
        """Initialize the goal.

        Args:
            position: World position of the goal centre.
            radius: Radius of the outermost ring.
            step: Seconds between color shifts.
            rng: Random generator for new colors.
        """
        if step <= 0:
            raise ValueError(f"goal step must be positive, got {step}")

        self.position = position
        self.radius = radius
        self.step = step
        self.counter = 0.0
        self._rng = rng or np.random.default_rng()
        self.colors: deque[Color] = deque(
            (random_nice_color(self._rng) for _ in range(GOAL_RINGS)),
            maxlen=GOAL_RINGS,
        )

    def update(self, dt: float) -> None:
        """Shift in one new color per elapsed step."""
        self.counter += dt
        while self.counter > self.step:
            self.counter -= self.step
            # maxlen drops the outermost color
            self.colors.appendleft(random_nice_color(self._rng))

    def rings(self) -> list[tuple[float, Color]]:
        """(radius, color) of every ring, outermost first."""
        return [
            ((i + 1) * self.radius / len(self.colors), self.colors[i])
            for i in reversed(range(len(self.colors)))
        ]
