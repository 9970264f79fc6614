"""Window interface used by the game loop."""

from __future__ import annotations

from enum import Enum
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from PIL import Image

    from powerkids.types import Frame

RGB = tuple[int, int, int]


class Key(Enum):
    """Keys the game reacts to."""

    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    TAB = "tab"
    ENTER = "enter"
    ESCAPE = "escape"


class Window:
    """Drawing and input primitives a backend provides.

    Coordinates are screen pixels with Y growing downwards.
    """

    size: tuple[int, int]

    def closed(self) -> bool:
        """Check whether the user closed the window."""
        raise NotImplementedError

    def pressed(self, key: Key) -> bool:
        """Check whether a key is held down."""
        raise NotImplementedError

    def just_pressed(self, key: Key) -> bool:
        """Check whether a key went down since the previous update."""
        raise NotImplementedError

    def clear(self, color: RGB) -> None:
        """Fill the whole window with a color."""
        raise NotImplementedError

    def draw_image(
        self,
        image: Image.Image,
        source: Optional[Frame],
        center: tuple[float, float],
        scale: float = 1.0,
    ) -> None:
        """Draw an image, or the part of it inside source, centred at a point."""
        raise NotImplementedError

    def draw_circle(
        self,
        center: tuple[float, float],
        radius: float,
        color: RGB,
    ) -> None:
        """Draw a filled circle."""
        raise NotImplementedError

    def update(self) -> None:
        """Present the frame and poll input for the next one."""
        raise NotImplementedError

    def close(self) -> None:
        """Release the window."""
