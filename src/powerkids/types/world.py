"""World types: the tile map and the camera."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from .geometry import Vec, ZERO

if TYPE_CHECKING:
    from PIL import Image

    from .sprites import Frame


@dataclass(frozen=True)
class TileMap:
    """A rasterized tile map.

    ``cells[row][col]`` follows the text layout (row 0 is the first line of
    the map file, i.e. the top of the map). ``image`` is the off-screen map
    surface, ``width * frame_size`` by ``height * frame_size`` pixels.
    """

    rows: tuple[str, ...]
    width: int
    height: int
    frame_size: int
    cells: tuple[tuple[Optional[Frame], ...], ...]
    image: Image.Image

    @property
    def pixel_size(self) -> tuple[int, int]:
        return (self.width * self.frame_size, self.height * self.frame_size)

    def cell_origin(self, col: int, row: int) -> Vec:
        """Canvas position of a text cell's lower-left corner (Y up).

        Text row 0 is the top of the map, so it lands at the highest Y.
        """
        return Vec(
            float(col * self.frame_size),
            float((self.height - 1 - row) * self.frame_size),
        )

    def tile_at(self, x: int, y: int) -> Optional[Frame]:
        """Frame painted at canvas tile coordinates (x, y), Y growing up.

        Returns None for cells past the end of a short row.

        Raises:
            IndexError: If (x, y) is outside the map.
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"tile ({x}, {y}) outside {self.width}x{self.height} map")
        row = self.cells[self.height - 1 - y]
        if x >= len(row):
            return None
        return row[x]


@dataclass
class Camera:
    """Camera that eases towards a target position."""

    position: Vec = ZERO
    smoothing: float = 1.0 / 128
    zoom: float = 1.0

    def follow(self, target: Vec, dt: float) -> None:
        """Move towards target.

        ``smoothing`` is the fraction of the distance still left after one
        second, independent of frame rate.
        """
        self.position = self.position.lerp(target, 1 - self.smoothing ** dt)

    def world_to_screen(
        self, pos: Vec, screen_size: tuple[int, int]
    ) -> tuple[float, float]:
        """Convert world coordinates to screen coordinates (Y down)."""
        screen_w, screen_h = screen_size
        screen_x = (pos.x - self.position.x) * self.zoom + screen_w / 2
        screen_y = screen_h / 2 - (pos.y - self.position.y) * self.zoom
        return screen_x, screen_y

    def reset(self) -> None:
        self.position = ZERO
