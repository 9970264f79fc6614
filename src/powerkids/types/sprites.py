"""Sprite sheet and frame types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, TYPE_CHECKING

from powerkids.errors import MissingAnimationError

if TYPE_CHECKING:
    from PIL import Image


@dataclass(frozen=True)
class Frame:
    """One rectangular region of a sprite sheet, in sheet pixels.

    The origin is the top-left corner of the sheet image.
    """

    x: int
    y: int
    width: int
    height: int

    @property
    def box(self) -> tuple[int, int, int, int]:
        """Region as a (left, upper, right, lower) crop box."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)


@dataclass(frozen=True)
class FrameRange:
    """A descriptor record naming frames start..end (inclusive) of a grid row."""

    name: str
    row: int
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start + 1


@dataclass
class SpriteSheetIndex:
    """A decoded sprite sheet sliced into a grid, plus named frame ranges.

    Treated as read-only once built.
    """

    image: Image.Image
    frame_size: int
    grid: tuple[tuple[Frame, ...], ...]
    animations: dict[str, tuple[Frame, ...]] = field(default_factory=dict)

    @property
    def rows(self) -> int:
        return len(self.grid)

    @property
    def columns(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    @property
    def names(self) -> list[str]:
        return list(self.animations)

    def __contains__(self, name: object) -> bool:
        return name in self.animations

    def __iter__(self) -> Iterator[str]:
        return iter(self.animations)

    def frame(self, row: int, column: int) -> Frame:
        """Get a grid frame by row and column."""
        return self.grid[row][column]

    def frames(self, name: str) -> tuple[Frame, ...]:
        """Get the frames bound to a name.

        Raises:
            MissingAnimationError: If the name was not in the descriptor.
        """
        try:
            return self.animations[name]
        except KeyError:
            raise MissingAnimationError(
                f"no animation named {name!r} "
                f"(available: {', '.join(sorted(self.animations)) or 'none'})"
            ) from None

    def first_frame(self, name: str) -> Frame:
        """Get frame 0 of a named range."""
        return self.frames(name)[0]

    def crop(self, frame: Frame) -> Image.Image:
        """Copy the sheet pixels covered by a frame."""
        return self.image.crop(frame.box)
