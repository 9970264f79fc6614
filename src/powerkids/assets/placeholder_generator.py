"""Generate placeholder sprite sheets for PowerKids."""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Iterable, Optional, Tuple, TYPE_CHECKING

from PIL import Image, ImageDraw

from powerkids.types import FrameRange

from .sprite_sheet import read_descriptors

if TYPE_CHECKING:
    from powerkids.config import GameConfig

logger = logging.getLogger(__name__)


# Color schemes for the character's directions and the castle tiles
CHARACTER_COLORS: dict[str, Tuple[int, int, int]] = {
    "South": (200, 150, 100),  # Tan
    "East": (100, 180, 220),  # Light blue
    "West": (220, 120, 160),  # Pink
    "North": (150, 200, 100),  # Green
}

TILE_COLORS: dict[str, Tuple[int, int, int]] = {
    "CastleMiddle": (130, 130, 140),  # Stone
    "CastleCross": (150, 120, 90),  # Wood
    "CastleEmpty": (60, 60, 70),  # Floor
    "CastleWindow": (90, 120, 180),  # Glass
}

# Screen-space unit vector each direction faces (Y down)
FACING_OFFSETS: dict[str, Tuple[int, int]] = {
    "South": (0, 1),
    "East": (1, 0),
    "West": (-1, 0),
    "North": (0, -1),
}


def sheet_size(ranges: Iterable[FrameRange], frame_size: int) -> tuple[int, int]:
    """Smallest sheet size in pixels that holds every descriptor range."""
    ranges = list(ranges)
    columns = max((r.end + 1 for r in ranges), default=1)
    rows = max((r.row + 1 for r in ranges), default=1)
    return columns * frame_size, rows * frame_size


class PlaceholderGenerator:
    """Draws placeholder sheets matching the shipped descriptor files."""

    def __init__(self, overwrite: bool = False):
        """Initialize the generator.

        Args:
            overwrite: Replace sheets that already exist.
        """
        self.overwrite = overwrite

    def generate_all(self, config: GameConfig) -> dict[str, Path]:
        """Generate the character and tile sheets named in a config.

        Returns:
            Dictionary of sheet kind to generated file path. Sheets that
            already existed are left alone and not listed.
        """
        generated = {}

        path = self.generate_character_sheet(
            config.resolve(config.character_descriptor),
            config.resolve(config.character_sheet),
            config.character_frame_size,
        )
        if path:
            generated["character"] = path

        path = self.generate_tile_sheet(
            config.resolve(config.tile_descriptor),
            config.resolve(config.tile_sheet),
            config.tile_frame_size,
        )
        if path:
            generated["tiles"] = path

        return generated

    def generate_character_sheet(
        self,
        descriptor_path: Path,
        output_path: Path,
        frame_size: int,
    ) -> Optional[Path]:
        """Generate a character sheet with one pose per descriptor frame.

        Returns:
            Path to the generated file, or None if it already existed.
        """
        if output_path.exists() and not self.overwrite:
            return None

        ranges = read_descriptors(descriptor_path)
        img = Image.new("RGBA", sheet_size(ranges, frame_size), (0, 0, 0, 0))
        draw = ImageDraw.Draw(img)

        for frame_range in ranges:
            color = CHARACTER_COLORS.get(frame_range.name, (200, 200, 200))
            facing = FACING_OFFSETS.get(frame_range.name, (0, 1))
            for step, col in enumerate(range(frame_range.start, frame_range.end + 1)):
                self._draw_character_frame(
                    draw,
                    col * frame_size,
                    frame_range.row * frame_size,
                    frame_size,
                    color,
                    facing,
                    step,
                )

        return self._save(img, output_path)

    def generate_tile_sheet(
        self,
        descriptor_path: Path,
        output_path: Path,
        frame_size: int,
    ) -> Optional[Path]:
        """Generate a tile sheet with one tile per descriptor frame.

        Returns:
            Path to the generated file, or None if it already existed.
        """
        if output_path.exists() and not self.overwrite:
            return None

        ranges = read_descriptors(descriptor_path)
        img = Image.new("RGBA", sheet_size(ranges, frame_size), (0, 0, 0, 0))
        draw = ImageDraw.Draw(img)

        for frame_range in ranges:
            for col in range(frame_range.start, frame_range.end + 1):
                self._draw_tile_frame(
                    draw,
                    col * frame_size,
                    frame_range.row * frame_size,
                    frame_size,
                    frame_range.name,
                )

        return self._save(img, output_path)

    def _save(self, img: Image.Image, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        img.save(output_path)
        logger.info("generated placeholder %s (%dx%d)", output_path, img.width, img.height)
        return output_path

    def _draw_character_frame(
        self,
        draw: ImageDraw.ImageDraw,
        x: int,
        y: int,
        size: int,
        color: Tuple[int, int, int],
        facing: Tuple[int, int],
        step: int,
    ) -> None:
        """Draw a simple figure looking towards facing.

        Args:
            draw: ImageDraw instance.
            x: Left edge of the frame.
            y: Top edge of the frame.
            size: Frame side length.
            color: RGB body color.
            facing: Screen-space direction the figure looks.
            step: Walk cycle index; moves the feet.
        """
        outline = (color[0] // 2, color[1] // 2, color[2] // 2)

        # Feet take turns lifting with the walk cycle
        foot = size // 8
        lift = size // 16
        for side in (-1, 1):
            fx = x + size // 2 + side * size // 6
            fy = y + size - foot - 1
            if step and (step % 2 == 0) == (side < 0):
                fy -= lift
            draw.ellipse([fx - foot // 2, fy, fx + foot // 2, fy + foot], fill=outline)

        # Body (oval)
        body_margin = size // 4
        draw.ellipse(
            [x + body_margin, y + size // 3, x + size - body_margin, y + size - foot - 2],
            fill=color,
            outline=outline,
        )

        # Head (circle)
        head_size = size // 3
        head_x = x + size // 2 - head_size // 2
        head_y = y + size // 8
        draw.ellipse(
            [head_x, head_y, head_x + head_size, head_y + head_size],
            fill=color,
            outline=outline,
        )

        # Eyes mark the facing direction; none when looking away
        dx, dy = facing
        if dy < 0:
            return
        cx = head_x + head_size // 2 + dx * head_size // 4
        cy = head_y + head_size // 2
        eye = max(1, size // 32)
        gap = head_size // 5 if dx == 0 else 0
        for ex in {cx - gap, cx + gap}:
            draw.ellipse([ex - eye, cy - eye, ex + eye, cy + eye], fill=(20, 20, 20))

    def _draw_tile_frame(
        self,
        draw: ImageDraw.ImageDraw,
        x: int,
        y: int,
        size: int,
        tile_name: str,
    ) -> None:
        """Draw a castle tile."""
        color = TILE_COLORS.get(tile_name, (200, 200, 200))
        dark = (color[0] * 2 // 3, color[1] * 2 // 3, color[2] * 2 // 3)
        draw.rectangle([x, y, x + size - 1, y + size - 1], fill=color)

        if tile_name == "CastleMiddle":
            # Brick courses, offset every other row
            course = max(2, size // 4)
            for i, by in enumerate(range(y, y + size, course)):
                draw.line([(x, by), (x + size - 1, by)], fill=dark)
                shift = size // 4 if i % 2 else 0
                for bx in range(x + shift, x + size, size // 2):
                    draw.line([(bx, by), (bx, min(by + course, y + size - 1))], fill=dark)

        elif tile_name == "CastleCross":
            # Timber cross
            width = max(1, size // 8)
            mid = size // 2
            draw.rectangle([x + mid - width, y + 2, x + mid + width, y + size - 3], fill=dark)
            draw.rectangle([x + 2, y + mid - width, x + size - 3, y + mid + width], fill=dark)

        elif tile_name == "CastleWindow":
            # Arched window in a stone frame
            margin = size // 4
            draw.rectangle([x, y, x + size - 1, y + size - 1], fill=TILE_COLORS["CastleMiddle"])
            draw.rectangle(
                [x + margin, y + size // 3, x + size - margin, y + size - margin],
                fill=color,
            )
            draw.pieslice(
                [x + margin, y + margin // 2, x + size - margin, y + size // 3 + margin],
                180,
                360,
                fill=color,
            )

        elif tile_name == "CastleEmpty":
            # Speckled floor
            for i in range(size // 4):
                angle = i * 2.39996  # golden angle
                r = (i + 1) * size / (size // 4 + 2) / 2
                px = x + size // 2 + int(r * math.cos(angle))
                py = y + size // 2 + int(r * math.sin(angle))
                draw.point((px, py), fill=dark)

        else:
            draw.rectangle([x + 1, y + 1, x + size - 2, y + size - 2], outline=dark)


def generate_placeholders(config: GameConfig, overwrite: bool = False) -> dict[str, Path]:
    """Convenience function to generate every placeholder sheet.

    Args:
        config: Configuration naming the sheets and descriptors.
        overwrite: Replace sheets that already exist.

    Returns:
        Dictionary of sheet kind to generated file path.
    """
    generator = PlaceholderGenerator(overwrite=overwrite)
    return generator.generate_all(config)
