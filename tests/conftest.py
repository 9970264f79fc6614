"""Pytest configuration and fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from powerkids.assets import build_sprite_sheet
from powerkids.config import GameConfig
from powerkids.types import FrameRange, SpriteSheetIndex

CHARACTER_FRAME = 8
TILE_FRAME = 4

CHARACTER_RANGES = [
    FrameRange("South", 0, 0, 2),
    FrameRange("East", 1, 0, 3),
    FrameRange("West", 2, 0, 3),
    FrameRange("North", 3, 1, 2),
]

TILE_RANGES = [
    FrameRange("CastleMiddle", 0, 0, 0),
    FrameRange("CastleCross", 0, 1, 1),
    FrameRange("CastleEmpty", 0, 2, 2),
    FrameRange("CastleWindow", 0, 3, 3),
]


def cell_color(row: int, col: int) -> tuple[int, int, int, int]:
    """Unique opaque color for a grid cell."""
    return (10 + col * 20, 10 + row * 20, 200, 255)


def make_grid_image(columns: int, rows: int, frame_size: int, extra: int = 0) -> Image.Image:
    """Image whose grid cells are each filled with cell_color.

    extra adds that many leftover pixels to the right and bottom edges.
    """
    img = Image.new(
        "RGBA",
        (columns * frame_size + extra, rows * frame_size + extra),
        (0, 0, 0, 0),
    )
    for row in range(rows):
        for col in range(columns):
            x, y = col * frame_size, row * frame_size
            img.paste(cell_color(row, col), (x, y, x + frame_size, y + frame_size))
    return img


def write_descriptor(path: Path, ranges: list[FrameRange]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        "".join(f"{r.name},{r.row},{r.start},{r.end}\n" for r in ranges),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def character_sheet() -> SpriteSheetIndex:
    """Character sheet with four direction animations."""
    image = make_grid_image(5, 4, CHARACTER_FRAME)
    return build_sprite_sheet(image, CHARACTER_FRAME, CHARACTER_RANGES)


@pytest.fixture
def tile_sheet() -> SpriteSheetIndex:
    """Tile sheet with the four castle tiles."""
    image = make_grid_image(4, 1, TILE_FRAME)
    return build_sprite_sheet(image, TILE_FRAME, TILE_RANGES)


@pytest.fixture
def asset_config(tmp_path) -> GameConfig:
    """Config pointing at a small asset tree written to tmp_path."""
    config = GameConfig(
        asset_root=tmp_path,
        character_frame_size=CHARACTER_FRAME,
        tile_frame_size=TILE_FRAME,
        width=320,
        height=240,
        target_fps=1000,
        headless=True,
    )

    sheet_path = config.resolve(config.character_sheet)
    sheet_path.parent.mkdir(parents=True, exist_ok=True)
    make_grid_image(5, 4, CHARACTER_FRAME).save(sheet_path)
    write_descriptor(config.resolve(config.character_descriptor), CHARACTER_RANGES)

    make_grid_image(4, 1, TILE_FRAME).save(config.resolve(config.tile_sheet))
    write_descriptor(config.resolve(config.tile_descriptor), TILE_RANGES)

    map_path = config.resolve(config.map_file)
    map_path.parent.mkdir(parents=True, exist_ok=True)
    map_path.write_text("WWWW\nW  O\nWCDW\n", encoding="utf-8")

    return config
