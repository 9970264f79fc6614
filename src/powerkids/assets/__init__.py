"""Asset loading for PowerKids."""

from __future__ import annotations

from .sprite_sheet import (
    load_picture,
    slice_frames,
    parse_descriptors,
    read_descriptors,
    bind_animations,
    build_sprite_sheet,
    load_sprite_sheet,
)
from .tile_map import TileMapBuilder, measure_map, split_rows
from .placeholder_generator import PlaceholderGenerator, generate_placeholders

__all__ = [
    "load_picture",
    "slice_frames",
    "parse_descriptors",
    "read_descriptors",
    "bind_animations",
    "build_sprite_sheet",
    "load_sprite_sheet",
    "TileMapBuilder",
    "measure_map",
    "split_rows",
    "PlaceholderGenerator",
    "generate_placeholders",
]
