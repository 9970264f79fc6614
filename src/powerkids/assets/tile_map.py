"""Tile map building: text grid -> tile frames -> off-screen map image."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Optional

from PIL import Image

from powerkids.config import DEFAULT_TILE_CHARS
from powerkids.errors import AssetDecodeError, AssetNotFoundError, UnknownTileError
from powerkids.types import Frame, SpriteSheetIndex, TileMap

logger = logging.getLogger(__name__)


def split_rows(text: str) -> list[str]:
    """Split map text into rows on \\n, \\r\\n or \\r only.

    Other characters str.splitlines treats as breaks (form feed, \\x85, ...)
    stay inside their row. A final line ending does not add an empty row.
    """
    rows = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if rows[-1] == "":
        rows.pop()
    return rows


def measure_map(rows: list[str]) -> tuple[int, int]:
    """Get (width, height) of a text map; width is the longest row."""
    width = max((len(row) for row in rows), default=0)
    return width, len(rows)


class TileMapBuilder:
    """Builds tile maps from text using one tile sheet.

    Maps loaded from disk are cached until invalidated, so the same file is
    parsed and rasterized only once.
    """

    def __init__(
        self,
        sheet: SpriteSheetIndex,
        tile_chars: Optional[Mapping[str, str]] = None,
        unknown_tile: Optional[str] = None,
    ):
        """Initialize the builder.

        Args:
            sheet: Tile sheet whose named ranges are the tiles.
            tile_chars: Map character -> tile name. Defaults to the castle set.
            unknown_tile: Tile used for characters missing from tile_chars.
                If None, such characters raise UnknownTileError.
        """
        self.sheet = sheet
        self.tile_chars = dict(DEFAULT_TILE_CHARS if tile_chars is None else tile_chars)
        self.unknown_tile = unknown_tile
        self._frames: dict[str, Frame] = {}
        self._cache: dict[Path, tuple[int, TileMap]] = {}

    def resolve(self, char: str) -> Frame:
        """Get the frame drawn for a map character.

        Raises:
            UnknownTileError: If the character has no tile and there is no
                unknown-tile fallback.
            MissingAnimationError: If the tile name is not in the sheet.
        """
        frame = self._frames.get(char)
        if frame is not None:
            return frame

        tile_name = self.tile_chars.get(char, self.unknown_tile)
        if tile_name is None:
            raise UnknownTileError(f"no tile for map character {char!r}")
        frame = self.sheet.first_frame(tile_name)
        self._frames[char] = frame
        return frame

    def build(self, text: str, source: Optional[Path] = None) -> TileMap:
        """Rasterize a text map.

        Args:
            text: Map text, one row of tile characters per line.
            source: File the text came from, used in error messages.

        Returns:
            The built tile map.
        """
        rows = split_rows(text)
        width, height = measure_map(rows)
        size = self.sheet.frame_size

        cells = []
        for row_index, row in enumerate(rows):
            cell_row = []
            for col_index, char in enumerate(row):
                try:
                    cell_row.append(self.resolve(char))
                except UnknownTileError:
                    raise UnknownTileError(
                        f"line {row_index + 1}, column {col_index + 1}: "
                        f"no tile for map character {char!r}",
                        source,
                    ) from None
            cells.append(tuple(cell_row))

        image = Image.new("RGBA", (width * size, height * size), (0, 0, 0, 0))
        tiles: dict[Frame, Image.Image] = {}
        for row_index, cell_row in enumerate(cells):
            for col_index, frame in enumerate(cell_row):
                tile = tiles.get(frame)
                if tile is None:
                    tile = tiles[frame] = self.sheet.crop(frame)
                # Image rows grow downwards, so text row 0 sits at the top.
                image.paste(tile, (col_index * size, row_index * size))

        logger.info("built %dx%d tile map%s", width, height, f" from {source}" if source else "")
        return TileMap(
            rows=tuple(rows),
            width=width,
            height=height,
            frame_size=size,
            cells=tuple(cells),
            image=image,
        )

    def load(self, path: Path | str) -> TileMap:
        """Load a map file, reusing the cached map if the file is unchanged.

        Raises:
            AssetNotFoundError: If the file is missing or unreadable.
            AssetDecodeError: If the file is not UTF-8 text.
            UnknownTileError: If the map uses a character with no tile.
        """
        path = Path(path).resolve()
        try:
            mtime = path.stat().st_mtime_ns
        except OSError as e:
            raise AssetNotFoundError(f"cannot open map: {e.strerror}", path) from e

        cached = self._cache.get(path)
        if cached is not None and cached[0] == mtime:
            return cached[1]

        try:
            text = path.read_text(encoding="utf-8")
        except (FileNotFoundError, PermissionError, IsADirectoryError) as e:
            raise AssetNotFoundError(f"cannot open map: {e.strerror}", path) from e
        except UnicodeDecodeError as e:
            raise AssetDecodeError(f"map is not UTF-8 text: {e}", path) from e

        tile_map = self.build(text, path)
        self._cache[path] = (mtime, tile_map)
        return tile_map

    def invalidate(self, path: Optional[Path | str] = None) -> None:
        """Drop a cached map, or every cached map when path is None."""
        if path is None:
            self._cache.clear()
        else:
            self._cache.pop(Path(path).resolve(), None)
