"""Sprite sheet loading: image decoding, grid slicing and descriptor binding."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterable, Optional, Sequence

from PIL import Image, UnidentifiedImageError

from powerkids.errors import AssetDecodeError, AssetNotFoundError, FrameIndexError
from powerkids.types import Frame, FrameRange, SpriteSheetIndex

logger = logging.getLogger(__name__)

DESCRIPTOR_FIELDS = 4


def load_picture(path: Path | str) -> Image.Image:
    """Decode an image file into an RGBA image.

    Args:
        path: Image file path.

    Returns:
        The decoded image.

    Raises:
        AssetNotFoundError: If the file is missing or unreadable.
        AssetDecodeError: If the file is not a decodable image.
    """
    path = Path(path)
    try:
        with Image.open(path) as img:
            return img.convert("RGBA")
    except (FileNotFoundError, PermissionError, IsADirectoryError) as e:
        raise AssetNotFoundError(f"cannot open image: {e.strerror}", path) from e
    except (UnidentifiedImageError, OSError) as e:
        raise AssetDecodeError(f"cannot decode image: {e}", path) from e


def slice_frames(
    width: int, height: int, frame_size: int
) -> tuple[tuple[Frame, ...], ...]:
    """Partition a sheet into square frames.

    Row 0 is the topmost row. Rows and columns that do not fit a whole
    frame are dropped.

    Args:
        width: Sheet width in pixels.
        height: Sheet height in pixels.
        frame_size: Side length of one frame.

    Returns:
        Grid of frames indexed [row][column].
    """
    if frame_size <= 0:
        raise ValueError(f"frame size must be positive, got {frame_size}")

    rows = height // frame_size
    columns = width // frame_size
    return tuple(
        tuple(
            Frame(col * frame_size, row * frame_size, frame_size, frame_size)
            for col in range(columns)
        )
        for row in range(rows)
    )


def _parse_index(value: str, field_name: str, path: Optional[Path], line: int) -> int:
    try:
        return int(value.strip())
    except ValueError:
        raise AssetDecodeError(
            f"line {line}: {field_name} {value!r} is not an integer", path
        ) from None


def parse_descriptors(
    lines: Iterable[str], path: Optional[Path] = None
) -> list[FrameRange]:
    """Parse descriptor rows of the form ``name,row,startFrame,endFrame``.

    Args:
        lines: CSV text lines.
        path: Source file, used in error messages.

    Returns:
        Parsed records in file order.

    Raises:
        AssetDecodeError: On a malformed row.
    """
    ranges = []
    reader = csv.reader(lines)
    try:
        for record in reader:
            line = reader.line_num
            if not record or all(not value.strip() for value in record):
                continue
            if len(record) != DESCRIPTOR_FIELDS:
                raise AssetDecodeError(
                    f"line {line}: expected {DESCRIPTOR_FIELDS} fields, got {len(record)}",
                    path,
                )
            name, row, start, end = record
            ranges.append(
                FrameRange(
                    name=name,
                    row=_parse_index(row, "row", path, line),
                    start=_parse_index(start, "start frame", path, line),
                    end=_parse_index(end, "end frame", path, line),
                )
            )
    except csv.Error as e:
        raise AssetDecodeError(f"line {reader.line_num}: {e}", path) from e
    return ranges


def read_descriptors(path: Path | str) -> list[FrameRange]:
    """Read a descriptor CSV file.

    Raises:
        AssetNotFoundError: If the file is missing or unreadable.
        AssetDecodeError: On a malformed row.
    """
    path = Path(path)
    try:
        with path.open(newline="", encoding="utf-8") as f:
            return parse_descriptors(f, path)
    except (FileNotFoundError, PermissionError, IsADirectoryError) as e:
        raise AssetNotFoundError(f"cannot open descriptor: {e.strerror}", path) from e
    except UnicodeDecodeError as e:
        raise AssetDecodeError(f"descriptor is not UTF-8 text: {e}", path) from e


def bind_animations(
    grid: Sequence[Sequence[Frame]],
    ranges: Iterable[FrameRange],
    path: Optional[Path] = None,
) -> dict[str, tuple[Frame, ...]]:
    """Bind each descriptor name to its slice of the frame grid.

    Raises:
        FrameIndexError: If a record falls outside the grid.
    """
    animations: dict[str, tuple[Frame, ...]] = {}
    for frame_range in ranges:
        if not 0 <= frame_range.row < len(grid):
            raise FrameIndexError(
                f"{frame_range.name}: row {frame_range.row} out of range "
                f"(sheet has {len(grid)} rows)",
                path,
            )
        row = grid[frame_range.row]
        if not 0 <= frame_range.start <= frame_range.end < len(row):
            raise FrameIndexError(
                f"{frame_range.name}: frames {frame_range.start}..{frame_range.end} "
                f"out of range (row {frame_range.row} has {len(row)} frames)",
                path,
            )
        if frame_range.name in animations:
            logger.debug("%s redefined, replacing previous range", frame_range.name)
        animations[frame_range.name] = tuple(row[frame_range.start : frame_range.end + 1])
        logger.debug(
            "bound %s to row %d frames %d..%d",
            frame_range.name,
            frame_range.row,
            frame_range.start,
            frame_range.end,
        )
    return animations


def build_sprite_sheet(
    image: Image.Image,
    frame_size: int,
    ranges: Iterable[FrameRange],
    path: Optional[Path] = None,
) -> SpriteSheetIndex:
    """Slice an already decoded image and bind descriptor ranges to it."""
    grid = slice_frames(image.width, image.height, frame_size)
    return SpriteSheetIndex(
        image=image,
        frame_size=frame_size,
        grid=grid,
        animations=bind_animations(grid, ranges, path),
    )


def load_sprite_sheet(
    sheet_path: Path | str,
    descriptor_path: Path | str,
    frame_size: int,
) -> SpriteSheetIndex:
    """Load a sprite sheet and its descriptor table.

    Args:
        sheet_path: Sheet image file.
        descriptor_path: Descriptor CSV file.
        frame_size: Side length of one frame in pixels.

    Returns:
        The sprite sheet index.

    Raises:
        AssetError: If either file is missing or malformed, or a descriptor
            record is out of range.
    """
    image = load_picture(sheet_path)
    ranges = read_descriptors(descriptor_path)
    sheet = build_sprite_sheet(image, frame_size, ranges, Path(descriptor_path))
    logger.info(
        "loaded %s: %dx%d frames of %dpx, %d named ranges",
        sheet_path,
        sheet.columns,
        sheet.rows,
        frame_size,
        len(sheet.animations),
    )
    return sheet
