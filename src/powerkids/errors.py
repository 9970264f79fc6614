"""Errors raised while loading game assets."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class AssetError(Exception):
    """Base class for asset loading failures.

    Load functions raise these instead of exiting so the caller decides
    whether to abort.
    """

    def __init__(self, message: str, path: Optional[Path | str] = None):
        """Initialize the error.

        Args:
            message: Human readable description.
            path: File the error relates to, if any.
        """
        self.path = Path(path) if path is not None else None
        if self.path is not None:
            message = f"{self.path}: {message}"
        super().__init__(message)


class AssetNotFoundError(AssetError):
    """An asset file is missing or cannot be read."""


class AssetDecodeError(AssetError, ValueError):
    """An image or descriptor file is malformed."""


class FrameIndexError(AssetError, IndexError):
    """A descriptor references a row or frame outside the sheet grid."""


class MissingAnimationError(AssetError, LookupError):
    """A named animation or tile is not present in a sprite sheet."""


class UnknownTileError(AssetError, ValueError):
    """A map character has no tile assigned to it."""
