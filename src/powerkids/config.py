"""Game configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

# Map character -> tile name in the tile descriptor
DEFAULT_TILE_CHARS: dict[str, str] = {
    "W": "CastleMiddle",
    "C": "CastleCross",
    "D": "CastleEmpty",
    "O": "CastleWindow",
    " ": "CastleEmpty",
}


@dataclass
class GameConfig:
    """Configuration for a game session."""

    # Window
    title: str = "PowerKids!"
    width: int = 1024
    height: int = 768
    target_fps: int = 60
    background: tuple[int, int, int] = (0, 128, 0)  # green

    # Assets, relative to asset_root
    asset_root: Path = field(default_factory=Path.cwd)
    character_sheet: str = "static/LPC_Sara/SaraFullSheet.png"
    character_descriptor: str = "static/LPC_Sara/SaraAnimations.csv"
    character_frame_size: int = 64
    tile_sheet: str = "static/castle2.png"
    tile_descriptor: str = "static/castle2.csv"
    tile_frame_size: int = 32
    map_file: str = "maps/castle-one/castleMap.txt"
    tile_chars: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_TILE_CHARS))
    unknown_tile: Optional[str] = None  # None = unknown characters are an error

    # Camera
    zoom: float = 1.0
    camera_smoothing: float = 1.0 / 128

    # Character
    move_step: float = 1.0  # displacement per tick while an arrow key is held
    animation_rate: float = 1.0 / 10  # seconds per frame when cycling
    cycle_frames: bool = False

    # Goal marker
    goal_enabled: bool = False
    goal_position: tuple[float, float] = (0.0, 0.0)
    goal_radius: float = 18.0
    goal_step: float = 1.0 / 7

    # Timing
    slow_motion_factor: float = 8.0
    max_frame_time: float = 0.25

    # Run mode
    headless: bool = False
    max_frames: Optional[int] = None
    seed: Optional[int] = None

    def __post_init__(self):
        if isinstance(self.asset_root, str):
            self.asset_root = Path(self.asset_root)

    def resolve(self, path: str | Path) -> Path:
        """Resolve an asset path against the asset root.

        Args:
            path: Relative or absolute asset path.

        Returns:
            The absolute path.
        """
        return self.asset_root / path
