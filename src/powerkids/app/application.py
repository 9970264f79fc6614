"""Main application entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from powerkids.assets import TileMapBuilder, generate_placeholders, load_sprite_sheet
from powerkids.config import GameConfig
from powerkids.engine import GameEngine
from powerkids.errors import AssetError
from powerkids.renderer import HeadlessWindow, Window
from powerkids.types import SpriteSheetIndex, TileMap

from .game_loop import GameLoop

logger = logging.getLogger(__name__)


class Application:
    """Main PowerKids application."""

    def __init__(self, config: Optional[GameConfig] = None):
        """Initialize the application.

        Args:
            config: Game configuration.
        """
        self.config = config or GameConfig()

        # Components (created in initialize)
        self.character_sheet: Optional[SpriteSheetIndex] = None
        self.tile_map: Optional[TileMap] = None
        self.engine: Optional[GameEngine] = None
        self.window: Optional[Window] = None
        self.game_loop: Optional[GameLoop] = None

        self._initialized = False

    def load_assets(self) -> None:
        """Load the character sheet and build the map, once.

        Raises:
            AssetError: If any asset is missing or malformed.
        """
        config = self.config
        self.character_sheet = load_sprite_sheet(
            config.resolve(config.character_sheet),
            config.resolve(config.character_descriptor),
            config.character_frame_size,
        )
        tile_sheet = load_sprite_sheet(
            config.resolve(config.tile_sheet),
            config.resolve(config.tile_descriptor),
            config.tile_frame_size,
        )
        builder = TileMapBuilder(
            tile_sheet,
            tile_chars=config.tile_chars,
            unknown_tile=config.unknown_tile,
        )
        self.tile_map = builder.load(config.resolve(config.map_file))

    def initialize(self) -> None:
        """Initialize all application components.

        Raises:
            AssetError: If any asset is missing or malformed.
        """
        if self._initialized:
            return

        self.load_assets()
        self.engine = GameEngine(self.character_sheet, config=self.config)

        # Create window
        if self.config.headless:
            self.window = HeadlessWindow(
                width=self.config.width,
                height=self.config.height,
                max_frames=self.config.max_frames,
            )
        else:
            from powerkids.renderer.pygame_window import PygameWindow

            self.window = PygameWindow(
                self.config.title,
                self.config.width,
                self.config.height,
            )

        self.game_loop = GameLoop(
            engine=self.engine,
            window=self.window,
            tile_map=self.tile_map,
            config=self.config,
        )

        self._initialized = True

    def run(self) -> None:
        """Run the game until the window closes."""
        self.initialize()
        try:
            self.game_loop.run()
        finally:
            self.window.close()

    def stop(self) -> None:
        """Stop the application."""
        if self.game_loop is not None:
            self.game_loop.stop()


def positive_int(value: str) -> int:
    """argparse type for integers greater than zero."""
    import argparse

    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0, got {number}")
    return number


def parse_args(argv: Optional[Sequence[str]] = None) -> tuple[GameConfig, bool, str]:
    """Parse command line arguments into a config.

    Returns:
        (config, generate_placeholders, log_level)
    """
    import argparse

    defaults = GameConfig()
    parser = argparse.ArgumentParser(description="PowerKids - tile map demo")
    parser.add_argument(
        "--assets",
        type=Path,
        default=defaults.asset_root,
        help="Directory holding static/ and maps/ (default: current directory)",
    )
    parser.add_argument(
        "--width",
        type=positive_int,
        default=defaults.width,
        help="Window width in pixels",
    )
    parser.add_argument(
        "--height",
        type=positive_int,
        default=defaults.height,
        help="Window height in pixels",
    )
    parser.add_argument(
        "--fps",
        type=positive_int,
        default=defaults.target_fps,
        help="Target FPS",
    )
    parser.add_argument(
        "--zoom",
        type=float,
        default=defaults.zoom,
        help="Scale applied to the map and character",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run without a window (for testing, needs --frames)",
    )
    parser.add_argument(
        "--frames",
        type=positive_int,
        default=None,
        help="Stop a headless run after this many frames",
    )
    parser.add_argument(
        "--slow-motion",
        type=float,
        default=defaults.slow_motion_factor,
        help="Time divisor while Tab is held",
    )
    parser.add_argument(
        "--cycle-frames",
        action="store_true",
        help="Play the walk animations instead of a static pose",
    )
    parser.add_argument(
        "--goal",
        action="store_true",
        help="Show the color cycling goal marker",
    )
    parser.add_argument(
        "--unknown-tile",
        default=None,
        help="Tile drawn for unknown map characters (default: fail)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for the goal colors",
    )
    parser.add_argument(
        "--generate-placeholders",
        action="store_true",
        help="Draw placeholder sheets for any missing sprite sheet images",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    args = parser.parse_args(argv)
    if args.headless and args.frames is None:
        parser.error("--headless needs --frames, a headless run has no way to close")

    config = GameConfig(
        width=args.width,
        height=args.height,
        target_fps=args.fps,
        asset_root=args.assets,
        zoom=args.zoom,
        cycle_frames=args.cycle_frames,
        goal_enabled=args.goal,
        unknown_tile=args.unknown_tile,
        slow_motion_factor=args.slow_motion,
        headless=args.headless,
        max_frames=args.frames,
        seed=args.seed,
    )
    return config, args.generate_placeholders, args.log_level


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point.

    Returns:
        Process exit status.
    """
    config, placeholders, log_level = parse_args(argv)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if placeholders:
            for kind, path in generate_placeholders(config).items():
                logger.info("generated %s sheet %s", kind, path)
        Application(config).run()
    except AssetError as e:
        logger.error("error loading assets: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
