"""Game loop for coordinating input, engine and window."""

from __future__ import annotations

import logging
import time
from typing import Optional, TYPE_CHECKING

from powerkids.config import GameConfig
from powerkids.renderer.window import Key
from powerkids.types import Camera, Vec, ZERO

if TYPE_CHECKING:
    from powerkids.engine import GameEngine
    from powerkids.renderer.window import Window
    from powerkids.types import TileMap

logger = logging.getLogger(__name__)


def to_rgb255(color: tuple[float, float, float]) -> tuple[int, int, int]:
    """Convert a 0..1 float color to 0..255 ints."""
    r, g, b = (max(0, min(255, round(c * 255))) for c in color)
    return (r, g, b)


class GameLoop:
    """Main game loop: poll input, update the engine, draw the frame."""

    def __init__(
        self,
        engine: GameEngine,
        window: Window,
        tile_map: Optional[TileMap] = None,
        config: Optional[GameConfig] = None,
    ):
        """Initialize the game loop.

        Args:
            engine: The game engine.
            window: The window to draw to and read input from.
            tile_map: Prebuilt map drawn behind the character.
            config: Optional game configuration.
        """
        self.engine = engine
        self.window = window
        self.tile_map = tile_map
        self.config = config or GameConfig()
        self.camera = Camera(smoothing=self.config.camera_smoothing, zoom=self.config.zoom)

        self.target_frame_time = 1.0 / self.config.target_fps

        self._running = False
        self._last_time = 0.0
        self._frame_count = 0
        self._fps = 0.0
        self._fps_update_time = 0.0

    def read_controls(self) -> Vec:
        """Build the control vector from the arrow keys.

        Right overrides Left and Down overrides Up when both are held.
        """
        step = self.config.move_step
        x = 0.0
        y = 0.0
        if self.window.pressed(Key.LEFT):
            x = -step
        if self.window.pressed(Key.RIGHT):
            x = step
        if self.window.pressed(Key.UP):
            y = step
        if self.window.pressed(Key.DOWN):
            y = -step
        return Vec(x, y)

    def tick(self, dt: float) -> None:
        """Process a single game tick.

        Args:
            dt: Delta time in seconds.
        """
        # Ease the camera towards the character
        self.camera.follow(self.engine.character_position, dt)

        frame_dt = dt

        # Slow motion with tab
        if self.window.pressed(Key.TAB):
            dt /= self.config.slow_motion_factor

        # Restart the level on pressing enter
        if self.window.just_pressed(Key.ENTER):
            self.engine.restart()

        self.engine.update(dt, self.read_controls())
        self.render()

        # Track FPS in real time, unaffected by slow motion
        self._frame_count += 1
        self._fps_update_time += frame_dt
        if self._fps_update_time >= 1.0:
            self._fps = self._frame_count / self._fps_update_time
            logger.info("%.1f fps", self._fps)
            self._frame_count = 0
            self._fps_update_time = 0.0

    def render(self) -> None:
        """Draw the map, the goal and the character, then present."""
        window = self.window
        zoom = self.camera.zoom
        window.clear(self.config.background)

        if self.tile_map is not None:
            # The map is centred on the world origin
            window.draw_image(
                self.tile_map.image,
                None,
                self.camera.world_to_screen(ZERO, window.size),
                zoom,
            )

        goal = self.engine.goal
        if goal is not None:
            center = self.camera.world_to_screen(goal.position, window.size)
            for radius, color in goal.rings():
                window.draw_circle(center, radius * zoom, to_rgb255(color))

        window.draw_image(
            self.engine.character_sheet.image,
            self.engine.character_frame,
            self.camera.world_to_screen(self.engine.character_position, window.size),
            zoom,
        )

        window.update()

    def start(self) -> None:
        """Start the game loop."""
        self._running = True
        self._last_time = time.perf_counter()
        logger.info("game loop started")

    def stop(self) -> None:
        """Stop the game loop."""
        self._running = False

    @property
    def is_running(self) -> bool:
        """Check if loop is running.

        Returns:
            True if running.
        """
        return self._running

    @property
    def fps(self) -> float:
        """Get current FPS.

        Returns:
            Current frames per second.
        """
        return self._fps

    def process_frame(self) -> float:
        """Process a single frame with timing.

        Returns:
            Delta time used for this frame.
        """
        current_time = time.perf_counter()
        dt = current_time - self._last_time
        self._last_time = current_time

        # Cap delta time to prevent spiral of death
        if dt > self.config.max_frame_time:
            dt = self.config.max_frame_time

        self.tick(dt)

        return dt

    def run(self) -> None:
        """Run until the window closes or stop() is called."""
        self.start()
        while self._running and not self.window.closed():
            frame_start = time.perf_counter()

            self.process_frame()

            # Sleep to maintain target FPS
            frame_time = time.perf_counter() - frame_start
            sleep_time = self.target_frame_time - frame_time
            if sleep_time > 0:
                time.sleep(sleep_time)
        self._running = False
        logger.info("game loop stopped")
