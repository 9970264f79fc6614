"""Headless window for testing."""

from __future__ import annotations

from typing import Iterable, Optional, TYPE_CHECKING

from .window import Key, RGB, Window

if TYPE_CHECKING:
    from PIL import Image

    from powerkids.types import Frame


class HeadlessWindow(Window):
    """A window that draws nothing and replays scripted input.

    Each entry of ``script`` is the set of keys held during one frame.
    Keys count as just pressed on the first frame they are held. The
    window reports closed once the script runs out, or after
    ``max_frames`` frames when no script is given.

    Used for testing and demo environments.
    """

    def __init__(
        self,
        width: int = 1024,
        height: int = 768,
        script: Optional[Iterable[Iterable[Key]]] = None,
        max_frames: Optional[int] = None,
    ):
        """Initialize the headless window.

        Args:
            width: Screen width in pixels.
            height: Screen height in pixels.
            script: Held keys per frame.
            max_frames: Frames to run when there is no script.
        """
        self.size = (width, height)
        self._script = [frozenset(keys) for keys in script] if script is not None else None
        self._max_frames = max_frames
        self.frame_index = 0
        self.frames_presented = 0
        self.draw_calls: list[dict] = []
        self.last_frame: list[dict] = []
        self._closed = False

    def _held(self, index: int) -> frozenset:
        if self._script is None or not 0 <= index < len(self._script):
            return frozenset()
        return self._script[index]

    def closed(self) -> bool:
        if self._closed:
            return True
        if self._script is not None:
            return self.frame_index >= len(self._script)
        if self._max_frames is not None:
            return self.frame_index >= self._max_frames
        return False

    def pressed(self, key: Key) -> bool:
        return key in self._held(self.frame_index)

    def just_pressed(self, key: Key) -> bool:
        return self.pressed(key) and key not in self._held(self.frame_index - 1)

    def clear(self, color: RGB) -> None:
        self.draw_calls = [{"op": "clear", "color": color}]

    def draw_image(
        self,
        image: Image.Image,
        source: Optional[Frame],
        center: tuple[float, float],
        scale: float = 1.0,
    ) -> None:
        self.draw_calls.append(
            {
                "op": "image",
                "image": image,
                "source": source,
                "center": center,
                "scale": scale,
            }
        )

    def draw_circle(
        self,
        center: tuple[float, float],
        radius: float,
        color: RGB,
    ) -> None:
        self.draw_calls.append(
            {"op": "circle", "center": center, "radius": radius, "color": color}
        )

    def update(self) -> None:
        self.last_frame = self.draw_calls
        self.draw_calls = []
        self.frames_presented += 1
        self.frame_index += 1
        if self.pressed(Key.ESCAPE):
            self._closed = True

    def close(self) -> None:
        self._closed = True
