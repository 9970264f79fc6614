"""Desktop window backed by pygame."""

from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

import pygame

from .window import Key, RGB, Window

if TYPE_CHECKING:
    from PIL import Image

    from powerkids.types import Frame

logger = logging.getLogger(__name__)

KEY_CODES: dict[Key, int] = {
    Key.LEFT: pygame.K_LEFT,
    Key.RIGHT: pygame.K_RIGHT,
    Key.UP: pygame.K_UP,
    Key.DOWN: pygame.K_DOWN,
    Key.TAB: pygame.K_TAB,
    Key.ENTER: pygame.K_RETURN,
    Key.ESCAPE: pygame.K_ESCAPE,
}


class PygameWindow(Window):
    """A pygame display window.

    Pillow images handed to draw_image are converted to pygame surfaces
    once and kept for the lifetime of the window.
    """

    def __init__(self, title: str, width: int, height: int):
        """Open the window.

        Args:
            title: Window caption.
            width: Width in pixels.
            height: Height in pixels.
        """
        pygame.init()
        self.size = (width, height)
        self._screen = pygame.display.set_mode(self.size)
        pygame.display.set_caption(title)

        self._closed = False
        self._just_pressed: set[int] = set()
        self._held = pygame.key.get_pressed()
        # id(image) -> (image, surface); the image is kept so its id stays unique
        self._surfaces: dict[int, tuple[Image.Image, pygame.Surface]] = {}
        self._scaled: dict[tuple[int, Optional[Frame], float], pygame.Surface] = {}

        logger.info("opened %dx%d window %r", width, height, title)
        self._poll()

    def _poll(self) -> None:
        self._just_pressed.clear()
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._closed = True
            elif event.type == pygame.KEYDOWN:
                self._just_pressed.add(event.key)
                if event.key == pygame.K_ESCAPE:
                    self._closed = True
        self._held = pygame.key.get_pressed()

    def _surface(self, image: Image.Image) -> pygame.Surface:
        entry = self._surfaces.get(id(image))
        if entry is None:
            rgba = image.convert("RGBA")
            surface = pygame.image.frombytes(rgba.tobytes(), rgba.size, "RGBA").convert_alpha()
            entry = self._surfaces[id(image)] = (image, surface)
        return entry[1]

    def closed(self) -> bool:
        return self._closed

    def pressed(self, key: Key) -> bool:
        return bool(self._held[KEY_CODES[key]])

    def just_pressed(self, key: Key) -> bool:
        return KEY_CODES[key] in self._just_pressed

    def clear(self, color: RGB) -> None:
        self._screen.fill(color)

    def draw_image(
        self,
        image: Image.Image,
        source: Optional[Frame],
        center: tuple[float, float],
        scale: float = 1.0,
    ) -> None:
        cache_key = (id(image), source, scale)
        surface = self._scaled.get(cache_key)
        if surface is None:
            surface = self._surface(image)
            if source is not None:
                surface = surface.subsurface(
                    pygame.Rect(source.x, source.y, source.width, source.height)
                )
            if scale != 1.0:
                w, h = surface.get_size()
                surface = pygame.transform.scale(
                    surface, (max(1, round(w * scale)), max(1, round(h * scale)))
                )
            self._scaled[cache_key] = surface
        self._screen.blit(surface, surface.get_rect(center=(round(center[0]), round(center[1]))))

    def draw_circle(
        self,
        center: tuple[float, float],
        radius: float,
        color: RGB,
    ) -> None:
        pygame.draw.circle(self._screen, color, center, radius)

    def update(self) -> None:
        pygame.display.flip()
        self._poll()

    def close(self) -> None:
        self._closed = True
        pygame.quit()
        logger.info("window closed")
