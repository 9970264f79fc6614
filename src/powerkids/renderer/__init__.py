"""Renderer package for PowerKids."""

from __future__ import annotations

from .window import Key, Window
from .headless import HeadlessWindow

__all__ = [
    "Key",
    "Window",
    "HeadlessWindow",
]
