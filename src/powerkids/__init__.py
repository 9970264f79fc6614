"""PowerKids: a tile map and sprite animation demo."""

__version__ = "0.1.0"
