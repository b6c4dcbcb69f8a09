"""Texture atlas cells and their texture coordinates."""

from __future__ import annotations

from collections import deque
from enum import Enum, auto

TexCoord = tuple[float, float]

_CELL = 0.1


class Atlas(Enum):
    """A named cell of the block texture atlas."""

    UNKNOWN = auto()
    GRASS_TOP = auto()
    GRASS_SIDE = auto()
    DIRT = auto()
    STONE = auto()
    SAND = auto()
    STONE_BRICK = auto()
    MOSSY_BRICK = auto()
    IRON_BARS = auto()
    PLANK = auto()
    GLASS = auto()
    LEAVES = auto()
    LOG_SIDE = auto()
    LOG_TOP = auto()
    WATER = auto()


_ORIGINS: dict[Atlas, TexCoord] = {
    Atlas.GRASS_TOP: (0.0, 0.0),
    Atlas.GRASS_SIDE: (0.1, 0.0),
    Atlas.DIRT: (0.2, 0.0),
    Atlas.STONE: (0.3, 0.0),
    Atlas.SAND: (0.4, 0.0),
    Atlas.STONE_BRICK: (0.0, 0.1),
    Atlas.MOSSY_BRICK: (0.1, 0.1),
    Atlas.IRON_BARS: (0.2, 0.1),
    Atlas.PLANK: (0.3, 0.1),
    Atlas.GLASS: (0.4, 0.1),
    Atlas.LEAVES: (0.2, 0.2),
    Atlas.LOG_SIDE: (0.3, 0.2),
    Atlas.LOG_TOP: (0.4, 0.2),
    Atlas.WATER: (0.7, 0.0),
}

_UNKNOWN_ORIGIN: TexCoord = (0.9, 0.9)


def get_texture_coordinates(
    origin: Atlas, rotate: int
) -> tuple[TexCoord, TexCoord, TexCoord, TexCoord]:
    """Return the four texture coordinates of an atlas cell, rotated by quarter turns."""
    x, y = _ORIGINS.get(origin, _UNKNOWN_ORIGIN)
    corners = deque(
        [(x, y), (x + _CELL, y), (x + _CELL, y + _CELL), (x, y + _CELL)]
    )
    corners.rotate(rotate % 4)
    first, second, third, fourth = corners
    return (first, second, fourth, third)