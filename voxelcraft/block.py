"""Blocks and the atlas cell shown on each of their faces."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Sequence

from voxelcraft.atlas import Atlas


@dataclass(frozen=True)
class Block:
    """A voxel: its kind and a free state byte."""

    block_id: int
    block_state: int = 0


class _Face(Enum):
    TOP = auto()
    BOTTOM = auto()
    NORTH = auto()
    SOUTH = auto()
    WEST = auto()
    EAST = auto()


_FACES: dict[tuple[int, int, int], _Face] = {
    (-1, 0, 0): _Face.WEST,
    (1, 0, 0): _Face.EAST,
    (0, 0, -1): _Face.NORTH,
    (0, 0, 1): _Face.SOUTH,
    (0, -1, 0): _Face.BOTTOM,
}

_SINGLE_TEXTURE: dict[int, Atlas] = {
    0: Atlas.WATER,
    2: Atlas.DIRT,
    3: Atlas.STONE,
    4: Atlas.SAND,
    5: Atlas.STONE_BRICK,
    6: Atlas.MOSSY_BRICK,
    7: Atlas.IRON_BARS,
    8: Atlas.PLANK,
    9: Atlas.GLASS,
}


def get_texture(block_id: int, normal: Sequence[int]) -> Atlas:
    """Return the atlas cell for the face of a block facing along ``normal``."""
    face = _FACES.get(tuple(int(n) for n in normal), _Face.TOP)
    if block_id == 1:
        if face is _Face.TOP:
            return Atlas.GRASS_TOP
        if face is _Face.BOTTOM:
            return Atlas.DIRT
        return Atlas.GRASS_SIDE
    if block_id == 10:
        if face in (_Face.TOP, _Face.BOTTOM):
            return Atlas.LOG_TOP
        return Atlas.LOG_SIDE
    return _SINGLE_TEXTURE.get(block_id, Atlas.UNKNOWN)