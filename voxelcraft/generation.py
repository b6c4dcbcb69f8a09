"""Terrain noise and chunk generation."""

from __future__ import annotations

import math
import random

import numpy as np

from voxelcraft.block import Block

CHUNK_SIZE = 16

Position = tuple[int, int, int]
Chunk = dict[Position, Block]

_DIAGONAL = 1.0 / math.sqrt(2.0)
_GRADIENTS = np.array(
    [
        (1.0, 0.0),
        (-1.0, 0.0),
        (0.0, 1.0),
        (0.0, -1.0),
        (_DIAGONAL, _DIAGONAL),
        (-_DIAGONAL, _DIAGONAL),
        (_DIAGONAL, -_DIAGONAL),
        (-_DIAGONAL, -_DIAGONAL),
    ]
)


def _fade(t: np.ndarray) -> np.ndarray:
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


class _Perlin:
    """Two-dimensional gradient noise with a seeded permutation table."""

    def __init__(self, seed: int) -> None:
        table = list(range(256))
        random.Random(seed).shuffle(table)
        self._perm = np.array(table, dtype=np.int64)

    def sample(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        x0 = np.floor(x)
        y0 = np.floor(y)
        fx = x - x0
        fy = y - y0
        ix = x0.astype(np.int64)
        iy = y0.astype(np.int64)
        perm = self._perm

        def corner(dx: int, dy: int) -> np.ndarray:
            hashed = perm[(perm[(ix + dx) & 255] + iy + dy) & 255] & 7
            gradient = _GRADIENTS[hashed]
            return gradient[..., 0] * (fx - dx) + gradient[..., 1] * (fy - dy)

        u = _fade(fx)
        v = _fade(fy)
        bottom = corner(0, 0) + u * (corner(1, 0) - corner(0, 0))
        top = corner(0, 1) + u * (corner(1, 1) - corner(0, 1))
        value = bottom + v * (top - bottom)
        return np.clip(value * math.sqrt(2.0), -1.0, 1.0)


class FbmPerlin:
    """Fractal Brownian motion over several octaves of Perlin noise."""

    def __init__(
        self,
        seed: int = 0,
        octaves: int = 6,
        frequency: float = 1.0,
        lacunarity: float = 2.0,
        persistence: float = 0.5,
    ) -> None:
        if octaves < 1:
            raise ValueError(f"at least one octave is needed, found: {octaves}")
        self.seed = seed
        self.octaves = octaves
        self.frequency = frequency
        self.lacunarity = lacunarity
        self.persistence = persistence
        self._sources = [_Perlin(seed + octave) for octave in range(octaves)]
        self._scale = 1.0 / sum(persistence**octave for octave in range(octaves))

    def _sample(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=float) * self.frequency
        y = np.asarray(y, dtype=float) * self.frequency
        result = np.zeros(np.broadcast(x, y).shape)
        attenuation = 1.0
        for source in self._sources:
            result = result + source.sample(x, y) * attenuation
            attenuation *= self.persistence
            x = x * self.lacunarity
            y = y * self.lacunarity
        return result * self._scale

    def get(self, x: float, y: float) -> float:
        """Noise value at a point, roughly within [-1, 1]."""
        return float(self._sample(x, y))


def plane_map(
    noise: FbmPerlin,
    size: int,
    x_bounds: tuple[float, float],
    y_bounds: tuple[float, float],
) -> np.ndarray:
    """Sample noise on a square grid; the result is indexed ``[x, y]``."""
    if size <= 0:
        raise ValueError(f"the map size must be positive, found: {size}")
    x_lower, x_upper = x_bounds
    y_lower, y_upper = y_bounds
    xs = x_lower + np.arange(size) * ((x_upper - x_lower) / size)
    ys = y_lower + np.arange(size) * ((y_upper - y_lower) / size)
    grid_x, grid_y = np.meshgrid(xs, ys, indexing="ij")
    return noise._sample(grid_x, grid_y)


def gen_chunk(chunk_x: int, chunk_y: int, chunk_z: int, noise: FbmPerlin) -> Chunk:
    """Generate the blocks of one chunk from a height map of layered noise."""
    k = 0.125
    k2 = k * 2.0
    detail = plane_map(
        noise,
        CHUNK_SIZE,
        (-k2 + 2.0 * k2 * chunk_x, k2 + 2.0 * k2 * chunk_x),
        (-k2 + 2.0 * k2 * chunk_z, k2 + 2.0 * k2 * chunk_z),
    )
    broad = plane_map(
        noise,
        CHUNK_SIZE,
        (-k + 2.0 * k * chunk_x, k + 2.0 * k * chunk_x),
        (-k + 2.0 * k * chunk_z, k + 2.0 * k * chunk_z),
    )

    voxels: Chunk = {}
    for x in range(CHUNK_SIZE):
        for y in range(CHUNK_SIZE):
            global_y = y + chunk_y * CHUNK_SIZE
            for z in range(CHUNK_SIZE):
                depth = detail[x, z] * 4.0 + broad[x, z] * 8.0 - global_y
                if depth < 0.0 and global_y < 0:
                    block_id = 0
                elif depth < 0.0:
                    continue
                elif depth < 1.0 and global_y < 2:
                    block_id = 4
                elif depth < 1.0:
                    block_id = 1
                elif depth < 2.0:
                    block_id = 2
                else:
                    block_id = 3
                voxels[(x, y, z)] = Block(block_id)
    return voxels