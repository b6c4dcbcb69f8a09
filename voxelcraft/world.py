"""The voxel world: chunks of blocks, their meshes and edit tracking."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from itertools import product
from typing import Sequence

from voxelcraft.block import Block
from voxelcraft.generation import CHUNK_SIZE, Chunk, FbmPerlin, Position, gen_chunk
from voxelcraft.mesher import Mesh, get_mesh

DEFAULT_SEED = 696969

_log = logging.getLogger(__name__)

_ORIGIN: Position = (0, 0, 0)


def _edge_offset(coordinate: int) -> int:
    if coordinate == CHUNK_SIZE - 1:
        return 1
    if coordinate == 0:
        return -1
    return 0


@dataclass
class World:
    """Chunks of blocks keyed by chunk position, with their meshes."""

    chunks: dict[Position, Chunk] = field(default_factory=dict)
    meshes: dict[Position, Mesh] = field(default_factory=dict)
    dirty: list[Position] = field(default_factory=list)

    @classmethod
    def generate(cls, world_size: int, seed: int = DEFAULT_SEED) -> World:
        """Generate terrain and meshes for a square of chunks three chunks deep."""
        noise = FbmPerlin(seed)
        chunks: dict[Position, Chunk] = {_ORIGIN: {}}
        todo = world_size * (world_size + 1) * 6 - world_size * 2
        span = range(-world_size, world_size + 1)
        positions = [(x, y, z) for x in span for y in (-1, 0, 1) for z in span]

        def progress(x: int, y: int, z: int) -> int:
            return (
                (z + world_size)
                + (y + 1) * world_size
                + (x + world_size) * world_size * 3
            )

        for x, y, z in positions:
            chunks[(x, y, z)] = gen_chunk(x, y, z, noise)
            _log.info("Generating terrain: %d/%d", progress(x, y, z), todo)

        meshes: dict[Position, Mesh] = {}
        for x, y, z in positions:
            meshes[(x, y, z)] = get_mesh(chunks, (x, y, z))
            _log.info("Generating mesh: %d/%d", progress(x, y, z), todo)

        return cls(chunks=chunks, meshes=meshes)

    def get_chunk(self, x: int, y: int, z: int) -> Chunk:
        """The chunk at a chunk position, or the origin chunk if there is none."""
        key = (x, y, z)
        if key in self.chunks:
            return self.chunks[key]
        return self.chunks[_ORIGIN]

    def block_exists(self, position: Sequence[float]) -> bool:
        """Whether a block occupies the cell containing a world position."""
        chunk_pos, block_pos = self.chunk_block_from_global(position)
        chunk = self.chunks.get(chunk_pos)
        return chunk is not None and block_pos in chunk

    def _update_dirty(self, chunk_pos: Position, block_pos: Position) -> None:
        self.dirty.append(chunk_pos)
        dx, dy, dz = (_edge_offset(c) for c in block_pos)
        cx, cy, cz = chunk_pos
        if dx:
            self.dirty.append((cx + dx, cy, cz))
        if dy:
            self.dirty.append((cx, cy + dy, cz))
        if dz:
            self.dirty.append((cx, cy, cz + dz))
        if dx and dy:
            self.dirty.append((cx + dx, cy + dy, cz))
        if dx and dz:
            self.dirty.append((cx + dx, cy, cz + dz))
        if dz and dy:
            self.dirty.append((cx, cy + dy, cz + dz))
        if dx and dy and dz:
            self.dirty.append((cx + dx, cy + dy, cz + dz))

    def add_block(self, position: Sequence[float], block_id: int) -> None:
        """Place a block in an empty cell; raises KeyError if its chunk is absent."""
        chunk_pos, block_pos = self.chunk_block_from_global(position)
        if not self.block_exists(position):
            self.chunks[chunk_pos][block_pos] = Block(block_id)
            self._update_dirty(chunk_pos, block_pos)

    def remove_block(self, position: Sequence[float]) -> None:
        """Remove the block in a cell, if there is one."""
        chunk_pos, block_pos = self.chunk_block_from_global(position)
        if self.block_exists(position):
            del self.chunks[chunk_pos][block_pos]
            self._update_dirty(chunk_pos, block_pos)

    @staticmethod
    def chunk_block_from_global(position: Sequence[float]) -> tuple[Position, Position]:
        """Split a world position into a chunk position and a position inside it."""
        size = float(CHUNK_SIZE)
        x, y, z = (float(c) for c in position)
        chunk_pos = (
            math.floor(x / size),
            math.floor(y / size),
            math.floor(z / size),
        )
        block_pos = (
            int(((x % size) + size) % size),
            int(((y % size) + size) % size),
            int(((z % size) + size) % size),
        )
        return chunk_pos, block_pos


__all__ = ["DEFAULT_SEED", "World", "product"]