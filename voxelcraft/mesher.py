"""Turns chunks of blocks into meshes of visible faces."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence

from voxelcraft.atlas import Atlas, get_texture_coordinates
from voxelcraft.block import get_texture
from voxelcraft.generation import CHUNK_SIZE, Chunk, Position
from voxelcraft.instance import Instance
from voxelcraft.vertex import Vertex

Chunks = Mapping[Position, Chunk]

_SEE_THROUGH = frozenset({0, 7, 9})
_OCCLUSION = 0.33


def _add(a: Sequence[int], b: Sequence[int]) -> Position:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def _sub(a: Sequence[int], b: Sequence[int]) -> Position:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _scale(a: Sequence[int], factor: int) -> Position:
    return (a[0] * factor, a[1] * factor, a[2] * factor)


def offset_indices(offset: int, flip: bool) -> tuple[int, ...]:
    """Indices of the two triangles of a quad starting at ``offset``."""
    indices = tuple(offset + i for i in (0, 2, 3, 0, 3, 1))
    return indices[::-1] if flip else indices


def get_corners(
    normal: Sequence[int], position: Sequence[int]
) -> tuple[tuple[float, float, float], ...]:
    """The four corners of the face of the block at ``position`` facing ``normal``."""
    hx, hy, hz = (n * 0.5 for n in normal)
    mx, my, mz = (p + 0.5 + h for p, h in zip(position, (hx, hy, hz)))
    return (
        (mx + hy + hz, my + hz + hx, mz + hx + hy),
        (mx - hy + hz, my - hz + hx, mz - hx + hy),
        (mx + hy - hz, my + hz - hx, mz + hx - hy),
        (mx - hy - hz, my - hz - hx, mz - hx - hy),
    )


def get_face(
    normal: Sequence[int],
    texture: Atlas,
    coordinates: Sequence[int],
    occluders: Sequence[float],
) -> tuple[Vertex, Vertex, Vertex, Vertex]:
    """The four vertices of one block face, with ambient occlusion."""
    rotation = 0
    if normal[0] == -1:
        rotation = 2
    if normal[2] in (-1, 1):
        rotation = 3

    textures = get_texture_coordinates(texture, rotation)
    corners = get_corners(normal, coordinates)
    flip = 1 if sum(normal) < 0 else 0
    normal_dir = (float(normal[0]), float(normal[1]), float(normal[2]))
    o = occluders
    return (
        Vertex(corners[0], textures[0 + flip], normal_dir, o[0] + o[1] + o[2]),
        Vertex(corners[1], textures[1 - flip], normal_dir, o[2] + o[3] + o[4]),
        Vertex(corners[2], textures[2 + flip], normal_dir, o[6] + o[7] + o[0]),
        Vertex(corners[3], textures[3 - flip], normal_dir, o[4] + o[5] + o[6]),
    )


def get_occluders(position: Sequence[int], normal: Sequence[int]) -> tuple[Position, ...]:
    """The eight cells around ``position`` in the plane across ``normal``."""
    h = (normal[1], normal[2], normal[0])
    v = (normal[2], normal[0], normal[1])
    return (
        _add(position, h),
        _add(_add(position, h), v),
        _add(position, v),
        _sub(_add(position, v), h),
        _sub(position, h),
        _sub(_sub(position, h), v),
        _sub(position, v),
        _add(_sub(position, v), h),
    )


def get_normal(face: int) -> Position:
    """Unit normal of face 0 to 5: +x, -x, +y, -y, +z, -z."""
    return (
        int(face == 0) - int(face == 1),
        int(face == 2) - int(face == 3),
        int(face == 4) - int(face == 5),
    )


def outside_chunk(position: Sequence[int]) -> bool:
    """Whether a chunk-relative position falls outside the chunk."""
    return any(c < 0 or c >= CHUNK_SIZE for c in position)


def get_relative_chunk(position: Sequence[int]) -> Position:
    """Which neighbouring chunk a chunk-relative position falls into."""
    x, y, z = (int(c >= CHUNK_SIZE) - int(c < 0) for c in position)
    return (x, y, z)


def check_neighbor_at_edge_of_chunk(
    chunks: Chunks,
    chunk_pos: Sequence[int],
    normal: Sequence[int],
    neighbor: Sequence[int],
    self_id: int,
) -> bool:
    """Whether a position past the chunk edge holds a block that hides ``self_id``."""
    neighbor_chunk = _add(chunk_pos, normal)
    relative_pos = _sub(neighbor, _scale(normal, CHUNK_SIZE))
    return block_opaque(chunks, neighbor_chunk, relative_pos, self_id)


def block_opaque(
    chunks: Chunks,
    chunk_pos: Sequence[int],
    relative_pos: Sequence[int],
    self_id: int,
) -> bool:
    """Whether the block at a position hides the faces of a ``self_id`` block."""
    chunk = chunks.get(tuple(chunk_pos))
    if chunk is None:
        return False
    block = chunk.get(tuple(relative_pos))
    if block is None:
        return False
    if block.block_id in _SEE_THROUGH:
        return block.block_id == self_id
    return True


@dataclass
class Mesh:
    """The visible faces of one chunk and where the chunk sits in the world."""

    vertices: list[Vertex] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)
    instance: Instance = field(default_factory=lambda: Instance((0.0, 0.0, 0.0)))

    @property
    def num_indices(self) -> int:
        return len(self.indices)


def _occlusion(
    chunks: Chunks, chunk_pos: Position, pos: Position, self_id: int
) -> float:
    if outside_chunk(pos):
        hidden = check_neighbor_at_edge_of_chunk(
            chunks, chunk_pos, get_relative_chunk(pos), pos, self_id
        )
    else:
        hidden = block_opaque(chunks, chunk_pos, pos, self_id)
    return 0.0 if hidden else _OCCLUSION


def get_mesh(chunks: Chunks, chunk_pos: Sequence[int]) -> Mesh:
    """Build the mesh of the chunk at ``chunk_pos``; raises KeyError if it is absent."""
    chunk_pos = tuple(chunk_pos)
    voxels = chunks[chunk_pos]
    mesh = Mesh(
        instance=Instance(tuple(float(c * CHUNK_SIZE) for c in chunk_pos)),
    )
    offset = 0
    for block_pos, block in voxels.items():
        for face in range(6):
            normal = get_normal(face)
            neighbor = _add(block_pos, normal)
            if outside_chunk(neighbor):
                if block_opaque(
                    chunks,
                    _add(chunk_pos, normal),
                    _sub(neighbor, _scale(normal, CHUNK_SIZE)),
                    block.block_id,
                ):
                    continue
            elif block_opaque(chunks, chunk_pos, neighbor, block.block_id):
                continue

            occluders = [
                _occlusion(chunks, chunk_pos, pos, block.block_id)
                for pos in get_occluders(neighbor, normal)
            ]
            texture = get_texture(block.block_id, normal)
            mesh.vertices.extend(get_face(normal, texture, block_pos, occluders))
            mesh.indices.extend(offset_indices(offset, sum(normal) < 0))
            offset += 4
    return mesh