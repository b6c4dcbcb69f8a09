"""Mesh vertices and the GPU buffer layouts that describe them."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import Enum

_FLOAT = 4


class VertexFormat(Enum):
    """Element format of one vertex attribute."""

    FLOAT32 = ("float32", 1)
    FLOAT32X2 = ("float32x2", 2)
    FLOAT32X3 = ("float32x3", 3)
    FLOAT32X4 = ("float32x4", 4)

    @property
    def size(self) -> int:
        """Size of the attribute in bytes."""
        return self.value[1] * _FLOAT


class StepMode(Enum):
    """How often the buffer advances: per vertex or per instance."""

    VERTEX = "vertex"
    INSTANCE = "instance"


@dataclass(frozen=True)
class VertexAttribute:
    offset: int
    shader_location: int
    format: VertexFormat


@dataclass(frozen=True)
class VertexBufferLayout:
    array_stride: int
    step_mode: StepMode
    attributes: tuple[VertexAttribute, ...]


_VERTEX_STRUCT = struct.Struct("<9f")


@dataclass(frozen=True)
class Vertex:
    """One corner of a block face."""

    position: tuple[float, float, float]
    tex_coords: tuple[float, float]
    normal: tuple[float, float, float]
    ao: float

    def to_bytes(self) -> bytes:
        """Pack the vertex as little-endian 32-bit floats."""
        return _VERTEX_STRUCT.pack(
            *self.position, *self.tex_coords, *self.normal, self.ao
        )

    @staticmethod
    def layout() -> VertexBufferLayout:
        """Describe how vertices are laid out in a vertex buffer."""
        return VertexBufferLayout(
            array_stride=_VERTEX_STRUCT.size,
            step_mode=StepMode.VERTEX,
            attributes=(
                VertexAttribute(0, 0, VertexFormat.FLOAT32X3),
                VertexAttribute(3 * _FLOAT, 1, VertexFormat.FLOAT32X2),
                VertexAttribute(5 * _FLOAT, 2, VertexFormat.FLOAT32X3),
                VertexAttribute(8 * _FLOAT, 3, VertexFormat.FLOAT32),
            ),
        )