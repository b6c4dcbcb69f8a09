"""Per-chunk placement of a mesh in the world."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from voxelcraft.vertex import (
    StepMode,
    VertexAttribute,
    VertexBufferLayout,
    VertexFormat,
)

Matrix4Columns = tuple[tuple[float, float, float, float], ...]


def _rotation_matrix(rotation: tuple[float, float, float, float]) -> np.ndarray:
    s, x, y, z = rotation
    x2, y2, z2 = x + x, y + y, z + z
    xx2, xy2, xz2 = x2 * x, x2 * y, x2 * z
    yy2, yz2, zz2 = y2 * y, y2 * z, z2 * z
    sx2, sy2, sz2 = x2 * s, y2 * s, z2 * s
    return np.array(
        [
            [1.0 - yy2 - zz2, xy2 - sz2, xz2 + sy2, 0.0],
            [xy2 + sz2, 1.0 - xx2 - zz2, yz2 - sx2, 0.0],
            [xz2 - sy2, yz2 + sx2, 1.0 - xx2 - yy2, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


@dataclass
class Instance:
    """A translation and a rotation quaternion given as (s, x, y, z)."""

    position: tuple[float, float, float]
    rotation: tuple[float, float, float, float] = (1.0, 0.0, 0.0, 0.0)

    def _matrix(self) -> np.ndarray:
        translation = np.identity(4)
        translation[:3, 3] = self.position
        return translation @ _rotation_matrix(self.rotation)

    def to_raw(self) -> Matrix4Columns:
        """Return the model matrix as four columns."""
        return tuple(tuple(float(v) for v in column) for column in self._matrix().T)

    def to_bytes(self) -> bytes:
        """Pack the model matrix column by column as little-endian 32-bit floats."""
        return np.ascontiguousarray(self._matrix().T, dtype="<f4").tobytes()

    @staticmethod
    def layout() -> VertexBufferLayout:
        """Describe the instance buffer: one mat4 split over four vec4 slots."""
        column = VertexFormat.FLOAT32X4
        return VertexBufferLayout(
            array_stride=4 * column.size,
            step_mode=StepMode.INSTANCE,
            attributes=tuple(
                VertexAttribute(index * column.size, 5 + index, column)
                for index in range(4)
            ),
        )