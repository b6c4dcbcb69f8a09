"""Camera state, projection and the view-projection uniform."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

# Given column by column; maps clip depth from [-1, 1] towards [0, 1].
OPENGL_TO_WGPU_MATRIX = np.array(
    [
        [1.0, 0.0, 0.0, 0.0],
        [0.0, 1.0, 0.0, 0.0],
        [0.0, 0.0, 0.5, 0.5],
        [0.0, 0.0, 0.0, 1.0],
    ]
).T


@dataclass
class Camera:
    """A viewpoint: position with yaw and pitch in radians."""

    position: np.ndarray
    yaw: float = 0.0
    pitch: float = 0.0

    def __post_init__(self) -> None:
        self.position = np.array(self.position, dtype=float)
        self.yaw = float(self.yaw)
        self.pitch = float(self.pitch)


def perspective(fovy: float, aspect: float, znear: float, zfar: float) -> np.ndarray:
    """Right-handed perspective matrix with OpenGL clip depth."""
    if fovy <= 0.0:
        raise ValueError(f"the vertical field of view cannot be below zero, found: {fovy}")
    if fovy >= math.pi:
        raise ValueError(
            f"the vertical field of view cannot be greater than a half turn, found: {fovy}"
        )
    if aspect == 0.0:
        raise ValueError(f"the absolute aspect ratio cannot be zero, found: {aspect}")
    if znear <= 0.0:
        raise ValueError(f"the near plane distance cannot be below zero, found: {znear}")
    if zfar <= 0.0:
        raise ValueError(f"the far plane distance cannot be below zero, found: {zfar}")
    if zfar <= znear:
        raise ValueError(
            f"the far plane cannot be closer than the near plane, found: far: {zfar}, near: {znear}"
        )
    f = 1.0 / math.tan(fovy / 2.0)
    return np.array(
        [
            [f / aspect, 0.0, 0.0, 0.0],
            [0.0, f, 0.0, 0.0],
            [0.0, 0.0, (zfar + znear) / (znear - zfar), 2.0 * zfar * znear / (znear - zfar)],
            [0.0, 0.0, -1.0, 0.0],
        ]
    )


def _normalize(v: np.ndarray) -> np.ndarray:
    return v / np.linalg.norm(v)


def look_to_rh(
    eye: Sequence[float], direction: Sequence[float], up: Sequence[float]
) -> np.ndarray:
    """Right-handed view matrix looking from ``eye`` along ``direction``."""
    eye = np.asarray(eye, dtype=float)
    f = _normalize(np.asarray(direction, dtype=float))
    s = _normalize(np.cross(f, np.asarray(up, dtype=float)))
    u = np.cross(s, f)
    return np.array(
        [
            [s[0], s[1], s[2], -eye.dot(s)],
            [u[0], u[1], u[2], -eye.dot(u)],
            [-f[0], -f[1], -f[2], eye.dot(f)],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


class Projection:
    """Perspective projection parameters for a viewport."""

    def __init__(
        self, width: int, height: int, fovy: float, znear: float, zfar: float
    ) -> None:
        self.aspect = width / height
        self.fovy = fovy
        self.znear = znear
        self.zfar = zfar

    def resize(self, width: int, height: int) -> None:
        """Adapt the aspect ratio to a new viewport size."""
        self.aspect = width / height

    def calc_matrix(self) -> np.ndarray:
        """Projection matrix with clip depth in [0, 1]."""
        return OPENGL_TO_WGPU_MATRIX @ perspective(
            self.fovy, self.aspect, self.znear, self.zfar
        )


@dataclass
class CameraUniform:
    """Data uploaded to the shaders each frame."""

    view_position: np.ndarray = field(default_factory=lambda: np.zeros(4))
    view_proj: np.ndarray = field(default_factory=lambda: np.identity(4))

    @staticmethod
    def camera_matrix(camera: Camera) -> np.ndarray:
        """View matrix for the camera's position, yaw and pitch."""
        sin_pitch, cos_pitch = math.sin(camera.pitch), math.cos(camera.pitch)
        sin_yaw, cos_yaw = math.sin(camera.yaw), math.cos(camera.yaw)
        direction = _normalize(
            np.array([cos_pitch * cos_yaw, sin_pitch, cos_pitch * sin_yaw])
        )
        return look_to_rh(camera.position, direction, (0.0, 1.0, 0.0))

    def update_view_proj(self, camera: Camera, projection: Projection) -> None:
        """Refresh the uniform from the camera and projection."""
        self.view_position = np.append(camera.position, 1.0)
        self.view_proj = projection.calc_matrix() @ self.camera_matrix(camera)

    def to_bytes(self) -> bytes:
        """Pack position then matrix columns as little-endian 32-bit floats."""
        return (
            np.asarray(self.view_position, dtype="<f4").tobytes()
            + np.ascontiguousarray(self.view_proj.T, dtype="<f4").tobytes()
        )