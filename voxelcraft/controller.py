"""Turns keyboard and mouse input into player movement and block edits."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from voxelcraft.camera import Camera
    from voxelcraft.player import Player
    from voxelcraft.world import World

SAFE_FRAC_PI_2 = math.pi / 2.0 - 0.0001
REACH = 16.0
_STEP_NUDGE = 0.001


class Key(Enum):
    """Keys the controller can be told about."""

    W = "w"
    A = "a"
    S = "s"
    D = "d"
    ARROW_UP = "arrow_up"
    ARROW_DOWN = "arrow_down"
    ARROW_LEFT = "arrow_left"
    ARROW_RIGHT = "arrow_right"
    SPACE = "space"
    SHIFT_LEFT = "shift_left"
    ESCAPE = "escape"
    DIGIT0 = "0"
    DIGIT1 = "1"
    DIGIT2 = "2"
    DIGIT3 = "3"
    DIGIT4 = "4"
    DIGIT5 = "5"
    DIGIT6 = "6"
    DIGIT7 = "7"
    DIGIT8 = "8"
    DIGIT9 = "9"


@dataclass(frozen=True)
class LineDelta:
    """Scrolling measured in lines."""

    x: float
    y: float


@dataclass(frozen=True)
class PixelDelta:
    """Scrolling measured in pixels."""

    x: float
    y: float


_MOVEMENT = {
    Key.W: "amount_forward",
    Key.ARROW_UP: "amount_forward",
    Key.S: "amount_backward",
    Key.ARROW_DOWN: "amount_backward",
    Key.A: "amount_left",
    Key.ARROW_LEFT: "amount_left",
    Key.D: "amount_right",
    Key.ARROW_RIGHT: "amount_right",
    Key.SPACE: "amount_up",
    Key.SHIFT_LEFT: "amount_down",
}

_PICKS = {
    Key.DIGIT1: 1,
    Key.DIGIT2: 2,
    Key.DIGIT3: 3,
    Key.DIGIT4: 4,
    Key.DIGIT5: 5,
    Key.DIGIT6: 6,
    Key.DIGIT7: 7,
    Key.DIGIT8: 8,
    Key.DIGIT9: 9,
    Key.DIGIT0: 10,
}


def _modulo(a: float, b: float) -> float:
    return ((a % b) + b) % b


def _distance_to_boundary(position: float, direction: float) -> float:
    if direction == 0.0:
        return math.inf
    target = 1.0 if direction > 0.0 else 0.0
    return (target - _modulo(position, 1.0)) / direction


class PlayerController:
    """Input state accumulated between frames."""

    def __init__(self, speed: float, sensitivity: float) -> None:
        self.amount_left = 0.0
        self.amount_right = 0.0
        self.amount_forward = 0.0
        self.amount_backward = 0.0
        self.amount_up = 0.0
        self.amount_down = 0.0
        self.rotate_horizontal = 0.0
        self.rotate_vertical = 0.0
        self.scroll = 0.0
        self.speed = speed
        self.sensitivity = sensitivity
        self.picked_block = 1

    def process_keyboard(self, key: Key, pressed: bool) -> bool:
        """Record a key press or release; return whether the key is handled."""
        if key in _MOVEMENT:
            setattr(self, _MOVEMENT[key], 1.0 if pressed else 0.0)
            return True
        if key in _PICKS:
            self.picked_block = _PICKS[key]
            return True
        return False

    def process_mouse(self, mouse_dx: float, mouse_dy: float) -> None:
        """Record mouse motion for the next camera update."""
        self.rotate_horizontal = float(mouse_dx)
        self.rotate_vertical = float(mouse_dy)

    def process_scroll(self, delta: LineDelta | PixelDelta) -> None:
        """Record scrolling; a line counts as a hundred pixels."""
        if isinstance(delta, LineDelta):
            self.scroll = -(delta.y * 100.0)
        elif isinstance(delta, PixelDelta):
            self.scroll = -float(delta.y)
        else:
            raise TypeError(f"unsupported scroll delta: {delta!r}")

    def process_click(self, player: Player, world: World, place: bool) -> None:
        """Break the block in view, or place the picked block before it."""
        camera = player.camera
        current = np.array(camera.position, dtype=float)
        xz_len = math.cos(camera.pitch)
        direction = np.array(
            [
                xz_len * math.cos(camera.yaw),
                math.sin(camera.pitch),
                xz_len * math.sin(camera.yaw),
            ]
        )

        travelled = 0.0
        while True:
            step = (
                min(
                    _distance_to_boundary(c, d)
                    for c, d in zip(current, direction)
                )
                + _STEP_NUDGE
            )
            travelled += step
            if travelled > REACH:
                break
            if place and world.block_exists(current + direction * step):
                world.add_block(current, self.picked_block)
                break
            current = current + direction * step
            if not place and world.block_exists(current):
                world.remove_block(current)
                break

    def update_camera(self, camera: Camera, dt: float) -> None:
        """Turn the camera by the recorded mouse motion, keeping pitch in range."""
        camera.yaw += self.rotate_horizontal * self.sensitivity * dt
        camera.pitch += -self.rotate_vertical * self.sensitivity * dt
        self.rotate_horizontal = 0.0
        self.rotate_vertical = 0.0
        camera.pitch = min(max(camera.pitch, -SAFE_FRAC_PI_2), SAFE_FRAC_PI_2)

    def update_player(self, player: Player, dt: float) -> None:
        """Accelerate the player from the keys held and apply scrolling."""
        yaw = player.camera.yaw
        yaw_sin, yaw_cos = math.sin(yaw), math.cos(yaw)
        forward = np.array([yaw_cos, 0.0, yaw_sin])
        forward /= np.linalg.norm(forward)
        right = np.array([-yaw_sin, 0.0, yaw_cos])
        right /= np.linalg.norm(right)
        player.velocity += (
            forward * (self.amount_forward - self.amount_backward) * self.speed * dt
        )
        player.velocity += right * (self.amount_right - self.amount_left) * self.speed * dt

        pitch = player.camera.pitch
        pitch_sin, pitch_cos = math.sin(pitch), math.cos(pitch)
        scrollward = np.array([pitch_cos * yaw_cos, pitch_sin, pitch_cos * yaw_sin])
        scrollward /= np.linalg.norm(scrollward)
        player.position += scrollward * self.scroll * self.speed * self.sensitivity * dt
        self.scroll = 0.0

        if player.velocity[1] == 0.0 and self.amount_up != 0.0:
            player.velocity[1] = 0.2