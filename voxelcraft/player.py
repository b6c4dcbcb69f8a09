"""The player body, its movement physics and collision with blocks."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import timedelta
from typing import TYPE_CHECKING, Sequence

import numpy as np

from voxelcraft.camera import Camera

if TYPE_CHECKING:
    from voxelcraft.controller import PlayerController
    from voxelcraft.world import World

Offset = tuple[float, float, float]


@dataclass
class Player:
    """A cylinder-shaped body with a camera at eye height."""

    position: np.ndarray
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    height: float = 2.8
    width: float = 1.4
    camera: Camera = field(init=False)

    def __post_init__(self) -> None:
        self.position = np.array(self.position, dtype=float)
        self.velocity = np.array(self.velocity, dtype=float)
        self.camera = Camera(self.position.copy(), 0.0, 0.0)

    def update(
        self,
        controller: PlayerController,
        dt: float | timedelta,
        world: World,
    ) -> None:
        """Advance the player by one frame of ``dt`` seconds."""
        if isinstance(dt, timedelta):
            dt = dt.total_seconds()
        controller.update_player(self, dt)

        self.velocity[1] -= 0.5 * dt
        self.velocity[0] *= 0.9
        self.velocity[2] *= 0.9
        self.position += self.velocity

        handle_collision(self, world, dt)
        self.camera.position = self.position + np.array([0.0, self.height * 0.8, 0.0])
        controller.update_camera(self.camera, dt)


def _touching(world: World, point: np.ndarray, player: Player, dt: float) -> bool:
    if world.block_exists(point):
        return True
    reach = player.width / 2.0 - float(np.linalg.norm(player.velocity)) - dt
    for voxel in three_by_three():
        neighbour = point + voxel
        if world.block_exists(neighbour):
            closest = closest_point_square(point, neighbour)
            if math.hypot(closest[0] - point[0], closest[2] - point[2]) < reach:
                return True
    return False


def _push_out(
    player: Player, world: World, above: np.ndarray, voxels: list[Offset]
) -> None:
    radius = player.width / 2.0
    correction = np.zeros(3)
    for voxel in voxels:
        neighbour = above + voxel
        if not world.block_exists(neighbour):
            continue
        closest = closest_point_square(player.position, neighbour)
        diff = np.array(
            [closest[0] - player.position[0], 0.0, closest[2] - player.position[2]]
        )
        distance = float(np.linalg.norm(diff))
        if 0.0 < distance < radius:
            correction += diff - diff / distance * radius
    player.position += correction
    player.velocity += correction


def handle_collision(player: Player, world: World, dt: float) -> None:
    """Keep the player out of blocks: land on floors, stop at ceilings, slide on walls."""
    head_position = player.position + np.array([0.0, player.height, 0.0])

    if _touching(world, player.position, player, dt):
        player.position[1] = math.ceil(player.position[1])
        player.velocity[1] = 0.0

    if _touching(world, head_position, player, dt):
        player.position[1] = math.floor(head_position[1]) - player.height
        player.velocity[1] = -1e-20

    for level in range(int(player.height) + 1):
        above = player.position + np.array([0.0, 0.5 + level, 0.0])
        _push_out(player, world, above, orthogonal())
        _push_out(player, world, above, three_by_three())


def closest_point_square(
    circle_pos: Sequence[float], square_pos: Sequence[float]
) -> np.ndarray:
    """The point of the unit cell holding ``square_pos`` nearest ``circle_pos``, in x and z."""
    square_x = math.floor(square_pos[0])
    square_z = math.floor(square_pos[2])
    test_x = min(max(circle_pos[0], square_x), square_x + 1.0)
    test_z = min(max(circle_pos[2], square_z), square_z + 1.0)
    return np.array([float(test_x), 0.0, float(test_z)])


def three_by_three() -> list[Offset]:
    """The eight horizontal neighbours of a cell."""
    return [
        (float(x), 0.0, float(z))
        for x in (-1, 0, 1)
        for z in (-1, 0, 1)
        if (x, z) != (0, 0)
    ]


def orthogonal() -> list[Offset]:
    """The four horizontal neighbours sharing a face with a cell."""
    offsets: list[Offset] = []
    for xz in (-1, 0):
        offsets.append((xz * 2.0 + 1.0, 0.0, 0.0))
        offsets.append((0.0, 0.0, xz * 2.0 + 1.0))
    return offsets


def diagonal() -> list[Offset]:
    """Diagonal offsets, as laid out by the collision code."""
    offsets: list[Offset] = []
    for xz in (-1, 0):
        offsets.append((xz * 2.0 + 1.0, 0.0, xz * 2.0 + 1.0))
        offsets.append((-xz * 2.0 + 1.0, 0.0, xz * 2.0 + 1.0))
    return offsets