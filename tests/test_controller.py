import numpy as np
import pytest

from voxelcraft.block import Block
from voxelcraft.camera import Camera
from voxelcraft.controller import (
    SAFE_FRAC_PI_2,
    Key,
    LineDelta,
    PixelDelta,
    PlayerController,
)
from voxelcraft.player import Player
from voxelcraft.world import World


def _player_at(x, y, z):
    player = Player([x, y, z])
    player.camera.position = np.array([x, y, z])
    return player


def test_movement_key_press_and_release():
    controller = PlayerController(1.0, 1.0)
    assert controller.process_keyboard(Key.W, True) is True
    assert controller.amount_forward == 1.0
    assert controller.process_keyboard(Key.ARROW_UP, False) is True
    assert controller.amount_forward == 0.0


def test_unhandled_key():
    controller = PlayerController(1.0, 1.0)
    assert controller.process_keyboard(Key.ESCAPE, True) is False
    assert controller.picked_block == 1


@pytest.mark.parametrize(
    "key, block_id",
    [(Key.DIGIT1, 1), (Key.DIGIT5, 5), (Key.DIGIT9, 9), (Key.DIGIT0, 10)],
)
def test_digit_picks_block(key, block_id):
    controller = PlayerController(1.0, 1.0)
    assert controller.process_keyboard(key, True)
    assert controller.picked_block == block_id


def test_scroll_deltas():
    controller = PlayerController(1.0, 1.0)
    controller.process_scroll(LineDelta(0.0, 2.0))
    assert controller.scroll == -200.0
    controller.process_scroll(PixelDelta(0.0, 30.0))
    assert controller.scroll == -30.0
    with pytest.raises(TypeError):
        controller.process_scroll((0.0, 1.0))


def test_update_camera_turns_and_resets():
    controller = PlayerController(1.0, 0.5)
    camera = Camera(np.zeros(3))
    controller.process_mouse(10.0, 0.0)
    controller.update_camera(camera, 0.1)
    assert camera.yaw == pytest.approx(0.5)
    controller.update_camera(camera, 0.1)
    assert camera.yaw == pytest.approx(0.5)


@pytest.mark.parametrize("dy, expected", [(-1e6, SAFE_FRAC_PI_2), (1e6, -SAFE_FRAC_PI_2)])
def test_update_camera_clamps_pitch(dy, expected):
    controller = PlayerController(1.0, 1.0)
    camera = Camera(np.zeros(3))
    controller.process_mouse(0.0, dy)
    controller.update_camera(camera, 1.0)
    assert camera.pitch == expected


def test_update_player_moves_forward():
    controller = PlayerController(2.0, 1.0)
    player = _player_at(0.0, 0.0, 0.0)
    controller.process_keyboard(Key.W, True)
    controller.update_player(player, 0.5)
    assert player.velocity.tolist() == pytest.approx([1.0, 0.0, 0.0])
    assert player.position.tolist() == [0.0, 0.0, 0.0]


def test_jump_only_when_resting():
    controller = PlayerController(1.0, 1.0)
    controller.process_keyboard(Key.SPACE, True)
    resting = _player_at(0.0, 0.0, 0.0)
    controller.update_player(resting, 0.1)
    assert resting.velocity[1] == 0.2
    falling = _player_at(0.0, 0.0, 0.0)
    falling.velocity[1] = -0.1
    controller.update_player(falling, 0.1)
    assert falling.velocity[1] == -0.1


def test_scroll_moves_once_along_view():
    controller = PlayerController(1.0, 0.01)
    player = _player_at(0.0, 0.0, 0.0)
    controller.process_scroll(LineDelta(0.0, -1.0))
    controller.update_player(player, 0.1)
    moved = player.position.copy()
    assert moved[0] > 0.0
    assert moved[1] == pytest.approx(0.0)
    assert moved[2] == pytest.approx(0.0)
    controller.update_player(player, 0.1)
    assert player.position.tolist() == moved.tolist()


def test_click_breaks_block_in_view():
    world = World(chunks={(0, 0, 0): {(5, 5, 5): Block(3)}})
    player = _player_at(2.5, 5.5, 5.5)
    PlayerController(1.0, 1.0).process_click(player, world, place=False)
    assert not world.block_exists((5.5, 5.5, 5.5))
    assert world.dirty == [(0, 0, 0)]


def test_click_places_picked_block_in_front():
    world = World(chunks={(0, 0, 0): {(5, 5, 5): Block(3)}})
    player = _player_at(2.5, 5.5, 5.5)
    controller = PlayerController(1.0, 1.0)
    controller.process_keyboard(Key.DIGIT7, True)
    controller.process_click(player, world, place=True)
    assert world.chunks[(0, 0, 0)][(4, 5, 5)] == Block(7)
    assert world.chunks[(0, 0, 0)][(5, 5, 5)] == Block(3)


def test_click_out_of_reach_changes_nothing():
    far = {(14, 5, 5): Block(3)}
    world = World(chunks={(0, 0, 0): {}, (1, 0, 0): far})
    player = _player_at(2.5, 5.5, 5.5)
    controller = PlayerController(1.0, 1.0)
    controller.process_click(player, world, place=False)
    controller.process_click(player, world, place=True)
    assert world.block_exists((30.5, 5.5, 5.5))
    assert world.chunks[(0, 0, 0)] == {}
    assert world.dirty == []