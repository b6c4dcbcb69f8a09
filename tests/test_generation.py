import pytest

from voxelcraft.block import Block
from voxelcraft.generation import CHUNK_SIZE, FbmPerlin, gen_chunk, plane_map


@pytest.fixture(scope="module")
def noise():
    return FbmPerlin(696969)


def test_noise_is_zero_on_lattice_points(noise):
    assert noise.get(0.0, 0.0) == 0.0
    assert noise.get(3.0, -2.0) == 0.0


def test_noise_is_deterministic_per_seed():
    first = FbmPerlin(7)
    second = FbmPerlin(7)
    points = [(0.3, 0.7), (-1.25, 4.5), (10.1, -3.3)]
    assert [first.get(x, y) for x, y in points] == [second.get(x, y) for x, y in points]


def test_noise_differs_between_seeds():
    points = [(0.3 + i * 0.17, 0.7 - i * 0.31) for i in range(20)]
    first = [FbmPerlin(1).get(x, y) for x, y in points]
    second = [FbmPerlin(2).get(x, y) for x, y in points]
    assert first != second


def test_noise_stays_in_range(noise):
    values = [noise.get(i * 0.137, i * -0.291) for i in range(200)]
    assert all(-1.0 <= value <= 1.0 for value in values)
    assert any(value != 0.0 for value in values)


def test_zero_octaves_rejected():
    with pytest.raises(ValueError):
        FbmPerlin(1, octaves=0)


def test_plane_map_matches_point_samples(noise):
    grid = plane_map(noise, 4, (-1.0, 1.0), (2.0, 3.0))
    assert grid.shape == (4, 4)
    for i in range(4):
        for j in range(4):
            x = -1.0 + i * (2.0 / 4)
            y = 2.0 + j * (1.0 / 4)
            assert grid[i, j] == pytest.approx(noise.get(x, y))


def test_plane_map_rejects_empty_size(noise):
    with pytest.raises(ValueError):
        plane_map(noise, 0, (0.0, 1.0), (0.0, 1.0))


def test_chunk_keys_inside_chunk(noise):
    chunk = gen_chunk(0, 0, 0, noise)
    assert chunk
    for x, y, z in chunk:
        assert 0 <= x < CHUNK_SIZE
        assert 0 <= y < CHUNK_SIZE
        assert 0 <= z < CHUNK_SIZE


def test_chunk_ids_known(noise):
    chunk = gen_chunk(1, 0, -1, noise)
    assert {block.block_id for block in chunk.values()} <= {1, 2, 3, 4}
    assert all(block.block_state == 0 for block in chunk.values())


def test_chunk_below_sea_is_full(noise):
    chunk = gen_chunk(0, -1, 0, noise)
    assert len(chunk) == CHUNK_SIZE**3
    assert {block.block_id for block in chunk.values()} <= {0, 2, 3, 4}


def test_high_chunk_is_empty(noise):
    assert gen_chunk(0, 5, 0, noise) == {}


def test_columns_have_no_floating_blocks(noise):
    chunk = gen_chunk(0, 0, 0, noise)
    for (x, y, z) in chunk:
        if y > 0:
            assert (x, y - 1, z) in chunk


def test_generation_is_deterministic(noise):
    assert gen_chunk(2, 0, 1, noise) == gen_chunk(2, 0, 1, FbmPerlin(696969))


def test_blocks_are_block_instances(noise):
    chunk = gen_chunk(0, 0, 0, noise)
    assert all(isinstance(block, Block) for block in chunk.values())
    assert len(chunk) > 0