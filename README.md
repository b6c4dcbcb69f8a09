# voxelcraft

The simulation core of a block-building voxel game. It has terrain generation, chunk meshing, player physics, input handling and camera math. It has no window and no GPU attached.

## Modules

- `voxelcraft.generation`
  - `FbmPerlin` is seeded fractal Perlin noise. `FbmPerlin.get(x, y)` samples it at one point.
  - `plane_map` samples the noise on a square grid.
  - `gen_chunk` fills a 16×16×16 chunk (`CHUNK_SIZE`) from two layered height maps. It uses water (id 0), grass (1), dirt (2), stone (3) and sand (4).
  - A chunk is a dict that maps `(x, y, z)` block positions to `Block` values.
- `voxelcraft.world`
  - `World` holds `chunks` and `meshes` keyed by chunk position, and a `dirty` list.
  - `World.generate(world_size, seed)` generates chunks from `-world_size` to `world_size` in x and z, and from -1 to 1 in y. It then builds a mesh for each chunk. Progress is reported through `logging`.
  - `World.chunk_block_from_global` splits a world position into a chunk position and a block position.
  - `World.block_exists`, `World.add_block` and `World.remove_block` query and edit the world. An edit appends the chunk and every neighbouring chunk whose edge it touches to `dirty`. `dirty` is not deduplicated.
  - `add_block` raises `KeyError` when the target chunk does not exist.
  - `World.get_chunk` returns the chunk at a position, or the origin chunk if there is none.
- `voxelcraft.mesher`
  - `get_mesh(chunks, chunk_pos)` builds a `Mesh` with `vertices`, `indices`, `num_indices`, and an `Instance` that places the chunk in the world.
  - Faces hidden by a neighbouring block are culled, across chunk edges as well.
  - Water, iron bars and glass (ids 0, 7, 9) hide only faces of blocks with the same id.
  - Each vertex carries an ambient-occlusion value.
  - The helpers are public: `get_normal`, `get_corners`, `get_face`, `get_occluders`, `offset_indices`, `outside_chunk`, `get_relative_chunk`, `block_opaque` and `check_neighbor_at_edge_of_chunk`.
- `voxelcraft.block` and `voxelcraft.atlas`
  - `Block` is a block id with a state byte.
  - `get_texture(block_id, normal)` picks the `Atlas` cell for a face. Grass and logs have different top, bottom and side faces.
  - `get_texture_coordinates(origin, rotate)` returns the four texture coordinates of a cell, rotated by quarter turns.
- `voxelcraft.vertex` and `voxelcraft.instance`
  - `Vertex.to_bytes()` and `Instance.to_bytes()` pack data as little-endian 32-bit floats.
  - `Vertex.layout()` and `Instance.layout()` describe the matching vertex-buffer layouts.
  - `Instance.to_raw()` returns the model matrix as four columns.
- `voxelcraft.player`
  - `Player` is a body 2.8 high and 1.4 wide, with a `Camera` placed at 80% of its height.
  - `Player.update(controller, dt, world)` applies controller input, gravity and horizontal friction. It then resolves collisions with `handle_collision`. `dt` is in seconds and may be a float or a `datetime.timedelta`.
- `voxelcraft.controller`
  - `PlayerController(speed, sensitivity)` takes input through `process_keyboard(Key, pressed)`, `process_mouse(dx, dy)` and `process_scroll(LineDelta | PixelDelta)`.
  - WASD or the arrow keys move the player. Space jumps when the player has no vertical velocity. Digits 1–9 pick blocks 1–9, and 0 picks block 10.
  - `process_click(player, world, place)` steps a ray up to 16 units from the camera. It breaks the first block it meets, or places the picked block just before it.
- `voxelcraft.camera`
  - `Camera` is a position with yaw and pitch in radians.
  - `perspective` and `look_to_rh` build matrices. `perspective` raises `ValueError` for invalid parameters.
  - `Projection.calc_matrix()` gives a projection with clip depth in [0, 1].
  - `CameraUniform.update_view_proj(camera, projection)` computes `projection @ view`. `CameraUniform.to_bytes()` packs the result for upload.

## Installation

```
pip install .
```

To also install the test dependencies:

```
pip install ".[test]"
```

## Example

```python
from voxelcraft.world import World
from voxelcraft.player import Player
from voxelcraft.controller import PlayerController, Key
from voxelcraft.camera import Projection, CameraUniform

world = World.generate(1, 696969)
player = Player((0.0, 20.0, 0.0))
controller = PlayerController(2.0, 0.4)
projection = Projection(800, 600, 0.785, 0.1, 100.0)
uniform = CameraUniform()

controller.process_keyboard(Key.W, True)
for _ in range(60):
    player.update(controller, 1 / 60, world)
    uniform.update_view_proj(player.camera, projection)

controller.process_click(player, world, False)   # break the block in view
print(world.dirty)                               # chunks whose meshes need rebuilding
```

## What it does not do

The package has no renderer, window, event loop or command to start a game.

- It does not load textures or shaders, and it does not create GPU buffers. Meshes and uniforms are handed over as Python values and packed bytes, for a renderer to upload.
- It does not rebuild meshes for the chunks listed in `World.dirty`. Call `get_mesh` for them yourself.
- Worlds are not saved to or loaded from disk.

## Running the tests

```
pytest
```