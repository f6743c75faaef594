# swanengine

Simulation building blocks for a 2D, tile-based sandbox game, written as a plain Python library with no renderer attached.

The world is divided into chunks of 64×64 tiles (`swanengine.constants.CHUNK_WIDTH` and `CHUNK_HEIGHT`). Tiles are 32 pixels wide (`TILE_SIZE`).

## Modules

- `swanengine.vector`: `Vector2` is an immutable 2D vector. It supports `+`, `-`, `*` and `/` (integer division truncates toward zero), and provides `length`, `square_length`, `norm`, `dot`, `sign`, `add`, `scale`, `as_int` and `as_float`. `Vector2.ZERO` is the zero vector.
- `swanengine.coords`: `tile_pos_to_chunk_pos` and `tile_pos_to_chunk_rel_pos` convert a world tile position into its chunk position and its position inside that chunk. Both use floor division, so negative positions fall into the correct chunk.
- `swanengine.matrix`: `Matrix3` is a row-major 3×3 affine transform. It has `at`, `set_at`, `set`, `reset`, `copy`, `translate`, `scale` and `rotate`. The mutating methods return the matrix, so calls can be chained.
- `swanengine.cache`: `LruCache` hands out slot indices. `next()` returns a free slot if one exists and otherwise recycles the least recently used slot. `bump(idx)` marks a slot as most recently used. Slot values are read and written with `cache[idx]`.
- `swanengine.arrayvector`: `ArrayVector` is a list with a fixed capacity. Growing past the capacity raises `OverflowError`. `at` is bounds-checked and raises `IndexError`.
- `swanengine.timing`: `Clock` accumulates time through `tick(dt)`. `periodic(secs)` returns `True` and restarts the clock once `secs` have elapsed. `Animation` steps through `frame_count` frames at a fixed `interval`. After the last frame it jumps back to `repeat_from` and sets `done`.
- `swanengine.drawutil`: `Color` holds four channels. `linear_gradient(val, stops)` interpolates between `(position, Color)` stops and clamps every channel to the range 0–255.
- `swanengine.automata`: `Automata` is a cellular automaton for flowing water. Each tile is split into 2×2 cells. A cell is one of the `Cell` values `AIR`, `SOLID`, `WATER`, `WATER_L` or `WATER_R`. Use `set_tile`, `fill` and `clear` to change tiles, `tick` to advance one step, and `cell_at` to inspect cells. Randomness comes from an optional `random.Random` passed to the constructor.
- `swanengine.inventory`: `Item`, `ItemStack` and `BasicInventory`.
  - `ItemStack.insert` merges stacks up to the item's `max_stack` and returns what did not fit. `remove` splits off items.
  - `BasicInventory.insert` first tops up stacks of the same item and then fills empty slots.
- `swanengine.physics`:
  - `Body` is an axis-aligned box.
  - `BasicPhysicsBody.update(plane, dt)` integrates force and velocity, moves the body in steps of at most 0.4 units, and resolves collisions against solid tiles. The `plane` argument is any object with a `get_tile(pos)` method that returns something with an `is_solid` attribute. On collision, `bounciness` and `mushyness` shape the velocity that remains.
  - `collide_all(bodies)` pushes overlapping solid bodies apart.
- `swanengine.lighting`: `LightServer` receives chunk, block and light-source events through `on_chunk_added`, `on_chunk_removed`, `on_solid_block_added`, `on_solid_block_removed`, `on_light_added` and `on_light_removed`.
  - `process()` recomputes every affected chunk and returns the positions of those chunks. The work covers sunlight from above, point lights with ray-cast shadows, one bounce of light off solid tiles, and four smoothing passes.
  - It then calls the optional callback with each `LightChunk` and its position.
  - Final per-tile levels are available through `LightChunk.level_at(x, y)` as 0–255 sRGB values.
  - Event methods may be called from any thread. `process()` runs in the calling thread.
- `swanengine.chunk`: `Chunk` stores 16-bit tile IDs.
  - `compress()` and `decompress()` use zlib at level 9. `compress()` leaves the data uncompressed when compressing would make it larger.
  - `tick(dt)` counts down an inactivity timer of 20 seconds. It returns a `TickAction`: `DEACTIVATE` for a modified chunk and `DELETE` for an unmodified one.
  - `to_dict()` serialises the chunk to a plain dictionary. `Chunk.from_dict(data, tile_map)` reads it back and remaps saved tile IDs through `tile_map`.
  - Malformed compressed data raises `ChunkError`. A bad size or an unknown compression type raises `ValueError`.
- `swanengine.assets`: `load_image_asset(mod_paths, "mod::path[::variant]", base_path)` loads `<base_path>/<mod dir>/assets/<path>.png` as RGBA into an `ImageAsset`.
  - An optional `<path>.toml` next to the image can set the frame `height` and `repeatFrom`.
  - It can also list operations under `[variants]`. The available operations are `hflip`, `vflip`, `transpose`, `rotate90`, `rotate180` and `rotate270`. They are applied by `make_variant`, and the individual operations are also available as `apply_hflip`, `apply_vflip` and `apply_transpose`.
  - Failures raise `AssetError`.

Warnings and progress messages are sent through the standard `logging` module, under logger names such as `swanengine.chunk` and `swanengine.lighting`.

## Installation

```
pip install .
```

To include the test dependencies:

```
pip install ".[test]"
```

## Example

```python
from swanengine.vector import Vector2
from swanengine.coords import tile_pos_to_chunk_pos, tile_pos_to_chunk_rel_pos
from swanengine.inventory import Item, ItemStack, BasicInventory

pos = Vector2(-1, 70)
print(tile_pos_to_chunk_pos(pos))      # (-1, 1)
print(tile_pos_to_chunk_rel_pos(pos))  # (63, 6)

stone = Item(name="core::stone", max_stack=64)
inv = BasicInventory(4)
inv.insert(ItemStack(stone, 40))
leftover = inv.insert(ItemStack(stone, 30))
print(inv.get(0).count, inv.get(1).count, leftover.empty())  # 64 6 True
```

## What this package does not do

- It has no renderer, window, sound playback, input handling or game loop. It also provides no command to start a game.
- It does not load mods. It has no tile or item registry, no world or world-plane object, no world generation and no entities.
- Chunks convert to and from dictionaries, but the package has no format for saving a whole world to disk.

## Running the tests

```
pytest
```