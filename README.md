# voxelcore

The data side of a voxel world: 32×32×32 chunks of voxels, noise-based
terrain generators, bitmask face culling, per-face instance meshes, a smoothed
fly camera with its view-projection matrix, frame-based input tracking, a small
prioritised worker pool and a console for chat lines and slash commands.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Building meshes for a view

`voxelcore.server.Server` ties a world generator, the chunk store and the
worker pool together. The first call to `get_mesh` schedules every chunk of a
preload cube around the camera; each call then schedules the chunks inside the
view frustum that have not been scheduled yet and returns a `Mesh` of the faces
of the chunks that are ready and that point towards the camera's chunk.

```python
from voxelcore.camera import Camera
from voxelcore.mesh import Face
from voxelcore.server import Server
from voxelcore.threadpool import Threadpool
from voxelcore.world_gen import OpenCaves

pool = Threadpool()
pool.launch(None)          # None: one worker for every two CPUs

server = Server(1234, generator_type=OpenCaves, preload_distance=2)
mesh = server.get_mesh(
    (0.0, 50.0, 0.0),      # camera position
    (0.0, 0.0, 1.0),       # viewing direction
    Camera.FOV,
    16 / 9,                # aspect ratio
    8,                     # render distance
    pool,
)

for face in Face:
    instances = mesh.faces(face)   # hand these to a renderer

pool.shutdown()
```

The preload cube spans `2 * preload_distance` chunks on each side (the default
`preload_distance` is 10, i.e. 8000 chunks), and every axis of it is centred on
the camera's x coordinate. Chunks are generated in the background, so early
calls to `get_mesh` return only what has arrived.

`Server.expose_generator()` returns the generator the worker tasks use.
`every_chunk_in_frustum`, `sphere_points` and `square_points` in the same
module give the point sets used for scheduling.

## Meshes

A `voxelcore.mesh.Mesh` keeps one list of `Instance` records per `Face`
(`NX`, `PX`, `NY`, `PY`, `NZ`, `PZ`), reachable as `mesh.nx` … `mesh.pz` or
`mesh.faces(face)`. `mesh.add(face, pos, texture)` appends a face; meshes
combine with `+`, `+=` and `extend`, and `len(mesh)` counts all instances.
`Instance.to_bytes()` packs an instance as three signed 32-bit coordinates and
one unsigned 32-bit texture index, little endian. `quad_vertices()` and
`quad_indices()` describe the unit quad drawn for every instance.

## Chunks and generators

`voxelcore.chunk` holds `Chunk`, the thread-safe `Chunks` store,
`ChunkFaces` bitmaps, the solid-map helpers, `map_visible` (which faces are not
covered, using neighbouring chunks already in the store) and the mesh builders
`generate_mesh` (only faces pointing towards a camera position) and
`generate_mesh_without_cam_occ`.

`voxelcore.world_gen` provides `MountainsAndValleys`, `WhiteNoise`,
`RainDrops` and `OpenCaves`, each a `Generator` whose
`generate(pos, other_chunks)` returns a `Chunk` with its occlusion map filled
in. Terrain shape comes from the seeded Perlin `Noise` in `voxelcore.noise`;
the choice between stone and dirt for a solid voxel is random and not seeded.
Voxel kinds and textures are the `VoxelType` and `Texture` enums in
`voxelcore.voxel`.

## Workers and lazy values

`voxelcore.threadpool.Threadpool` runs priority tasks first, then tasks from
a first and a second queue. `add_priority`, `add_to_first` and `add_to_second`
hand the task back when the queue is at its limit. `update()` adjusts the
number of workers at most once a second; `shutdown()` stops them.

`voxelcore.lazy.open_lazy()` returns a `Lazy` value and the `Sender` that
delivers it from another thread; `try_get`, `check` and `block_on` read it.

## Camera, timing and input

`voxelcore.camera.Camera` wraps a `SmoothController` (acceleration with
exponential friction, mouse-angle rotation) and returns a column-major
view-projection matrix from `view_proj(aspect_ratio)`. Frame time comes from
`voxelcore.timing.DeltaTimeMeter`; its `reader()` is what the controller
reads.

`voxelcore.input.InputEventFilter` collects key presses (`Key`), mouse motion
and wheel movement between frames; each handler returns whether it consumed
the event, and `frame_done()` clears the per-frame values. Held keys are
measured with `DownTime`.

## Console

An interactive console echoes chat lines and runs slash commands (`/status`,
`/quit`):

```
voxelcore-console --name Alice
```

`parse_command` and `parse_number` in `voxelcore.console` work on their own.
Numbers accept `0b`, `0s`, `0o`, `0d` and `0x` prefixes for bases 2, 6, 8, 12
and 16, a fractional part after `.`, and `_` as a digit separator; they are
returned as `fractions.Fraction`. Errors are `CommandError` subclasses.

## Network ping

`voxelcore.netcode.connect("127.0.0.1:5000")` sends `ping` over UDP, waits for
one reply and returns it as a `PingReply` with the round-trip time.

## What this package does not do

It opens no window and draws nothing: there is no renderer, no shader
handling, no GPU buffer or texture management and no block texture images.
Input arrives only through the `InputEventFilter` methods you call; nothing
reads a window system's events. No settings file is loaded —
`input_error_from_exception` only classifies file and JSON errors. There is
no game server; `connect` is a single ping.