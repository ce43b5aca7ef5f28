"""Chunk scheduling and assembly of the world mesh seen from the camera."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator

from voxelcore.chunk import Chunks, Position, generate_mesh_without_cam_occ
from voxelcore.lazy import Lazy, open_lazy
from voxelcore.mesh import Mesh
from voxelcore.threadpool import Threadpool
from voxelcore.world_gen import Generator, OpenCaves

PRELOAD_DISTANCE = 10

_AXES = (
    (1, 0, 0),
    (-1, 0, 0),
    (0, 1, 0),
    (0, -1, 0),
    (0, 0, 1),
    (0, 0, -1),
)


def _round(value: float) -> int:
    """Round half away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _normalize(v: tuple[float, float, float]) -> tuple[float, float, float]:
    length = math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])
    if length == 0.0:
        raise ValueError("cannot normalize a zero vector")
    return (v[0] / length, v[1] / length, v[2] / length)


def _cross(a, b) -> tuple[float, float, float]:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _add(a, b) -> Position:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


class Server:
    """Owns the world generator and the chunks and meshes made so far.

    A chunk seen for the first time is generated on the threadpool; its
    mesh is used once it has arrived.
    """

    def __init__(
        self,
        seed: int,
        generator_type: type[Generator] = OpenCaves,
        preload_distance: int = PRELOAD_DISTANCE,
    ) -> None:
        self.generator = generator_type(seed)
        self.chunks = Chunks()
        self.meshes: dict[Position, Lazy] = {}
        self.preload_distance = preload_distance
        self.was_initiated = False

    def _schedule(self, coord: Position, threadpool: Threadpool) -> None:
        lazy, sender = open_lazy()
        self.meshes[coord] = lazy
        generator = self.generator
        chunks = self.chunks

        def build() -> None:
            with sender:
                chunk = generator.generate(coord, chunks)
                chunks.add(coord, chunk)
                if chunk.is_empty:
                    mesh = Mesh()
                else:
                    mesh = generate_mesh_without_cam_occ(
                        chunk.voxels, coord, chunk.occlusion_map
                    )
                sender.send(mesh)

        rejected = threadpool.add_priority(build)
        if rejected is not None:
            rejected()

    def init(self, cam_pos: Iterable[int], threadpool: Threadpool) -> None:
        """Schedule every chunk of the preload cube around ``cam_pos``."""
        for coord in square_points(cam_pos, self.preload_distance):
            self._schedule(coord, threadpool)
        self.was_initiated = True

    def get_mesh(
        self,
        cam_pos: Iterable[float],
        viewing_dir: Iterable[float],
        fov: float,
        aspect_ratio: float,
        render_distance: int,
        threadpool: Threadpool,
    ) -> Mesh:
        """Return the faces of every ready chunk in view that face the camera."""
        cam = tuple(float(c) for c in cam_pos)
        cam_block = tuple(int(c) for c in cam)
        if not self.was_initiated:
            self.init(cam_block, threadpool)

        cam_chunk = (cam[0] / 32.0, cam[1] / 32.0, cam[2] / 32.0)
        points = every_chunk_in_frustum(
            cam_chunk, viewing_dir, fov, aspect_ratio, render_distance
        )
        cx, cy, cz = (c >> 5 for c in cam_block)
        points.sort(key=lambda p: p[1], reverse=True)

        for coord in points:
            if coord not in self.meshes:
                self._schedule(coord, threadpool)

        mesh = Mesh()
        for coord in points:
            chunk_mesh = self.meshes[coord].try_get()
            if chunk_mesh is None:
                continue
            x, y, z = coord
            if cx <= x:
                mesh.nx.extend(chunk_mesh.nx)
            if cx >= x:
                mesh.px.extend(chunk_mesh.px)
            if cy <= y:
                mesh.ny.extend(chunk_mesh.ny)
            if cy >= y:
                mesh.py.extend(chunk_mesh.py)
            if cz <= z:
                mesh.nz.extend(chunk_mesh.nz)
            if cz >= z:
                mesh.pz.extend(chunk_mesh.pz)
        return mesh

    def expose_generator(self) -> Generator:
        """Return the generator shared with the worker tasks."""
        return self.generator


def every_chunk_in_frustum(
    position: Iterable[float],
    direction: Iterable[float],
    fov: float,
    aspect_ratio: float,
    render_distance: int,
) -> list[Position]:
    """Return the integer points covered by a view frustum.

    The frustum opens along the opposite of ``direction``, one slice per
    unit of distance up to ``render_distance``. The point nearest to
    ``position`` and its 26 neighbours are always included.
    """
    pos = tuple(float(c) for c in position)
    dx, dy, dz = (float(c) for c in direction)
    try:
        forward = _normalize((-dx, -dy, -dz))
    except ValueError:
        raise ValueError("viewing direction must not be zero") from None

    if abs(forward[1]) > 0.999:
        right = (1.0, 0.0, 0.0)
    else:
        right = _normalize(_cross(forward, (0.0, 1.0, 0.0)))
    up = _normalize(_cross(right, forward))
    tan_half_fov = math.tan(fov / 2.0)

    start = (_round(pos[0]), _round(pos[1]), _round(pos[2]))
    points: set[Position] = {start}
    for ox in (-1, 0, 1):
        for oy in (-1, 0, 1):
            for oz in (-1, 0, 1):
                points.add(_add(start, (ox, oy, oz)))

    for z in range(1, render_distance + 1):
        distance = float(z)
        height = distance * tan_half_fov + 1.0
        width = height * aspect_ratio + 1.0
        steps_y = math.ceil(height * 2.0)
        steps_x = math.ceil(width * 2.0)
        for y_step in range(-steps_y, steps_y + 1):
            y = y_step / steps_y * height
            for x_step in range(-steps_x, steps_x + 1):
                x = x_step / steps_x * width
                points.add(
                    tuple(
                        _round(pos[i] + right[i] * x + up[i] * y + forward[i] * distance)
                        for i in range(3)
                    )
                )
    return sorted(points)


def sphere_points(center: Iterable[int], radius: int) -> set[Position]:
    """Return the points reached by walking at most ``radius`` steps from ``center``."""
    if radius < 1:
        raise ValueError("radius must be at least 1")
    origin = tuple(int(c) for c in center)
    covered: set[Position] = {origin}
    ways = [(_add(origin, d), radius - 1, d) for d in _AXES]

    while ways:
        pos, fuel, pointing = ways.pop()
        covered.add(pos)
        if fuel == 0:
            continue
        fuel -= 1
        ahead = _add(pos, pointing)
        if ahead not in covered:
            ways.append((ahead, fuel, pointing))
        for d in _AXES:
            target = _add(pos, d)
            if target in covered:
                continue
            backwards = pointing == (-d[0], -d[1], -d[2])
            if d == (-1, 0, 0) or not backwards:
                ways.append((target, fuel, d))
    return covered


def square_points(pos: Iterable[int], edge_length: int) -> Iterator[Position]:
    """Yield the points of a cube spanning ``edge_length`` on each side.

    Every axis is centred on the x coordinate of ``pos``.
    """
    x0 = tuple(int(c) for c in pos)[0]
    span = range(x0 - edge_length, x0 + edge_length)
    for x in span:
        for y in span:
            for z in span:
                yield (x, y, z)