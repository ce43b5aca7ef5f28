"""Chunks of 32³ voxels, their face occlusion bitmaps and mesh building."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field

import numpy as np

from voxelcore.mesh import Face, Mesh
from voxelcore.voxel import SOLID_BIT, VoxelType

CHUNK_SIZE = 32
_SHAPE = (CHUNK_SIZE, CHUNK_SIZE, CHUNK_SIZE)
_PLANE = (CHUNK_SIZE, CHUNK_SIZE)

# Bit for index i along an axis: the highest bit for i == 0.
_BIT_WEIGHTS = np.uint32(SOLID_BIT) >> np.arange(CHUNK_SIZE, dtype=np.uint32)
_SHIFTS = np.arange(CHUNK_SIZE - 1, -1, -1, dtype=np.uint32)
_ZERO = np.uint32(0)
_ONE = np.uint32(1)
_HIGH = np.uint32(31)

_NEIGHBOUR_OFFSETS = (
    (1, 0, 0),
    (-1, 0, 0),
    (0, 1, 0),
    (0, -1, 0),
    (0, 0, 1),
    (0, 0, -1),
)

Position = tuple[int, int, int]


def _as_position(pos: Iterable[int]) -> Position:
    x, y, z = (int(c) for c in pos)
    return (x, y, z)


def _offset(pos: Iterable[int], delta: Iterable[int]) -> Position:
    x, y, z = _as_position(pos)
    dx, dy, dz = delta
    return (x + dx, y + dy, z + dz)


def _as_voxels(voxels) -> np.ndarray:
    array = np.asarray(voxels, dtype=np.uint8)
    if array.shape != _SHAPE:
        raise ValueError(f"voxels must have shape {_SHAPE}, got {array.shape}")
    return array


def _empty_plane() -> np.ndarray:
    return np.zeros(_PLANE, dtype=np.uint32)


class ChunkFaces:
    """A 32×32 bitmap of words; a set bit marks an uncovered face."""

    __slots__ = ("bits",)

    def __init__(self, bits=None) -> None:
        if bits is None:
            self.bits = _empty_plane()
        else:
            array = np.array(bits, dtype=np.uint32)
            if array.shape != _PLANE:
                raise ValueError(f"face bitmap must have shape {_PLANE}")
            self.bits = array

    def __getitem__(self, index):
        return self.bits[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChunkFaces):
            return NotImplemented
        return bool(np.array_equal(self.bits, other.bits))

    def __repr__(self) -> str:
        return f"ChunkFaces(<{int(np.count_nonzero(self.bits))} non-zero words>)"


def _empty_occlusion() -> tuple[ChunkFaces, ...]:
    return tuple(ChunkFaces() for _ in Face)


@dataclass(eq=False)
class Chunk:
    """A cube of voxels at a chunk coordinate, with its visible-face maps."""

    pos: Position
    voxels: np.ndarray
    occlusion_map: tuple[ChunkFaces, ...] = field(default_factory=_empty_occlusion)
    entities: list = field(default_factory=list)
    is_empty: bool = False

    def __post_init__(self) -> None:
        self.pos = _as_position(self.pos)
        self.voxels = _as_voxels(self.voxels)
        self.occlusion_map = tuple(self.occlusion_map)
        if len(self.occlusion_map) != len(Face):
            raise ValueError("an occlusion map holds one bitmap per face")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Chunk):
            return NotImplemented
        return (
            self.pos == other.pos
            and bool(np.array_equal(self.voxels, other.voxels))
            and self.occlusion_map == other.occlusion_map
            and self.entities == other.entities
            and self.is_empty == other.is_empty
        )


class Chunks:
    """Thread-safe store of generated chunks keyed by chunk coordinate."""

    def __init__(self) -> None:
        self._chunks: dict[Position, Chunk] = {}
        self._lock = threading.Lock()

    def get(self, pos: Iterable[int]) -> Chunk | None:
        key = _as_position(pos)
        with self._lock:
            return self._chunks.get(key)

    def contains(self, pos: Iterable[int]) -> bool:
        key = _as_position(pos)
        with self._lock:
            return key in self._chunks

    def add(self, pos: Iterable[int], chunk: Chunk) -> None:
        key = _as_position(pos)
        with self._lock:
            self._chunks[key] = chunk

    def neighbors(self, pos: Iterable[int]) -> list[Chunk]:
        """Return the stored chunks that share a face with ``pos``."""
        found = []
        for delta in _NEIGHBOUR_OFFSETS:
            chunk = self.get(_offset(pos, delta))
            if chunk is not None:
                found.append(chunk)
        return found

    def __contains__(self, pos: object) -> bool:
        return self.contains(pos)  # type: ignore[arg-type]

    def __len__(self) -> int:
        with self._lock:
            return len(self._chunks)


def _weighted(solid: np.ndarray, axis: int) -> np.ndarray:
    shape = [1, 1, 1]
    shape[axis] = CHUNK_SIZE
    weights = _BIT_WEIGHTS.reshape(shape)
    return np.bitwise_or.reduce(np.where(solid, weights, _ZERO), axis=axis)


def x_aligned_solid_map(voxels) -> np.ndarray:
    """Return words indexed [y][z]; bit 31-x is set for a solid voxel."""
    solid = _as_voxels(voxels) > 0
    return np.ascontiguousarray(_weighted(solid, 0), dtype=np.uint32)


def y_aligned_solid_map(voxels) -> np.ndarray:
    """Return words indexed [z][x]; bit 31-y is set for a solid voxel."""
    solid = _as_voxels(voxels) > 0
    return np.ascontiguousarray(_weighted(solid, 1).T, dtype=np.uint32)


def z_aligned_solid_map(voxels) -> np.ndarray:
    """Return words indexed [x][y]; bit 31-z is set for a solid voxel."""
    solid = _as_voxels(voxels) > 0
    return np.ascontiguousarray(_weighted(solid, 2), dtype=np.uint32)


def axis_aligned_solid_maps(voxels) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Return the x-, y- and z-aligned solid maps of a voxel cube."""
    return (
        x_aligned_solid_map(voxels),
        y_aligned_solid_map(voxels),
        z_aligned_solid_map(voxels),
    )


def _hide_negative(own: np.ndarray, neighbour: np.ndarray) -> np.ndarray:
    return own & ~((own >> _ONE) | (neighbour << _HIGH))


def _hide_positive(own: np.ndarray, neighbour: np.ndarray) -> np.ndarray:
    return own & ~((own << _ONE) | (neighbour >> _HIGH))


def map_visible(voxels, pos: Iterable[int], chunks: Chunks) -> tuple[ChunkFaces, ...]:
    """Return, per face direction, the bitmap of solid faces left uncovered.

    Faces on the chunk border are covered only by neighbouring chunks
    already stored in ``chunks``.
    """
    x_map, y_map, z_map = axis_aligned_solid_maps(voxels)

    def neighbour(delta: Sequence[int], solid_map: Callable) -> np.ndarray:
        chunk = chunks.get(_offset(pos, delta))
        return _empty_plane() if chunk is None else solid_map(chunk.voxels)

    px = neighbour((1, 0, 0), x_aligned_solid_map)
    nx = neighbour((-1, 0, 0), x_aligned_solid_map)
    py = neighbour((0, 1, 0), y_aligned_solid_map)
    ny = neighbour((0, -1, 0), y_aligned_solid_map)
    pz = neighbour((0, 0, 1), z_aligned_solid_map)
    nz = neighbour((0, 0, -1), z_aligned_solid_map)

    return (
        ChunkFaces(_hide_negative(x_map, nx)),
        ChunkFaces(_hide_positive(x_map, px)),
        ChunkFaces(_hide_negative(y_map, ny)),
        ChunkFaces(_hide_positive(y_map, py)),
        ChunkFaces(_hide_negative(z_map, nz)),
        ChunkFaces(_hide_positive(z_map, pz)),
    )


def _visible_mask(face: Face, faces: Sequence[ChunkFaces]) -> np.ndarray:
    bits = faces[face].bits
    if face in (Face.NX, Face.PX):
        mask = (bits[None, :, :] >> _SHIFTS[:, None, None]) & _ONE
    elif face in (Face.NY, Face.PY):
        mask = (bits.T[:, None, :] >> _SHIFTS[None, :, None]) & _ONE
    else:
        mask = (bits[:, :, None] >> _SHIFTS[None, None, :]) & _ONE
    return mask.astype(bool)


def _build_mesh(voxels, chunk_pos, faces, keep: Callable[[Face, Position], bool]) -> Mesh:
    voxels = _as_voxels(voxels)
    cx, cy, cz = (c * CHUNK_SIZE for c in _as_position(chunk_pos))
    mesh = Mesh()
    for face in Face:
        for x, y, z in np.argwhere(_visible_mask(face, faces)):
            position = (cx + int(x), cy + int(y), cz + int(z))
            if keep(face, position):
                mesh.add(face, position, VoxelType(int(voxels[x, y, z])).texture())
    return mesh


def generate_mesh(cam_pos, voxels, chunk_pos, faces) -> Mesh:
    """Build the mesh of visible faces that also point towards the camera."""
    cam = tuple(float(c) for c in cam_pos)

    def facing_camera(face: Face, position: Position) -> bool:
        axis = face // 2
        if face % 2 == 0:
            return cam[axis] < position[axis]
        return cam[axis] > position[axis] + 0.9

    return _build_mesh(voxels, chunk_pos, faces, facing_camera)


def generate_mesh_without_cam_occ(voxels, chunk_pos, faces) -> Mesh:
    """Build the mesh of every visible face, wherever the camera is."""
    return _build_mesh(voxels, chunk_pos, faces, lambda face, position: True)