"""Terrain generators that fill a chunk from its coordinate."""

from __future__ import annotations

import abc
from collections.abc import Iterable

import numpy as np

from voxelcore.chunk import CHUNK_SIZE, Chunk, ChunkFaces, Chunks, map_visible
from voxelcore.mesh import Face
from voxelcore.noise import Noise
from voxelcore.voxel import VoxelType, random_weighted_voxel


def _new_voxels() -> np.ndarray:
    return np.full((CHUNK_SIZE,) * 3, int(VoxelType.AIR), dtype=np.uint8)


def _finish(pos, voxels: np.ndarray, empty: bool, other_chunks: Chunks) -> Chunk:
    if empty:
        occlusion = tuple(ChunkFaces() for _ in Face)
    else:
        occlusion = map_visible(voxels, pos, other_chunks)
    return Chunk(pos, voxels, occlusion, [], empty)


class Generator(abc.ABC):
    """Produces the chunk at a given chunk coordinate from a seed."""

    def __init__(self, seed: int) -> None:
        self.seed = int(seed)

    @abc.abstractmethod
    def generate(self, pos: Iterable[int], other_chunks: Chunks) -> Chunk:
        """Build the chunk at ``pos``; ``other_chunks`` covers border faces."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(seed={self.seed})"


class MountainsAndValleys(Generator):
    """A height field: solid above a noise-shaped surface."""

    def __init__(
        self,
        seed: int,
        horizontal_area: float = 20.0,
        vertical_area: float = 500.0,
        exponent: int = 2,
        number_of_octaves: int = 3,
    ) -> None:
        super().__init__(seed)
        self.noise = Noise(self.seed)
        self.horizontal_area = horizontal_area
        self.vertical_area = vertical_area
        self.exponent = exponent
        self.number_of_octaves = number_of_octaves

    def generate(self, pos: Iterable[int], other_chunks: Chunks) -> Chunk:
        px, py, pz = (int(c) for c in pos)
        voxels = _new_voxels()
        empty = True
        for x in range(CHUNK_SIZE):
            for z in range(CHUNK_SIZE):
                height = self.noise.get_octaves(
                    float(x + px * CHUNK_SIZE),
                    0.0,
                    float(z + pz * CHUNK_SIZE),
                    self.horizontal_area,
                    self.number_of_octaves,
                )
                if not 0.0 <= height <= 1.0:
                    raise RuntimeError(f"terrain height {height} outside [0, 1]")
                surface = int(2.0 ** (height**self.exponent) * self.vertical_area)
                for y in range(CHUNK_SIZE):
                    if y + py * CHUNK_SIZE > surface:
                        voxels[x, y, z] = random_weighted_voxel()
                        empty = False
        return _finish((px, py, pz), voxels, empty, other_chunks)


class WhiteNoise(Generator):
    """Every voxel solid, stone or dirt at random."""

    def generate(self, pos: Iterable[int], other_chunks: Chunks) -> Chunk:
        position = tuple(int(c) for c in pos)
        voxels = _new_voxels()
        for index in np.ndindex(voxels.shape):
            voxels[index] = random_weighted_voxel()
        return Chunk(
            position, voxels, map_visible(voxels, position, other_chunks), [], False
        )


class _ThresholdGenerator(Generator):
    """Solid wherever three-dimensional noise rises above a threshold."""

    def __init__(
        self,
        seed: int,
        horizontal_area: float,
        exponent: int,
        threshold: float,
        number_of_octaves: int,
    ) -> None:
        super().__init__(seed)
        self.noise = Noise(self.seed)
        self.horizontal_area = horizontal_area
        self.exponent = exponent
        self.threshold = threshold
        self.number_of_octaves = number_of_octaves

    def _generate_threshold(self, pos: Iterable[int], other_chunks: Chunks) -> Chunk:
        px, py, pz = (int(c) for c in pos)
        voxels = _new_voxels()
        empty = True
        for x, y, z in np.ndindex(voxels.shape):
            value = self.noise.get_octaves(
                float(x + px * CHUNK_SIZE),
                float(y + py * CHUNK_SIZE),
                float(z + pz * CHUNK_SIZE),
                self.horizontal_area,
                self.number_of_octaves,
            )
            if value**self.exponent > self.threshold:
                voxels[x, y, z] = random_weighted_voxel()
                empty = False
        return _finish((px, py, pz), voxels, empty, other_chunks)


class RainDrops(_ThresholdGenerator):
    """Small scattered blobs where the noise peaks."""

    def __init__(
        self,
        seed: int,
        horizontal_area: float = 6.0,
        exponent: int = 1,
        threshold: float = 0.8,
        number_of_octaves: int = 1,
    ) -> None:
        super().__init__(seed, horizontal_area, exponent, threshold, number_of_octaves)

    def generate(self, pos: Iterable[int], other_chunks: Chunks) -> Chunk:
        return self._generate_threshold(pos, other_chunks)


class OpenCaves(_ThresholdGenerator):
    """About half the space solid, leaving winding open caves."""

    def __init__(
        self,
        seed: int,
        horizontal_area: float = 8.0,
        exponent: int = 1,
        threshold: float = 0.5,
        number_of_octaves: int = 3,
    ) -> None:
        super().__init__(seed, horizontal_area, exponent, threshold, number_of_octaves)

    def generate(self, pos: Iterable[int], other_chunks: Chunks) -> Chunk:
        return self._generate_threshold(pos, other_chunks)