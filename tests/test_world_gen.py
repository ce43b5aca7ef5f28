import numpy as np
import pytest

from voxelcore.chunk import ChunkFaces, Chunks, map_visible
from voxelcore.mesh import Face
from voxelcore.voxel import VoxelType
from voxelcore.world_gen import (
    Generator,
    MountainsAndValleys,
    OpenCaves,
    RainDrops,
    WhiteNoise,
)

SIZE = 32


def bit_count(faces: ChunkFaces) -> int:
    return sum(bin(int(word)).count("1") for word in faces.bits.flat)


@pytest.fixture(scope="module")
def caves():
    generator = OpenCaves(1234)
    return generator, generator.generate((0, 0, 0), Chunks())


def test_generator_is_abstract():
    with pytest.raises(TypeError):
        Generator(1)


def test_defaults_follow_source():
    caves = OpenCaves(9)
    assert (caves.horizontal_area, caves.threshold, caves.number_of_octaves) == (8.0, 0.5, 3)
    drops = RainDrops(9)
    assert (drops.horizontal_area, drops.threshold, drops.number_of_octaves) == (6.0, 0.8, 1)
    mountains = MountainsAndValleys(9)
    assert (mountains.horizontal_area, mountains.vertical_area, mountains.exponent) == (
        20.0,
        500.0,
        2,
    )
    assert caves.seed == 9


def test_white_noise_fills_chunk():
    chunk = WhiteNoise(5).generate((2, 0, -1), Chunks())
    assert chunk.pos == (2, 0, -1)
    assert not chunk.is_empty
    assert set(np.unique(chunk.voxels)) <= {int(VoxelType.STONE), int(VoxelType.DIRT)}
    assert all(bit_count(f) == SIZE * SIZE for f in chunk.occlusion_map)


def test_white_noise_neighbour_hides_shared_border():
    generator = WhiteNoise(5)
    chunks = Chunks()
    chunks.add((1, 0, 0), generator.generate((1, 0, 0), chunks))
    chunk = generator.generate((0, 0, 0), chunks)
    assert bit_count(chunk.occlusion_map[Face.PX]) == 0
    assert bit_count(chunk.occlusion_map[Face.NX]) == SIZE * SIZE


def test_mountains_low_chunk_is_empty():
    chunk = MountainsAndValleys(77).generate((0, 0, 0), Chunks())
    assert chunk.is_empty
    assert not chunk.voxels.any()
    assert all(bit_count(f) == 0 for f in chunk.occlusion_map)


def test_mountains_high_chunk_is_solid():
    chunk = MountainsAndValleys(77).generate((0, 40, 0), Chunks())
    assert not chunk.is_empty
    assert chunk.voxels.all()
    assert chunk.occlusion_map == map_visible(chunk.voxels, (0, 40, 0), Chunks())


def test_open_caves_follow_noise(caves):
    generator, chunk = caves
    for x, y, z in [(0, 0, 0), (3, 17, 29), (31, 31, 31), (10, 5, 20), (22, 8, 1)]:
        value = generator.noise.get_octaves(
            float(x), float(y), float(z), generator.horizontal_area, generator.number_of_octaves
        )
        assert bool(chunk.voxels[x, y, z]) == (value > generator.threshold)


def test_open_caves_invariants(caves):
    _, chunk = caves
    assert set(np.unique(chunk.voxels)) <= {0, int(VoxelType.STONE), int(VoxelType.DIRT)}
    assert chunk.is_empty == (not chunk.voxels.any())
    if chunk.is_empty:
        assert all(bit_count(f) == 0 for f in chunk.occlusion_map)
    else:
        assert chunk.occlusion_map == map_visible(chunk.voxels, (0, 0, 0), Chunks())


def test_raindrops_unreachable_threshold_gives_empty_chunk():
    generator = RainDrops(3, threshold=2.0)
    chunk = generator.generate((0, 0, 0), Chunks())
    assert chunk.is_empty
    assert not chunk.voxels.any()
    assert all(bit_count(f) == 0 for f in chunk.occlusion_map)
    assert chunk.entities == []