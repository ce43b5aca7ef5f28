"""Voxel kinds and the textures they are drawn with."""

from __future__ import annotations

import enum

from voxelcore.noise import get_random

SOLID_BIT = 0x8000_0000


class Texture(enum.IntEnum):
    """Index of a layer in the block texture array."""

    STONE = 0
    DIRT = 1


class VoxelType(enum.IntEnum):
    """The material a voxel is made of."""

    AIR = 0
    STONE = 1
    DIRT = 2

    @property
    def is_solid(self) -> bool:
        return self is not VoxelType.AIR

    def is_solid_u32(self) -> int:
        """Return the highest bit of a 32-bit word if solid, otherwise 0."""
        return SOLID_BIT if self.value > 0 else 0

    def texture(self) -> Texture:
        """Return the texture of a solid voxel; air has none."""
        if self is VoxelType.STONE:
            return Texture.STONE
        if self is VoxelType.DIRT:
            return Texture.DIRT
        raise ValueError("Air has no texture!")


def random_voxel() -> VoxelType:
    """Return air, stone or dirt with equal probability."""
    return VoxelType(get_random(0, 2))


def random_weighted_voxel() -> VoxelType:
    """Return stone one time in five and dirt otherwise."""
    return VoxelType.STONE if get_random(0, 4) == 0 else VoxelType.DIRT