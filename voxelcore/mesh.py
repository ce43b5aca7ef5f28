"""Per-face lists of block instances ready to be uploaded for drawing."""

from __future__ import annotations

import enum
import struct
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import ClassVar

from voxelcore.voxel import Texture

_INSTANCE_FORMAT = struct.Struct("<3iI")


class Face(enum.IntEnum):
    """The six axis-aligned faces of a block, in occlusion-map order."""

    NX = 0
    PX = 1
    NY = 2
    PY = 3
    NZ = 4
    PZ = 5


@dataclass(frozen=True)
class Instance:
    """One visible block face: integer position and texture kind."""

    SIZE: ClassVar[int] = _INSTANCE_FORMAT.size

    pos: tuple[int, int, int]
    kind: int

    def to_bytes(self) -> bytes:
        """Pack as three signed 32-bit ints and one unsigned, little endian."""
        return _INSTANCE_FORMAT.pack(*self.pos, self.kind)


@dataclass
class Mesh:
    """Instances grouped by the face direction they show."""

    nx: list[Instance] = field(default_factory=list)
    px: list[Instance] = field(default_factory=list)
    ny: list[Instance] = field(default_factory=list)
    py: list[Instance] = field(default_factory=list)
    nz: list[Instance] = field(default_factory=list)
    pz: list[Instance] = field(default_factory=list)

    def _lists(self) -> tuple[list[Instance], ...]:
        return (self.nx, self.px, self.ny, self.py, self.nz, self.pz)

    def faces(self, face: Face) -> list[Instance]:
        """Return the instance list for one face direction."""
        return self._lists()[Face(face)]

    def add(self, face: Face, pos: Iterable[int], texture: Texture) -> None:
        """Append a block face at ``pos`` drawn with ``texture``."""
        x, y, z = (int(c) for c in pos)
        self.faces(face).append(Instance((x, y, z), int(texture)))

    def extend(self, other: Mesh) -> None:
        """Append every instance of ``other`` to this mesh."""
        for mine, theirs in zip(self._lists(), other._lists()):
            mine.extend(theirs)

    def __add__(self, other: Mesh) -> Mesh:
        if not isinstance(other, Mesh):
            return NotImplemented
        return Mesh(*(mine + theirs for mine, theirs in zip(self._lists(), other._lists())))

    def __iadd__(self, other: Mesh) -> Mesh:
        if not isinstance(other, Mesh):
            return NotImplemented
        self.extend(other)
        return self

    def __len__(self) -> int:
        return sum(len(instances) for instances in self._lists())


def quad_vertices() -> list[int]:
    """Return the corner ids of the quad every instance is drawn from."""
    return [0, 1, 2, 3]


def quad_indices() -> list[int]:
    """Return the index list that splits the quad into two triangles."""
    return [0, 1, 2, 0, 2, 3]