"""Voxel world core: chunks, generators, meshing, camera, input, console and task pool."""

__version__ = "0.1.0"

__all__ = ["__version__"]