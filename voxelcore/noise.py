"""Random helpers and seeded Perlin noise."""

from __future__ import annotations

import math
import random


def get_random(low: int, high: int) -> int:
    """Return a random integer from ``low`` to ``high``, both inclusive."""
    return random.randint(low, high)


def flip_coin() -> bool:
    """Return True or False with equal probability."""
    return random.getrandbits(1) == 1


def _fade(t: float) -> float:
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _lerp(t: float, a: float, b: float) -> float:
    return a + t * (b - a)


def _grad(hash_value: int, x: float, y: float, z: float) -> float:
    h = hash_value & 15
    u = x if h < 8 else y
    if h < 4:
        v = y
    elif h in (12, 14):
        v = x
    else:
        v = z
    return (u if h & 1 == 0 else -u) + (v if h & 2 == 0 else -v)


class Noise:
    """Seeded three-dimensional Perlin noise with values in [0, 1]."""

    def __init__(self, seed: int) -> None:
        self.seed = seed & 0xFFFFFFFF
        permutation = list(range(256))
        random.Random(self.seed).shuffle(permutation)
        self._perm = permutation * 2

    def _perlin(self, x: float, y: float, z: float) -> float:
        fx, fy, fz = math.floor(x), math.floor(y), math.floor(z)
        xi, yi, zi = fx & 255, fy & 255, fz & 255
        x -= fx
        y -= fy
        z -= fz
        u, v, w = _fade(x), _fade(y), _fade(z)
        p = self._perm

        a = p[xi] + yi
        aa = p[a] + zi
        ab = p[a + 1] + zi
        b = p[xi + 1] + yi
        ba = p[b] + zi
        bb = p[b + 1] + zi

        value = _lerp(
            w,
            _lerp(
                v,
                _lerp(u, _grad(p[aa], x, y, z), _grad(p[ba], x - 1, y, z)),
                _lerp(u, _grad(p[ab], x, y - 1, z), _grad(p[bb], x - 1, y - 1, z)),
            ),
            _lerp(
                v,
                _lerp(
                    u,
                    _grad(p[aa + 1], x, y, z - 1),
                    _grad(p[ba + 1], x - 1, y, z - 1),
                ),
                _lerp(
                    u,
                    _grad(p[ab + 1], x, y - 1, z - 1),
                    _grad(p[bb + 1], x - 1, y - 1, z - 1),
                ),
            ),
        )
        return max(-1.0, min(1.0, value))

    def get(self, x: float, y: float, z: float, space_scale: float) -> float:
        """Sample the noise at a point scaled down by ``space_scale``."""
        value = self._perlin(x / space_scale, y / space_scale, z / space_scale)
        return (value + 1.0) * 0.5

    def get_octaves(
        self, x: float, y: float, z: float, space_scale: float, octaves: int
    ) -> float:
        """Sum several octaves, each with half the amplitude of the last."""
        x /= space_scale
        y /= space_scale
        z /= space_scale

        value = 0.0
        max_value = 0.0
        amplitude = 1.0
        frequency = 1.0
        persistence = 0.5

        for _ in range(octaves):
            value += self.get(x * frequency, y, z * frequency, space_scale) * amplitude
            max_value += amplitude
            amplitude *= persistence
            frequency *= 2.0

        if max_value == 0.0:
            return math.nan
        return value / max_value

    def __repr__(self) -> str:
        return f"Noise(seed={self.seed})"