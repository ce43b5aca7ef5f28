"""A free-flying camera with smoothed motion and its projection matrix."""

from __future__ import annotations

import math
from collections.abc import Iterable

import numpy as np

from voxelcore.timing import DeltaTime

_X = np.array([1.0, 0.0, 0.0])
_Y = np.array([0.0, 1.0, 0.0])
_Z = np.array([0.0, 0.0, 1.0])


def _quat_axis_angle(axis: np.ndarray, angle: float) -> np.ndarray:
    s = math.sin(angle * 0.5)
    return np.array([axis[0] * s, axis[1] * s, axis[2] * s, math.cos(angle * 0.5)])


def _quat_mul(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    ax, ay, az, aw = a
    bx, by, bz, bw = b
    return np.array(
        [
            aw * bx + ax * bw + ay * bz - az * by,
            aw * by - ax * bz + ay * bw + az * bx,
            aw * bz + ax * by - ay * bx + az * bw,
            aw * bw - ax * bx - ay * by - az * bz,
        ]
    )


def _quat_matrix(q: np.ndarray) -> np.ndarray:
    x, y, z, w = q
    return np.array(
        [
            [1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y)],
            [2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x)],
            [2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y)],
        ]
    )


def _rotation_yxz(angle: np.ndarray) -> np.ndarray:
    rot = _quat_mul(_quat_axis_angle(_Y, angle[0]), _quat_axis_angle(_X, angle[1]))
    return _quat_mul(rot, _quat_axis_angle(_Z, angle[2]))


def _euler_yxz(q: np.ndarray) -> np.ndarray:
    m = _quat_matrix(q)
    pitch = math.asin(max(-1.0, min(1.0, -m[1, 2])))
    yaw = math.atan2(m[0, 2], m[2, 2])
    roll = math.atan2(m[1, 0], m[1, 1])
    return np.array([yaw, pitch, roll])


def _perspective_rh(fov: float, aspect_ratio: float, near: float, far: float) -> np.ndarray:
    h = 1.0 / math.tan(fov * 0.5)
    w = h / aspect_ratio
    r = far / (near - far)
    return np.array(
        [
            [w, 0.0, 0.0, 0.0],
            [0.0, h, 0.0, 0.0],
            [0.0, 0.0, r, r * near],
            [0.0, 0.0, -1.0, 0.0],
        ]
    )


class SmoothController:
    """Moves with acceleration and exponential friction, turns by mouse angle."""

    SENSITIVITY = 0.001
    ROLL_SENSITIVITY = 5.0
    ACC_CHANGE_SENSITIVITY = 3.0

    FRICTION = 0.5
    STANDARD_ACC = 50.0
    GRAVITY = 0.00981
    MAX_SPEED = 0.1

    def __init__(
        self,
        pos: Iterable[float],
        dir: Iterable[float],
        delta_time: DeltaTime | None = None,
    ) -> None:
        self.pos = np.array([float(c) for c in pos])
        self.rot = _rotation_yxz(np.array([float(c) for c in dir]))
        self.angle = _euler_yxz(self.rot)
        self.vel = np.zeros(3)
        self.acc = self.STANDARD_ACC
        self.flying = True
        self.delta_time = delta_time if delta_time is not None else DeltaTime()

    def rotate_around_angle(self, angle: Iterable[float]) -> None:
        """Turn by ``angle`` scaled by the sensitivity; roll turns faster."""
        turn = np.array([float(c) for c in angle])
        turn[2] *= self.ROLL_SENSITIVITY
        self.angle = self.angle + turn * self.SENSITIVITY
        self.rot = _rotation_yxz(self.angle)

    def update(self, input_vector: Iterable[float]) -> None:
        """Accelerate along ``input_vector`` taken relative to the view."""
        dt = self.delta_time.get()
        local = self.acc * np.array([float(c) for c in input_vector])
        self.vel = self.vel + _quat_matrix(self.rot) @ local
        self.vel = self.vel * math.exp(-self.FRICTION * dt)
        self.pos = self.pos + self.vel * dt

    def update_acc(self, change: float) -> None:
        """Scale the acceleration up for positive, down for negative change."""
        change *= self.ACC_CHANGE_SENSITIVITY
        factor = change if change >= 0.0 else 1.0 / abs(change)
        low, high = self.STANDARD_ACC / 100.0, self.STANDARD_ACC * 100.0
        self.acc = min(max(self.acc * factor, low), high)

    def toggle_flying(self) -> None:
        self.flying = not self.flying

    def dir(self) -> np.ndarray:
        """Return the rotated z axis."""
        return _quat_matrix(self.rot) @ _Z


class Camera:
    """A perspective camera driven by a :class:`SmoothController`."""

    NEAR_PLANE = 0.1
    FAR_PLANE = 1000.0
    FOV = math.pi / 2

    def __init__(
        self,
        pos: Iterable[float],
        dir: Iterable[float],
        delta_time: DeltaTime | None = None,
    ) -> None:
        self.controller = SmoothController(pos, dir, delta_time)

    def view_proj(self, aspect_ratio: float) -> list[list[float]]:
        """Return the view-projection matrix as four columns of four floats."""
        proj = _perspective_rh(self.FOV, aspect_ratio, self.NEAR_PLANE, self.FAR_PLANE)
        model = np.eye(4)
        model[:3, :3] = _quat_matrix(self.controller.rot)
        model[:3, 3] = self.controller.pos
        view = np.linalg.inv(model)
        return (proj @ view).T.tolist()