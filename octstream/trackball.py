"""Virtual trackball that turns 2D pointer motion into a 3D rotation."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence

Vector3 = tuple[float, float, float]


def _length(v: Sequence[float]) -> float:
    return math.sqrt(sum(c * c for c in v))


def _normalized(v: Sequence[float]) -> Vector3:
    length = _length(v)
    if length == 0.0:
        return (0.0, 0.0, 0.0)
    return (v[0] / length, v[1] / length, v[2] / length)


def _cross(a: Sequence[float], b: Sequence[float]) -> Vector3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


@dataclass(frozen=True)
class Quaternion:
    """A rotation quaternion; the default is the identity rotation."""

    scalar: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def from_axis_and_angle(cls, axis: Sequence[float], angle: float) -> "Quaternion":
        """Rotation of ``angle`` degrees about ``axis``."""
        ax, ay, az = _normalized(axis)
        half = math.radians(angle) / 2.0
        s = math.sin(half)
        c = math.cos(half)
        return cls(c, ax * s, ay * s, az * s).normalized()

    @property
    def vector(self) -> Vector3:
        return (self.x, self.y, self.z)

    def length(self) -> float:
        return math.sqrt(self.scalar ** 2 + self.x ** 2 + self.y ** 2 + self.z ** 2)

    def normalized(self) -> "Quaternion":
        length = self.length()
        if length == 0.0:
            return self
        return Quaternion(self.scalar / length, self.x / length, self.y / length, self.z / length)

    def conjugated(self) -> "Quaternion":
        return Quaternion(self.scalar, -self.x, -self.y, -self.z)

    def __mul__(self, other: "Quaternion") -> "Quaternion":
        if not isinstance(other, Quaternion):
            return NotImplemented
        s1, x1, y1, z1 = self.scalar, self.x, self.y, self.z
        s2, x2, y2, z2 = other.scalar, other.x, other.y, other.z
        return Quaternion(
            s1 * s2 - x1 * x2 - y1 * y2 - z1 * z2,
            s1 * x2 + x1 * s2 + y1 * z2 - z1 * y2,
            s1 * y2 - x1 * z2 + y1 * s2 + z1 * x2,
            s1 * z2 + x1 * y2 - y1 * x2 + z1 * s2,
        )

    def rotated_vector(self, vector: Sequence[float]) -> Vector3:
        """Rotate a 3D vector by this quaternion."""
        pure = Quaternion(0.0, float(vector[0]), float(vector[1]), float(vector[2]))
        return (self * pure * self.conjugated()).vector


class TrackMode(Enum):
    PLANE = 0
    SPHERE = 1


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


def _sphere_point(p: tuple[float, float]) -> Vector3:
    x, y = p
    sqr_z = 1.0 - (x * x + y * y)
    if sqr_z > 0:
        return (x, y, math.sqrt(sqr_z))
    return _normalized((x, y, 0.0))


class TrackBall:
    """Trackball driven by pointer positions in [-1, 1] x [-1, 1].

    ``clock`` returns the current time in milliseconds; it defaults to a
    monotonic clock.
    """

    def __init__(
        self,
        mode: TrackMode = TrackMode.SPHERE,
        angular_velocity: float = 0.0,
        axis: Sequence[float] = (0.0, 1.0, 0.0),
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self._clock = clock if clock is not None else _monotonic_ms
        self._mode = TrackMode(mode)
        self._axis: Vector3 = (float(axis[0]), float(axis[1]), float(axis[2]))
        self._angular_velocity = float(angular_velocity)
        self._rotation = Quaternion()
        self._last_pos = (0.0, 0.0)
        self._last_time = self._clock()
        self._paused = False
        self._pressed = False

    @property
    def mode(self) -> TrackMode:
        return self._mode

    @property
    def pressed(self) -> bool:
        return self._pressed

    @property
    def paused(self) -> bool:
        return self._paused

    def _elapsed_ms(self, now: float) -> int:
        return int(now - self._last_time)

    def push(self, point: Sequence[float], transformation: Quaternion) -> None:
        """Start dragging at ``point``."""
        self._rotation = self.rotation()
        self._pressed = True
        self._last_time = self._clock()
        self._last_pos = (float(point[0]), float(point[1]))
        self._angular_velocity = 0.0

    def move(self, point: Sequence[float], transformation: Quaternion) -> None:
        """Drag to ``point``; updates are ignored until more than 20 ms passed."""
        if not self._pressed:
            return
        now = self._clock()
        msecs = self._elapsed_ms(now)
        if msecs <= 20:
            return
        p = (float(point[0]), float(point[1]))

        if self._mode is TrackMode.PLANE:
            dx = p[0] - self._last_pos[0]
            dy = p[1] - self._last_pos[1]
            angle = math.degrees(math.hypot(dx, dy))
            self._angular_velocity = angle / msecs
            axis = _normalized((-dy, dx, 0.0))
        else:
            last3d = _sphere_point(self._last_pos)
            current3d = _sphere_point(p)
            cross = _cross(last3d, current3d)
            angle = math.degrees(math.asin(min(1.0, _length(cross))))
            self._angular_velocity = angle / msecs
            axis = _normalized(cross)

        self._axis = transformation.rotated_vector(axis)
        self._rotation = Quaternion.from_axis_and_angle(self._axis, angle) * self._rotation
        self._last_pos = p
        self._last_time = now

    def release(self, point: Sequence[float], transformation: Quaternion) -> None:
        """Finish dragging at ``point``; the ball keeps spinning afterwards."""
        self.move(point, transformation)
        self._pressed = False

    def start(self) -> None:
        """Restart the clock and resume spinning."""
        self._last_time = self._clock()
        self._paused = False

    def stop(self) -> None:
        """Freeze the current rotation."""
        self._rotation = self.rotation()
        self._paused = True

    def rotation(self) -> Quaternion:
        """The rotation at the current time."""
        if self._paused or self._pressed:
            return self._rotation
        angle = self._angular_velocity * self._elapsed_ms(self._clock())
        return Quaternion.from_axis_and_angle(self._axis, angle) * self._rotation