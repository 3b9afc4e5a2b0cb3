# gallery3d/services/geometry.py

"""
Minimal 3D vector math for room layout, picking and camera movement.
Right-handed, y up; a yaw of 0 looks down -z.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vec3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale(self, k: float) -> "Vec3":
        return Vec3(self.x * k, self.y * k, self.z * k)

    def dot(self, other: "Vec3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalized(self) -> "Vec3":
        n = self.length()
        if n == 0:
            return Vec3()
        return self.scale(1.0 / n)

    def as_dict(self) -> dict:
        return {"x": round(self.x, 6), "y": round(self.y, 6), "z": round(self.z, 6)}

    @classmethod
    def from_dict(cls, data) -> "Vec3":
        data = data or {}
        return cls(float(data.get("x", 0.0)), float(data.get("y", 0.0)), float(data.get("z", 0.0)))


def rotate_yaw_pitch(v: Vec3, yaw: float, pitch: float) -> Vec3:
    """
    Camera-local -> world: pitch about x first, then yaw about y.
    """
    cp, sp = math.cos(pitch), math.sin(pitch)
    y1 = v.y * cp - v.z * sp
    z1 = v.y * sp + v.z * cp
    x1 = v.x

    cy, sy = math.cos(yaw), math.sin(yaw)
    return Vec3(x1 * cy + z1 * sy, y1, -x1 * sy + z1 * cy)


def forward_flat(yaw: float) -> Vec3:
    return Vec3(-math.sin(yaw), 0.0, -math.cos(yaw))


def right_flat(yaw: float) -> Vec3:
    return Vec3(math.cos(yaw), 0.0, -math.sin(yaw))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
