# gallery3d/services/picking.py

"""
Click picking: cast a perspective ray from the camera through normalized
device coordinates and return the nearest artwork plane it crosses.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from gallery3d.services.geometry import Vec3, rotate_yaw_pitch
from gallery3d.services.navigation import CameraState
from gallery3d.services.room import ARTWORK_SIZE, CAMERA_NEAR, Scene

EPSILON = 1e-9


@dataclass(frozen=True)
class PickHit:
    artwork_id: str
    title: str
    distance: float
    point: Vec3

    def as_dict(self) -> dict:
        return {
            "artwork_id": self.artwork_id,
            "title": self.title,
            "distance": round(self.distance, 6),
            "point": self.point.as_dict(),
        }


def ray_direction(camera: CameraState, ndc_x: float, ndc_y: float, aspect: float) -> Vec3:
    half_h = math.tan(math.radians(camera.fov) / 2)
    local = Vec3(ndc_x * aspect * half_h, ndc_y * half_h, -1.0)
    return rotate_yaw_pitch(local, camera.yaw, camera.pitch).normalized()


def pick(scene: Scene, camera: CameraState, ndc_x: float, ndc_y: float, aspect: float):
    if not (-1.0 <= ndc_x <= 1.0 and -1.0 <= ndc_y <= 1.0):
        raise ValueError("ndc_x and ndc_y must be within [-1, 1]")
    if aspect <= 0:
        raise ValueError("aspect must be positive")

    origin = camera.position
    direction = ray_direction(camera, ndc_x, ndc_y, aspect)
    half = ARTWORK_SIZE / 2

    best = None
    for placement in scene.placements:
        normal = placement.normal
        denom = direction.dot(normal)
        if abs(denom) < EPSILON:
            continue

        t = (placement.position - origin).dot(normal) / denom
        if t < CAMERA_NEAR:
            continue

        point = origin + direction.scale(t)
        local = point - placement.position
        if abs(local.dot(placement.along)) > half or abs(local.y) > half:
            continue

        if best is None or t < best.distance:
            best = PickHit(
                artwork_id=placement.artwork_id,
                title=placement.title,
                distance=t,
                point=point,
            )

    return best
