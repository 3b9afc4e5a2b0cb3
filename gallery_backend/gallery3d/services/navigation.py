"""
PATH: gallery3d/services/navigation.py

FIRST-PERSON CAMERA STEP

Per frame:
- W/S or ArrowUp/ArrowDown move along the yaw-relative forward axis
- A/D or ArrowLeft/ArrowRight strafe along the yaw-relative right axis
- movement speed is MOVE_SPEED units/s (diagonals are normalized)
- mouse deltas turn the camera; pitch is clamped to +/- MAX_PITCH_DEG
- position stays inside the room minus BOUNDS_MARGIN
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

from gallery3d.services.geometry import Vec3, clamp, forward_flat, right_flat
from gallery3d.services.room import (
    BACK_WALL_Z,
    CAMERA_FOV,
    CAMERA_START,
    FLOOR_SIZE,
    FLOOR_Y,
    SIDE_WALL_X,
    WALL_CENTER_Y,
    WALL_HEIGHT,
)

MOVE_SPEED = 5.0
MOUSE_SENSITIVITY = 0.002  # radians per pixel
MAX_PITCH_DEG = 85.0
BOUNDS_MARGIN = 0.5
MAX_DT = 0.1

FORWARD_KEYS = {"w", "keyw", "arrowup"}
BACKWARD_KEYS = {"s", "keys", "arrowdown"}
LEFT_KEYS = {"a", "keya", "arrowleft"}
RIGHT_KEYS = {"d", "keyd", "arrowright"}

BOUNDS_MIN = Vec3(-SIDE_WALL_X + BOUNDS_MARGIN, FLOOR_Y + BOUNDS_MARGIN, BACK_WALL_Z + BOUNDS_MARGIN)
BOUNDS_MAX = Vec3(
    SIDE_WALL_X - BOUNDS_MARGIN,
    WALL_CENTER_Y + WALL_HEIGHT / 2 - BOUNDS_MARGIN,
    FLOOR_SIZE / 2 - BOUNDS_MARGIN,
)


@dataclass(frozen=True)
class CameraState:
    position: Vec3 = CAMERA_START
    yaw: float = 0.0
    pitch: float = 0.0
    fov: float = CAMERA_FOV

    def as_dict(self) -> dict:
        return {
            "position": self.position.as_dict(),
            "yaw": round(self.yaw, 6),
            "pitch": round(self.pitch, 6),
            "fov": self.fov,
        }

    @classmethod
    def from_dict(cls, data) -> "CameraState":
        data = data or {}
        return cls(
            position=Vec3.from_dict(data.get("position")) if data.get("position") else CAMERA_START,
            yaw=float(data.get("yaw", 0.0)),
            pitch=float(data.get("pitch", 0.0)),
            fov=float(data.get("fov", CAMERA_FOV)),
        )


def clamp_to_room(position: Vec3) -> Vec3:
    return Vec3(
        clamp(position.x, BOUNDS_MIN.x, BOUNDS_MAX.x),
        clamp(position.y, BOUNDS_MIN.y, BOUNDS_MAX.y),
        clamp(position.z, BOUNDS_MIN.z, BOUNDS_MAX.z),
    )


def step_camera(
    state: CameraState,
    keys,
    dt: float,
    mouse_dx: float = 0.0,
    mouse_dy: float = 0.0,
) -> CameraState:
    dt = clamp(float(dt), 0.0, MAX_DT)
    pressed = {str(k).strip().lower() for k in (keys or [])}

    max_pitch = math.radians(MAX_PITCH_DEG)
    yaw = state.yaw - float(mouse_dx) * MOUSE_SENSITIVITY
    pitch = clamp(state.pitch - float(mouse_dy) * MOUSE_SENSITIVITY, -max_pitch, max_pitch)

    forward = int(bool(pressed & FORWARD_KEYS)) - int(bool(pressed & BACKWARD_KEYS))
    strafe = int(bool(pressed & RIGHT_KEYS)) - int(bool(pressed & LEFT_KEYS))

    move = forward_flat(yaw).scale(forward) + right_flat(yaw).scale(strafe)
    move = move.normalized().scale(MOVE_SPEED * dt)

    position = clamp_to_room(state.position + move)
    return replace(state, position=position, yaw=yaw, pitch=pitch)
