"""
PATH: gallery3d/services/room.py

ROOM + SCENE LAYOUT

Room:
- floor 20 x 20 at y = -2
- back wall at z = -5 (20 wide, 10 high, centre y = 3)
- left / right walls at x = -10 / x = 10 (10 wide, 10 high)

Hanging rules:
- at most MAX_ARTWORKS pieces
- artwork i goes to wall i % 3 (back, left, right), 4 per wall
- pieces are evenly spaced along their wall, centred at y = 1,
  WALL_OFFSET in front of the wall and facing the room centre
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from gallery3d.services.geometry import Vec3

FLOOR_SIZE = 20.0
FLOOR_Y = -2.0

WALL_HEIGHT = 10.0
WALL_CENTER_Y = 3.0
BACK_WALL_Z = -5.0
BACK_WALL_WIDTH = 20.0
SIDE_WALL_X = 10.0
SIDE_WALL_WIDTH = 10.0

ARTWORK_SIZE = 1.8
FRAME_SCALE = 1.1
FRAME_DEPTH = 0.1
HANG_Y = 1.0
WALL_OFFSET = 0.05

MAX_ARTWORKS = 12
PER_WALL = 4

BACKGROUND_COLOR = "#111111"
WALL_COLOR = "#f5f5f5"
FRAME_COLOR = "#5f4b32"

CAMERA_START = Vec3(0.0, 1.0, 5.0)
CAMERA_FOV = 75.0
CAMERA_NEAR = 0.1
CAMERA_FAR = 1000.0

WALL_BACK = "back"
WALL_LEFT = "left"
WALL_RIGHT = "right"
WALL_ORDER = (WALL_BACK, WALL_LEFT, WALL_RIGHT)


@dataclass(frozen=True)
class Wall:
    name: str
    center: Vec3
    width: float
    rotation_y: float

    @property
    def normal(self) -> Vec3:
        return Vec3(math.sin(self.rotation_y), 0.0, math.cos(self.rotation_y))

    @property
    def along(self) -> Vec3:
        return Vec3(math.cos(self.rotation_y), 0.0, -math.sin(self.rotation_y))

    def as_dict(self) -> dict:
        return {
            "name": self.name,
            "position": self.center.as_dict(),
            "width": self.width,
            "height": WALL_HEIGHT,
            "rotation_y": self.rotation_y,
        }


WALLS = {
    WALL_BACK: Wall(WALL_BACK, Vec3(0.0, WALL_CENTER_Y, BACK_WALL_Z), BACK_WALL_WIDTH, 0.0),
    WALL_LEFT: Wall(WALL_LEFT, Vec3(-SIDE_WALL_X, WALL_CENTER_Y, 0.0), SIDE_WALL_WIDTH, math.pi / 2),
    WALL_RIGHT: Wall(WALL_RIGHT, Vec3(SIDE_WALL_X, WALL_CENTER_Y, 0.0), SIDE_WALL_WIDTH, -math.pi / 2),
}


@dataclass(frozen=True)
class Placement:
    artwork_id: str
    title: str
    image_url: str
    wall: str
    position: Vec3
    rotation_y: float

    @property
    def normal(self) -> Vec3:
        return WALLS[self.wall].normal

    @property
    def along(self) -> Vec3:
        return WALLS[self.wall].along

    def as_dict(self) -> dict:
        return {
            "artwork_id": self.artwork_id,
            "title": self.title,
            "image_url": self.image_url,
            "wall": self.wall,
            "position": self.position.as_dict(),
            "rotation_y": self.rotation_y,
            "size": {"width": ARTWORK_SIZE, "height": ARTWORK_SIZE},
            "frame": {
                "width": round(ARTWORK_SIZE * FRAME_SCALE, 6),
                "height": round(ARTWORK_SIZE * FRAME_SCALE, 6),
                "depth": FRAME_DEPTH,
                "color": FRAME_COLOR,
            },
        }


@dataclass
class Scene:
    placements: list[Placement] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "background": BACKGROUND_COLOR,
            "room": {
                "floor": {
                    "width": FLOOR_SIZE,
                    "depth": FLOOR_SIZE,
                    "y": FLOOR_Y,
                    "color": WALL_COLOR,
                },
                "walls": [WALLS[name].as_dict() for name in WALL_ORDER],
                "wall_color": WALL_COLOR,
            },
            "lights": [
                {"type": "ambient", "color": "#ffffff", "intensity": 0.5},
                {
                    "type": "directional",
                    "color": "#ffffff",
                    "intensity": 1.0,
                    "position": Vec3(5.0, 5.0, 5.0).as_dict(),
                },
            ],
            "camera": {
                "position": CAMERA_START.as_dict(),
                "yaw": 0.0,
                "pitch": 0.0,
                "fov": CAMERA_FOV,
                "near": CAMERA_NEAR,
                "far": CAMERA_FAR,
            },
            "placements": [p.as_dict() for p in self.placements],
        }


def _slot_position(wall: Wall, index: int, count: int) -> Vec3:
    # evenly spaced: count pieces split the wall into count + 1 gaps
    offset_along = -wall.width / 2 + wall.width * (index + 1) / (count + 1)
    base = Vec3(wall.center.x, HANG_Y, wall.center.z)
    return base + wall.along.scale(offset_along) + wall.normal.scale(WALL_OFFSET)


def build_scene(artworks) -> Scene:
    """
    `artworks` is any iterable of objects with id / title / image_url
    (Artwork rows or plain namespaces). Order decides wall assignment.
    """
    picked = list(artworks)[:MAX_ARTWORKS]

    per_wall: dict[str, list] = {name: [] for name in WALL_ORDER}
    for i, artwork in enumerate(picked):
        per_wall[WALL_ORDER[i % len(WALL_ORDER)]].append(artwork)

    placements: list[Placement] = []
    for i, artwork in enumerate(picked):
        wall_name = WALL_ORDER[i % len(WALL_ORDER)]
        slot = i // len(WALL_ORDER)
        wall = WALLS[wall_name]
        placements.append(
            Placement(
                artwork_id=str(artwork.id),
                title=getattr(artwork, "title", "") or "",
                image_url=getattr(artwork, "image_url", "") or "",
                wall=wall_name,
                position=_slot_position(wall, slot, len(per_wall[wall_name])),
                rotation_y=wall.rotation_y,
            )
        )

    return Scene(placements=placements)
