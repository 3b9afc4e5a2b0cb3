import math
from types import SimpleNamespace

from django.contrib.auth import get_user_model
from django.test import SimpleTestCase, TestCase
from rest_framework.test import APIClient

from artworks.models import Artwork
from gallery3d.services.geometry import Vec3
from gallery3d.services.navigation import BOUNDS_MAX, MAX_PITCH_DEG, CameraState, step_camera
from gallery3d.services.picking import pick
from gallery3d.services.room import MAX_ARTWORKS, WALL_OFFSET, build_scene

User = get_user_model()


def _art(n):
    return [SimpleNamespace(id=f"art-{i}", title=f"Piece {i}", image_url="") for i in range(n)]


class BuildSceneTests(SimpleTestCase):
    """
    GUARANTEES:
    - at most MAX_ARTWORKS placements, round-robin back/left/right
    - pieces are evenly spaced and sit just in front of their wall
    """

    def test_caps_and_round_robin(self):
        scene = build_scene(_art(MAX_ARTWORKS + 3))

        self.assertEqual(len(scene.placements), MAX_ARTWORKS)
        self.assertEqual([p.wall for p in scene.placements[:4]], ["back", "left", "right", "back"])
        for wall in ("back", "left", "right"):
            self.assertEqual(sum(1 for p in scene.placements if p.wall == wall), 4)

    def test_single_piece_centred_on_back_wall(self):
        placement = build_scene(_art(1)).placements[0]

        self.assertEqual(placement.wall, "back")
        self.assertAlmostEqual(placement.position.x, 0.0)
        self.assertAlmostEqual(placement.position.y, 1.0)
        self.assertAlmostEqual(placement.position.z, -5.0 + WALL_OFFSET)

    def test_side_walls_face_room(self):
        left, right = build_scene(_art(3)).placements[1:]

        self.assertAlmostEqual(left.position.x, -10.0 + WALL_OFFSET)
        self.assertAlmostEqual(right.position.x, 10.0 - WALL_OFFSET)
        self.assertAlmostEqual(left.normal.x, 1.0)
        self.assertAlmostEqual(right.normal.x, -1.0)

    def test_even_spacing(self):
        scene = build_scene(_art(12))
        xs = [p.position.x for p in scene.placements if p.wall == "back"]
        for got, expected in zip(xs, [-6.0, -2.0, 2.0, 6.0]):
            self.assertAlmostEqual(got, expected)

    def test_empty_scene_still_has_room(self):
        data = build_scene([]).as_dict()

        self.assertEqual(data["placements"], [])
        self.assertEqual(len(data["room"]["walls"]), 3)
        self.assertEqual(data["camera"]["position"], {"x": 0.0, "y": 1.0, "z": 5.0})


class PickTests(SimpleTestCase):
    """
    GUARANTEES:
    - a ray through the screen centre hits the piece straight ahead
    - looking away or clicking empty wall returns None
    - out-of-range inputs raise ValueError
    """

    def setUp(self):
        self.scene = build_scene(_art(1))

    def test_centre_hit(self):
        hit = pick(self.scene, CameraState(), 0.0, 0.0, 16 / 9)

        self.assertIsNotNone(hit)
        self.assertEqual(hit.artwork_id, "art-0")
        self.assertAlmostEqual(hit.distance, 10.0 - WALL_OFFSET)

    def test_miss(self):
        self.assertIsNone(pick(self.scene, CameraState(yaw=math.pi), 0.0, 0.0, 1.0))
        self.assertIsNone(pick(self.scene, CameraState(), 0.9, 0.0, 1.0))

    def test_gap_between_pieces_misses(self):
        camera = CameraState(position=Vec3(0.0, 1.0, 0.0))
        scene = build_scene(_art(4))
        # back wall now holds pieces 0 and 3; neither sits at x=0
        hit = pick(scene, camera, 0.0, 0.0, 1.0)
        self.assertIsNone(hit)

    def test_invalid_input(self):
        with self.assertRaises(ValueError):
            pick(self.scene, CameraState(), 1.5, 0.0, 1.0)
        with self.assertRaises(ValueError):
            pick(self.scene, CameraState(), 0.0, 0.0, 0.0)


class StepCameraTests(SimpleTestCase):
    """
    GUARANTEES:
    - W moves forward at MOVE_SPEED, diagonals are not faster
    - mouse turns the camera; pitch is clamped
    - dt is capped and the camera stays inside the room
    """

    def test_forward(self):
        state = step_camera(CameraState(), ["KeyW"], 0.1)
        self.assertAlmostEqual(state.position.z, 4.5)
        self.assertAlmostEqual(state.position.x, 0.0)

    def test_diagonal_normalized(self):
        start = CameraState()
        state = step_camera(start, ["w", "d"], 0.1)
        moved = (state.position - start.position).length()
        self.assertAlmostEqual(moved, 0.5)

    def test_opposite_keys_cancel(self):
        state = step_camera(CameraState(), ["ArrowUp", "ArrowDown"], 0.1)
        self.assertEqual(state.position, CameraState().position)

    def test_mouse_and_pitch_clamp(self):
        state = step_camera(CameraState(), [], 0.016, mouse_dx=100, mouse_dy=-100000)

        self.assertAlmostEqual(state.yaw, -0.2)
        self.assertAlmostEqual(state.pitch, math.radians(MAX_PITCH_DEG))

    def test_dt_capped_and_bounds(self):
        state = step_camera(CameraState(), ["s"], 5.0)
        self.assertAlmostEqual(state.position.z, 5.5)

        state = CameraState(position=Vec3(0.0, 1.0, BOUNDS_MAX.z - 0.1))
        state = step_camera(state, ["s"], 0.1)
        self.assertAlmostEqual(state.position.z, BOUNDS_MAX.z)


class Gallery3DApiTests(TestCase):
    """
    GUARANTEES:
    - scene endpoint places the filtered artworks
    - pick endpoint resolves a hit against the same scene
    - step endpoint returns the next camera
    """

    def setUp(self):
        self.client = APIClient()
        artist = User.objects.create_user(email="artist@example.com", password="pass", role="artist")
        self.artwork = Artwork.objects.create(artist=artist, title="Dawn", category="Painting")
        Artwork.objects.create(artist=artist, title="Pixel", category="Digital Art")

    def test_scene(self):
        response = self.client.get("/api/gallery3d/scene/", {"category": "Painting"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual([p["artwork_id"] for p in response.data["placements"]], [str(self.artwork.id)])
        self.assertEqual(response.data["query"]["category"], "Painting")

    def test_pick(self):
        response = self.client.post(
            "/api/gallery3d/pick/",
            {"ndc_x": 0, "ndc_y": 0, "aspect": 1.5, "query": {"category": "Painting"}},
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["hit"]["artwork_id"], str(self.artwork.id))

    def test_pick_rejects_out_of_range(self):
        response = self.client.post("/api/gallery3d/pick/", {"ndc_x": 3, "ndc_y": 0, "aspect": 1}, format="json")
        self.assertEqual(response.status_code, 400)

    def test_step(self):
        response = self.client.post(
            "/api/gallery3d/step/",
            {"camera": {"position": {"x": 0, "y": 1, "z": 5}}, "keys": ["w"], "dt": 0.1},
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["camera"]["position"]["z"], 4.5)
