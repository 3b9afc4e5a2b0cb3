import shutil
import tempfile
from io import StringIO

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.core.management import call_command
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from artworks.models import Artwork
from exhibitions.models import Exhibition
from social.models import Follow

User = get_user_model()

MEDIA_ROOT = tempfile.mkdtemp()


@override_settings(MEDIA_ROOT=MEDIA_ROOT, UPLOAD_MAX_BYTES=1024)
class ImageUploadTests(TestCase):
    """
    GUARANTEES:
    - artists upload images and get back a URL
    - non-image types and oversized files are rejected
    - visitors cannot upload
    """

    @classmethod
    def tearDownClass(cls):
        shutil.rmtree(MEDIA_ROOT, ignore_errors=True)
        super().tearDownClass()

    def setUp(self):
        self.client = APIClient()
        self.artist = User.objects.create_user(email="artist@example.com", password="pass", role="artist")
        self.visitor = User.objects.create_user(email="visitor@example.com", password="pass")

    def test_artist_uploads_image(self):
        self.client.force_authenticate(self.artist)
        upload = SimpleUploadedFile("dawn.png", b"\x89PNG fake", content_type="image/png")

        response = self.client.post("/api/artworks/uploads/", {"file": upload}, format="multipart")

        self.assertEqual(response.status_code, 201)
        self.assertTrue(response.data["path"].startswith(f"artworks/{self.artist.pk}/"))
        self.assertTrue(response.data["path"].endswith(".png"))
        self.assertIn("/media/", response.data["url"])

    def test_rejects_wrong_type(self):
        self.client.force_authenticate(self.artist)
        upload = SimpleUploadedFile("notes.txt", b"hello", content_type="text/plain")

        response = self.client.post("/api/artworks/uploads/", {"file": upload}, format="multipart")

        self.assertEqual(response.status_code, 400)

    def test_rejects_oversized(self):
        self.client.force_authenticate(self.artist)
        upload = SimpleUploadedFile("big.jpg", b"x" * 2048, content_type="image/jpeg")

        response = self.client.post("/api/artworks/uploads/", {"file": upload}, format="multipart")

        self.assertEqual(response.status_code, 400)

    def test_missing_file(self):
        self.client.force_authenticate(self.artist)
        response = self.client.post("/api/artworks/uploads/", {}, format="multipart")
        self.assertEqual(response.status_code, 400)

    def test_visitor_forbidden(self):
        self.client.force_authenticate(self.visitor)
        upload = SimpleUploadedFile("dawn.png", b"\x89PNG", content_type="image/png")

        response = self.client.post("/api/artworks/uploads/", {"file": upload}, format="multipart")

        self.assertEqual(response.status_code, 403)


class ArtistDashboardTests(TestCase):
    """
    GUARANTEES:
    - totals cover only the requesting artist's artworks
    - follower count is included
    - visitors are refused
    """

    def setUp(self):
        self.client = APIClient()
        self.artist = User.objects.create_user(email="artist@example.com", password="pass", role="artist")
        self.other = User.objects.create_user(email="other@example.com", password="pass", role="artist")
        self.fan = User.objects.create_user(email="fan@example.com", password="pass")

        Artwork.objects.create(artist=self.artist, title="A", views=10, likes=2)
        Artwork.objects.create(artist=self.artist, title="B", views=5, likes=1)
        Artwork.objects.create(artist=self.other, title="C", views=99, likes=99)
        Follow.objects.create(follower=self.fan, artist=self.artist)

    def test_stats(self):
        self.client.force_authenticate(self.artist)

        response = self.client.get("/api/artworks/dashboard/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.data["stats"],
            {"total_artworks": 2, "total_views": 15, "total_likes": 3, "total_followers": 1},
        )
        self.assertEqual(len(response.data["artworks"]), 2)

    def test_empty_dashboard(self):
        newcomer = User.objects.create_user(email="new@example.com", password="pass", role="artist")
        self.client.force_authenticate(newcomer)

        response = self.client.get("/api/artworks/dashboard/")

        self.assertEqual(response.data["stats"]["total_views"], 0)
        self.assertEqual(response.data["artworks"], [])

    def test_visitor_forbidden(self):
        self.client.force_authenticate(self.fan)
        self.assertEqual(self.client.get("/api/artworks/dashboard/").status_code, 403)


class SeedGalleryCommandTests(TestCase):
    """
    GUARANTEES:
    - seeding creates demo artists, artworks and exhibitions
    - running it twice does not duplicate rows
    """

    def test_idempotent(self):
        call_command("seed_gallery", stdout=StringIO())
        counts = (User.objects.count(), Artwork.objects.count(), Exhibition.objects.count())

        call_command("seed_gallery", stdout=StringIO())

        self.assertEqual(counts, (User.objects.count(), Artwork.objects.count(), Exhibition.objects.count()))
        self.assertGreater(counts[1], 0)
        self.assertGreater(counts[2], 0)
