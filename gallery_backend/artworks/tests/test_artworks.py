from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from artworks.models import Artwork, Comment, Like

User = get_user_model()


class ArtworkCrudTests(TestCase):
    """
    GUARANTEES:
    - only upload-capable roles create artworks; artist = requester
    - defaults: title "Untitled", category "Other", current year
    - owner or admin edits/deletes; others get 403
    - detail bumps the view counter
    - related: same category or same artist, never itself
    """

    def setUp(self):
        self.client = APIClient()
        self.artist = User.objects.create_user(email="artist@example.com", password="pass", role="artist")
        self.other_artist = User.objects.create_user(email="other@example.com", password="pass", role="artist")
        self.visitor = User.objects.create_user(email="visitor@example.com", password="pass")
        self.admin = User.objects.create_user(email="admin@example.com", password="pass", role="admin")

        self.artwork = Artwork.objects.create(artist=self.artist, title="Dawn", category="Painting")

    def test_artist_creates_with_defaults(self):
        self.client.force_authenticate(self.artist)

        response = self.client.post(
            "/api/artworks/",
            {"title": "  ", "image_url": "https://img.example.com/a.jpg", "tags": ["Blue", "blue", "sky"]},
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["title"], "Untitled")
        self.assertEqual(response.data["category"], "Other")
        self.assertEqual(response.data["year"], timezone.now().year)
        self.assertEqual(response.data["artist"]["id"], str(self.artist.id))
        self.assertEqual(sorted(response.data["tags"]), ["blue", "sky"])

    def test_visitor_cannot_create(self):
        self.client.force_authenticate(self.visitor)
        response = self.client.post("/api/artworks/", {"title": "Nope"}, format="json")
        self.assertEqual(response.status_code, 403)

    def test_for_sale_requires_price(self):
        self.client.force_authenticate(self.artist)
        response = self.client.post("/api/artworks/", {"title": "Sale", "is_for_sale": True}, format="json")
        self.assertEqual(response.status_code, 400)

    def test_owner_updates(self):
        self.client.force_authenticate(self.artist)
        response = self.client.patch(
            f"/api/artworks/{self.artwork.id}/",
            {"price": "250.00", "is_for_sale": True},
            format="json",
        )
        self.assertEqual(response.status_code, 200)
        self.artwork.refresh_from_db()
        self.assertEqual(self.artwork.price, Decimal("250.00"))

    def test_non_owner_cannot_update_or_delete(self):
        self.client.force_authenticate(self.other_artist)

        response = self.client.patch(f"/api/artworks/{self.artwork.id}/", {"title": "Mine"}, format="json")
        self.assertEqual(response.status_code, 403)

        response = self.client.delete(f"/api/artworks/{self.artwork.id}/")
        self.assertEqual(response.status_code, 403)

    def test_admin_deletes_and_cascades(self):
        Comment.objects.create(artwork=self.artwork, user=self.visitor, text="Lovely")
        Like.objects.create(artwork=self.artwork, user=self.visitor)
        self.client.force_authenticate(self.admin)

        response = self.client.delete(f"/api/artworks/{self.artwork.id}/")

        self.assertEqual(response.status_code, 204)
        self.assertFalse(Comment.objects.exists())
        self.assertFalse(Like.objects.exists())

    def test_retrieve_increments_views(self):
        self.client.get(f"/api/artworks/{self.artwork.id}/")
        response = self.client.get(f"/api/artworks/{self.artwork.id}/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["views"], 2)
        self.assertFalse(response.data["has_liked"])

    def test_unknown_artwork_is_404(self):
        response = self.client.get("/api/artworks/00000000-0000-0000-0000-000000000000/")
        self.assertEqual(response.status_code, 404)

    def test_related(self):
        same_category = Artwork.objects.create(artist=self.other_artist, title="Dusk", category="Painting")
        same_artist = Artwork.objects.create(artist=self.artist, title="Stone", category="Sculpture")
        Artwork.objects.create(artist=self.other_artist, title="Pixel", category="Digital Art")

        response = self.client.get(f"/api/artworks/{self.artwork.id}/related/")

        self.assertEqual(response.status_code, 200)
        ids = {row["id"] for row in response.data}
        self.assertEqual(ids, {str(same_category.id), str(same_artist.id)})
