from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from artworks.models import COMMENT_MAX_LENGTH, Artwork, Comment, Favorite, Like
from notifications.models import Notification

User = get_user_model()


class LikeFavoriteTests(TestCase):
    """
    GUARANTEES:
    - like toggles: second call removes the like, counter never negative
    - liking notifies the artist once; self-likes do not notify
    - favorite toggles and the favorites list shows saved artworks
    - anonymous users cannot like
    """

    def setUp(self):
        self.client = APIClient()
        self.artist = User.objects.create_user(email="artist@example.com", username="artist", password="pass", role="artist")
        self.fan = User.objects.create_user(email="fan@example.com", username="fan", password="pass")
        self.artwork = Artwork.objects.create(artist=self.artist, title="Dawn")

    def test_like_toggle(self):
        self.client.force_authenticate(self.fan)
        url = f"/api/artworks/{self.artwork.id}/like/"

        first = self.client.post(url)
        self.assertEqual(first.status_code, 200)
        self.assertEqual(first.data, {"liked": True, "likes": 1})

        second = self.client.post(url)
        self.assertEqual(second.data, {"liked": False, "likes": 0})
        self.assertFalse(Like.objects.exists())

    def test_like_notifies_artist(self):
        self.client.force_authenticate(self.fan)
        self.client.post(f"/api/artworks/{self.artwork.id}/like/")

        note = Notification.objects.get()
        self.assertEqual(note.recipient, self.artist)
        self.assertEqual(note.sender, self.fan)
        self.assertEqual(note.type, Notification.TYPE_LIKE)
        self.assertEqual(note.artwork, self.artwork)

    def test_self_like_does_not_notify(self):
        self.client.force_authenticate(self.artist)
        self.client.post(f"/api/artworks/{self.artwork.id}/like/")
        self.assertFalse(Notification.objects.exists())

    def test_counter_never_negative(self):
        Like.objects.create(user=self.fan, artwork=self.artwork)
        self.client.force_authenticate(self.fan)

        response = self.client.post(f"/api/artworks/{self.artwork.id}/like/")

        self.assertEqual(response.data, {"liked": False, "likes": 0})

    def test_anonymous_cannot_like(self):
        response = self.client.post(f"/api/artworks/{self.artwork.id}/like/")
        self.assertEqual(response.status_code, 401)

    def test_favorite_toggle_and_list(self):
        self.client.force_authenticate(self.fan)
        url = f"/api/artworks/{self.artwork.id}/favorite/"

        self.assertEqual(self.client.post(url).data, {"favorited": True})

        listing = self.client.get("/api/artworks/favorites/")
        self.assertEqual([row["id"] for row in listing.data], [str(self.artwork.id)])

        detail = self.client.get(f"/api/artworks/{self.artwork.id}/")
        self.assertTrue(detail.data["has_favorited"])

        self.assertEqual(self.client.post(url).data, {"favorited": False})
        self.assertFalse(Favorite.objects.exists())


class CommentTests(TestCase):
    """
    GUARANTEES:
    - comments are listed newest first with author info
    - empty or too-long comments are rejected
    - author or admin may delete; anyone else gets 403
    """

    def setUp(self):
        self.client = APIClient()
        self.artist = User.objects.create_user(email="artist@example.com", username="artist", password="pass", role="artist")
        self.fan = User.objects.create_user(email="fan@example.com", username="fan", password="pass")
        self.stranger = User.objects.create_user(email="x@example.com", username="stranger", password="pass")
        self.admin = User.objects.create_user(email="admin@example.com", password="pass", role="admin")
        self.artwork = Artwork.objects.create(artist=self.artist, title="Dawn")
        self.url = f"/api/artworks/{self.artwork.id}/comments/"

    def test_post_and_list(self):
        self.client.force_authenticate(self.fan)

        response = self.client.post(self.url, {"text": "  Stunning work  "}, format="json")

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["text"], "Stunning work")
        self.assertEqual(response.data["username"], "fan")

        listing = APIClient().get(self.url)
        self.assertEqual(listing.status_code, 200)
        self.assertEqual(len(listing.data), 1)

        note = Notification.objects.get()
        self.assertEqual(note.type, Notification.TYPE_COMMENT)
        self.assertEqual(note.recipient, self.artist)

    def test_rejects_blank_and_long(self):
        self.client.force_authenticate(self.fan)

        blank = self.client.post(self.url, {"text": "   "}, format="json")
        self.assertEqual(blank.status_code, 400)

        too_long = self.client.post(self.url, {"text": "x" * (COMMENT_MAX_LENGTH + 1)}, format="json")
        self.assertEqual(too_long.status_code, 400)

        self.assertFalse(Comment.objects.exists())

    def test_delete_permissions(self):
        comment = Comment.objects.create(artwork=self.artwork, user=self.fan, text="Nice")
        url = f"/api/artworks/comments/{comment.id}/"

        self.client.force_authenticate(self.stranger)
        self.assertEqual(self.client.delete(url).status_code, 403)

        self.client.force_authenticate(self.fan)
        self.assertEqual(self.client.delete(url).status_code, 204)
        self.assertFalse(Comment.objects.exists())

    def test_admin_deletes_any_comment(self):
        comment = Comment.objects.create(artwork=self.artwork, user=self.fan, text="Nice")
        self.client.force_authenticate(self.admin)

        response = self.client.delete(f"/api/artworks/comments/{comment.id}/")

        self.assertEqual(response.status_code, 204)
