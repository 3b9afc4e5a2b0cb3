from datetime import timedelta
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from artworks.models import Artwork
from notifications.models import Notification
from notifications.services.notify import notify, notify_like
from notifications.views import FEED_LIMIT

User = get_user_model()


class NotifyServiceTests(TestCase):
    """
    GUARANTEES:
    - self-actions never create a notification
    - content is capped at 500 characters
    """

    def setUp(self):
        self.artist = User.objects.create_user(email="artist@example.com", username="artist", password="pass", role="artist")
        self.fan = User.objects.create_user(email="fan@example.com", username="fan", password="pass")

    def test_self_action_skipped(self):
        artwork = Artwork.objects.create(artist=self.artist, title="Dawn")
        self.assertIsNone(notify_like(artwork=artwork, sender=self.artist))
        self.assertFalse(Notification.objects.exists())

    def test_content_capped(self):
        note = notify(
            recipient=self.artist,
            sender=self.fan,
            type=Notification.TYPE_MENTION,
            content="x" * 900,
        )
        self.assertEqual(len(note.content), 500)


class NotificationApiTests(TestCase):
    """
    GUARANTEES:
    - users only ever see their own notifications, newest first
    - a missing sender renders as "Unknown User"
    - unread count, mark one read, mark all read
    - marking someone else's notification is 404
    - feed returns rows created after `since`
    """

    def setUp(self):
        self.client = APIClient()
        self.artist = User.objects.create_user(email="artist@example.com", username="artist", password="pass", role="artist")
        self.fan = User.objects.create_user(email="fan@example.com", username="fan", password="pass")

        self.liked = Notification.objects.create(
            recipient=self.artist, sender=self.fan, type=Notification.TYPE_LIKE, content="fan liked"
        )
        self.orphan = Notification.objects.create(
            recipient=self.artist, sender=None, type=Notification.TYPE_FOLLOW, content="someone followed"
        )
        self.for_fan = Notification.objects.create(
            recipient=self.fan, sender=self.artist, type=Notification.TYPE_FOLLOW, content="artist followed"
        )

        self.client.force_authenticate(self.artist)

    def test_list_scoped_and_sender_fallback(self):
        response = self.client.get("/api/notifications/")

        self.assertEqual(response.status_code, 200)
        rows = {row["id"]: row for row in response.data["results"]}
        self.assertEqual(set(rows), {str(self.liked.id), str(self.orphan.id)})
        self.assertEqual(rows[str(self.liked.id)]["sender_name"], "fan")
        self.assertEqual(rows[str(self.orphan.id)]["sender_name"], "Unknown User")

    def test_unread_count_and_mark_read(self):
        self.assertEqual(self.client.get("/api/notifications/unread-count/").data, {"unread_count": 2})

        response = self.client.post(f"/api/notifications/{self.liked.id}/read/")
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.data["is_read"])

        self.assertEqual(self.client.get("/api/notifications/unread-count/").data, {"unread_count": 1})

    def test_cannot_mark_other_users_notification(self):
        response = self.client.post(f"/api/notifications/{self.for_fan.id}/read/")

        self.assertEqual(response.status_code, 404)
        self.for_fan.refresh_from_db()
        self.assertFalse(self.for_fan.is_read)

    def test_mark_all_read(self):
        response = self.client.post("/api/notifications/read-all/")

        self.assertEqual(response.data, {"updated": 2})
        self.assertFalse(Notification.objects.filter(recipient=self.artist, is_read=False).exists())
        self.for_fan.refresh_from_db()
        self.assertFalse(self.for_fan.is_read)

    def test_feed_since(self):
        cutoff = timezone.now()
        Notification.objects.filter(pk__in=[self.liked.pk, self.orphan.pk]).update(
            created_at=cutoff - timedelta(hours=1)
        )
        fresh = Notification.objects.create(
            recipient=self.artist, sender=self.fan, type=Notification.TYPE_COMMENT, content="new comment"
        )

        response = self.client.get("/api/notifications/feed/", {"since": cutoff.isoformat()})

        self.assertEqual(response.status_code, 200)
        self.assertEqual([row["id"] for row in response.data["results"]], [str(fresh.id)])
        self.assertIn("server_time", response.data)

    def test_feed_rejects_bad_since(self):
        response = self.client.get("/api/notifications/feed/", {"since": "yesterday"})
        self.assertEqual(response.status_code, 400)

    def test_requires_auth(self):
        self.assertEqual(APIClient().get("/api/notifications/").status_code, 401)


class NotificationFeedPollingTests(TestCase):
    """
    GUARANTEES:
    - polling with the returned server_time delivers every row exactly once,
      even when more than one page is waiting
    - rows created while a poll is being served arrive in the next poll
    - pages are oldest first
    """

    def setUp(self):
        self.client = APIClient()
        self.artist = User.objects.create_user(email="artist@example.com", username="artist", password="pass", role="artist")
        self.fan = User.objects.create_user(email="fan@example.com", username="fan", password="pass")
        self.client.force_authenticate(self.artist)
        self.start = timezone.now() - timedelta(hours=1)

    def _create(self, created_at):
        note = Notification.objects.create(
            recipient=self.artist, sender=self.fan, type=Notification.TYPE_LIKE, content="fan liked"
        )
        Notification.objects.filter(pk=note.pk).update(created_at=created_at)
        return note

    def _poll(self, since):
        response = self.client.get("/api/notifications/feed/", {"since": since})
        self.assertEqual(response.status_code, 200)
        return response.data

    def test_backlog_larger_than_a_page(self):
        total = FEED_LIMIT + 50
        created = {
            str(self._create(self.start + timedelta(milliseconds=i + 1)).id) for i in range(total)
        }

        delivered = []
        since = self.start.isoformat()
        for _ in range(5):
            data = self._poll(since)
            delivered.extend(row["id"] for row in data["results"])
            since = data["server_time"]
            if not data["has_more"]:
                break

        self.assertEqual(len(delivered), total)
        self.assertEqual(set(delivered), created)

        # nothing is replayed afterwards
        self.assertEqual(self._poll(since)["results"], [])

    def test_first_page_is_oldest_first(self):
        for i in range(FEED_LIMIT + 1):
            self._create(self.start + timedelta(seconds=i + 1))

        data = self._poll(self.start.isoformat())

        self.assertTrue(data["has_more"])
        self.assertEqual(len(data["results"]), FEED_LIMIT)
        stamps = [row["created_at"] for row in data["results"]]
        self.assertEqual(stamps, sorted(stamps))

    def test_timestamp_tie_is_not_split(self):
        for i in range(FEED_LIMIT - 1):
            self._create(self.start + timedelta(seconds=i + 1))
        tie = self.start + timedelta(seconds=FEED_LIMIT)
        tied = {str(self._create(tie).id) for _ in range(3)}

        first = self._poll(self.start.isoformat())
        second = self._poll(first["server_time"])

        first_ids = {row["id"] for row in first["results"]}
        second_ids = {row["id"] for row in second["results"]}
        self.assertFalse(first_ids & tied)
        self.assertEqual(second_ids, tied)

    def test_row_created_during_request_arrives_next_poll(self):
        real_now = timezone.now()
        served_at = real_now - timedelta(seconds=10)
        late = self._create(real_now - timedelta(seconds=5))

        # the request reads its clock before the late row exists
        with patch("notifications.views.timezone.now", return_value=served_at):
            first = self._poll(self.start.isoformat())

        self.assertNotIn(str(late.id), [row["id"] for row in first["results"]])

        second = self._poll(first["server_time"])
        self.assertEqual([row["id"] for row in second["results"]], [str(late.id)])
