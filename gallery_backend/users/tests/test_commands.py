from io import StringIO
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase

User = get_user_model()

ADMIN_ENV = {"AUTO_ADMIN_EMAIL": "curator@example.com", "AUTO_ADMIN_PASSWORD": "s3cret-pass"}


class EnsureSuperuserCommandTests(TestCase):
    """
    GUARANTEES:
    - missing env vars skip without creating anyone
    - creates an admin-role superuser from env
    - re-running promotes/updates the same account instead of duplicating
    """

    def test_skips_without_env(self):
        with patch.dict("os.environ", {}, clear=True):
            call_command("ensure_superuser", stdout=StringIO())
        self.assertFalse(User.objects.exists())

    def test_creates_admin(self):
        with patch.dict("os.environ", ADMIN_ENV):
            call_command("ensure_superuser", stdout=StringIO())

        admin = User.objects.get(email="curator@example.com")
        self.assertEqual(admin.role, "admin")
        self.assertTrue(admin.is_superuser)
        self.assertTrue(admin.check_password("s3cret-pass"))

    def test_promotes_existing_user(self):
        User.objects.create_user(email="curator@example.com", password="old")

        with patch.dict("os.environ", ADMIN_ENV):
            call_command("ensure_superuser", stdout=StringIO())
            call_command("ensure_superuser", stdout=StringIO())

        self.assertEqual(User.objects.count(), 1)
        admin = User.objects.get()
        self.assertEqual(admin.role, "admin")
        self.assertTrue(admin.is_staff)
        self.assertTrue(admin.check_password("s3cret-pass"))
