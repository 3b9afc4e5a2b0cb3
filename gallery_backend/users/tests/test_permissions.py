from types import SimpleNamespace

from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.test import TestCase
from rest_framework.test import APIRequestFactory

from permissions.roles import (
    CAP_ARTWORK_UPLOAD,
    CAP_DASHBOARD_VIEW,
    CAP_EXHIBITION_MANAGE,
    HasAnyCapability,
    HasCapability,
    IsAdmin,
    IsArtistOrAdmin,
    IsOwnerOrAdmin,
    capabilities_for,
)

User = get_user_model()


class PermissionRoleTests(TestCase):
    """
    Tests for role -> capability permissions.

    GUARANTEES:
    - Admin holds every capability
    - Artists can upload and see their dashboard, nothing more
    - Visitors hold no capability
    - Anonymous users denied everywhere
    - Owned rows are writable by owner or admin only
    """

    def setUp(self):
        self.factory = APIRequestFactory()

        self.admin = User.objects.create_user(email="admin@example.com", password="pass", role="admin")
        self.artist = User.objects.create_user(email="artist@example.com", password="pass", role="artist")
        self.visitor = User.objects.create_user(email="visitor@example.com", password="pass", role="visitor")

    # --------------------------------------------------
    # Helpers
    # --------------------------------------------------

    def _request_for(self, user=None, method="get"):
        request = getattr(self.factory, method)("/")
        request.user = user or AnonymousUser()
        return request

    def _view(self, **attrs):
        return SimpleNamespace(**attrs)

    # --------------------------------------------------
    # CAPABILITIES
    # --------------------------------------------------

    def test_capability_map(self):
        self.assertIn(CAP_EXHIBITION_MANAGE, capabilities_for(self.admin))
        self.assertEqual(capabilities_for(self.artist), {CAP_ARTWORK_UPLOAD, CAP_DASHBOARD_VIEW})
        self.assertEqual(capabilities_for(self.visitor), set())
        self.assertEqual(capabilities_for(AnonymousUser()), set())

    def test_has_capability(self):
        view = self._view(required_capability=CAP_ARTWORK_UPLOAD)

        self.assertTrue(HasCapability().has_permission(self._request_for(self.artist), view))
        self.assertFalse(HasCapability().has_permission(self._request_for(self.visitor), view))
        self.assertFalse(HasCapability().has_permission(self._request_for(), view))

    def test_has_capability_denies_without_declaration(self):
        self.assertFalse(HasCapability().has_permission(self._request_for(self.admin), self._view()))

    def test_has_any_capability(self):
        view = self._view(required_any_capabilities={CAP_EXHIBITION_MANAGE, CAP_DASHBOARD_VIEW})

        self.assertTrue(HasAnyCapability().has_permission(self._request_for(self.artist), view))
        self.assertFalse(HasAnyCapability().has_permission(self._request_for(self.visitor), view))

    # --------------------------------------------------
    # ROLES
    # --------------------------------------------------

    def test_role_classes(self):
        self.assertTrue(IsAdmin().has_permission(self._request_for(self.admin), None))
        self.assertFalse(IsAdmin().has_permission(self._request_for(self.artist), None))
        self.assertTrue(IsArtistOrAdmin().has_permission(self._request_for(self.artist), None))
        self.assertFalse(IsArtistOrAdmin().has_permission(self._request_for(self.visitor), None))

    # --------------------------------------------------
    # OWNERSHIP
    # --------------------------------------------------

    def test_owner_or_admin(self):
        obj = SimpleNamespace(artist_id=self.artist.pk)
        view = self._view()
        perm = IsOwnerOrAdmin()

        self.assertTrue(perm.has_object_permission(self._request_for(self.visitor), view, obj))
        self.assertTrue(perm.has_object_permission(self._request_for(self.artist, "patch"), view, obj))
        self.assertTrue(perm.has_object_permission(self._request_for(self.admin, "delete"), view, obj))
        self.assertFalse(perm.has_object_permission(self._request_for(self.visitor, "delete"), view, obj))

    def test_owner_field_configurable(self):
        obj = SimpleNamespace(user_id=self.visitor.pk)
        view = self._view(owner_field="user")

        self.assertTrue(
            IsOwnerOrAdmin().has_object_permission(self._request_for(self.visitor, "delete"), view, obj)
        )
