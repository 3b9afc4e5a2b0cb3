# permissions/roles.py

from __future__ import annotations

from typing import Optional

from rest_framework.permissions import SAFE_METHODS, BasePermission


# =========================================================
# ROLE CONSTANTS (PROFILE ROLES)
# =========================================================
ROLE_VISITOR = "visitor"
ROLE_ARTIST = "artist"
ROLE_ADMIN = "admin"

ROLE_CHOICES = [
    (ROLE_VISITOR, "Visitor"),
    (ROLE_ARTIST, "Artist"),
    (ROLE_ADMIN, "Admin"),
]

# Roles a user may pick for themselves at registration.
SELF_ASSIGNABLE_ROLES = {ROLE_VISITOR, ROLE_ARTIST}


# =========================================================
# CAPABILITIES (THE REAL PERMISSION LANGUAGE)
# =========================================================
# Views should protect capabilities, not raw roles.
CAP_ARTWORK_UPLOAD = "artwork.upload"
CAP_ARTWORK_EDIT_ANY = "artwork.edit_any"
CAP_ARTWORK_DELETE_ANY = "artwork.delete_any"
CAP_COMMENT_DELETE_ANY = "comment.delete_any"
CAP_EXHIBITION_MANAGE = "exhibition.manage"
CAP_DASHBOARD_VIEW = "dashboard.view"

ALL_CAPABILITIES = {
    CAP_ARTWORK_UPLOAD,
    CAP_ARTWORK_EDIT_ANY,
    CAP_ARTWORK_DELETE_ANY,
    CAP_COMMENT_DELETE_ANY,
    CAP_EXHIBITION_MANAGE,
    CAP_DASHBOARD_VIEW,
}


# =========================================================
# ROLE → CAPABILITY MAP (DEFAULT)
# =========================================================
ROLE_CAPABILITIES: dict[str, set[str]] = {
    ROLE_ADMIN: {
        *ALL_CAPABILITIES,
    },
    ROLE_ARTIST: {
        CAP_ARTWORK_UPLOAD,
        CAP_DASHBOARD_VIEW,
    },
    # visitors browse, like, favorite, follow and comment; none of that
    # needs a capability beyond being authenticated
    ROLE_VISITOR: set(),
}


# =========================================================
# Helpers
# =========================================================
def get_user_role(user) -> Optional[str]:
    return getattr(user, "role", None)


def capabilities_for(user) -> set[str]:
    if not user or not getattr(user, "is_authenticated", False):
        return set()
    if getattr(user, "is_superuser", False):
        return set(ALL_CAPABILITIES)
    return set(ROLE_CAPABILITIES.get(get_user_role(user), set()))


def user_has_capability(user, capability: str) -> bool:
    return capability in capabilities_for(user)


# =========================================================
# Base Role Permission (Internal Use)
# =========================================================
class BaseRolePermission(BasePermission):
    """
    Base permission for role-based access control.

    Subclasses must define:
    - allowed_roles (set)
    """

    allowed_roles: set[str] = set()

    def has_permission(self, request, view):
        user = request.user

        if not user or not user.is_authenticated:
            return False

        user_role = get_user_role(user)
        if not user_role:
            return False

        return user_role in self.allowed_roles


# =========================================================
# Capability Permissions
# =========================================================
class HasCapability(BasePermission):
    """
    Require a specific capability.

    Usage:
        permission_classes = [IsAuthenticated, HasCapability]
        view.required_capability = CAP_ARTWORK_UPLOAD
    """

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False

        required = getattr(view, "required_capability", None)
        if not required:
            # deny-by-default
            return False

        return user_has_capability(user, required)


class HasAnyCapability(BasePermission):
    """
    Require ANY capability from a list.

    Usage:
        view.required_any_capabilities = {CAP_DASHBOARD_VIEW, CAP_ARTWORK_UPLOAD}
    """

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False

        required = getattr(view, "required_any_capabilities", None)
        if not required:
            return False

        caps = capabilities_for(user)
        return any(cap in caps for cap in set(required))


class IsOwnerOrAdmin(BasePermission):
    """
    Object-level guard for owned rows (artworks, comments).

    - Safe methods are always allowed.
    - Writes require the requester to own the object, or to hold the
      view's `override_capability` (admin-only capabilities).

    The owner attribute defaults to "artist"; views override it with
    `owner_field = "user"` etc.
    """

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        user = request.user
        return bool(user and user.is_authenticated)

    def has_object_permission(self, request, view, obj):
        if request.method in SAFE_METHODS:
            return True

        user = request.user
        owner_field = getattr(view, "owner_field", "artist")
        owner_id = getattr(obj, f"{owner_field}_id", None)

        if owner_id is not None and str(owner_id) == str(user.pk):
            return True

        override = getattr(view, "override_capability", None)
        if override and user_has_capability(user, override):
            return True

        return get_user_role(user) == ROLE_ADMIN


# =========================================================
# Role Permissions
# =========================================================
class IsAdmin(BaseRolePermission):
    allowed_roles = {ROLE_ADMIN}


class IsArtistOrAdmin(BaseRolePermission):
    allowed_roles = {ROLE_ARTIST, ROLE_ADMIN}
