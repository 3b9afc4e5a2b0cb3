"""
PATH: users/auth_backends.py

AUTH BACKEND: Email OR Username login (not both)

Rules:
- Login accepts EITHER:
  - email (identifier contains "@"), OR
  - username (identifier without "@")
- If request supplies both email + username -> authentication fails (returns None).
  API layer returns 400 before reaching here; the backend still refuses.

This is used by Django authenticate() and the DRF login view.
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.backends import BaseBackend

User = get_user_model()


class EmailOrUsernameBackend(BaseBackend):
    def authenticate(self, request, username=None, password=None, **kwargs):
        email_kw = (kwargs.get("email") or "").strip()
        identifier_kw = (kwargs.get("identifier") or "").strip()

        if email_kw and (username or "").strip():
            return None

        identifier = (identifier_kw or username or email_kw or "").strip()
        if not identifier or password is None:
            return None

        lookup = "email__iexact" if "@" in identifier else "username__iexact"

        try:
            user = User.objects.get(**{lookup: identifier})
        except User.DoesNotExist:
            # Run the hasher anyway so timing does not reveal unknown accounts.
            User().set_password(password)
            return None

        if not user.is_active:
            return None

        if user.check_password(password):
            return user

        return None

    def get_user(self, user_id):
        try:
            return User.objects.get(pk=user_id)
        except User.DoesNotExist:
            return None
