"""
PATH: users/models/user.py

CUSTOM USER MODEL (GALLERY PROFILE)

Identity:
- Registration accepts email (required) and username (optional).
- If username is missing it is derived from the email local-part,
  made unique with a numeric suffix.
- Login accepts EITHER username OR email (not both), enforced by the
  custom auth backend.

Profile:
- role drives permissions (visitor / artist / admin).
- bio, avatar, website and social handles are public profile data.
"""

from __future__ import annotations

import uuid

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.core.exceptions import ValidationError
from django.db import models

from permissions.roles import ROLE_ADMIN, ROLE_CHOICES, ROLE_VISITOR


# ---------------- USER MANAGER ----------------
class UserManager(BaseUserManager):
    def _unique_username(self, base: str) -> str:
        base = (base or "user").strip().lower() or "user"
        candidate = base
        i = 1
        while self.model.objects.filter(username__iexact=candidate).exists():
            i += 1
            candidate = f"{base}{i}"
        return candidate

    def create_user(self, email=None, password=None, **extra_fields):
        """
        Supported call shapes:
        - create_user(email="a@b.com", password="x", username="sophia")
        - create_user(username="sophia", password="x")   (email auto-generated)
        - create_user(email="a@b.com", password="x")      (username derived)
        """
        username = (extra_fields.pop("username", None) or "").strip()
        email = (email or extra_fields.pop("email", None) or "").strip()

        if not email and not username:
            raise ValueError("Provide at least email or username")

        if not email and username:
            email = f"{username.lower()}@local.test"

        email = self.normalize_email(email)

        if not username:
            username = self._unique_username(email.split("@")[0])

        extra_fields.setdefault("is_active", True)
        extra_fields.setdefault("role", ROLE_VISITOR)

        user = self.model(email=email, username=username, **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.full_clean(exclude=["password"])
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("Superuser must have an email")
        if not password:
            raise ValueError("Superuser must have a password")

        extra_fields.setdefault("role", ROLE_ADMIN)
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("is_active", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True")

        return self.create_user(email=email, password=password, **extra_fields)


# ---------------- USER MODEL ----------------
class User(AbstractBaseUser, PermissionsMixin):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    username = models.CharField(max_length=150, unique=True)
    email = models.EmailField(unique=True)

    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_VISITOR)

    bio = models.TextField(blank=True, default="")
    avatar = models.URLField(max_length=500, blank=True, default="")
    website = models.URLField(max_length=500, blank=True, default="")

    instagram = models.CharField(max_length=100, blank=True, default="")
    twitter = models.CharField(max_length=100, blank=True, default="")
    facebook = models.CharField(max_length=100, blank=True, default="")

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []  # username is auto-derived if missing

    class Meta:
        ordering = ["-created_at"]

    @property
    def social_links(self) -> dict:
        return {
            "instagram": self.instagram,
            "twitter": self.twitter,
            "facebook": self.facebook,
        }

    def clean(self):
        if self.email:
            self.email = self.__class__.objects.normalize_email(self.email).strip()
        self.username = (self.username or "").strip()

        if not self.username:
            raise ValidationError({"username": "Username cannot be blank"})
        if "@" in self.username:
            # "@" is how the auth backend tells emails from usernames
            raise ValidationError({"username": "Username cannot contain '@'"})

    def __str__(self):
        return f"{self.username} ({self.role})"
