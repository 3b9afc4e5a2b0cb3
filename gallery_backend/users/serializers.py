# users/serializers.py

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers
from rest_framework_simplejwt.tokens import RefreshToken

from permissions.roles import ROLE_VISITOR, SELF_ASSIGNABLE_ROLES

User = get_user_model()


def tokens_for(user) -> dict:
    refresh = RefreshToken.for_user(user)
    return {
        "access": str(refresh.access_token),
        "refresh": str(refresh),
    }


# ---------------- REGISTER ----------------
class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    username = serializers.CharField(required=False, allow_blank=True, max_length=150)
    password = serializers.CharField(
        write_only=True,
        validators=[validate_password],
        style={"input_type": "password"},
    )
    role = serializers.CharField(required=False, default=ROLE_VISITOR)

    def validate_email(self, value):
        value = User.objects.normalize_email((value or "").strip())
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("User with this email already exists")
        return value

    def validate_username(self, value):
        value = (value or "").strip()
        if not value:
            return ""
        if "@" in value:
            raise serializers.ValidationError("Username cannot contain '@'")
        if User.objects.filter(username__iexact=value).exists():
            raise serializers.ValidationError("Username is already taken")
        return value

    def validate_role(self, value):
        value = (value or ROLE_VISITOR).strip().lower()
        if value not in SELF_ASSIGNABLE_ROLES:
            raise serializers.ValidationError(
                f"role must be one of: {', '.join(sorted(SELF_ASSIGNABLE_ROLES))}"
            )
        return value

    def create(self, validated_data):
        return User.objects.create_user(
            email=validated_data["email"],
            username=validated_data.get("username") or None,
            password=validated_data["password"],
            role=validated_data.get("role", ROLE_VISITOR),
        )


# ---------------- LOGIN (INPUT ONLY) ----------------
class LoginSerializer(serializers.Serializer):
    """
    Input validation only.
    Authentication is handled in the view.

    Accepts either `identifier` (email or username) or one of `email` /
    `username`. Supplying both email and username is rejected.
    """

    identifier = serializers.CharField(required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    username = serializers.CharField(required=False, allow_blank=True)
    password = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
    )

    def validate(self, attrs):
        email = (attrs.get("email") or "").strip()
        username = (attrs.get("username") or "").strip()
        identifier = (attrs.get("identifier") or "").strip()

        if email and username:
            raise serializers.ValidationError("Provide either email or username, not both")

        identifier = identifier or email or username
        if not identifier:
            raise serializers.ValidationError("Provide an email or username")

        attrs["identifier"] = identifier
        return attrs


class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField()


# ---------------- USER OUTPUT ----------------
class UserSerializer(serializers.ModelSerializer):
    """
    Safe user representation for the signed-in user.
    """

    social_links = serializers.DictField(read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "role",
            "bio",
            "avatar",
            "website",
            "social_links",
            "created_at",
        ]
        read_only_fields = fields


class PublicProfileSerializer(serializers.ModelSerializer):
    """
    Profile as other users see it (no email).
    """

    social_links = serializers.DictField(read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "role",
            "bio",
            "avatar",
            "website",
            "social_links",
            "created_at",
        ]
        read_only_fields = fields


class ProfileUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = [
            "username",
            "bio",
            "avatar",
            "website",
            "instagram",
            "twitter",
            "facebook",
        ]

    def validate_username(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Username cannot be blank")
        if "@" in value:
            raise serializers.ValidationError("Username cannot contain '@'")
        qs = User.objects.filter(username__iexact=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("Username is already taken")
        return value
