# exhibitions/serializers.py

from __future__ import annotations

from django.contrib.auth import get_user_model
from rest_framework import serializers

from artworks.models import Artwork
from exhibitions.models import Exhibition, ExhibitionMessage

User = get_user_model()


class ExhibitionSerializer(serializers.ModelSerializer):
    status = serializers.CharField(read_only=True)
    attendees = serializers.SerializerMethodField()
    featured_artists = serializers.PrimaryKeyRelatedField(
        many=True, queryset=User.objects.all(), required=False
    )
    artworks = serializers.PrimaryKeyRelatedField(
        many=True, queryset=Artwork.objects.all(), required=False
    )

    class Meta:
        model = Exhibition
        fields = [
            "id",
            "title",
            "description",
            "image_url",
            "start",
            "end",
            "status",
            "is_virtual",
            "location",
            "organizer",
            "featured",
            "featured_artists",
            "artworks",
            "attendees",
            "created_at",
        ]
        read_only_fields = ["id", "status", "attendees", "created_at"]

    def get_attendees(self, obj) -> int:
        annotated = getattr(obj, "attendees_count", None)
        if annotated is not None:
            return annotated
        return obj.attendances.count()

    def validate(self, attrs):
        start = attrs.get("start", getattr(self.instance, "start", None))
        end = attrs.get("end", getattr(self.instance, "end", None))
        if start and end and end < start:
            raise serializers.ValidationError({"end": "End must not be before start."})
        return attrs


class ExhibitionDetailSerializer(ExhibitionSerializer):
    is_attending = serializers.SerializerMethodField()

    class Meta(ExhibitionSerializer.Meta):
        fields = ExhibitionSerializer.Meta.fields + ["is_attending"]

    def get_is_attending(self, obj) -> bool:
        request = self.context.get("request")
        user = getattr(request, "user", None)
        if not user or not user.is_authenticated:
            return False
        return obj.attendances.filter(user=user).exists()


class ExhibitionMessageSerializer(serializers.ModelSerializer):
    user_id = serializers.UUIDField(read_only=True)
    username = serializers.CharField(source="user.username", read_only=True)

    class Meta:
        model = ExhibitionMessage
        fields = ["id", "user_id", "username", "message", "created_at"]
        read_only_fields = ["id", "user_id", "username", "created_at"]

    def validate_message(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Message cannot be empty")
        return value
