# social/serializers.py

from django.contrib.auth import get_user_model
from rest_framework import serializers

User = get_user_model()


class ArtistListSerializer(serializers.ModelSerializer):
    artworks_count = serializers.IntegerField(read_only=True)
    followers_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = User
        fields = ["id", "username", "avatar", "bio", "artworks_count", "followers_count"]
        read_only_fields = fields


class FollowResultSerializer(serializers.Serializer):
    following = serializers.BooleanField()
    followers = serializers.IntegerField()
