# artworks/serializers/comment.py

from rest_framework import serializers

from artworks.models import COMMENT_MAX_LENGTH, Comment


class CommentSerializer(serializers.ModelSerializer):
    user_id = serializers.UUIDField(read_only=True)
    username = serializers.CharField(source="user.username", read_only=True)
    avatar = serializers.CharField(source="user.avatar", read_only=True)

    class Meta:
        model = Comment
        fields = ["id", "artwork", "user_id", "username", "avatar", "text", "created_at"]
        read_only_fields = ["id", "artwork", "user_id", "username", "avatar", "created_at"]


class CommentCreateSerializer(serializers.Serializer):
    text = serializers.CharField(max_length=COMMENT_MAX_LENGTH, trim_whitespace=True)
