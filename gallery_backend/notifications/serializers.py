# notifications/serializers.py

from rest_framework import serializers

from notifications.models import Notification

UNKNOWN_SENDER = "Unknown User"


class NotificationSerializer(serializers.ModelSerializer):
    sender_id = serializers.UUIDField(read_only=True, allow_null=True)
    sender_name = serializers.SerializerMethodField()
    sender_avatar = serializers.SerializerMethodField()
    artwork_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = Notification
        fields = [
            "id",
            "type",
            "content",
            "artwork_id",
            "sender_id",
            "sender_name",
            "sender_avatar",
            "is_read",
            "created_at",
        ]
        read_only_fields = fields

    def get_sender_name(self, obj) -> str:
        sender = obj.sender
        return (getattr(sender, "username", "") or UNKNOWN_SENDER) if sender else UNKNOWN_SENDER

    def get_sender_avatar(self, obj):
        sender = obj.sender
        return (sender.avatar or None) if sender else None
