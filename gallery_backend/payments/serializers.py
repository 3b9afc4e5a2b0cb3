# payments/serializers.py

from rest_framework import serializers

from payments.models import Order


class CheckoutCreateSerializer(serializers.Serializer):
    artwork_id = serializers.UUIDField()


class CheckoutCreateResponseSerializer(serializers.Serializer):
    session_id = serializers.CharField()
    url = serializers.URLField()
    order_id = serializers.UUIDField()


class OrderSerializer(serializers.ModelSerializer):
    artwork_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "artwork_id",
            "artwork_title",
            "amount_cents",
            "currency",
            "status",
            "session_id",
            "created_at",
            "paid_at",
        ]
        read_only_fields = fields
