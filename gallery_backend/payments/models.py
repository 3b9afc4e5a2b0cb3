# payments/models.py

import uuid

from django.conf import settings
from django.db import models


class Order(models.Model):
    """
    One hosted-checkout purchase of one artwork.

    Key rule:
    - Order is created PENDING when the checkout session is opened
    - It becomes PAID only after the provider confirms payment
      (webhook or session status check); both paths are idempotent
    - A paid order takes the artwork off sale
    """

    STATUS_PENDING = "pending"
    STATUS_PAID = "paid"
    STATUS_CANCELLED = "cancelled"
    STATUS_FAILED = "failed"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_PAID, "Paid"),
        (STATUS_CANCELLED, "Cancelled"),
        (STATUS_FAILED, "Failed"),
    ]

    PROVIDER_STRIPE = "stripe"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # null for guest checkout
    buyer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )
    artwork = models.ForeignKey(
        "artworks.Artwork",
        on_delete=models.SET_NULL,
        null=True,
        related_name="orders",
    )
    artist = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="sales",
    )
    artwork_title = models.CharField(max_length=200, blank=True, default="")

    amount_cents = models.PositiveIntegerField()
    currency = models.CharField(max_length=3, default="usd")

    provider = models.CharField(max_length=20, default=PROVIDER_STRIPE)
    session_id = models.CharField(max_length=255, unique=True)
    checkout_url = models.URLField(max_length=2000, blank=True, default="")

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    provider_payload = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    paid_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["buyer", "created_at"], name="order_buyer_created_idx"),
            models.Index(fields=["status"], name="order_status_idx"),
        ]

    @property
    def is_paid(self) -> bool:
        return self.status == self.STATUS_PAID

    def __str__(self):
        return f"Order {self.id} ({self.status})"
