"""
PATH: payments/views/webhook.py

STRIPE WEBHOOK

- Signature (Stripe-Signature header) is checked against the raw body
  before anything is parsed; bad signatures get 400.
- Every verified event is acknowledged with 200, including unknown
  sessions and internal failures (logged), so the provider stops retrying.
"""

from __future__ import annotations

import json
import logging

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView

from payments.services.checkout import handle_event
from payments.services.stripe_client import verify_stripe_signature

logger = logging.getLogger(__name__)


class WebhookThrottle(AnonRateThrottle):
    scope = "webhook"


class StripeWebhookView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [WebhookThrottle]

    def post(self, request, *args, **kwargs):
        raw_body = request.body or b""
        signature = request.headers.get("Stripe-Signature")

        logger.info("Stripe webhook received")

        if not verify_stripe_signature(payload=raw_body, header=signature):
            logger.warning("Invalid Stripe signature")
            return Response({"ok": False, "detail": "Invalid signature"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            event = json.loads(raw_body.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            logger.warning("Webhook body is not JSON")
            return Response({"ok": False, "detail": "Invalid payload"}, status=status.HTTP_400_BAD_REQUEST)

        event_id = str(event.get("id") or "") if isinstance(event, dict) else ""

        try:
            detail = handle_event(event if isinstance(event, dict) else {})
        except Exception:
            logger.exception("Unhandled webhook error", extra={"event_id": event_id})
            return Response({"ok": True, "detail": "Unhandled error"}, status=status.HTTP_200_OK)

        logger.info("Webhook processed", extra={"event_id": event_id, "detail": detail})
        return Response({"ok": True, "detail": detail}, status=status.HTTP_200_OK)
