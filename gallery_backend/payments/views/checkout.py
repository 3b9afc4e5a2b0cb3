"""
PATH: payments/views/checkout.py

HOSTED CHECKOUT (guest allowed)

- POST /payments/checkout/                     {artwork_id} -> {session_id, url, order_id}
- GET  /payments/sessions/<session_id>/        success page status check
- GET  /payments/orders/                       requester's orders

Errors:
- 404 unknown artwork / session
- 400 artwork not for sale or unpriced
- 502 provider failure
"""

from __future__ import annotations

import logging

from django.shortcuts import get_object_or_404
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.parsers import JSONParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import UserRateThrottle
from rest_framework.views import APIView

from artworks.models import Artwork
from payments.models import Order
from payments.serializers import (
    CheckoutCreateResponseSerializer,
    CheckoutCreateSerializer,
    OrderSerializer,
)
from payments.services.checkout import confirm_session, start_checkout
from payments.services.exceptions import CheckoutError, PaymentProviderError

logger = logging.getLogger(__name__)


class CheckoutThrottle(UserRateThrottle):
    """
    Uses REST_FRAMEWORK['DEFAULT_THROTTLE_RATES']['checkout'] for guests
    (by IP) and signed-in buyers (by user id).
    """

    scope = "checkout"


class CheckoutCreateView(APIView):
    permission_classes = [AllowAny]
    parser_classes = [JSONParser]
    throttle_classes = [CheckoutThrottle]

    @extend_schema(
        request=CheckoutCreateSerializer,
        responses={
            201: CheckoutCreateResponseSerializer,
            400: OpenApiResponse(description="Artwork not for sale"),
            404: OpenApiResponse(description="Artwork not found"),
            429: OpenApiResponse(description="Rate limited"),
            502: OpenApiResponse(description="Payment provider error"),
        },
        description="Open a hosted checkout session for one artwork.",
        tags=["Payments"],
    )
    def post(self, request):
        s = CheckoutCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        artwork = get_object_or_404(Artwork, id=s.validated_data["artwork_id"])
        buyer = request.user if request.user and request.user.is_authenticated else None

        try:
            order = start_checkout(artwork=artwork, buyer=buyer)
        except CheckoutError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except PaymentProviderError as exc:
            logger.error(
                "Checkout session creation failed",
                extra={"artwork_id": str(artwork.pk), "error": str(exc)},
            )
            return Response(
                {"detail": "Payment provider error. Please try again."},
                status=status.HTTP_502_BAD_GATEWAY,
            )

        return Response(
            {"session_id": order.session_id, "url": order.checkout_url, "order_id": order.id},
            status=status.HTTP_201_CREATED,
        )


class SessionStatusView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [CheckoutThrottle]

    @extend_schema(
        responses={
            200: OrderSerializer,
            404: OpenApiResponse(description="Unknown session"),
            502: OpenApiResponse(description="Payment provider error"),
        },
        description="Verify a checkout session with the provider and return the order status.",
        tags=["Payments"],
    )
    def get(self, request, session_id):
        order = get_object_or_404(Order, session_id=session_id)

        try:
            order = confirm_session(order=order)
        except PaymentProviderError as exc:
            logger.error(
                "Session verification failed",
                extra={"order_id": str(order.id), "error": str(exc)},
            )
            return Response(
                {"detail": "Payment provider error. Please try again."},
                status=status.HTTP_502_BAD_GATEWAY,
            )

        return Response(OrderSerializer(order).data)


class MyOrdersView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: OrderSerializer(many=True)}, tags=["Payments"])
    def get(self, request):
        qs = Order.objects.filter(buyer=request.user).order_by("-created_at")
        return Response(OrderSerializer(qs, many=True).data)
