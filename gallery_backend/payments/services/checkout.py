"""
PATH: payments/services/checkout.py

CHECKOUT ORCHESTRATION

Flow:
1) start_checkout: artwork must be for sale with price > 0; opens a hosted
   session for a single line item and records a PENDING Order
2) provider confirms payment via webhook (handle_event) or the success page
   polls confirm_session
3) mark_paid: PENDING -> PAID once; artwork leaves the market
4) delayed payment methods finish with async_payment_succeeded (mark_paid)
   or async_payment_failed (mark_failed: PENDING -> FAILED)

GUARANTEES:
- amount is computed server-side (round(price * 100) cents)
- paid transitions are idempotent (row lock + status check)
- cancelled/expired/failed sessions never override a paid order
- a completed session without payment_status "paid" stays PENDING
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from artworks.models import Artwork
from payments.models import Order
from payments.services import stripe_client
from payments.services.exceptions import CheckoutError

logger = logging.getLogger(__name__)

EVENT_SESSION_COMPLETED = "checkout.session.completed"
EVENT_SESSION_EXPIRED = "checkout.session.expired"
EVENT_ASYNC_SUCCEEDED = "checkout.session.async_payment_succeeded"
EVENT_ASYNC_FAILED = "checkout.session.async_payment_failed"

HANDLED_EVENTS = {
    EVENT_SESSION_COMPLETED,
    EVENT_SESSION_EXPIRED,
    EVENT_ASYNC_SUCCEEDED,
    EVENT_ASYNC_FAILED,
}


def _frontend_base() -> str:
    return (getattr(settings, "FRONTEND_BASE_URL", "") or "").rstrip("/")


def success_url() -> str:
    # Stripe substitutes the literal {CHECKOUT_SESSION_ID} placeholder
    return f"{_frontend_base()}/payment/success?session_id={{CHECKOUT_SESSION_ID}}"


def cancel_url(artwork: Artwork) -> str:
    return f"{_frontend_base()}/artwork/{artwork.pk}"


def start_checkout(*, artwork: Artwork, buyer=None) -> Order:
    if not artwork.is_for_sale:
        raise CheckoutError("This artwork is not for sale")
    if artwork.price is None or artwork.price <= 0:
        raise CheckoutError("This artwork has no valid price")

    amount_cents = stripe_client.to_cents(artwork.price)
    currency = stripe_client.checkout_currency()
    buyer_id = str(buyer.pk) if buyer is not None else ""

    session = stripe_client.create_checkout_session(
        amount_cents=amount_cents,
        currency=currency,
        product_name=artwork.title,
        description=artwork.description,
        image_url=artwork.image_url,
        success_url=success_url(),
        cancel_url=cancel_url(artwork),
        metadata={"artwork_id": str(artwork.pk), "user_id": buyer_id},
    )

    order = Order.objects.create(
        buyer=buyer,
        artwork=artwork,
        artist_id=artwork.artist_id,
        artwork_title=artwork.title,
        amount_cents=amount_cents,
        currency=currency,
        provider=Order.PROVIDER_STRIPE,
        session_id=session["id"],
        checkout_url=session["url"],
        provider_payload={"session": session},
    )

    logger.info(
        "Checkout session created",
        extra={
            "order_id": str(order.id),
            "artwork_id": str(artwork.pk),
            "amount_cents": amount_cents,
        },
    )
    return order


@transaction.atomic
def mark_paid(*, order_id, payload: dict | None = None) -> Order:
    order = Order.objects.select_for_update().get(pk=order_id)

    if order.status == Order.STATUS_PAID:
        logger.info("Order already paid", extra={"order_id": str(order.id)})
        return order

    order.status = Order.STATUS_PAID
    order.paid_at = timezone.now()
    if payload is not None:
        order.provider_payload = {**(order.provider_payload or {}), "confirmation": payload}
    order.save(update_fields=["status", "paid_at", "provider_payload", "updated_at"])

    if order.artwork_id:
        Artwork.objects.filter(pk=order.artwork_id).update(is_for_sale=False)

    logger.info("Order marked paid", extra={"order_id": str(order.id)})
    return order


@transaction.atomic
def mark_cancelled(*, order_id, payload: dict | None = None) -> Order:
    order = Order.objects.select_for_update().get(pk=order_id)

    if order.status != Order.STATUS_PENDING:
        return order

    order.status = Order.STATUS_CANCELLED
    if payload is not None:
        order.provider_payload = {**(order.provider_payload or {}), "cancellation": payload}
    order.save(update_fields=["status", "provider_payload", "updated_at"])

    logger.info("Order cancelled", extra={"order_id": str(order.id)})
    return order


@transaction.atomic
def mark_failed(*, order_id, payload: dict | None = None) -> Order:
    order = Order.objects.select_for_update().get(pk=order_id)

    if order.status != Order.STATUS_PENDING:
        return order

    order.status = Order.STATUS_FAILED
    if payload is not None:
        order.provider_payload = {**(order.provider_payload or {}), "failure": payload}
    order.save(update_fields=["status", "provider_payload", "updated_at"])

    logger.warning("Order payment failed", extra={"order_id": str(order.id)})
    return order


def confirm_session(*, order: Order) -> Order:
    """
    Success-page check: ask the provider for the session and settle the order.
    """
    if order.status != Order.STATUS_PENDING:
        return order

    session = stripe_client.retrieve_checkout_session(order.session_id)
    payment_status = str(session.get("payment_status") or "").lower()

    if payment_status == "paid":
        return mark_paid(order_id=order.pk, payload=session)

    if str(session.get("status") or "").lower() == "expired":
        return mark_cancelled(order_id=order.pk, payload=session)

    return order


def handle_event(event: dict) -> str:
    """
    Apply a verified webhook event. Returns a short detail string for logs
    and the acknowledgement body.
    """
    event_type = str(event.get("type") or "")
    session = ((event.get("data") or {}).get("object")) or {}
    session_id = str(session.get("id") or "").strip()

    if event_type not in HANDLED_EVENTS:
        return "Ignored event"

    if not session_id:
        return "No session id"

    order = Order.objects.filter(session_id=session_id).first()
    if order is None:
        logger.warning("Unknown checkout session", extra={"session_id": session_id})
        return "Unknown session"

    if event_type == EVENT_SESSION_EXPIRED:
        mark_cancelled(order_id=order.pk, payload=session)
        return "Cancelled"

    if event_type == EVENT_ASYNC_FAILED:
        mark_failed(order_id=order.pk, payload=session)
        return "Failed"

    if event_type == EVENT_SESSION_COMPLETED:
        if str(session.get("payment_status") or "").lower() != "paid":
            # async payment methods settle through a later async_payment_* event
            return "Awaiting payment"

    mark_paid(order_id=order.pk, payload=session)
    return "Processed"
