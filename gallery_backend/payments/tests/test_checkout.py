from decimal import Decimal
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from artworks.models import Artwork
from payments.models import Order
from payments.services.exceptions import PaymentProviderError

User = get_user_model()

PAYMENTS = {
    "STRIPE": {
        "SECRET_KEY": "sk_test_123",
        "WEBHOOK_SECRET": "whsec_test",
        "API_BASE": "https://stripe.test/v1",
        "CURRENCY": "usd",
    }
}

SESSION = {"id": "cs_test_1", "url": "https://checkout.stripe.test/cs_test_1"}


@override_settings(PAYMENTS=PAYMENTS, FRONTEND_BASE_URL="https://gallery.test")
class CheckoutTests(TestCase):
    """
    GUARANTEES:
    - only for-sale, priced artworks can be checked out
    - amount is computed server-side in cents
    - a PENDING order is recorded per session (guests allowed)
    - provider failures surface as 502 and record nothing
    """

    def setUp(self):
        self.client = APIClient()
        self.artist = User.objects.create_user(email="artist@example.com", password="pass", role="artist")
        self.buyer = User.objects.create_user(email="buyer@example.com", password="pass")
        self.artwork = Artwork.objects.create(
            artist=self.artist,
            title="Harmony in Blue",
            price=Decimal("1200.50"),
            is_for_sale=True,
        )

    @patch("payments.services.stripe_client.create_checkout_session", return_value=SESSION)
    def test_creates_session_and_order(self, create_session):
        self.client.force_authenticate(self.buyer)

        response = self.client.post("/api/payments/checkout/", {"artwork_id": str(self.artwork.id)}, format="json")

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["session_id"], "cs_test_1")
        self.assertEqual(response.data["url"], SESSION["url"])

        kwargs = create_session.call_args.kwargs
        self.assertEqual(kwargs["amount_cents"], 120050)
        self.assertEqual(kwargs["currency"], "usd")
        self.assertEqual(kwargs["metadata"]["artwork_id"], str(self.artwork.id))
        self.assertEqual(kwargs["cancel_url"], f"https://gallery.test/artwork/{self.artwork.id}")
        self.assertIn("{CHECKOUT_SESSION_ID}", kwargs["success_url"])

        order = Order.objects.get()
        self.assertEqual(order.status, Order.STATUS_PENDING)
        self.assertEqual(order.buyer, self.buyer)
        self.assertEqual(order.amount_cents, 120050)
        self.assertEqual(order.artwork_title, "Harmony in Blue")

    @patch("payments.services.stripe_client.create_checkout_session", return_value=SESSION)
    def test_guest_checkout(self, create_session):
        response = self.client.post("/api/payments/checkout/", {"artwork_id": str(self.artwork.id)}, format="json")

        self.assertEqual(response.status_code, 201)
        self.assertIsNone(Order.objects.get().buyer)

    def test_unknown_artwork(self):
        response = self.client.post(
            "/api/payments/checkout/",
            {"artwork_id": "00000000-0000-0000-0000-000000000000"},
            format="json",
        )
        self.assertEqual(response.status_code, 404)

    @patch("payments.services.stripe_client.create_checkout_session")
    def test_not_for_sale(self, create_session):
        Artwork.objects.filter(pk=self.artwork.pk).update(is_for_sale=False)

        response = self.client.post("/api/payments/checkout/", {"artwork_id": str(self.artwork.id)}, format="json")

        self.assertEqual(response.status_code, 400)
        create_session.assert_not_called()
        self.assertFalse(Order.objects.exists())

    @patch(
        "payments.services.stripe_client.create_checkout_session",
        side_effect=PaymentProviderError("Stripe HTTPError: 500"),
    )
    def test_provider_failure(self, create_session):
        response = self.client.post("/api/payments/checkout/", {"artwork_id": str(self.artwork.id)}, format="json")

        self.assertEqual(response.status_code, 502)
        self.assertFalse(Order.objects.exists())


@override_settings(PAYMENTS=PAYMENTS)
class SessionStatusTests(TestCase):
    """
    GUARANTEES:
    - a paid session marks the order PAID and takes the artwork off sale
    - confirming again is a no-op (no second provider call)
    - expired sessions cancel the order
    - my orders lists only the requester's orders
    """

    def setUp(self):
        self.client = APIClient()
        self.artist = User.objects.create_user(email="artist@example.com", password="pass", role="artist")
        self.buyer = User.objects.create_user(email="buyer@example.com", password="pass")
        self.artwork = Artwork.objects.create(
            artist=self.artist, title="Dawn", price=Decimal("99.00"), is_for_sale=True
        )
        self.order = Order.objects.create(
            buyer=self.buyer,
            artwork=self.artwork,
            artist=self.artist,
            artwork_title="Dawn",
            amount_cents=9900,
            currency="usd",
            session_id="cs_test_1",
            checkout_url=SESSION["url"],
        )

    @patch("payments.services.stripe_client.retrieve_checkout_session")
    def test_paid_session(self, retrieve):
        retrieve.return_value = {"id": "cs_test_1", "payment_status": "paid", "status": "complete"}

        response = self.client.get("/api/payments/sessions/cs_test_1/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["status"], Order.STATUS_PAID)

        self.artwork.refresh_from_db()
        self.assertFalse(self.artwork.is_for_sale)

        self.client.get("/api/payments/sessions/cs_test_1/")
        self.assertEqual(retrieve.call_count, 1)

    @patch("payments.services.stripe_client.retrieve_checkout_session")
    def test_expired_session(self, retrieve):
        retrieve.return_value = {"id": "cs_test_1", "payment_status": "unpaid", "status": "expired"}

        response = self.client.get("/api/payments/sessions/cs_test_1/")

        self.assertEqual(response.data["status"], Order.STATUS_CANCELLED)
        self.artwork.refresh_from_db()
        self.assertTrue(self.artwork.is_for_sale)

    def test_unknown_session(self):
        self.assertEqual(self.client.get("/api/payments/sessions/cs_missing/").status_code, 404)

    def test_my_orders(self):
        stranger = User.objects.create_user(email="s@example.com", password="pass")

        self.client.force_authenticate(self.buyer)
        self.assertEqual(len(self.client.get("/api/payments/orders/").data), 1)

        self.client.force_authenticate(stranger)
        self.assertEqual(self.client.get("/api/payments/orders/").data, [])
