# payments/urls.py

from django.urls import path

from payments.views import (
    CheckoutCreateView,
    MyOrdersView,
    SessionStatusView,
    StripeWebhookView,
)

app_name = "payments"

urlpatterns = [
    path("checkout/", CheckoutCreateView.as_view(), name="checkout"),
    path("sessions/<str:session_id>/", SessionStatusView.as_view(), name="session-status"),
    path("orders/", MyOrdersView.as_view(), name="my-orders"),
    path("webhook/stripe/", StripeWebhookView.as_view(), name="stripe-webhook"),
]
