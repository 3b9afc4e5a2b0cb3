from .checkout import CheckoutCreateView, MyOrdersView, SessionStatusView
from .webhook import StripeWebhookView

__all__ = [
    "CheckoutCreateView",
    "SessionStatusView",
    "MyOrdersView",
    "StripeWebhookView",
]
