# payments/services/exceptions.py

"""
PAYMENT SERVICE ERRORS

- CheckoutError: request cannot be turned into a checkout (400)
- PaymentProviderError: provider rejected or was unreachable (502)
- PaymentConfigurationError: keys missing on this deployment (502)
"""


class PaymentsServiceError(Exception):
    """Base exception for all payment service failures."""


class CheckoutError(PaymentsServiceError):
    """Raised when an artwork cannot be bought."""


class PaymentProviderError(PaymentsServiceError):
    """Raised when the payment provider call fails."""


class PaymentConfigurationError(PaymentProviderError):
    """Raised when provider keys are not configured."""
