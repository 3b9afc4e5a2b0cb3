# payments/services/stripe_client.py

"""
STRIPE HOSTED CHECKOUT CLIENT

Talks to the Stripe REST API directly (form-encoded requests, JSON
responses) and verifies webhook signatures.

Config: settings.PAYMENTS["STRIPE"] (SECRET_KEY, WEBHOOK_SECRET, API_BASE).
"""

from __future__ import annotations

import hashlib
import hmac
import json
import logging
import time
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import quote, urlencode
from urllib.request import Request, urlopen

from django.conf import settings

from payments.services.exceptions import PaymentConfigurationError, PaymentProviderError

logger = logging.getLogger(__name__)

SIGNATURE_TOLERANCE_SECONDS = 300


def _stripe_cfg() -> dict:
    payments = getattr(settings, "PAYMENTS", {}) or {}
    cfg = payments.get("STRIPE") if isinstance(payments, dict) else None
    return cfg if isinstance(cfg, dict) else {}


def _api_base() -> str:
    return (_stripe_cfg().get("API_BASE") or "https://api.stripe.com/v1").rstrip("/")


def _get_secret_key() -> str:
    sk = (_stripe_cfg().get("SECRET_KEY") or "").strip()
    if not sk:
        raise PaymentConfigurationError(
            "Stripe SECRET_KEY is not configured. "
            "Expected settings.PAYMENTS['STRIPE']['SECRET_KEY'] (env STRIPE_SECRET_KEY)."
        )
    return sk


def checkout_currency() -> str:
    return (_stripe_cfg().get("CURRENCY") or "usd").strip().lower()


def _get_webhook_secret() -> str:
    return (_stripe_cfg().get("WEBHOOK_SECRET") or "").strip()


def to_cents(amount) -> int:
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise ValueError("amount must be a valid Decimal") from exc
    cents = (value * Decimal("100")).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(cents)


def _flatten(data: Any, prefix: str = "") -> list[tuple[str, str]]:
    """
    Stripe form encoding: nested dicts/lists become bracketed keys,
    e.g. line_items[0][price_data][currency]=usd
    """
    pairs: list[tuple[str, str]] = []
    if isinstance(data, dict):
        for key, value in data.items():
            name = f"{prefix}[{key}]" if prefix else str(key)
            pairs.extend(_flatten(value, name))
    elif isinstance(data, (list, tuple)):
        for i, value in enumerate(data):
            pairs.extend(_flatten(value, f"{prefix}[{i}]"))
    elif data is None:
        pass
    elif isinstance(data, bool):
        pairs.append((prefix, "true" if data else "false"))
    else:
        pairs.append((prefix, str(data)))
    return pairs


def _safe_preview(text: str, limit: int = 800) -> str:
    text = (text or "").strip()
    if len(text) <= limit:
        return text
    return text[:limit] + " ...(truncated)"


def _request(method: str, path: str, *, params: dict | None = None, timeout: int = 25) -> dict:
    sk = _get_secret_key()
    url = f"{_api_base()}{path}"

    data = None
    if params:
        encoded = urlencode(_flatten(params))
        if method == "GET":
            url = f"{url}?{encoded}"
        else:
            data = encoded.encode("utf-8")

    req = Request(
        url,
        data=data,
        headers={
            "Authorization": f"Bearer {sk}",
            "Content-Type": "application/x-www-form-urlencoded",
            "Accept": "application/json",
        },
        method=method,
    )

    try:
        with urlopen(req, timeout=timeout) as resp:
            raw = resp.read().decode("utf-8", errors="replace")
    except HTTPError as e:
        try:
            raw = e.read().decode("utf-8", errors="replace")
        except OSError:
            raw = ""
        try:
            message = (json.loads(raw).get("error") or {}).get("message")
        except (ValueError, AttributeError):
            message = None
        raise PaymentProviderError(
            f"Stripe HTTPError: {e.code} {message or _safe_preview(raw or str(e))}"
        ) from e
    except URLError as e:
        raise PaymentProviderError(f"Stripe URLError: {e}") from e

    try:
        parsed = json.loads(raw)
    except ValueError as e:
        raise PaymentProviderError(f"Stripe returned non-JSON: {_safe_preview(raw)}") from e

    if not isinstance(parsed, dict):
        raise PaymentProviderError("Stripe returned an unexpected payload")
    return parsed


def create_checkout_session(
    *,
    amount_cents: int,
    currency: str,
    product_name: str,
    success_url: str,
    cancel_url: str,
    description: str = "",
    image_url: str = "",
    metadata: dict | None = None,
) -> dict:
    product_data: dict = {"name": product_name}
    if description:
        product_data["description"] = description[:500]
    if image_url:
        product_data["images"] = [image_url]

    params = {
        "mode": "payment",
        "payment_method_types": ["card"],
        "line_items": [
            {
                "price_data": {
                    "currency": currency,
                    "product_data": product_data,
                    "unit_amount": int(amount_cents),
                },
                "quantity": 1,
            }
        ],
        "success_url": success_url,
        "cancel_url": cancel_url,
        "metadata": metadata or {},
    }

    session = _request("POST", "/checkout/sessions", params=params)
    if not session.get("id") or not session.get("url"):
        raise PaymentProviderError("Stripe did not return a checkout session id/url")
    return session


def retrieve_checkout_session(session_id: str) -> dict:
    sid = str(session_id or "").strip()
    if not sid:
        raise PaymentProviderError("session_id is required")
    return _request("GET", f"/checkout/sessions/{quote(sid, safe='')}")


def _parse_signature_header(header: str) -> tuple[int | None, list[str]]:
    timestamp = None
    signatures: list[str] = []
    for part in (header or "").split(","):
        key, _, value = part.strip().partition("=")
        if key == "t":
            try:
                timestamp = int(value)
            except ValueError:
                return None, []
        elif key == "v1" and value:
            signatures.append(value)
    return timestamp, signatures


def compute_signature(*, payload: bytes, timestamp: int, secret: str) -> str:
    signed = f"{timestamp}.".encode("utf-8") + (payload or b"")
    return hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()


def verify_stripe_signature(
    *,
    payload: bytes,
    header: str | None,
    secret: str | None = None,
    tolerance: int = SIGNATURE_TOLERANCE_SECONDS,
    now: float | None = None,
) -> bool:
    secret = secret if secret is not None else _get_webhook_secret()
    if not secret or not header:
        return False

    timestamp, signatures = _parse_signature_header(header)
    if timestamp is None or not signatures:
        return False

    current = int(now if now is not None else time.time())
    if abs(current - timestamp) > tolerance:
        logger.warning("Stripe signature outside tolerance", extra={"timestamp": timestamp})
        return False

    expected = compute_signature(payload=payload, timestamp=timestamp, secret=secret)
    return any(hmac.compare_digest(expected, sig) for sig in signatures)
