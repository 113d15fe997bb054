"""Razorpay client configuration and singleton."""

import logging
from functools import lru_cache

import razorpay

from src.core.config import get_settings

logger = logging.getLogger(__name__)


@lru_cache
def get_razorpay_client() -> razorpay.Client | None:
    """Get the cached Razorpay client.

    Returns:
        razorpay.Client | None: Client authenticated with the configured key
        pair, or None when the keys are not set. Callers treat None as
        "payment provider not configured".
    """
    settings = get_settings()
    if not settings.is_razorpay_configured:
        logger.warning("Razorpay key pair not configured. Checkout features will not work.")
        return None
    return razorpay.Client(auth=(settings.razorpay_key_id, settings.razorpay_key_secret))


def configure_razorpay() -> None:
    """Build the Razorpay client once at application startup."""
    if get_razorpay_client() is not None:
        logger.info("Razorpay client configured")
