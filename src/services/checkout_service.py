"""Checkout business logic: payment orders, signature checks and bundles."""

import logging
import time
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Any

from razorpay.errors import SignatureVerificationError

from src.api.middleware.error_handler import (
    InvalidInputError,
    OrderNotFoundError,
    PaymentProviderError,
    SignatureMismatchError,
)
from src.core.config import get_settings
from src.core.razorpay import get_razorpay_client
from src.schemas.checkout import CartItem
from src.services.bundle_service import BundleService
from src.services.order_cache import OrderCache, get_order_cache

logger = logging.getLogger(__name__)


def calculate_amount(cart_items: list[CartItem]) -> int:
    """Total a cart in currency subunits (paise).

    Prices are summed as ``Decimal`` over their decimal string form and the
    total is rounded half-up, so ``0.005`` rupees rounds to 1 paisa.

    Args:
        cart_items: Items to total.

    Returns:
        int: ``round(sum(price * quantity) * 100)``.
    """
    total = sum(
        (Decimal(str(item.price)) * item.quantity for item in cart_items),
        Decimal("0"),
    )
    return int((total * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class CheckoutService:
    """Service for Razorpay orders and post-payment artwork delivery."""

    def __init__(
        self,
        cache: OrderCache | None = None,
        bundle_service: BundleService | None = None,
    ) -> None:
        """Initialize checkout service with clients.

        Args:
            cache: Order cache to use. Defaults to the process-wide cache.
            bundle_service: Bundle builder. Defaults to a new BundleService.
        """
        self.razorpay = get_razorpay_client()
        self.settings = get_settings()
        self.cache = cache if cache is not None else get_order_cache()
        self.bundle_service = bundle_service or BundleService()

    async def create_order(self, cart_items: list[CartItem] | None) -> dict[str, Any]:
        """Create a Razorpay order for a cart and remember the cart.

        Args:
            cart_items: Client cart, in display order.

        Returns:
            dict: Contains order_id, amount (paise) and currency.

        Raises:
            InvalidInputError: If the cart is missing, empty or totals zero.
            PaymentProviderError: If Razorpay is not configured or the
                order call fails. Nothing is cached in that case.
        """
        if not cart_items:
            raise InvalidInputError("Cart empty")

        amount = calculate_amount(cart_items)
        if amount <= 0:
            raise InvalidInputError("Cart total must be greater than zero")

        if self.razorpay is None:
            logger.error("Order requested but Razorpay is not configured")
            raise PaymentProviderError("Failed to create order")

        currency = self.settings.payment_currency
        try:
            order = self.razorpay.order.create(data={
                "amount": amount,
                "currency": currency,
                "receipt": f"receipt_{int(time.time() * 1000)}",
                "payment_capture": 1,
            })
        except Exception as e:
            logger.error("Razorpay order creation error: %s", str(e))
            raise PaymentProviderError("Failed to create order") from e

        order_id = order["id"]
        currency = order.get("currency") or currency
        self.cache.put(order_id, amount, currency, cart_items)

        logger.info("Created order %s for %d items (%d %s)", order_id, len(cart_items), amount, currency)
        return {"order_id": order_id, "amount": amount, "currency": currency}

    def verify_payment(
        self,
        order_id: str | None,
        payment_id: str | None,
        signature: str | None,
    ) -> bool:
        """Verify the Razorpay Checkout signature for a payment.

        The signature is HMAC-SHA256 of ``order_id|payment_id`` keyed with
        the key secret.

        Args:
            order_id: razorpay_order_id from the checkout callback.
            payment_id: razorpay_payment_id from the checkout callback.
            signature: razorpay_signature from the checkout callback.

        Returns:
            bool: True when the signature matches.

        Raises:
            InvalidInputError: If any field is missing.
            PaymentProviderError: If Razorpay is not configured.
            SignatureMismatchError: If the signature does not match.
        """
        if not (order_id and payment_id and signature):
            raise InvalidInputError("Missing payment verification fields")

        if self.razorpay is None:
            logger.error("Payment verification requested but Razorpay is not configured")
            raise PaymentProviderError("Payment provider not configured")

        try:
            self.razorpay.utility.verify_payment_signature({
                "razorpay_order_id": order_id,
                "razorpay_payment_id": payment_id,
                "razorpay_signature": signature,
            })
        except SignatureVerificationError as e:
            logger.warning("Invalid payment signature for order %s", order_id)
            raise SignatureMismatchError() from e

        logger.info("Verified payment %s for order %s", payment_id, order_id)
        return True

    async def build_download(self, order_id: str | None) -> Path:
        """Build the artwork bundle for a created order.

        The cache entry is kept, so the bundle can be downloaded again
        until the entry expires.

        Args:
            order_id: Razorpay order id.

        Returns:
            Path: Scratch ZIP file owned by the caller.

        Raises:
            InvalidInputError: If order_id is blank.
            OrderNotFoundError: If no cart is cached for the order.
            AssetFetchError: If any artwork cannot be fetched.
        """
        if not order_id or not order_id.strip():
            raise InvalidInputError("Order ID required")

        order = self.cache.get(order_id)
        if order is None or not order.cart_items:
            raise OrderNotFoundError("No images found")

        return await self.bundle_service.build_bundle(order.cart_items)
