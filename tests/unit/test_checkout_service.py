"""Unit tests for CheckoutService."""

import hashlib
import hmac
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import razorpay
from razorpay.errors import BadRequestError

from src.api.middleware.error_handler import (
    InvalidInputError,
    OrderNotFoundError,
    PaymentProviderError,
    SignatureMismatchError,
)
from src.schemas.checkout import CartItem
from src.services.checkout_service import CheckoutService, calculate_amount
from src.services.order_cache import OrderCache

KEY_SECRET = "rzp_test_key_secret"


@pytest.fixture
def mock_razorpay() -> MagicMock:
    """Create a mock Razorpay client."""
    client = MagicMock()
    client.order.create.return_value = {
        "id": "order_test_123",
        "amount": 2500,
        "currency": "INR",
        "status": "created",
    }
    return client


@pytest.fixture
def cache() -> OrderCache:
    """Fresh order cache for each test."""
    return OrderCache()


@pytest.fixture
def mock_bundle_service() -> MagicMock:
    """Bundle service whose build_bundle is awaitable."""
    service = MagicMock()
    service.build_bundle = AsyncMock(return_value=Path("/tmp/miraara_1.zip"))
    return service


@pytest.fixture
def checkout_service(
    mock_razorpay: MagicMock, cache: OrderCache, mock_bundle_service: MagicMock
) -> CheckoutService:
    """Create CheckoutService with mocked dependencies."""
    with patch("src.services.checkout_service.get_razorpay_client", return_value=mock_razorpay):
        return CheckoutService(cache=cache, bundle_service=mock_bundle_service)


@pytest.fixture
def sample_cart() -> list[CartItem]:
    """Cart from the storefront: 2 x 10 + 1 x 5 rupees."""
    return [
        CartItem(image="https://x/1.jpg", price=10, quantity=2),
        CartItem(image="https://x/2.jpg", price=5, quantity=1),
    ]


class TestCalculateAmount:
    """Tests for calculate_amount."""

    def test_converts_total_to_paise(self, sample_cart: list[CartItem]) -> None:
        """Test the 2 x 10 + 1 x 5 cart totals 2500 paise."""
        assert calculate_amount(sample_cart) == 2500

    def test_fractional_prices(self) -> None:
        """Test that fractional rupee prices are summed exactly."""
        cart = [
            CartItem(image="https://x/1.jpg", price=19.99, quantity=3),
            CartItem(image="https://x/2.jpg", price=0.1, quantity=1),
        ]

        assert calculate_amount(cart) == 6007

    def test_rounds_half_up(self) -> None:
        """Test that half a paisa rounds up."""
        cart = [CartItem(image="https://x/1.jpg", price=10.125, quantity=1)]

        assert calculate_amount(cart) == 1013

    def test_free_items_total_zero(self) -> None:
        """Test that a cart of free items totals zero."""
        cart = [CartItem(image="https://x/1.jpg", price=0, quantity=4)]

        assert calculate_amount(cart) == 0


class TestCreateOrder:
    """Tests for create_order method."""

    @pytest.mark.asyncio
    async def test_creates_order_and_caches_cart(
        self,
        checkout_service: CheckoutService,
        mock_razorpay: MagicMock,
        cache: OrderCache,
        sample_cart: list[CartItem],
    ) -> None:
        """Test order creation for a valid cart."""
        result = await checkout_service.create_order(sample_cart)

        assert result == {"order_id": "order_test_123", "amount": 2500, "currency": "INR"}

        payload = mock_razorpay.order.create.call_args.kwargs["data"]
        assert payload["amount"] == 2500
        assert payload["currency"] == "INR"
        assert payload["payment_capture"] == 1
        assert payload["receipt"].startswith("receipt_")

        entry = cache.get("order_test_123")
        assert entry is not None
        assert entry.cart_items == sample_cart

    @pytest.mark.asyncio
    @pytest.mark.parametrize("cart", [None, []])
    async def test_rejects_empty_cart(
        self,
        checkout_service: CheckoutService,
        mock_razorpay: MagicMock,
        cache: OrderCache,
        cart: list[CartItem] | None,
    ) -> None:
        """Test that a missing or empty cart never reaches Razorpay."""
        with pytest.raises(InvalidInputError, match="Cart empty"):
            await checkout_service.create_order(cart)

        mock_razorpay.order.create.assert_not_called()
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_rejects_zero_total(
        self,
        checkout_service: CheckoutService,
        mock_razorpay: MagicMock,
    ) -> None:
        """Test that a zero total is rejected before Razorpay."""
        cart = [CartItem(image="https://x/1.jpg", price=0, quantity=1)]

        with pytest.raises(InvalidInputError, match="greater than zero"):
            await checkout_service.create_order(cart)

        mock_razorpay.order.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_provider_error_creates_no_cache_entry(
        self,
        checkout_service: CheckoutService,
        mock_razorpay: MagicMock,
        cache: OrderCache,
        sample_cart: list[CartItem],
    ) -> None:
        """Test that a Razorpay failure maps to PaymentProviderError."""
        mock_razorpay.order.create.side_effect = BadRequestError("Authentication failed")

        with pytest.raises(PaymentProviderError):
            await checkout_service.create_order(sample_cart)

        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_unconfigured_provider(
        self,
        cache: OrderCache,
        mock_bundle_service: MagicMock,
        sample_cart: list[CartItem],
    ) -> None:
        """Test that a missing key pair fails as a provider error."""
        with patch("src.services.checkout_service.get_razorpay_client", return_value=None):
            service = CheckoutService(cache=cache, bundle_service=mock_bundle_service)

        with pytest.raises(PaymentProviderError):
            await service.create_order(sample_cart)

        assert len(cache) == 0


class TestVerifyPayment:
    """Tests for verify_payment method."""

    @pytest.fixture
    def verifying_service(self, cache: OrderCache, mock_bundle_service: MagicMock) -> CheckoutService:
        """CheckoutService backed by a real Razorpay client for HMAC checks."""
        client = razorpay.Client(auth=("rzp_test_key_id", KEY_SECRET))
        with patch("src.services.checkout_service.get_razorpay_client", return_value=client):
            return CheckoutService(cache=cache, bundle_service=mock_bundle_service)

    @staticmethod
    def _sign(order_id: str, payment_id: str) -> str:
        message = f"{order_id}|{payment_id}".encode()
        return hmac.new(KEY_SECRET.encode(), message, hashlib.sha256).hexdigest()

    def test_accepts_valid_signature(self, verifying_service: CheckoutService) -> None:
        """Test that a correctly signed payment verifies."""
        signature = self._sign("order_test_123", "pay_test_456")

        assert verifying_service.verify_payment("order_test_123", "pay_test_456", signature) is True

    def test_rejects_tampered_signature(self, verifying_service: CheckoutService) -> None:
        """Test that a signature for another payment is rejected."""
        signature = self._sign("order_test_123", "pay_other")

        with pytest.raises(SignatureMismatchError):
            verifying_service.verify_payment("order_test_123", "pay_test_456", signature)

    @pytest.mark.parametrize(
        "order_id,payment_id,signature",
        [
            (None, "pay_1", "sig"),
            ("order_1", "", "sig"),
            ("order_1", "pay_1", None),
        ],
    )
    def test_rejects_missing_fields(
        self,
        verifying_service: CheckoutService,
        order_id: str | None,
        payment_id: str | None,
        signature: str | None,
    ) -> None:
        """Test that all three callback fields are required."""
        with pytest.raises(InvalidInputError):
            verifying_service.verify_payment(order_id, payment_id, signature)


class TestBuildDownload:
    """Tests for build_download method."""

    @pytest.mark.asyncio
    async def test_builds_bundle_for_cached_order(
        self,
        checkout_service: CheckoutService,
        mock_bundle_service: MagicMock,
        sample_cart: list[CartItem],
    ) -> None:
        """Test that the cached cart is handed to the bundle builder."""
        await checkout_service.create_order(sample_cart)

        path = await checkout_service.build_download("order_test_123")

        assert path == Path("/tmp/miraara_1.zip")
        mock_bundle_service.build_bundle.assert_awaited_once_with(sample_cart)

    @pytest.mark.asyncio
    async def test_order_stays_downloadable(
        self,
        checkout_service: CheckoutService,
        mock_bundle_service: MagicMock,
        sample_cart: list[CartItem],
    ) -> None:
        """Test that a second download for the same order succeeds."""
        await checkout_service.create_order(sample_cart)

        await checkout_service.build_download("order_test_123")
        await checkout_service.build_download("order_test_123")

        assert mock_bundle_service.build_bundle.await_count == 2

    @pytest.mark.asyncio
    async def test_unknown_order_not_found(
        self,
        checkout_service: CheckoutService,
        mock_bundle_service: MagicMock,
    ) -> None:
        """Test that ids never returned by create_order are not found."""
        with pytest.raises(OrderNotFoundError):
            await checkout_service.build_download("order_never_created")

        mock_bundle_service.build_bundle.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("order_id", [None, "", "   "])
    async def test_blank_order_id(
        self,
        checkout_service: CheckoutService,
        order_id: str | None,
    ) -> None:
        """Test that a blank order id is invalid input."""
        with pytest.raises(InvalidInputError, match="Order ID required"):
            await checkout_service.build_download(order_id)
