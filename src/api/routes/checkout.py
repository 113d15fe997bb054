"""Checkout API routes for Razorpay orders and artwork downloads."""

from fastapi import APIRouter, Query
from fastapi.responses import FileResponse
from starlette.types import Receive, Scope, Send

from src.schemas.checkout import (
    CreateOrderRequest,
    CreateOrderResponse,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)
from src.services.bundle_service import remove_scratch_file
from src.services.checkout_service import CheckoutService

router = APIRouter(tags=["checkout"])


class ScratchFileResponse(FileResponse):
    """FileResponse that deletes its file once sending ends.

    Removal runs whether the body was fully sent, the client went away or
    the send failed.
    """

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        finally:
            remove_scratch_file(self.path)


@router.post(
    "/create-order",
    response_model=CreateOrderResponse,
    summary="Create Razorpay order",
    description="Creates a Razorpay order for the cart total and keeps the cart for the post-payment download.",
)
async def create_order(data: CreateOrderRequest) -> CreateOrderResponse:
    """Create a payment order for a cart.

    Args:
        data: Cart items posted by the storefront.

    Returns:
        CreateOrderResponse: Order id, amount in paise and currency for Razorpay Checkout.

    Raises:
        InvalidInputError: 400 if the cart is empty.
        PaymentProviderError: 500 if Razorpay rejects the order.
    """
    service = CheckoutService()
    result = await service.create_order(data.cart_items)
    return CreateOrderResponse(
        order_id=result["order_id"],
        amount=result["amount"],
        currency=result["currency"],
    )


@router.post(
    "/verify-payment",
    response_model=VerifyPaymentResponse,
    summary="Verify Razorpay payment signature",
)
async def verify_payment(data: VerifyPaymentRequest) -> VerifyPaymentResponse:
    """Check the signature Razorpay Checkout hands back after payment.

    Raises:
        InvalidInputError: 400 if a field is missing.
        SignatureMismatchError: 400 if the signature is wrong.
    """
    service = CheckoutService()
    ok = service.verify_payment(
        data.razorpay_order_id,
        data.razorpay_payment_id,
        data.razorpay_signature,
    )
    return VerifyPaymentResponse(ok=ok)


@router.get(
    "/download-zip",
    response_class=ScratchFileResponse,
    summary="Download purchased artwork",
    description="Builds a ZIP of every image in the order's cart and streams it as an attachment.",
)
async def download_zip(
    order_id: str | None = Query(default=None, description="Razorpay order id"),
) -> ScratchFileResponse:
    """Stream the artwork bundle for an order.

    The scratch file is removed once sending ends, successful or not.

    Raises:
        InvalidInputError: 400 if order_id is missing.
        OrderNotFoundError: 404 if the order has no cached cart.
        AssetFetchError: 500 if an image cannot be fetched.
    """
    service = CheckoutService()
    bundle_path = await service.build_download(order_id)
    return ScratchFileResponse(
        bundle_path,
        media_type="application/zip",
        filename=bundle_path.name,
    )
