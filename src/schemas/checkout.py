"""Checkout Pydantic schemas for API request/response models."""

from pydantic import BaseModel, ConfigDict, Field


class CartItem(BaseModel):
    """A single purchased artwork in the client cart."""

    model_config = ConfigDict(from_attributes=True)

    image: str = Field(min_length=1, description="URL of the full-resolution image")
    price: float = Field(ge=0, description="Unit price in rupees")
    quantity: int = Field(ge=1, description="Quantity ordered")


class CreateOrderRequest(BaseModel):
    """Body of POST /api/create-order."""

    model_config = ConfigDict(populate_by_name=True)

    cart_items: list[CartItem] | None = Field(
        default=None,
        alias="cartItems",
        description="Cart snapshot to charge for and deliver after payment",
    )


class CreateOrderResponse(BaseModel):
    """Response for a created payment order."""

    model_config = ConfigDict(populate_by_name=True)

    order_id: str = Field(alias="orderId", description="Razorpay order id")
    amount: int = Field(description="Amount in currency subunits (paise)")
    currency: str = Field(description="Currency code")


class VerifyPaymentRequest(BaseModel):
    """Body of POST /api/verify-payment as posted by Razorpay Checkout."""

    razorpay_order_id: str | None = None
    razorpay_payment_id: str | None = None
    razorpay_signature: str | None = None


class VerifyPaymentResponse(BaseModel):
    """Acknowledgement of a verified payment."""

    ok: bool = Field(description="True when the signature matched")
