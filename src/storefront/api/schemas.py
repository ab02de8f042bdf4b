"""Pydantic request and response schemas for the storefront API.

These are the external contracts; handlers translate them into Protean
commands.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator


class Envelope(BaseModel):
    success: bool = True
    message: str | None = None
    data: dict[str, Any] | None = None
    errors: list[dict[str, Any]] | None = None


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class VariantSchema(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    value: str = Field(min_length=1, max_length=100)
    price_adjustment: float = 0.0


class AddressSchema(BaseModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    street: str = Field(min_length=1, max_length=255)
    city: str = Field(min_length=1, max_length=100)
    state: str = Field(min_length=1, max_length=100)
    postal_code: str = Field(min_length=1, max_length=20)
    country: str = Field(min_length=1, max_length=100)
    phone: str | None = None

    @field_validator("first_name", "last_name", "street", "city", "state", "postal_code", "country")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class PaymentInfoSchema(BaseModel):
    method: Literal["card", "paypal", "apple_pay", "google_pay", "bank_transfer"]
    transaction_id: str | None = None
    last_four: str | None = Field(default=None, max_length=4)
    brand: str | None = None


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddCartItemRequest(BaseModel):
    product_id: str
    quantity: int = Field(default=1, ge=1)
    variant: VariantSchema | None = None


class UpdateCartItemRequest(BaseModel):
    quantity: int = Field(ge=0)
    variant: VariantSchema | None = None


class RemoveCartItemRequest(BaseModel):
    variant: VariantSchema | None = None


class ApplyCouponRequest(BaseModel):
    code: str = Field(min_length=1, max_length=50)
    discount: float = Field(ge=0)
    type: Literal["percentage", "fixed"]

    model_config = {"json_schema_extra": {"examples": [{"code": "SAVE10", "discount": 10, "type": "percentage"}]}}


class ShippingMethodRequest(BaseModel):
    method: Literal["standard", "express", "overnight"]


class GuestCartItem(BaseModel):
    product_id: str
    quantity: int = Field(default=1, ge=1)
    variant: VariantSchema | None = None


class GuestCoupon(BaseModel):
    code: str
    discount: float = Field(ge=0)
    type: Literal["percentage", "fixed"]


class GuestCart(BaseModel):
    items: list[GuestCartItem] = Field(min_length=1)
    coupon: GuestCoupon | None = None
    shipping_method: Literal["standard", "express", "overnight"] | None = None


class MergeCartRequest(BaseModel):
    guest_cart: GuestCart


# ---------------------------------------------------------------------------
# Wishlist
# ---------------------------------------------------------------------------
Priority = Literal["low", "medium", "high"]


class AddWishlistItemRequest(BaseModel):
    product_id: str
    notes: str | None = Field(default=None, max_length=500)
    priority: Priority | None = None
    variant: VariantSchema | None = None


class UpdateWishlistItemRequest(BaseModel):
    notes: str | None = Field(default=None, max_length=500)
    priority: Priority | None = None


class MoveToCartRequest(BaseModel):
    quantity: int = Field(default=1, ge=1)
    variant: VariantSchema | None = None


class WishlistSettingsRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    shipping_address: AddressSchema
    billing_address: AddressSchema | None = None
    payment_info: PaymentInfoSchema
    shipping_method: Literal["standard", "express", "overnight"] | None = None
    notes: str | None = None
    is_gift: bool = False
    gift_message: str | None = Field(default=None, max_length=500)
    gift_wrap: bool = False

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shipping_address": {
                        "first_name": "Ada",
                        "last_name": "Lovelace",
                        "street": "12 St James's Square",
                        "city": "London",
                        "state": "London",
                        "postal_code": "SW1Y 4JH",
                        "country": "GB",
                    },
                    "payment_info": {"method": "card", "last_four": "4242", "brand": "visa"},
                    "shipping_method": "standard",
                }
            ]
        }
    }


class UpdateOrderStatusRequest(BaseModel):
    status: Literal["pending", "confirmed", "processing", "shipped", "delivered", "cancelled", "returned"]
    tracking_number: str | None = Field(default=None, min_length=1)
    notes: str | None = None
