"""Pydantic request/response schemas for the FoodCourt API.

HTTP bodies are kept apart from the domain commands. Quantities and
delivery fields are left to the domain, so bad values come back as 400
rather than 422.
"""

from datetime import datetime

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Menu
# ---------------------------------------------------------------------------
class RestaurantResponse(BaseModel):
    restaurant_id: str
    name: str
    description: str | None = None
    address: str
    phone_number: str


class MenuItemResponse(BaseModel):
    menu_item_id: str
    restaurant_id: str
    name: str
    description: str | None = None
    price: float
    is_available: bool


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddItemRequest(BaseModel):
    menu_item_id: str
    quantity: int = 1
    note: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "menu_item_id": "a3c1e0f2-5d7b-4c1e-9a8f-2b6d4e0c9f11",
                    "quantity": 2,
                    "note": "No onions",
                }
            ]
        }
    }


class UpdateLineRequest(BaseModel):
    quantity: int
    note: str | None = None


class CartLineResponse(BaseModel):
    line_id: str
    menu_item_id: str
    menu_item_name: str
    unit_price: float
    quantity: int
    subtotal: float
    note: str | None = None


class CartResponse(BaseModel):
    cart_id: str
    user_id: str
    restaurant_id: str
    restaurant_name: str | None = None
    total_price: float
    lines: list[CartLineResponse]


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class OrderLineRequest(BaseModel):
    menu_item_id: str
    quantity: int
    unit_price: float | None = None


class CreateOrderRequest(BaseModel):
    restaurant_id: str
    lines: list[OrderLineRequest]
    delivery_address: str
    phone_number: str
    special_instructions: str | None = None


class CheckoutRequest(BaseModel):
    delivery_address: str
    phone_number: str
    special_instructions: str | None = None


class UpdateStatusRequest(BaseModel):
    status: str


class CancelOrderRequest(BaseModel):
    reason: str


class OrderLineResponse(BaseModel):
    line_id: str
    menu_item_id: str
    menu_item_name: str | None = None
    quantity: int
    unit_price: float
    subtotal: float


class OrderResponse(BaseModel):
    order_id: str
    user_id: str
    restaurant_id: str
    restaurant_name: str | None = None
    status: str
    total_amount: float
    delivery_address: str
    phone_number: str
    special_instructions: str | None = None
    cancellation_reason: str | None = None
    source_cart_id: str | None = None
    created_at: datetime | None = None
    confirmed_at: datetime | None = None
    prepared_at: datetime | None = None
    completed_at: datetime | None = None
    cancelled_at: datetime | None = None
    lines: list[OrderLineResponse]
