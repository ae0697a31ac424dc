"""FastAPI routes for the FoodCourt domain — menus, carts, and orders.

The caller is identified by the ``X-User-Id`` header; issuing and checking
tokens happens upstream of this service.
"""

import json

from fastapi import APIRouter, Depends, Header, HTTPException, Response
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from foodcourt.account.user import User
from foodcourt.api.schemas import (
    AddItemRequest,
    CancelOrderRequest,
    CartResponse,
    CheckoutRequest,
    CreateOrderRequest,
    MenuItemResponse,
    OrderLineResponse,
    OrderResponse,
    RestaurantResponse,
    UpdateLineRequest,
    UpdateStatusRequest,
)
from foodcourt.cart.items import AddItem, RemoveLine, UpdateLine
from foodcourt.cart.management import ClearCart
from foodcourt.cart.snapshot import snapshot_for_user
from foodcourt.menu.catalog import list_restaurants, menu_for, restaurant_name
from foodcourt.order.cancellation import CancelOrder
from foodcourt.order.checkout import CreateOrderFromCart
from foodcourt.order.creation import CreateOrder
from foodcourt.order.order import Order
from foodcourt.order.status import UpdateOrderStatus


def current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id


async def current_admin_id(user_id: str = Depends(current_user_id)) -> str:
    """Restaurant-wide and status-wide listings are for admins only."""
    try:
        user = current_domain.repository_for(User).get(user_id)
    except ObjectNotFoundError:
        raise HTTPException(status_code=403, detail="Admin role required")
    if not user.is_admin():
        raise HTTPException(status_code=403, detail="Admin role required")
    return user_id


def _order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        order_id=str(order.id),
        user_id=str(order.user_id),
        restaurant_id=str(order.restaurant_id),
        restaurant_name=restaurant_name(order.restaurant_id),
        status=order.status,
        total_amount=order.total_amount,
        delivery_address=order.delivery_address,
        phone_number=order.phone_number,
        special_instructions=order.special_instructions,
        cancellation_reason=order.cancellation_reason,
        source_cart_id=str(order.source_cart_id) if order.source_cart_id else None,
        created_at=order.created_at,
        confirmed_at=order.confirmed_at,
        prepared_at=order.prepared_at,
        completed_at=order.completed_at,
        cancelled_at=order.cancelled_at,
        lines=[
            OrderLineResponse(
                line_id=str(line.id),
                menu_item_id=str(line.menu_item_id),
                menu_item_name=line.menu_item_name,
                quantity=line.quantity,
                unit_price=line.unit_price,
                subtotal=round(line.unit_price * line.quantity, 2),
            )
            for line in order.lines
        ],
    )


def _load_order(order_id: str) -> OrderResponse:
    return _order_response(current_domain.repository_for(Order).get(order_id))


# ---------------------------------------------------------------------------
# Menu Router
# ---------------------------------------------------------------------------
menu_router = APIRouter(prefix="/restaurants", tags=["menu"])


@menu_router.get("", response_model=list[RestaurantResponse])
async def get_restaurants() -> list[RestaurantResponse]:
    return [
        RestaurantResponse(
            restaurant_id=str(restaurant.id),
            name=restaurant.name,
            description=restaurant.description,
            address=restaurant.address,
            phone_number=restaurant.phone_number,
        )
        for restaurant in list_restaurants()
    ]


@menu_router.get("/{restaurant_id}/menu", response_model=list[MenuItemResponse])
async def get_menu(restaurant_id: str) -> list[MenuItemResponse]:
    return [
        MenuItemResponse(
            menu_item_id=str(item.id),
            restaurant_id=str(item.restaurant_id),
            name=item.name,
            description=item.description,
            price=item.price,
            is_available=item.is_available,
        )
        for item in menu_for(restaurant_id)
    ]


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse | None)
async def get_cart(user_id: str = Depends(current_user_id)):
    snapshot = snapshot_for_user(user_id)
    if snapshot is None:
        return Response(status_code=204)
    return snapshot.to_dict()


@cart_router.post("/restaurants/{restaurant_id}/items", response_model=CartResponse)
async def add_cart_item(restaurant_id: str, body: AddItemRequest, user_id: str = Depends(current_user_id)):
    command = AddItem(
        user_id=user_id,
        restaurant_id=restaurant_id,
        menu_item_id=body.menu_item_id,
        quantity=body.quantity,
        note=body.note,
    )
    snapshot = current_domain.process(command, asynchronous=False)
    return snapshot.to_dict()


@cart_router.put("/lines/{line_id}", response_model=CartResponse)
async def update_cart_line(line_id: str, body: UpdateLineRequest, user_id: str = Depends(current_user_id)):
    command = UpdateLine(
        user_id=user_id,
        line_id=line_id,
        quantity=body.quantity,
        note=body.note,
    )
    snapshot = current_domain.process(command, asynchronous=False)
    return snapshot.to_dict()


@cart_router.delete("/lines/{line_id}", status_code=204)
async def remove_cart_line(line_id: str, user_id: str = Depends(current_user_id)) -> Response:
    current_domain.process(RemoveLine(user_id=user_id, line_id=line_id), asynchronous=False)
    return Response(status_code=204)


@cart_router.delete("", status_code=204)
async def clear_cart(user_id: str = Depends(current_user_id)) -> Response:
    cleared = current_domain.process(ClearCart(user_id=user_id), asynchronous=False)
    if not cleared:
        raise HTTPException(status_code=404, detail="No cart found for user")
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def create_order(body: CreateOrderRequest, user_id: str = Depends(current_user_id)) -> OrderResponse:
    command = CreateOrder(
        user_id=user_id,
        restaurant_id=body.restaurant_id,
        lines=json.dumps([line.model_dump() for line in body.lines]),
        delivery_address=body.delivery_address,
        phone_number=body.phone_number,
        special_instructions=body.special_instructions,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return _load_order(order_id)


@order_router.post("/from-cart/{cart_id}", status_code=201, response_model=OrderResponse)
async def create_order_from_cart(
    cart_id: str, body: CheckoutRequest, user_id: str = Depends(current_user_id)
) -> OrderResponse:
    command = CreateOrderFromCart(
        cart_id=cart_id,
        user_id=user_id,
        delivery_address=body.delivery_address,
        phone_number=body.phone_number,
        special_instructions=body.special_instructions,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return _load_order(order_id)


@order_router.get("/user", response_model=list[OrderResponse])
async def get_my_orders(user_id: str = Depends(current_user_id)) -> list[OrderResponse]:
    return [_order_response(order) for order in current_domain.repository_for(Order).by_user(user_id)]


@order_router.get("/restaurant/{restaurant_id}", response_model=list[OrderResponse])
async def get_restaurant_orders(restaurant_id: str, _: str = Depends(current_admin_id)) -> list[OrderResponse]:
    return [_order_response(order) for order in current_domain.repository_for(Order).by_restaurant(restaurant_id)]


@order_router.get("/status/{status}", response_model=list[OrderResponse])
async def get_orders_by_status(status: str, _: str = Depends(current_admin_id)) -> list[OrderResponse]:
    return [_order_response(order) for order in current_domain.repository_for(Order).by_status(status)]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    return _load_order(order_id)


@order_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str, body: UpdateStatusRequest, user_id: str = Depends(current_user_id)
) -> OrderResponse:
    command = UpdateOrderStatus(order_id=order_id, new_status=body.status, user_id=user_id)
    current_domain.process(command, asynchronous=False)
    return _load_order(order_id)


@order_router.put("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(order_id: str, body: CancelOrderRequest) -> OrderResponse:
    current_domain.process(CancelOrder(order_id=order_id, reason=body.reason), asynchronous=False)
    return _load_order(order_id)
