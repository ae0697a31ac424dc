from foodcourt.api.errors import register_error_handlers
from foodcourt.api.routes import cart_router, menu_router, order_router

__all__ = ["cart_router", "menu_router", "order_router", "register_error_handlers"]
