"""FoodCourt FastAPI application.

Processes commands synchronously via HTTP inside the foodcourt domain
context. Event handlers follow ``event_processing`` from domain.toml:
inline in development and test, through the Engine (src/server.py) in
production.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from foodcourt.domain import foodcourt
from foodcourt.utils.logging import bind_request_context, clear_request_context, configure_logging

configure_logging()
foodcourt.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="FoodCourt API",
    description="Restaurant menus, carts, and order lifecycle",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the foodcourt domain context and tag log lines for each request."""
    clear_request_context()
    bind_request_context(
        request_id=request.headers.get("X-Request-Id", uuid4().hex),
        user_id=request.headers.get("X-User-Id"),
        path=request.url.path,
    )
    with foodcourt.domain_context():
        return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from foodcourt.api import cart_router, menu_router, order_router, register_error_handlers  # noqa: E402

app.include_router(menu_router)
app.include_router(cart_router)
app.include_router(order_router)
register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": foodcourt.name})
