"""Artifact Bazaar FastAPI application.

Web server for the storefront: the published artifact feed, the dashboard
proxy, and the checkout flow (cart, shipping, payment, orders). Checkout
commands are processed synchronously inside the checkout domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied.
from checkout.domain import checkout  # noqa: E402
from checkout.utils.logging import bind_request_context, clear_request_context, configure_logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

configure_logging()
checkout.init()

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_DOMAIN_PREFIXES = ("/cart", "/checkout", "/orders")


def _needs_domain(path: str) -> bool:
    return path.startswith(_DOMAIN_PREFIXES)


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Artifact Bazaar API",
    description="Cultural-artifact marketplace — Gallery & Checkout",
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
    """Push the checkout domain context and tag log lines with the caller."""
    bind_request_context(
        path=request.url.path,
        session_id=request.headers.get("x-session-id"),
        customer_id=request.headers.get("x-customer-id"),
    )
    try:
        if _needs_domain(request.url.path):
            with checkout.domain_context():
                return await call_next(request)
        # Gallery, health check, docs
        return await call_next(request)
    finally:
        clear_request_context()


register_exception_handlers(app)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from checkout.api import cart_router, checkout_router, order_router  # noqa: E402
from gallery.api import proxy_router, published_router  # noqa: E402

app.include_router(published_router)
app.include_router(proxy_router)
app.include_router(cart_router)
app.include_router(checkout_router)
app.include_router(order_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "checkout": {"name": checkout.name},
            },
        }
    )
