"""Gallery API package."""

from gallery.api.routes import proxy_router, published_router

__all__ = ["published_router", "proxy_router"]
