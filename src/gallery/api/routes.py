"""FastAPI routes for the Gallery — the published feed and the dashboard proxy.

Every upstream call uses the caller's ``x-api-key`` header when present and
the configured key otherwise.
"""

from typing import Any

import structlog
from fastapi import APIRouter, Body, Header
from fastapi.responses import JSONResponse

from gallery.api.schemas import PublishedResponse
from gallery.exceptions import RegistryUnavailableError
from gallery.feed import UNREACHABLE_ERROR, list_published, search_by_name
from gallery.registry import get_registry
from gallery.settings import GallerySettings

logger = structlog.get_logger(__name__)


def _api_key(x_api_key: str | None) -> str:
    if x_api_key is not None:
        return x_api_key
    return GallerySettings().registry_api_key


# ---------------------------------------------------------------------------
# Published feed
# ---------------------------------------------------------------------------
published_router = APIRouter(prefix="/published", tags=["gallery"])


@published_router.get("", response_model=PublishedResponse, response_model_exclude_none=True)
async def get_published(q: str | None = None, x_api_key: str | None = Header(default=None)):
    """Non-revoked artifacts, optionally narrowed by a name search.

    Registry problems are reported in ``error`` with a 200 status.
    """
    try:
        result = await list_published(get_registry(), _api_key(x_api_key))
    except Exception:
        logger.exception("Published feed failed")
        return JSONResponse(status_code=500, content={"items": [], "error": UNREACHABLE_ERROR})

    items = search_by_name(result.items, q)
    return PublishedResponse(
        items=[artifact.model_dump(mode="json", by_alias=True) for artifact in items],
        error=result.error,
    )


# ---------------------------------------------------------------------------
# Dashboard proxy
# ---------------------------------------------------------------------------
proxy_router = APIRouter(prefix="/proxy", tags=["gallery"])


@proxy_router.get("")
async def proxy_get(x_api_key: str | None = Header(default=None)):
    """The first artifact registered under the key."""
    try:
        response = await get_registry().fetch_artifacts(_api_key(x_api_key))
    except RegistryUnavailableError:
        return JSONResponse(status_code=500, content={"error": UNREACHABLE_ERROR})

    payload = response.payload
    items = payload.get("items") if isinstance(payload, dict) else None
    if response.ok and isinstance(items, list) and items:
        return JSONResponse(status_code=200, content=items[0])
    return JSONResponse(status_code=404, content={"error": "Key not found"})


@proxy_router.post("")
async def proxy_post(body: Any = Body(default=None), x_api_key: str | None = Header(default=None)):
    """Forward a dashboard submission and answer with the registry's status."""
    try:
        response = await get_registry().create_artifact(body, _api_key(x_api_key))
    except RegistryUnavailableError:
        return JSONResponse(status_code=500, content={"error": UNREACHABLE_ERROR})
    return JSONResponse(status_code=response.status_code, content=response.payload)
