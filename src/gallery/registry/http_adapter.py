"""httpx adapter for the artifact registry."""

from typing import Any

import httpx
import structlog

from gallery.exceptions import RegistryUnavailableError
from gallery.registry.port import ArtifactRegistry, RegistryResponse
from gallery.settings import GallerySettings

logger = structlog.get_logger(__name__)

KEYS_PATH = "/api/keys"


def build_async_client(
    settings: GallerySettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an ``httpx.AsyncClient`` pointed at the registry."""
    settings = settings or GallerySettings()
    return httpx.AsyncClient(
        base_url=settings.registry_url.rstrip("/"),
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        headers={"Accept": "application/json"},
        transport=transport,
    )


class HttpArtifactRegistry(ArtifactRegistry):
    """Talks to ``{registry_url}/api/keys`` with an ``x-api-key`` header.

    A client is opened per call; one attempt is made and nothing is retried.
    """

    def __init__(
        self,
        settings: GallerySettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or GallerySettings()
        self.transport = transport

    async def _request(self, method: str, api_key: str, **kwargs) -> RegistryResponse:
        headers = {"x-api-key": api_key}
        try:
            async with build_async_client(self.settings, transport=self.transport) as client:
                response = await client.request(method, KEYS_PATH, headers=headers, **kwargs)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Artifact registry unreachable", method=method, error=str(exc))
            raise RegistryUnavailableError(str(exc)) from exc
        except UnicodeError as exc:
            # Header values and URLs must be ASCII on the wire
            logger.warning("Artifact registry request could not be encoded", method=method, error=str(exc))
            raise RegistryUnavailableError(str(exc)) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("Artifact registry returned invalid JSON", method=method, status_code=response.status_code)
            raise RegistryUnavailableError("Invalid JSON from artifact registry") from exc

        return RegistryResponse(status_code=response.status_code, payload=payload)

    async def fetch_artifacts(self, api_key: str) -> RegistryResponse:
        return await self._request("GET", api_key)

    async def create_artifact(self, payload: Any, api_key: str) -> RegistryResponse:
        return await self._request("POST", api_key, json=payload)
