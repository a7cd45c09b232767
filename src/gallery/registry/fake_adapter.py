"""In-memory artifact registry for development and testing.

Holds a list of item dicts and answers the way the real registry does.
It can be switched to a failure status or to "unreachable" at runtime.
"""

from typing import Any
from uuid import uuid4

from gallery.exceptions import RegistryUnavailableError
from gallery.registry.port import ArtifactRegistry, RegistryResponse


class FakeArtifactRegistry(ArtifactRegistry):
    """Configurable fake artifact registry."""

    def __init__(self, items: list[dict] | None = None) -> None:
        self.items: list[dict] = list(items or [])
        self.status_code: int = 200
        self.reachable: bool = True
        self.calls: list[dict] = []

    def configure(self, status_code: int = 200, reachable: bool = True) -> None:
        """Configure registry behavior at runtime."""
        self.status_code = status_code
        self.reachable = reachable

    def _check_reachable(self) -> None:
        if not self.reachable:
            raise RegistryUnavailableError("Fake registry is unreachable")

    async def fetch_artifacts(self, api_key: str) -> RegistryResponse:
        self.calls.append({"method": "fetch_artifacts", "api_key": api_key})
        self._check_reachable()

        if self.status_code >= 400:
            return RegistryResponse(status_code=self.status_code, payload={"error": "Unauthorized"})
        return RegistryResponse(status_code=self.status_code, payload={"items": list(self.items)})

    async def create_artifact(self, payload: Any, api_key: str) -> RegistryResponse:
        self.calls.append({"method": "create_artifact", "payload": payload, "api_key": api_key})
        self._check_reachable()

        if self.status_code >= 400:
            return RegistryResponse(status_code=self.status_code, payload={"error": "Unauthorized"})

        item = {"id": f"fake_art_{uuid4().hex[:8]}", "revoked": False, **(payload or {})}
        self.items.append(item)
        return RegistryResponse(status_code=201, payload=item)
