"""Artifact registry port (abstract interface).

The registry is an external service offering key-scoped CRUD over
artifacts. This system only lists them and forwards dashboard writes.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RegistryResponse:
    """Status code and decoded JSON body of a registry call."""

    status_code: int
    payload: Any = field(default=None)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class ArtifactRegistry(ABC):
    """Abstract artifact registry interface.

    Adapters raise ``RegistryUnavailableError`` when the registry cannot be
    reached; any HTTP answer, including error statuses, is returned as a
    ``RegistryResponse``.
    """

    @abstractmethod
    async def fetch_artifacts(self, api_key: str) -> RegistryResponse:
        """List every artifact visible to the key."""
        ...

    @abstractmethod
    async def create_artifact(self, payload: Any, api_key: str) -> RegistryResponse:
        """Create an artifact from a dashboard submission."""
        ...
