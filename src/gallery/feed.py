"""Published artifact feed.

Lists the registry's artifacts for the browse page, leaving out anything
revoked. Problems with the registry come back as an error string next to an
empty list; nothing here raises.
"""

from dataclasses import dataclass, field

import structlog
from pydantic import ValidationError

from gallery.artifact import Artifact
from gallery.exceptions import RegistryUnavailableError
from gallery.registry.port import ArtifactRegistry

logger = structlog.get_logger(__name__)

UNREACHABLE_ERROR = "Failed to reach the artifact registry"
NOT_FOUND_ERROR = "No artifacts found"


@dataclass(frozen=True)
class FeedResult:
    items: list[Artifact] = field(default_factory=list)
    error: str | None = None


def _parse_items(raw_items) -> list[Artifact]:
    artifacts = []
    for raw in raw_items:
        if not isinstance(raw, dict):
            logger.warning("Skipping malformed registry item", item=repr(raw)[:200])
            continue
        try:
            artifacts.append(Artifact.model_validate(raw))
        except ValidationError as exc:
            logger.warning("Skipping malformed registry item", item_id=raw.get("id"), errors=exc.error_count())
    return artifacts


async def list_published(registry: ArtifactRegistry, api_key: str) -> FeedResult:
    """Every non-revoked artifact the key can see."""
    try:
        response = await registry.fetch_artifacts(api_key)
    except RegistryUnavailableError:
        return FeedResult(error=UNREACHABLE_ERROR)

    payload = response.payload
    raw_items = payload.get("items") if isinstance(payload, dict) else None
    if not response.ok or not isinstance(raw_items, list):
        logger.info("Artifact registry returned no items", status_code=response.status_code)
        return FeedResult(error=NOT_FOUND_ERROR)

    published = [artifact for artifact in _parse_items(raw_items) if not artifact.revoked]
    return FeedResult(items=published)


def search_by_name(items: list[Artifact], query: str | None) -> list[Artifact]:
    """Case-insensitive substring match on the artifact name."""
    needle = (query or "").strip().lower()
    if not needle:
        return list(items)
    return [artifact for artifact in items if needle in artifact.name.lower()]
