"""Artifact — the registry's description of a purchasable cultural artifact."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Artifact(BaseModel):
    """Read-only view of a registry item.

    The registry speaks camelCase (``imageUrl``, ``createdAt``); both the
    aliases and the field names are accepted. Unknown keys are kept so the
    feed hands items back the way the registry sent them.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    name: str
    period: str | None = None
    origin: str | None = None
    value: float = Field(ge=0)
    image_url: str | None = Field(default=None, alias="imageUrl")
    created_at: datetime | None = Field(default=None, alias="createdAt")
    revoked: bool = False
