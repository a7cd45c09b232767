"""Artifact registry configuration.

``GALLERY_REGISTRY_URL`` / ``GALLERY_REGISTRY_API_KEY`` are read first; the
older ``WEB_A_URL`` / ``WEB_A_API_KEY`` names are still honoured.
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_REGISTRY_URL = "https://it3b-api-key-act6.vercel.app"


class GallerySettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GALLERY_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
    )

    registry_url: str = Field(
        default=DEFAULT_REGISTRY_URL,
        validation_alias=AliasChoices("GALLERY_REGISTRY_URL", "WEB_A_URL"),
        description="Base URL of the artifact registry.",
    )
    registry_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("GALLERY_REGISTRY_API_KEY", "WEB_A_API_KEY"),
        description="Key sent when the caller does not supply an x-api-key header.",
    )
    http_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Upstream request timeout. Unset means wait indefinitely.",
    )
