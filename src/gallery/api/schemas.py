"""Pydantic response schemas for the Gallery API."""

from typing import Any

from pydantic import BaseModel


class PublishedResponse(BaseModel):
    items: list[dict[str, Any]]
    error: str | None = None


class ErrorResponse(BaseModel):
    error: str
