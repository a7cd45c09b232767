"""Artifact registry factory.

Provides get_registry() / set_registry() to swap implementations:
- HttpArtifactRegistry against the configured registry URL
- FakeArtifactRegistry for development and testing
"""

from gallery.registry.http_adapter import HttpArtifactRegistry
from gallery.registry.port import ArtifactRegistry

_current_registry: ArtifactRegistry | None = None


def get_registry() -> ArtifactRegistry:
    """Return the current artifact registry. Defaults to HttpArtifactRegistry."""
    global _current_registry
    if _current_registry is None:
        _current_registry = HttpArtifactRegistry()
    return _current_registry


def set_registry(registry: ArtifactRegistry) -> None:
    """Override the active artifact registry (useful for tests)."""
    global _current_registry
    _current_registry = registry


def reset_registry() -> None:
    """Reset to the default registry."""
    global _current_registry
    _current_registry = None
