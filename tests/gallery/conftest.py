import pytest
from gallery.registry import reset_registry, set_registry
from gallery.registry.fake_adapter import FakeArtifactRegistry


@pytest.fixture()
def artifacts():
    return [
        {
            "id": "art-001",
            "name": "Manunggul Jar",
            "period": "Neolithic",
            "origin": "Palawan",
            "value": 12500,
            "imageUrl": "https://cdn.example.com/manunggul.jpg",
            "createdAt": "2025-01-10T08:00:00Z",
            "revoked": False,
        },
        {
            "id": "art-002",
            "name": "Butuan Boat Plank",
            "period": "10th century",
            "origin": "Agusan del Norte",
            "value": 8000,
            "createdAt": "2025-02-01T08:00:00Z",
            "revoked": True,
        },
        {
            "id": "art-003",
            "name": "Golden Tara",
            "period": "13th century",
            "origin": "Agusan",
            "value": 50000,
            "createdAt": "2025-03-15T08:00:00Z",
            "revoked": False,
        },
    ]


@pytest.fixture()
def registry(artifacts):
    fake = FakeArtifactRegistry(items=artifacts)
    set_registry(fake)
    yield fake
    reset_registry()
