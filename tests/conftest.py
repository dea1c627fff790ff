import json

import pytest

from innomatch.config.settings import get_settings

PROFILES = [
    {
        "id": "u-001",
        "name": "Sara",
        "type": "startup",
        "tags": ["AI", "Health"],
        "location": "Riyadh",
        "organization": "Nabd Health",
    },
    {"id": "u-002", "name": "Omar", "type": "startup", "tags": ["ai", "fintech"], "location": "Riyadh", "organization": "Qist"},
    {"id": "u-003", "name": "Lina", "type": "research", "tags": [], "location": "Dubai", "organization": "Gulf Lab"},
    {
        "id": "u-004",
        "name": "Faisal",
        "type": "investor",
        "tags": ["Health", "AI", "Biotech"],
        "location": "Jeddah",
        "organization": "Red Sea Ventures",
    },
    {"id": "u-005", "name": "Noura", "type": "accelerator", "tags": ["Health"], "location": "riyadh"},
    {"id": "u-006", "name": "Hassan", "type": "government", "tags": ["smart cities"], "location": None},
]


@pytest.fixture
def profiles_payload():
    return [dict(p) for p in PROFILES]


@pytest.fixture
def catalog_path(tmp_path, profiles_payload):
    path = tmp_path / "profiles.json"
    path.write_text(json.dumps(profiles_payload), encoding="utf-8")
    return path


@pytest.fixture
def fresh_settings():
    # get_settings() is cached; tests that change env vars need a clean slate on both sides.
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
