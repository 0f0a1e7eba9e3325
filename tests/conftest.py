"""
Pytest configuration for the API template.

Provides fixtures for:
- An isolated, migrated SQLite database per test
- A FastAPI test client bound to that database
- Factories for valid entity payloads
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Generator

import pytest
from fastapi.testclient import TestClient

from api_template.app.core.config import settings
from api_template.app.core.db import init_db
from api_template.app.main import app


@pytest.fixture
def database(tmp_path, monkeypatch: pytest.MonkeyPatch) -> str:
    """
    Point the application at a fresh database file and apply migrations.

    Seeding is disabled so every test starts from an empty collection.
    """
    db_path = str(tmp_path / "api_template_test.db")
    monkeypatch.setattr(settings, "database_url", db_path)
    monkeypatch.setattr(settings, "seed_sample_data", False)
    init_db()
    return db_path


@pytest.fixture
def client(database: str) -> Generator[TestClient, None, None]:
    """
    Test client with the application lifespan (startup/shutdown) running.
    """
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def entity_payload() -> Callable[..., Dict[str, Any]]:
    """
    Build a complete, valid entity body; keyword arguments override fields.
    """

    def _build(**overrides: Any) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": "Sample Item 1",
            "description": "This is a sample item for testing purposes",
            "is_active": True,
            "value": 100.5,
            "category": "Standard",
            "tags": ["sample", "test"],
            "metadata": {"priority": 1, "color": "blue"},
        }
        payload.update(overrides)
        return payload

    return _build
