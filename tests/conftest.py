"""
conftest.py — shared pytest fixtures
Adds the repository root to sys.path so `app.*` imports resolve correctly
regardless of where pytest is invoked from.
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.middleware import rate_limit
from app.repositories.model_repository import InMemoryModelRepository
from app.services.model_service import ModelService, get_model_service


def make_model(share_options=None, **overrides):
    """Build a stored model document the way MongoDB hands it back."""
    doc = {
        "_id": "model-id",
        "name": "Test Model",
        "shareOptions": share_options,
        "model": {"nodes": [], "edges": []},
        "type": "conceptual",
    }
    doc.update(overrides)
    return doc


@pytest.fixture
def shared_id():
    return "valid-shared-id"


@pytest.fixture
def memory_repo():
    return InMemoryModelRepository([
        make_model({"_id": "share-active", "active": True, "importAllowed": True}, _id="m-active"),
        make_model({"_id": "share-inactive", "active": False}, _id="m-inactive", name="Hidden"),
        make_model(None, _id="m-private", name="Private"),
    ])


@pytest.fixture
def client(memory_repo):
    """Test client wired to the in-memory repository (lifespan not run, no MongoDB)."""
    app.dependency_overrides[get_model_service] = lambda: ModelService(memory_repo)
    rate_limit._log.clear()
    c = TestClient(app)
    yield c
    app.dependency_overrides.clear()
    rate_limit._log.clear()
