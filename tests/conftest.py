"""Pytest fixtures for the OnBuch API tests."""

import os
import sys
from pathlib import Path

# Settings are read at import time
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("ADMIN_EMAILS", '["admin@onbuch.cm"]')
os.environ["GEMINI_API_KEY"] = ""

sys.path.insert(0, str(Path(__file__).parent))

import pytest
from fastapi.testclient import TestClient

from fakes import FakeClientFactory, FakeFirestore
from onbuch.core.security import create_access_token
from onbuch.main import app
from onbuch.repositories import agents_repo, flashcards_repo, leaderboard_repo, settings_repo, users_repo


@pytest.fixture
def fake_db(monkeypatch):
    """Route every repository to one in-memory Firestore."""
    db = FakeFirestore()
    for module in (agents_repo, flashcards_repo, leaderboard_repo, settings_repo, users_repo):
        monkeypatch.setattr(module, "get_db", lambda: db)
    return db


@pytest.fixture
def client(fake_db):
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def user_headers():
    token = create_access_token(sub="student-1", email="eleve@onbuch.cm")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    token = create_access_token(sub="admin-1", email="admin@onbuch.cm")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def gemini():
    """Fake Gemini client factory answering "Bonjour !"."""
    return FakeClientFactory()


@pytest.fixture
def sample_image():
    # 1x1 transparent PNG
    return (
        "data:image/png;base64,"
        "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
    )
