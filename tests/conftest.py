"""Shared fixtures: an in-memory Mongo database, a mocked Redis and an app client."""

from unittest.mock import MagicMock

import mongomock
import pytest
from fastapi.testclient import TestClient

from griftline.config import settings
from griftline.db import ENTRIES, GLOSSARY, METADATA, METADATA_ID, get_db
from griftline.main import app
from griftline.redis_client import get_redis


def make_entry(entry_id: str, **overrides) -> dict:
    """An entry document; the date comes from the id prefix."""
    doc = {
        "id": entry_id,
        "readableId": f"entry-{entry_id}",
        "date": entry_id[:10],
        "title": f"Entry {entry_id}",
        "body": "<p>Something went wrong.</p>",
        "filters": {"theme": [], "tech": [], "blockchain": []},
        "collection": [],
        "starred": False,
    }
    doc.update(overrides)
    return doc


def scam_entry(entry_id: str, total: float, **overrides) -> dict:
    overrides.setdefault("scamAmountDetails", {"total": total, "hasScamAmount": True})
    return make_entry(entry_id, **overrides)


@pytest.fixture(autouse=True)
def no_asset_hosts(monkeypatch):
    # image keys stay untouched unless a test configures a host
    monkeypatch.setattr(settings, "CDN_BASE_URL", None)
    monkeypatch.setattr(settings, "S3_BUCKET", None)


@pytest.fixture
def db():
    return mongomock.MongoClient()["griftline_test"]


@pytest.fixture
def cache():
    mock = MagicMock()
    mock.get.return_value = None
    return mock


@pytest.fixture
def seed_db(db):
    def _seed(entries=(), glossary=(), metadata=None):
        if entries:
            db[ENTRIES].insert_many([dict(e) for e in entries])
        if glossary:
            db[GLOSSARY].insert_many([dict(g) for g in glossary])
        if metadata is not None:
            db[METADATA].insert_one({"_id": METADATA_ID, **metadata})
        return db

    return _seed


@pytest.fixture
def client(db, cache):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_redis] = lambda: cache
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
