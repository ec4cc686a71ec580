"""
Happy Thoughts API — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   No MongoDB is needed: `InMemoryCollection` mimics the slice of the
       pymongo async collection API that ThoughtStore uses, so the real
       store code runs against it. `mock_collection` is a pure AsyncMock for
       asserting exactly which driver calls are (or are not) made.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── thought_collection: Empty in-memory collection
    ├── thought_store: ThoughtStore over thought_collection
    ├── mock_collection: AsyncMock collection for call assertions
    ├── sample_thought_document: A stored-looking thought document
    └── test_client: HTTPX AsyncClient wired to the app with thought_store injected
"""

import copy
import os
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo import ReturnDocument

# Set before any happy_thoughts import so Settings() picks them up
os.environ["MONGO_URL"] = "mongodb://localhost:27017/happythoughts_test"
os.environ["RESET_DB"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from happy_thoughts.database import ThoughtStore  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# In-memory collection double
# ══════════════════════════════════════════════════════════════════════════


class _InMemoryCursor:
    def __init__(self, documents):
        self._documents = documents
        self._sort = None
        self._limit = 0

    def sort(self, spec):
        self._sort = spec
        return self

    def limit(self, n):
        self._limit = n
        return self

    async def to_list(self, length=None):
        docs = list(self._documents)
        if self._sort:
            # Apply keys last-to-first so the first key wins (stable sort)
            for field, direction in reversed(self._sort):
                docs.sort(key=lambda d: d[field], reverse=direction < 0)
        if self._limit:
            docs = docs[: self._limit]
        if length is not None:
            docs = docs[:length]
        return [copy.deepcopy(d) for d in docs]


class _InMemoryDatabase:
    def __init__(self):
        self.commands = []

    async def command(self, name):
        self.commands.append(name)
        return {"ok": 1.0}


class InMemoryCollection:
    """Just enough of pymongo's AsyncCollection for ThoughtStore."""

    def __init__(self):
        self._documents = []
        self.database = _InMemoryDatabase()
        self.indexes = []

    def _find_doc(self, filter):
        for doc in self._documents:
            if all(doc.get(k) == v for k, v in filter.items()):
                return doc
        return None

    @property
    def documents(self):
        return [copy.deepcopy(d) for d in self._documents]

    def find(self, filter=None):
        filter = filter or {}
        matches = [d for d in self._documents if all(d.get(k) == v for k, v in filter.items())]
        return _InMemoryCursor(matches)

    async def find_one(self, filter):
        doc = self._find_doc(filter)
        return copy.deepcopy(doc) if doc else None

    async def insert_one(self, document):
        document.setdefault("_id", ObjectId())
        self._documents.append(copy.deepcopy(document))
        return SimpleNamespace(inserted_id=document["_id"])

    async def insert_many(self, documents):
        ids = []
        for document in documents:
            result = await self.insert_one(document)
            ids.append(result.inserted_id)
        return SimpleNamespace(inserted_ids=ids)

    async def find_one_and_update(self, filter, update, return_document=ReturnDocument.BEFORE):
        doc = self._find_doc(filter)
        if doc is None:
            return None
        before = copy.deepcopy(doc)
        for field, amount in update.get("$inc", {}).items():
            doc[field] = doc.get(field, 0) + amount
        return copy.deepcopy(doc) if return_document == ReturnDocument.AFTER else before

    async def find_one_and_delete(self, filter):
        doc = self._find_doc(filter)
        if doc is None:
            return None
        self._documents.remove(doc)
        return copy.deepcopy(doc)

    async def delete_many(self, filter):
        if filter:
            kept = [d for d in self._documents if not all(d.get(k) == v for k, v in filter.items())]
        else:
            kept = []
        deleted = len(self._documents) - len(kept)
        self._documents = kept
        return SimpleNamespace(deleted_count=deleted)

    async def create_index(self, keys, name=None):
        self.indexes.append((keys, name))
        return name


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════


@pytest.fixture
def thought_collection():
    return InMemoryCollection()


@pytest.fixture
def thought_store(thought_collection):
    return ThoughtStore(thought_collection)


@pytest.fixture
def mock_collection():
    """
    Provides a mock async collection.

    Usage:
        async def test_lookup(mock_collection):
            mock_collection.find_one.return_value = doc
            result = await ThoughtStore(mock_collection).get_by_id(str(doc["_id"]))
    """
    collection = MagicMock()
    collection.find_one = AsyncMock(return_value=None)
    collection.insert_one = AsyncMock()
    collection.insert_many = AsyncMock()
    collection.find_one_and_update = AsyncMock(return_value=None)
    collection.find_one_and_delete = AsyncMock(return_value=None)
    collection.delete_many = AsyncMock()
    collection.create_index = AsyncMock()
    collection.database.command = AsyncMock(return_value={"ok": 1.0})
    return collection


@pytest.fixture
def sample_thought_document():
    return {
        "_id": ObjectId(),
        "message": "Hello world",
        "hearts": 3,
        "createdAt": datetime(2025, 5, 19, 22, 7, 8, tzinfo=timezone.utc),
    }


@pytest_asyncio.fixture
async def test_client(thought_store):
    """
    HTTPX AsyncClient talking to the FastAPI app in-process.

    ASGITransport does not run the lifespan, so no Mongo client is created;
    the ThoughtStore dependency is overridden with the in-memory store.
    """
    from happy_thoughts.database import get_thought_store
    from happy_thoughts.main import app

    app.dependency_overrides[get_thought_store] = lambda: thought_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
