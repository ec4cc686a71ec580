"""
Happy Thoughts API — Database Client & Thought Store
======================================================

What:  Async MongoDB client lifecycle, the ThoughtStore adapter, and the
       FastAPI dependency that hands the store to route handlers.
Why:   Centralizes all persistence logic in one place.
How:   One AsyncMongoClient per process, created in the app lifespan and
       stored on `app.state`. Handlers receive the ThoughtStore through
       `Depends(get_thought_store)`, so tests can override it.
When:  Client created at startup, reused by every request, closed at shutdown.

Store operations (all on the `thoughts` collection):
    list(sort, limit)          find().sort().limit()
    get_by_id(id)              find_one({_id})
    create(message)            insert_one(validated document)
    increment_hearts(id)       find_one_and_update({$inc: {hearts: 1}})
    delete_by_id(id)           find_one_and_delete({_id})
    delete_all()               delete_many({})       (seed only)
    insert_many(records)       insert_many(...)      (seed only)
    insert_documents(docs)     insert_many(...)      (seed only, prebuilt)

Atomicity:
    Likes use the server-side `$inc` operator, so concurrent likes on the
    same thought never lose an update.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from fastapi import Request
from pymongo import AsyncMongoClient, ReturnDocument

from happy_thoughts.config import Settings, settings
from happy_thoughts.models.thought import (
    COLLECTION_NAME,
    INDEXES,
    ThoughtSort,
    new_thought_document,
    parse_object_id,
    seed_documents,
)

logger = logging.getLogger(__name__)


# ── Client Lifecycle ──────────────────────────────────────────────────────
def create_client(config: Optional[Settings] = None) -> AsyncMongoClient:
    """
    Create the process-wide MongoDB client.

    The driver connects lazily, so this never blocks or fails on an
    unreachable server; the first operation does.
    """
    config = config or settings
    return AsyncMongoClient(
        config.mongo_url,
        tz_aware=True,
        serverSelectionTimeoutMS=config.mongo_server_selection_timeout_ms,
    )


def get_database(client: AsyncMongoClient, config: Optional[Settings] = None):
    """Database named in the URL, falling back to MONGO_DB_NAME."""
    config = config or settings
    return client.get_default_database(default=config.mongo_db_name)


async def close_client(client: AsyncMongoClient) -> None:
    """Close all pooled connections. Called during application shutdown."""
    await client.close()


# ── Thought Store ─────────────────────────────────────────────────────────
class ThoughtStore:
    """
    Thin façade over the `thoughts` collection.

    Id-taking methods accept the raw path string and validate it with
    `parse_object_id` before touching the collection. Lookups return the
    raw document or None; turning None into a 404 is the service's job.
    """

    def __init__(self, collection):
        self._collection = collection

    @classmethod
    def from_client(
        cls, client: AsyncMongoClient, config: Optional[Settings] = None
    ) -> "ThoughtStore":
        return cls(get_database(client, config)[COLLECTION_NAME])

    @property
    def collection(self):
        return self._collection

    async def ensure_indexes(self) -> None:
        for keys, name in INDEXES:
            await self._collection.create_index(keys, name=name)

    async def list(self, sort: ThoughtSort = ThoughtSort.NONE, limit: int = 20) -> List[Dict[str, Any]]:
        cursor = self._collection.find()
        if sort.sort_spec:
            cursor = cursor.sort(sort.sort_spec)
        cursor = cursor.limit(limit)
        return await cursor.to_list(length=limit)

    async def get_by_id(self, thought_id: str) -> Optional[Dict[str, Any]]:
        oid = parse_object_id(thought_id)
        return await self._collection.find_one({"_id": oid})

    async def create(self, message: Any) -> Dict[str, Any]:
        document = new_thought_document(message)
        result = await self._collection.insert_one(document)
        document["_id"] = result.inserted_id
        logger.info("Thought created: %s", result.inserted_id)
        return document

    async def increment_hearts(self, thought_id: str) -> Optional[Dict[str, Any]]:
        oid = parse_object_id(thought_id)
        return await self._collection.find_one_and_update(
            {"_id": oid},
            {"$inc": {"hearts": 1}},
            return_document=ReturnDocument.AFTER,
        )

    async def delete_by_id(self, thought_id: str) -> Optional[Dict[str, Any]]:
        oid = parse_object_id(thought_id)
        return await self._collection.find_one_and_delete({"_id": oid})

    async def delete_all(self) -> int:
        result = await self._collection.delete_many({})
        return result.deleted_count

    async def insert_many(self, records: Iterable[Dict[str, Any]]) -> int:
        """
        Insert seed records, validating each one like a regular create.

        Records may carry `hearts` and `createdAt`; missing values get the
        usual defaults.
        """
        return await self.insert_documents(seed_documents(records))

    async def insert_documents(self, documents: List[Dict[str, Any]]) -> int:
        """Insert documents already built by `seed_documents`."""
        if not documents:
            return 0
        result = await self._collection.insert_many(documents)
        return len(result.inserted_ids)

    async def ping(self) -> bool:
        """Round trip to the server; raises on connection failure."""
        await self._collection.database.command("ping")
        return True


# ── FastAPI Dependency ────────────────────────────────────────────────────
def get_thought_store(request: Request) -> ThoughtStore:
    """
    Provide the ThoughtStore created during startup.

    Example usage in a route:
        @router.get("/thoughts")
        async def list_thoughts(store: ThoughtStore = Depends(get_thought_store)):
            ...
    """
    return request.app.state.thought_store
