"""
Happy Thoughts API — ThoughtStore Unit Tests
==============================================

What:  Tests for the MongoDB adapter.
How:   `mock_collection` asserts the exact driver calls; `thought_store`
       (in-memory collection) checks behaviour end to end.

What we test:
    ✅ Sort/limit translate to find().sort().limit()
    ✅ Malformed ids never reach the collection
    ✅ Likes use an atomic $inc and return the updated document
    ✅ Sort properties over real data (hearts and date, non-increasing)
    ✅ Seed helpers delete_all / insert_many
"""

import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo import ReturnDocument

from happy_thoughts.database import ThoughtStore
from happy_thoughts.exceptions import InvalidIdError, ValidationError
from happy_thoughts.models.thought import ThoughtSort


def _mock_cursor(documents):
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=documents)
    return cursor


class TestThoughtStoreDriverCalls:
    """Driver-level assertions against a mock collection."""

    @pytest.mark.asyncio
    async def test_list_sorted_by_hearts(self, mock_collection):
        cursor = _mock_cursor([])
        mock_collection.find.return_value = cursor

        result = await ThoughtStore(mock_collection).list(sort=ThoughtSort.HEARTS, limit=20)

        assert result == []
        cursor.sort.assert_called_once_with([("hearts", -1)])
        cursor.limit.assert_called_once_with(20)

    @pytest.mark.asyncio
    async def test_list_unsorted_skips_sort(self, mock_collection):
        cursor = _mock_cursor([])
        mock_collection.find.return_value = cursor

        await ThoughtStore(mock_collection).list(sort=ThoughtSort.NONE, limit=20)

        cursor.sort.assert_not_called()
        cursor.limit.assert_called_once_with(20)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["get_by_id", "increment_hearts", "delete_by_id"])
    async def test_malformed_id_rejected_before_query(self, mock_collection, method):
        store = ThoughtStore(mock_collection)

        with pytest.raises(InvalidIdError):
            await getattr(store, method)("not-a-valid-id")

        mock_collection.find_one.assert_not_awaited()
        mock_collection.find_one_and_update.assert_not_awaited()
        mock_collection.find_one_and_delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_increment_hearts_uses_atomic_inc(self, mock_collection, sample_thought_document):
        mock_collection.find_one_and_update.return_value = {**sample_thought_document, "hearts": 4}
        oid = sample_thought_document["_id"]

        result = await ThoughtStore(mock_collection).increment_hearts(str(oid))

        assert result["hearts"] == 4
        mock_collection.find_one_and_update.assert_awaited_once_with(
            {"_id": oid},
            {"$inc": {"hearts": 1}},
            return_document=ReturnDocument.AFTER,
        )

    @pytest.mark.asyncio
    async def test_create_invalid_message_not_inserted(self, mock_collection):
        with pytest.raises(ValidationError):
            await ThoughtStore(mock_collection).create("hey")

        mock_collection.insert_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_ensure_indexes(self, mock_collection):
        await ThoughtStore(mock_collection).ensure_indexes()

        assert mock_collection.create_index.await_count == 2

    @pytest.mark.asyncio
    async def test_ping(self, mock_collection):
        assert await ThoughtStore(mock_collection).ping() is True
        mock_collection.database.command.assert_awaited_once_with("ping")


class TestThoughtStoreBehaviour:
    """Behaviour against the in-memory collection."""

    @pytest.mark.asyncio
    async def test_create_sets_defaults(self, thought_store):
        before = datetime.now(timezone.utc)
        created = await thought_store.create("Hello world")
        after = datetime.now(timezone.utc)

        assert isinstance(created["_id"], ObjectId)
        assert created["hearts"] == 0
        assert before <= created["createdAt"] <= after

        fetched = await thought_store.get_by_id(str(created["_id"]))
        assert fetched["message"] == "Hello world"

    @pytest.mark.asyncio
    async def test_create_invalid_persists_nothing(self, thought_store, thought_collection):
        for message in (None, "", "four", "x" * 141):
            with pytest.raises(ValidationError):
                await thought_store.create(message)

        assert thought_collection.documents == []

    @pytest.mark.asyncio
    async def test_unknown_id_returns_none(self, thought_store):
        missing = str(ObjectId())

        assert await thought_store.get_by_id(missing) is None
        assert await thought_store.increment_hearts(missing) is None
        assert await thought_store.delete_by_id(missing) is None

    @pytest.mark.asyncio
    async def test_two_likes_add_two(self, thought_store):
        created = await thought_store.create("Hello world")
        thought_id = str(created["_id"])

        first = await thought_store.increment_hearts(thought_id)
        second = await thought_store.increment_hearts(thought_id)

        assert first["hearts"] == 1
        assert second["hearts"] == 2

    @pytest.mark.asyncio
    async def test_concurrent_likes_not_lost(self, thought_store):
        created = await thought_store.create("Hello world")
        thought_id = str(created["_id"])

        await asyncio.gather(*(thought_store.increment_hearts(thought_id) for _ in range(10)))

        fetched = await thought_store.get_by_id(thought_id)
        assert fetched["hearts"] == 10

    @pytest.mark.asyncio
    async def test_delete_removes_and_returns(self, thought_store):
        created = await thought_store.create("Hello world")
        thought_id = str(created["_id"])

        deleted = await thought_store.delete_by_id(thought_id)

        assert deleted["_id"] == created["_id"]
        assert await thought_store.get_by_id(thought_id) is None

    @pytest.mark.asyncio
    async def test_sort_properties(self, thought_store):
        base = datetime(2025, 5, 1, tzinfo=timezone.utc)
        await thought_store.insert_many(
            [
                {"message": f"Thought number {i}", "hearts": (i * 7) % 5, "createdAt": base + timedelta(hours=(i * 3) % 8)}
                for i in range(8)
            ]
        )

        by_hearts = await thought_store.list(sort=ThoughtSort.HEARTS, limit=20)
        hearts = [doc["hearts"] for doc in by_hearts]
        assert hearts == sorted(hearts, reverse=True)

        by_date = await thought_store.list(sort=ThoughtSort.DATE, limit=20)
        dates = [doc["createdAt"] for doc in by_date]
        assert dates == sorted(dates, reverse=True)

    @pytest.mark.asyncio
    async def test_list_respects_limit(self, thought_store):
        await thought_store.insert_many([{"message": f"Thought number {i}"} for i in range(25)])

        result = await thought_store.list(limit=20)

        assert len(result) == 20

    @pytest.mark.asyncio
    async def test_delete_all_and_insert_many(self, thought_store, thought_collection):
        await thought_store.create("Hello world")

        assert await thought_store.delete_all() == 1
        assert await thought_store.insert_many([{"message": "Seeded thought", "hearts": 4}]) == 1
        assert await thought_store.insert_many([]) == 0

        docs = thought_collection.documents
        assert len(docs) == 1
        assert docs[0]["hearts"] == 4
