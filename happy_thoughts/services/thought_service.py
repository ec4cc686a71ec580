"""
Happy Thoughts API — Thought Service (Business Logic)
=======================================================

What:  Turns store results into API envelopes and store failures into
       application exceptions.
Why:   Keeps route handlers thin (HTTP only) and the store free of HTTP
       semantics.
How:   Each method receives the ThoughtStore for the call, so the service
       itself holds no state and tests can pass any store double.

Error Handling Strategy:
    InvalidIdError / ValidationError  raised by the store, propagate as-is
    store returned None               → NotFoundError
    pymongo.errors.PyMongoError       → DatabaseError with an operation message
"""

import logging
from typing import Any, List

from pymongo.errors import PyMongoError

from happy_thoughts.config import settings
from happy_thoughts.database import ThoughtStore
from happy_thoughts.exceptions import DatabaseError, NotFoundError
from happy_thoughts.models.thought import ThoughtSort
from happy_thoughts.schemas.thought import ApiResponse, ThoughtResponse

logger = logging.getLogger(__name__)


class ThoughtService:
    """
    Business logic layer for thought operations.

    Responsibilities:
        - list_thoughts(): Sorted, limited listing
        - get_thought(): Single thought with not-found handling
        - create_thought(): Validated insert
        - like_thought(): Atomic hearts increment
        - delete_thought(): Remove and return the deleted thought
    """

    async def list_thoughts(
        self,
        store: ThoughtStore,
        sort: ThoughtSort = ThoughtSort.NONE,
        limit: int | None = None,
    ) -> ApiResponse[List[ThoughtResponse]]:
        if limit is None:
            limit = settings.thoughts_limit
        try:
            documents = await store.list(sort=sort, limit=limit)
        except PyMongoError as e:
            logger.error("Database error listing thoughts: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not fetch thoughts",
                context={"error_type": type(e).__name__},
            )

        return ApiResponse[List[ThoughtResponse]](
            response=[ThoughtResponse.from_document(doc) for doc in documents],
            message="Success",
        )

    async def get_thought(
        self, store: ThoughtStore, thought_id: str
    ) -> ApiResponse[ThoughtResponse]:
        """
        Raises:
            InvalidIdError: Malformed id (→ 400)
            NotFoundError: No thought with this id (→ 404)
            DatabaseError: Query failed (→ 500)
        """
        try:
            document = await store.get_by_id(thought_id)
        except PyMongoError as e:
            logger.error("Database error fetching thought %s: %s", thought_id, str(e))
            raise DatabaseError(
                message="Could not fetch thought",
                context={"thought_id": thought_id},
            )

        if document is None:
            raise NotFoundError(resource="thought", resource_id=thought_id)

        return ApiResponse[ThoughtResponse](
            response=ThoughtResponse.from_document(document),
            message="Success",
        )

    async def create_thought(
        self, store: ThoughtStore, message: Any
    ) -> ApiResponse[ThoughtResponse]:
        """
        Raises:
            ValidationError: Message missing, not a string, or out of 5..140 (→ 400)
            DatabaseError: Insert failed (→ 500)
        """
        try:
            document = await store.create(message)
        except PyMongoError as e:
            logger.error("Database error creating thought: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create thought",
                context={"error_type": type(e).__name__},
            )

        return ApiResponse[ThoughtResponse](
            response=ThoughtResponse.from_document(document),
            message="Thought created successfully",
        )

    async def like_thought(
        self, store: ThoughtStore, thought_id: str
    ) -> ApiResponse[ThoughtResponse]:
        try:
            document = await store.increment_hearts(thought_id)
        except PyMongoError as e:
            logger.error("Database error liking thought %s: %s", thought_id, str(e))
            raise DatabaseError(
                message="Could not like thought",
                context={"thought_id": thought_id},
            )

        if document is None:
            raise NotFoundError(resource="thought", resource_id=thought_id)

        logger.info("Thought %s liked (hearts=%d)", thought_id, document["hearts"])
        return ApiResponse[ThoughtResponse](
            response=ThoughtResponse.from_document(document),
            message="Thought liked successfully",
        )

    async def delete_thought(
        self, store: ThoughtStore, thought_id: str
    ) -> ApiResponse[ThoughtResponse]:
        try:
            document = await store.delete_by_id(thought_id)
        except PyMongoError as e:
            logger.error("Database error deleting thought %s: %s", thought_id, str(e))
            raise DatabaseError(
                message="Could not delete thought",
                context={"thought_id": thought_id},
            )

        if document is None:
            raise NotFoundError(resource="thought", resource_id=thought_id)

        logger.info("Thought %s deleted", thought_id)
        return ApiResponse[ThoughtResponse](
            response=ThoughtResponse.from_document(document),
            message="Thought deleted successfully",
        )


# Stateless, so one shared instance is enough
thought_service = ThoughtService()
