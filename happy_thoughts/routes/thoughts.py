"""
Happy Thoughts API — Thought Route Handlers
=============================================

What:  The five /thoughts endpoints (list, detail, create, like, delete).
How:   Extract path/query/body values, delegate to ThoughtService with the
       injected ThoughtStore, return the envelope. Errors are raised and
       formatted by the global exception handlers in main.py.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query

from happy_thoughts.database import ThoughtStore, get_thought_store
from happy_thoughts.models.thought import ThoughtSort
from happy_thoughts.schemas.thought import (
    ApiResponse,
    ErrorResponse,
    ThoughtCreate,
    ThoughtResponse,
)
from happy_thoughts.services.thought_service import thought_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/thoughts", tags=["Thoughts"])

_ID_ERRORS = {
    400: {"description": "Invalid ID format", "model": ErrorResponse},
    404: {"description": "Thought not found", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.get(
    "",
    response_model=ApiResponse[List[ThoughtResponse]],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List thoughts",
    description=(
        "Returns up to THOUGHTS_LIMIT (default 20) thoughts. `?sort=hearts` orders by most liked, "
        "`?sort=date` by newest first; any other value leaves the store order."
    ),
)
async def list_thoughts(
    sort: str | None = Query(
        default=None,
        description="Sort order: 'hearts' (most liked first) or 'date' (newest first)",
    ),
    store: ThoughtStore = Depends(get_thought_store),
) -> ApiResponse[List[ThoughtResponse]]:
    return await thought_service.list_thoughts(store=store, sort=ThoughtSort.parse(sort))


@router.get(
    "/{thought_id}",
    response_model=ApiResponse[ThoughtResponse],
    responses=_ID_ERRORS,
    summary="Get a single thought by ID",
)
async def get_thought(
    thought_id: str,
    store: ThoughtStore = Depends(get_thought_store),
) -> ApiResponse[ThoughtResponse]:
    return await thought_service.get_thought(store=store, thought_id=thought_id)


@router.post(
    "",
    status_code=201,
    response_model=ApiResponse[ThoughtResponse],
    responses={
        400: {"description": "Validation failed", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a new thought",
    description="Body: `{\"message\": \"...\"}` with 5 to 140 characters.",
)
async def create_thought(
    payload: ThoughtCreate,
    store: ThoughtStore = Depends(get_thought_store),
) -> ApiResponse[ThoughtResponse]:
    """
    Create a thought with zero hearts and the current time as createdAt.

    Message rules are enforced by the store (validate_message), so a
    missing, short, or long message surfaces as a 400 validation_error.
    """
    return await thought_service.create_thought(store=store, message=payload.message)


@router.patch(
    "/{thought_id}/like",
    response_model=ApiResponse[ThoughtResponse],
    responses=_ID_ERRORS,
    summary="Like a thought (increments hearts by 1)",
)
async def like_thought(
    thought_id: str,
    store: ThoughtStore = Depends(get_thought_store),
) -> ApiResponse[ThoughtResponse]:
    return await thought_service.like_thought(store=store, thought_id=thought_id)


@router.delete(
    "/{thought_id}",
    response_model=ApiResponse[ThoughtResponse],
    responses=_ID_ERRORS,
    summary="Delete a thought by ID",
)
async def delete_thought(
    thought_id: str,
    store: ThoughtStore = Depends(get_thought_store),
) -> ApiResponse[ThoughtResponse]:
    return await thought_service.delete_thought(store=store, thought_id=thought_id)
