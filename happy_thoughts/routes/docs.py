"""
Happy Thoughts API — Documentation Route
==========================================

What:  GET / returns a static description of the available endpoints.
Why:   Lets anyone hitting the root URL discover the API without opening /docs.
"""

from fastapi import APIRouter

from happy_thoughts.schemas.thought import ApiDocumentation, EndpointDoc

router = APIRouter(tags=["Documentation"])

API_DOCUMENTATION = ApiDocumentation(
    message="Happy Thoughts API!",
    endpoints=[
        EndpointDoc(
            path="/thoughts",
            method="GET",
            description="Returns all thoughts",
            queryParams="?sort=hearts or ?sort=date",
        ),
        EndpointDoc(
            path="/thoughts/:id",
            method="GET",
            description="Returns a single thought by ID",
        ),
        EndpointDoc(
            path="/thoughts",
            method="POST",
            description="Creates a new thought",
            body={"message": "Your happy thought (5-140 characters)"},
        ),
        EndpointDoc(
            path="/thoughts/:id/like",
            method="PATCH",
            description="Likes a thought (increments hearts by 1)",
        ),
        EndpointDoc(
            path="/thoughts/:id",
            method="DELETE",
            description="Deletes a thought by ID",
        ),
    ],
)


@router.get(
    "/",
    response_model=ApiDocumentation,
    response_model_exclude_none=True,
    summary="API documentation",
)
async def api_documentation() -> ApiDocumentation:
    return API_DOCUMENTATION
