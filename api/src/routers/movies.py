"""
Movies router.

Provides REST API endpoints for the movie catalog:
- Listing and fetching movies
- Adding movies with three error handling strategies:
  POST /api/Movies     validation errors raised, translated by middleware
  POST /api/Movies/v2  validation errors returned in a Result
  POST /api/Movies/v3  same as v2 through the async repository path
- Updating and deleting movies

Validation failures answer 400 with problem details; missing movies 404
with an empty body. Ids outside the 32-bit signed range are rejected with
400 before reaching the service.
"""

import structlog
from typing import Annotated, List

from fastapi import APIRouter, Depends, Path, Response, status

from api.src.dependencies import get_movie_service
from api.src.models.movie import INT32_MAX, INT32_MIN, MovieEntity
from api.src.responses import to_ok
from api.src.services.movie_service import MovieServiceProtocol

logger = structlog.get_logger(__name__)

MovieId = Annotated[int, Path(ge=INT32_MIN, le=INT32_MAX)]

router = APIRouter(
    prefix="/Movies",
    tags=["Movies"],
    responses={
        400: {"description": "Validation Error"},
        500: {"description": "Internal Server Error"}
    }
)


@router.get(
    "",
    response_model=List[MovieEntity],
    summary="List Movies"
)
def get_all(
    service: MovieServiceProtocol = Depends(get_movie_service)
) -> List[MovieEntity]:
    """Return every movie in the catalog."""
    return list(service.get_all())


@router.get(
    "/{movie_id}",
    response_model=MovieEntity,
    summary="Get Movie",
    responses={404: {"description": "Movie not found"}}
)
def get_by_id(
    movie_id: MovieId,
    service: MovieServiceProtocol = Depends(get_movie_service)
):
    """Return one movie, or 404 if it does not exist."""
    movie = service.get_by_id(movie_id)
    if movie is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    return movie


@router.post(
    "",
    summary="Add Movie",
    description="Validation failures are raised and turned into 400 by the exception middleware."
)
def add(
    movie: MovieEntity,
    service: MovieServiceProtocol = Depends(get_movie_service)
) -> Response:
    """Add a movie; 200 when stored, 400 when the repository refused it."""
    if service.add(movie):
        return Response(status_code=status.HTTP_200_OK)

    return Response(status_code=status.HTTP_400_BAD_REQUEST)


@router.post(
    "/v2",
    summary="Add Movie (Result)",
    description="Validation failures are returned by the service as a failed Result."
)
def add_with_result(
    movie: MovieEntity,
    service: MovieServiceProtocol = Depends(get_movie_service)
) -> Response:
    """Add a movie; 200 with ``true``, 400 problem details, or 500."""
    result = service.add_with_result(movie)
    return to_ok(result, lambda added: added)


@router.post(
    "/v3",
    summary="Add Movie (async Result)",
    description="Like v2, stored through the async repository path; returns the stored movie."
)
async def add_result_async(
    movie: MovieEntity,
    service: MovieServiceProtocol = Depends(get_movie_service)
) -> Response:
    """Add a movie asynchronously; 200 with the stored movie, 400, or 500."""
    result = await service.add_result_async(movie)
    return to_ok(result, lambda stored: stored.to_response())


@router.put(
    "/{movie_id}",
    response_model=MovieEntity,
    summary="Update Movie",
    responses={404: {"description": "Movie not found"}}
)
def update(
    movie_id: MovieId,
    movie: MovieEntity,
    service: MovieServiceProtocol = Depends(get_movie_service)
):
    """Replace a movie; 400 if the path and body ids differ, 404 if missing."""
    if movie_id != movie.id:
        logger.warning("movie_update_id_mismatch", path_id=movie_id, body_id=movie.id)
        return Response(status_code=status.HTTP_400_BAD_REQUEST)

    updated = service.update(movie)
    if updated is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    return updated


@router.delete(
    "/{movie_id}",
    summary="Delete Movie",
    responses={404: {"description": "Movie not found"}}
)
def delete(
    movie_id: MovieId,
    service: MovieServiceProtocol = Depends(get_movie_service)
) -> Response:
    """Delete a movie; 404 if missing, 400 if the repository did not delete it."""
    movie = service.get_by_id(movie_id)
    if movie is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    if service.delete(movie):
        return Response(status_code=status.HTTP_200_OK)

    return Response(status_code=status.HTTP_400_BAD_REQUEST)
