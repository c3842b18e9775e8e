"""Data models for the FastAPI service.

This package contains the SQLAlchemy table model, the Pydantic movie entity
used for request/response validation, and the mapping between them.
"""

from api.src.models.movie import (
    Base,
    MovieEntity,
    MovieModel,
    to_movie_entity,
    to_movie_model,
)

__all__ = [
    "Base",
    "MovieEntity",
    "MovieModel",
    "to_movie_entity",
    "to_movie_model",
]
