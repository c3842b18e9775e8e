"""
Movie models.

Provides both the SQLAlchemy ORM model and the Pydantic entity for:
- Movie rows stored in the "Movie" table
- Movie entities passed between router, service and repository
- Mapping between the two representations

Uses SQLAlchemy 2.0 declarative syntax with async compatibility.
"""

from typing import Annotated, Optional

from sqlalchemy import Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Integer fields accept the 32-bit signed range only
INT32_MIN = -2**31
INT32_MAX = 2**31 - 1

Int32 = Annotated[int, Field(ge=INT32_MIN, le=INT32_MAX)]


# ============================================================================
# SQLAlchemy Base
# ============================================================================


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


# ============================================================================
# SQLAlchemy Models
# ============================================================================


class MovieModel(Base):
    """
    Movie row.

    Column names keep the PascalCase "Movie" table layout so an
    existing moviedatabase.db file stays readable.
    """
    __tablename__ = "Movie"

    id: Mapped[int] = mapped_column(
        "Id",
        Integer,
        primary_key=True,
        autoincrement=True
    )
    title: Mapped[str] = mapped_column(
        "Title",
        String,
        nullable=False
    )
    director: Mapped[str] = mapped_column(
        "Director",
        String,
        nullable=False
    )
    release_year: Mapped[int] = mapped_column(
        "ReleaseYear",
        Integer,
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<MovieModel(id={self.id}, title='{self.title}')>"


# ============================================================================
# Pydantic Schemas
# ============================================================================


class MovieEntity(BaseModel):
    """
    Movie entity used across all layers and as the JSON contract.

    Field names are camelCase on the wire (``releaseYear``). No business
    rules are enforced here: MovieValidator checks them at the service
    boundary, so missing fields simply default to empty values. Integer
    fields only reject values outside the 32-bit signed range.
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "The Matrix",
                "director": "Lana Wachowski",
                "releaseYear": 1999
            }
        }
    )

    id: Int32 = 0
    title: str = ""
    director: str = ""
    release_year: Int32 = 0

    def to_response(self) -> dict:
        """Serialize with wire (camelCase) field names."""
        return self.model_dump(by_alias=True)


# ============================================================================
# Mapping
# ============================================================================


def to_movie_entity(movie_model: MovieModel) -> MovieEntity:
    """Convert an ORM row to a movie entity."""
    return MovieEntity(
        id=movie_model.id,
        title=movie_model.title,
        director=movie_model.director,
        release_year=movie_model.release_year
    )


def to_movie_model(movie_entity: MovieEntity) -> MovieModel:
    """
    Convert a movie entity to an ORM row.

    An entity id of 0 means "not stored yet" and leaves the primary key
    unset so the database assigns one.
    """
    movie_id: Optional[int] = movie_entity.id or None
    return MovieModel(
        id=movie_id,
        title=movie_entity.title,
        director=movie_entity.director,
        release_year=movie_entity.release_year
    )
