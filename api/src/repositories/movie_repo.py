"""
Movie repository for database operations.

Provides CRUD operations for movies using SQLAlchemy over SQLite, with a
synchronous session for the classic endpoints and an async session for the
async add. Rows are mapped to MovieEntity before leaving the repository.
"""

import structlog
from typing import Iterator, List, Optional, Protocol
from contextlib import contextmanager

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlalchemy.orm import Session, sessionmaker

from api.src.models.movie import MovieEntity, MovieModel, to_movie_entity, to_movie_model
from api.src.result import Result
from shared.tracing import trace_function

logger = structlog.get_logger(__name__)


class MovieRepositoryProtocol(Protocol):
    """Persistence operations the movie service depends on."""

    def get_all(self) -> List[MovieEntity]: ...

    def get_by_id(self, movie_id: int) -> Optional[MovieEntity]: ...

    def add(self, movie: MovieEntity) -> bool: ...

    async def add_async(self, movie: MovieEntity) -> Result[MovieEntity]: ...

    def update(self, movie: MovieEntity) -> None: ...

    def delete(self, movie: MovieEntity) -> bool: ...


class MovieRepository:
    """Repository for movie database operations."""

    def __init__(
        self,
        session_factory: sessionmaker,
        async_session_factory: async_sessionmaker
    ):
        """
        Initialize movie repository.

        Args:
            session_factory: Factory for synchronous sessions
            async_session_factory: Factory for async sessions
        """
        self.session_factory = session_factory
        self.async_session_factory = async_session_factory

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        Context manager for database transactions.

        Commits on exit, rolls back if the block raises.

        Yields:
            Session: Database session
        """
        with self.session_factory.begin() as session:
            yield session

    @trace_function("movie_repository.get_all")
    def get_all(self) -> List[MovieEntity]:
        """
        Get every stored movie ordered by id.

        Returns:
            List of movies
        """
        try:
            with self.session_factory() as session:
                rows = session.scalars(select(MovieModel).order_by(MovieModel.id)).all()
                return [to_movie_entity(row) for row in rows]

        except SQLAlchemyError as e:
            logger.error("movie_list_failed", error=str(e))
            raise

    @trace_function("movie_repository.get_by_id")
    def get_by_id(self, movie_id: int) -> Optional[MovieEntity]:
        """
        Get movie by ID.

        Args:
            movie_id: Movie ID

        Returns:
            Movie or None if not found
        """
        try:
            with self.session_factory() as session:
                row = session.get(MovieModel, movie_id)
                return to_movie_entity(row) if row is not None else None

        except SQLAlchemyError as e:
            logger.error("movie_get_failed", error=str(e), movie_id=movie_id)
            raise

    @trace_function("movie_repository.add")
    def add(self, movie: MovieEntity) -> bool:
        """
        Insert a movie.

        Args:
            movie: Movie to store (id 0 lets the database assign one)

        Returns:
            True once the row is committed

        Raises:
            SQLAlchemyError: On database error
        """
        try:
            with self.transaction() as session:
                row = to_movie_model(movie)
                session.add(row)

            logger.info("movie_created", movie_id=row.id, title=row.title)
            return True

        except SQLAlchemyError as e:
            logger.error("movie_create_failed", error=str(e), title=movie.title)
            raise

    @trace_function("movie_repository.add_async")
    async def add_async(self, movie: MovieEntity) -> Result[MovieEntity]:
        """
        Insert a movie through the async session.

        Database errors are returned as a failed Result instead of raised.

        Args:
            movie: Movie to store

        Returns:
            Result holding the stored movie with its assigned id
        """
        try:
            async with self.async_session_factory.begin() as session:
                row = to_movie_model(movie)
                session.add(row)

            logger.info("movie_created", movie_id=row.id, title=row.title, mode="async")
            return Result.success(to_movie_entity(row))

        except SQLAlchemyError as e:
            logger.error("movie_create_failed", error=str(e), title=movie.title, mode="async")
            return Result.failure(e)

    @trace_function("movie_repository.update")
    def update(self, movie: MovieEntity) -> None:
        """
        Overwrite the stored row that has the movie's id.

        Args:
            movie: Movie with the new values
        """
        try:
            with self.transaction() as session:
                session.merge(to_movie_model(movie))

            logger.info("movie_updated", movie_id=movie.id)

        except SQLAlchemyError as e:
            logger.error("movie_update_failed", error=str(e), movie_id=movie.id)
            raise

    @trace_function("movie_repository.delete")
    def delete(self, movie: MovieEntity) -> bool:
        """
        Delete a movie.

        Args:
            movie: Movie to delete (matched by id)

        Returns:
            True if a row was deleted, False if none matched
        """
        try:
            with self.transaction() as session:
                result = session.execute(
                    delete(MovieModel).where(MovieModel.id == movie.id)
                )
                deleted = result.rowcount > 0

            if deleted:
                logger.info("movie_deleted", movie_id=movie.id)
            return deleted

        except SQLAlchemyError as e:
            logger.error("movie_delete_failed", error=str(e), movie_id=movie.id)
            raise
