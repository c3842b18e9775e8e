"""
Movie service.

Sits between the movies router and the repository:
- Validates entities before any write
- Logs missing movies and refused writes
- Offers three add flavours: raising (add), Result-returning
  (add_with_result) and async Result-returning (add_result_async)
"""

import structlog
from typing import Any, Optional, Protocol, Tuple

from api.src.exceptions import MovieNotAddedError, ValidationException
from api.src.models.movie import MovieEntity
from api.src.repositories.movie_repo import MovieRepositoryProtocol
from api.src.result import Result
from api.src.validation import MovieValidator
from shared.metrics import setup_metrics


class MovieServiceProtocol(Protocol):
    """Operations the movies router depends on."""

    def get_all(self) -> Tuple[MovieEntity, ...]: ...

    def get_by_id(self, movie_id: int) -> Optional[MovieEntity]: ...

    def add(self, movie: MovieEntity) -> bool: ...

    def add_with_result(self, movie: MovieEntity) -> Result[bool]: ...

    async def add_result_async(self, movie: MovieEntity) -> Result[MovieEntity]: ...

    def update(self, movie: MovieEntity) -> Optional[MovieEntity]: ...

    def delete(self, movie: MovieEntity) -> bool: ...


class MovieService:
    """Service for movie catalog operations."""

    def __init__(
        self,
        repository: MovieRepositoryProtocol,
        validator: MovieValidator,
        logger: Optional[Any] = None
    ):
        """
        Initialize movie service.

        Args:
            repository: Movie repository
            validator: Movie validator
            logger: structlog logger (defaults to this module's logger)
        """
        self.repository = repository
        self.validator = validator
        self.logger = logger or structlog.get_logger(__name__)
        _, self.metrics = setup_metrics()

    def get_all(self) -> Tuple[MovieEntity, ...]:
        """Return every movie as a read-only sequence."""
        return tuple(self.repository.get_all())

    def get_by_id(self, movie_id: int) -> Optional[MovieEntity]:
        """
        Get a movie by id.

        Args:
            movie_id: Movie ID

        Returns:
            Movie or None if it does not exist
        """
        movie = self.repository.get_by_id(movie_id)
        if movie is None:
            self.logger.warning(
                "movie_not_found",
                movie_id=movie_id,
                detail="Trying to access movie that does not exist"
            )
            return None

        return movie

    def add(self, movie: MovieEntity) -> bool:
        """
        Validate and store a movie.

        Args:
            movie: Movie to add

        Returns:
            True if stored, False if the repository refused it

        Raises:
            ValidationException: If the movie breaks a validation rule
        """
        try:
            self.validator.validate_and_raise(movie)
        except ValidationException:
            self.metrics.validation_failures.labels(strategy="exception").inc()
            raise

        added = self.repository.add(movie)
        if not added:
            self.metrics.write_failures.labels(operation="add").inc()
            self.logger.warning("movie_add_failed", title=movie.title)

        return added

    def add_with_result(self, movie: MovieEntity) -> Result[bool]:
        """
        Validate and store a movie, reporting failures as a Result.

        Args:
            movie: Movie to add

        Returns:
            success(True) when stored; failure(ValidationException) when
            invalid; failure(MovieNotAddedError) when the repository refused it
        """
        validation = self.validator.validate(movie)
        if not validation.is_valid:
            self.metrics.validation_failures.labels(strategy="result").inc()
            return Result.failure(ValidationException(validation.errors))

        if not self.repository.add(movie):
            self.metrics.write_failures.labels(operation="add").inc()
            self.logger.warning("movie_add_failed", title=movie.title)
            return Result.failure(MovieNotAddedError(f"Movie '{movie.title}' was not added"))

        return Result.success(True)

    async def add_result_async(self, movie: MovieEntity) -> Result[MovieEntity]:
        """
        Validate and store a movie through the async repository path.

        Args:
            movie: Movie to add

        Returns:
            success(stored movie) or failure(ValidationException | database error)
        """
        validation = self.validator.validate(movie)
        if not validation.is_valid:
            self.metrics.validation_failures.labels(strategy="result_async").inc()
            return Result.failure(ValidationException(validation.errors))

        result = await self.repository.add_async(movie)
        if result.is_faulted:
            self.metrics.write_failures.labels(operation="add_async").inc()
            self.logger.warning("movie_add_failed", title=movie.title, error=str(result.error))

        return result

    def update(self, movie: MovieEntity) -> Optional[MovieEntity]:
        """
        Validate and overwrite an existing movie.

        Args:
            movie: Movie carrying the id to update and the new values

        Returns:
            The updated movie, or None if no movie has that id

        Raises:
            ValidationException: If the movie breaks a validation rule
        """
        try:
            self.validator.validate_and_raise(movie)
        except ValidationException:
            self.metrics.validation_failures.labels(strategy="exception").inc()
            raise

        existing = self.repository.get_by_id(movie.id)
        if existing is None:
            self.logger.warning("movie_update_not_found", movie_id=movie.id)
            return None

        self.repository.update(movie)

        return movie

    def delete(self, movie: MovieEntity) -> bool:
        """
        Delete a movie.

        Args:
            movie: Movie to delete

        Returns:
            True if deleted, False if the repository did not delete it
        """
        deleted = self.repository.delete(movie)
        if not deleted:
            self.metrics.write_failures.labels(operation="delete").inc()
            self.logger.warning("movie_delete_failed", movie_id=movie.id)

        return deleted
