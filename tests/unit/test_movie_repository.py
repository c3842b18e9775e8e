"""
Unit tests for MovieRepository against a temporary SQLite database.

Tests cover:
- add / get_all / get_by_id
- add_async success and failure Results
- update overwriting stored values
- delete reporting whether a row was removed
"""

import pytest
from sqlalchemy.exc import IntegrityError

from api.src.models.movie import MovieEntity
from api.src.repositories.movie_repo import MovieRepository


class TestAddAndRead:
    """Tests for add, get_all and get_by_id."""

    def test_empty_database(self, repository):
        """Test a fresh database has no movies."""
        assert repository.get_all() == []
        assert repository.get_by_id(1) is None

    def test_add_then_get(self, repository, valid_movie):
        """Test a stored movie can be read back."""
        assert repository.add(valid_movie) is True

        assert repository.get_by_id(1) == valid_movie
        assert repository.get_all() == [valid_movie]

    def test_id_zero_is_assigned_by_database(self, repository):
        """Test a movie without an id gets one on insert."""
        repository.add(MovieEntity(title="Movie A", director="Director A", release_year=2001))
        repository.add(MovieEntity(title="Movie B", director="Director B", release_year=2002))

        movies = repository.get_all()

        assert [m.id for m in movies] == [1, 2]
        assert [m.title for m in movies] == ["Movie A", "Movie B"]

    def test_duplicate_id_raises(self, repository, valid_movie):
        """Test inserting an existing id propagates the database error."""
        repository.add(valid_movie)

        with pytest.raises(IntegrityError):
            repository.add(valid_movie)


class TestAddAsync:
    """Tests for add_async."""

    @pytest.mark.asyncio
    async def test_success_returns_stored_movie(self, session_factory, async_session_factory):
        """Test the stored movie comes back with its assigned id."""
        repository = MovieRepository(session_factory, async_session_factory)

        result = await repository.add_async(
            MovieEntity(title="Movie 1", director="Director 1", release_year=2020)
        )

        assert result.is_success
        assert result.value.id == 1
        assert repository.get_by_id(1).title == "Movie 1"

    @pytest.mark.asyncio
    async def test_database_error_is_returned(self, session_factory, async_session_factory, valid_movie):
        """Test a constraint violation comes back as a failed Result."""
        repository = MovieRepository(session_factory, async_session_factory)
        repository.add(valid_movie)

        result = await repository.add_async(valid_movie)

        assert result.is_faulted
        assert isinstance(result.error, IntegrityError)


class TestUpdateAndDelete:
    """Tests for update and delete."""

    def test_update_overwrites_values(self, repository, valid_movie):
        """Test the new values replace the stored ones."""
        repository.add(valid_movie)
        updated = MovieEntity(id=1, title="Movie 1 Remastered", director="Director 1", release_year=2024)

        repository.update(updated)

        assert repository.get_by_id(1) == updated

    def test_delete_existing(self, repository, valid_movie):
        """Test deleting a stored movie removes it."""
        repository.add(valid_movie)

        assert repository.delete(valid_movie) is True
        assert repository.get_by_id(1) is None

    def test_delete_missing(self, repository, valid_movie):
        """Test deleting an unknown movie reports False."""
        assert repository.delete(valid_movie) is False
