"""
Shared fixtures for the movies API test suite.

Every fixture that touches a database points at a temporary SQLite file so
tests never share state or write moviedatabase.db.
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.orm import sessionmaker

from api.src.config import Settings
from api.src.main import create_app
from api.src.models.movie import Base, MovieEntity
from api.src.repositories.movie_repo import MovieRepository


# ============================================================================
# SETTINGS AND APPLICATION
# ============================================================================


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings bound to a temporary database file."""
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'movies_test.db'}",
        log_format="text",
        log_level="WARNING",
    )


@pytest.fixture
def client(settings):
    """Test client running the full application lifespan."""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


# ============================================================================
# DATABASE
# ============================================================================


@pytest.fixture
def database_url(tmp_path) -> str:
    """URL of an empty temporary database with the schema created."""
    url = f"sqlite:///{tmp_path / 'movies_repo.db'}"
    engine = create_engine(url)
    Base.metadata.create_all(engine)
    engine.dispose()
    return url


@pytest.fixture
def session_factory(database_url):
    """Synchronous session factory for the temporary database."""
    engine = create_engine(database_url)
    yield sessionmaker(bind=engine, expire_on_commit=False)
    engine.dispose()


@pytest_asyncio.fixture
async def async_session_factory(database_url):
    """Async session factory for the temporary database."""
    engine = create_async_engine(database_url.replace("sqlite://", "sqlite+aiosqlite://", 1))
    yield async_sessionmaker(bind=engine, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def repository(session_factory):
    """Repository wired to the temporary database (sync operations only)."""
    unused_async = async_sessionmaker()
    return MovieRepository(session_factory, unused_async)


# ============================================================================
# ENTITIES
# ============================================================================


@pytest.fixture
def valid_movie() -> MovieEntity:
    """A movie that passes every validation rule."""
    return MovieEntity(id=1, title="Movie 1", director="Director 1", release_year=2020)


@pytest.fixture
def invalid_movie() -> MovieEntity:
    """A movie that breaks the title, director and release year rules."""
    return MovieEntity(id=1, title="", director="", release_year=0)
