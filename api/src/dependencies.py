"""
FastAPI dependency injection for database, repositories and services.

Provides injectable dependencies for:
- Database engines and session factories (sync and async SQLite)
- Repository instances
- Validator and service instances

All dependencies use FastAPI's dependency injection system and can be
replaced in tests through ``app.dependency_overrides``.
"""

import structlog
from typing import Optional

from fastapi import Depends
from sqlalchemy import Engine, create_engine, text
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import sessionmaker

from api.src.config import get_settings, Settings
from api.src.models.movie import Base
from api.src.repositories.movie_repo import MovieRepository
from api.src.services.movie_service import MovieService
from api.src.validation import MovieValidator

logger = structlog.get_logger(__name__)


# ============================================================================
# DATABASE ENGINES
# ============================================================================

_engine: Optional[Engine] = None
_async_engine: Optional[AsyncEngine] = None
_session_factory: Optional[sessionmaker] = None
_async_session_factory: Optional[async_sessionmaker] = None


def init_database(settings: Optional[Settings] = None) -> None:
    """
    Create the database engines and make sure the schema exists.

    Should be called during application startup. When
    ``database_reset_on_startup`` is set, existing tables are dropped first.

    Args:
        settings: Settings to use (defaults to cached settings)
    """
    global _engine, _async_engine, _session_factory, _async_session_factory

    if _engine is not None:
        return

    settings = settings or get_settings()

    try:
        _engine = create_engine(
            settings.database_url,
            echo=settings.database_echo,
            connect_args={"check_same_thread": False}
        )
        _async_engine = create_async_engine(
            settings.database_url_async,
            echo=settings.database_echo
        )
        _session_factory = sessionmaker(bind=_engine, expire_on_commit=False)
        _async_session_factory = async_sessionmaker(bind=_async_engine, expire_on_commit=False)

        if settings.database_reset_on_startup:
            Base.metadata.drop_all(_engine)
            logger.info("database_schema_dropped")
        Base.metadata.create_all(_engine)

        logger.info(
            "database_initialized",
            database=settings.database_url,
            reset=settings.database_reset_on_startup
        )

    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise


async def close_database() -> None:
    """
    Dispose of the database engines.

    Should be called during application shutdown.
    """
    global _engine, _async_engine, _session_factory, _async_session_factory

    if _async_engine is not None:
        await _async_engine.dispose()
    if _engine is not None:
        _engine.dispose()
        logger.info("database_closed")

    _engine = None
    _async_engine = None
    _session_factory = None
    _async_session_factory = None


def get_session_factory() -> sessionmaker:
    """
    Get the synchronous session factory.

    Raises:
        RuntimeError: If the database is not initialized
    """
    if _session_factory is None:
        logger.error("database_not_initialized")
        raise RuntimeError(
            "Database not initialized. Call init_database() during startup."
        )
    return _session_factory


def get_async_session_factory() -> async_sessionmaker:
    """
    Get the async session factory.

    Raises:
        RuntimeError: If the database is not initialized
    """
    if _async_session_factory is None:
        logger.error("database_not_initialized")
        raise RuntimeError(
            "Database not initialized. Call init_database() during startup."
        )
    return _async_session_factory


def check_database() -> bool:
    """
    Run a trivial query to confirm the database answers.

    Returns:
        True if the query succeeded, False otherwise
    """
    try:
        with get_session_factory()() as session:
            session.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error("database_health_check_failed", error=str(e))
        return False


# ============================================================================
# REPOSITORY DEPENDENCIES
# ============================================================================


def get_movie_repository(
    session_factory: sessionmaker = Depends(get_session_factory),
    async_session_factory: async_sessionmaker = Depends(get_async_session_factory)
) -> MovieRepository:
    """
    Get movie repository instance.

    Returns:
        MovieRepository instance
    """
    return MovieRepository(session_factory, async_session_factory)


# ============================================================================
# SERVICE DEPENDENCIES
# ============================================================================


def get_movie_validator(settings: Settings = Depends(get_settings)) -> MovieValidator:
    """
    Get movie validator instance.

    Returns:
        MovieValidator instance
    """
    return MovieValidator(settings)


def get_movie_service(
    repository: MovieRepository = Depends(get_movie_repository),
    validator: MovieValidator = Depends(get_movie_validator)
) -> MovieService:
    """
    Get movie service instance.

    Returns:
        MovieService instance
    """
    return MovieService(repository, validator)
