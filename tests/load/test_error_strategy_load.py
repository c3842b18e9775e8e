"""Load test comparing the exception and Result error handling strategies.

Adds the same invalid movie many times through MovieService.add (raising)
and MovieService.add_with_result (returning), serializing the validation
errors the way the middleware and to_ok do, and reports the time each
strategy takes. A second phase posts invalid movies to /api/Movies/v3 and
checks every answer is a 400 with a body.

Run directly for the full comparison:

    python -m tests.load.test_error_strategy_load
"""

import logging
import time
from typing import Callable, Dict, Iterable
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from api.src.config import Settings
from api.src.exceptions import ValidationException
from api.src.main import create_app
from api.src.models.movie import MovieEntity
from api.src.repositories.movie_repo import MovieRepository
from api.src.services.movie_service import MovieService
from api.src.validation import MovieValidator, to_json_string

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

COUNTS = (100, 1000, 5000)
INVALID_MOVIE = MovieEntity(id=0, title="", director="", release_year=0)


def build_service() -> MovieService:
    """Service with a repository that would accept anything."""
    repository = Mock(spec=MovieRepository)
    repository.add.return_value = True
    return MovieService(repository, MovieValidator(Settings()), Mock())


def add_with_exception(service: MovieService) -> bool:
    """One add through the raising path, serialized like the middleware."""
    try:
        return service.add(INVALID_MOVIE)
    except ValidationException as e:
        to_json_string(e)
        return False


def add_with_result(service: MovieService) -> bool:
    """One add through the Result path, serialized like to_ok."""
    result = service.add_with_result(INVALID_MOVIE)

    def on_failure(error: Exception) -> bool:
        if isinstance(error, ValidationException):
            to_json_string(error)
        return False

    return result.match(lambda added: added, on_failure)


def time_strategy(strategy: Callable[[MovieService], bool], count: int) -> float:
    """Run a strategy ``count`` times and return the elapsed seconds."""
    service = build_service()
    start_time = time.perf_counter()
    for _ in range(count):
        if strategy(service):
            raise AssertionError("invalid movie was accepted")
    return time.perf_counter() - start_time


def compare_strategies(counts: Iterable[int] = COUNTS) -> Dict[int, Dict[str, float]]:
    """Time both strategies for each count."""
    timings = {}
    for count in counts:
        timings[count] = {
            "exception": time_strategy(add_with_exception, count),
            "result": time_strategy(add_with_result, count),
        }
        logger.info(
            f"count={count}: exception {timings[count]['exception']:.4f}s, "
            f"result {timings[count]['result']:.4f}s"
        )
    return timings


def post_invalid_movies(client: TestClient, count: int) -> int:
    """Post invalid movies to /api/Movies/v3 and return how many answered 400 with a body."""
    payload = {"id": 1, "title": "", "director": "Director 1", "releaseYear": 2020}
    bad_requests = 0
    for _ in range(count):
        response = client.post("/api/Movies/v3", json=payload)
        if response.status_code == 400 and response.content:
            bad_requests += 1
    return bad_requests


def run_load_test():
    """Run the strategy comparison and the HTTP burst."""
    logger.info("=" * 80)
    logger.info("Starting error handling strategy load test")
    logger.info("=" * 80)

    compare_strategies()

    logger.info("-" * 80)
    logger.info("HTTP: posting 1000 invalid movies to /api/Movies/v3")
    logger.info("-" * 80)

    settings = Settings(database_url="sqlite:///load_test_movies.db", log_level="WARNING")
    with TestClient(create_app(settings)) as client:
        start_time = time.perf_counter()
        bad_requests = post_invalid_movies(client, 1000)
        duration = time.perf_counter() - start_time

    logger.info(f"{bad_requests}/1000 answered 400 in {duration:.2f}s")


# ============================================================================
# PYTEST ENTRY POINTS
# ============================================================================


@pytest.mark.load
class TestErrorStrategyLoad:
    """Reduced runs of the load test."""

    def test_both_strategies_reject_every_movie(self):
        """Test neither strategy accepts the invalid movie under repetition."""
        timings = compare_strategies(counts=(100,))

        assert set(timings[100]) == {"exception", "result"}
        assert all(seconds >= 0 for seconds in timings[100].values())

    def test_http_burst_answers_bad_request(self, client):
        """Test every invalid post to v3 answers 400 with a body."""
        assert post_invalid_movies(client, 50) == 50


if __name__ == "__main__":
    run_load_test()
