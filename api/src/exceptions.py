"""
Exception hierarchy shared by the service and repository layers.

ValidationException is raised by the movie validator and either propagates
to the exception middleware (exception strategy) or is wrapped in a failed
Result (result strategy).
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional


@dataclass(frozen=True)
class ValidationFailure:
    """A single failed validation rule for one property."""

    property_name: str
    error_message: str
    attempted_value: Optional[Any] = None


class MovieApiError(Exception):
    """Base class for movie API failures."""


class ValidationException(MovieApiError):
    """Raised when an entity fails one or more validation rules."""

    def __init__(self, errors: Iterable[ValidationFailure]):
        self.errors: List[ValidationFailure] = list(errors)
        summary = " ".join(
            f"-- {failure.property_name}: {failure.error_message}"
            for failure in self.errors
        )
        super().__init__(f"Validation failed: {summary}".rstrip())


class MovieNotAddedError(MovieApiError):
    """Raised (or returned in a Result) when the repository refuses an insert."""
