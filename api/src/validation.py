"""
Movie validation rules and validation error serialization.

Provides:
- MovieValidator: per-field rule table for movie entities, reported as a
  pydantic ValidationError
- ValidationResult: the outcome of a validation run
- to_json_string: flat error list used in log lines
- to_problem_details: grouped error body used in 400 responses
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

import structlog
from pydantic import ValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import InitErrorDetails, PydanticCustomError

from api.src.config import Settings, get_settings
from api.src.exceptions import ValidationException, ValidationFailure
from api.src.models.movie import MovieEntity

logger = structlog.get_logger(__name__)

PROBLEM_TYPE = "https://tools.ietf.org/html/rfc9110#section-15.5.1"
PROBLEM_TITLE = "One or more validation errors occurred."

# Display names used inside error messages
DISPLAY_NAMES = {
    "title": "Title",
    "director": "Director",
    "release_year": "Release Year",
}


@dataclass
class ValidationResult:
    """Failures collected by a validation run."""

    errors: List[ValidationFailure] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _not_empty(field_name: str, value: str, limits: Dict[str, int]) -> Optional[PydanticCustomError]:
    if not value or not value.strip():
        return PydanticCustomError(
            "not_empty",
            "'{property}' must not be empty.",
            {"property": DISPLAY_NAMES[field_name]}
        )
    return None


def _maximum_length(field_name: str, value: str, limits: Dict[str, int]) -> Optional[PydanticCustomError]:
    max_length = limits[f"{field_name}_max_length"]
    if len(value) > max_length:
        return PydanticCustomError(
            "maximum_length",
            "The length of '{property}' must be {max_length} characters or fewer. "
            "You entered {total_length} characters.",
            {"property": DISPLAY_NAMES[field_name], "max_length": max_length, "total_length": len(value)}
        )
    return None


def _inclusive_between(field_name: str, value: int, limits: Dict[str, int]) -> Optional[PydanticCustomError]:
    low = limits["min_release_year"]
    high = limits["max_release_year"]
    if value < low or value > high:
        return PydanticCustomError(
            "inclusive_between",
            "'{property}' must be between {low} and {high}. You entered {value}.",
            {"property": DISPLAY_NAMES[field_name], "low": low, "high": high, "value": value}
        )
    return None


# Rules per field, in evaluation order. Every rule runs, so one property can
# report several failures.
MOVIE_RULES: List[Tuple[str, Tuple[Callable[..., Optional[PydanticCustomError]], ...]]] = [
    ("title", (_not_empty, _maximum_length)),
    ("director", (_not_empty, _maximum_length)),
    ("release_year", (_inclusive_between,)),
]


class MovieValidator:
    """Validates movie entities before they are persisted."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def _context(self) -> Dict[str, int]:
        return {
            "title_max_length": self.settings.title_max_length,
            "director_max_length": self.settings.director_max_length,
            "min_release_year": self.settings.min_release_year,
            "max_release_year": datetime.now(timezone.utc).year,
        }

    def validate(self, movie: MovieEntity) -> ValidationResult:
        """
        Run every rule against the movie.

        Args:
            movie: Entity to validate

        Returns:
            ValidationResult with failures ordered title, director, releaseYear
        """
        limits = self._context()
        line_errors: List[InitErrorDetails] = []
        for field_name, rules in MOVIE_RULES:
            value = getattr(movie, field_name)
            for rule in rules:
                error = rule(field_name, value, limits)
                if error is not None:
                    line_errors.append({"type": error, "loc": (field_name,), "input": value})

        if not line_errors:
            return ValidationResult()

        exc = ValidationError.from_exception_data(type(movie).__name__, line_errors)
        failures = [
            ValidationFailure(
                property_name=to_camel(str(error["loc"][0])),
                error_message=error["msg"],
                attempted_value=error.get("input"),
            )
            for error in exc.errors()
        ]
        return ValidationResult(errors=failures)

    def validate_and_raise(self, movie: MovieEntity) -> None:
        """
        Validate the movie and raise on failure.

        Raises:
            ValidationException: If any rule fails
        """
        result = self.validate(movie)
        if not result.is_valid:
            logger.debug(
                "movie_validation_failed",
                movie_id=movie.id,
                errors=to_json_string(result)
            )
            raise ValidationException(result.errors)


# ============================================================================
# Serialization
# ============================================================================


FailureSource = Union[ValidationResult, ValidationException, Iterable[ValidationFailure]]


def _failures(source: FailureSource) -> List[ValidationFailure]:
    if isinstance(source, (ValidationResult, ValidationException)):
        return list(source.errors)
    return list(source)


def to_json_string(source: FailureSource) -> str:
    """
    Serialize failures as a flat JSON list.

    Example:
        {"errors":[{"PropertyName":"title","ErrorMessage":"'Title' must not be empty."}]}
    """
    errors = [
        {"PropertyName": failure.property_name, "ErrorMessage": failure.error_message}
        for failure in _failures(source)
    ]
    return json.dumps({"errors": errors}, separators=(",", ":"))


def to_problem_details(source: FailureSource) -> Dict[str, Any]:
    """
    Build an HTTP validation problem body, grouping messages per property.

    Property order follows the first failure of each property.
    """
    grouped: Dict[str, List[str]] = {}
    for failure in _failures(source):
        grouped.setdefault(failure.property_name, []).append(failure.error_message)

    return {
        "type": PROBLEM_TYPE,
        "title": PROBLEM_TITLE,
        "status": 400,
        "errors": grouped,
    }
