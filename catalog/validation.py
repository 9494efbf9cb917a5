"""
Request validation for movie create and update payloads.

Both operations share one rule set. All rules are checked on every call
so the client gets the complete list of problems in one round trip.
"""

import math
import re
from datetime import datetime
from typing import Any, List, Optional

from catalog.errors import InvalidId, ValidationError
from catalog.models import MovieIn

MIN_RELEASE_YEAR = 1888
RELEASE_YEAR_LOOKAHEAD = 5
MIN_RATING = 0
MAX_RATING = 10
MAX_ID = 2 ** 63 - 1

_ID_PATTERN = re.compile(r"^\s*[+-]?\d+\s*$")


def parse_movie_id(raw: str) -> int:
    """Parse a path parameter into a movie id, raising InvalidId otherwise."""
    if raw is None or not _ID_PATTERN.match(raw):
        raise InvalidId()
    movie_id = int(raw)
    # Beyond BIGINT the driver raises before the query runs
    if abs(movie_id) > MAX_ID:
        raise InvalidId()
    return movie_id


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _number(value: Any) -> Optional[float]:
    """
    Interpret a JSON value as a number.

    Accepts ints, floats and numeric strings. Returns None for anything
    else, including booleans, empty strings and NaN/infinity.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except (ValueError, OverflowError):
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def max_release_year(current_year: Optional[int] = None) -> int:
    if current_year is None:
        current_year = datetime.now().year
    return current_year + RELEASE_YEAR_LOOKAHEAD


def validate_movie_input(payload: Any, current_year: Optional[int] = None) -> List[str]:
    if not isinstance(payload, dict):
        return ["Request body must be a JSON object"]

    errors = []

    if not _text(payload.get("title")):
        errors.append("Title is required")
    if not _text(payload.get("director")):
        errors.append("Director is required")
    if not _text(payload.get("genre")):
        errors.append("Genre is required")

    year = _number(payload.get("release_year"))
    if (
        year is None
        or not year.is_integer()
        or not MIN_RELEASE_YEAR <= year <= max_release_year(current_year)
    ):
        errors.append("Valid release year is required")

    # null and a missing key both mean "no rating"
    raw_rating = payload.get("rating")
    if raw_rating is not None:
        rating = _number(raw_rating)
        if rating is None or not MIN_RATING <= rating <= MAX_RATING:
            errors.append("Rating must be between 0 and 10")

    return errors


def clean_movie_input(payload: Any, current_year: Optional[int] = None) -> MovieIn:
    """Validate ``payload`` and return its trimmed, typed fields."""
    errors = validate_movie_input(payload, current_year)
    if errors:
        raise ValidationError(errors)

    raw_rating = payload.get("rating")
    return MovieIn(
        title=_text(payload["title"]),
        director=_text(payload["director"]),
        genre=_text(payload["genre"]),
        release_year=int(_number(payload["release_year"])),
        rating=None if raw_rating is None else _number(raw_rating),
    )
