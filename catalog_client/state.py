"""
Client-side state for the catalog view.

The editor session is a tagged variant: a view is either Closed, Creating
a new movie, or Editing one specific movie id. There is no way to express
"editing" without an id.
"""

from dataclasses import dataclass, field
import math
from typing import Any, Dict, List, Union


@dataclass(frozen=True)
class Closed:
    pass


@dataclass(frozen=True)
class Creating:
    pass


@dataclass(frozen=True)
class Editing:
    movie_id: int


EditorSession = Union[Closed, Creating, Editing]


def _coerce_year(raw: str):
    text = raw.strip()
    try:
        return int(text)
    except ValueError:
        pass
    number = _finite_float(text)
    if number is None:
        return text
    return int(number) if number.is_integer() else number


def _coerce_rating(raw: str):
    text = raw.strip()
    if not text:
        return None
    number = _finite_float(text)
    return text if number is None else number


def _finite_float(text: str):
    # "nan", "inf" and "1e400" parse, but JSON cannot carry them
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


@dataclass
class MovieForm:
    """Raw editor field values, as typed."""

    title: str = ""
    director: str = ""
    genre: str = ""
    release_year: str = ""
    rating: str = ""

    @classmethod
    def from_movie(cls, movie: Dict[str, Any]) -> "MovieForm":
        rating = movie.get("rating")
        return cls(
            title=movie["title"],
            director=movie["director"],
            genre=movie["genre"],
            release_year=str(movie["release_year"]),
            rating="" if rating is None else f"{rating:g}",
        )

    def to_payload(self) -> Dict[str, Any]:
        # Values that don't parse are sent as typed so the API reports them
        return {
            "title": self.title.strip(),
            "director": self.director.strip(),
            "genre": self.genre.strip(),
            "release_year": _coerce_year(self.release_year),
            "rating": _coerce_rating(self.rating),
        }


@dataclass
class CatalogState:
    all_movies: List[Dict[str, Any]] = field(default_factory=list)
    visible_movies: List[Dict[str, Any]] = field(default_factory=list)
    search_text: str = ""
    selected_genre: str = ""
    editor: EditorSession = field(default_factory=Closed)
    form: MovieForm = field(default_factory=MovieForm)
    loading: bool = False
