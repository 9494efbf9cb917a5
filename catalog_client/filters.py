from typing import Any, Dict, Iterable, List

SEARCH_FIELDS = ("title", "director", "genre")


def matches_search(movie: Dict[str, Any], search_text: str) -> bool:
    if not search_text:
        return True
    term = search_text.casefold()
    return any(term in str(movie.get(name) or "").casefold() for name in SEARCH_FIELDS)


def matches_genre(movie: Dict[str, Any], genre: str) -> bool:
    return not genre or movie.get("genre") == genre


def derive_visible(movies: Iterable[Dict[str, Any]], search_text: str = "", genre: str = "") -> List[Dict[str, Any]]:
    """Movies passing both the search and the genre filter, in original order."""
    return [m for m in movies if matches_search(m, search_text) and matches_genre(m, genre)]


def available_genres(movies: Iterable[Dict[str, Any]]) -> List[str]:
    return sorted({m["genre"] for m in movies if m.get("genre")})
