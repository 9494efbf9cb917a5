import pytest

from catalog.errors import InvalidId, ValidationError
from catalog.validation import (
    MIN_RELEASE_YEAR,
    clean_movie_input,
    parse_movie_id,
    validate_movie_input,
)

VALID = {"title": "Clue", "director": "Jonathan Lynn", "genre": "Comedy", "release_year": 1985}


@pytest.mark.parametrize("raw, expected", [("1", 1), (" 42 ", 42), ("+7", 7), ("-3", -3), ("007", 7)])
def test_parse_movie_id(raw, expected):
    assert parse_movie_id(raw) == expected


@pytest.mark.parametrize("raw", ["abc", "", "1.5", "12abc", "1e3", " "])
def test_parse_movie_id_rejects(raw):
    with pytest.raises(InvalidId):
        parse_movie_id(raw)


def test_valid_payload_has_no_errors():
    assert validate_movie_input(VALID, current_year=2026) == []


def test_release_year_bounds():
    assert validate_movie_input({**VALID, "release_year": MIN_RELEASE_YEAR}, current_year=2026) == []
    assert validate_movie_input({**VALID, "release_year": 2031}, current_year=2026) == []
    assert validate_movie_input({**VALID, "release_year": 2032}, current_year=2026) == [
        "Valid release year is required"
    ]
    assert validate_movie_input({**VALID, "release_year": 1887}, current_year=2026) == [
        "Valid release year is required"
    ]


@pytest.mark.parametrize("year", [None, "", "abc", True, 1999.5, [1999], 10 ** 400])
def test_release_year_must_be_an_integer(year):
    assert validate_movie_input({**VALID, "release_year": year}, current_year=2026) == [
        "Valid release year is required"
    ]


@pytest.mark.parametrize("rating", [0, 0.0, 10, "5.5", None])
def test_rating_accepted(rating):
    assert validate_movie_input({**VALID, "rating": rating}) == []


@pytest.mark.parametrize("rating", [-0.1, 10.01, "great", "", False, float("nan"), 10 ** 400, "1e400"])
def test_rating_rejected(rating):
    assert validate_movie_input({**VALID, "rating": rating}) == ["Rating must be between 0 and 10"]


def test_non_string_text_fields_are_missing():
    errors = validate_movie_input({**VALID, "title": 5, "genre": None})
    assert errors == ["Title is required", "Genre is required"]


def test_clean_trims_and_types():
    movie = clean_movie_input({
        "title": " Clue ",
        "director": "Jonathan Lynn\t",
        "genre": "\nComedy",
        "release_year": "1985",
        "rating": 0,
    })
    assert movie.title == "Clue"
    assert movie.director == "Jonathan Lynn"
    assert movie.genre == "Comedy"
    assert movie.release_year == 1985
    assert movie.rating == 0
    assert movie.rating is not None


def test_clean_keeps_absent_rating_absent():
    assert clean_movie_input(VALID).rating is None


def test_clean_raises_with_every_error():
    with pytest.raises(ValidationError) as info:
        clean_movie_input({"title": "", "director": "D", "genre": "G", "release_year": 1800})
    assert info.value.status_code == 400
    assert info.value.errors == ["Title is required", "Valid release year is required"]
