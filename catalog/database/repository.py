"""
Movie persistence helpers.

Each function runs against an open session and issues statements built
with SQLModel's query builder, so every value travels as a bound
parameter. Errors from the database are left to the caller.
"""

from typing import List, Optional

from sqlmodel import Session, select, col

from catalog.models import Movie, MovieIn, DeletedMovie, utcnow


def list_movies(session: Session) -> List[Movie]:
    """Return every movie, newest first."""
    statement = select(Movie).order_by(col(Movie.created_at).desc(), col(Movie.id).desc())
    return list(session.exec(statement).all())


def get_movie(session: Session, movie_id: int) -> Optional[Movie]:
    return session.get(Movie, movie_id)


def create_movie(session: Session, data: MovieIn) -> Movie:
    """
    Insert a movie and return it as stored.

    The row is re-read after commit so server-assigned fields
    (id, created_at, updated_at) are populated.
    """
    movie = Movie.model_validate(data)
    session.add(movie)
    session.commit()
    session.refresh(movie)
    return movie


def update_movie(session: Session, movie: Movie, data: MovieIn) -> Movie:
    """
    Replace every mutable field of ``movie`` with ``data``.

    This is a full replacement, not a merge: a missing rating in ``data``
    clears the stored rating.
    """
    for field, value in data.model_dump().items():
        setattr(movie, field, value)
    movie.updated_at = utcnow()

    session.add(movie)
    session.commit()
    session.refresh(movie)
    return movie


def delete_movie(session: Session, movie: Movie) -> DeletedMovie:
    deleted = DeletedMovie(id=movie.id, title=movie.title)
    session.delete(movie)
    session.commit()
    return deleted
