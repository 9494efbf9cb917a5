from sqlmodel import SQLModel, Field
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    # Timestamp columns only accept timezone-aware values
    return datetime.now(timezone.utc)


class MovieBase(SQLModel):
    title: str = Field(index=True)
    director: str
    genre: str = Field(index=True)
    release_year: int
    rating: Optional[float] = Field(default=None, nullable=True)


class Movie(MovieBase, table=True):
    __tablename__ = "movies"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=utcnow, nullable=False, index=True)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)


class MovieIn(MovieBase):
    """Trimmed, validated fields of a create or update request."""


class DeletedMovie(SQLModel):
    id: int
    title: str
