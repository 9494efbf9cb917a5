import os

# Must be set before catalog.database.db builds its engine
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session

from catalog.database.db import get_session, make_engine
from catalog.main import app


@pytest.fixture
def engine():
    engine = make_engine("sqlite://")
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def client(engine):
    def get_test_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = get_test_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def movie_payload():
    return {
        "title": "Dune",
        "director": "Denis Villeneuve",
        "genre": "Sci-Fi",
        "release_year": 2021,
        "rating": 8.0,
    }


class RecordingSession(Session):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.rollbacks = 0

    def rollback(self):
        self.rollbacks += 1
        super().rollback()


@pytest.fixture
def broken_client():
    """A client whose database has no tables, so every statement fails."""
    engine = make_engine("sqlite://")
    sessions = []

    def get_broken_session():
        with RecordingSession(engine) as session:
            sessions.append(session)
            yield session

    app.dependency_overrides[get_session] = get_broken_session
    yield TestClient(app), sessions
    app.dependency_overrides.clear()
    engine.dispose()
