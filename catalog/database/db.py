from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy import text
from sqlalchemy.pool import StaticPool
import time
import logging

from catalog.config import (
    DATABASE_URL,
    DB_ECHO,
    DB_CONNECT_TIMEOUT,
    DB_MAX_RETRIES,
    DB_RETRY_DELAY,
)
from catalog.models import Movie  # noqa: F401  registers the table

logger = logging.getLogger(__name__)


def make_engine(url: str = DATABASE_URL, echo: bool = DB_ECHO):
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        # In-memory databases live only as long as their one connection
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs = {
            "pool_pre_ping": True,
            "connect_args": {"connect_timeout": DB_CONNECT_TIMEOUT},
        }
    return create_engine(url, echo=echo, **kwargs)


engine = make_engine()


def wait_for_db(engine=engine, max_retries: int = DB_MAX_RETRIES, retry_delay: float = DB_RETRY_DELAY):
    for attempt in range(1, max_retries + 1):
        try:
            logger.info(f"Attempt {attempt}/{max_retries}: Connecting to DB...")
            with Session(engine) as session:
                session.execute(text("SELECT 1"))
            logger.info(f"Connected to {engine.dialect.name} database")
            SQLModel.metadata.create_all(engine)
            logger.info("Database tables ready")
            return
        except Exception as e:
            logger.error(f"Connection failed: {type(e).__name__}: {str(e)}")
            if attempt == max_retries:
                raise RuntimeError(f"Failed to connect to DB after {max_retries} attempts") from e
            time.sleep(retry_delay)


def get_session():
    with Session(engine) as session:
        yield session
