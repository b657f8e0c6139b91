#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

from functools import lru_cache
from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from core.app_context import AppContext
from core.matcher.service import MatchingService
from .config import get_config


class DatabaseManager:
    """Manages database connections and sessions."""

    def __init__(self, url: str):
        self.engine = create_engine(
            url,
            pool_pre_ping=True,  # Verify connections before using
            pool_size=10,
            max_overflow=20
        )
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )

    def get_session(self) -> Generator[Session, None, None]:
        """
        Get a database session.

        Commits when the request handler returns normally, rolls back
        when it raises.

        Yields:
            Session: SQLAlchemy database session.
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


@lru_cache()
def get_db_manager() -> DatabaseManager:
    """Process-wide database manager, created on first use."""
    return DatabaseManager(get_config().database.url)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a database session.

    Usage:
        @app.get("/endpoint")
        def my_endpoint(db: Session = Depends(get_db)):
            ...

    Yields:
        Session: Database session that will be automatically closed.
    """
    yield from get_db_manager().get_session()


@lru_cache()
def get_app_context() -> AppContext:
    """Process-wide AppContext; owns the shared recommendation cache."""
    return AppContext.build(get_config())


def get_matching_service() -> MatchingService:
    """FastAPI dependency returning the shared MatchingService."""
    return get_app_context().matching_service
