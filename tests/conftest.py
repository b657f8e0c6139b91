"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For standard test utilities, see tests/__init__.py
"""

import os
import pytest


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as requiring database (deselect with '-m \"not db\"')"
    )


@pytest.fixture(scope="session")
def test_database():
    """
    Session-scoped fixture that automatically manages the test database container.

    Uses testcontainers to start a PostgreSQL container before tests and stops
    it after all tests complete. Uses an external database instead if
    TEST_DATABASE_URL is set.
    """
    external_url = os.environ.get("TEST_DATABASE_URL")
    if external_url:
        from tests import check_db_available
        if check_db_available():
            from tests import setup_test_database
            setup_test_database()
            yield external_url
            return
        else:
            pytest.skip("External database not available")

    try:
        from testcontainers.postgres import PostgresContainer
        from sqlalchemy import create_engine
        from database.models import Base

        postgres = PostgresContainer(
            image="postgres:16-alpine",
            username="testuser",
            password="testpass",
            dbname="scholarmatch_test",
            port=5432
        )
        postgres.start()
    except Exception as e:
        pytest.skip(f"Could not start test database container: {e}")

    try:
        db_url = postgres.get_connection_url()
        os.environ["TEST_DATABASE_URL"] = db_url

        engine = create_engine(db_url)
        Base.metadata.create_all(engine)
        engine.dispose()

        print(f"\n✓ Test database started: {db_url}")
        yield db_url
    finally:
        postgres.stop()
        print("\n✓ Test database stopped")


@pytest.fixture
def db_session(test_database):
    """Session on the test database; every table is emptied afterwards."""
    from sqlalchemy import create_engine
    from sqlalchemy.orm import sessionmaker
    from database.models import Base

    engine = create_engine(test_database)
    session = sessionmaker(bind=engine, autoflush=False)()
    try:
        yield session
    finally:
        session.rollback()
        for table in reversed(Base.metadata.sorted_tables):
            session.execute(table.delete())
        session.commit()
        session.close()
        engine.dispose()
