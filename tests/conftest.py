"""
Test configuration and fixtures for the link shortener.
This centralizes all test setup, making individual tests clean.
"""

import pytest
from fastapi.testclient import TestClient

from shortlink_app.app_factory import create_app
from shortlink_app.config import Settings
from shortlink_app.database.connection import (
    Base,
    create_db_engine,
    create_session_factory,
)
from shortlink_app.services.link_service import LinkService
from shortlink_app.storage.link_store import SQLAlchemyLinkStore


@pytest.fixture(scope="function")
def settings(tmp_path):
    """Settings pointing at a throwaway SQLite file per test"""
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'links.db'}",
        base_url="http://short.test",
    )


@pytest.fixture(scope="function")
def engine(settings):
    """
    Create a fresh database for each test.
    This ensures tests are isolated and don't affect each other.
    """
    engine = create_db_engine(settings.database_url, settings.db_timeout_seconds)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture(scope="function")
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def store(db_session):
    return SQLAlchemyLinkStore(db_session)


@pytest.fixture(scope="function")
def service(store):
    return LinkService(store=store)


@pytest.fixture(scope="function")
def app(settings, engine):
    return create_app(settings, engine=engine)


@pytest.fixture(scope="function")
def client(app):
    """
    Create a test client for the app.
    This is the main fixture that HTTP tests will use.
    """
    with TestClient(app) as test_client:
        yield test_client

    # Clean up overrides
    app.dependency_overrides.clear()


@pytest.fixture
def broken_engine(tmp_path):
    """Engine whose database file can never be opened"""
    engine = create_db_engine(f"sqlite:///{tmp_path / 'missing' / 'links.db'}", 1)
    yield engine
    engine.dispose()
