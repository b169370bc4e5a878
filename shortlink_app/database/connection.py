"""
Database engine, session factory and declarative base.

The engine is built from Settings at startup (see app_factory); nothing here
connects at import time.
"""

import logging

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_db_engine(database_url: str, timeout_seconds: int = 5) -> Engine:
    """
    Create the SQLAlchemy engine with a bounded wait on every connection.

    SQLite: `timeout` bounds how long a writer waits on the file lock.
    Server databases: `connect_timeout` bounds the TCP/auth handshake and
    `pool_timeout` bounds waiting for a free pooled connection.
    """
    url = make_url(database_url)

    if url.get_backend_name() == "sqlite":
        return create_engine(
            url,
            connect_args={"check_same_thread": False, "timeout": timeout_seconds},
        )

    return create_engine(
        url,
        pool_pre_ping=True,
        pool_timeout=timeout_seconds,
        connect_args={"connect_timeout": timeout_seconds},
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_database(engine: Engine) -> bool:
    """
    Create tables if they don't exist.

    A database that is down at startup must not take the process down with
    it: the failure is logged and every request reports it until the
    database comes back.
    """
    # Import models so they're registered with Base
    from shortlink_app.models import Link  # noqa: F401

    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        logger.error(f"Table creation failed, database unavailable: {e}")
        return False

    logger.info("Database tables ready")
    return True


def get_db(request: Request):
    """
    FastAPI dependency yielding one session per request.

    The session is always closed, so a failed request can't leak a
    connection or a half-finished transaction into the next one.
    """
    db: Session = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
