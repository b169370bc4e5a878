"""
Link store strategies using Strategy Pattern.

The store is the single source of truth for links and the sole arbiter of
code and URL uniqueness. Services hold no cached copies; every call is a
fresh round trip.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from shortlink_app.exceptions import (
    CodeConflictError,
    DuplicateURLError,
    StoreUnavailableError,
)
from shortlink_app.models.link import Link

logger = logging.getLogger(__name__)


class LinkStore(ABC):
    """
    Abstract base class for link stores.

    Every method may raise StoreUnavailableError. try_insert additionally
    separates a benign code collision (CodeConflictError) from any other
    failure; the allocator's retry loop depends on that distinction.
    """

    @abstractmethod
    def find_by_code(self, short_code: str) -> Optional[Link]:
        """
        Exact-match lookup on short_code.

        Returns:
            The Link or None if absent
        """
        pass

    @abstractmethod
    def find_by_url(self, long_url: str) -> Optional[Link]:
        """
        Exact-match lookup on long_url.

        Returns:
            The Link or None if absent
        """
        pass

    @abstractmethod
    def try_insert(self, short_code: str, long_url: str) -> Link:
        """
        Persist a new Link.

        Returns:
            The stored Link

        Raises:
            CodeConflictError: short_code already exists
            DuplicateURLError: long_url was stored by another writer
            StoreUnavailableError: any other storage failure
        """
        pass


class SQLAlchemyLinkStore(LinkStore):
    """
    Relational store backed by a SQLAlchemy session.

    Works against SQLite, PostgreSQL or MySQL: constraint violations are
    attributed by re-reading after rollback instead of parsing driver
    specific error messages.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_by_code(self, short_code: str) -> Optional[Link]:
        try:
            return self.db.query(Link).filter(Link.short_code == short_code).first()
        except SQLAlchemyError as e:
            self._fail("lookup by code", e)

    def find_by_url(self, long_url: str) -> Optional[Link]:
        try:
            return self.db.query(Link).filter(Link.long_url == long_url).first()
        except SQLAlchemyError as e:
            self._fail("lookup by URL", e)

    def try_insert(self, short_code: str, long_url: str) -> Link:
        link = Link(short_code=short_code, long_url=long_url)
        try:
            self.db.add(link)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            self._classify_conflict(short_code, long_url, e)
        except SQLAlchemyError as e:
            self._fail("insert", e)

        # Committed rows are never re-read: created_at arrived with the INSERT
        return link

    def _classify_conflict(self, short_code: str, long_url: str, error: IntegrityError):
        """Work out which unique constraint rejected the insert, then raise"""
        existing = self.find_by_url(long_url)
        if existing is not None:
            raise DuplicateURLError(existing)

        if self.find_by_code(short_code) is not None:
            raise CodeConflictError(short_code)

        # Neither row exists: not a uniqueness problem we can retry past
        logger.error(f"Unattributed integrity error inserting '{short_code}': {error}")
        raise StoreUnavailableError("Insert rejected by the database") from error

    def _fail(self, operation: str, error: SQLAlchemyError):
        try:
            self.db.rollback()
        except SQLAlchemyError:
            logger.debug("Rollback failed after store error", exc_info=True)
        logger.error(f"Link store {operation} failed: {error}")
        raise StoreUnavailableError(f"Link store {operation} failed") from error
