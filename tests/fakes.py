"""
Hand-written LinkStore stand-ins for forcing failure paths.
"""
from typing import Optional

from shortlink_app.exceptions import (
    CodeConflictError,
    DuplicateURLError,
    StoreUnavailableError,
)
from shortlink_app.models.link import Link
from shortlink_app.storage.link_store import LinkStore


class AlwaysConflictingStore(LinkStore):
    """Every insert collides; counts how often it was asked"""

    def __init__(self):
        self.insert_calls = 0

    def find_by_code(self, short_code: str) -> Optional[Link]:
        return None

    def find_by_url(self, long_url: str) -> Optional[Link]:
        return None

    def try_insert(self, short_code: str, long_url: str) -> Link:
        self.insert_calls += 1
        raise CodeConflictError(short_code)


class ConflictingThenWorkingStore(AlwaysConflictingStore):
    """Collides on the first `conflicts` inserts, then accepts"""

    def __init__(self, conflicts: int):
        super().__init__()
        self.conflicts = conflicts

    def try_insert(self, short_code: str, long_url: str) -> Link:
        self.insert_calls += 1
        if self.insert_calls <= self.conflicts:
            raise CodeConflictError(short_code)
        return Link(short_code=short_code, long_url=long_url)


class FailingStore(AlwaysConflictingStore):
    """Store whose inserts fail for reasons unrelated to collisions"""

    def try_insert(self, short_code: str, long_url: str) -> Link:
        self.insert_calls += 1
        raise StoreUnavailableError("connection lost")


class DownStore(LinkStore):
    def find_by_code(self, short_code: str) -> Optional[Link]:
        raise StoreUnavailableError("connection refused")

    def find_by_url(self, long_url: str) -> Optional[Link]:
        raise StoreUnavailableError("connection refused")

    def try_insert(self, short_code: str, long_url: str) -> Link:
        raise StoreUnavailableError("connection refused")


class LosingRaceStore(AlwaysConflictingStore):
    """Another writer stores the same URL between dedup check and insert"""

    def try_insert(self, short_code: str, long_url: str) -> Link:
        self.insert_calls += 1
        raise DuplicateURLError(Link(short_code="winner1", long_url=long_url))
