"""
Link storage module.

Implements the Strategy Pattern so services depend on the LinkStore
interface, not on SQLAlchemy directly.
"""

from .link_store import LinkStore, SQLAlchemyLinkStore

__all__ = [
    "LinkStore",
    "SQLAlchemyLinkStore",
]
