"""
Database models for the link shortener.

The links table is the only persistent state in the system.
"""

from .link import Link

__all__ = ["Link"]
