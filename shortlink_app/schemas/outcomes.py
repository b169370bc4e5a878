"""
Tagged outcomes returned by the core entry points.

resolve() and allocate() never raise for expected failures; they return one
of these so the presentation layer can pick the page, status and message.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ResolveOutcome(str, Enum):
    EMPTY = "empty"              # No code in the path; nothing to resolve
    REDIRECT = "redirect"
    NOT_FOUND = "not_found"
    STORE_ERROR = "store_error"


class AllocateOutcome(str, Enum):
    CREATED = "created"
    REUSED = "reused"
    EXHAUSTED = "exhausted"      # Every attempt collided
    STORE_ERROR = "store_error"


class Resolution(BaseModel):
    outcome: ResolveOutcome
    short_code: str = ""
    long_url: Optional[str] = None


class Allocation(BaseModel):
    outcome: AllocateOutcome
    long_url: str
    short_code: Optional[str] = None
    attempts: int = Field(0, description="Number of insert attempts made")

    @property
    def succeeded(self) -> bool:
        return self.outcome in (AllocateOutcome.CREATED, AllocateOutcome.REUSED)
