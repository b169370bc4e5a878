"""
User-facing messages for each core outcome.

Every failure kind ends up as exactly one of these strings; storage errors
and stack traces never reach the page.
"""

from typing import NamedTuple, Optional

from fastapi import status

from shortlink_app.schemas.outcomes import AllocateOutcome, Allocation, Resolution, ResolveOutcome


class PageMessage(NamedTuple):
    level: str  # "success" or "error", used as the CSS class
    text: str
    status_code: int = status.HTTP_200_OK


INVALID_URL = PageMessage(
    "error",
    "Error: Please enter a valid URL (must include http:// or https://).",
    status.HTTP_400_BAD_REQUEST,
)


def resolution_message(resolution: Resolution) -> Optional[PageMessage]:
    """Message for a failed resolution; None when there's nothing to say"""
    if resolution.outcome == ResolveOutcome.NOT_FOUND:
        return PageMessage(
            "error",
            f"Error: The short link '{resolution.short_code}' was not found.",
            status.HTTP_404_NOT_FOUND,
        )
    if resolution.outcome == ResolveOutcome.STORE_ERROR:
        return PageMessage(
            "error",
            "Database Query Error during lookup.",
            status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    return None


def allocation_message(allocation: Allocation) -> PageMessage:
    if allocation.outcome == AllocateOutcome.CREATED:
        return PageMessage("success", "URL shortened successfully!")
    if allocation.outcome == AllocateOutcome.REUSED:
        return PageMessage("success", "This URL was already shortened! Reusing existing link.")
    if allocation.outcome == AllocateOutcome.EXHAUSTED:
        return PageMessage(
            "error",
            f"Error: Failed to generate a unique code after {allocation.attempts} attempts. "
            "Database conflict may exist.",
            status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    return PageMessage(
        "error",
        "Database Connection Error: Cannot reach the link database.",
        status.HTTP_503_SERVICE_UNAVAILABLE,
    )
