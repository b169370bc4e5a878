import re
from datetime import datetime
from typing import Optional
from urllib.parse import quote, urlparse

from pydantic import BaseModel, Field, field_validator

from shortlink_app.exceptions import URLValidationError
from shortlink_app.models.link import MAX_URL_LENGTH

ALLOWED_SCHEMES = ("http", "https")
_WHITESPACE_OR_CONTROL = re.compile(r"[\s\x00-\x1f\x7f]")
# Characters a Location header carries unencoded (same set RedirectResponse keeps)
REDIRECT_SAFE = ":/%#?=@[]!$&'()*+,;~"


def validate_long_url(value: Optional[str]) -> str:
    """
    Check that a submitted value is an absolute http(s) URL.

    The value is returned unchanged: no trimming, lowercasing or trailing
    slash fixes, so dedup compares exactly what the user submitted.
    Values a redirect would have to percent-encode are rejected, so the
    Location header always equals the stored URL.

    Raises:
        URLValidationError: If the value is missing or malformed
    """
    if not value or not isinstance(value, str):
        raise URLValidationError("URL is required")

    if len(value) > MAX_URL_LENGTH:
        raise URLValidationError(f"URL is too long (max {MAX_URL_LENGTH} characters)")

    if _WHITESPACE_OR_CONTROL.search(value):
        raise URLValidationError("URL must not contain spaces or control characters")

    if quote(value, safe=REDIRECT_SAFE) != value:
        raise URLValidationError("URL contains characters that must be percent-encoded")

    try:
        parsed = urlparse(value)
        hostname = parsed.hostname
    except ValueError as e:
        raise URLValidationError(f"Invalid URL format: {e}") from e

    if parsed.scheme not in ALLOWED_SCHEMES:
        raise URLValidationError("URL must use http or https protocol")

    if not hostname:
        raise URLValidationError("URL must have a valid host")

    return value


class LinkCreate(BaseModel):
    long_url: str = Field(..., description="The original URL to be shortened")

    @field_validator("long_url")
    @classmethod
    def check_long_url(cls, v: str) -> str:
        try:
            return validate_long_url(v)
        except URLValidationError as e:
            raise ValueError(str(e)) from e


class LinkResponse(BaseModel):
    """Result of a shorten request (created or reused)"""
    short_code: str
    short_url: str
    long_url: str
    reused: bool = False


class LinkInfo(BaseModel):
    """Stored link as returned by the info endpoint"""
    short_code: str
    long_url: str
    short_url: str
    created_at: Optional[datetime] = None
