"""
Error taxonomy for the link shortener.

Only the storage and validation layers raise these. The service layer turns
them into tagged outcomes, so request handlers never see a raw storage error.
"""


class ShortenerError(Exception):
    """Base class for all link shortener errors"""


class URLValidationError(ShortenerError):
    """Submitted URL is missing or not an absolute http(s) URL"""


class CodeConflictError(ShortenerError):
    """Candidate short code already exists (unique constraint on short_code)"""

    def __init__(self, short_code: str):
        super().__init__(f"Short code '{short_code}' already exists")
        self.short_code = short_code


class DuplicateURLError(ShortenerError):
    """Long URL was stored by a concurrent writer (unique constraint on long_url)"""

    def __init__(self, link):
        super().__init__(f"URL already shortened as '{link.short_code}'")
        self.link = link


class StoreUnavailableError(ShortenerError):
    """Connectivity, timeout or driver failure in the link store"""
