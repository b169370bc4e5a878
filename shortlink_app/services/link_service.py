import logging
from typing import Optional

from shortlink_app.exceptions import (
    CodeConflictError,
    DuplicateURLError,
    StoreUnavailableError,
)
from shortlink_app.schemas.outcomes import (
    Allocation,
    AllocateOutcome,
    Resolution,
    ResolveOutcome,
)
from shortlink_app.services.short_code import ShortCodeGenerator, is_valid_code
from shortlink_app.storage.link_store import LinkStore

logger = logging.getLogger(__name__)


class LinkService:
    """
    Resolution and allocation of short links.

    Dependencies are injected (see dependencies.get_link_service):
    - store: where links live and where uniqueness is enforced
    - generator: candidate codes, not unique by construction
    - max_attempts: ceiling for the collision retry loop

    Both entry points return tagged outcomes instead of raising, so the
    HTML and JSON routers only decide how to present them.
    """

    def __init__(
        self,
        store: LinkStore,
        generator: Optional[ShortCodeGenerator] = None,
        max_attempts: int = 5,
    ):
        self.store = store
        self.generator = generator or ShortCodeGenerator()
        self.max_attempts = max_attempts

    def resolve(self, path: str) -> Resolution:
        """
        Resolve a request path to a redirect target.

        The leading slash is stripped and whitespace trimmed. An empty code
        is not an error: there is simply nothing to resolve. A code that
        does not have the generated shape is reported not found without a
        store round trip.
        """
        short_code = path.lstrip("/").strip()
        if not short_code:
            return Resolution(outcome=ResolveOutcome.EMPTY)

        # Anything that was never generated cannot be in the store
        if not is_valid_code(short_code, self.generator.length):
            logger.info(f"Short code not found: {short_code}")
            return Resolution(outcome=ResolveOutcome.NOT_FOUND, short_code=short_code)

        try:
            link = self.store.find_by_code(short_code)
        except StoreUnavailableError:
            return Resolution(outcome=ResolveOutcome.STORE_ERROR, short_code=short_code)

        if link is None:
            logger.info(f"Short code not found: {short_code}")
            return Resolution(outcome=ResolveOutcome.NOT_FOUND, short_code=short_code)

        logger.debug(f"Resolved {short_code} -> {link.long_url}")
        return Resolution(
            outcome=ResolveOutcome.REDIRECT,
            short_code=short_code,
            long_url=link.long_url,
        )

    def allocate(self, long_url: str) -> Allocation:
        """
        Return the code for a URL, minting one if the URL is new.

        Process:
        1. Dedup check: an already shortened URL keeps its code
        2. Otherwise insert random candidates until one sticks,
           at most max_attempts times

        The URL must already be validated (schemas.link.validate_long_url).
        """
        try:
            existing = self.store.find_by_url(long_url)
        except StoreUnavailableError:
            return Allocation(outcome=AllocateOutcome.STORE_ERROR, long_url=long_url)

        if existing is not None:
            logger.info(f"Reusing {existing.short_code} for {long_url}")
            return Allocation(
                outcome=AllocateOutcome.REUSED,
                long_url=long_url,
                short_code=existing.short_code,
            )

        return self._insert_new_link(long_url)

    def _insert_new_link(self, long_url: str) -> Allocation:
        """
        Bounded retry: always attempt a real insert and let the unique
        constraint decide. Never check-then-insert, which races under
        concurrent allocators.

        A code collision triggers another attempt; a store failure stops
        the loop at once.
        """
        for attempt in range(1, self.max_attempts + 1):
            candidate = self.generator.generate()
            try:
                link = self.store.try_insert(candidate, long_url)
            except CodeConflictError:
                logger.warning(
                    f"Short code collision on '{candidate}' "
                    f"(attempt {attempt}/{self.max_attempts})"
                )
                continue
            except DuplicateURLError as e:
                # A concurrent request stored the same URL first
                logger.info(f"Reusing {e.link.short_code} for {long_url} (concurrent insert)")
                return Allocation(
                    outcome=AllocateOutcome.REUSED,
                    long_url=long_url,
                    short_code=e.link.short_code,
                    attempts=attempt,
                )
            except StoreUnavailableError:
                return Allocation(
                    outcome=AllocateOutcome.STORE_ERROR,
                    long_url=long_url,
                    attempts=attempt,
                )

            logger.info(f"Created short link {link.short_code} -> {long_url}")
            return Allocation(
                outcome=AllocateOutcome.CREATED,
                long_url=long_url,
                short_code=link.short_code,
                attempts=attempt,
            )

        logger.error(
            f"Could not allocate a unique short code for {long_url} "
            f"after {self.max_attempts} attempts"
        )
        return Allocation(
            outcome=AllocateOutcome.EXHAUSTED,
            long_url=long_url,
            attempts=self.max_attempts,
        )
