"""URL shortening service for the URL shortener application.

This module contains the ShortenerService class which implements business logic
for issuing short codes and resolving them back to the original URL.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from urlshortener.core.metrics import ShortenerMetrics
from urlshortener.repositories.base import (
    CodeNotFoundError,
    DuplicateCodeError,
    RepositoryError,
    URLStore,
)
from urlshortener.services.codegen import ALPHABET, generate_code, is_valid_code
from urlshortener.services.exceptions import (
    ShortCodeGenerationError,
    URLNotFoundError,
    URLStorageError,
)
from urlshortener.services.validation import validate_url

logger = logging.getLogger(__name__)

# Paths served by the application itself; a code equal to one of these
# could never be reached through the redirect route.
RESERVED_CODES = frozenset({"health", "metrics", "shorten", "docs", "redoc", "openapi.json"})

CodeGenerator = Callable[[int, str], str]


@dataclass(frozen=True)
class ShortenResult:
    """Outcome of a successful shorten request."""
    code: str
    short_url: str


class ShortenerService:
    """
    Service for URL shortening business logic.

    Orchestrates validate -> generate -> store-with-retry for new URLs and
    shape check -> lookup for redirects.
    """

    def __init__(
        self,
        store: URLStore,
        metrics: ShortenerMetrics,
        base_url: str,
        code_length: int = 6,
        max_attempts: int = 5,
        alphabet: str = ALPHABET,
        max_code_length: int = 32,
        blocked_hosts: Iterable[str] = (),
        code_generator: Optional[CodeGenerator] = None,
    ):
        """
        Initialize the URL shortening service.

        Args:
            store: Storage collaborator holding the code to URL mappings
            metrics: Observability port
            base_url: Public prefix for short URLs
            code_length: Fixed length of issued codes
            max_attempts: Insert attempts before giving up
            alphabet: Characters codes are drawn from
            max_code_length: Longest code the resolver will look up
            blocked_hosts: Hosts that may not be shortened
            code_generator: Replacement for ``generate_code``, mainly for tests
        """
        if code_length < 1:
            raise ValueError("code_length must be positive")
        if max_attempts < 1:
            raise ValueError("max_attempts must be positive")

        self.store = store
        self.metrics = metrics
        self.base_url = base_url[:-1] if base_url.endswith("/") else base_url
        self.code_length = code_length
        self.max_attempts = max_attempts
        self.alphabet = alphabet
        self.max_code_length = max(max_code_length, code_length)
        self.blocked_hosts = tuple(blocked_hosts)
        self.code_generator = code_generator or generate_code

    def build_short_url(self, code: str) -> str:
        return f"{self.base_url}/{code}"

    async def shorten(self, raw_url: str) -> ShortenResult:
        """
        Issue a new short code for ``raw_url``.

        Args:
            raw_url: URL exactly as submitted; stored unmodified

        Returns:
            ShortenResult: The issued code and its public short URL

        Raises:
            InvalidURLError: If the URL fails validation
            ShortCodeGenerationError: If no free code was found within
                ``max_attempts`` or the entropy source failed
            URLStorageError: If the storage engine failed
        """
        validate_url(raw_url, self.blocked_hosts)

        for attempt in range(1, self.max_attempts + 1):
            try:
                code = self.code_generator(self.code_length, self.alphabet)
            except ShortCodeGenerationError:
                self.metrics.record_internal_error("shorten")
                logger.error("Entropy source failed while generating a short code")
                raise

            if code in RESERVED_CODES:
                logger.info(f"Generated reserved code '{code}', retrying")
                self.metrics.record_code_collision()
                continue

            try:
                await self.store.insert(code, raw_url)
            except DuplicateCodeError:
                logger.info(f"Short code collision on attempt {attempt}/{self.max_attempts}")
                self.metrics.record_code_collision()
                continue
            except RepositoryError as e:
                self.metrics.record_internal_error("shorten")
                logger.error(f"Error storing short URL: {e}")
                raise URLStorageError(f"Failed to store URL: {e}") from e

            self.metrics.record_url_shortened()
            return ShortenResult(code=code, short_url=self.build_short_url(code))

        self.metrics.record_internal_error("shorten")
        logger.error(f"No free short code after {self.max_attempts} attempts")
        raise ShortCodeGenerationError(
            f"Failed to generate a unique short code after {self.max_attempts} attempts"
        )

    async def resolve(self, code: str) -> str:
        """
        Look up the original URL for a short code.

        Args:
            code: Code taken from the redirect path

        Returns:
            str: The original URL, byte-for-byte as it was submitted

        Raises:
            URLNotFoundError: If the code is malformed or unknown
            URLStorageError: If the storage engine failed
        """
        if not is_valid_code(code, self.alphabet, self.max_code_length):
            self.metrics.record_url_not_found()
            raise URLNotFoundError(f"URL with code '{code}' not found")

        try:
            original_url = await self.store.lookup(code)
        except CodeNotFoundError:
            self.metrics.record_url_not_found()
            raise URLNotFoundError(f"URL with code '{code}' not found")
        except RepositoryError as e:
            self.metrics.record_internal_error("resolve")
            logger.error(f"Error retrieving URL by code: {e}")
            raise URLStorageError(f"Failed to retrieve URL with code '{code}'") from e

        self.metrics.record_url_redirected()
        return original_url
