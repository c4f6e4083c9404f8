"""Short code generation."""

import secrets
import string

from urlshortener.services.exceptions import ShortCodeGenerationError

# 26 lowercase + 26 uppercase + 10 digits
ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits


def generate_code(length: int = 6, alphabet: str = ALPHABET) -> str:
    """
    Generate a random short code of the given length.

    Each character is drawn independently and uniformly from ``alphabet``
    using the operating system's CSPRNG. Codes carry no information about
    the URL they will point to.

    Raises:
        ValueError: If length is not positive or the alphabet is empty
        ShortCodeGenerationError: If the entropy source fails
    """
    if length < 1:
        raise ValueError("code length must be positive")
    if not alphabet:
        raise ValueError("alphabet cannot be empty")

    try:
        return "".join(secrets.choice(alphabet) for _ in range(length))
    except (OSError, NotImplementedError) as e:
        raise ShortCodeGenerationError(f"Entropy source unavailable: {e}") from e


def is_valid_code(code: str, alphabet: str = ALPHABET, max_length: int = 32) -> bool:
    """Shape check for codes arriving on the redirect path."""
    if not code or len(code) > max_length:
        return False
    allowed = set(alphabet)
    return all(ch in allowed for ch in code)
