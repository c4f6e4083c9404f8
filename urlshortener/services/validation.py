"""URL validation for shorten requests."""

import ipaddress
import re
from typing import Iterable, Optional
from urllib.parse import urlsplit

from urlshortener.services.exceptions import InvalidURLError

ALLOWED_SCHEMES = frozenset({"http", "https"})
DEFAULT_SCHEME = "http"

_SCHEME_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.-]*):")
# "example.com:8080/x" reads like a scheme but is a host and port
_PORT_RE = re.compile(r"^\d+(?:[/?#]|$)")
_HOST_LABEL_RE = re.compile(r"^(?!-)[a-zA-Z0-9-]{1,63}(?<!-)$")


def get_scheme(url: str) -> Optional[str]:
    """Scheme of ``url`` as written, or None when the URL has none."""
    match = _SCHEME_RE.match(url)
    if match is None or _PORT_RE.match(url[match.end():]):
        return None
    return match.group(1)


def with_default_scheme(url: str) -> str:
    """``url`` with ``http://`` prepended when it carries no scheme."""
    if get_scheme(url) is None:
        return f"{DEFAULT_SCHEME}://{url}"
    return url


def _is_valid_hostname(hostname: str) -> bool:
    try:
        # Internationalized names are checked in their ASCII form
        hostname = hostname.encode("idna").decode("ascii")
    except UnicodeError:
        return False
    if len(hostname) > 253:
        return False
    labels = hostname.rstrip(".").split(".")
    return all(_HOST_LABEL_RE.match(label) for label in labels)


def _is_ip_literal(hostname: str) -> bool:
    try:
        ipaddress.ip_address(hostname)
    except ValueError:
        return False
    return True


def is_blocked_host(hostname: str, blocked_hosts: Iterable[str]) -> bool:
    """True when ``hostname`` is a blocked host or one of its subdomains."""
    hostname = hostname.lower().rstrip(".")
    for blocked in blocked_hosts:
        if hostname == blocked or hostname.endswith("." + blocked):
            return True
    return False


def validate_url(raw_url: Optional[str], blocked_hosts: Iterable[str] = ()) -> None:
    """
    Check that a submitted URL can be shortened.

    A URL without a scheme is parsed as if it started with ``http://``; the
    caller still stores the original text.

    Args:
        raw_url: URL exactly as submitted
        blocked_hosts: Lower-cased hosts that may not be shortened

    Raises:
        InvalidURLError: With the reason the URL was rejected
    """
    if raw_url is None or not raw_url.strip():
        raise InvalidURLError(raw_url, "URL cannot be empty")

    scheme = get_scheme(raw_url)
    if scheme is not None and scheme.lower() not in ALLOWED_SCHEMES:
        raise InvalidURLError(raw_url, f"unsupported scheme '{scheme}'")

    candidate = with_default_scheme(raw_url)

    try:
        parsed = urlsplit(candidate)
        hostname = parsed.hostname
        # Accessing the port validates it
        parsed.port
    except ValueError as e:
        raise InvalidURLError(raw_url, f"could not parse URL: {e}") from e

    if not hostname:
        raise InvalidURLError(raw_url, "URL must have a valid host")

    if not (_is_ip_literal(hostname) or _is_valid_hostname(hostname)):
        raise InvalidURLError(raw_url, f"invalid host '{hostname}'")

    if any(ch.isspace() for ch in candidate):
        raise InvalidURLError(raw_url, "URL cannot contain whitespace")

    if is_blocked_host(hostname, blocked_hosts):
        raise InvalidURLError(raw_url, f"host '{hostname}' is not allowed")
