"""Tests for URL validation."""

import pytest

from urlshortener.services.exceptions import InvalidURLError
from urlshortener.services.validation import get_scheme, is_blocked_host, validate_url, with_default_scheme


@pytest.mark.parametrize("raw_url", [
    "https://example.com",
    "http://example.com/path?q=1&r=2#frag",
    "example.com",
    "EXAMPLE.com/Some/Path",
    "HTTPS://example.com",
    "http://127.0.0.1:8080/x",
    "http://[::1]/",
    "https://sub.domain.example.co.uk",
    "https://münchen.de/straße",
    "example.com:8080/x",
    "localhost:8080",
    "example.com:443?q=1",
])
def test_accepts_valid_urls(raw_url):
    validate_url(raw_url)


@pytest.mark.parametrize("raw_url, reason", [
    ("", "empty"),
    ("   ", "empty"),
    (None, "empty"),
    ("ftp://example.com/file", "scheme"),
    ("mailto://someone@example.com", "scheme"),
    ("http://", "host"),
    ("https:///path-only", "host"),
    ("not a url", "host"),
    ("http://-bad-.com", "host"),
    ("http://exa_mple.com", "host"),
    ("http://example.com/a b", "whitespace"),
    ("http://example.com:99999", "parse"),
    ("javascript:alert(1)", "scheme"),
    ("javascript:alert(1)@evil.com", "scheme"),
    ("mailto:someone@example.com", "scheme"),
    ("ftp:anon@files.example", "scheme"),
    ("http:example.com", "host"),
    ("example.com:99999/x", "parse"),
])
def test_rejects_invalid_urls(raw_url, reason):
    with pytest.raises(InvalidURLError) as exc_info:
        validate_url(raw_url)

    assert reason in exc_info.value.reason
    assert exc_info.value.url == raw_url
    assert str(exc_info.value).startswith("Invalid URL:")


def test_blocked_hosts_cover_subdomains():
    blocked = ["evil.example"]

    assert is_blocked_host("evil.example", blocked)
    assert is_blocked_host("WWW.Evil.Example.", blocked)
    assert not is_blocked_host("notevil.example", blocked)

    with pytest.raises(InvalidURLError):
        validate_url("https://cdn.evil.example/x", blocked)
    validate_url("https://notevil.example/x", blocked)


@pytest.mark.parametrize("url, scheme", [
    ("https://example.com", "https"),
    ("HTTP://example.com", "HTTP"),
    ("javascript:alert(1)", "javascript"),
    ("example.com", None),
    ("example.com:8080/x", None),
    ("localhost:8080", None),
])
def test_get_scheme(url, scheme):
    assert get_scheme(url) == scheme


def test_with_default_scheme():
    assert with_default_scheme("example.com/a") == "http://example.com/a"
    assert with_default_scheme("example.com:8080") == "http://example.com:8080"
    assert with_default_scheme("https://example.com") == "https://example.com"
