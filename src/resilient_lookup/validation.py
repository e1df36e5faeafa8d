"""Validation helpers and the text-match policy."""

from __future__ import annotations

from urllib.parse import urljoin, urlparse

from .errors import ConfigurationError

NETWORK_PROFILES = frozenset({"slow3g", "online"})


def is_supported_url(url: str) -> bool:
    """Allow only absolute HTTP(S) URLs with a hostname."""
    parsed = urlparse(url)
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


def join_url(base_url: str, path: str) -> str:
    """Resolve a site-relative path against the base URL."""
    if not path or path == "/":
        return base_url
    return urljoin(base_url.rstrip("/") + "/", path.lstrip("/"))


def normalize_text(value: str) -> str:
    """Collapse runs of whitespace and strip the ends."""
    return " ".join(value.split())


def text_matches(expected: str, actual: str) -> bool:
    """Return True when normalized ``expected`` occurs inside normalized ``actual``.

    Matching is case-sensitive containment. There is no separate exact-match
    mode; callers needing equality compare ``normalize_text`` results directly.
    """
    return normalize_text(expected) in normalize_text(actual)


def _check_seconds(name: str, value: object, *, positive: bool = False) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{name} must be a number of seconds, got {value!r}.")
    if value != value:
        raise ConfigurationError(f"{name} must not be NaN.")
    if positive and value <= 0:
        raise ConfigurationError(f"{name} must be > 0.")
    if value < 0:
        raise ConfigurationError(f"{name} must be >= 0.")


def validate_locator(*, selector: object, text: object) -> None:
    """Raise ConfigurationError for empty or malformed locator fields."""
    if not isinstance(selector, str) or not selector.strip():
        raise ConfigurationError(f"Locator selector must be a non-empty string, got {selector!r}.")
    if text is not None and (not isinstance(text, str) or not text.strip()):
        raise ConfigurationError(f"Locator text must be non-empty when given, got {text!r}.")


def validate_poll_policy(*, timeout: float, max_attempts: int, delay: float) -> None:
    """Validate poll bounds and raise ConfigurationError on invalid values."""
    if isinstance(max_attempts, bool) or not isinstance(max_attempts, int):
        raise ConfigurationError(f"max_attempts must be an integer, got {max_attempts!r}.")
    if max_attempts < 1:
        raise ConfigurationError("max_attempts must be >= 1.")
    _check_seconds("timeout", timeout)
    _check_seconds("delay", delay)


def validate_browser_settings(
    *,
    base_url: str,
    network_profile: str | None,
    page_load_timeout: float,
) -> None:
    """Validate browser/session settings and raise ConfigurationError on invalid values."""
    if not isinstance(base_url, str) or not is_supported_url(base_url):
        raise ConfigurationError(f"base URL must be an absolute http(s) URL, got {base_url!r}.")
    if network_profile is not None and (
        not isinstance(network_profile, str) or network_profile not in NETWORK_PROFILES
    ):
        raise ConfigurationError(
            f"Unknown network profile {network_profile!r}; "
            f"expected one of {', '.join(sorted(NETWORK_PROFILES))}."
        )
    _check_seconds("page load timeout", page_load_timeout, positive=True)


def validate_request_timeout(request_timeout: float) -> None:
    """Raise ConfigurationError unless the HTTP request timeout is positive."""
    _check_seconds("request timeout", request_timeout, positive=True)
