"""Runtime configuration models."""

from __future__ import annotations

from dataclasses import dataclass, field

from .models import Locator
from .validation import (
    validate_browser_settings,
    validate_poll_policy,
    validate_request_timeout,
)

DEFAULT_TIMEOUT = 15.0
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_DELAY = 1.0
DEFAULT_PAGE_LOAD_TIMEOUT = 20.0
DEFAULT_REQUEST_TIMEOUT = 15.0
DEFAULT_USER_AGENT = "resilient-lookup/1.0 (+https://pypi.org/project/resilient-lookup/)"


@dataclass(frozen=True)
class PollPolicy:
    """Bounds for one lookup; whichever limit is reached first stops polling.

    ``timeout`` and ``delay`` are seconds.
    """

    timeout: float = DEFAULT_TIMEOUT
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    delay: float = DEFAULT_DELAY

    def __post_init__(self) -> None:
        validate_poll_policy(
            timeout=self.timeout,
            max_attempts=self.max_attempts,
            delay=self.delay,
        )


@dataclass(frozen=True)
class BrowserConfig:
    """Explicit browser/session settings passed to driver setup."""

    base_url: str
    headless: bool = True
    user_agent: str = DEFAULT_USER_AGENT
    network_profile: str | None = None
    page_load_timeout: float = DEFAULT_PAGE_LOAD_TIMEOUT

    def __post_init__(self) -> None:
        validate_browser_settings(
            base_url=self.base_url,
            network_profile=self.network_profile,
            page_load_timeout=self.page_load_timeout,
        )


@dataclass(frozen=True)
class ProbeConfig:
    """Validated configuration used by the CLI probe."""

    browser: BrowserConfig
    locator: Locator
    path: str = "/"
    policy: PollPolicy = field(default_factory=PollPolicy)
    use_selenium: bool = False
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    def __post_init__(self) -> None:
        validate_request_timeout(self.request_timeout)
