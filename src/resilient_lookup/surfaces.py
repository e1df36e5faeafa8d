"""Surface adapters for browser drivers and fetched HTML."""

from __future__ import annotations

import logging
from typing import Any

from bs4 import BeautifulSoup
from bs4.element import Tag
from requests import Session
from requests.adapters import HTTPAdapter
from requests.exceptions import RequestException
from soupsieve import SelectorSyntaxError
from urllib3.util.retry import Retry

from .config import DEFAULT_USER_AGENT, BrowserConfig
from .errors import ConfigurationError, SurfaceError
from .logging_utils import get_logger
from .models import Locator
from .validation import NETWORK_PROFILES, is_supported_url, text_matches

CSS_SELECTOR = "css selector"

# Chrome DevTools "Slow 3G" preset; throughput in bytes per second.
SLOW_3G = {
    "offline": False,
    "latency": 2000,
    "download_throughput": 50 * 1024,
    "upload_throughput": 50 * 1024,
}


def _filter_by_text(locator: Locator, handles: list[Any], text_of: Any) -> list[Any]:
    if locator.text is None:
        return handles
    return [handle for handle in handles if text_matches(locator.text, text_of(handle))]


class SeleniumSurface:
    """Query a live Selenium WebDriver session by CSS selector."""

    def __init__(self, driver: Any) -> None:
        self._driver = driver

    @property
    def driver(self) -> Any:
        return self._driver

    def query(self, locator: Locator) -> list[Any]:
        try:
            elements = list(self._driver.find_elements(CSS_SELECTOR, locator.selector))
            return _filter_by_text(locator, elements, lambda element: str(element.text))
        except Exception as exc:
            raise SurfaceError(f"WebDriver query for {locator} failed: {exc}") from exc


def create_chrome_driver(config: BrowserConfig, logger: logging.Logger | None = None) -> Any:
    """Start a Chrome WebDriver configured from ``config``."""
    log = logger or get_logger("surfaces")
    try:
        from selenium import webdriver
        from selenium.webdriver.chrome.service import (
            Service as ChromeService,
        )
        from webdriver_manager.chrome import ChromeDriverManager
    except ImportError as exc:  # pragma: no cover - exercised only when selenium requested
        raise SurfaceError(
            "Selenium dependencies are not installed. Use pip install .[selenium]."
        ) from exc

    options = webdriver.ChromeOptions()
    if config.headless:
        options.add_argument("--headless=new")
    options.add_argument("--no-sandbox")
    options.add_argument("--disable-dev-shm-usage")
    options.add_argument(f"user-agent={config.user_agent}")
    try:
        service = ChromeService(ChromeDriverManager().install())
        driver = webdriver.Chrome(service=service, options=options)
    except Exception as exc:  # pragma: no cover - integration behavior
        raise SurfaceError(f"Failed to start Selenium driver: {exc}") from exc

    try:
        driver.set_page_load_timeout(config.page_load_timeout)
        if config.network_profile is not None:
            apply_network_profile(driver, config.network_profile, logger=log)
    except SurfaceError:
        quit_driver(driver, log)
        raise
    except Exception as exc:
        quit_driver(driver, log)
        raise SurfaceError(f"Failed to configure Selenium driver: {exc}") from exc
    return driver


def quit_driver(driver: Any, logger: logging.Logger | None = None) -> None:
    """Quit ``driver``; a session that is already dead is logged, not raised."""
    try:
        driver.quit()
    except Exception as exc:
        (logger or get_logger("surfaces")).debug("Ignoring WebDriver quit failure: %s", exc)


def apply_network_profile(driver: Any, profile: str, logger: logging.Logger | None = None) -> None:
    """Throttle (``slow3g``) or restore (``online``) a Chrome driver's network."""
    log = logger or get_logger("surfaces")
    if profile not in NETWORK_PROFILES:
        raise ConfigurationError(f"Unknown network profile {profile!r}.")
    try:
        if profile == "slow3g":
            log.info("Throttling network to slow 3G")
            driver.set_network_conditions(**SLOW_3G)
        else:
            log.info("Resetting network to online")
            driver.delete_network_conditions()
    except Exception as exc:
        raise SurfaceError(f"Could not apply network profile {profile!r}: {exc}") from exc


class PlaywrightSurface:
    """Query a Playwright sync ``Page`` by CSS selector.

    The page comes from the caller; install the ``playwright`` extra and open one
    with ``playwright.sync_api.sync_playwright``.
    """

    def __init__(self, page: Any) -> None:
        self._page = page

    def query(self, locator: Locator) -> list[Any]:
        try:
            elements = list(self._page.query_selector_all(locator.selector))
            return _filter_by_text(locator, elements, lambda element: str(element.inner_text()))
        except Exception as exc:
            raise SurfaceError(f"Playwright query for {locator} failed: {exc}") from exc


def _select(soup: BeautifulSoup, locator: Locator) -> list[Tag]:
    try:
        tags = list(soup.select(locator.selector))
    except SelectorSyntaxError as exc:
        raise SurfaceError(f"Cannot evaluate selector {locator.selector!r}: {exc}") from exc
    return _filter_by_text(locator, tags, lambda tag: tag.get_text(" "))


class HtmlSurface:
    """A static HTML document parsed once with BeautifulSoup."""

    def __init__(self, html: str) -> None:
        self._soup = BeautifulSoup(html, "html.parser")

    def query(self, locator: Locator) -> list[Tag]:
        return _select(self._soup, locator)


def make_retry_session(user_agent: str) -> Session:
    """Create requests session with retry/backoff defaults."""
    session = Session()
    session.headers.update({"User-Agent": user_agent})
    retry = Retry(
        total=3,
        backoff_factor=0.6,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=frozenset({"GET"}),
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class RequestsSurface:
    """Fetch ``url`` on every query and select from the returned HTML.

    Useful for server-rendered pages whose content changes between requests.
    A session passed in by the caller is left open by ``close``.
    """

    def __init__(
        self,
        url: str,
        *,
        session: Session | None = None,
        timeout: float,
        user_agent: str | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        if not is_supported_url(url):
            raise ConfigurationError(f"RequestsSurface needs an absolute http(s) URL, got {url!r}.")
        self._url = url
        self._owns_session = session is None
        self._session = session or make_retry_session(user_agent or DEFAULT_USER_AGENT)
        self._timeout = timeout
        self._logger = logger or get_logger("surfaces")

    def query(self, locator: Locator) -> list[Tag]:
        try:
            response = self._session.get(self._url, timeout=self._timeout)
            response.raise_for_status()
        except RequestException as exc:
            raise SurfaceError(f"Fetching {self._url} failed: {exc}") from exc
        self._logger.debug("Fetched %s (%d bytes)", self._url, len(response.text))
        return _select(BeautifulSoup(response.text, "html.parser"), locator)

    def close(self) -> None:
        if self._owns_session:
            self._session.close()
