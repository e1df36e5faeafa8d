"""Single-target probe: build a surface from config, poll it, release it."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from .config import BrowserConfig, ProbeConfig
from .errors import SurfaceError
from .lookup import lookup
from .models import LookupResult
from .surfaces import RequestsSurface, SeleniumSurface, create_chrome_driver, quit_driver
from .validation import join_url

DriverFactory = Callable[[BrowserConfig, logging.Logger], Any]


def _open_page(driver: Any, url: str) -> None:
    try:
        driver.get(url)
    except Exception as exc:
        raise SurfaceError(f"Could not open {url}: {exc}") from exc


def run_probe(
    config: ProbeConfig,
    *,
    logger: logging.Logger,
    driver_factory: DriverFactory | None = None,
) -> LookupResult:
    """Open ``config``'s page and look for its locator under its poll policy."""
    url = join_url(config.browser.base_url, config.path)
    logger.info("Probing %s for %s", url, config.locator)

    if not config.use_selenium:
        if config.browser.network_profile is not None:
            logger.warning(
                "Network profiles apply only to Selenium probes; ignoring %s.",
                config.browser.network_profile,
            )
        surface = RequestsSurface(
            url,
            timeout=config.request_timeout,
            user_agent=config.browser.user_agent,
            logger=logger,
        )
        try:
            return lookup(surface, config.locator, config.policy, logger=logger)
        finally:
            surface.close()

    factory = driver_factory or create_chrome_driver
    driver = factory(config.browser, logger)
    try:
        _open_page(driver, url)
        return lookup(SeleniumSurface(driver), config.locator, config.policy, logger=logger)
    finally:
        quit_driver(driver, logger)
