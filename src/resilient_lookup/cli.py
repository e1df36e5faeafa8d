"""CLI entrypoint for resilient-lookup."""

from __future__ import annotations

import argparse
import os
from collections.abc import Sequence

from .config import (
    DEFAULT_DELAY,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_PAGE_LOAD_TIMEOUT,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    BrowserConfig,
    PollPolicy,
    ProbeConfig,
)
from .errors import ConfigurationError, SurfaceError
from .logging_utils import configure_logging, get_logger
from .models import Found, Locator
from .probe import run_probe
from .validation import NETWORK_PROFILES

EXIT_FOUND = 0
EXIT_NOT_FOUND = 1
EXIT_CONFIG_ERROR = 2
EXIT_SURFACE_ERROR = 3


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(
        description="Resilient Lookup - poll a page until an element appears, with bounded retries."
    )
    parser.add_argument("--selector", required=True, help="CSS selector to look for.")
    parser.add_argument("--text", help="Only match elements whose text contains this value.")
    parser.add_argument(
        "--base-url",
        default=os.getenv("LOOKUP_BASE_URL"),
        help="Site base URL (or set LOOKUP_BASE_URL env var).",
    )
    parser.add_argument("--path", default="/", help="Page path relative to the base URL.")
    parser.add_argument(
        "--timeout", type=float, default=DEFAULT_TIMEOUT, help="Overall deadline in seconds."
    )
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=DEFAULT_MAX_ATTEMPTS,
        help="Maximum number of queries.",
    )
    parser.add_argument(
        "--delay", type=float, default=DEFAULT_DELAY, help="Seconds to wait between queries."
    )
    parser.add_argument(
        "--use-selenium",
        action="store_true",
        help="Query a live Chrome session instead of raw HTML.",
    )
    parser.add_argument("--headed", action="store_true", help="Show the Chrome window.")
    parser.add_argument(
        "--network-profile",
        choices=sorted(NETWORK_PROFILES),
        help="Chrome network conditions to apply (Selenium only).",
    )
    parser.add_argument(
        "--page-load-timeout",
        type=float,
        default=DEFAULT_PAGE_LOAD_TIMEOUT,
        help="Selenium page load timeout in seconds.",
    )
    parser.add_argument(
        "--request-timeout",
        type=float,
        default=DEFAULT_REQUEST_TIMEOUT,
        help="HTTP timeout per query when not using Selenium.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors.")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse and pre-validate CLI input."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.base_url:
        parser.error("Provide --base-url or set LOOKUP_BASE_URL.")
    return args


def namespace_to_config(args: argparse.Namespace) -> ProbeConfig:
    """Convert CLI args to validated ProbeConfig."""
    browser = BrowserConfig(
        base_url=args.base_url,
        headless=not args.headed,
        user_agent=os.getenv("LOOKUP_USER_AGENT") or DEFAULT_USER_AGENT,
        network_profile=args.network_profile,
        page_load_timeout=args.page_load_timeout,
    )
    return ProbeConfig(
        browser=browser,
        locator=Locator(selector=args.selector, text=args.text),
        path=args.path,
        policy=PollPolicy(
            timeout=args.timeout,
            max_attempts=args.max_attempts,
            delay=args.delay,
        ),
        use_selenium=args.use_selenium,
        request_timeout=args.request_timeout,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint."""
    args = parse_args(argv)
    configure_logging(args.verbose, args.quiet)
    logger = get_logger()
    try:
        config = namespace_to_config(args)
    except ConfigurationError as exc:
        logger.error("Invalid configuration: %s", exc)
        return EXIT_CONFIG_ERROR

    try:
        result = run_probe(config, logger=logger)
    except SurfaceError as exc:
        logger.error("Surface failure: %s", exc)
        return EXIT_SURFACE_ERROR

    outcome = result.describe(str(config.locator))
    if isinstance(result, Found):
        logger.info("%s", outcome)
        return EXIT_FOUND
    logger.warning("%s", outcome)
    return EXIT_NOT_FOUND


if __name__ == "__main__":
    raise SystemExit(main())
