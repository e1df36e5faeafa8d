import os

import pytest

from resilient_lookup.cli import main

requires_live = pytest.mark.skipif(
    os.getenv("RUN_LIVE_INTEGRATION") != "1",
    reason="Set RUN_LIVE_INTEGRATION=1 to execute live integration tests.",
)


@requires_live
def test_live_homepage_root_is_found() -> None:
    exit_code = main(["--base-url", "https://www.fxempire.com", "--selector", "div#__next"])
    assert exit_code == 0


@requires_live
def test_live_selenium_featured_articles_are_found() -> None:
    exit_code = main(
        [
            "--base-url",
            "https://www.fxempire.com",
            "--selector",
            '[data-name^="hp_article_"]',
            "--use-selenium",
            "--max-attempts",
            "5",
            "--delay",
            "2",
        ]
    )
    assert exit_code == 0
