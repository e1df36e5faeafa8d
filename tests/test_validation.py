import pytest

from resilient_lookup.errors import ConfigurationError
from resilient_lookup.validation import (
    is_supported_url,
    join_url,
    normalize_text,
    text_matches,
    validate_browser_settings,
    validate_locator,
    validate_poll_policy,
    validate_request_timeout,
)


def test_is_supported_url() -> None:
    assert is_supported_url("https://www.fxempire.com") is True
    assert is_supported_url("ftp://example.com/file") is False
    assert is_supported_url("/markets") is False


def test_join_url_resolves_paths_against_base() -> None:
    assert join_url("https://example.com", "/") == "https://example.com"
    assert join_url("https://example.com", "") == "https://example.com"
    assert join_url("https://example.com/", "/markets") == "https://example.com/markets"
    assert join_url("https://example.com/en", "crypto") == "https://example.com/en/crypto"


def test_text_matches_uses_normalized_containment() -> None:
    assert normalize_text("  Forex \n  Brokers ") == "Forex Brokers"
    assert text_matches("Forex Brokers", "Top Forex\n   Brokers 2024") is True
    assert text_matches("  Macro   Data ", "Macro Data") is True
    assert text_matches("macro data", "Macro Data") is False
    assert text_matches("News Today", "News") is False


def test_validate_locator_rejects_blank_values() -> None:
    validate_locator(selector="a[href='/news']", text=None)
    with pytest.raises(ConfigurationError):
        validate_locator(selector=" ", text=None)
    with pytest.raises(ConfigurationError):
        validate_locator(selector=42, text=None)
    with pytest.raises(ConfigurationError):
        validate_locator(selector="a", text="")


def test_validate_poll_policy_accepts_zero_bounds() -> None:
    validate_poll_policy(timeout=0, max_attempts=1, delay=0)


@pytest.mark.parametrize(
    "timeout, max_attempts, delay",
    [
        (1.0, 0, 0.1),
        (1.0, True, 0.1),
        (1.0, 2.5, 0.1),
        (-0.001, 1, 0.1),
        (1.0, 1, -1),
        (float("nan"), 1, 0.1),
        ("10", 1, 0.1),
    ],
)
def test_validate_poll_policy_rejects_invalid_bounds(
    timeout: object, max_attempts: object, delay: object
) -> None:
    with pytest.raises(ConfigurationError):
        validate_poll_policy(
            timeout=timeout,  # type: ignore[arg-type]
            max_attempts=max_attempts,  # type: ignore[arg-type]
            delay=delay,  # type: ignore[arg-type]
        )


def test_validate_browser_settings() -> None:
    validate_browser_settings(
        base_url="https://example.com", network_profile="slow3g", page_load_timeout=20
    )
    with pytest.raises(ConfigurationError):
        validate_browser_settings(base_url="example.com", network_profile=None, page_load_timeout=20)
    with pytest.raises(ConfigurationError):
        validate_browser_settings(
            base_url="https://example.com", network_profile="fast5g", page_load_timeout=20
        )
    with pytest.raises(ConfigurationError):
        validate_browser_settings(
            base_url="https://example.com", network_profile=None, page_load_timeout=0
        )


def test_validate_request_timeout() -> None:
    validate_request_timeout(0.5)
    with pytest.raises(ConfigurationError):
        validate_request_timeout(0)


@pytest.mark.parametrize(
    "base_url, network_profile, page_load_timeout",
    [
        ("https://example.com", None, "20"),
        ("https://example.com", None, None),
        (None, None, 20),
        ("https://example.com", ["slow3g"], 20),
    ],
)
def test_validate_browser_settings_rejects_wrong_types(
    base_url: object, network_profile: object, page_load_timeout: object
) -> None:
    with pytest.raises(ConfigurationError):
        validate_browser_settings(
            base_url=base_url,  # type: ignore[arg-type]
            network_profile=network_profile,  # type: ignore[arg-type]
            page_load_timeout=page_load_timeout,  # type: ignore[arg-type]
        )


def test_validate_request_timeout_rejects_non_numbers() -> None:
    with pytest.raises(ConfigurationError):
        validate_request_timeout("5")  # type: ignore[arg-type]
