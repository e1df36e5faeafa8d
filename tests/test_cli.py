import pytest

from resilient_lookup import cli
from resilient_lookup.errors import SurfaceError
from resilient_lookup.models import Found, NotFound

BASE = ["--base-url", "https://www.fxempire.com"]


def test_parse_args_with_selector_and_text() -> None:
    args = cli.parse_args([*BASE, "--selector", "nav a", "--text", "Markets"])
    assert args.selector == "nav a"
    assert args.text == "Markets"
    assert args.max_attempts == 3


def test_parse_args_reads_base_url_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOOKUP_BASE_URL", "https://example.com")
    args = cli.parse_args(["--selector", "h1"])
    assert args.base_url == "https://example.com"


def test_parse_args_requires_base_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("LOOKUP_BASE_URL", raising=False)
    with pytest.raises(SystemExit):
        cli.parse_args(["--selector", "h1"])


def test_parse_args_rejects_unknown_network_profile() -> None:
    with pytest.raises(SystemExit):
        cli.parse_args([*BASE, "--selector", "h1", "--network-profile", "fast5g"])


def test_namespace_to_config_builds_policy_and_browser(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOOKUP_USER_AGENT", "probe/1.0")
    args = cli.parse_args(
        [
            *BASE,
            "--selector",
            "div.card",
            "--timeout",
            "10",
            "--max-attempts",
            "5",
            "--delay",
            "0.1",
            "--use-selenium",
            "--headed",
            "--network-profile",
            "slow3g",
        ]
    )
    config = cli.namespace_to_config(args)
    assert (config.policy.timeout, config.policy.max_attempts, config.policy.delay) == (
        10.0,
        5,
        0.1,
    )
    assert config.use_selenium is True
    assert config.browser.headless is False
    assert config.browser.network_profile == "slow3g"
    assert config.browser.user_agent == "probe/1.0"


def test_main_returns_zero_when_found(monkeypatch: pytest.MonkeyPatch) -> None:
    found = Found(handle="h", handles=("h",), attempts=1, elapsed=0.1)
    monkeypatch.setattr(cli, "run_probe", lambda config, logger: found)
    assert cli.main([*BASE, "--selector", "h1"]) == 0


def test_main_returns_one_when_not_found(monkeypatch: pytest.MonkeyPatch) -> None:
    missing = NotFound(attempts=3, elapsed=2.0)
    monkeypatch.setattr(cli, "run_probe", lambda config, logger: missing)
    assert cli.main([*BASE, "--selector", "h1"]) == 1


def test_main_returns_two_on_invalid_config() -> None:
    assert cli.main([*BASE, "--selector", "h1", "--max-attempts", "0"]) == 2
    assert cli.main([*BASE, "--selector", "   "]) == 2


def test_main_returns_three_on_surface_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def broken(config: object, logger: object) -> None:
        raise SurfaceError("connection refused")

    monkeypatch.setattr(cli, "run_probe", broken)
    assert cli.main([*BASE, "--selector", "h1"]) == 3
