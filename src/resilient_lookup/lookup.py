"""Bounded polling of a surface until a target appears or disappears."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from typing import Any

from .config import PollPolicy
from .errors import SurfaceError
from .logging_utils import get_logger
from .models import (
    AbsenceResult,
    CancelToken,
    Cancelled,
    Found,
    Gone,
    Locator,
    LookupResult,
    NotFound,
    StillPresent,
    Surface,
)
from .validation import validate_poll_policy

ClockFn = Callable[[], float]
SleepFn = Callable[[float], None]
StopFn = Callable[[Sequence[Any]], bool]


def as_locator(locator: Locator | str) -> Locator:
    """Coerce a bare selector string into a Locator."""
    if isinstance(locator, Locator):
        return locator
    return Locator(selector=locator)  # type: ignore[arg-type]


def _query(surface: Surface, locator: Locator) -> tuple[Any, ...]:
    try:
        handles = surface.query(locator)
    except SurfaceError:
        raise
    except Exception as exc:
        raise SurfaceError(f"Surface query for {locator} failed: {exc}") from exc
    return tuple(handles or ())


def _poll(
    surface: Surface,
    locator: Locator,
    policy: PollPolicy,
    *,
    stop_when: StopFn,
    cancel: CancelToken | None,
    clock: ClockFn,
    sleep: SleepFn,
    logger: logging.Logger,
) -> tuple[str, tuple[Any, ...], int, float]:
    """Run the retry loop; return (outcome, last handles, attempts, elapsed).

    ``outcome`` is ``"stopped"``, ``"exhausted"`` or ``"cancelled"``.
    """
    attempts = 0
    start = clock()
    handles: tuple[Any, ...] = ()
    while True:
        if cancel is not None and cancel.is_set():
            return "cancelled", handles, attempts, clock() - start

        attempts += 1
        logger.debug("Attempt %d/%d for %s", attempts, policy.max_attempts, locator)
        handles = _query(surface, locator)
        elapsed = clock() - start
        if stop_when(handles):
            return "stopped", handles, attempts, elapsed
        if attempts >= policy.max_attempts:
            return "exhausted", handles, attempts, elapsed
        if elapsed >= policy.timeout:
            return "exhausted", handles, attempts, elapsed

        pause = min(policy.delay, policy.timeout - elapsed)
        if pause > 0:
            sleep(pause)


def _check_policy(policy: PollPolicy) -> None:
    validate_poll_policy(
        timeout=getattr(policy, "timeout", None),  # type: ignore[arg-type]
        max_attempts=getattr(policy, "max_attempts", None),  # type: ignore[arg-type]
        delay=getattr(policy, "delay", None),  # type: ignore[arg-type]
    )


def lookup(
    surface: Surface,
    locator: Locator | str,
    policy: PollPolicy | None = None,
    *,
    cancel: CancelToken | None = None,
    clock: ClockFn = time.monotonic,
    sleep: SleepFn = time.sleep,
    logger: logging.Logger | None = None,
) -> LookupResult:
    """Poll ``surface`` until ``locator`` matches, attempts run out or time is up.

    Returns ``Found`` with the first handle of the successful query, ``NotFound``
    when the budget is exhausted, or ``Cancelled`` when ``cancel`` was set.
    Raises ``ConfigurationError`` for a bad locator or policy before any query,
    and ``SurfaceError`` as soon as the surface itself fails.
    """
    target = as_locator(locator)
    bounds = policy or PollPolicy()
    _check_policy(bounds)
    log = logger or get_logger("lookup")

    outcome, handles, attempts, elapsed = _poll(
        surface,
        target,
        bounds,
        stop_when=bool,
        cancel=cancel,
        clock=clock,
        sleep=sleep,
        logger=log,
    )
    result: LookupResult
    if outcome == "stopped":
        result = Found(handle=handles[0], handles=handles, attempts=attempts, elapsed=elapsed)
    elif outcome == "cancelled":
        result = Cancelled(attempts=attempts, elapsed=elapsed)
    else:
        result = NotFound(attempts=attempts, elapsed=elapsed)
    log.debug("%s", result.describe(str(target)))
    return result


def wait_until_absent(
    surface: Surface,
    locator: Locator | str,
    policy: PollPolicy | None = None,
    *,
    cancel: CancelToken | None = None,
    clock: ClockFn = time.monotonic,
    sleep: SleepFn = time.sleep,
    logger: logging.Logger | None = None,
) -> AbsenceResult:
    """Poll ``surface`` until ``locator`` no longer matches anything.

    Same bounds and error behaviour as ``lookup``; returns ``Gone``,
    ``StillPresent`` or ``Cancelled``.
    """
    target = as_locator(locator)
    bounds = policy or PollPolicy()
    _check_policy(bounds)
    log = logger or get_logger("lookup")

    outcome, handles, attempts, elapsed = _poll(
        surface,
        target,
        bounds,
        stop_when=lambda found: not found,
        cancel=cancel,
        clock=clock,
        sleep=sleep,
        logger=log,
    )
    result: AbsenceResult
    if outcome == "stopped":
        result = Gone(attempts=attempts, elapsed=elapsed)
    elif outcome == "cancelled":
        result = Cancelled(attempts=attempts, elapsed=elapsed)
    else:
        result = StillPresent(handle=handles[0], attempts=attempts, elapsed=elapsed)
    log.debug("%s", result.describe(str(target)))
    return result
