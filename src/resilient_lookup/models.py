"""Protocols, locators and lookup result types."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol, Union

from .validation import validate_locator


@dataclass(frozen=True)
class Locator:
    """What to find on a surface: a CSS selector, optionally narrowed by text."""

    selector: str
    text: str | None = None

    def __post_init__(self) -> None:
        validate_locator(selector=self.selector, text=self.text)

    def __str__(self) -> str:
        if self.text is None:
            return self.selector
        return f"{self.selector} containing {self.text!r}"


class Surface(Protocol):
    """Contract for a queryable, possibly still rendering, document."""

    def query(self, locator: Locator) -> Sequence[Any]:
        """Return the handles currently matching ``locator``; empty when none do."""


class CancelToken(Protocol):
    """Contract for external cancellation (``threading.Event`` satisfies it)."""

    def is_set(self) -> bool:
        """Return True once the caller wants polling to stop."""


class Closable(Protocol):
    """Optional close contract for resources."""

    def close(self) -> None:
        """Release associated resources."""


def _attempts_phrase(attempts: int, elapsed: float) -> str:
    noun = "attempt" if attempts == 1 else "attempts"
    return f"{attempts} {noun} in {elapsed:.2f}s"


@dataclass(frozen=True)
class Found:
    """The target was located; ``handle`` is the first match of the successful query."""

    handle: Any
    handles: tuple[Any, ...]
    attempts: int
    elapsed: float

    def __bool__(self) -> bool:
        return True

    def describe(self, subject: str = "target") -> str:
        phrase = _attempts_phrase(self.attempts, self.elapsed)
        return f"Found {subject} ({len(self.handles)} match(es)) after {phrase}"


@dataclass(frozen=True)
class NotFound:
    """Polling exhausted its attempt or time budget without a match."""

    attempts: int
    elapsed: float

    def __bool__(self) -> bool:
        return False

    def describe(self, subject: str = "target") -> str:
        return f"Did not find {subject} after {_attempts_phrase(self.attempts, self.elapsed)}"


@dataclass(frozen=True)
class Cancelled:
    """The caller's cancel token was set before the budget ran out."""

    attempts: int
    elapsed: float

    def __bool__(self) -> bool:
        return False

    def describe(self, subject: str = "target") -> str:
        phrase = _attempts_phrase(self.attempts, self.elapsed)
        return f"Cancelled lookup of {subject} after {phrase}"


@dataclass(frozen=True)
class Gone:
    """A query returned no match: the target has disappeared."""

    attempts: int
    elapsed: float

    def __bool__(self) -> bool:
        return True

    def describe(self, subject: str = "target") -> str:
        return f"{subject} is gone after {_attempts_phrase(self.attempts, self.elapsed)}"


@dataclass(frozen=True)
class StillPresent:
    """The target was still matched when the budget ran out."""

    handle: Any
    attempts: int
    elapsed: float

    def __bool__(self) -> bool:
        return False

    def describe(self, subject: str = "target") -> str:
        return f"{subject} still present after {_attempts_phrase(self.attempts, self.elapsed)}"


LookupResult = Union[Found, NotFound, Cancelled]
AbsenceResult = Union[Gone, StillPresent, Cancelled]
