"""Request deadlines passed into blocking engine calls."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from core.errors import DebugTimeoutError


@dataclass(frozen=True, slots=True)
class Deadline:
    """A monotonic-clock deadline for one request.

    Engines performing long work should call `check()` between steps; the view
    checks again after the engine returns.

    Attributes:
        expires_at: Monotonic timestamp after which the deadline is expired.
        clock: Clock used for comparisons (overridable in tests).
    """

    expires_at: float
    clock: Callable[[], float] = time.monotonic

    @classmethod
    def after(cls, seconds: float, *, clock: Callable[[], float] = time.monotonic) -> Deadline:
        """Return a deadline `seconds` from now."""

        return cls(expires_at=clock() + seconds, clock=clock)

    def remaining(self) -> float:
        """Return seconds left, never negative."""

        return max(0.0, self.expires_at - self.clock())

    def expired(self) -> bool:
        return self.clock() >= self.expires_at

    def check(self) -> None:
        """Raise DebugTimeoutError when the deadline has passed."""

        if self.expired():
            raise DebugTimeoutError("Deadline exceeded while producing debug signals.")
