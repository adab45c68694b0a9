"""Overall wall-clock deadline for one prune run."""

from __future__ import annotations

import time
from typing import Callable

from core.errors import PruneDeadlineError


class RunDeadline:
    """Monotonic deadline shared by every stage of a run."""

    def __init__(self, seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._seconds = seconds
        self._expires_at = clock() + seconds

    @property
    def seconds(self) -> float:
        """Configured budget in seconds."""
        return self._seconds

    def remaining(self) -> float:
        """Seconds left before expiry, never negative."""
        return max(0.0, self._expires_at - self._clock())

    def expired(self) -> bool:
        return self.remaining() <= 0.0

    def check(self, stage: str) -> None:
        """Raise if the deadline has already passed.

        Args:
            stage: Human-readable name of the stage about to start.

        Raises:
            PruneDeadlineError: If no time remains.
        """
        if self.expired():
            raise PruneDeadlineError(
                f"Run deadline of {self._seconds:g}s exceeded before {stage}. "
                "Raise LAMBDA_PRUNE_DEADLINE_SECONDS or retry later."
            )
