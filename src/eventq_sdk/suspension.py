"""Suspension and discard windows for the event queue."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

DEFAULT_SUSPENSION_MINUTES = 5


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SuspensionWindow:
    """Two independent deadlines: no processing before ``suspend_until``,
    no new events accepted before ``discard_until``.

    A window is active only while its deadline lies strictly in the future.
    """

    suspend_until: Optional[datetime] = None
    discard_until: Optional[datetime] = None
    clock: Callable[[], datetime] = field(default=utcnow, repr=False)

    def suspend(self, duration_minutes: Optional[float] = None, discard: bool = False) -> float:
        """Extend the processing window (and optionally the discard window).

        Returns the duration actually applied, in minutes.
        """
        if not duration_minutes or duration_minutes <= 0:
            duration_minutes = DEFAULT_SUSPENSION_MINUTES
        deadline = self.clock() + timedelta(minutes=duration_minutes)
        self.suspend_until = deadline
        if discard:
            self.discard_until = deadline
        return duration_minutes

    @property
    def processing_suspended(self) -> bool:
        return self.suspend_until is not None and self.suspend_until > self.clock()

    @property
    def discarding(self) -> bool:
        return self.discard_until is not None and self.discard_until > self.clock()


__all__ = ["SuspensionWindow", "DEFAULT_SUSPENSION_MINUTES", "utcnow"]
