"""
Interview clock policy.

All interview timing is derived from the session's fixed start timestamp and
configured duration; nothing is scheduled. Each request recomputes the
remaining time and lifecycle state independently.
"""

import time
from typing import Callable

from voicescreen.models.interview import InterviewSession, InterviewState


def _wall_clock_ms() -> int:
    return int(time.time() * 1000)


class InterviewClock:
    """Computes remaining interview time and the derived lifecycle state."""

    def __init__(self, now_ms: Callable[[], int] | None = None):
        self._now_ms = now_ms or _wall_clock_ms

    def now_ms(self) -> int:
        return int(self._now_ms())

    def seconds_left(self, session: InterviewSession) -> int:
        """Whole seconds until the interview ends, never negative."""
        return max(0, (session.end_time - self.now_ms()) // 1000)

    def is_expired(self, session: InterviewSession) -> bool:
        return self.now_ms() >= session.end_time

    def state(self, session: InterviewSession | None) -> InterviewState:
        """Lifecycle state of a stored session (None means never started)."""
        if session is None:
            return InterviewState.NOT_STARTED
        if self.is_expired(session):
            return InterviewState.EXPIRED
        return InterviewState.ACTIVE
