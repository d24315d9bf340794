from __future__ import annotations

from datetime import datetime, timedelta
from typing import Protocol

from interview_prep.core.datetime_utils import now_utc_naive, to_utc_naive


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    def now(self) -> datetime:
        return now_utc_naive()


class ManualClock:
    """Clock that only moves when told to. Used to make lifecycle timing deterministic."""

    def __init__(self, start: datetime) -> None:
        self._now = to_utc_naive(start)

    def now(self) -> datetime:
        return self._now

    def advance(self, seconds: float) -> datetime:
        self._now = self._now + timedelta(seconds=seconds)
        return self._now
