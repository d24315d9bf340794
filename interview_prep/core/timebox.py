"""Time-box evaluation.

Pure functions of (started_at, duration, now). Callers poll on their own
schedule and decide what to do on expiry; nothing here owns a timer.
An absent duration means the activity is unbounded and must be handled by the
caller before asking for remaining time.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from interview_prep.constants import TIME_STATUS_CRITICAL, TIME_STATUS_NORMAL, TIME_STATUS_WARNING
from interview_prep.core.config import settings
from interview_prep.core.datetime_utils import to_utc_naive
from interview_prep.core.math_utils import percent

_ONE_SECOND = timedelta(seconds=1)


@dataclass(frozen=True)
class TimeBoxSnapshot:
    duration_seconds: int
    remaining_seconds: int
    expired: bool
    percent_remaining: int
    status: str
    display: str


def _require_duration(duration_seconds: int | None) -> int:
    if duration_seconds is None:
        raise ValueError("Unbounded activity has no remaining time")
    if duration_seconds < 0:
        raise ValueError("duration_seconds must not be negative")
    return int(duration_seconds)


def deadline(started_at: datetime, duration_seconds: int | None) -> datetime:
    return to_utc_naive(started_at) + timedelta(seconds=_require_duration(duration_seconds))


def remaining_seconds(started_at: datetime, duration_seconds: int | None, now: datetime) -> int:
    # Floor division truncates partial seconds so we never report more time than is left.
    left = deadline(started_at, duration_seconds) - to_utc_naive(now)
    return max(0, left // _ONE_SECOND)


def is_expired(started_at: datetime, duration_seconds: int | None, now: datetime) -> bool:
    return remaining_seconds(started_at, duration_seconds, now) == 0


def minutes_to_seconds(minutes: int | None) -> int | None:
    if minutes is None:
        return None
    return int(minutes) * 60


def percent_remaining(remaining: int, duration_seconds: int) -> int:
    if duration_seconds <= 0:
        return 0
    return percent(min(remaining, duration_seconds), duration_seconds)


def format_remaining(seconds: int | None) -> str:
    if seconds is None:
        return "--:--"
    seconds = max(0, int(seconds))
    minutes, secs = divmod(seconds, 60)
    return f"{minutes}:{secs:02d}"


def time_status(
    seconds: int | None,
    *,
    warning_seconds: int | None = None,
    critical_seconds: int | None = None,
) -> str:
    if seconds is None:
        return TIME_STATUS_NORMAL
    warning = settings.timer_warning_seconds if warning_seconds is None else warning_seconds
    critical = settings.timer_critical_seconds if critical_seconds is None else critical_seconds
    if seconds <= critical:
        return TIME_STATUS_CRITICAL
    if seconds <= warning:
        return TIME_STATUS_WARNING
    return TIME_STATUS_NORMAL


def snapshot(started_at: datetime, duration_seconds: int | None, now: datetime) -> TimeBoxSnapshot:
    duration = _require_duration(duration_seconds)
    remaining = remaining_seconds(started_at, duration, now)
    return TimeBoxSnapshot(
        duration_seconds=duration,
        remaining_seconds=remaining,
        expired=remaining == 0,
        percent_remaining=percent_remaining(remaining, duration),
        status=time_status(remaining),
        display=format_remaining(remaining),
    )
