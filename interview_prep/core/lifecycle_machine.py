from __future__ import annotations

from interview_prep.constants import (
    ASSIGNMENT_STATUS_COMPLETED,
    ASSIGNMENT_STATUS_IN_PROGRESS,
    ASSIGNMENT_STATUS_PENDING,
    ASSIGNMENT_STATUS_REVIEWED,
    ASSIGNMENT_STATUS_VALUES,
)

PENDING = ASSIGNMENT_STATUS_PENDING
IN_PROGRESS = ASSIGNMENT_STATUS_IN_PROGRESS
COMPLETED = ASSIGNMENT_STATUS_COMPLETED
REVIEWED = ASSIGNMENT_STATUS_REVIEWED

ALL_STATUSES: tuple[str, ...] = ASSIGNMENT_STATUS_VALUES

# Operation name -> (required source status, resulting status).
TRANSITIONS: dict[str, tuple[str, str]] = {
    "start": (PENDING, IN_PROGRESS),
    "submit": (IN_PROGRESS, COMPLETED),
    "review": (COMPLETED, REVIEWED),
}

# Strictly forward, one step at a time.
STATUS_GRAPH: dict[str, frozenset[str]] = {
    PENDING: frozenset({IN_PROGRESS}),
    IN_PROGRESS: frozenset({COMPLETED}),
    COMPLETED: frozenset({REVIEWED}),
    REVIEWED: frozenset(),
}


def status_rank(status: str) -> int:
    if status not in STATUS_GRAPH:
        raise ValueError(f"Unknown assignment status: {status!r}")
    return ALL_STATUSES.index(status)


def can_transition(from_status: str, to_status: str) -> bool:
    return to_status in STATUS_GRAPH.get(from_status, frozenset())


def transition_for(operation: str) -> tuple[str, str]:
    try:
        return TRANSITIONS[operation]
    except KeyError:
        raise ValueError(f"Unknown lifecycle operation: {operation!r}") from None


def next_status(operation: str, current: str) -> str | None:
    """Status ``operation`` moves ``current`` to, or None when the graph forbids it."""
    source, target = transition_for(operation)
    if current != source or not can_transition(current, target):
        return None
    return target


def is_finished(status: str) -> bool:
    """True once the candidate has submitted (completed or reviewed)."""
    return status_rank(status) >= status_rank(COMPLETED)
