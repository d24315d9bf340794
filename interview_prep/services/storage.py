from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections import Counter
from contextlib import asynccontextmanager
from typing import AsyncIterator

from interview_prep.core.errors import InvalidTransitionError
from interview_prep.schemas.assessment import Assessment
from interview_prep.schemas.assignment import Assignment

logger = logging.getLogger("iprep.storage")


class AssignmentStore(ABC):
    """Persistence the lifecycle controller depends on.

    ``save_assignment`` is a whole-record upsert. It must refuse a record whose
    ``version`` no longer matches what is stored, so that two writers racing
    on the same assignment cannot both succeed.
    """

    @abstractmethod
    async def get_assignment(self, assignment_id: int) -> Assignment | None: ...

    @abstractmethod
    async def get_assessment(self, assessment_id: int) -> Assessment | None: ...

    @abstractmethod
    async def save_assignment(self, assignment: Assignment) -> Assignment: ...

    @abstractmethod
    async def list_candidate_assignments(self, candidate_id: int) -> list[Assignment]: ...

    @abstractmethod
    async def find_candidate_assignment(self, candidate_id: int, assessment_id: int) -> Assignment | None:
        """The candidate's assignment for ``assessment_id`` (lowest id if several), or None."""

    @abstractmethod
    def exclusive(self, assignment_id: int):
        """Async context manager serialising read-check-write on one assignment."""


class InMemoryAssignmentStore(AssignmentStore):
    def __init__(self) -> None:
        self._assignments: dict[int, Assignment] = {}
        self._assessments: dict[int, Assessment] = {}
        self._locks: dict[int, asyncio.Lock] = {}
        self._lock_users: Counter[int] = Counter()
        self._next_assignment_id = 1
        self._next_assessment_id = 1

    def add_assessment(self, assessment: Assessment) -> Assessment:
        if assessment.id is None:
            assessment = assessment.model_copy(update={"id": self._next_assessment_id})
        self._next_assessment_id = max(self._next_assessment_id, assessment.id + 1)
        self._assessments[assessment.id] = assessment
        return assessment

    async def get_assignment(self, assignment_id: int) -> Assignment | None:
        return self._assignments.get(assignment_id)

    async def get_assessment(self, assessment_id: int) -> Assessment | None:
        return self._assessments.get(assessment_id)

    async def save_assignment(self, assignment: Assignment) -> Assignment:
        if assignment.id is None:
            assignment = assignment.model_copy(update={"id": self._next_assignment_id})
        self._next_assignment_id = max(self._next_assignment_id, assignment.id + 1)

        current = self._assignments.get(assignment.id)
        if current is not None and current.version != assignment.version:
            logger.warning(
                "stale_assignment_write",
                extra={"assignment_id": assignment.id, "expected_version": assignment.version},
            )
            raise InvalidTransitionError("Assignment was modified concurrently")

        saved = assignment.model_copy(update={"version": assignment.version + 1 if current else assignment.version})
        self._assignments[saved.id] = saved
        return saved

    async def list_candidate_assignments(self, candidate_id: int) -> list[Assignment]:
        rows = [row for row in self._assignments.values() if row.candidate_id == candidate_id]
        return sorted(rows, key=lambda row: row.id)

    async def find_candidate_assignment(self, candidate_id: int, assessment_id: int) -> Assignment | None:
        for row in await self.list_candidate_assignments(candidate_id):
            if row.assessment_id == assessment_id:
                return row
        return None

    @asynccontextmanager
    async def exclusive(self, assignment_id: int) -> AsyncIterator[None]:
        lock = self._locks.setdefault(assignment_id, asyncio.Lock())
        self._lock_users[assignment_id] += 1
        try:
            async with lock:
                yield
        finally:
            # Holders and waiters are counted; the last one out drops the lock.
            self._lock_users[assignment_id] -= 1
            if not self._lock_users[assignment_id]:
                del self._lock_users[assignment_id]
                del self._locks[assignment_id]
