from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from interview_prep.core.datetime_utils import now_utc_naive
from interview_prep.core.errors import InvalidTransitionError
from interview_prep.models.assessment import AssessmentRecord
from interview_prep.models.candidate_assessment import CandidateAssessment
from interview_prep.schemas.assessment import Assessment, parse_assessment
from interview_prep.schemas.assignment import Assignment
from interview_prep.services.storage import AssignmentStore

logger = logging.getLogger("iprep.storage")


def assignment_from_row(row: CandidateAssessment) -> Assignment:
    return Assignment(
        id=row.candidate_assessment_id,
        candidate_id=row.candidate_id,
        assessment_id=row.assessment_id,
        status=row.status,
        started_at=row.started_at,
        completed_at=row.completed_at,
        responses=row.responses,
        score=row.score,
        feedback=row.feedback,
        scheduled_for=row.scheduled_for,
        version=row.version,
    )


def assessment_from_row(row: AssessmentRecord) -> Assessment:
    return parse_assessment(
        {
            "id": row.assessment_id,
            "title": row.title,
            "description": row.description,
            "type": row.type,
            "questions": row.questions or [],
            "time_limit": row.time_limit,
        }
    )


def _row_values(assignment: Assignment) -> dict:
    responses = None
    if assignment.responses is not None:
        responses = assignment.responses.model_dump(mode="json", by_alias=True)
    return {
        "candidate_id": assignment.candidate_id,
        "assessment_id": assignment.assessment_id,
        "status": assignment.status,
        "started_at": assignment.started_at,
        "completed_at": assignment.completed_at,
        "responses": responses,
        "score": assignment.score,
        "feedback": assignment.feedback,
        "scheduled_for": assignment.scheduled_for,
    }


class SqlAssignmentStore(AssignmentStore):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_assignment(self, assignment_id: int) -> Assignment | None:
        row = (
            await self.session.execute(
                select(CandidateAssessment)
                .where(CandidateAssessment.candidate_assessment_id == assignment_id)
                .with_for_update()
                .execution_options(populate_existing=True)
            )
        ).scalars().first()
        return assignment_from_row(row) if row else None

    async def get_assessment(self, assessment_id: int) -> Assessment | None:
        row = await self.session.get(AssessmentRecord, assessment_id)
        return assessment_from_row(row) if row else None

    async def save_assignment(self, assignment: Assignment) -> Assignment:
        values = _row_values(assignment)
        if assignment.id is None:
            row = CandidateAssessment(**values, version=assignment.version)
            self.session.add(row)
            await self.session.flush()
            return assignment_from_row(row)

        result = await self.session.execute(
            update(CandidateAssessment)
            .where(
                CandidateAssessment.candidate_assessment_id == assignment.id,
                CandidateAssessment.version == assignment.version,
            )
            .values(**values, version=assignment.version + 1, updated_at=now_utc_naive())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            exists = await self.session.get(CandidateAssessment, assignment.id)
            if exists is None:
                row = CandidateAssessment(candidate_assessment_id=assignment.id, **values, version=assignment.version)
                self.session.add(row)
                await self.session.flush()
                return assignment_from_row(row)
            logger.warning(
                "stale_assignment_write",
                extra={"assignment_id": assignment.id, "expected_version": assignment.version},
            )
            raise InvalidTransitionError("Assignment was modified concurrently")
        return assignment.model_copy(update={"version": assignment.version + 1})

    async def list_candidate_assignments(self, candidate_id: int) -> list[Assignment]:
        rows = (
            await self.session.execute(
                select(CandidateAssessment)
                .where(CandidateAssessment.candidate_id == candidate_id)
                .order_by(CandidateAssessment.candidate_assessment_id.asc())
                .execution_options(populate_existing=True)
            )
        ).scalars().all()
        return [assignment_from_row(row) for row in rows]

    async def find_candidate_assignment(self, candidate_id: int, assessment_id: int) -> Assignment | None:
        row = (
            await self.session.execute(
                select(CandidateAssessment)
                .where(
                    CandidateAssessment.candidate_id == candidate_id,
                    CandidateAssessment.assessment_id == assessment_id,
                )
                .order_by(CandidateAssessment.candidate_assessment_id.asc())
                .limit(1)
                .execution_options(populate_existing=True)
            )
        ).scalars().first()
        return assignment_from_row(row) if row else None

    @asynccontextmanager
    async def exclusive(self, assignment_id: int) -> AsyncIterator[None]:
        try:
            yield
        except Exception:
            await self.session.rollback()
            raise
        else:
            await self.session.commit()
