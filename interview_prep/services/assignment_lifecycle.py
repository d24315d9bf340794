from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence

from interview_prep.constants import (
    ASSESSMENT_TYPE_VIDEO,
    ASSIGNMENT_STATUS_REVIEWED,
    SCORE_MAX,
    SCORE_MIN,
    TIME_STATUS_NORMAL,
)
from interview_prep.core import timebox
from interview_prep.core.clock import Clock, SystemClock
from interview_prep.core.errors import (
    InvalidScoreError,
    InvalidTransitionError,
    NotFoundError,
    UnauthorizedError,
)
from interview_prep.core.lifecycle_machine import is_finished, next_status, status_rank, transition_for
from interview_prep.schemas.assessment import Assessment, VideoQuestion
from interview_prep.schemas.assignment import (
    AssessmentSummary,
    Assignment,
    AssignmentDetail,
    AssignmentListItem,
    AssignmentResponses,
    FillInBlanksResponse,
    FillInBlanksResponses,
    McqResponse,
    McqResponses,
    TimeBoxOut,
    VideoResponse,
    VideoResponses,
)
from interview_prep.services.scoring import (
    assessment_problems,
    ensure_matching_type,
    score_responses,
    unknown_question_ids,
)
from interview_prep.services.storage import AssignmentStore

logger = logging.getLogger("iprep.lifecycle")

_TOO_EARLY = {
    "submit": "Assessment has not been started",
    "review": "Assessment must be completed before it can be reviewed",
}
_ALREADY_DONE = {
    "start": "Assessment already started",
    "submit": "Assessment already submitted",
    "review": "Assessment already reviewed",
}


def _validate_score(score: int | None) -> None:
    if score is None:
        return
    if isinstance(score, bool) or not isinstance(score, int) or not SCORE_MIN <= score <= SCORE_MAX:
        raise InvalidScoreError(f"Score must be an integer between {SCORE_MIN} and {SCORE_MAX}")


def _require_status(assignment: Assignment, operation: str) -> str:
    target = next_status(operation, assignment.status)
    if target is not None:
        return target
    source, _ = transition_for(operation)
    if status_rank(assignment.status) < status_rank(source):
        raise InvalidTransitionError(_TOO_EARLY[operation])
    raise InvalidTransitionError(_ALREADY_DONE[operation])


class AssignmentLifecycle:
    """Drives an assignment through pending -> in-progress -> completed -> reviewed.

    Every operation reads the full record, checks its preconditions, builds the
    next record and saves it whole, inside ``store.exclusive`` so concurrent
    calls on the same assignment are serialised.
    """

    def __init__(self, store: AssignmentStore, clock: Clock | None = None) -> None:
        self.store = store
        self.clock = clock or SystemClock()

    async def _load(self, assignment_id: int) -> Assignment:
        assignment = await self.store.get_assignment(assignment_id)
        if assignment is None:
            raise NotFoundError(f"Assignment {assignment_id} not found")
        return assignment

    async def _load_owned(self, assignment_id: int, candidate_id: int) -> Assignment:
        assignment = await self._load(assignment_id)
        if assignment.candidate_id != candidate_id:
            logger.warning(
                "assignment_ownership_denied",
                extra={"assignment_id": assignment_id, "candidate_id": candidate_id},
            )
            raise UnauthorizedError("Assessment not assigned to this candidate")
        return assignment

    async def _load_assessment(self, assessment_id: int) -> Assessment:
        assessment = await self.store.get_assessment(assessment_id)
        if assessment is None:
            raise NotFoundError(f"Assessment {assessment_id} not found")
        return assessment

    async def start(self, assignment_id: int, candidate_id: int) -> Assignment:
        async with self.store.exclusive(assignment_id):
            assignment = await self._load_owned(assignment_id, candidate_id)
            next_status = _require_status(assignment, "start")
            updated = assignment.model_copy(update={"status": next_status, "started_at": self.clock.now()})
            saved = await self.store.save_assignment(updated)
        logger.info("assignment_started", extra={"assignment_id": assignment_id, "candidate_id": candidate_id})
        return saved

    async def submit(self, assignment_id: int, candidate_id: int, responses: AssignmentResponses) -> Assignment:
        async with self.store.exclusive(assignment_id):
            assignment = await self._load_owned(assignment_id, candidate_id)
            assessment = await self._load_assessment(assignment.assessment_id)
            ensure_matching_type(assessment, responses)
            next_status = _require_status(assignment, "submit")

            now = self.clock.now()
            self._note_submission(assignment, assessment, responses, now)
            score = score_responses(assessment, responses)
            updated = assignment.model_copy(
                update={
                    "status": next_status,
                    "completed_at": now,
                    "responses": responses,
                    "score": score,
                }
            )
            saved = await self.store.save_assignment(updated)
        logger.info(
            "assignment_submitted",
            extra={
                "assignment_id": assignment_id,
                "candidate_id": candidate_id,
                "assessment_type": assessment.type,
                "score": score,
            },
        )
        return saved

    def _note_submission(
        self,
        assignment: Assignment,
        assessment: Assessment,
        responses: AssignmentResponses,
        now: datetime,
    ) -> None:
        problems = assessment_problems(assessment)
        if problems:
            logger.warning(
                "assessment_authoring_problems",
                extra={"assessment_id": assessment.id, "problems": problems},
            )
        ignored = unknown_question_ids(assessment, responses)
        if ignored:
            logger.info(
                "unknown_question_responses_ignored",
                extra={"assignment_id": assignment.id, "question_ids": ignored},
            )
        limit_seconds = timebox.minutes_to_seconds(assessment.time_limit)
        # Late submissions are accepted; forcing submit at expiry is the caller's job.
        if limit_seconds is not None and assignment.started_at is not None:
            if timebox.is_expired(assignment.started_at, limit_seconds, now):
                overrun = int((now - timebox.deadline(assignment.started_at, limit_seconds)).total_seconds())
                logger.warning(
                    "late_submission_accepted",
                    extra={"assignment_id": assignment.id, "overrun_seconds": overrun},
                )

    async def submit_mcq(
        self, assignment_id: int, candidate_id: int, responses: Sequence[McqResponse]
    ) -> Assignment:
        return await self.submit(assignment_id, candidate_id, McqResponses(items=list(responses)))

    async def submit_fill_in_blanks(
        self, assignment_id: int, candidate_id: int, responses: Sequence[FillInBlanksResponse]
    ) -> Assignment:
        return await self.submit(assignment_id, candidate_id, FillInBlanksResponses(items=list(responses)))

    async def submit_video(
        self, assignment_id: int, candidate_id: int, responses: Sequence[VideoResponse]
    ) -> Assignment:
        return await self.submit(assignment_id, candidate_id, VideoResponses(items=list(responses)))

    async def review(self, assignment_id: int, feedback: str, score: int | None = None) -> Assignment:
        _validate_score(score)
        async with self.store.exclusive(assignment_id):
            assignment = await self._load(assignment_id)
            next_status = _require_status(assignment, "review")
            changes: dict = {"status": next_status, "feedback": feedback}
            if score is not None:
                changes["score"] = score
            saved = await self.store.save_assignment(assignment.model_copy(update=changes))
        logger.info(
            "assignment_reviewed",
            extra={"assignment_id": assignment_id, "score": saved.score, "score_overridden": score is not None},
        )
        return saved

    async def amend_feedback(self, assignment_id: int, feedback: str, score: int | None = None) -> Assignment:
        """Correct feedback (and optionally score) on an already reviewed assignment. Status is unchanged."""
        _validate_score(score)
        async with self.store.exclusive(assignment_id):
            assignment = await self._load(assignment_id)
            if assignment.status != ASSIGNMENT_STATUS_REVIEWED:
                raise InvalidTransitionError("Only reviewed assessments can have their feedback amended")
            changes: dict = {"feedback": feedback}
            if score is not None:
                changes["score"] = score
            saved = await self.store.save_assignment(assignment.model_copy(update=changes))
        logger.info("assignment_feedback_amended", extra={"assignment_id": assignment_id})
        return saved

    async def list_assignments(
        self, candidate_id: int, *, completed_only: bool = False
    ) -> list[AssignmentListItem]:
        rows = await self.store.list_candidate_assignments(candidate_id)
        if completed_only:
            rows = [row for row in rows if is_finished(row.status)]

        summaries: dict[int, AssessmentSummary | None] = {}
        items: list[AssignmentListItem] = []
        for row in rows:
            if row.assessment_id not in summaries:
                assessment = await self.store.get_assessment(row.assessment_id)
                summaries[row.assessment_id] = (
                    AssessmentSummary(
                        id=assessment.id,
                        title=assessment.title,
                        description=assessment.description,
                        type=assessment.type,
                    )
                    if assessment
                    else None
                )
            items.append(AssignmentListItem(**row.model_dump(), assessment=summaries[row.assessment_id]))
        return items

    async def get_candidate_assignment(self, candidate_id: int, assessment_id: int) -> AssignmentDetail:
        """The candidate's own assignment for an assessment, with the full assessment attached."""
        assignment = await self.store.find_candidate_assignment(candidate_id, assessment_id)
        if assignment is None:
            logger.info(
                "candidate_assignment_missing",
                extra={"candidate_id": candidate_id, "assessment_id": assessment_id},
            )
            raise NotFoundError(f"Assessment {assessment_id} is not assigned to candidate {candidate_id}")
        assessment = await self._load_assessment(assessment_id)
        return AssignmentDetail(**assignment.model_dump(), assessment=assessment)

    async def time_box(self, assignment_id: int, candidate_id: int) -> TimeBoxOut:
        assignment = await self._load_owned(assignment_id, candidate_id)
        assessment = await self._load_assessment(assignment.assessment_id)
        limit_seconds = timebox.minutes_to_seconds(assessment.time_limit)
        if limit_seconds is None or assessment.type == ASSESSMENT_TYPE_VIDEO:
            return TimeBoxOut(
                assignment_id=assignment_id,
                bounded=False,
                status=TIME_STATUS_NORMAL,
                display=timebox.format_remaining(None),
            )
        # A submitted attempt stops its clock at completion.
        now = assignment.completed_at or self.clock.now()
        # Not started yet: the whole allowance is still available.
        started_at = assignment.started_at or now
        snap = timebox.snapshot(started_at, limit_seconds, now)
        return TimeBoxOut(
            assignment_id=assignment_id,
            bounded=True,
            duration_seconds=snap.duration_seconds,
            remaining_seconds=snap.remaining_seconds,
            expired=snap.expired,
            percent_remaining=snap.percent_remaining,
            status=snap.status,
            display=snap.display,
        )

    def question_time_box(self, question: VideoQuestion, question_started_at: datetime) -> timebox.TimeBoxSnapshot:
        return timebox.snapshot(question_started_at, question.time_limit, self.clock.now())
