from fastapi import APIRouter, Depends, Query

from interview_prep.api import deps
from interview_prep.schemas.assignment import (
    Assignment,
    AssignmentDetail,
    AssignmentListItem,
    ReviewIn,
    StartAssignmentIn,
    SubmitFillInBlanksIn,
    SubmitMcqIn,
    SubmitVideoIn,
    TimeBoxOut,
)
from interview_prep.services.assignment_lifecycle import AssignmentLifecycle

router = APIRouter(tags=["assignments"])


@router.post("/assignments/{assignment_id}/start", response_model=Assignment)
async def start_assignment(
    assignment_id: int,
    payload: StartAssignmentIn,
    lifecycle: AssignmentLifecycle = Depends(deps.get_lifecycle),
):
    return await lifecycle.start(assignment_id, payload.candidate_id)


@router.post("/assignments/{assignment_id}/submit/mcq", response_model=Assignment)
async def submit_mcq(
    assignment_id: int,
    payload: SubmitMcqIn,
    lifecycle: AssignmentLifecycle = Depends(deps.get_lifecycle),
):
    return await lifecycle.submit_mcq(assignment_id, payload.candidate_id, payload.responses)


@router.post(
    "/assignments/{assignment_id}/submit/fill-in-blanks",
    response_model=Assignment,
)
async def submit_fill_in_blanks(
    assignment_id: int,
    payload: SubmitFillInBlanksIn,
    lifecycle: AssignmentLifecycle = Depends(deps.get_lifecycle),
):
    return await lifecycle.submit_fill_in_blanks(assignment_id, payload.candidate_id, payload.responses)


@router.post("/assignments/{assignment_id}/submit/video", response_model=Assignment)
async def submit_video(
    assignment_id: int,
    payload: SubmitVideoIn,
    lifecycle: AssignmentLifecycle = Depends(deps.get_lifecycle),
):
    return await lifecycle.submit_video(assignment_id, payload.candidate_id, payload.responses)


@router.post("/assignments/{assignment_id}/review", response_model=Assignment)
async def review_assignment(
    assignment_id: int,
    payload: ReviewIn,
    lifecycle: AssignmentLifecycle = Depends(deps.get_lifecycle),
):
    return await lifecycle.review(assignment_id, payload.feedback, payload.score)


@router.patch("/assignments/{assignment_id}/feedback", response_model=Assignment)
async def amend_feedback(
    assignment_id: int,
    payload: ReviewIn,
    lifecycle: AssignmentLifecycle = Depends(deps.get_lifecycle),
):
    return await lifecycle.amend_feedback(assignment_id, payload.feedback, payload.score)


@router.get("/assignments/{assignment_id}/time-box", response_model=TimeBoxOut)
async def get_time_box(
    assignment_id: int,
    candidate_id: int = Query(..., alias="candidateId"),
    lifecycle: AssignmentLifecycle = Depends(deps.get_lifecycle),
):
    return await lifecycle.time_box(assignment_id, candidate_id)


@router.get("/candidates/{candidate_id}/assignments", response_model=list[AssignmentListItem])
async def list_candidate_assignments(
    candidate_id: int,
    completed_only: bool = Query(False, alias="completedOnly"),
    lifecycle: AssignmentLifecycle = Depends(deps.get_lifecycle),
):
    return await lifecycle.list_assignments(candidate_id, completed_only=completed_only)


@router.get(
    "/candidates/{candidate_id}/assessments/{assessment_id}",
    response_model=AssignmentDetail,
)
async def get_candidate_assignment(
    candidate_id: int,
    assessment_id: int,
    lifecycle: AssignmentLifecycle = Depends(deps.get_lifecycle),
):
    return await lifecycle.get_candidate_assignment(candidate_id, assessment_id)
