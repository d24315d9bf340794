import pytest

from factories import CANDIDATE_ID, T0, mcq_payload, video_payload
from interview_prep.core.clock import ManualClock
from interview_prep.core.errors import InvalidTransitionError, NotFoundError
from interview_prep.models import AssessmentRecord, CandidateAssessment
from interview_prep.schemas.assessment import McqAssessment
from interview_prep.schemas.assignment import McqResponse, McqResponses, VideoResponse
from interview_prep.services.assignment_lifecycle import AssignmentLifecycle
from interview_prep.services.sql_storage import SqlAssignmentStore


async def seed(db_session, payload: dict) -> CandidateAssessment:
    assessment = AssessmentRecord(
        title=payload["title"],
        type=payload["type"],
        questions=payload["questions"],
        time_limit=payload.get("timeLimit"),
    )
    db_session.add(assessment)
    await db_session.flush()
    assignment = CandidateAssessment(candidate_id=CANDIDATE_ID, assessment_id=assessment.assessment_id)
    db_session.add(assignment)
    await db_session.commit()
    return assignment


@pytest.mark.asyncio
async def test_get_assessment_parses_typed_questions(db_session):
    row = await seed(db_session, mcq_payload())
    store = SqlAssignmentStore(db_session)
    assessment = await store.get_assessment(row.assessment_id)
    assert isinstance(assessment, McqAssessment)
    assert assessment.time_limit == 30
    assert [question.correct_option_id for question in assessment.questions] == ["a", "a", "a", "a"]
    assert await store.get_assessment(999) is None


@pytest.mark.asyncio
async def test_new_assignment_round_trips_as_pending(db_session):
    row = await seed(db_session, mcq_payload())
    store = SqlAssignmentStore(db_session)
    assignment = await store.get_assignment(row.candidate_assessment_id)
    assert assignment.status == "pending"
    assert assignment.started_at is None
    assert assignment.responses is None
    assert assignment.score is None
    assert assignment.version == 0


@pytest.mark.asyncio
async def test_full_lifecycle_persists_each_transition(db_session):
    row = await seed(db_session, mcq_payload())
    clock = ManualClock(T0)
    lifecycle = AssignmentLifecycle(SqlAssignmentStore(db_session), clock)
    assignment_id = row.candidate_assessment_id

    started = await lifecycle.start(assignment_id, CANDIDATE_ID)
    assert await lifecycle.store.get_assignment(assignment_id) == started

    clock.advance(300)
    responses = [McqResponse(question_id=f"q{i}", selected_option_id="a") for i in (1, 2, 3)]
    submitted = await lifecycle.submit_mcq(assignment_id, CANDIDATE_ID, responses)
    fetched = await lifecycle.store.get_assignment(assignment_id)
    assert fetched == submitted
    assert fetched.score == 75
    assert fetched.responses == McqResponses(items=responses)
    assert fetched.completed_at == clock.now()

    reviewed = await lifecycle.review(assignment_id, "Solid fundamentals")
    fetched = await lifecycle.store.get_assignment(assignment_id)
    assert fetched == reviewed
    assert fetched.version == 3

    stored = await db_session.get(CandidateAssessment, assignment_id)
    assert stored.responses == {
        "type": "mcq",
        "items": [{"questionId": f"q{i}", "selectedOptionId": "a"} for i in (1, 2, 3)],
    }


@pytest.mark.asyncio
async def test_stale_version_is_rejected(db_session):
    row = await seed(db_session, video_payload())
    store = SqlAssignmentStore(db_session)
    loaded = await store.get_assignment(row.candidate_assessment_id)
    await store.save_assignment(loaded.model_copy(update={"status": "in-progress", "started_at": T0}))
    with pytest.raises(InvalidTransitionError):
        await store.save_assignment(loaded.model_copy(update={"status": "in-progress", "started_at": T0}))


@pytest.mark.asyncio
async def test_failed_operation_rolls_back(db_session):
    row = await seed(db_session, video_payload())
    assignment_id = row.candidate_assessment_id
    lifecycle = AssignmentLifecycle(SqlAssignmentStore(db_session), ManualClock(T0))
    with pytest.raises(InvalidTransitionError):
        await lifecycle.submit_video(
            assignment_id,
            CANDIDATE_ID,
            [VideoResponse(question_id="v1", video_url="https://cdn.example.com/v1.webm")],
        )
    assert (await lifecycle.store.get_assignment(assignment_id)).status == "pending"
    with pytest.raises(NotFoundError):
        await lifecycle.start(assignment_id + 100, CANDIDATE_ID)


@pytest.mark.asyncio
async def test_list_candidate_assignments(db_session):
    first = await seed(db_session, mcq_payload())
    second = await seed(db_session, video_payload())
    store = SqlAssignmentStore(db_session)
    rows = await store.list_candidate_assignments(CANDIDATE_ID)
    assert [row.id for row in rows] == [first.candidate_assessment_id, second.candidate_assessment_id]
    assert await store.list_candidate_assignments(12345) == []


@pytest.mark.asyncio
async def test_find_candidate_assignment(db_session):
    row = await seed(db_session, mcq_payload())
    store = SqlAssignmentStore(db_session)
    found = await store.find_candidate_assignment(CANDIDATE_ID, row.assessment_id)
    assert found.id == row.candidate_assessment_id
    assert await store.find_candidate_assignment(CANDIDATE_ID + 1, row.assessment_id) is None
    assert await store.find_candidate_assignment(CANDIDATE_ID, row.assessment_id + 100) is None
