from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from interview_prep.constants import (
    ASSESSMENT_TYPE_FILL_IN_BLANKS,
    ASSESSMENT_TYPE_MCQ,
    ASSESSMENT_TYPE_VIDEO,
    ASSIGNMENT_STATUS_PENDING,
    SCORE_MAX,
    SCORE_MIN,
)
from interview_prep.schemas.assessment import Assessment, CamelModel

AssignmentStatus = Literal["pending", "in-progress", "completed", "reviewed"]


class McqResponse(CamelModel):
    question_id: str
    selected_option_id: str


class FillInBlanksResponse(CamelModel):
    question_id: str
    answers: dict[str, str] = Field(default_factory=dict)


class VideoResponse(CamelModel):
    question_id: str
    video_url: str


class McqResponses(CamelModel):
    type: Literal["mcq"] = ASSESSMENT_TYPE_MCQ
    items: list[McqResponse]


class FillInBlanksResponses(CamelModel):
    type: Literal["fill-in-blanks"] = ASSESSMENT_TYPE_FILL_IN_BLANKS
    items: list[FillInBlanksResponse]


class VideoResponses(CamelModel):
    type: Literal["video"] = ASSESSMENT_TYPE_VIDEO
    items: list[VideoResponse]


AssignmentResponses = Annotated[
    Union[McqResponses, FillInBlanksResponses, VideoResponses],
    Field(discriminator="type"),
]

responses_adapter: TypeAdapter[AssignmentResponses] = TypeAdapter(AssignmentResponses)


class Assignment(CamelModel):
    """Full per-candidate-per-assessment record.

    Treated as a value: lifecycle operations build the next record with
    ``model_copy(update=...)`` and hand it to the store whole.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: int | None = None
    candidate_id: int
    assessment_id: int
    status: AssignmentStatus = ASSIGNMENT_STATUS_PENDING
    started_at: datetime | None = None
    completed_at: datetime | None = None
    responses: AssignmentResponses | None = None
    score: int | None = None
    feedback: str | None = None
    scheduled_for: datetime | None = None
    version: int = 0


class StartAssignmentIn(CamelModel):
    candidate_id: int


class SubmitMcqIn(CamelModel):
    candidate_id: int
    responses: list[McqResponse]


class SubmitFillInBlanksIn(CamelModel):
    candidate_id: int
    responses: list[FillInBlanksResponse]


class SubmitVideoIn(CamelModel):
    candidate_id: int
    responses: list[VideoResponse]


class ReviewIn(CamelModel):
    feedback: str
    score: int | None = Field(default=None, ge=SCORE_MIN, le=SCORE_MAX)


class TimeBoxOut(CamelModel):
    assignment_id: int
    bounded: bool
    duration_seconds: int | None = None
    remaining_seconds: int | None = None
    expired: bool = False
    percent_remaining: int | None = None
    status: str
    display: str


class AssessmentSummary(CamelModel):
    id: int | None = None
    title: str
    description: str | None = None
    type: str


class AssignmentListItem(Assignment):
    """Assignment as shown in a candidate's list, with the assessment's headline fields."""

    assessment: AssessmentSummary | None = None


class AssignmentDetail(Assignment):
    """One candidate's assignment with the full assessment it refers to."""

    assessment: Assessment
