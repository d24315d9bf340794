from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from interview_prep.constants import (
    ASSESSMENT_TYPE_FILL_IN_BLANKS,
    ASSESSMENT_TYPE_MCQ,
    ASSESSMENT_TYPE_VIDEO,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class McqOption(CamelModel):
    id: str
    text: str


class McqQuestion(CamelModel):
    id: str
    text: str
    options: list[McqOption]
    correct_option_id: str
    time_limit: int | None = None


class Blank(CamelModel):
    id: str
    correct_answer: str


class FillInBlanksQuestion(CamelModel):
    id: str
    text: str
    blanks: list[Blank]
    time_limit: int | None = None


class VideoQuestion(CamelModel):
    id: str
    text: str
    time_limit: int = Field(gt=0, description="Recording limit in seconds")


class AssessmentBase(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: int | None = None
    title: str = ""
    description: str | None = None
    time_limit: int | None = Field(default=None, ge=0, description="Whole-assessment limit in minutes")

    def question_ids(self) -> list[str]:
        return [question.id for question in self.questions]


class McqAssessment(AssessmentBase):
    type: Literal["mcq"] = ASSESSMENT_TYPE_MCQ
    questions: list[McqQuestion]


class FillInBlanksAssessment(AssessmentBase):
    type: Literal["fill-in-blanks"] = ASSESSMENT_TYPE_FILL_IN_BLANKS
    questions: list[FillInBlanksQuestion]


class VideoAssessment(AssessmentBase):
    type: Literal["video"] = ASSESSMENT_TYPE_VIDEO
    questions: list[VideoQuestion]


Assessment = Annotated[
    Union[McqAssessment, FillInBlanksAssessment, VideoAssessment],
    Field(discriminator="type"),
]

assessment_adapter: TypeAdapter[Assessment] = TypeAdapter(Assessment)


def parse_assessment(data: dict) -> Assessment:
    return assessment_adapter.validate_python(data)
