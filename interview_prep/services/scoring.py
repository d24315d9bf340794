"""Automatic scoring for MCQ and fill-in-blanks assessments.

Pure and deterministic. Responses that reference unknown question ids are
ignored; if the same question is answered more than once the last answer wins.
Video assessments are never scored here.
"""
from __future__ import annotations

from typing import Sequence

from interview_prep.constants import ASSESSMENT_TYPE_MCQ, AUTO_SCORED_TYPES
from interview_prep.core.errors import InvalidAssessmentError, TypeMismatchError
from interview_prep.core.math_utils import percent
from interview_prep.schemas.assessment import (
    Assessment,
    FillInBlanksQuestion,
    McqQuestion,
)
from interview_prep.schemas.assignment import (
    AssignmentResponses,
    FillInBlanksResponse,
    McqResponse,
)
from interview_prep.services.blanks import marker_alignment_problem


def _latest_by_question(responses: Sequence, known_ids: set[str]) -> dict:
    latest = {}
    for response in responses:
        if response.question_id in known_ids:
            latest[response.question_id] = response
    return latest


def score_mcq(questions: Sequence[McqQuestion], responses: Sequence[McqResponse]) -> int:
    if not questions:
        raise InvalidAssessmentError("MCQ assessment has no questions")

    by_id = {question.id: question for question in questions}
    answered = _latest_by_question(responses, set(by_id))
    correct = sum(
        1
        for question_id, response in answered.items()
        if response.selected_option_id == by_id[question_id].correct_option_id
    )
    return percent(correct, len(questions))


def _blank_is_correct(answer: str | None, correct_answer: str) -> bool:
    if not answer:
        return False
    return answer.lower() == correct_answer.lower()


def score_fill_in_blanks(
    questions: Sequence[FillInBlanksQuestion],
    responses: Sequence[FillInBlanksResponse],
) -> int:
    total_blanks = sum(len(question.blanks) for question in questions)
    if total_blanks == 0:
        raise InvalidAssessmentError("Fill-in-blanks assessment has no blanks")

    answered = _latest_by_question(responses, {question.id for question in questions})
    correct = 0
    for question in questions:
        response = answered.get(question.id)
        if response is None:
            continue
        for blank in question.blanks:
            if _blank_is_correct(response.answers.get(blank.id), blank.correct_answer):
                correct += 1
    return percent(correct, total_blanks)


def ensure_matching_type(assessment: Assessment, responses: AssignmentResponses) -> None:
    if responses.type != assessment.type:
        raise TypeMismatchError(
            f"Cannot submit {responses.type} responses to a {assessment.type} assessment"
        )


def unknown_question_ids(assessment: Assessment, responses: AssignmentResponses) -> list[str]:
    known = set(assessment.question_ids())
    return [item.question_id for item in responses.items if item.question_id not in known]


def score_responses(assessment: Assessment, responses: AssignmentResponses) -> int | None:
    """Score a submission, or return None for types graded by a reviewer."""
    ensure_matching_type(assessment, responses)
    if assessment.type not in AUTO_SCORED_TYPES:
        if not assessment.questions:
            raise InvalidAssessmentError(f"{assessment.type} assessment has no questions")
        return None
    if assessment.type == ASSESSMENT_TYPE_MCQ:
        return score_mcq(assessment.questions, responses.items)
    return score_fill_in_blanks(assessment.questions, responses.items)


def assessment_problems(assessment: Assessment) -> list[str]:
    """Authoring defects that do not prevent scoring but make results misleading."""
    problems: list[str] = []
    seen: set[str] = set()
    for question in assessment.questions:
        if question.id in seen:
            problems.append(f"duplicate question id {question.id!r}")
        seen.add(question.id)

        if isinstance(question, McqQuestion):
            option_ids = [option.id for option in question.options]
            if question.correct_option_id not in option_ids:
                problems.append(
                    f"question {question.id!r} correct option {question.correct_option_id!r} is not among its options"
                )
        elif isinstance(question, FillInBlanksQuestion):
            problem = marker_alignment_problem(question)
            if problem:
                problems.append(problem)
    return problems
