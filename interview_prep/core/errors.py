from __future__ import annotations


class AssessmentError(Exception):
    """Base class for every failure raised by the assignment lifecycle.

    All kinds are terminal: retrying without an external state change fails
    the same way, so nothing in this package retries them.
    """

    code = "assessment_error"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class NotFoundError(AssessmentError):
    code = "not_found"


class UnauthorizedError(AssessmentError):
    code = "unauthorized"


class InvalidTransitionError(AssessmentError):
    code = "invalid_transition"


class TypeMismatchError(AssessmentError):
    code = "type_mismatch"


class InvalidAssessmentError(AssessmentError):
    code = "invalid_assessment"


class InvalidScoreError(AssessmentError):
    code = "invalid_score"
