from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from interview_prep.core.errors import (
    AssessmentError,
    InvalidAssessmentError,
    InvalidScoreError,
    InvalidTransitionError,
    NotFoundError,
    TypeMismatchError,
    UnauthorizedError,
)

ERROR_STATUS_CODES: dict[type[AssessmentError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    UnauthorizedError: status.HTTP_403_FORBIDDEN,
    InvalidTransitionError: status.HTTP_409_CONFLICT,
    TypeMismatchError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    InvalidAssessmentError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    InvalidScoreError: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def status_code_for(exc: AssessmentError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[error_type]
    return status.HTTP_400_BAD_REQUEST


async def assessment_error_handler(request: Request, exc: AssessmentError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code_for(exc),
        content={"detail": exc.detail, "code": exc.code},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AssessmentError, assessment_error_handler)
