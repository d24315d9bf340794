from datetime import datetime

from sqlalchemy import JSON, DateTime, Enum, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from interview_prep.constants import ASSIGNMENT_STATUS_PENDING, ASSIGNMENT_STATUS_VALUES
from interview_prep.core.datetime_utils import now_utc_naive
from interview_prep.db.base import Base


class CandidateAssessment(Base):
    __tablename__ = "candidate_assessments"

    candidate_assessment_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    candidate_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    assessment_id: Mapped[int] = mapped_column(ForeignKey("assessments.assessment_id"), nullable=False, index=True)

    status: Mapped[str] = mapped_column(
        Enum(*ASSIGNMENT_STATUS_VALUES, name="assignment_status", native_enum=False),
        nullable=False,
        default=ASSIGNMENT_STATUS_PENDING,
    )
    started_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    responses: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    feedback: Mapped[str | None] = mapped_column(Text, nullable=True)
    scheduled_for: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=now_utc_naive)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=now_utc_naive, onupdate=now_utc_naive)
