from datetime import datetime

from sqlalchemy import JSON, DateTime, Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from interview_prep.constants import ASSESSMENT_TYPE_VALUES
from interview_prep.core.datetime_utils import now_utc_naive
from interview_prep.db.base import Base


class AssessmentRecord(Base):
    __tablename__ = "assessments"

    assessment_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(
        Enum(*ASSESSMENT_TYPE_VALUES, name="assessment_type", native_enum=False),
        nullable=False,
    )
    created_by: Mapped[int | None] = mapped_column(Integer, nullable=True)
    # Ordered question list; shape depends on `type`.
    questions: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    time_limit: Mapped[int | None] = mapped_column(Integer, nullable=True)  # minutes
    created_at: Mapped[datetime] = mapped_column(DateTime, default=now_utc_naive)
