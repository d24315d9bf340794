from interview_prep.db.base import Base
from interview_prep.models.assessment import AssessmentRecord
from interview_prep.models.candidate_assessment import CandidateAssessment

__all__ = [
    "Base",
    "AssessmentRecord",
    "CandidateAssessment",
]
