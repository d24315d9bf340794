import os

os.environ.setdefault("IP_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("IP_ENVIRONMENT", "test")

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from factories import CANDIDATE_ID, T0, fill_payload, mcq_payload, video_payload
from interview_prep.core.clock import ManualClock
from interview_prep.models import Base
from interview_prep.schemas.assessment import (
    FillInBlanksAssessment,
    McqAssessment,
    VideoAssessment,
)
from interview_prep.schemas.assignment import Assignment
from interview_prep.services.assignment_lifecycle import AssignmentLifecycle
from interview_prep.services.storage import InMemoryAssignmentStore


@pytest.fixture()
def clock():
    return ManualClock(T0)


@pytest.fixture()
def store():
    memory = InMemoryAssignmentStore()
    memory.add_assessment(McqAssessment.model_validate(mcq_payload()))
    memory.add_assessment(FillInBlanksAssessment.model_validate(fill_payload()))
    memory.add_assessment(VideoAssessment.model_validate(video_payload()))
    return memory


@pytest.fixture()
def lifecycle(store, clock):
    return AssignmentLifecycle(store, clock)


@pytest.fixture()
def new_assignment(store):
    async def _create(assessment_id: int, candidate_id: int = CANDIDATE_ID) -> Assignment:
        return await store.save_assignment(Assignment(candidate_id=candidate_id, assessment_id=assessment_id))

    return _create


@pytest.fixture()
async def async_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
async def db_session(async_engine):
    session_factory = async_sessionmaker(bind=async_engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session
        await session.rollback()
