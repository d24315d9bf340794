from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from interview_prep.core.clock import Clock, SystemClock
from interview_prep.db.session import get_session
from interview_prep.services.assignment_lifecycle import AssignmentLifecycle
from interview_prep.services.sql_storage import SqlAssignmentStore
from interview_prep.services.storage import AssignmentStore


async def get_db_session() -> AsyncSession:
    async for session in get_session():
        yield session


async def get_store(session: AsyncSession = Depends(get_db_session)) -> AssignmentStore:
    return SqlAssignmentStore(session)


def get_clock() -> Clock:
    return SystemClock()


async def get_lifecycle(
    store: AssignmentStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
) -> AssignmentLifecycle:
    return AssignmentLifecycle(store, clock)
