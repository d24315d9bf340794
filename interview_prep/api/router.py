from fastapi import APIRouter

from interview_prep.api.routes import assignments

api_router = APIRouter(prefix="/api")
api_router.include_router(assignments.router)
