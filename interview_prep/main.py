from __future__ import annotations

import logging

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from interview_prep.api.errors import register_error_handlers
from interview_prep.api.router import api_router
from interview_prep.core.config import settings
from interview_prep.db.session import create_tables
from interview_prep.middleware.logging import RequestLoggingMiddleware

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("iprep")


def create_app() -> FastAPI:
    app = FastAPI(title=settings.app_name, version="0.1.0")

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    @app.get("/health")
    async def health_check():
        return {"status": "ok", "environment": settings.environment}

    app.include_router(api_router)

    @app.on_event("startup")
    async def _create_dev_tables() -> None:
        if settings.environment == "development":
            await create_tables()
            logger.info("development_tables_ready")

    return app


app = create_app()
