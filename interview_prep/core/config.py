from __future__ import annotations

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from interview_prep.core.paths import resolve_repo_path


def _env_files() -> list[str]:
    env = os.getenv("IP_ENVIRONMENT", "").strip().lower()
    files = [str(resolve_repo_path(".env"))]
    if env and env != "development":
        files.append(str(resolve_repo_path(f".env.{env}")))
    else:
        files.append(str(resolve_repo_path(".env.local")))
    return files


class Settings(BaseSettings):
    app_name: str = "Interview Prep Assessments"
    environment: str = "development"

    database_url: str = "sqlite+aiosqlite:///./interview_prep.db"
    database_echo: bool = False

    # Remaining-time thresholds used when presenting a running timer.
    timer_warning_seconds: int = 60
    timer_critical_seconds: int = 30

    cors_origins: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    model_config = SettingsConfigDict(env_prefix="IP_", env_file=_env_files(), extra="ignore")


settings = Settings()
