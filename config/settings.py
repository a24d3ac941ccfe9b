"""Application settings and configuration management."""
from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or defaults."""

    LLM_CONFIG_PATH: str = Field(default="app_config.json")
    CHECKPOINT_DIR: Optional[str] = None

    GENERATION_TIMEOUT_S: float = Field(default=20.0, gt=0)
    EVALUATION_TIMEOUT_S: float = Field(default=20.0, gt=0)
    JOB_PARSE_TIMEOUT_S: float = Field(default=20.0, gt=0)

    MAX_TOTAL_QUESTIONS: int = Field(default=20, ge=1)
    DEFAULT_TIME_LIMIT_S: int = 240
    DEFAULT_MAX_SCORE: int = 10
    DEEPEN_SCORE_THRESHOLD: float = 7.0
    MAX_QUESTIONS_PER_TOPIC: int = 3
    HISTORY_WINDOW: int = 3

    model_config = SettingsConfigDict(env_file=".env", validate_assignment=True, extra="ignore")


settings = Settings()
