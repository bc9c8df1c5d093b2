# core/config.py

"""
Configuration settings for the grade calculator.

Settings are loaded from environment variables prefixed with `GRADE_CALCULATOR_` and from an
optional `.env` file in the working directory.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GRADE_CALCULATOR_",
        env_file=".env",
        extra="ignore",
    )

    STORAGE_DIR: str = Field(
        default="~/Documents/GradeCalculator",
        description="Directory holding the persisted calculator record",
    )
    STORAGE_KEY: str = Field(
        default="gradeCalculatorData",
        min_length=1,
        description="Name of the single persisted record",
    )
    SAVE_DEBOUNCE_SECONDS: float = Field(
        default=0.3,
        ge=0.0,
        description="Quiet period before a burst of edits is written to storage",
    )
    LOG_LEVEL: str = "WARNING"
    LOG_FORMAT: Literal["console", "json"] = "console"


def get_settings() -> Settings:
    return Settings()
