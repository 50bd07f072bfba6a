"""Configuration via pydantic-settings — 12-factor app style."""
from __future__ import annotations

import codecs
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """apilog configuration — loaded from env vars / .env file."""

    model_config = SettingsConfigDict(env_prefix="APILOG_", env_file=".env", extra="ignore")

    log_file_path: Path | None = Field(default=None, description="Access log to analyze")
    output_file_path: Path | None = Field(default=None, description="Where the report is written (overwritten)")
    workers: int = Field(default=1, ge=1, description="Worker threads; 1 reads the file sequentially")
    encoding: str = Field(default="utf-8", description="Encoding of the log and report files")
    report_language: Literal["en", "ko"] = Field(default="en", description="Report label wording")
    log_level: LogLevel = Field(default="INFO", description="Diagnostics level for the console")

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError:
            raise ValueError(f"unknown encoding {value!r}") from None
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value
