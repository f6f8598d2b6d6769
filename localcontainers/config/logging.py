"""Logging configuration."""

from pydantic import Field
from pydantic_settings import BaseSettings


class LoggingConfig(BaseSettings):
    """structlog output settings."""

    log_level: str = Field(default="INFO", alias="log_level")
    log_format: str = Field(default="console", alias="log_format")

    class Config:
        env_prefix = ""
        extra = "ignore"
