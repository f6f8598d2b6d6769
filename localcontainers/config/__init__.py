"""Configuration management for localcontainers.

A single Settings class reads environment variables (and an optional
``.env`` file) and exposes grouped views for each subsystem.

Usage:
    from localcontainers.config import settings

    # Grouped access
    settings.docker.socket_path()
    settings.wait.wait_poll_interval

    # Flat access
    settings.docker_api_version
    settings.log_level
"""

from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .docker import DockerConfig
from .logging import LoggingConfig
from .wait import WaitConfig


class Settings(BaseSettings):
    """Library settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Docker engine
    docker_host: Optional[str] = Field(default=None)
    docker_socket_path: str = Field(default="/var/run/docker.sock")
    docker_api_version: str = Field(default="v1.47")
    docker_request_timeout: float = Field(default=30.0, gt=0, le=600)
    docker_pull_timeout: float = Field(default=300.0, gt=0, le=3600)
    docker_stop_timeout: int = Field(default=10, ge=0, le=600)
    docker_max_response_mb: int = Field(default=10, ge=1, le=1024)
    container_host: str = Field(default="127.0.0.1")

    # Readiness
    wait_timeout: float = Field(default=60.0, gt=0, le=3600)
    wait_port_poll_interval: float = Field(default=0.5, gt=0, le=60)
    wait_poll_interval: float = Field(default=1.0, gt=0, le=60)
    wait_tcp_connect_timeout: float = Field(default=0.5, gt=0, le=30)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")

    @validator("docker_host")
    def validate_docker_host(cls, v):
        """Only Unix socket engines are supported."""
        if v and not v.startswith("unix://"):
            raise ValueError("docker_host must be a unix:// URL")
        return v

    @validator("docker_api_version")
    def normalize_api_version(cls, v):
        """Accept the version with or without its leading 'v'."""
        v = v.strip().strip("/")
        return v if v.startswith("v") else f"v{v}"

    @validator("log_format")
    def validate_log_format(cls, v):
        if v not in ("json", "console"):
            raise ValueError("log_format must be 'json' or 'console'")
        return v

    # ========================================================================
    # GROUPED CONFIG ACCESS
    # ========================================================================

    @property
    def docker(self) -> DockerConfig:
        """Access Docker engine configuration group."""
        return DockerConfig(
            docker_host=self.docker_host,
            docker_socket_path=self.docker_socket_path,
            docker_api_version=self.docker_api_version,
            docker_request_timeout=self.docker_request_timeout,
            docker_pull_timeout=self.docker_pull_timeout,
            docker_stop_timeout=self.docker_stop_timeout,
            docker_max_response_mb=self.docker_max_response_mb,
            container_host=self.container_host,
        )

    @property
    def wait(self) -> WaitConfig:
        """Access readiness configuration group."""
        return WaitConfig(
            wait_timeout=self.wait_timeout,
            wait_port_poll_interval=self.wait_port_poll_interval,
            wait_poll_interval=self.wait_poll_interval,
            wait_tcp_connect_timeout=self.wait_tcp_connect_timeout,
        )

    @property
    def logging(self) -> LoggingConfig:
        """Access logging configuration group."""
        return LoggingConfig(log_level=self.log_level, log_format=self.log_format)


# Global settings instance
settings = Settings()

__all__ = [
    "Settings",
    "settings",
    "DockerConfig",
    "WaitConfig",
    "LoggingConfig",
]
