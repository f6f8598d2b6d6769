"""Readiness polling configuration."""

from pydantic import Field
from pydantic_settings import BaseSettings


class WaitConfig(BaseSettings):
    """Timeouts and poll intervals used by the readiness engine."""

    wait_timeout: float = Field(default=60.0, gt=0, le=3600, alias="wait_timeout")
    wait_port_poll_interval: float = Field(
        default=0.5, gt=0, le=60, alias="wait_port_poll_interval"
    )
    wait_poll_interval: float = Field(
        default=1.0, gt=0, le=60, alias="wait_poll_interval"
    )
    wait_tcp_connect_timeout: float = Field(
        default=0.5, gt=0, le=30, alias="wait_tcp_connect_timeout"
    )

    class Config:
        env_prefix = ""
        extra = "ignore"
