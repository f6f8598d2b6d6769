"""Docker engine connection configuration."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class DockerConfig(BaseSettings):
    """Settings for talking to a Docker-compatible engine over its Unix socket."""

    docker_host: Optional[str] = Field(default=None, alias="docker_host")
    docker_socket_path: str = Field(
        default="/var/run/docker.sock", alias="docker_socket_path"
    )
    docker_api_version: str = Field(default="v1.47", alias="docker_api_version")
    docker_request_timeout: float = Field(
        default=30.0, gt=0, le=600, alias="docker_request_timeout"
    )
    docker_pull_timeout: float = Field(
        default=300.0, gt=0, le=3600, alias="docker_pull_timeout"
    )
    docker_stop_timeout: int = Field(
        default=10, ge=0, le=600, alias="docker_stop_timeout"
    )
    docker_max_response_mb: int = Field(
        default=10, ge=1, le=1024, alias="docker_max_response_mb"
    )
    container_host: str = Field(default="127.0.0.1", alias="container_host")

    def socket_path(self) -> str:
        """Resolve the socket path, preferring a ``unix://`` docker_host."""
        if self.docker_host:
            return self.docker_host.replace("unix://", "", 1)
        return self.docker_socket_path

    def max_response_bytes(self) -> int:
        """Response body cap in bytes."""
        return self.docker_max_response_mb * 1024 * 1024

    class Config:
        env_prefix = ""
        extra = "ignore"
