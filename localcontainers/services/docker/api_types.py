"""Pydantic models matching the Docker Engine API JSON structures.

Field names follow Docker's capitalisation so bodies map one-to-one.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# Create container


class PortBinding(BaseModel):
    HostIp: Optional[str] = None
    HostPort: Optional[str] = None


class HostConfigBody(BaseModel):
    PortBindings: Optional[Dict[str, List[PortBinding]]] = None
    Binds: Optional[List[str]] = None


class HealthcheckBody(BaseModel):
    """Health check block. Durations are nanoseconds, as the engine requires."""

    Test: Optional[List[str]] = None
    Interval: Optional[int] = None
    Timeout: Optional[int] = None
    Retries: Optional[int] = None
    StartPeriod: Optional[int] = None


class CreateContainerRequest(BaseModel):
    Image: str
    Env: Optional[List[str]] = None
    Cmd: Optional[List[str]] = None
    ExposedPorts: Optional[Dict[str, Dict[str, Any]]] = None
    HostConfig: Optional[HostConfigBody] = None
    Healthcheck: Optional[HealthcheckBody] = None

    def to_body(self) -> Dict[str, Any]:
        """JSON body with unset fields omitted."""
        return self.model_dump(exclude_none=True)


class CreateContainerResponse(BaseModel):
    Id: str
    Warnings: Optional[List[str]] = None


# Inspect container


class HealthInfo(BaseModel):
    Status: str


class StateInfo(BaseModel):
    Status: str
    Running: bool
    Health: Optional[HealthInfo] = None


class NetworkSettingsInfo(BaseModel):
    Ports: Optional[Dict[str, Optional[List[PortBinding]]]] = None


class InspectContainerResponse(BaseModel):
    Id: str
    Name: str
    State: StateInfo
    NetworkSettings: NetworkSettingsInfo = Field(default_factory=NetworkSettingsInfo)


# Pull image


class PullImageProgress(BaseModel):
    """One NDJSON record from the pull stream."""

    status: Optional[str] = None
    id: Optional[str] = None
    progress: Optional[str] = None
    error: Optional[str] = None


class ErrorResponse(BaseModel):
    """Docker's JSON error body."""

    message: str
