from datetime import datetime

from pydantic import BaseModel, Field


# =============================================================================
#   Payload - /demo/success
# =============================================================================
class StatusData(BaseModel):
    """Liveness payload of the success demo endpoint."""

    message: str
    timestamp: datetime
    status: str = "running"
    version: str


# =============================================================================
#   Payload - /demo/echo
# =============================================================================
class EchoData(BaseModel):
    """Echo of the ``name`` query parameter."""

    input: str
    output: str
    length: int = Field(ge=0)


# =============================================================================
#   Payload - /demo/slow
# =============================================================================
class SlowOperationData(BaseModel):
    message: str
    duration: str


# =============================================================================
#   Payload - /demo/info
# =============================================================================
class RuntimeInfo(BaseModel):
    """Interpreter process facts."""

    processors: int
    pythonVersion: str
    implementation: str
    executable: str


class OsInfo(BaseModel):
    name: str
    release: str
    machine: str


class SystemInfoData(BaseModel):
    """
    System overview returned by the info endpoint.

    Attributes:
        projectName (str): Project name from config.yml.
        version (str): Project version from config.yml.
        author (str): Project author from config.yml.
        runtime (RuntimeInfo): Interpreter facts (CPU count, Python build).
        os (OsInfo): Host operating system facts.
    """

    projectName: str
    version: str
    author: str
    runtime: RuntimeInfo
    os: OsInfo
