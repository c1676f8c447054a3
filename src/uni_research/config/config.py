import ipaddress
import os
from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator

from uni_research.config.constants import PROJECT_ROOT


# =============================================================================
#   LogConfig
# =============================================================================
class LogConfig(BaseModel):
    """Logging configuration."""

    log_level: str
    file_log_level: str
    file_log_dir: str
    file_log_max_files: int
    file_log_file_size_mb: int

    @field_validator("log_level", "file_log_level")
    def check_log_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Unrecognized log level: {v}")
        return v.upper()

    @property
    def resolved_log_dir(self) -> Path:
        """Return absolute path to the log directory, creating it if needed."""
        p = Path(self.file_log_dir)
        if not p.is_absolute():
            p = (PROJECT_ROOT / p).resolve()
        p.mkdir(parents=True, exist_ok=True)
        return p


# =============================================================================
#   ServerConfig
# =============================================================================
class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str
    port: int = Field(gt=0, le=65535)

    @field_validator("host")
    def check_host(cls, v: str) -> str:
        try:
            ipaddress.ip_address(v)
        except ValueError as exc:
            raise ValueError("host must be a valid IP address") from exc
        return v


# =============================================================================
#   AppInfoConfig
# =============================================================================
class AppInfoConfig(BaseModel):
    """Static project metadata reported by the info endpoint."""

    project_name: str
    version: str
    author: str


# =============================================================================
#   CorsConfig
# =============================================================================
class CorsConfig(BaseModel):
    """Cross-origin policy applied to every route.

    Origins are matched by regex: a literal ``*`` origin is not allowed
    together with credentials.
    """

    allow_origin_regex: str = ".*"
    allow_methods: List[str] = Field(
        default_factory=lambda: ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allow_headers: List[str] = Field(default_factory=lambda: ["*"])
    allow_credentials: bool = True
    max_age: int = Field(default=3600, ge=0)

    @field_validator("allow_methods")
    def check_methods(cls, v: List[str]) -> List[str]:
        return [m.strip().upper() for m in v if m.strip()]


# =============================================================================
#   ExecutorConfig
# =============================================================================
class ExecutorConfig(BaseModel):
    """Bounded worker pool used for blocking downstream calls.

    ``max_workers`` defaults to twice the CPU count when omitted.
    """

    max_workers: Optional[int] = Field(default=None, ge=1)
    queue_capacity: int = Field(default=100, ge=0)
    thread_name_prefix: str = "ai-task-"
    await_termination_seconds: float = Field(default=60, gt=0)

    @property
    def resolved_max_workers(self) -> int:
        if self.max_workers is not None:
            return self.max_workers
        return (os.cpu_count() or 1) * 2


# =============================================================================
#   Config  (root)
# =============================================================================
class Config(BaseModel):
    """Root application configuration loaded from config.yml."""

    server: ServerConfig
    logging: LogConfig
    app: AppInfoConfig
    cors: CorsConfig = Field(default_factory=CorsConfig)
    executor: ExecutorConfig = Field(default_factory=ExecutorConfig)

    @classmethod
    def load_from_file(cls, file_path: Union[str, Path]) -> "Config":
        """Load and validate configuration from a YAML file.

        Args:
            file_path: Path to config.yml.

        Returns:
            Validated Config instance.
        """
        file_path = Path(file_path)

        if not file_path.exists() or not file_path.is_file():
            raise FileNotFoundError(f"Config file not found: {file_path}")

        with open(file_path, "r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)

        return cls(**raw)
