# config/settings.py
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List, Tuple
from enum import Enum
from dotenv import load_dotenv

from kubepulse.workloads.kinds import DEFAULT_KINDS, ResourceKind

# Load .env file explicitly
load_dotenv()


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    JSON = "json"
    TEXT = "text"


class KubernetesSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="K8S_")

    kubeconfig_path: Optional[str] = Field(None, description="Path to kubeconfig file")
    context: Optional[str] = Field(None, description="Kubernetes context to use")
    namespace: str = Field("default", description="Default Kubernetes namespace")
    call_timeout_seconds: float = Field(120.0, gt=0, description="Timeout for a single API call")
    retry_attempts: int = Field(3, ge=1, description="Attempts per API call on transport errors")


class WorkloadSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="WORKLOAD_")

    kinds: List[str] = Field(
        default_factory=lambda: [str(k) for k in DEFAULT_KINDS],
        description="Kinds to list, in display order",
    )
    allow_empty_kinds: List[str] = Field(
        default_factory=list,
        description="Kinds whose empty listings are skipped instead of failing",
    )
    strict: bool = Field(False, description="Raise on missing or mistyped columns")

    def resolved_kinds(self) -> Tuple[ResourceKind, ...]:
        return tuple(ResourceKind.parse(k) for k in self.kinds)

    def resolved_allow_empty_kinds(self) -> Tuple[ResourceKind, ...]:
        return tuple(ResourceKind.parse(k) for k in self.allow_empty_kinds)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    debug: bool = Field(False, description="Debug mode")
    log_level: LogLevel = Field(LogLevel.INFO, description="Log level")
    log_format: LogFormat = Field(LogFormat.TEXT, description="Log format (json or text)")
    log_config_path: Optional[str] = Field(None, description="YAML logging dictConfig file")

    kubernetes: KubernetesSettings = Field(default_factory=lambda: KubernetesSettings())
    workloads: WorkloadSettings = Field(default_factory=lambda: WorkloadSettings())

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        if isinstance(v, str):
            return LogLevel(v.upper())
        return v

    @field_validator('log_format', mode='before')
    @classmethod
    def validate_log_format(cls, v):
        if isinstance(v, str):
            return LogFormat(v.lower())
        return v

    @classmethod
    def create_from_env(cls) -> "Settings":
        """Create settings instance from environment variables."""
        return cls()
