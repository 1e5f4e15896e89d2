"""Configuration management using pydantic-settings."""

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class IndxAPISettings(BaseSettings):
    """Remote Indx search API configuration."""

    model_config = SettingsConfigDict(env_prefix="INDX_", case_sensitive=False)

    url: str = Field(
        default="https://api.indx.co/api/",
        description="Indx API base URL (local instances: http://localhost:38171/api/). Env var: INDX_URL",
    )
    api_token: Optional[str] = Field(
        default=None,
        description="Bearer token sent as Authorization header. Env var: INDX_API_TOKEN",
    )
    timeout: float = Field(
        default=30.0, description="Request timeout in seconds. Env var: INDX_TIMEOUT"
    )
    heap_id: str = Field(
        default="0", description="Default heap (dataset) identifier. Env var: INDX_HEAP_ID"
    )
    configuration: str = Field(
        default="100",
        description="Heap configuration used when creating a heap. Env var: INDX_CONFIGURATION",
    )

    @property
    def is_authenticated(self) -> bool:
        """Check if a bearer token is configured."""
        return bool(self.api_token)


class SegmentationSettings(BaseSettings):
    """Line segmentation configuration."""

    model_config = SettingsConfigDict(env_prefix="SEGMENT_", case_sensitive=False)

    enabled: bool = Field(
        default=True, description="Split long lines into segments. Env var: SEGMENT_ENABLED"
    )
    target_length: int = Field(
        default=80,
        description="Desired segment length in characters. Env var: SEGMENT_TARGET_LENGTH",
    )

    @field_validator("target_length")
    @classmethod
    def validate_target_length(cls, v: int) -> int:
        """Validate target length."""
        if v <= 0:
            raise ValueError("Segment target length must be > 0")
        return v


class UploadSettings(BaseSettings):
    """Chunked upload configuration."""

    model_config = SettingsConfigDict(env_prefix="UPLOAD_", case_sensitive=False)

    chunk_size: int = Field(
        default=100_000,
        description="Document records per ingestion request. Env var: UPLOAD_CHUNK_SIZE",
    )
    progress_step: int = Field(
        default=1_000,
        description="Records between progress updates within a batch. Env var: UPLOAD_PROGRESS_STEP",
    )
    skip_blank_lines: bool = Field(
        default=False,
        description="Drop whitespace-only source lines before segmentation. Env var: UPLOAD_SKIP_BLANK_LINES",
    )

    @field_validator("chunk_size", "progress_step")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Validate batch sizing."""
        if v <= 0:
            raise ValueError("Upload sizes must be > 0")
        return v


class MonitorSettings(BaseSettings):
    """Indexing progress monitor configuration."""

    model_config = SettingsConfigDict(env_prefix="MONITOR_", case_sensitive=False)

    poll_interval: float = Field(
        default=0.1,
        description="Seconds between state polls while indexing. Env var: MONITOR_POLL_INTERVAL",
    )
    timeout: Optional[float] = Field(
        default=None,
        description="Give up monitoring after this many seconds (None = no limit). Env var: MONITOR_TIMEOUT",
    )


class DataSettings(BaseSettings):
    """Predefined dataset location."""

    model_config = SettingsConfigDict(env_prefix="DATA_", case_sensitive=False)

    directory: Path = Field(
        default=Path("data"),
        description="Directory holding predefined .txt datasets. Env var: DATA_DIRECTORY",
    )


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(
        default="heap-ingestion", description="Application name. Env var: APP_NAME"
    )
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment. Env var: ENVIRONMENT",
    )
    debug: bool = Field(default=False, description="Enable debug mode. Env var: DEBUG")
    log_level: str = Field(
        default="INFO", description="Logging level. Env var: LOG_LEVEL"
    )

    # Sub-settings
    indx: Optional[IndxAPISettings] = None
    segmentation: Optional[SegmentationSettings] = None
    upload: Optional[UploadSettings] = None
    monitor: Optional[MonitorSettings] = None
    data: Optional[DataSettings] = None

    @model_validator(mode="after")
    def initialize_nested_settings(self) -> "Settings":
        """Initialize nested settings to ensure they read from environment."""
        if self.indx is None:
            self.indx = IndxAPISettings()
        if self.segmentation is None:
            self.segmentation = SegmentationSettings()
        if self.upload is None:
            self.upload = UploadSettings()
        if self.monitor is None:
            self.monitor = MonitorSettings()
        if self.data is None:
            self.data = DataSettings()
        return self

    @field_validator("environment", mode="before")
    @classmethod
    def parse_environment(cls, v):
        """Parse environment from string."""
        if isinstance(v, str):
            try:
                return Environment(v.lower())
            except ValueError:
                return Environment.DEVELOPMENT
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
