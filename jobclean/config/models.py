"""Configuration schema models using Pydantic."""

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class CleaningConfig(BaseModel):
    """Description cleaning settings."""

    cache_size: int = Field(
        1024, ge=0, le=1_000_000, description="Cleaned descriptions kept in memory (0 = no cache)"
    )


class PreviewConfig(BaseModel):
    """Job card preview settings."""

    max_length: int = Field(
        250, ge=20, le=5000, description="Maximum preview length before the '...' suffix"
    )


class BatchConfig(BaseModel):
    """Batch normalization settings."""

    max_workers: int = Field(4, ge=1, le=64, description="Worker threads for batch cleaning")
    min_description_length: int = Field(
        50, ge=0, description="Listings with a shorter trimmed description are dropped"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    @field_validator("level", mode="before")
    @classmethod
    def uppercase_level(cls, v):
        """Accept log levels in any case."""
        return v.upper() if isinstance(v, str) else v

    model_config = {"use_enum_values": True}


class AppConfig(BaseModel):
    """Root configuration object for the job description cleaner.

    Every section has defaults, so an empty configuration is valid.
    """

    cleaning: CleaningConfig = Field(
        default_factory=CleaningConfig, description="Cleaning settings"
    )
    preview: PreviewConfig = Field(default_factory=PreviewConfig, description="Preview settings")
    batch: BatchConfig = Field(default_factory=BatchConfig, description="Batch settings")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
