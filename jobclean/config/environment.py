"""Environment variable loading and validation."""

import os
from typing import Any, Dict, List, Optional

from .exceptions import ConfigurationError
from .models import AppConfig, LogFormat, LogLevel

VALID_ENVIRONMENTS = ("local", "development", "staging", "production", "test")


class EnvironmentConfig:
    """Environment variable configuration holder.

    Unset variables are None and leave the file configuration untouched.
    """

    def __init__(
        self,
        environment: Optional[str] = None,
        log_level: Optional[str] = None,
        log_format: Optional[str] = None,
        preview_max_length: Optional[int] = None,
        cleaner_cache_size: Optional[int] = None,
    ):
        self.environment = environment or "local"
        self.log_level = log_level
        self.log_format = log_format
        self.preview_max_length = preview_max_length
        self.cleaner_cache_size = cleaner_cache_size

    def apply_to(self, app_config: AppConfig) -> AppConfig:
        """Return a copy of app_config with environment overrides applied.

        Args:
            app_config: Configuration loaded from file (or defaults)

        Returns:
            New AppConfig, validated again after the overrides
        """
        data: Dict[str, Any] = app_config.model_dump()

        if self.log_level:
            data["logging"]["level"] = self.log_level
        if self.log_format:
            data["logging"]["format"] = self.log_format
        if self.preview_max_length is not None:
            data["preview"]["max_length"] = self.preview_max_length
        if self.cleaner_cache_size is not None:
            data["cleaning"]["cache_size"] = self.cleaner_cache_size

        return AppConfig.model_validate(data)


def _read_int(name: str, errors: List[str], minimum: int = 0) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None

    try:
        value = int(raw.strip())
    except ValueError:
        errors.append(f"Invalid {name}: '{raw}'. Must be a valid integer.")
        return None

    if value < minimum:
        errors.append(f"Invalid {name}: {value}. Must be >= {minimum}.")
        return None
    return value


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    All variables are optional:
    - ENVIRONMENT: Environment label for logs (local, development, staging, production, test)
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - LOG_FORMAT: Override log format (json, key-value)
    - PREVIEW_MAX_LENGTH: Override preview length
    - CLEANER_CACHE_SIZE: Override cleaned-description cache size (0 disables it)

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If a variable is set to an invalid value
    """
    errors: List[str] = []

    environment = os.getenv("ENVIRONMENT")
    log_level = os.getenv("LOG_LEVEL")
    log_format = os.getenv("LOG_FORMAT")

    if environment and environment.lower() not in VALID_ENVIRONMENTS:
        errors.append(
            f"Invalid ENVIRONMENT: '{environment}'. Must be one of: {', '.join(VALID_ENVIRONMENTS)}"
        )

    if log_level:
        valid_levels = [level.value for level in LogLevel]
        if log_level.upper() not in valid_levels:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(valid_levels)}"
            )

    if log_format:
        valid_formats = [fmt.value for fmt in LogFormat]
        if log_format.lower() not in valid_formats:
            errors.append(
                f"Invalid LOG_FORMAT: '{log_format}'. Must be one of: {', '.join(valid_formats)}"
            )

    preview_max_length = _read_int("PREVIEW_MAX_LENGTH", errors, minimum=20)
    cleaner_cache_size = _read_int("CLEANER_CACHE_SIZE", errors, minimum=0)

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Check the variables set in your shell or .env file",
                "Unset a variable to fall back to the configuration file",
            ],
        )

    return EnvironmentConfig(
        environment=environment.lower() if environment else None,
        log_level=log_level.upper() if log_level else None,
        log_format=log_format.lower() if log_format else None,
        preview_max_length=preview_max_length,
        cleaner_cache_size=cleaner_cache_size,
    )
