"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List

KNOWN_SECTIONS = ("cleaning", "preview", "batch", "logging")


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for potential issues and return warnings.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    for key in config_dict:
        if key not in KNOWN_SECTIONS:
            warning_messages.append(f"Unknown configuration section '{key}' will be ignored")

    cleaning = config_dict.get("cleaning", {})
    if isinstance(cleaning, dict) and cleaning.get("cache_size") == 0:
        warning_messages.append("cache_size is 0: every description will be cleaned from scratch")

    preview = config_dict.get("preview", {})
    if isinstance(preview, dict):
        max_length = preview.get("max_length")
        if isinstance(max_length, int) and 20 <= max_length < 80:
            warning_messages.append(
                f"Short preview max_length ({max_length}) will cut most previews mid-sentence"
            )

    batch = config_dict.get("batch", {})
    if isinstance(batch, dict):
        max_workers = batch.get("max_workers")
        if isinstance(max_workers, int) and max_workers > 32:
            warning_messages.append(
                f"Large max_workers ({max_workers}) adds thread overhead for CPU-bound cleaning"
            )

        min_length = batch.get("min_description_length")
        if isinstance(min_length, int) and min_length > 500:
            warning_messages.append(
                f"Large min_description_length ({min_length}) may drop most listings"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
