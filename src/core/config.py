"""Runtime configuration model for SortMerge.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_FIELDS,
    DEFAULT_MAX_OUTPUT_RECORDS,
    SUPPORTED_LOG_LEVELS,
    UNLIMITED_OUTPUT_TOKENS,
)
from core.errors import SortMergeConfigError


@dataclass(frozen=True)
class SortMergeConfig:
    """Validated runtime configuration.

    Attributes:
        max_fields: Maximum number of fields captured per record.
        max_output_records: Per-join output ceiling, or ``None`` for no limit.
        log_level: Minimum structlog level name.
    """

    max_fields: int = DEFAULT_MAX_FIELDS
    max_output_records: int | None = DEFAULT_MAX_OUTPUT_RECORDS
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "SortMergeConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            SortMergeConfigError: If environment values are invalid.
        """
        max_fields_value = os.getenv("SORTMERGE_MAX_FIELDS", str(DEFAULT_MAX_FIELDS))
        max_output_value = os.getenv(
            "SORTMERGE_MAX_OUTPUT_RECORDS", str(DEFAULT_MAX_OUTPUT_RECORDS)
        )
        log_level_value = os.getenv("SORTMERGE_LOG_LEVEL", DEFAULT_LOG_LEVEL)
        return cls(
            max_fields=parse_positive_int("SORTMERGE_MAX_FIELDS", max_fields_value),
            max_output_records=parse_output_ceiling(
                "SORTMERGE_MAX_OUTPUT_RECORDS", max_output_value
            ),
            log_level=_parse_log_level(log_level_value),
        )


def parse_positive_int(name: str, raw_value: str) -> int:
    """Parse a strictly positive integer setting.

    Args:
        name: Setting name used in error messages.
        raw_value: Raw string value.

    Returns:
        Parsed integer.

    Raises:
        SortMergeConfigError: If value is not a positive integer.
    """
    try:
        value = int(raw_value)
    except ValueError as error:
        raise SortMergeConfigError(
            f"Invalid {name} value: expected integer, got '{raw_value}'. "
            f"Set {name} to a positive number."
        ) from error
    if value < 1:
        raise SortMergeConfigError(
            f"Invalid {name} value: expected a positive integer, got {value}. "
            f"Set {name} to 1 or more."
        )
    return value


def parse_output_ceiling(name: str, raw_value: str) -> int | None:
    """Parse an output ceiling that may be disabled.

    Args:
        name: Setting name used in error messages.
        raw_value: Raw string value, a positive integer or ``none``.

    Returns:
        Parsed ceiling, or ``None`` when disabled.

    Raises:
        SortMergeConfigError: If value is neither a positive integer nor ``none``.
    """
    if raw_value.strip().lower() in UNLIMITED_OUTPUT_TOKENS:
        return None
    return parse_positive_int(name, raw_value)


def _parse_log_level(raw_value: str) -> str:
    """Validate the log level environment value."""
    level = raw_value.strip().lower()
    if level not in SUPPORTED_LOG_LEVELS:
        raise SortMergeConfigError(
            f"Invalid SORTMERGE_LOG_LEVEL value: '{raw_value}'. "
            f"Supported levels: {', '.join(SUPPORTED_LOG_LEVELS)}."
        )
    return level
