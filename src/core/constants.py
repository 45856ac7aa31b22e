"""Core constants used across SortMerge modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

FIELD_DELIMITER = ","
SOURCE_ENCODING = "utf-8"
SOURCE_ENCODING_ERRORS = "surrogateescape"
DEFAULT_MAX_FIELDS = 8
DEFAULT_MAX_OUTPUT_RECORDS = 16_000_000
DEFAULT_LOG_LEVEL = "warning"
SUPPORTED_LOG_LEVELS = ("debug", "info", "warning", "error", "critical")
UNLIMITED_OUTPUT_TOKENS = ("none", "unlimited")
PIPELINE_INPUT_COUNT = 4
VERIFICATION_DIFF_PREVIEW_LIMIT = 10
