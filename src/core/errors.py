"""SortMerge exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class SortMergeError(Exception):
    """Base exception for all SortMerge failures."""


class SortMergeConfigError(SortMergeError):
    """Raised for invalid runtime configuration."""


class SortMergeUsageError(SortMergeError):
    """Raised when the join pipeline receives the wrong inputs."""


class SortMergeIngestError(SortMergeError):
    """Raised for source reading and parsing failures."""


class SortMergeJoinError(SortMergeError):
    """Raised for invalid sort or merge-join requests."""


class SortMergeCapacityError(SortMergeJoinError):
    """Raised when a merge-join exceeds its output record ceiling."""


class SortMergeVerificationError(SortMergeError):
    """Raised when output verification cannot be performed."""
