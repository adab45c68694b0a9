"""Lambda prune exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each stage of a prune run raises a specific error type for debuggability.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.types import DeletionOutcome


class PruneError(Exception):
    """Base exception for all prune failures."""


class PruneConfigError(PruneError):
    """Raised for invalid runtime configuration or run inputs."""


class PruneRetrievalError(PruneError):
    """Raised when alias or version listing fails."""


class PruneCatalogError(PruneRetrievalError):
    """Raised when a listed version record cannot be ordered safely."""


class PruneDeadlineError(PruneError):
    """Raised when a run exceeds its overall deadline."""


class PruneDependencyError(PruneError):
    """Raised when a required runtime dependency is missing."""


class PruneDeletionError(PruneError):
    """Raised after a deletion batch when one or more deletions failed."""

    def __init__(self, function_name: str, failures: tuple[DeletionOutcome, ...]) -> None:
        self.function_name = function_name
        self.failures = failures
        details = ", ".join(f"{outcome.version_id} ({outcome.detail})" for outcome in failures)
        super().__init__(
            f"Failed to delete {len(failures)} version(s) of {function_name}: {details}. "
            "Check IAM permissions and re-run to retry the remaining versions."
        )
