"""Public SDK surface for lambda prune.

This module provides a stable import path for library users.
It re-exports the primary client and typed models.
"""

from __future__ import annotations

from core.config import PruneConfig
from core.errors import (
    PruneConfigError,
    PruneDeletionError,
    PruneError,
    PruneRetrievalError,
)
from core.types import (
    AliasReference,
    DeletionOutcome,
    DeletionReport,
    PruneOptions,
    PruneResult,
    RetentionDecision,
    VersionRecord,
)
from retention.prune_sdk import PruneClient
from retention.retention_planner import plan_retention

__all__ = [
    "AliasReference",
    "DeletionOutcome",
    "DeletionReport",
    "PruneClient",
    "PruneConfig",
    "PruneConfigError",
    "PruneDeletionError",
    "PruneError",
    "PruneOptions",
    "PruneResult",
    "PruneRetrievalError",
    "RetentionDecision",
    "VersionRecord",
    "plan_retention",
]
