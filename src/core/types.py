"""Shared typed models.

This module defines immutable data models used by the store, retention,
SDK, and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from core.errors import PruneDeletionError

DeletionStatus = Literal["success", "error"]
VersionStatus = Literal["alias", "reserved", "retained", "delete"]


@dataclass(frozen=True)
class VersionRecord:
    """One published function version.

    Attributes:
        version_id: Version identifier, unique within a function.
        last_modified: Timezone-aware modification timestamp.
    """

    version_id: str
    last_modified: datetime


@dataclass(frozen=True)
class AliasReference:
    """Versions one routing alias points at.

    Attributes:
        alias_name: Alias name.
        primary_version_id: Version receiving the primary share of traffic.
        weighted_version_ids: Additional versions from weighted routing.
    """

    alias_name: str
    primary_version_id: str | None
    weighted_version_ids: frozenset[str] = frozenset()

    @property
    def version_ids(self) -> frozenset[str]:
        """All versions referenced by this alias."""
        if self.primary_version_id is None:
            return self.weighted_version_ids
        return self.weighted_version_ids | {self.primary_version_id}


@dataclass(frozen=True)
class RetentionDecision:
    """Planner output for one function.

    Attributes:
        version_ids: Versions selected for deletion, oldest first.
        retained_version_ids: Eligible versions kept by the retention window.
        protected_version_ids: Catalog versions excluded from eligibility.
        keep_count: Retention window size used for the plan.
    """

    version_ids: tuple[str, ...]
    retained_version_ids: tuple[str, ...]
    protected_version_ids: tuple[str, ...]
    keep_count: int

    @property
    def eligible_count(self) -> int:
        """Count versions that were candidates for deletion."""
        return len(self.version_ids) + len(self.retained_version_ids)


@dataclass(frozen=True)
class DeletionOutcome:
    """Result of one deletion attempt."""

    version_id: str
    status: DeletionStatus
    detail: str = ""


@dataclass(frozen=True)
class DeletionReport:
    """Aggregated results of one deletion batch."""

    function_name: str
    outcomes: tuple[DeletionOutcome, ...]

    @property
    def deleted_count(self) -> int:
        """Count successful deletions in this report."""
        return sum(1 for outcome in self.outcomes if outcome.status == "success")

    @property
    def failures(self) -> tuple[DeletionOutcome, ...]:
        """Failed outcomes in submission order."""
        return tuple(outcome for outcome in self.outcomes if outcome.status == "error")

    @property
    def failed_count(self) -> int:
        """Count failed deletions in this report."""
        return len(self.failures)

    def raise_for_failures(self) -> None:
        """Raise one aggregate error if any deletion failed.

        Raises:
            PruneDeletionError: If the report holds failed outcomes.
        """
        failures = self.failures
        if failures:
            raise PruneDeletionError(self.function_name, failures)


@dataclass(frozen=True)
class PruneOptions:
    """Per-run prune inputs.

    Attributes:
        function_name: Function whose versions are pruned.
        number_to_keep: Unreferenced versions to preserve, newest first.
        dry_run: Plan and report without deleting.
    """

    function_name: str
    number_to_keep: int
    dry_run: bool = False


@dataclass(frozen=True)
class VersionInventory:
    """Everything retrieved from the store for one function."""

    function_name: str
    catalog: tuple[VersionRecord, ...]
    aliases: tuple[AliasReference, ...]

    @property
    def referenced_version_ids(self) -> frozenset[str]:
        """Union of versions referenced by any alias."""
        referenced: set[str] = set()
        for alias in self.aliases:
            referenced |= alias.version_ids
        return frozenset(referenced)


@dataclass(frozen=True)
class PruneResult:
    """Summary of one prune run."""

    function_name: str
    decision: RetentionDecision
    report: DeletionReport | None
    dry_run: bool

    @property
    def removed_count(self) -> int:
        """Count versions actually deleted."""
        return 0 if self.report is None else self.report.deleted_count

    @property
    def failed_count(self) -> int:
        """Count versions whose deletion failed."""
        return 0 if self.report is None else self.report.failed_count
