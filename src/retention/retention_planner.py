"""Retention set computation.

This module selects the versions to delete: every version that no alias
references and that is not the reserved marker, except the most recent
``keep_count`` of them.
"""

from __future__ import annotations

from typing import AbstractSet, Sequence

from core.constants import RESERVED_VERSION_MARKER
from core.errors import PruneConfigError
from core.logging_config import get_logger
from core.types import RetentionDecision, VersionRecord, VersionStatus
from store.version_catalog import version_sort_key

logger = get_logger(__name__)


def validate_keep_count(value: object) -> int:
    """Validate and normalize the number of versions to keep.

    Args:
        value: Integer, or a string of decimal digits.

    Returns:
        Non-negative keep count.

    Raises:
        PruneConfigError: If value is not a non-negative integer.
    """
    if isinstance(value, bool):
        raise PruneConfigError(f"number_to_keep must be a non-negative integer, got {value!r}.")
    if isinstance(value, int):
        keep_count = value
    elif isinstance(value, str) and _is_ascii_number(value.strip()):
        keep_count = int(value.strip())
    else:
        raise PruneConfigError(
            f"number_to_keep must be a non-negative integer, got {value!r}. "
            "Pass a whole number such as 3."
        )
    if keep_count < 0:
        raise PruneConfigError(f"number_to_keep must be non-negative, got {keep_count}.")
    return keep_count


def plan_retention(
    catalog: Sequence[VersionRecord],
    referenced: AbstractSet[str],
    keep_count: int,
) -> RetentionDecision:
    """Compute the deletion list for one function.

    Args:
        catalog: Version records, any order.
        referenced: Versions referenced by any alias.
        keep_count: Number of newest eligible versions to keep.

    Returns:
        Decision whose ``version_ids`` are the oldest eligible versions.

    Raises:
        PruneConfigError: If keep_count is not a non-negative integer.
    """
    keep_count = validate_keep_count(keep_count)
    ordered = sorted(catalog, key=version_sort_key)
    eligible: list[str] = []
    protected: list[str] = []
    for record in ordered:
        version_id = record.version_id
        if version_id not in referenced and version_id != RESERVED_VERSION_MARKER:
            eligible.append(version_id)
        else:
            protected.append(version_id)
    split_at = max(0, len(eligible) - keep_count)
    decision = RetentionDecision(
        version_ids=tuple(eligible[:split_at]),
        retained_version_ids=tuple(eligible[split_at:]),
        protected_version_ids=tuple(protected),
        keep_count=keep_count,
    )
    logger.info(
        "retention_plan_ready",
        eligible_count=decision.eligible_count,
        protected_count=len(protected),
        keep_count=keep_count,
        selected_for_removal=len(decision.version_ids),
    )
    return decision


def classify_versions(
    catalog: Sequence[VersionRecord],
    referenced: AbstractSet[str],
    decision: RetentionDecision,
) -> tuple[tuple[VersionRecord, VersionStatus], ...]:
    """Label each catalog version with its retention status.

    Args:
        catalog: Version records, any order.
        referenced: Versions referenced by any alias.
        decision: Plan computed for the same catalog.

    Returns:
        ``(record, status)`` pairs, oldest first.
    """
    to_delete = set(decision.version_ids)
    labelled: list[tuple[VersionRecord, VersionStatus]] = []
    for record in sorted(catalog, key=version_sort_key):
        status: VersionStatus
        if record.version_id == RESERVED_VERSION_MARKER:
            status = "reserved"
        elif record.version_id in referenced:
            status = "alias"
        elif record.version_id in to_delete:
            status = "delete"
        else:
            status = "retained"
        labelled.append((record, status))
    return tuple(labelled)


def _is_ascii_number(text: str) -> bool:
    return text.isascii() and text.isdecimal()
