"""End-to-end prune run orchestration.

This module validates run inputs, retrieves aliases and versions
concurrently, plans the retention set, and dispatches deletions.
Configuration and retrieval failures halt the run before any deletion;
deletion failures are collected into the returned report.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, wait
from typing import Any

from core.config import PruneConfig
from core.constants import RETRIEVAL_WORKERS
from core.deadline import RunDeadline
from core.errors import PruneConfigError, PruneDeadlineError
from core.logging_config import get_logger
from core.types import PruneOptions, PruneResult, VersionInventory
from retention.retention_planner import plan_retention, validate_keep_count
from retention.version_deleter import VersionDeleter
from store.alias_resolver import AliasResolver
from store.version_catalog import VersionCatalog

logger = get_logger(__name__)


def build_prune_options(
    function_name: object,
    number_to_keep: object,
    dry_run: bool = False,
) -> PruneOptions:
    """Validate raw run inputs into prune options.

    Args:
        function_name: Function name or ARN.
        number_to_keep: Keep count as int or decimal string.
        dry_run: Plan without deleting.

    Returns:
        Validated options.

    Raises:
        PruneConfigError: If an input is missing or invalid.
    """
    if not isinstance(function_name, str) or not function_name.strip():
        raise PruneConfigError(
            "function_name is required. Pass --function-name or set INPUT_FUNCTION_NAME."
        )
    if number_to_keep is None:
        raise PruneConfigError(
            "number_to_keep is required. Pass --number-to-keep or set INPUT_NUMBER_TO_KEEP."
        )
    return PruneOptions(
        function_name=function_name.strip(),
        number_to_keep=validate_keep_count(number_to_keep),
        dry_run=dry_run,
    )


def fetch_inventory(
    lambda_client: Any,
    function_name: str,
    deadline: RunDeadline,
) -> VersionInventory:
    """Retrieve aliases and the full version catalog concurrently.

    Args:
        lambda_client: Boto3 Lambda client or compatible double.
        function_name: Function name or ARN.
        deadline: Run deadline bounding both retrievals.

    Returns:
        Complete inventory for planning.

    Raises:
        PruneRetrievalError: If either listing fails.
        PruneDeadlineError: If retrieval does not finish in time.
    """
    deadline.check(f"retrieving versions of {function_name}")
    executor = ThreadPoolExecutor(max_workers=RETRIEVAL_WORKERS, thread_name_prefix="prune-list")
    try:
        alias_future = executor.submit(
            AliasResolver(lambda_client, deadline).list_references,
            function_name,
        )
        catalog_future = executor.submit(
            VersionCatalog(lambda_client, deadline).fetch_all,
            function_name,
        )
        _, not_done = wait([alias_future, catalog_future], timeout=deadline.remaining())
        if not_done:
            raise PruneDeadlineError(
                f"Run deadline of {deadline.seconds:g}s exceeded while listing "
                f"aliases and versions of {function_name}."
            )
        aliases = alias_future.result()
        catalog = catalog_future.result()
    finally:
        executor.shutdown(wait=False, cancel_futures=True)
    return VersionInventory(function_name=function_name, catalog=catalog, aliases=aliases)


def run_prune(lambda_client: Any, options: PruneOptions, config: PruneConfig) -> PruneResult:
    """Run one prune pass for a single function.

    Args:
        lambda_client: Boto3 Lambda client or compatible double.
        options: Validated run inputs.
        config: Runtime configuration.

    Returns:
        Run summary including per-version deletion outcomes.

    Raises:
        PruneConfigError: If options are invalid.
        PruneRetrievalError: If alias or version listing fails.
        PruneDeadlineError: If retrieval exceeds the run deadline.
    """
    options = build_prune_options(options.function_name, options.number_to_keep, options.dry_run)
    deadline = RunDeadline(config.deadline_seconds)
    inventory = fetch_inventory(lambda_client, options.function_name, deadline)
    decision = plan_retention(
        inventory.catalog,
        inventory.referenced_version_ids,
        options.number_to_keep,
    )
    if options.dry_run:
        logger.info(
            "prune_dry_run",
            function_name=options.function_name,
            version_ids=list(decision.version_ids),
        )
        return PruneResult(
            function_name=options.function_name,
            decision=decision,
            report=None,
            dry_run=True,
        )
    deleter = VersionDeleter(lambda_client, max_workers=config.max_workers, deadline=deadline)
    report = deleter.delete_all(options.function_name, decision.version_ids)
    logger.info(
        "prune_finished",
        function_name=options.function_name,
        deleted=report.deleted_count,
        failed=report.failed_count,
    )
    return PruneResult(
        function_name=options.function_name,
        decision=decision,
        report=report,
        dry_run=False,
    )
