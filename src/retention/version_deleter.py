"""Concurrent version deletion.

This module issues one delete request per planned version through a
bounded thread pool. A failed deletion never aborts the rest of the batch;
every attempt ends up as an outcome in the returned report.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Any, Sequence

from botocore.exceptions import BotoCoreError, ClientError

from core.constants import DEFAULT_MAX_WORKERS
from core.deadline import RunDeadline
from core.logging_config import get_logger
from core.types import DeletionOutcome, DeletionReport

logger = get_logger(__name__)

DEADLINE_DETAIL = "deadline exceeded before deletion completed"


class VersionDeleter:
    """Delete function versions with a bounded worker pool."""

    def __init__(
        self,
        lambda_client: Any,
        max_workers: int = DEFAULT_MAX_WORKERS,
        deadline: RunDeadline | None = None,
    ) -> None:
        """Create deleter.

        Args:
            lambda_client: Boto3 Lambda client or compatible double.
            max_workers: Maximum number of concurrent delete requests.
            deadline: Optional run deadline bounding the whole batch.
        """
        self._client = lambda_client
        self._max_workers = max_workers
        self._deadline = deadline

    def delete_all(self, function_name: str, version_ids: Sequence[str]) -> DeletionReport:
        """Delete every listed version and collect per-item outcomes.

        Args:
            function_name: Function name or ARN.
            version_ids: Versions to delete.

        Returns:
            Report with one outcome per version, in input order. Items that
            had not finished when the deadline passed are reported as errors.
        """
        if not version_ids:
            return DeletionReport(function_name=function_name, outcomes=())
        if self._expired():
            outcomes = tuple(_deadline_outcome(function_name, version_id) for version_id in version_ids)
            return DeletionReport(function_name=function_name, outcomes=outcomes)
        executor = ThreadPoolExecutor(
            max_workers=self._max_workers,
            thread_name_prefix="prune-delete",
        )
        timeout = None if self._deadline is None else self._deadline.remaining()
        submitted: list[tuple[str, Future[DeletionOutcome]]] = []
        try:
            for version_id in version_ids:
                future = executor.submit(self._delete_one, function_name, version_id)
                submitted.append((version_id, future))
            _, not_done = wait([future for _, future in submitted], timeout=timeout)
        except BaseException:
            executor.shutdown(wait=False, cancel_futures=True)
            raise
        executor.shutdown(wait=not not_done, cancel_futures=True)
        outcomes = tuple(
            _collect_outcome(function_name, version_id, future, future in not_done)
            for version_id, future in submitted
        )
        return DeletionReport(function_name=function_name, outcomes=outcomes)

    def _expired(self) -> bool:
        return self._deadline is not None and self._deadline.expired()

    def _delete_one(self, function_name: str, version_id: str) -> DeletionOutcome:
        if self._expired():
            return _deadline_outcome(function_name, version_id)
        logger.info("deleting_version", function_name=function_name, version_id=version_id)
        try:
            self._client.delete_function(FunctionName=function_name, Qualifier=version_id)
        except (BotoCoreError, ClientError) as error:
            logger.error(
                "version_delete_failed",
                function_name=function_name,
                version_id=version_id,
                error=str(error),
            )
            return DeletionOutcome(version_id=version_id, status="error", detail=str(error))
        logger.info("version_deleted", function_name=function_name, version_id=version_id)
        return DeletionOutcome(version_id=version_id, status="success")


def _collect_outcome(
    function_name: str,
    version_id: str,
    future: Future[DeletionOutcome],
    unfinished: bool,
) -> DeletionOutcome:
    if unfinished:
        return _deadline_outcome(function_name, version_id)
    error = future.exception()
    if error is not None:
        logger.error(
            "version_delete_failed",
            function_name=function_name,
            version_id=version_id,
            error=repr(error),
        )
        return DeletionOutcome(version_id=version_id, status="error", detail=repr(error))
    return future.result()


def _deadline_outcome(function_name: str, version_id: str) -> DeletionOutcome:
    logger.warning(
        "version_delete_cancelled",
        function_name=function_name,
        version_id=version_id,
        reason=DEADLINE_DETAIL,
    )
    return DeletionOutcome(version_id=version_id, status="error", detail=DEADLINE_DETAIL)
