"""Paginated version catalog.

This module follows ListVersionsByFunction continuation markers until the
store reports no further pages, then returns a deterministic time-ordered
catalog. Records that cannot be placed in that order are rejected rather
than assigned a fabricated timestamp.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from botocore.exceptions import BotoCoreError, ClientError

from core.constants import LAST_MODIFIED_FORMAT
from core.deadline import RunDeadline
from core.errors import PruneCatalogError, PruneRetrievalError
from core.logging_config import get_logger
from core.types import VersionRecord

logger = get_logger(__name__)


class VersionCatalog:
    """Complete, ordered version history of a function."""

    def __init__(self, lambda_client: Any, deadline: RunDeadline | None = None) -> None:
        """Create catalog reader.

        Args:
            lambda_client: Boto3 Lambda client or compatible double.
            deadline: Optional run deadline checked before each page request.
        """
        self._client = lambda_client
        self._deadline = deadline

    def fetch_all(self, function_name: str) -> tuple[VersionRecord, ...]:
        """Retrieve every version of a function, oldest first.

        Args:
            function_name: Function name or ARN.

        Returns:
            Records ordered by last-modified time, then version id.

        Raises:
            PruneRetrievalError: If any page cannot be retrieved.
            PruneCatalogError: If any record lacks a usable version id or timestamp.
            PruneDeadlineError: If the run deadline passes between pages.
        """
        payloads: list[Mapping[str, Any]] = []
        marker: str | None = None
        page_count = 0
        while True:
            if self._deadline is not None:
                self._deadline.check(f"listing versions of {function_name}")
            response = self._list_version_page(function_name, marker)
            page = response.get("Versions") or ()
            payloads.extend(page)
            page_count += 1
            logger.debug(
                "version_page_fetched",
                function_name=function_name,
                page=page_count,
                record_count=len(page),
            )
            marker = response.get("NextMarker")
            if not marker:
                break
        records = _records_from_payloads(function_name, payloads)
        logger.info(
            "version_catalog_loaded",
            function_name=function_name,
            page_count=page_count,
            version_count=len(records),
        )
        return tuple(sorted(records, key=version_sort_key))

    def _list_version_page(self, function_name: str, marker: str | None) -> Mapping[str, Any]:
        params: dict[str, str] = {"FunctionName": function_name}
        if marker:
            params["Marker"] = marker
        try:
            return self._client.list_versions_by_function(**params)
        except (BotoCoreError, ClientError) as error:
            raise PruneRetrievalError(
                f"Failed to list versions for {function_name}: {error}. "
                "Check AWS credentials and lambda:ListVersionsByFunction permission."
            ) from error


def version_sort_key(record: VersionRecord) -> tuple[datetime, int, int, str]:
    """Total-order key: timestamp, then natural version id order.

    Numeric ids compare as integers and sort before non-numeric ids.
    """
    version_id = record.version_id
    if version_id.isascii() and version_id.isdecimal():
        return (record.last_modified, 0, int(version_id), "")
    return (record.last_modified, 1, 0, version_id)


def parse_last_modified(raw_value: object) -> datetime | None:
    """Parse a LastModified value into an aware UTC datetime.

    Args:
        raw_value: ISO-8601 string as returned by Lambda, or a datetime.

    Returns:
        Parsed timestamp, or ``None`` if the value is missing or unparseable.
    """
    if isinstance(raw_value, datetime):
        parsed = raw_value
    elif isinstance(raw_value, str) and raw_value.strip():
        parsed = _parse_timestamp_text(raw_value.strip())
        if parsed is None:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _parse_timestamp_text(text: str) -> datetime | None:
    try:
        return datetime.strptime(text, LAST_MODIFIED_FORMAT)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None


def _records_from_payloads(
    function_name: str,
    payloads: list[Mapping[str, Any]],
) -> list[VersionRecord]:
    """Convert raw version payloads, rejecting unorderable ones.

    Raises:
        PruneCatalogError: Listing every payload without a usable id or timestamp.
    """
    records: list[VersionRecord] = []
    rejected: list[str] = []
    for payload in payloads:
        version_id = payload.get("Version")
        last_modified = parse_last_modified(payload.get("LastModified"))
        if not version_id:
            rejected.append("<missing version id>")
            continue
        if last_modified is None:
            rejected.append(f"{version_id} (LastModified={payload.get('LastModified')!r})")
            continue
        records.append(VersionRecord(version_id=str(version_id), last_modified=last_modified))
    if rejected:
        raise PruneCatalogError(
            f"Refusing to plan retention for {function_name}: "
            f"{len(rejected)} version record(s) cannot be ordered: {', '.join(rejected)}."
        )
    return records
