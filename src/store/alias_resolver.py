"""Alias reference resolution.

This module lists a function's routing aliases and collects every version
they point at, including versions that receive weighted traffic.
"""

from __future__ import annotations

from typing import Any, Mapping

from botocore.exceptions import BotoCoreError, ClientError

from core.deadline import RunDeadline
from core.errors import PruneRetrievalError
from core.logging_config import get_logger
from core.types import AliasReference

logger = get_logger(__name__)


class AliasResolver:
    """Read-only view of the aliases defined on a function."""

    def __init__(self, lambda_client: Any, deadline: RunDeadline | None = None) -> None:
        """Create resolver.

        Args:
            lambda_client: Boto3 Lambda client or compatible double.
            deadline: Optional run deadline checked before each page request.
        """
        self._client = lambda_client
        self._deadline = deadline

    def resolve(self, function_name: str) -> frozenset[str]:
        """Collect all versions referenced by any alias.

        Args:
            function_name: Function name or ARN.

        Returns:
            Primary and weighted version ids across every alias.

        Raises:
            PruneRetrievalError: If alias listing fails.
        """
        referenced: set[str] = set()
        for alias in self.list_references(function_name):
            referenced |= alias.version_ids
        return frozenset(referenced)

    def list_references(self, function_name: str) -> tuple[AliasReference, ...]:
        """List every alias of a function as typed references.

        Args:
            function_name: Function name or ARN.

        Returns:
            Alias references in listing order.

        Raises:
            PruneRetrievalError: If any alias page cannot be retrieved.
            PruneDeadlineError: If the run deadline passes between pages.
        """
        references: list[AliasReference] = []
        marker: str | None = None
        while True:
            if self._deadline is not None:
                self._deadline.check(f"listing aliases of {function_name}")
            response = self._list_alias_page(function_name, marker)
            for payload in response.get("Aliases") or ():
                references.append(_alias_from_payload(payload))
            marker = response.get("NextMarker")
            if not marker:
                break
        logger.info(
            "alias_references_resolved",
            function_name=function_name,
            alias_count=len(references),
        )
        return tuple(references)

    def _list_alias_page(self, function_name: str, marker: str | None) -> Mapping[str, Any]:
        params: dict[str, str] = {"FunctionName": function_name}
        if marker:
            params["Marker"] = marker
        try:
            return self._client.list_aliases(**params)
        except (BotoCoreError, ClientError) as error:
            raise PruneRetrievalError(
                f"Failed to list aliases for {function_name}: {error}. "
                "Check AWS credentials and lambda:ListAliases permission."
            ) from error


def _alias_from_payload(payload: Mapping[str, Any]) -> AliasReference:
    """Build an alias reference from one ListAliases entry.

    Args:
        payload: Raw alias configuration mapping.

    Returns:
        Typed alias reference.
    """
    routing_config = payload.get("RoutingConfig") or {}
    weights = routing_config.get("AdditionalVersionWeights") or {}
    weighted = frozenset(str(version_id) for version_id in weights)
    if weighted:
        logger.debug(
            "alias_weighted_versions",
            alias_name=payload.get("Name"),
            version_ids=sorted(weighted),
        )
    primary = payload.get("FunctionVersion")
    return AliasReference(
        alias_name=str(payload.get("Name", "")),
        primary_version_id=str(primary) if primary else None,
        weighted_version_ids=weighted,
    )
