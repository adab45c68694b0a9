"""Python SDK for version retention operations.

This module exposes high-level APIs to inspect a function's versions,
preview a retention plan, and prune versions outside the window.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from core.config import PruneConfig
from core.deadline import RunDeadline
from core.types import PruneOptions, PruneResult, RetentionDecision, VersionInventory
from retention.pipeline import build_prune_options, fetch_inventory, run_prune
from retention.retention_planner import plan_retention
from store.lambda_client import create_lambda_client


class PruneClient:
    """Primary SDK entry point for retention workflows."""

    def __init__(self, config: PruneConfig | None = None, lambda_client: Any | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            lambda_client: Optional prebuilt Lambda client, mainly for tests.
        """
        self._config = config or PruneConfig.from_env()
        self._lambda_client = lambda_client

    @property
    def config(self) -> PruneConfig:
        return self._config

    def with_overrides(self, **changes: Any) -> "PruneClient":
        """Clone the client with updated config fields.

        Args:
            changes: PruneConfig field overrides.

        Returns:
            New SDK client sharing the same Lambda client.
        """
        return PruneClient(replace(self._config, **changes), self._lambda_client)

    def inventory(self, function_name: str) -> VersionInventory:
        """Retrieve aliases and ordered versions of a function.

        Args:
            function_name: Function name or ARN.

        Returns:
            Inventory used for planning.
        """
        deadline = RunDeadline(self._config.deadline_seconds)
        return fetch_inventory(self._client(), function_name, deadline)

    def plan(self, function_name: str, number_to_keep: object) -> RetentionDecision:
        """Preview the retention decision without deleting anything.

        Args:
            function_name: Function name or ARN.
            number_to_keep: Newest unreferenced versions to keep.

        Returns:
            Retention decision.
        """
        options = build_prune_options(function_name, number_to_keep, dry_run=True)
        inventory = self.inventory(options.function_name)
        return plan_retention(
            inventory.catalog,
            inventory.referenced_version_ids,
            options.number_to_keep,
        )

    def prune(self, options: PruneOptions) -> PruneResult:
        """Delete versions outside the retention window.

        Args:
            options: Run inputs.

        Returns:
            Run summary. Per-version failures are in ``result.report``.
        """
        validated = build_prune_options(options.function_name, options.number_to_keep, options.dry_run)
        return run_prune(self._client(), validated, self._config)

    def _client(self) -> Any:
        if self._lambda_client is None:
            self._lambda_client = create_lambda_client(self._config)
        return self._lambda_client
