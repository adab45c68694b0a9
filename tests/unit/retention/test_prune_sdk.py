"""Unit tests for the SDK client."""

from __future__ import annotations

import pytest

from core.config import PruneConfig
from core.errors import PruneConfigError
from core.types import PruneOptions
from lambda_prune import PruneClient as PublicPruneClient
from retention.prune_sdk import PruneClient
from tests.fake_lambda import FakeLambdaClient


def test_public_module_reexports_sdk_client() -> None:
    """The top-level module should expose the same client class."""
    assert PublicPruneClient is PruneClient


def test_plan_previews_without_deleting(ten_versions, scenario_aliases) -> None:
    """plan should return the decision and leave versions in place."""
    lambda_client = FakeLambdaClient(versions=ten_versions, aliases=scenario_aliases)
    client = PruneClient(PruneConfig(), lambda_client)

    decision = client.plan("demo-fn", "2")

    assert decision.version_ids == ("1", "2", "3", "4", "5", "7")
    assert lambda_client.deleted == []


def test_prune_uses_injected_client(ten_versions, scenario_aliases) -> None:
    """prune should run against the injected Lambda client."""
    lambda_client = FakeLambdaClient(versions=ten_versions, aliases=scenario_aliases)
    client = PruneClient(PruneConfig(max_workers=2), lambda_client)

    result = client.prune(PruneOptions("demo-fn", 4))

    assert result.removed_count == 4 and lambda_client.max_in_flight <= 2


def test_with_overrides_keeps_client_and_validates(ten_versions) -> None:
    """Overrides should produce a new validated config."""
    client = PruneClient(PruneConfig(), FakeLambdaClient(versions=ten_versions))

    assert client.with_overrides(max_workers=9).config.max_workers == 9
    with pytest.raises(PruneConfigError):
        client.with_overrides(max_workers=0)


def test_inventory_lists_catalog_oldest_first(ten_versions) -> None:
    """inventory should return the ordered catalog including $LATEST."""
    client = PruneClient(PruneConfig(), FakeLambdaClient(versions=ten_versions, page_size=2))

    inventory = client.inventory("demo-fn")

    assert [record.version_id for record in inventory.catalog][:3] == ["1", "2", "3"]
    assert inventory.catalog[-1].version_id == "$LATEST"
