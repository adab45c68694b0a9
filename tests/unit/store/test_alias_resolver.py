"""Unit tests for alias reference resolution."""

from __future__ import annotations

import pytest

from core.deadline import RunDeadline
from core.errors import PruneDeadlineError, PruneRetrievalError
from store.alias_resolver import AliasResolver
from tests.fake_lambda import FakeLambdaClient, alias_payload


def test_resolve_collects_primary_and_weighted_versions() -> None:
    """Resolver should union primary targets and weighted routing targets."""
    client = FakeLambdaClient(
        aliases=[
            alias_payload("live", "8", weighted=("6",)),
            alias_payload("canary", "9", weighted=("7", "8")),
        ]
    )

    assert AliasResolver(client).resolve("demo-fn") == frozenset({"6", "7", "8", "9"})


def test_resolve_handles_absent_alias_list() -> None:
    """A response without an Aliases key should resolve to nothing."""
    client = FakeLambdaClient(aliases=None)

    assert AliasResolver(client).resolve("demo-fn") == frozenset()


def test_alias_without_routing_contributes_only_primary() -> None:
    """Aliases without RoutingConfig should contribute their primary target."""
    client = FakeLambdaClient(aliases=[alias_payload("live", "4")])

    references = AliasResolver(client).list_references("demo-fn")

    assert references[0].version_ids == frozenset({"4"})
    assert references[0].weighted_version_ids == frozenset()


def test_resolve_follows_alias_pagination() -> None:
    """Aliases past the first page should still be protected."""
    aliases = [alias_payload(f"alias-{index}", str(index)) for index in range(1, 6)]
    client = FakeLambdaClient(aliases=aliases, page_size=2)

    resolved = AliasResolver(client).resolve("demo-fn")

    assert resolved == frozenset({"1", "2", "3", "4", "5"})
    assert client.call_names().count("list_aliases") == 3


def test_resolve_wraps_listing_failures() -> None:
    """Transport failures should surface as retrieval errors."""
    client = FakeLambdaClient(failing_listing="aliases")

    with pytest.raises(PruneRetrievalError, match="ListAliases"):
        AliasResolver(client).resolve("demo-fn")


def test_list_references_checks_deadline_before_paging() -> None:
    """An expired deadline should stop alias paging before the next request."""
    deadline = RunDeadline(1.0, clock=iter([0.0, 5.0, 5.0]).__next__)
    client = FakeLambdaClient(aliases=[alias_payload("live", "1")])

    with pytest.raises(PruneDeadlineError, match="listing aliases"):
        AliasResolver(client, deadline).list_references("demo-fn")
    assert client.calls == []
