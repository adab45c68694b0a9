"""Integration test against a stubbed boto3 Lambda client."""

from __future__ import annotations

import boto3
from botocore.stub import Stubber

from retention.retention_planner import plan_retention
from retention.version_deleter import VersionDeleter
from store.alias_resolver import AliasResolver
from store.version_catalog import VersionCatalog
from tests.fake_lambda import alias_payload, version_payload


def _lambda_client():
    return boto3.client(
        "lambda",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


def test_prune_flow_over_real_client_shapes() -> None:
    """Resolver, catalog, planner, and deleter should agree with Lambda's API shapes."""
    client = _lambda_client()
    stubber = Stubber(client)
    stubber.add_response(
        "list_aliases",
        {"Aliases": [alias_payload("live", "4", weighted=("2",))]},
        {"FunctionName": "demo-fn"},
    )
    stubber.add_response(
        "list_versions_by_function",
        {
            "Versions": [version_payload("$LATEST", 50), version_payload("1", 1), version_payload("2", 2)],
            "NextMarker": "page-2",
        },
        {"FunctionName": "demo-fn"},
    )
    stubber.add_response(
        "list_versions_by_function",
        {"Versions": [version_payload("3", 3), version_payload("4", 4), version_payload("5", 5)]},
        {"FunctionName": "demo-fn", "Marker": "page-2"},
    )
    stubber.add_response("delete_function", {}, {"FunctionName": "demo-fn", "Qualifier": "1"})
    stubber.add_client_error(
        "delete_function",
        service_error_code="ResourceConflictException",
        service_message="version in use",
        expected_params={"FunctionName": "demo-fn", "Qualifier": "3"},
    )

    with stubber:
        referenced = AliasResolver(client).resolve("demo-fn")
        catalog = VersionCatalog(client).fetch_all("demo-fn")
        decision = plan_retention(catalog, referenced, keep_count=1)
        report = VersionDeleter(client, max_workers=1).delete_all("demo-fn", decision.version_ids)

    stubber.assert_no_pending_responses()
    assert referenced == frozenset({"2", "4"})
    assert decision.version_ids == ("1", "3")
    assert decision.retained_version_ids == ("5",)
    assert [(outcome.version_id, outcome.status) for outcome in report.outcomes] == [
        ("1", "success"),
        ("3", "error"),
    ]
