"""Unit tests for paginated version catalog retrieval."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from core.deadline import RunDeadline
from core.errors import PruneCatalogError, PruneDeadlineError, PruneRetrievalError
from store.version_catalog import VersionCatalog, parse_last_modified
from tests.fake_lambda import FakeLambdaClient, version_payload


def _ids(records) -> list[str]:
    return [record.version_id for record in records]


def test_fetch_all_follows_every_continuation_marker() -> None:
    """Catalog should keep paging until no NextMarker is returned."""
    payloads = [version_payload(str(number), number) for number in range(1, 8)]
    client = FakeLambdaClient(versions=payloads, page_size=3)

    records = VersionCatalog(client).fetch_all("demo-fn")

    assert _ids(records) == ["1", "2", "3", "4", "5", "6", "7"]
    assert [params.get("Marker") for _, params in client.calls] == [None, "3", "6"]


def test_fetch_all_orders_by_last_modified_ascending() -> None:
    """Listing order should not leak into catalog order."""
    payloads = [version_payload("3", 30), version_payload("1", 10), version_payload("2", 20)]

    records = VersionCatalog(FakeLambdaClient(versions=payloads)).fetch_all("demo-fn")

    assert _ids(records) == ["1", "2", "3"]


def test_fetch_all_breaks_timestamp_ties_by_natural_version_order() -> None:
    """Equal timestamps should order numerically, with named ids last."""
    payloads = [
        version_payload("10", 5),
        version_payload("alpha", 5),
        version_payload("9", 5),
        version_payload("2", 1),
    ]

    records = VersionCatalog(FakeLambdaClient(versions=payloads)).fetch_all("demo-fn")

    assert _ids(records) == ["2", "9", "10", "alpha"]


def test_paged_and_single_page_catalogs_match() -> None:
    """Splitting records across pages should not change the catalog."""
    payloads = [version_payload(str(number), (number * 7) % 11) for number in range(1, 12)]

    paged = VersionCatalog(FakeLambdaClient(versions=payloads, page_size=2)).fetch_all("demo-fn")
    single = VersionCatalog(FakeLambdaClient(versions=payloads, page_size=100)).fetch_all("demo-fn")

    assert paged == single


def test_fetch_all_rejects_records_without_timestamp() -> None:
    """Records missing LastModified must not be ordered as 'now'."""
    payloads = [version_payload("1", 1), version_payload("2", None)]

    with pytest.raises(PruneCatalogError, match="2 \\(LastModified=None\\)"):
        VersionCatalog(FakeLambdaClient(versions=payloads)).fetch_all("demo-fn")


def test_fetch_all_rejects_unparseable_timestamp() -> None:
    """Garbage timestamps should be rejected, not guessed."""
    payload = version_payload("1", 1)
    payload["LastModified"] = "yesterday"

    with pytest.raises(PruneCatalogError, match="yesterday"):
        VersionCatalog(FakeLambdaClient(versions=[payload])).fetch_all("demo-fn")


def test_catalog_error_is_a_retrieval_error() -> None:
    """Unorderable catalogs should halt the run like a failed listing."""
    assert issubclass(PruneCatalogError, PruneRetrievalError)


def test_fetch_all_wraps_listing_failures() -> None:
    """Transport failures should surface as retrieval errors."""
    client = FakeLambdaClient(failing_listing="versions")

    with pytest.raises(PruneRetrievalError, match="ListVersionsByFunction"):
        VersionCatalog(client).fetch_all("demo-fn")


def test_fetch_all_checks_deadline_before_paging() -> None:
    """An expired deadline should stop paging before the next request."""
    deadline = RunDeadline(1.0, clock=iter([0.0, 5.0, 5.0, 5.0]).__next__)
    client = FakeLambdaClient(versions=[version_payload("1", 1)])

    with pytest.raises(PruneDeadlineError):
        VersionCatalog(client, deadline).fetch_all("demo-fn")
    assert client.calls == []


@pytest.mark.parametrize(
    ("raw_value", "expected"),
    [
        ("2024-05-01T10:00:00.000+0000", datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)),
        ("2024-05-01T12:30:00.500+0200", datetime(2024, 5, 1, 10, 30, 0, 500000, tzinfo=timezone.utc)),
        ("2024-05-01T10:00:00+00:00", datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)),
        (datetime(2024, 5, 1, 10, 0), datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)),
        ("", None),
        (None, None),
        (12345, None),
    ],
)
def test_parse_last_modified(raw_value: object, expected: datetime | None) -> None:
    """Parser should normalize to UTC and return None for unusable values."""
    assert parse_last_modified(raw_value) == expected


def test_fetch_all_orders_non_ascii_digit_ids_as_names() -> None:
    """Ids like superscript digits should sort as text instead of failing int()."""
    payloads = [version_payload("³", 1), version_payload("2", 1)]

    records = VersionCatalog(FakeLambdaClient(versions=payloads)).fetch_all("demo-fn")

    assert _ids(records) == ["2", "³"]
