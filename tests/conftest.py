"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from tests.fake_lambda import alias_payload, version_payload

PRUNE_ENV_VARS = (
    "LAMBDA_PRUNE_AWS_REGION",
    "LAMBDA_PRUNE_AWS_PROFILE",
    "LAMBDA_PRUNE_MAX_WORKERS",
    "LAMBDA_PRUNE_DEADLINE_SECONDS",
    "LAMBDA_PRUNE_MAX_ATTEMPTS",
    "INPUT_FUNCTION_NAME",
    "INPUT_NUMBER_TO_KEEP",
    "GITHUB_ACTIONS",
)


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host environment variables out of config parsing."""
    for name in PRUNE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def ten_versions() -> list[dict[str, object]]:
    """Versions 1..10 ascending by time, plus the unpublished marker."""
    payloads = [version_payload("$LATEST", 100)]
    payloads.extend(version_payload(str(number), number) for number in range(1, 11))
    return payloads


@pytest.fixture
def scenario_aliases() -> list[dict[str, object]]:
    """Alias with primary 8 and weighted 6."""
    return [alias_payload("live", "8", weighted=("6",))]
