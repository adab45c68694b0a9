"""Unit tests for structured logging setup."""

from __future__ import annotations

import json

import pytest

from core.logging_config import get_logger


def test_get_logger_writes_json_events_to_stderr(capsys) -> None:
    """Events should render as JSON lines on the current stderr."""
    logger = get_logger("tests.logging")

    logger.info("sample_event", version_id="3")
    captured = capsys.readouterr()

    payload = json.loads(captured.err.strip().splitlines()[-1])
    assert (payload["event"], payload["version_id"], payload["level"]) == ("sample_event", "3", "info")
    assert captured.out == ""


def test_get_logger_configures_structlog_once(monkeypatch: pytest.MonkeyPatch) -> None:
    """Later loggers should reuse the existing configuration."""
    get_logger("tests.first")
    calls: list[dict[str, object]] = []
    monkeypatch.setattr("core.logging_config.structlog.configure", lambda **kwargs: calls.append(kwargs))

    get_logger("tests.second")

    assert calls == []
