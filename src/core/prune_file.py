"""Typed options-file parsing for prune runs.

This module loads and validates the optional YAML file that can carry
run inputs and concurrency settings instead of command-line flags.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, cast

import yaml

from core.errors import PruneConfigError

SUPPORTED_KEYS = (
    "function_name",
    "number_to_keep",
    "dry_run",
    "max_workers",
    "deadline_seconds",
)


@dataclass(frozen=True)
class PruneFileSettings:
    """Validated options-file contents. Unset keys stay ``None``."""

    function_name: str | None = None
    number_to_keep: object = None
    dry_run: bool | None = None
    max_workers: int | None = None
    deadline_seconds: float | None = None


def load_prune_file(file_path: str) -> PruneFileSettings:
    """Load and validate a YAML options file from disk.

    Args:
        file_path: File path to the YAML options file.

    Returns:
        Validated settings. ``number_to_keep`` is left raw and
        validated together with the other run inputs.

    Raises:
        PruneConfigError: If file is missing, unreadable, or invalid.
    """
    payload = _load_yaml_payload(file_path)
    if not isinstance(payload, Mapping):
        raise PruneConfigError(
            f"Invalid options file {file_path}: expected a mapping at the root, "
            f"got {type(payload).__name__}."
        )
    root_mapping = cast(Mapping[object, object], payload)
    _validate_keys(root_mapping, file_path)
    return PruneFileSettings(
        function_name=_optional_str(root_mapping, "function_name"),
        number_to_keep=root_mapping.get("number_to_keep"),
        dry_run=_optional_bool(root_mapping, "dry_run"),
        max_workers=_optional_int(root_mapping, "max_workers"),
        deadline_seconds=_optional_seconds(root_mapping, "deadline_seconds"),
    )


def _load_yaml_payload(file_path: str) -> object:
    options_file = Path(file_path).expanduser().resolve()
    if not options_file.exists():
        raise PruneConfigError(
            f"Options file does not exist at {options_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(options_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise PruneConfigError(
            f"Failed to read options file at {options_file}: {error}. Check file permissions and retry."
        ) from error
    except yaml.YAMLError as error:
        raise PruneConfigError(
            f"Failed to parse YAML options file at {options_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        return {}
    return payload


def _validate_keys(mapping: Mapping[object, object], file_path: str) -> None:
    unknown_keys = sorted(str(key) for key in mapping if key not in SUPPORTED_KEYS)
    if unknown_keys:
        raise PruneConfigError(
            f"Unsupported keys in options file {file_path}: {', '.join(unknown_keys)}. "
            f"Supported keys: {', '.join(SUPPORTED_KEYS)}."
        )


def _optional_str(mapping: Mapping[object, object], key: str) -> str | None:
    value = mapping.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise PruneConfigError(f"Invalid '{key}' in options file: expected a string.")
    return value


def _optional_bool(mapping: Mapping[object, object], key: str) -> bool | None:
    value = mapping.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise PruneConfigError(f"Invalid '{key}' in options file: expected true or false.")
    return value


def _optional_int(mapping: Mapping[object, object], key: str) -> int | None:
    value = mapping.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise PruneConfigError(f"Invalid '{key}' in options file: expected an integer.")
    return value


def _optional_seconds(mapping: Mapping[object, object], key: str) -> float | None:
    value = mapping.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PruneConfigError(f"Invalid '{key}' in options file: expected a number of seconds.")
    return float(value)
