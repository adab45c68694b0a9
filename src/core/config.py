"""Runtime configuration model for lambda prune.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import (
    ACTION_FUNCTION_NAME_ENV,
    ACTION_NUMBER_TO_KEEP_ENV,
    DEFAULT_DEADLINE_SECONDS,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_WORKERS,
    ENV_PREFIX,
)
from core.errors import PruneConfigError


@dataclass(frozen=True)
class PruneConfig:
    """Validated runtime configuration.

    Attributes:
        aws_region: Optional AWS region for boto3 session initialization.
        aws_profile: Optional AWS profile for boto3 session initialization.
        max_workers: Upper bound on concurrent deletion requests.
        deadline_seconds: Overall wall-clock budget for one run.
        max_attempts: Botocore retry budget per API call.
    """

    aws_region: str | None = None
    aws_profile: str | None = None
    max_workers: int = DEFAULT_MAX_WORKERS
    deadline_seconds: float = DEFAULT_DEADLINE_SECONDS
    max_attempts: int = DEFAULT_MAX_ATTEMPTS

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise PruneConfigError(
                f"Invalid max_workers value {self.max_workers}: expected at least 1."
            )
        if self.deadline_seconds <= 0:
            raise PruneConfigError(
                f"Invalid deadline_seconds value {self.deadline_seconds}: expected a positive number."
            )
        if self.max_attempts < 1:
            raise PruneConfigError(
                f"Invalid max_attempts value {self.max_attempts}: expected at least 1."
            )

    @classmethod
    def from_env(cls) -> "PruneConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            PruneConfigError: If environment values are invalid.
        """
        return cls(
            aws_region=os.getenv(f"{ENV_PREFIX}AWS_REGION") or None,
            aws_profile=os.getenv(f"{ENV_PREFIX}AWS_PROFILE") or None,
            max_workers=_parse_int_env("MAX_WORKERS", DEFAULT_MAX_WORKERS),
            deadline_seconds=_parse_float_env("DEADLINE_SECONDS", DEFAULT_DEADLINE_SECONDS),
            max_attempts=_parse_int_env("MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS),
        )


def action_inputs_from_env() -> dict[str, str]:
    """Read run inputs passed the way GitHub Actions passes them.

    Returns:
        Mapping with ``function_name``/``number_to_keep`` keys for set inputs.
    """
    inputs: dict[str, str] = {}
    function_name = os.getenv(ACTION_FUNCTION_NAME_ENV, "").strip()
    if function_name:
        inputs["function_name"] = function_name
    number_to_keep = os.getenv(ACTION_NUMBER_TO_KEEP_ENV, "").strip()
    if number_to_keep:
        inputs["number_to_keep"] = number_to_keep
    return inputs


def _parse_int_env(suffix: str, default: int) -> int:
    """Parse an integer environment value.

    Args:
        suffix: Variable name without the shared prefix.
        default: Value used when the variable is unset.

    Returns:
        Parsed integer.

    Raises:
        PruneConfigError: If value cannot be parsed into int.
    """
    name = f"{ENV_PREFIX}{suffix}"
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return default
    try:
        return int(raw_value)
    except ValueError as error:
        raise PruneConfigError(
            f"Invalid {name} value: expected integer, got '{raw_value}'. "
            f"Set {name} to a numeric value."
        ) from error


def _parse_float_env(suffix: str, default: float) -> float:
    name = f"{ENV_PREFIX}{suffix}"
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return default
    try:
        return float(raw_value)
    except ValueError as error:
        raise PruneConfigError(
            f"Invalid {name} value: expected number of seconds, got '{raw_value}'."
        ) from error
