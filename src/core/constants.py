"""Core constants used across prune modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

RESERVED_VERSION_MARKER = "$LATEST"
LAMBDA_API_VERSION = "2015-03-31"
DEFAULT_MAX_WORKERS = 4
DEFAULT_DEADLINE_SECONDS = 300.0
DEFAULT_MAX_ATTEMPTS = 5
RETRY_MODE = "standard"
RETRIEVAL_WORKERS = 2
ENV_PREFIX = "LAMBDA_PRUNE_"
ACTION_FUNCTION_NAME_ENV = "INPUT_FUNCTION_NAME"
ACTION_NUMBER_TO_KEEP_ENV = "INPUT_NUMBER_TO_KEEP"
GITHUB_ACTIONS_ENV = "GITHUB_ACTIONS"
LAST_MODIFIED_FORMAT = "%Y-%m-%dT%H:%M:%S.%f%z"
