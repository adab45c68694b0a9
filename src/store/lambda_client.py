"""Lambda client construction.

This module encapsulates boto3 client creation for the version store.
The client is built once per run and injected into every component.
"""

from __future__ import annotations

from typing import Any

from core.config import PruneConfig
from core.constants import LAMBDA_API_VERSION, RETRY_MODE
from core.errors import PruneDependencyError


def create_lambda_client(config: PruneConfig) -> Any:
    """Create a boto3 Lambda client for version management.

    Args:
        config: Runtime config with optional session settings.

    Returns:
        Boto3 Lambda client.

    Raises:
        PruneDependencyError: If boto3 is missing.
    """
    try:
        import boto3
        from botocore.config import Config
    except ImportError as error:
        raise PruneDependencyError(
            "Pruning requires boto3, but it is not installed. "
            "Install boto3 to manage Lambda function versions."
        ) from error
    session = boto3.session.Session(**build_session_kwargs(config))
    client_config = Config(
        retries={"max_attempts": config.max_attempts, "mode": RETRY_MODE},
        max_pool_connections=max(config.max_workers, 10),
    )
    return session.client("lambda", api_version=LAMBDA_API_VERSION, config=client_config)


def build_session_kwargs(config: PruneConfig) -> dict[str, str]:
    """Build boto3 Session kwargs from config.

    Args:
        config: Runtime config.

    Returns:
        Session keyword arguments for set values only.
    """
    session_kwargs: dict[str, str] = {}
    if config.aws_profile:
        session_kwargs["profile_name"] = config.aws_profile
    if config.aws_region:
        session_kwargs["region_name"] = config.aws_region
    return session_kwargs
