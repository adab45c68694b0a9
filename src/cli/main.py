"""Lambda prune CLI entry points.

This module exposes commands to inspect and prune function versions.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
import os
from typing import Any, Sequence

from core.config import PruneConfig, action_inputs_from_env
from core.constants import GITHUB_ACTIONS_ENV
from core.errors import PruneError
from core.prune_file import PruneFileSettings, load_prune_file
from core.types import PruneOptions
from retention.pipeline import build_prune_options
from retention.prune_sdk import PruneClient
from retention.retention_planner import classify_versions, plan_retention


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="lambda-prune",
        description="Delete old Lambda function versions outside a retention window",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_prune_command(subparsers)
    _add_versions_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the lambda prune CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        options, settings = _resolve_run_inputs(args)
        client = PruneClient(_build_config(args, settings))
        if args.command == "prune":
            return _run_prune_command(client, options)
        if args.command == "versions":
            return _run_versions_command(client, options)
    except PruneError as error:
        return _report_failure(error)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _add_run_input_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--function-name", help="Function name or ARN to prune")
    parser.add_argument(
        "--number-to-keep",
        help="Number of newest unreferenced versions to keep",
    )
    parser.add_argument("--config-file", help="YAML options file with run inputs")
    parser.add_argument("--max-workers", type=int, help="Concurrent deletion requests")
    parser.add_argument("--deadline-seconds", type=float, help="Overall run deadline")


def _add_prune_command(subparsers: Any) -> None:
    parser = subparsers.add_parser("prune", help="Delete versions outside the retention window")
    _add_run_input_arguments(parser)
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Report the plan without deleting anything",
    )


def _add_versions_command(subparsers: Any) -> None:
    parser = subparsers.add_parser("versions", help="List versions with their retention status")
    _add_run_input_arguments(parser)


def _resolve_run_inputs(args: argparse.Namespace) -> tuple[PruneOptions, PruneFileSettings]:
    """Merge CLI flags, options file, and action inputs.

    Args:
        args: Parsed CLI args.

    Returns:
        Validated options and the loaded options-file settings.

    Raises:
        PruneConfigError: If required inputs are missing or invalid.
    """
    settings = load_prune_file(args.config_file) if args.config_file else PruneFileSettings()
    action_inputs = action_inputs_from_env()
    function_name = _first_set(
        args.function_name,
        settings.function_name,
        action_inputs.get("function_name"),
    )
    number_to_keep = _first_set(
        args.number_to_keep,
        settings.number_to_keep,
        action_inputs.get("number_to_keep"),
    )
    dry_run = _first_set(getattr(args, "dry_run", None), settings.dry_run) or False
    options = build_prune_options(function_name, number_to_keep, bool(dry_run))
    return options, settings


def _build_config(args: argparse.Namespace, settings: PruneFileSettings) -> PruneConfig:
    """Build runtime config with file and flag overrides.

    Args:
        args: Parsed CLI args.
        settings: Options-file settings.

    Returns:
        Validated runtime config.
    """
    config = PruneConfig.from_env()
    max_workers = _first_set(args.max_workers, settings.max_workers)
    if max_workers is not None:
        config = replace(config, max_workers=max_workers)
    deadline_seconds = _first_set(args.deadline_seconds, settings.deadline_seconds)
    if deadline_seconds is not None:
        config = replace(config, deadline_seconds=deadline_seconds)
    return config


def _run_prune_command(client: PruneClient, options: PruneOptions) -> int:
    """Handle prune command.

    Args:
        client: SDK client.
        options: Validated run inputs.

    Returns:
        Exit code.

    Raises:
        PruneDeletionError: If any deletion in the batch failed.
    """
    result = client.prune(options)
    print(f"function_name={result.function_name}")
    print(f"selected_for_removal={len(result.decision.version_ids)}")
    if result.dry_run:
        print("dry_run=true")
        for version_id in result.decision.version_ids:
            print(f"would_delete={version_id}")
        return 0
    print(f"deleted={result.removed_count}")
    print(f"failed={result.failed_count}")
    if result.report is not None:
        result.report.raise_for_failures()
    return 0


def _run_versions_command(client: PruneClient, options: PruneOptions) -> int:
    """Handle versions command.

    Args:
        client: SDK client.
        options: Validated run inputs.

    Returns:
        Exit code.
    """
    inventory = client.inventory(options.function_name)
    referenced = inventory.referenced_version_ids
    decision = plan_retention(inventory.catalog, referenced, options.number_to_keep)
    for record, status in classify_versions(inventory.catalog, referenced, decision):
        print(f"{record.version_id}\t{record.last_modified.isoformat()}\t{status}")
    return 0


def _report_failure(error: PruneError) -> int:
    """Print a one-line failure and mark the run failed.

    Args:
        error: Error that ended the run.

    Returns:
        Failure exit code.
    """
    print(f"prune_error={error}")
    if os.getenv(GITHUB_ACTIONS_ENV, "").lower() == "true":
        print(f"::error::{error}")
    return 1


def _first_set(*values: object) -> object:
    for value in values:
        if value is not None:
            return value
    return None
