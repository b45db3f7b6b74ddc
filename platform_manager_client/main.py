#!/usr/bin/env python3
"""
Platform CLI Tool - Main entry point.

This module builds the argparse interface from the command registry, loads
the CLI config and hands each invocation to the CommandExecutor.
"""

import argparse
import os
import sys
from typing import Mapping, Optional, Sequence, TextIO

from platform_manager_client.commands import COMMANDS, get_commands
from platform_manager_client.config import ConfigError, load_config
from platform_manager_client.executor import CommandExecutor
from platform_manager_client.gateway import Gateway
from platform_manager_client.logging_config import setup_logging
from platform_manager_client.protocols import (
    EXIT_ERROR,
    EXIT_SUCCESS,
    CommandInvocation,
    SecretReader,
)
from platform_manager_client.requirements import TargetValidator
from platform_manager_client.ui import TerminalUI
from platform_manager_sdk import PlatformClient


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="platform",
        description="Platform CLI - Manage users and service brokers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Delete a user without confirmation
  platform delete-user bob -f

  # Update a broker, reading the password from the environment
  CF_BROKER_PASSWORD=secret platform update-service-broker my-broker admin https://broker.example.com

Environment Variables:
  PLATFORM_HOME        Directory holding config.yaml (default: ~/.platform)
  PLATFORM_API_URL     API URL override
  PLATFORM_TOKEN       Access token override
  PLATFORM_LOG_DIR     Write a rotating JSON log to this directory
  CF_BROKER_PASSWORD   Service broker password
        """,
    )

    # Global arguments
    parser.add_argument(
        "--config", default=None, help="Config file (default: $PLATFORM_HOME/config.yaml)"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    for command in COMMANDS:
        sub = subparsers.add_parser(command.name, help=command.help, usage=command.usage)
        sub.add_argument("positional", nargs="*", help=argparse.SUPPRESS)
        command.add_arguments(sub)

    return parser


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
    stdin: Optional[TextIO] = None,
    environ: Optional[Mapping[str, str]] = None,
    secret_reader: Optional[SecretReader] = None,
) -> int:
    """
    Main CLI entry point.

    Returns:
        Exit code (0 for success or a declined confirmation, non-zero for error)
    """
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    env = os.environ if environ is None else environ

    parser = create_parser()
    args, extras = parser.parse_known_args(argv)
    if extras:
        if not args.command:
            parser.error(f"unrecognized arguments: {' '.join(extras)}")
        # Dash-prefixed values (e.g. a password like "-s3cret") are positionals
        args.positional = list(args.positional or []) + extras

    # Show help if no command specified
    if not args.command:
        parser.print_help(stdout)
        return EXIT_SUCCESS

    setup_logging(verbose=args.verbose, log_dir=env.get("PLATFORM_LOG_DIR"), stream=stderr)

    try:
        config = load_config(args.config, environ=env)
    except ConfigError as e:
        print(f"Error: {e}", file=stderr)
        return e.exit_code

    client = PlatformClient(
        base_url=config.api_url or "",
        token=config.access_token,
        timeout=config.timeout,
    )
    ui = TerminalUI(out=stdout, err=stderr, stdin=stdin, secret_reader=secret_reader)
    executor = CommandExecutor(
        ui=ui,
        validator=TargetValidator(config),
        gateway=Gateway(client),
        environ=env,
    )

    command = get_commands()[args.command]
    invocation = CommandInvocation.from_namespace(args)

    try:
        result = executor.execute(command, invocation)
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=stderr)
        return EXIT_ERROR
    except Exception as e:
        if args.verbose:
            import traceback

            traceback.print_exc(file=stderr)
        print(f"Unexpected error: {e}", file=stderr)
        return EXIT_ERROR

    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
