"""
Platform CLI Package.

This package provides the command-line interface for managing users and
service brokers on a remote platform.
"""

from platform_manager_client.main import main
from platform_manager_client.executor import CommandExecutor, CommandSession
from platform_manager_client.protocols import (
    CLIError,
    CommandInvocation,
    InvocationResult,
    InvocationState,
    NoAPIEndpointError,
    NoOrgTargetedError,
    NoSpaceTargetedError,
    NotFoundError,
    NotLoggedInError,
    RemoteError,
    RequirementError,
    UsageError,
    EXIT_SUCCESS,
    EXIT_ERROR,
    EXIT_INVALID_ARGS,
    EXIT_AUTH_ERROR,
    EXIT_API_ERROR,
    EXIT_VALIDATION_ERROR,
)

__all__ = [
    # Main entry point
    "main",
    # Execution
    "CommandExecutor",
    "CommandSession",
    "CommandInvocation",
    "InvocationResult",
    "InvocationState",
    # Error classes
    "CLIError",
    "UsageError",
    "RequirementError",
    "NoAPIEndpointError",
    "NotLoggedInError",
    "NoOrgTargetedError",
    "NoSpaceTargetedError",
    "RemoteError",
    "NotFoundError",
    # Exit codes
    "EXIT_SUCCESS",
    "EXIT_ERROR",
    "EXIT_INVALID_ARGS",
    "EXIT_AUTH_ERROR",
    "EXIT_API_ERROR",
    "EXIT_VALIDATION_ERROR",
]
