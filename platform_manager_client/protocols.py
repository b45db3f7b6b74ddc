"""
Protocol definitions for the platform CLI tool.

This module defines the core protocols, value types and the exception
hierarchy shared by the executor and all commands.
"""

from argparse import Namespace
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Protocol, Tuple


# Exit code constants
EXIT_SUCCESS = 0  # Command succeeded (or was declined)
EXIT_ERROR = 1  # General error
EXIT_INVALID_ARGS = 2  # Invalid arguments
EXIT_AUTH_ERROR = 3  # Not logged in / authentication error
EXIT_API_ERROR = 4  # Remote API error
EXIT_VALIDATION_ERROR = 5  # Missing target or other validation error


@dataclass(frozen=True)
class CommandInvocation:
    """Positional arguments and flags of a single command run."""

    positional: Tuple[str, ...] = ()
    flags: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_namespace(cls, args: Namespace) -> "CommandInvocation":
        """Build an invocation from parsed argparse output."""
        values = dict(vars(args))
        positional = tuple(values.pop("positional", None) or ())
        for key in ("command", "handler"):
            values.pop(key, None)
        return cls(positional=positional, flags=MappingProxyType(values))

    def flag(self, name: str) -> Any:
        """Return a flag value; unset flags read as False."""
        value = self.flags.get(name)
        return False if value is None else value


class InvocationState(Enum):
    """Terminal state of a command run."""

    OK = "ok"
    DECLINED = "declined"
    FAILED = "failed"


@dataclass(frozen=True)
class InvocationResult:
    """Outcome of a command run, mapped onto a process exit code."""

    state: InvocationState
    error: Optional["CLIError"] = None

    @property
    def exit_code(self) -> int:
        if self.state is InvocationState.FAILED and self.error is not None:
            return self.error.exit_code
        if self.state is InvocationState.FAILED:
            return EXIT_ERROR
        return EXIT_SUCCESS


class SecretReader(Protocol):
    """Reads one line from standard input without echoing it."""

    def __call__(self) -> str:
        ...


class OutputSink(Protocol):
    """Protocol for terminal output used by commands."""

    def say(self, message: str) -> None:
        """Write a message to the primary stream."""
        ...

    def warn(self, message: str) -> None:
        """Write a warning to the secondary stream."""
        ...

    def display_warnings(self, warnings: List[str]) -> None:
        """Flush a warning list to the secondary stream in order."""
        ...

    def confirm(self, prompt: str) -> bool:
        """Ask a yes/no question on the primary stream."""
        ...

    def prompt_secret(self, label: str) -> str:
        """Display a label and read a value with echo suppressed."""
        ...

    def ok(self) -> None:
        """Print the success marker."""
        ...

    def failed(self, message: str) -> None:
        """Print the failure marker and message."""
        ...


# Exception Hierarchy


class CLIError(Exception):
    """Base class for CLI errors."""

    exit_code: int = EXIT_ERROR

    def __init__(self, message: str, exit_code: Optional[int] = None) -> None:
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class UsageError(CLIError):
    """Wrong number of positional arguments."""

    exit_code: int = EXIT_INVALID_ARGS

    def __init__(self, usage: str) -> None:
        super().__init__("Incorrect Usage.")
        self.usage = usage


class RequirementError(CLIError):
    """A precondition of the command is not met."""

    exit_code: int = EXIT_VALIDATION_ERROR


class NoAPIEndpointError(RequirementError):
    """No API endpoint configured."""

    def __init__(self, binary_name: str = "platform") -> None:
        super().__init__(
            f"No API endpoint set. Use '{binary_name} login' to set an endpoint."
        )
        self.binary_name = binary_name


class NotLoggedInError(RequirementError):
    """No authenticated session."""

    exit_code: int = EXIT_AUTH_ERROR

    def __init__(self, binary_name: str = "platform") -> None:
        super().__init__(f"Not logged in. Use '{binary_name} login' to log in.")
        self.binary_name = binary_name


class NoOrgTargetedError(RequirementError):
    """No organization targeted."""

    def __init__(self, binary_name: str = "platform") -> None:
        super().__init__(
            f"No org targeted. Run '{binary_name} target' to check the current target."
        )
        self.binary_name = binary_name


class NoSpaceTargetedError(RequirementError):
    """No space targeted."""

    def __init__(self, binary_name: str = "platform") -> None:
        super().__init__(
            f"No space targeted. Run '{binary_name} target' to check the current target."
        )
        self.binary_name = binary_name


class RemoteError(CLIError):
    """The remote API reported a failure; the message is passed through unmodified."""

    exit_code: int = EXIT_API_ERROR


class NotFoundError(CLIError):
    """
    A lookup found nothing.

    The executor renders this as a warning with an OK marker, not a failure.
    """
