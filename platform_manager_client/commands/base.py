"""
Base Command Class

Provides the declarations the executor reads before running a command.
"""

from abc import ABC, abstractmethod
from argparse import ArgumentParser
from typing import Dict, List

from platform_manager_client.credentials import CredentialSpec
from platform_manager_client.executor import CommandSession
from platform_manager_client.protocols import CommandInvocation, UsageError
from platform_manager_client.requirements import Requirement


class BaseCommand(ABC):
    """Abstract base class for CLI commands"""

    name: str = ""
    help: str = ""
    usage: str = ""

    # Accepted positional argument counts
    min_args: int = 0
    max_args: int = 0

    # Destructive commands ask for confirmation unless -f is given
    destructive: bool = False

    show_ok: bool = True

    def add_arguments(self, parser: ArgumentParser) -> None:
        """
        Add command-specific flags to the parser.

        Positional arguments are collected generically so that a wrong
        count is reported with this command's usage text.
        """
        if self.destructive:
            parser.add_argument(
                "-f", dest="force", action="store_true", help="Force deletion without confirmation"
            )

    def check_usage(self, invocation: CommandInvocation) -> None:
        count = len(invocation.positional)
        if count < self.min_args or count > self.max_args:
            raise UsageError(self.usage)

    def requirements(self, invocation: CommandInvocation) -> List[Requirement]:
        return [Requirement.API_ENDPOINT, Requirement.LOGIN]

    def confirmation_prompt(self, invocation: CommandInvocation) -> str:
        raise NotImplementedError(f"{self.name} does not ask for confirmation")

    def credentials(self, invocation: CommandInvocation) -> List[CredentialSpec]:
        return []

    @abstractmethod
    def run(
        self,
        invocation: CommandInvocation,
        session: CommandSession,
        credentials: Dict[str, str],
    ) -> None:
        """
        Perform the command's remote calls.

        Args:
            invocation: Parsed positional arguments and flags
            session: UI, gateway and config for this run
            credentials: Resolved secrets keyed by credential name
        """
        pass
