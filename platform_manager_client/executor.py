"""
Command executor for the platform CLI tool.

Each invocation runs through a fixed sequence:

    check usage -> evaluate requirements -> confirm (destructive only)
    -> resolve credentials -> remote calls -> classify -> render

Usage, requirement and confirmation steps all happen before the first
remote call, so a failed precondition never leaves partial side effects.
"""

import logging
import os
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

from platform_manager_client.config import CLIConfig
from platform_manager_client.credentials import resolve_credential
from platform_manager_client.gateway import Gateway, OutcomeKind
from platform_manager_client.protocols import (
    CLIError,
    CommandInvocation,
    InvocationResult,
    InvocationState,
    NotFoundError,
    RemoteError,
    UsageError,
)
from platform_manager_client.requirements import RequirementSet, TargetValidator
from platform_manager_client.ui import TerminalUI

if TYPE_CHECKING:
    from platform_manager_client.commands.base import BaseCommand

logger = logging.getLogger(__name__)


class CommandSession:
    """
    What a running command may use: the UI, the gateway and the config.

    Warnings returned by each gateway call are flushed immediately, so they
    appear on the secondary stream in the order they were received and
    always before the terminal OK/FAILED marker.
    """

    def __init__(self, ui: TerminalUI, gateway: Gateway, config: CLIConfig) -> None:
        self.ui = ui
        self.gateway = gateway
        self.config = config

    def call(self, operation: str, **params: Any) -> Any:
        """
        Invoke a remote operation and return its payload.

        Raises:
            RemoteError: The operation failed; no further calls should follow
            NotFoundError: A lookup found nothing
        """
        outcome, warnings = self.gateway.invoke(operation, **params)
        self.ui.display_warnings(warnings)

        if outcome.kind is OutcomeKind.ERROR:
            raise RemoteError(outcome.message or f"{operation} failed")
        if outcome.kind is OutcomeKind.NOT_FOUND:
            raise NotFoundError(outcome.message or "Resource not found")
        return outcome.payload

    def lookup(self, operation: str, missing: str, **params: Any) -> Any:
        """Like ``call`` but reports a missing resource with ``missing``."""
        try:
            return self.call(operation, **params)
        except NotFoundError:
            raise NotFoundError(missing) from None

    def current_user(self) -> str:
        if not self.config.user:
            raise CLIError("Unable to determine the current user. Log in again.")
        return self.config.user


class CommandExecutor:
    """Runs one command invocation and renders its terminal state."""

    def __init__(
        self,
        ui: TerminalUI,
        validator: TargetValidator,
        gateway: Gateway,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.ui = ui
        self.validator = validator
        self.gateway = gateway
        self.environ = os.environ if environ is None else environ

    def execute(self, command: "BaseCommand", invocation: CommandInvocation) -> InvocationResult:
        """
        Execute a command and render the result.

        Returns:
            The terminal state; its ``exit_code`` is the process exit status
        """
        try:
            result = self._run(command, invocation)
        except UsageError as e:
            self.ui.failed_with_usage(str(e), e.usage)
            return InvocationResult(InvocationState.FAILED, e)
        except NotFoundError as e:
            # A lookup miss is informational
            self.ui.ok()
            self.ui.warn(str(e))
            return InvocationResult(InvocationState.OK)
        except CLIError as e:
            logger.debug("Command failed: %s", e, extra={"command": command.name})
            self.ui.failed(str(e))
            return InvocationResult(InvocationState.FAILED, e)

        if result.state is InvocationState.OK and command.show_ok:
            self.ui.ok()
        return result

    def _run(self, command: "BaseCommand", invocation: CommandInvocation) -> InvocationResult:
        command.check_usage(invocation)

        RequirementSet(command.requirements(invocation)).evaluate(self.validator)

        if command.destructive and not invocation.flag("force"):
            if not self.ui.confirm(command.confirmation_prompt(invocation)):
                logger.debug("Declined by user", extra={"command": command.name})
                return InvocationResult(InvocationState.DECLINED)

        credentials: Dict[str, str] = {}
        for spec in command.credentials(invocation):
            credentials[spec.name] = resolve_credential(spec, self.ui, self.environ).value

        session = CommandSession(self.ui, self.gateway, self.validator.config)
        command.run(invocation, session, credentials)
        return InvocationResult(InvocationState.OK)
