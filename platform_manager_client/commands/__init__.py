"""
Command registry for the platform CLI.
"""

from typing import Dict, List

from platform_manager_client.commands.base import BaseCommand
from platform_manager_client.commands.service_broker import (
    CreateServiceBrokerCommand,
    DeleteServiceBrokerCommand,
    UpdateServiceBrokerCommand,
)
from platform_manager_client.commands.target import TargetCommand
from platform_manager_client.commands.user import DeleteUserCommand

COMMANDS: List[BaseCommand] = [
    TargetCommand(),
    DeleteUserCommand(),
    CreateServiceBrokerCommand(),
    UpdateServiceBrokerCommand(),
    DeleteServiceBrokerCommand(),
]


def get_commands() -> Dict[str, BaseCommand]:
    """Return the registered commands keyed by name."""
    return {command.name: command for command in COMMANDS}


__all__ = [
    "BaseCommand",
    "COMMANDS",
    "CreateServiceBrokerCommand",
    "DeleteServiceBrokerCommand",
    "DeleteUserCommand",
    "TargetCommand",
    "UpdateServiceBrokerCommand",
    "get_commands",
]
