"""
Show the current target (endpoint, user, org and space).
"""

from argparse import ArgumentParser
from typing import Dict, List

from platform_manager_client.commands.base import BaseCommand
from platform_manager_client.executor import CommandSession
from platform_manager_client.output import FORMATS, format_output
from platform_manager_client.protocols import CommandInvocation
from platform_manager_client.requirements import Requirement


class TargetCommand(BaseCommand):
    name = "target"
    help = "Show the current API endpoint, user, org and space"
    usage = "platform target [--format table|json|yaml]"
    show_ok = False

    def add_arguments(self, parser: ArgumentParser) -> None:
        parser.add_argument(
            "--format",
            choices=FORMATS,
            default="table",
            help="Output format (default: table)",
        )

    def requirements(self, invocation: CommandInvocation) -> List[Requirement]:
        return [Requirement.API_ENDPOINT]

    def run(
        self,
        invocation: CommandInvocation,
        session: CommandSession,
        credentials: Dict[str, str],
    ) -> None:
        config = session.config
        record = {
            "api_endpoint": config.api_url,
            "user": config.user if config.is_logged_in() else None,
            "org": config.organization.name if config.organization else None,
            "space": config.space.name if config.space else None,
        }
        session.ui.say(format_output(record, invocation.flag("format") or "table"))
