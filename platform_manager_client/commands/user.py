"""
User management commands for the platform CLI.
"""

from typing import Dict

from platform_manager_client.commands.base import BaseCommand
from platform_manager_client.executor import CommandSession
from platform_manager_client.protocols import CommandInvocation


class DeleteUserCommand(BaseCommand):
    """Delete a user account by name."""

    name = "delete-user"
    help = "Delete a user"
    usage = "platform delete-user USERNAME [-f]"
    min_args = 1
    max_args = 1
    destructive = True

    def confirmation_prompt(self, invocation: CommandInvocation) -> str:
        return f"Really delete user {invocation.positional[0]}?>"

    def run(
        self,
        invocation: CommandInvocation,
        session: CommandSession,
        credentials: Dict[str, str],
    ) -> None:
        username = invocation.positional[0]

        session.ui.say(f"Deleting user {username}...")

        user = session.lookup(
            "find_user_by_name",
            missing=f"User {username} does not exist.",
            username=username,
        )
        session.call("delete_user", guid=user.guid)
