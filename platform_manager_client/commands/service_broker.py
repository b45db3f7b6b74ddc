"""
Service broker commands for the platform CLI.

The broker password may be passed positionally, through CF_BROKER_PASSWORD,
or typed at a hidden prompt. Positional forms:

    SERVICE_BROKER USERNAME PASSWORD URL
    SERVICE_BROKER USERNAME URL            (password from env or prompt)
"""

from argparse import ArgumentParser
from typing import Dict, List, Optional, Tuple

from platform_manager_client.commands.base import BaseCommand
from platform_manager_client.credentials import CredentialSpec
from platform_manager_client.executor import CommandSession
from platform_manager_client.protocols import CommandInvocation
from platform_manager_client.requirements import Requirement
from platform_manager_sdk import ServiceBrokerRequest

BROKER_PASSWORD_ENV = "CF_BROKER_PASSWORD"
BROKER_PASSWORD_PROMPT = "Service Broker Password: "


def split_password_and_url(positional: Tuple[str, ...]) -> Tuple[Optional[str], str]:
    """
    Return (password, url) from the broker positional arguments.

    With an empty or missing fourth argument the third one is the URL and
    the password is left to the environment or the prompt.
    """
    password_or_url = positional[2]
    url = positional[3] if len(positional) > 3 else ""
    if not url:
        return None, password_or_url
    return password_or_url, url


class _BrokerCredentialsMixin:
    """Shared credential handling for create and update."""

    def credentials(self, invocation: CommandInvocation) -> List[CredentialSpec]:
        password, _ = split_password_and_url(invocation.positional)
        return [
            CredentialSpec(
                name="password",
                positional=password,
                env_var=BROKER_PASSWORD_ENV,
                prompt_label=BROKER_PASSWORD_PROMPT,
            )
        ]


class CreateServiceBrokerCommand(_BrokerCredentialsMixin, BaseCommand):
    """Register a service broker."""

    name = "create-service-broker"
    help = "Create a service broker"
    usage = (
        "platform create-service-broker SERVICE_BROKER USERNAME PASSWORD URL [--space-scoped]\n"
        "platform create-service-broker SERVICE_BROKER USERNAME URL [--space-scoped] "
        "(omit password to specify interactively or via environment variable)\n\n"
        f"ENVIRONMENT:\n   {BROKER_PASSWORD_ENV}=password   Password associated with user."
    )
    min_args = 3
    max_args = 4

    def add_arguments(self, parser: ArgumentParser) -> None:
        super().add_arguments(parser)
        parser.add_argument(
            "--space-scoped",
            action="store_true",
            help="Make the broker's service plans only visible within the targeted space",
        )

    def requirements(self, invocation: CommandInvocation) -> List[Requirement]:
        if invocation.flag("space_scoped"):
            return [Requirement.API_ENDPOINT, Requirement.TARGETED_SPACE]
        return [Requirement.API_ENDPOINT, Requirement.LOGIN]

    def run(
        self,
        invocation: CommandInvocation,
        session: CommandSession,
        credentials: Dict[str, str],
    ) -> None:
        broker_name, username = invocation.positional[0], invocation.positional[1]
        _, url = split_password_and_url(invocation.positional)
        user = session.current_user()

        space_guid = None
        if invocation.flag("space_scoped"):
            # TARGETED_SPACE has already been checked
            org, space = session.config.organization, session.config.space
            space_guid = space.guid
            session.ui.say(
                f"Creating service broker {broker_name} in org {org.name} / space {space.name} "
                f"as {user}..."
            )
        else:
            session.ui.say(f"Creating service broker {broker_name} as {user}...")

        session.call(
            "create_service_broker",
            request=ServiceBrokerRequest(
                name=broker_name,
                url=url,
                username=username,
                password=credentials["password"],
                space_guid=space_guid,
            ),
        )


class UpdateServiceBrokerCommand(_BrokerCredentialsMixin, BaseCommand):
    """Update the URL and credentials of a service broker."""

    name = "update-service-broker"
    help = "Update a service broker"
    usage = (
        "platform update-service-broker SERVICE_BROKER USERNAME PASSWORD URL\n"
        "platform update-service-broker SERVICE_BROKER USERNAME URL "
        "(omit password to specify interactively or via environment variable)\n\n"
        f"ENVIRONMENT:\n   {BROKER_PASSWORD_ENV}=password   Password associated with user."
    )
    min_args = 3
    max_args = 4

    def run(
        self,
        invocation: CommandInvocation,
        session: CommandSession,
        credentials: Dict[str, str],
    ) -> None:
        broker_name, username = invocation.positional[0], invocation.positional[1]
        _, url = split_password_and_url(invocation.positional)
        user = session.current_user()

        session.ui.say(f"Updating service broker {broker_name} as {user}...")

        broker = session.lookup(
            "find_service_broker_by_name",
            missing=f"Service broker {broker_name} does not exist.",
            name=broker_name,
        )
        session.call(
            "update_service_broker",
            guid=broker.guid,
            request=ServiceBrokerRequest(
                username=username,
                password=credentials["password"],
                url=url,
            ),
        )


class DeleteServiceBrokerCommand(BaseCommand):
    """Delete a service broker by name."""

    name = "delete-service-broker"
    help = "Delete a service broker"
    usage = "platform delete-service-broker SERVICE_BROKER [-f]"
    min_args = 1
    max_args = 1
    destructive = True

    def confirmation_prompt(self, invocation: CommandInvocation) -> str:
        return f"Really delete the service broker {invocation.positional[0]}?>"

    def run(
        self,
        invocation: CommandInvocation,
        session: CommandSession,
        credentials: Dict[str, str],
    ) -> None:
        broker_name = invocation.positional[0]
        user = session.current_user()

        session.ui.say(f"Deleting service broker {broker_name} as {user}...")

        broker = session.lookup(
            "find_service_broker_by_name",
            missing=f"Service broker {broker_name} does not exist.",
            name=broker_name,
        )
        session.call("delete_service_broker", guid=broker.guid)
