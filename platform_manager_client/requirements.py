"""
Precondition checks run before a command touches the remote API.

A command declares an ordered list of requirement kinds. Each kind maps to
a check in a fixed strategy table; the set stops at the first failure.
"""

import logging
from enum import Enum
from typing import Callable, Dict, Iterable, List

from platform_manager_client.config import CLIConfig
from platform_manager_client.protocols import (
    NoAPIEndpointError,
    NoOrgTargetedError,
    NoSpaceTargetedError,
    NotLoggedInError,
)

logger = logging.getLogger(__name__)


class TargetValidator:
    """Verifies that a session, and optionally an org and space, are targeted."""

    def __init__(self, config: CLIConfig, binary_name: str = "platform") -> None:
        self.config = config
        self.binary_name = binary_name

    def check_api_endpoint(self) -> None:
        if not self.config.api_url:
            raise NoAPIEndpointError(self.binary_name)

    def check_target(self, needs_org: bool, needs_space: bool) -> None:
        """
        Fail fast unless the required target is present.

        Raises:
            NotLoggedInError: No access token
            NoOrgTargetedError: needs_org and no organization targeted
            NoSpaceTargetedError: needs_space and no space targeted
        """
        if not self.config.is_logged_in():
            raise NotLoggedInError(self.binary_name)

        if needs_org and self.config.organization is None:
            raise NoOrgTargetedError(self.binary_name)

        if needs_space and self.config.space is None:
            raise NoSpaceTargetedError(self.binary_name)


class Requirement(Enum):
    """Capabilities a command can require."""

    API_ENDPOINT = "api_endpoint"
    LOGIN = "login"
    TARGETED_ORG = "targeted_org"
    TARGETED_SPACE = "targeted_space"


_CHECKS: Dict[Requirement, Callable[[TargetValidator], None]] = {
    Requirement.API_ENDPOINT: lambda v: v.check_api_endpoint(),
    Requirement.LOGIN: lambda v: v.check_target(needs_org=False, needs_space=False),
    Requirement.TARGETED_ORG: lambda v: v.check_target(needs_org=True, needs_space=False),
    Requirement.TARGETED_SPACE: lambda v: v.check_target(needs_org=True, needs_space=True),
}


class RequirementSet:
    """Ordered requirements evaluated sequentially with short-circuit."""

    def __init__(self, requirements: Iterable[Requirement]) -> None:
        self.requirements: List[Requirement] = list(requirements)

    def evaluate(self, validator: TargetValidator) -> None:
        """Run each check in order; the first failing check raises."""
        for requirement in self.requirements:
            logger.debug("Checking requirement %s", requirement.value)
            _CHECKS[requirement](validator)

    def __iter__(self):
        return iter(self.requirements)

    def __len__(self) -> int:
        return len(self.requirements)
