"""
Pytest configuration and fixtures for the platform CLI tests.
"""

import io
from unittest.mock import Mock

import pytest

from platform_manager_client.config import CLIConfig, TargetRef
from platform_manager_client.executor import CommandExecutor
from platform_manager_client.gateway import Gateway
from platform_manager_client.requirements import TargetValidator
from platform_manager_client.ui import TerminalUI
from platform_manager_sdk import PlatformClient


@pytest.fixture
def stdin():
    """In-memory standard input."""
    return io.StringIO()


@pytest.fixture
def feed_stdin(stdin):
    """Write lines to the in-memory stdin and rewind it."""

    def _feed(text: str) -> None:
        stdin.write(text)
        stdin.seek(0)

    return _feed


@pytest.fixture
def ui(stdin):
    """Terminal UI backed by in-memory streams."""
    return TerminalUI(out=io.StringIO(), err=io.StringIO(), stdin=stdin)


@pytest.fixture
def logged_in_config():
    """Config for a logged-in user with org and space targeted."""
    return CLIConfig(
        api_url="https://api.example.com",
        access_token="access-token",
        user="admin",
        organization=TargetRef(name="my-org", guid="org-guid"),
        space=TargetRef(name="my-space", guid="space-guid"),
    )


@pytest.fixture
def mock_client():
    """Mock PlatformClient."""
    return Mock(spec=PlatformClient)


@pytest.fixture
def make_executor(ui, mock_client):
    """Build a CommandExecutor over the mock client for a given config."""

    def _make(config, environ=None):
        return CommandExecutor(
            ui=ui,
            validator=TargetValidator(config),
            gateway=Gateway(mock_client),
            environ=environ if environ is not None else {},
        )

    return _make
