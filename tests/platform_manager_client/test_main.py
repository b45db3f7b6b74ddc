"""
End-to-end tests for the CLI entry point with a mocked SDK client.
"""

import io
from unittest.mock import Mock, patch

import pytest
import requests

from platform_manager_client.main import create_parser, main
from platform_manager_client.protocols import (
    EXIT_API_ERROR,
    EXIT_AUTH_ERROR,
    EXIT_ERROR,
    EXIT_INVALID_ARGS,
    EXIT_SUCCESS,
)
from platform_manager_sdk import WARNINGS_HEADER, APIError, ServiceBroker, User

CONFIG = """\
api_url: https://api.example.com
access_token: access-token
user: admin
organization: {name: my-org, guid: org-guid}
space: {name: my-space, guid: space-guid}
"""


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG)
    return path


@pytest.fixture
def mock_client_class():
    with patch("platform_manager_client.main.PlatformClient") as client_class:
        yield client_class


def run(argv, stdin_text="", environ=None):
    out, err = io.StringIO(), io.StringIO()
    code = main(
        argv,
        stdout=out,
        stderr=err,
        stdin=io.StringIO(stdin_text),
        environ=environ if environ is not None else {},
    )
    return code, out.getvalue(), err.getvalue()


class TestParser:
    """Tests for argument parsing."""

    def test_delete_user_force(self):
        args = create_parser().parse_args(["delete-user", "bob", "-f"])
        assert args.command == "delete-user"
        assert args.positional == ["bob"]
        assert args.force is True

    def test_space_scoped_flag(self):
        args = create_parser().parse_args(
            ["create-service-broker", "b", "u", "https://x", "--space-scoped"]
        )
        assert args.space_scoped is True
        assert args.positional == ["b", "u", "https://x"]

    def test_global_flags(self):
        args = create_parser().parse_args(["--verbose", "--config", "c.yaml", "target"])
        assert args.verbose is True
        assert args.config == "c.yaml"


class TestMain:
    """Tests for main()."""

    def test_no_command_prints_help(self):
        code, out, _ = run([])
        assert code == EXIT_SUCCESS
        assert "usage: platform" in out

    def test_delete_user_end_to_end(self, config_file, mock_client_class):
        client = mock_client_class.return_value
        client.find_user_by_name.return_value = (User(guid="user-guid", username="bob"), [])
        client.delete_user.return_value = ["user deletion is asynchronous"]

        code, out, err = run(["--config", str(config_file), "delete-user", "bob"], "yes\n")

        assert code == EXIT_SUCCESS
        assert out == "Really delete user bob?> Deleting user bob...\nOK\n"
        assert err == "user deletion is asynchronous\n"
        mock_client_class.assert_called_once_with(
            base_url="https://api.example.com", token="access-token", timeout=None
        )
        client.delete_user.assert_called_once_with(guid="user-guid")

    def test_update_broker_from_environment(self, config_file, mock_client_class):
        client = mock_client_class.return_value
        client.find_service_broker_by_name.return_value = (
            ServiceBroker(guid="broker-guid", name="broker"),
            [],
        )
        client.update_service_broker.side_effect = APIError(
            "something went wrong", 502, warnings=["a-warning"]
        )

        code, out, err = run(
            ["--config", str(config_file), "update-service-broker", "broker", "user", "https://b"],
            environ={"CF_BROKER_PASSWORD": "var-password"},
        )

        assert code == EXIT_API_ERROR
        assert out == "Updating service broker broker as admin...\n"
        assert err == "a-warning\nFAILED\nsomething went wrong\n"
        request = client.update_service_broker.call_args.kwargs["request"]
        assert request.password == "var-password"

    def test_dash_prefixed_password(self, config_file, mock_client_class):
        """A password starting with '-' is a positional, never echoed."""
        client = mock_client_class.return_value
        client.find_service_broker_by_name.return_value = (
            ServiceBroker(guid="broker-guid", name="broker"),
            [],
        )
        client.update_service_broker.return_value = []

        code, out, err = run(
            [
                "--config",
                str(config_file),
                "update-service-broker",
                "broker",
                "user",
                "-s3cret",
                "https://b",
            ]
        )

        assert code == EXIT_SUCCESS
        request = client.update_service_broker.call_args.kwargs["request"]
        assert request.password == "-s3cret"
        assert request.url == "https://b"
        assert "-s3cret" not in out
        assert "-s3cret" not in err

    def test_wrong_argument_count(self, config_file, mock_client_class):
        code, _, err = run(["--config", str(config_file), "update-service-broker", "broker"])

        assert code == EXIT_INVALID_ARGS
        assert err.startswith("FAILED\nIncorrect Usage.\n\nplatform update-service-broker")
        assert mock_client_class.return_value.method_calls == []

    def test_not_logged_in(self, tmp_path, mock_client_class):
        code, out, err = run(
            ["--config", str(tmp_path / "missing.yaml"), "delete-user", "bob", "-f"],
            environ={"PLATFORM_API_URL": "https://api.example.com"},
        )

        assert code == EXIT_AUTH_ERROR
        assert out == ""
        assert "Not logged in" in err

    def test_bad_config_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- not\n- a mapping\n")

        code, _, err = run(["--config", str(path), "target"])

        assert code == EXIT_ERROR
        assert err.startswith("Error: ")

    def test_unexpected_error(self, config_file, mock_client_class):
        mock_client_class.return_value.find_user_by_name.side_effect = RuntimeError("kaboom")

        code, _, err = run(["--config", str(config_file), "delete-user", "bob", "-f"])

        assert code == EXIT_ERROR
        assert "Unexpected error: kaboom" in err


class TestMalformedResponses:
    """Unparseable API responses render as failures, with their warnings first."""

    @pytest.fixture
    def http_session(self):
        session = Mock(spec=requests.Session)
        session.headers = {}
        with patch("platform_manager_sdk.requests.Session", return_value=session):
            yield session

    @staticmethod
    def lookup_response(json_data=None):
        response = Mock(spec=requests.Response)
        response.status_code = 200
        response.headers = {WARNINGS_HEADER: "lookup-warning"}
        if json_data is None:
            response.json.side_effect = ValueError("not json")
        else:
            response.json.return_value = json_data
        return response

    def test_invalid_resource(self, config_file, http_session):
        http_session.request.return_value = self.lookup_response({"resources": [{"guid": "g"}]})

        code, out, err = run(["--config", str(config_file), "delete-user", "bob", "-f"])

        assert code == EXIT_API_ERROR
        assert out == "Deleting user bob...\n"
        assert err.startswith("lookup-warning\nFAILED\nInvalid User 'bob' in response")
        assert "Unexpected error" not in err
        assert http_session.request.call_count == 1

    def test_non_json_body(self, config_file, http_session):
        http_session.request.return_value = self.lookup_response()

        code, _, err = run(["--config", str(config_file), "delete-user", "bob", "-f"])

        assert code == EXIT_API_ERROR
        assert err == "lookup-warning\nFAILED\nInvalid response from /v3/users: not json\n"
